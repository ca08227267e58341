# elementfall

The rules of an elemental spell-casting roguelike, as a plain Python library
with no dependencies beyond the standard library. It covers the game logic for
spells, items, loot, progression, level generation and boss AI. Values such as
positions and colours are plain tuples.

## Installing

```
pip install .
pip install ".[test]"   # adds pytest
```

## What is inside

- `elementfall.elements`
  - `ElementType` and `Spell` list the elements and the spells.
  - `element_for_key` maps the keys `"1"`–`"4"` to fire, water, earth and air.
  - `ElementBar` queues elements up to its `max`. `dominant_element` gives the
    most frequent one.
  - `SpellPool` holds the unlocked spells. By default these are the four base
    spells.
  - `choose_spell(bar, pool)` returns the `(Spell, ElementType)` a bar casts,
    or `None`.
  - `ElementResistance.calculate_for` reduces damage of a resisted element.
- `elementfall.animation`
  - `Timer` counts down in seconds, either one-shot or repeating. `tick`
    returns whether the timer just finished.
  - `timer_from_fps` builds a repeating frame timer.
  - `AnimationConfig.step` advances a play-once sprite animation. It returns
    `None` when the animation is over.
  - `Invincibility.tick` blinks an `alpha` value. It returns `False` once the
    effect has ended.
- `elementfall.health`
  - `Health` handles healing, which is capped at the maximum, and damage.
  - It keeps a `hit_queue` of `Hit`s. `take_next_hit` applies the oldest hit,
    with optional resistance, and clears the queue.
- `elementfall.progression`
  - `GameState` lists the game states.
  - `ChapterManager` handles chapter and level advancement, with a background
    colour per chapter.
  - `PlayerExperience` levels up at most once per `give` and stops at level 9.
    `take_popup` reports a pending level-up.
  - `PortalManager` counts the mobs still alive. `pop_mob` raises `ValueError`
    when none are left.
  - `next_state_after_portal` gives the state that follows a portal.
- `elementfall.items`
  - `ItemType` lists the items. `item_type_from_index` and `random_item_type`
    produce them.
  - `load_item_database(path)` reads a JSON file of the form
    `{"items": [...]}` into an `ItemDatabase`. Its `entry` method returns an
    `ItemInfo` (name, texture, description).
  - `roll_loot` maps a roll in `0..254` to a `LootKind`.
  - `drop_loot` rolls a complete `LootDrop` or `None`.
- `elementfall.gamemap`
  - `LevelGenerator` is a random-walker level generator. Call `start()`, then
    use `grid`, `obstacles`, `number_of_floors()` or `tile_map()`.
  - `wall_texture` and `obstacle_kind` choose textures.
  - `build_enclosed_room(half_extent)` lays out the walled hub room
    (`HUB_HALF_EXTENT`) and the boss arena (`BOSS_HALF_EXTENT`).
  - `hub_item_slots()` and `HUB_PORTAL_POS` give the hub positions.
- `elementfall.boss_attacks`
  - `BossAttackType` lists the boss attacks.
  - `pick_direction` and `get_wall_pos` place the projectile wall.
  - `wall_attack`, `radial_attack`, `fast_pierce_attack` and
    `projectile_pattern_attack` return lists of `ProjectileSpec`.
- `elementfall.boss_ai`
  - `PhaseManager.should_advance` decides when the boss changes phase.
  - `BossAttackSystem` has `recalculate_weights`, `tick_cooldowns` and
    `start_cooldown`.
  - `pick_attack(weights, rng)` chooses the next attack. It returns `None` when
    every weight is negative.

Functions that use randomness take an optional `random.Random`. Seed it to get
reproducible results. `LevelGenerator` takes its generator as the `rng` field.

## Example

```python
import random

from elementfall.elements import ElementBar, ElementType, SpellPool, choose_spell
from elementfall.gamemap import LevelGenerator
from elementfall.progression import PlayerExperience

bar = ElementBar(max=3)
for element in (ElementType.FIRE, ElementType.FIRE, ElementType.WATER):
    bar.add(element)
print(choose_spell(bar, SpellPool()))   # (Spell.FIRE, ElementType.FIRE)

exp = PlayerExperience()
exp.give(120)
print(exp.lv, exp.current, exp.take_popup())   # 2 20 True

level = LevelGenerator(rng=random.Random(1))
level.start()
print(level.number_of_floors())
```

## What it does not do

This is a rules library, not a playable game:

- There is no command to run and no game loop.
- There is no rendering, input handling, audio playback or physics.
- Spells and loot are described as data, such as `ProjectileSpec` and
  `LootDrop`. Nothing is spawned or simulated.
- Ordinary mob behaviour, friendly summons and saved progress are not
  included.

## Running the tests

```
pytest
```