"""Elements, spells and the element bar that turns key presses into spells."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ElementType(Enum):
    """A magic element; the value is its slot in resistance and bonus tables."""

    FIRE = 0
    WATER = 1
    EARTH = 2
    AIR = 3
    STEAM = 4

    def color(self) -> tuple[float, float, float]:
        """HDR colour (r, g, b) used to tint spells of this element."""
        return _ELEMENT_COLORS[self]

    def audio(self) -> str:
        """Sound file played when a spell of this element is cast."""
        return _ELEMENT_AUDIO[self]


_ELEMENT_COLORS = {
    ElementType.FIRE: (2.5, 1.25, 1.0),
    ElementType.WATER: (1.0, 1.5, 2.5),
    ElementType.EARTH: (0.45, 0.15, 0.15),
    ElementType.AIR: (1.5, 2.0, 1.5),
    ElementType.STEAM: (1.5, 2.0, 1.5),
}

_ELEMENT_AUDIO = {
    ElementType.FIRE: "fire.ogg",
    ElementType.WATER: "water.ogg",
    ElementType.EARTH: "earth.ogg",
    ElementType.AIR: "air.ogg",
    ElementType.STEAM: "air.ogg",
}

_KEY_ELEMENTS = {
    "1": ElementType.FIRE,
    "2": ElementType.WATER,
    "3": ElementType.EARTH,
    "4": ElementType.AIR,
}


def random_element(rng: Optional[random.Random] = None) -> ElementType:
    """Pick one of the five elements uniformly."""
    rng = rng or random.Random()
    return ElementType(rng.randrange(5))


def element_for_key(key: str) -> Optional[ElementType]:
    """Map a digit key ("1".."4") to the element it adds to the bar."""
    return _KEY_ELEMENTS.get(key)


class Spell(Enum):
    """Every spell the player can cast, in declaration order."""

    FIRE = 0
    WATER = 1
    EARTH = 2
    AIR = 3
    STEAM = 4
    SHIELD = 5
    BLACK_HOLE = 6
    BLANK = 7
    FIRE_ELEMENTAL = 8
    WATER_ELEMENTAL = 9
    EARTH_ELEMENTAL = 10
    AIR_ELEMENTAL = 11

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Spell):
            return NotImplemented
        return self.value < other.value


def _default_unlocked() -> list[Spell]:
    return [Spell.FIRE, Spell.WATER, Spell.EARTH, Spell.AIR]


@dataclass
class SpellPool:
    """The spells that are currently available, in unlock order."""

    unlocked: list[Spell] = field(default_factory=_default_unlocked)

    def is_unlocked(self, spell: Spell) -> bool:
        return spell in self.unlocked

    def unlock(self, spell: Spell) -> None:
        if spell not in self.unlocked:
            self.unlocked.append(spell)


@dataclass
class ElementBar:
    """Counts of each base element queued for the next cast."""

    fire: int = 0
    water: int = 0
    earth: int = 0
    air: int = 0
    max: int = 1

    def clear(self) -> None:
        self.fire = self.water = self.earth = self.air = 0

    def total(self) -> int:
        return self.fire + self.water + self.earth + self.air

    def add(self, element: ElementType) -> None:
        """Queue an element if there is room; steam cannot be queued."""
        if self.total() >= self.max:
            return
        if element is ElementType.FIRE:
            self.fire += 1
        elif element is ElementType.WATER:
            self.water += 1
        elif element is ElementType.EARTH:
            self.earth += 1
        elif element is ElementType.AIR:
            self.air += 1

    def dominant_element(self) -> ElementType:
        """The most frequent element; ties go to fire, water, earth, then air."""
        counts = [
            (self.fire, ElementType.FIRE),
            (self.water, ElementType.WATER),
            (self.earth, ElementType.EARTH),
        ]
        top = max(self.fire, self.water, self.earth, self.air)
        return next((el for n, el in counts if n == top), ElementType.AIR)


def _default_percents() -> list[int]:
    return [0] * len(ElementType)


@dataclass
class ElementResistance:
    """Per-element damage reduction in percent."""

    elements: list[ElementType] = field(default_factory=list)
    resistance_percent: list[int] = field(default_factory=_default_percents)

    def calculate_for(self, damage: int, element: Optional[ElementType]) -> int:
        """Return the damage left after resistance against ``element``."""
        if element is None or element not in self.elements:
            return damage
        return int(damage * (1.0 - self.resistance_percent[element.value] / 100.0))

    def add(self, element: ElementType, percent: int) -> None:
        if element not in self.elements:
            self.elements.append(element)
        self.resistance_percent[element.value] += percent


def choose_spell(
    bar: ElementBar, pool: SpellPool
) -> Optional[tuple[Spell, ElementType]]:
    """Decide which spell a filled bar casts, with the element it carries.

    Returns None when the bar is empty or no recipe matches.
    """
    if bar.total() == 0:
        return None

    fire, water, earth, air = bar.fire, bar.water, bar.earth, bar.air
    element = bar.dominant_element()
    unlocked = pool.is_unlocked

    recipes = [
        (Spell.SHIELD, water == 1 and earth > 1 and fire <= 0 and air <= 0),
        (Spell.BLANK, water == 1 and air > 1 and fire <= 0 and earth <= 0),
        (Spell.BLACK_HOLE, fire == water == earth == air),
        (Spell.FIRE_ELEMENTAL, earth >= 1 and air <= 0 and water >= 1 and fire == 2),
        (Spell.WATER_ELEMENTAL, earth >= 1 and air <= 0 and water == 2 and fire >= 1),
        (Spell.EARTH_ELEMENTAL, earth == 2 and air <= 0 and water >= 1 and fire >= 1),
        (Spell.AIR_ELEMENTAL, earth <= 0 and air == 2 and water >= 1 and fire >= 1),
    ]
    for spell, matches in recipes:
        if matches and unlocked(spell):
            return spell, element

    if (
        fire > 0
        and water > 0
        and earth + air < fire + water
        and unlocked(Spell.STEAM)
    ):
        return Spell.STEAM, ElementType.STEAM

    if fire > water and earth <= 0 and air <= 0:
        return Spell.FIRE, element
    if water > fire and earth <= 0 and air <= 0:
        return Spell.WATER, element
    if earth > 0 and air <= 0:
        return Spell.EARTH, element
    if air > 0:
        return Spell.AIR, element
    return None