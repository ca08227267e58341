"""Projectile patterns the boss casts at the player."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from elementfall.elements import ElementType, random_element
from elementfall.gamemap import ROOM_SIZE, TILE_SIZE

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]

# Right, left, up, down.
WALL_DIRECTIONS: tuple[Vec2, ...] = (
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
)

# Corners of the boss arena, in tiles, where earth elementals appear.
STATIC_ANGLE_POINTS: tuple[tuple[int, int], ...] = (
    (ROOM_SIZE // 2 - 6, ROOM_SIZE // 2 - 6),
    (ROOM_SIZE // 2 + 6, ROOM_SIZE // 2 - 6),
    (ROOM_SIZE // 2 - 6, ROOM_SIZE // 2 + 6),
    (ROOM_SIZE // 2 + 6, ROOM_SIZE // 2 + 6),
)

_WALL_FIRST = ROOM_SIZE // 2 - 7
_WALL_END = ROOM_SIZE // 2 + 8

EARTHQUAKE_TEXTURE = "textures/earthquake.png"
FIREBALL_TEXTURE = "textures/fireball.png"
SMALL_FIRE_TEXTURE = "textures/small_fire.png"


class BossAttackType(Enum):
    """Every attack the boss can pick; the value is its slot in weight tables."""

    SPAWN_EARTH_ELEMENTAL = 0
    SPAWN_AIR_ELEMENTAL = 1
    RADIAL = 2
    PROJECTILE_PATTERN = 3
    SHIELD = 4
    SPAWN_FIRE_ELEMENTAL = 5
    SPAWN_WATER_ELEMENTAL = 6
    FAST_PIERCE = 7
    BLANK = 8
    WALL = 9
    MEGA_STAN = 10


@dataclass(frozen=True)
class ProjectileSpec:
    """A hostile projectile, flying straight, to be spawned."""

    texture_path: str
    translation: Vec3
    angle: float
    collider_radius: float
    speed: float
    damage: int
    element: ElementType
    can_go_through_walls: bool = False
    is_friendly: bool = False

    @property
    def color(self) -> tuple[float, float, float]:
        return self.element.color()


def _angle_of(vector: Sequence[float]) -> float:
    return math.atan2(vector[1], vector[0])


def pick_direction(
    player_pos: Sequence[float],
    boss_pos: Sequence[float],
    rng: Optional[random.Random] = None,
) -> Vec2:
    """Pick the direction a wall of projectiles travels in.

    Directions on the boss's side of the player are twice as likely.
    """
    rng = rng or random.Random()
    dx = boss_pos[0] - player_pos[0]
    dy = boss_pos[1] - player_pos[1]

    right, left = (40, 20) if dx > 0 else (20, 40)
    up, down = (40, 20) if dy > 0 else (20, 40)

    weights = [base * rng.randrange(100) for base in (right, left, up, down)]
    best = max(range(len(weights)), key=lambda index: weights[index])
    return WALL_DIRECTIONS[best]


def get_wall_pos(direction: Sequence[float], i: int) -> Vec3:
    """Spawn point of projectile ``i`` of a wall moving in ``direction``.

    The wall starts on the arena side opposite to where it travels; an
    unknown direction gives the origin.
    """
    key = (float(direction[0]), float(direction[1]))
    offset = float(i) * TILE_SIZE
    if key == (0.0, -1.0):
        return (offset, (ROOM_SIZE // 2 + 7) * TILE_SIZE, 1.0)
    if key == (0.0, 1.0):
        return (offset, (ROOM_SIZE // 2 - 7) * TILE_SIZE, 1.0)
    if key == (-1.0, 0.0):
        return ((ROOM_SIZE // 2 + 7) * TILE_SIZE, offset, 1.0)
    if key == (1.0, 0.0):
        return ((ROOM_SIZE // 2 - 7) * TILE_SIZE, offset, 1.0)
    return (0.0, 0.0, 0.0)


def _wall_projectile(position: Vec3, direction: Vec2, element: ElementType) -> ProjectileSpec:
    return ProjectileSpec(
        texture_path=EARTHQUAKE_TEXTURE,
        translation=position,
        angle=_angle_of(direction),
        collider_radius=8.0,
        speed=75.0,
        damage=20,
        element=element,
    )


def wall_attack(
    player_pos: Sequence[float],
    boss_pos: Sequence[float],
    phase: int,
    rng: Optional[random.Random] = None,
) -> list[ProjectileSpec]:
    """A row of projectiles sweeping the arena, with a gap to dodge through.

    In phase 3 the gap is wider and a second wall comes from another side.
    """
    rng = rng or random.Random()
    element = random_element(rng)

    to_skip = rng.randrange(_WALL_FIRST, _WALL_END)
    direction = pick_direction(player_pos, boss_pos, rng)
    second_direction = pick_direction(player_pos, boss_pos, rng)
    while second_direction == direction:
        second_direction = pick_direction(player_pos, boss_pos, rng)
    second_to_skip = rng.randrange(_WALL_FIRST, _WALL_END)

    final_phase = phase == 3
    gap = {to_skip - 1, to_skip, to_skip + 1} if final_phase else {to_skip}

    projectiles: list[ProjectileSpec] = []
    for i in range(_WALL_FIRST, _WALL_END):
        if i in gap:
            continue
        projectiles.append(_wall_projectile(get_wall_pos(direction, i), direction, element))
        if final_phase and i != second_to_skip:
            projectiles.append(
                _wall_projectile(
                    get_wall_pos(second_direction, i), second_direction, element
                )
            )
    return projectiles


def radial_attack(
    player_pos: Sequence[float],
    phase: int,
    rng: Optional[random.Random] = None,
) -> list[ProjectileSpec]:
    """A ring of projectiles closing in on the player, with one gap.

    In phase 3 the ring uses small fire and a second, slower outer ring follows.
    """
    rng = rng or random.Random()
    element = random_element(rng)

    amount = rng.randrange(8, 16)
    radius = rng.randrange(500, 800)
    second_radius = rng.randrange(radius + 500, radius + 800)
    offset = 2.0 * math.pi / amount

    # Gap sizes are drawn but every gap slot repeats one index.
    rng.randrange(3, 5)
    rng.randrange(1, 3)
    to_skip = rng.randrange(amount)
    second_to_skip = rng.randrange(amount)

    final_phase = phase == 3
    if final_phase:
        texture, collider_radius = SMALL_FIRE_TEXTURE, 4.0
    else:
        texture, collider_radius = FIREBALL_TEXTURE, 8.0

    px, py = float(player_pos[0]), float(player_pos[1])
    projectiles: list[ProjectileSpec] = []
    for i in range(amount):
        direction = (-math.cos(i * offset), -math.sin(i * offset))
        angle = _angle_of(direction)

        if i != to_skip:
            distance = radius / 10.0
            projectiles.append(
                ProjectileSpec(
                    texture_path=texture,
                    translation=(px - direction[0] * distance, py - direction[1] * distance, 1.0),
                    angle=angle,
                    collider_radius=collider_radius,
                    speed=42.5,
                    damage=20,
                    element=element,
                    can_go_through_walls=True,
                )
            )

        if final_phase and i != second_to_skip:
            distance = second_radius / 10.0
            projectiles.append(
                ProjectileSpec(
                    texture_path=FIREBALL_TEXTURE,
                    translation=(px - direction[0] * distance, py - direction[1] * distance, 1.0),
                    angle=angle,
                    collider_radius=8.0,
                    speed=35.0,
                    damage=30,
                    element=element,
                    can_go_through_walls=True,
                )
            )
    return projectiles


def fast_pierce_attack(
    player_pos: Sequence[float],
    boss_pos: Sequence[float],
    phase: int,
) -> list[ProjectileSpec]:
    """A narrow fan of fast fireballs aimed at the player; wider in phase 3."""
    element = random_element()
    amount = 5 if phase == 3 else 2
    spread = math.pi / (8 + amount)
    aim = _angle_of((player_pos[0] - boss_pos[0], player_pos[1] - boss_pos[1]))
    start = aim - spread * amount / 2.0
    origin = (float(boss_pos[0]), float(boss_pos[1]), float(boss_pos[2]) if len(boss_pos) > 2 else 0.0)

    return [
        ProjectileSpec(
            texture_path=FIREBALL_TEXTURE,
            translation=origin,
            angle=start + k * spread,
            collider_radius=8.0,
            speed=350.0,
            damage=20,
            element=element,
        )
        for k in range(amount)
    ]


def projectile_pattern_attack(
    boss_pos: Sequence[float],
    rng: Optional[random.Random] = None,
) -> list[ProjectileSpec]:
    """Seven bursts around the boss, each one projectile denser than the last."""
    rng = rng or random.Random()
    element = random_element(rng)

    amount = rng.randrange(6, 12)
    radius = float(rng.randrange(24, 48))
    step = math.pi / 6.0
    bx, by = float(boss_pos[0]), float(boss_pos[1])

    projectiles: list[ProjectileSpec] = []
    for j in range(7):
        count = amount + j
        offset = 2.0 * math.pi / count
        cx = bx + math.cos(step * j) * radius
        cy = by + math.sin(step * j) * radius
        projectiles.extend(
            ProjectileSpec(
                texture_path=EARTHQUAKE_TEXTURE,
                translation=(cx, cy, 0.0),
                angle=offset * i,
                collider_radius=10.0,
                speed=100.0,
                damage=20,
                element=element,
            )
            for i in range(count)
        )
    return projectiles