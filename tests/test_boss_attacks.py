import math
import random

import pytest

from elementfall.boss_attacks import (
    WALL_DIRECTIONS,
    BossAttackType,
    fast_pierce_attack,
    get_wall_pos,
    pick_direction,
    projectile_pattern_attack,
    radial_attack,
    wall_attack,
)
from elementfall.gamemap import TILE_SIZE


class _ScriptedRng:
    def __init__(self, values):
        self._values = list(values)

    def randrange(self, *args):
        return self._values.pop(0)


PLAYER = (512.0, 512.0, 1.0)
BOSS = (600.0, 640.0, 1.0)


def test_attack_type_slots():
    assert BossAttackType.WALL.value == 9
    assert BossAttackType.MEGA_STAN.value == 10
    assert BossAttackType(7) is BossAttackType.FAST_PIERCE


def test_attack_type_unknown_slot():
    with pytest.raises(ValueError):
        BossAttackType(11)


def test_pick_direction_scripted_right():
    assert pick_direction(PLAYER, BOSS, _ScriptedRng([99, 1, 1, 1])) == (1.0, 0.0)


def test_pick_direction_scripted_down():
    assert pick_direction(PLAYER, BOSS, _ScriptedRng([1, 1, 1, 99])) == (0.0, -1.0)


def test_pick_direction_is_a_wall_direction():
    rng = random.Random(3)
    for _ in range(50):
        assert pick_direction(PLAYER, BOSS, rng) in WALL_DIRECTIONS


def test_get_wall_pos_unknown_direction():
    assert get_wall_pos((0.5, 0.5), 10) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize("direction", WALL_DIRECTIONS)
def test_get_wall_pos_lines_up(direction):
    positions = [get_wall_pos(direction, i) for i in range(9, 24)]
    assert all(p[2] == 1.0 for p in positions)
    if direction[0] == 0.0:
        assert len({p[1] for p in positions}) == 1
        assert [p[0] for p in positions] == [i * TILE_SIZE for i in range(9, 24)]
    else:
        assert len({p[0] for p in positions}) == 1
        assert [p[1] for p in positions] == [i * TILE_SIZE for i in range(9, 24)]


def test_wall_attack_phase_one_has_single_gap():
    projectiles = wall_attack(PLAYER, BOSS, 1, random.Random(7))
    assert len(projectiles) == 14
    assert len({p.angle for p in projectiles}) == 1
    assert all(not p.is_friendly and not p.can_go_through_walls for p in projectiles)


def test_wall_attack_phase_three_two_walls():
    projectiles = wall_attack(PLAYER, BOSS, 3, random.Random(11))
    angles = {p.angle for p in projectiles}
    assert len(angles) == 2
    first_angle = projectiles[0].angle
    first_wall = [p for p in projectiles if p.angle == first_angle]
    assert 12 <= len(first_wall) <= 13
    assert len(first_wall) < 15


def test_radial_attack_surrounds_player():
    projectiles = radial_attack(PLAYER, 1, random.Random(5))
    assert 7 <= len(projectiles) <= 14
    for p in projectiles:
        dx = PLAYER[0] - p.translation[0]
        dy = PLAYER[1] - p.translation[1]
        distance = math.hypot(dx, dy)
        assert 50.0 <= distance < 80.0
        assert math.isclose(math.atan2(dy, dx), p.angle, abs_tol=1e-9) or math.isclose(
            abs(math.atan2(dy, dx) - p.angle), 2 * math.pi, abs_tol=1e-9
        )
        assert p.can_go_through_walls


def test_radial_attack_phase_three_textures():
    projectiles = radial_attack(PLAYER, 3, random.Random(5))
    textures = {p.texture_path for p in projectiles}
    assert textures == {"textures/small_fire.png", "textures/fireball.png"}
    outer = [p for p in projectiles if p.damage == 30]
    assert outer and all(p.speed == 35.0 for p in outer)


def test_radial_attack_is_deterministic_for_seed():
    first = radial_attack(PLAYER, 3, random.Random(9))
    second = radial_attack(PLAYER, 3, random.Random(9))
    assert len(first) >= 7
    assert [p.translation for p in first] == [p.translation for p in second]
    assert [p.angle for p in first] == [p.angle for p in second]
    assert {p.damage for p in first} == {20, 30}
    assert len({p.element for p in first}) == 1


@pytest.mark.parametrize("phase, count", [(1, 2), (3, 5)])
def test_fast_pierce_fan(phase, count):
    projectiles = fast_pierce_attack(PLAYER, BOSS, phase)
    assert len(projectiles) == count
    assert all(p.translation == BOSS for p in projectiles)
    angles = [p.angle for p in projectiles]
    gaps = [b - a for a, b in zip(angles, angles[1:])]
    assert all(math.isclose(g, gaps[0]) and g > 0 for g in gaps)
    aim = math.atan2(PLAYER[1] - BOSS[1], PLAYER[0] - BOSS[0])
    assert angles[0] < aim
    assert all(p.speed == 350.0 for p in projectiles)


def test_projectile_pattern_bursts():
    projectiles = projectile_pattern_attack(BOSS, random.Random(2))
    assert len(projectiles) % 7 == 0
    assert 63 <= len(projectiles) <= 98
    for p in projectiles:
        assert p.translation[2] == 0.0
        distance = math.hypot(p.translation[0] - BOSS[0], p.translation[1] - BOSS[1])
        assert 24.0 - 1e-9 <= distance < 48.0
    assert len({p.element for p in projectiles}) == 1
    assert projectiles[0].color == projectiles[0].element.color()