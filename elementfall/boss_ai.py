"""How the boss weighs, schedules and picks its attacks."""

from __future__ import annotations

import math
import random
import struct
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Sequence

from elementfall.animation import Timer
from elementfall.boss_attacks import BossAttackType

I16_MIN = -32768
I16_MAX = 32767

# Weight given to an attack that is still on cooldown.
COOLDOWN_WEIGHT = -10000

MOSSLING = "mossling"
EARTH_ELEMENTAL = "earth_elemental"
AIR_ELEMENTAL = "air_elemental"
FIRE_ELEMENTAL = "fire_elemental"
WATER_ELEMENTAL = "water_elemental"

_ATTACK_COUNT = len(BossAttackType)
_ALL_ATTACKS_MASK = (1 << _ATTACK_COUNT) - 1

# Chance threshold above which the runner-up attack is taken instead.
_SECOND_PICK_CHANCE = 0.65


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _wrap_i16(value: int) -> int:
    """Two's-complement wrap into the 16-bit range."""
    return (value + 32768) % 65536 - 32768


def _sat_i16(value: float) -> int:
    """Float to 16-bit integer the saturating way: truncate, clamp, NaN to 0."""
    if math.isnan(value):
        return 0
    if value >= I16_MAX:
        return I16_MAX
    if value <= I16_MIN:
        return I16_MIN
    return int(value)


def _div(numerator: float, denominator: float) -> float:
    """Float division that yields infinity or NaN instead of raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def _idiv(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator >= 0) else -quotient


class _AttackFlag(Enum):
    PROJECTILE = auto()
    DEFENSIVE = auto()
    SPAWN = auto()


_SPAWNED_MOB = {
    BossAttackType.SPAWN_EARTH_ELEMENTAL: EARTH_ELEMENTAL,
    BossAttackType.SPAWN_AIR_ELEMENTAL: AIR_ELEMENTAL,
    BossAttackType.SPAWN_FIRE_ELEMENTAL: FIRE_ELEMENTAL,
    BossAttackType.SPAWN_WATER_ELEMENTAL: WATER_ELEMENTAL,
}


@dataclass
class PhaseManager:
    """Boss phases, each entered when health drops below a fraction of max."""

    phase_change_hp_multiplier: list[float]
    current_phase: int = 1
    max_phase: int = 3

    def should_advance(self, current: int, max_hp: int) -> bool:
        """Whether health ``current`` of ``max_hp`` starts the next phase."""
        if self.current_phase >= self.max_phase:
            return False
        fraction = self.phase_change_hp_multiplier[self.current_phase - 1]
        threshold = int(_f32(_f32(float(max_hp)) * _f32(fraction)))
        return current <= threshold


def _default_cooldowns() -> list[Timer]:
    return [Timer(5.0, repeating=True) for _ in range(_ATTACK_COUNT)]


@dataclass
class BossAttackSystem:
    """Attack weights, per-attack cooldowns and the mask of ready attacks.

    Bit ``i`` of ``cooldown_mask`` is set while attack ``i`` is ready.
    """

    weight_array: list[int] = field(default_factory=lambda: [0] * _ATTACK_COUNT)
    cooldown_array: list[Timer] = field(default_factory=_default_cooldowns)
    cooldown_between_attacks: Timer = field(
        default_factory=lambda: Timer(1.0, repeating=True)
    )
    cooldown_mask: int = _ALL_ATTACKS_MASK

    def recalculate_weights(
        self,
        phase: int,
        boss_hp: int,
        boss_max_hp: int,
        player_boss_distance: float,
        player_wall_distance: float,
        summons: Sequence[str],
        amount_of_mobs: int,
    ) -> list[int]:
        """Recompute every attack's weight and return the new weights.

        ``summons`` holds the kind of every creature in the boss's summon
        queue; attacks not allowed in ``phase`` sink far below zero.
        """
        non_mosslings = sum(1 for kind in summons if kind != MOSSLING)
        missing_hp = boss_max_hp - boss_hp
        dist = _sat_i16(math.floor(player_boss_distance))

        def gate(blocked: bool) -> int:
            return I16_MIN if blocked else 0

        for i in range(len(self.weight_array)):
            if self.cooldown_mask & (1 << i) == 0:
                self.weight_array[i] = COOLDOWN_WEIGHT
                continue

            attack = BossAttackType(i)
            base = i * 100

            if attack is BossAttackType.SPAWN_EARTH_ELEMENTAL:
                bonus = 5000 if non_mosslings == 0 else 0
                base = _wrap_i16(base + gate(phase == 3) + bonus)
                flag = _AttackFlag.SPAWN
            elif attack is BossAttackType.SPAWN_AIR_ELEMENTAL:
                base = _wrap_i16(base + gate(phase != 1))
                flag = _AttackFlag.SPAWN
            elif attack in (
                BossAttackType.SPAWN_FIRE_ELEMENTAL,
                BossAttackType.SPAWN_WATER_ELEMENTAL,
            ):
                base = _wrap_i16(base + gate(phase == 3))
                flag = _AttackFlag.SPAWN
            elif attack is BossAttackType.RADIAL:
                extra = _sat_i16(_div(player_wall_distance, 30.0))
                base = _wrap_i16(base + _wrap_i16(gate(phase == 1) + extra))
                flag = _AttackFlag.PROJECTILE
            elif attack is BossAttackType.SHIELD:
                base = _wrap_i16(base + gate(phase != 2))
                flag = _AttackFlag.DEFENSIVE
            elif attack is BossAttackType.BLANK:
                base = _wrap_i16(base + gate(phase != 3))
                flag = _AttackFlag.DEFENSIVE
            elif attack is BossAttackType.WALL:
                extra = _sat_i16(_div(3000.0, player_wall_distance))
                base = _wrap_i16(base + _wrap_i16(gate(phase == 1) + extra))
                flag = _AttackFlag.PROJECTILE
            elif attack is BossAttackType.MEGA_STAN:
                extra = _sat_i16(_div(5000.0, player_boss_distance))
                base = _wrap_i16(base + _wrap_i16(gate(phase <= 2) + extra))
                flag = _AttackFlag.PROJECTILE
            elif attack is BossAttackType.FAST_PIERCE:
                extra = _sat_i16(_div(player_boss_distance, 30.0))
                base = _wrap_i16(base + _wrap_i16(gate(phase == 1) + extra))
                flag = _AttackFlag.PROJECTILE
            else:  # PROJECTILE_PATTERN
                extra = _sat_i16(_div(player_boss_distance, 50.0))
                base = _wrap_i16(base + _wrap_i16(gate(phase != 2) + extra))
                flag = _AttackFlag.PROJECTILE

            if base <= I16_MIN // 2:
                self.weight_array[i] = base
                continue

            if flag is _AttackFlag.DEFENSIVE:
                near_or_far = dist <= 200 or dist >= 400
                hp_term = _wrap_i16(_idiv(missing_hp, 20) * 3)
                base = _wrap_i16(
                    base + _wrap_i16(hp_term + _wrap_i16(dist * near_or_far))
                )
            elif flag is _AttackFlag.PROJECTILE:
                hp_term = _wrap_i16(_idiv(missing_hp, 20))
                base = _wrap_i16(base + _wrap_i16(hp_term + _wrap_i16(dist * 10)))
            else:
                same_kind = sum(1 for kind in summons if kind == _SPAWNED_MOB[attack])
                room = _wrap_i16(len(summons) + 5 - non_mosslings)
                base = _wrap_i16(
                    base
                    + _wrap_i16(
                        _wrap_i16(room * 100) - _wrap_i16(_wrap_i16(same_kind) * 50)
                    )
                )
                hp_term = _wrap_i16(_idiv(missing_hp, 20))
                crowd = _wrap_i16(amount_of_mobs * (150 * ((phase == 2) + 50)))
                base = _wrap_i16(base + _wrap_i16(hp_term - crowd))

            self.weight_array[i] = base

        return list(self.weight_array)

    def tick_cooldowns(self, delta: float) -> list[BossAttackType]:
        """Advance the per-attack cooldowns; return attacks that became ready."""
        ready: list[BossAttackType] = []
        for i, timer in enumerate(self.cooldown_array):
            bit = 1 << i
            # Every timer ticks except the first one while it is ready.
            if self.cooldown_mask & bit != 1:
                timer.tick(delta)
                if timer.just_finished:
                    if self.cooldown_mask & bit == 0:
                        ready.append(BossAttackType(i))
                    self.cooldown_mask |= bit
        return ready

    def start_cooldown(self, attack: BossAttackType) -> None:
        """Mark ``attack`` as used so it waits for its cooldown."""
        self.cooldown_mask &= _ALL_ATTACKS_MASK ^ (1 << attack.value)


def pick_attack(
    weights: Sequence[int], rng: Optional[random.Random] = None
) -> Optional[BossAttackType]:
    """Pick the heaviest attack, sometimes the previous record holder instead.

    Returns None when even the heaviest weight is negative.
    """
    if not weights:
        raise ValueError("cannot pick an attack from no weights")
    rng = rng or random.Random()

    pick_1 = 0
    pick_2 = -1
    largest = weights[0]
    for index, weight in enumerate(weights):
        if weight > largest:
            largest = weight
            pick_2 = pick_1
            pick_1 = index

    chance = rng.random()
    if chance >= _SECOND_PICK_CHANCE and pick_2 > 0:
        return BossAttackType(pick_2)
    if largest < 0:
        return None
    return BossAttackType(pick_1)