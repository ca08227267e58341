"""Hit points and the queue of pending hits."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from elementfall.elements import ElementResistance, ElementType


@dataclass
class Hit:
    """A pending instance of damage."""

    damage: int
    element: Optional[ElementType] = None
    direction: tuple[float, float, float] = (0.0, 0.0, 0.0)


@dataclass
class Health:
    """Current and maximum hit points, extra lives and queued hits."""

    max: int
    current: Optional[int] = None
    extra_lives: int = 0
    hit_queue: list[Hit] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.current is None:
            self.current = self.max

    def heal(self, value: int) -> None:
        """Restore hit points, never beyond the maximum."""
        self.current = min(self.max, self.current + value)

    def damage(self, value: int) -> None:
        """Lose hit points; the total may go below zero."""
        self.current -= value

    def take_next_hit(
        self, resistance: Optional[ElementResistance] = None
    ) -> Optional[int]:
        """Apply the oldest queued hit and drop the rest of the queue.

        Resistance reduces damage of a matching element. Returns the damage
        dealt, or None when nothing was queued.
        """
        if not self.hit_queue:
            return None
        hit = self.hit_queue[0]
        self.hit_queue.clear()
        amount = hit.damage
        if resistance is not None:
            amount = resistance.calculate_for(amount, hit.element)
        self.damage(amount)
        return amount