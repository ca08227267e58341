"""Game states, chapter progression, experience and the level portal."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional


class GameState(Enum):
    """Top-level state of the game."""

    MAIN_MENU = auto()
    IN_GAME = auto()
    LOADING = auto()
    GAME_OVER = auto()
    HUB = auto()
    LOADING_BOSS = auto()


def _rgb(r: int, g: int, b: int) -> tuple[float, float, float]:
    return (r / 255.0, g / 255.0, b / 255.0)


_CHAPTER_COLORS = {
    1: _rgb(57, 42, 28),
    2: _rgb(31, 36, 10),
    3: _rgb(48, 15, 10),
}
_BOSS_COLOR = _rgb(69, 35, 13)


@dataclass
class ChapterManager:
    """Tracks the current chapter and the level within it."""

    current_level: int = 1
    current_chapter: int = 1
    max_chapter: int = 4

    def current_color(self) -> tuple[float, float, float]:
        """Background colour of the current chapter."""
        return _CHAPTER_COLORS.get(self.current_chapter, _BOSS_COLOR)

    def advance(self) -> tuple[float, float, float]:
        """Move to the next level after leaving the hub; return the new colour."""
        self.current_level += 1

        if self.current_chapter == self.max_chapter and self.current_level == 2:
            self.current_chapter = 1
            self.current_level = 1

        if self.current_level > 2:
            self.current_level = 1
            self.current_chapter += 1

        return self.current_color()


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


@dataclass
class PlayerExperience:
    """Experience points and level of the player."""

    current: int = 0
    to_lv_up: int = 100
    lv: int = 1
    max_lv: int = 9
    popup_flag: bool = False
    orb_bonus: int = 0

    def give(self, value: int) -> None:
        """Add experience, levelling up at most once per call."""
        if self.current + value >= self.to_lv_up and self.lv < self.max_lv:
            self.lv += 1
            self.current = self.current + value - self.to_lv_up
            self.to_lv_up = int(_f32(_f32(self.to_lv_up) * _f32(1.4)))
            self.popup_flag = True
        else:
            self.current += value

    def take_popup(self) -> bool:
        """Return whether a level-up popup is due, clearing the flag."""
        due = self.popup_flag
        self.popup_flag = False
        return due


@dataclass
class PortalManager:
    """Counts living mobs; the portal opens when none are left."""

    position: tuple[float, float, float] = field(default=(0.0, 0.0, 0.0))
    mobs: int = 0

    def push_mob(self) -> None:
        self.mobs += 1

    def pop_mob(self) -> None:
        if self.mobs <= 0:
            raise ValueError("no mobs left to remove")
        self.mobs -= 1

    def set_mob(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("mob count cannot be negative")
        self.mobs = amount

    def no_mobs_on_level(self) -> bool:
        return self.mobs <= 0


def next_state_after_portal(
    current: GameState, chapter_manager: ChapterManager
) -> Optional[GameState]:
    """The state entered when the player steps into a portal, if any."""
    if current is GameState.IN_GAME:
        return GameState.HUB
    if current is GameState.HUB:
        if (
            chapter_manager.current_chapter == 3
            and chapter_manager.current_level == 2
        ):
            return GameState.LOADING_BOSS
        return GameState.LOADING
    return None