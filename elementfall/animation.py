"""Timers, sprite-sheet animation and the blinking invincibility effect."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Timer:
    """A countdown measured in seconds, either one-shot or repeating."""

    duration: float
    repeating: bool = False
    elapsed: float = 0.0
    finished: bool = field(default=False, init=False)
    just_finished: bool = field(default=False, init=False)
    times_finished: int = field(default=0, init=False)

    def tick(self, delta: float) -> bool:
        """Advance by ``delta`` seconds; return whether the timer just finished."""
        if delta < 0:
            raise ValueError("cannot tick a timer backwards")

        if self.finished and not self.repeating:
            self.just_finished = False
            self.times_finished = 0
            return False

        self.elapsed += delta
        if self.elapsed >= self.duration:
            if self.repeating:
                if self.duration > 0:
                    self.times_finished = int(self.elapsed // self.duration)
                    self.elapsed %= self.duration
                else:
                    self.times_finished = 1
                    self.elapsed = 0.0
            else:
                self.times_finished = 1
                self.elapsed = self.duration
            self.finished = True
            self.just_finished = True
        else:
            self.times_finished = 0
            self.finished = False
            self.just_finished = False
        return self.just_finished

    def reset(self) -> None:
        """Start counting again from zero."""
        self.elapsed = 0.0
        self.finished = False
        self.just_finished = False
        self.times_finished = 0


def timer_from_fps(fps: int) -> Timer:
    """A repeating timer that fires once per frame at ``fps`` frames per second."""
    if fps <= 0:
        raise ValueError(f"frame rate must be positive, got {fps}")
    return Timer(1.0 / fps, repeating=True)


@dataclass
class AnimationConfig:
    """A run of frames on a sprite sheet played at a fixed frame rate."""

    first_sprite_index: int
    last_sprite_index: int
    fps: int
    frame_timer: Timer = field(init=False)

    def __post_init__(self) -> None:
        self.frame_timer = timer_from_fps(self.fps)

    def step(self, index: int, delta: float) -> Optional[int]:
        """Advance a play-once animation showing frame ``index``.

        Returns the frame to show next, or None once the last frame has
        been shown for its full time and the animation is over.
        """
        self.frame_timer.tick(delta)
        if not self.frame_timer.just_finished:
            return index
        if index == self.last_sprite_index:
            return None
        self.frame_timer = timer_from_fps(self.fps)
        return index + 1


@dataclass
class Invincibility:
    """Temporary immunity during which the sprite blinks on and off."""

    duration: float = 1.0
    alpha: float = 1.0
    effect_timer: Timer = field(init=False)
    blink_timer: Timer = field(init=False)

    def __post_init__(self) -> None:
        self.effect_timer = Timer(self.duration)
        self.blink_timer = Timer(0.1, repeating=True)

    def tick(self, delta: float) -> bool:
        """Advance the effect; return whether it is still active."""
        self.effect_timer.tick(delta)
        self.blink_timer.tick(delta)

        if self.blink_timer.just_finished:
            if self.alpha == 0.0:
                self.alpha = 1.0
            elif self.alpha == 1.0:
                self.alpha = 0.0

        if self.effect_timer.finished:
            self.alpha = 1.0
            return False
        return True