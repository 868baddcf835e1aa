"""Tunable constants for a Falldown session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# Frames per second the driving shell runs at.  The scroll throttle divides
# this value by the level's refresh rate.
FPS = 30
# Seconds between two cell mutations of a transition animation
ANIMATION_DELAY = 0.02
# The game-end sparkle runs this many times slower than other animations
GAME_END_DELAY_FACTOR = 3
# Backlog in seconds an animation tick may catch up on after a stalled frame
MAX_ANIMATION_LAG = 0.1
# Chance in percent that a freshly spawned cell is a hole on hole levels
HOLE_CHANCE = 20

REFRESH_LEVELS: Tuple[float, ...] = (1.0, 1.2, 1.5)
MAX_TREASURE_STEPS: Tuple[int, ...] = (4, 3, 2)
PLAYER_SPAWN: Tuple[int, int] = (4, 2)
MAX_RELOCATION_ATTEMPTS = 1000


@dataclass(frozen=True)
class FalldownConfig:
    """Immutable settings shared by every component of the simulation.

    ``refresh_levels`` and ``max_treasure_steps`` are parallel tables indexed by
    level.  The last level generates holes.
    """

    fps: int = FPS
    animation_delay: float = ANIMATION_DELAY
    game_end_delay_factor: int = GAME_END_DELAY_FACTOR
    hole_chance: int = HOLE_CHANCE
    refresh_levels: Tuple[float, ...] = REFRESH_LEVELS
    max_treasure_steps: Tuple[int, ...] = MAX_TREASURE_STEPS
    player_spawn: Tuple[int, int] = PLAYER_SPAWN
    max_relocation_attempts: int = MAX_RELOCATION_ATTEMPTS

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.animation_delay <= 0:
            raise ValueError("animation_delay must be positive")
        if self.game_end_delay_factor <= 0:
            raise ValueError("game_end_delay_factor must be positive")
        if not 0 <= self.hole_chance <= 100:
            raise ValueError(f"hole_chance must be within 0..100, got {self.hole_chance}")
        if not self.refresh_levels:
            raise ValueError("At least one level is required")
        if len(self.refresh_levels) != len(self.max_treasure_steps):
            raise ValueError(
                "refresh_levels and max_treasure_steps must have the same length"
            )
        if any(rate <= 0 for rate in self.refresh_levels):
            raise ValueError("Refresh levels must be positive")
        if any(steps <= 0 for steps in self.max_treasure_steps):
            raise ValueError("Treasure step budgets must be positive")
        if self.max_relocation_attempts <= 0:
            raise ValueError("max_relocation_attempts must be positive")

    @property
    def level_count(self) -> int:
        return len(self.refresh_levels)

    @property
    def hole_level(self) -> int:
        """Index of the level on which holes are generated."""

        return self.level_count - 1
