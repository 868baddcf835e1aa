"""Level layouts and per-level parameters."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .blocks import Block
from .config import FalldownConfig
from .grid import Grid, create_empty_grid


LOGGER = logging.getLogger(__name__)

# Terrain lines are laid on every ``ROW_SPACING``-th row of a fresh level.
ROW_SPACING = 3


@dataclass(frozen=True)
class LevelParams:
    """Settings derived from the level index."""

    level: int
    refresh_level: float
    max_treasure_steps: int
    generate_holes: bool

    def scroll_interval(self, fps: int) -> int:
        """Return how many frames pass between two scroll steps.

        Higher refresh levels scroll more often.  The interval never drops
        below one frame.
        """

        return max(1, int(fps / self.refresh_level))


class LevelGenerator:
    """Build fresh level grids and look up level parameters."""

    def __init__(
        self, width: int, height: int, config: FalldownConfig, rng: random.Random
    ) -> None:
        self.width = width
        self.height = height
        self.config = config
        self._rng = rng

    def parameters(self, level: int) -> LevelParams:
        """Return the :class:`LevelParams` for ``level``.

        Raises:
            IndexError: If ``level`` is not a configured level.
        """

        if not 0 <= level < self.config.level_count:
            raise IndexError(f"Level {level} is not configured")
        params = LevelParams(
            level=level,
            refresh_level=self.config.refresh_levels[level],
            max_treasure_steps=self.config.max_treasure_steps[level],
            generate_holes=level == self.config.hole_level,
        )
        LOGGER.debug("Setting up level %d: %s", level, params)
        return params

    def build_grid(self, generate_holes: bool) -> Grid:
        """Return a new grid with a terrain line on every third row.

        Each line has a one cell gap at a random position.  The gap is only
        left open when ``generate_holes`` is set; otherwise it is filled like
        the rest of the line.
        """

        LOGGER.info("Initializing level grid")
        grid = create_empty_grid(self.width, self.height)
        for y in range(0, self.height, ROW_SPACING):
            hole = self._rng.randrange(self.width)
            grid[:, y] = Block.NORMAL
            if generate_holes:
                grid[hole, y] = Block.EMPTY
        return grid
