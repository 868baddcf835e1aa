"""Column-wise terrain scrolling.

Every scroll step moves the terrain of each column band by one row.  Even
bands move up, odd bands move down.  Blocks that are about to leave the grid
turn into :attr:`Block.FADING` and disappear on the following step, while a new
row is spawned at the opposite boundary once both boundary rows of the band are
clear of terrain.

The step reads the current grid and writes a freshly allocated one, so no cell
is read after it has been written within the same step.
"""

from __future__ import annotations

import logging
import random

import numpy as np

from .actors import ActorTracker
from .blocks import Block
from .grid import (
    Grid,
    column_of,
    column_span,
    create_empty_grid,
    is_row_non_static,
    scrolls_upward,
)


LOGGER = logging.getLogger(__name__)


class ColumnScroller:
    """Advance the terrain of every column band by one row per step."""

    def __init__(
        self,
        width: int,
        height: int,
        columns: int,
        column_width: int,
        *,
        rng: random.Random,
        hole_chance: int,
    ) -> None:
        self.width = width
        self.height = height
        self.columns = columns
        self.column_width = column_width
        self.hole_chance = hole_chance
        self._rng = rng

    def step(
        self, grid: Grid, actors: ActorTracker, generate_holes: bool = False
    ) -> tuple[Grid, bool]:
        """Scroll ``grid`` once and return ``(next_grid, player_crushed)``.

        Actors standing in a band are carried along with its terrain.  The
        returned grid holds terrain only; actor markers are stamped by the
        actor step.
        """

        LOGGER.debug("Updating level grid")
        next_grid = create_empty_grid(self.width, self.height)
        actors.count_scroll()
        crushed = False
        for column in range(self.columns):
            if scrolls_upward(column):
                crushed |= self._scroll_up(grid, next_grid, column, actors, generate_holes)
            else:
                self._scroll_down(grid, next_grid, column, actors, generate_holes)
        return next_grid, crushed

    def spawn_row(self, generate_holes: bool) -> np.ndarray:
        """Return the cells of a new terrain row for one band."""

        row = np.full(self.column_width, Block.NORMAL, dtype=np.uint8)
        if generate_holes:
            for i in range(self.column_width):
                if self._rng.randrange(100) < self.hole_chance:
                    row[i] = Block.EMPTY
        return row

    def _scroll_up(
        self,
        grid: Grid,
        next_grid: Grid,
        column: int,
        actors: ActorTracker,
        generate_holes: bool,
    ) -> bool:
        span = column_span(column, self.column_width)
        old = grid[span]
        new = next_grid[span]
        bottom = self.height - 1

        # Rows 2.. move up unchanged, row 1 fades into row 0
        moved = old[:, 2:] == Block.NORMAL
        new[:, 1:-1][moved] = Block.NORMAL
        new[:, 0][old[:, 1] == Block.NORMAL] = Block.FADING

        if is_row_non_static(grid, column, bottom, self.column_width) and is_row_non_static(
            grid, column, bottom - 1, self.column_width
        ):
            new[:, bottom] = self.spawn_row(generate_holes)

        crushed = False
        if column_of(actors.player.x, self.column_width) == column:
            if not actors.push_player(-1):
                LOGGER.debug("Player pushed out at the top")
                crushed = True
        if column_of(actors.treasure.x, self.column_width) == column:
            actors.push_treasure(-1)
        return crushed

    def _scroll_down(
        self,
        grid: Grid,
        next_grid: Grid,
        column: int,
        actors: ActorTracker,
        generate_holes: bool,
    ) -> None:
        span = column_span(column, self.column_width)
        old = grid[span]
        new = next_grid[span]
        bottom = self.height - 1

        # Rows ..height-3 move down unchanged, row height-2 fades into the last row
        moved = old[:, : bottom - 1] == Block.NORMAL
        new[:, 1:bottom][moved] = Block.NORMAL
        new[:, bottom][old[:, bottom - 1] == Block.NORMAL] = Block.FADING

        if is_row_non_static(grid, column, 0, self.column_width) and is_row_non_static(
            grid, column, 1, self.column_width
        ):
            new[:, 0] = self.spawn_row(generate_holes)

        if column_of(actors.treasure.x, self.column_width) == column:
            actors.push_treasure(1)
