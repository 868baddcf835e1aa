"""Player and treasure tracking.

Both actors are stored as integer coordinates next to the grid.  The grid only
carries their markers, which are wiped at the start of every actor step and
stamped again at its end so that terrain processing can never overwrite them
within the same frame.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .blocks import Block, is_non_static, is_static
from .grid import Grid, static_mask


LOGGER = logging.getLogger(__name__)


@dataclass
class Position:
    """Integer grid coordinates of an actor."""

    x: int = 0
    y: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


class PlayerOutcome(Enum):
    """Result of a single player step."""

    ALIVE = "alive"
    DEAD = "dead"
    FOUND_TREASURE = "found_treasure"


class ActorTracker:
    """Track the player and the treasure on a ``width`` x ``height`` grid."""

    def __init__(
        self,
        width: int,
        height: int,
        *,
        rng: random.Random,
        max_relocation_attempts: int,
    ) -> None:
        self.width = width
        self.height = height
        self._rng = rng
        self.max_relocation_attempts = max_relocation_attempts
        self.player = Position()
        self.treasure = Position()
        self.treasure_steps = 0
        self.max_treasure_steps = 0
        self.treasure_out_of_bounds = False

    # ------------------------------------------------------------------
    # Positioning
    # ------------------------------------------------------------------
    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def place_player(self, x: int, y: int) -> bool:
        """Move the player to ``(x, y)`` if that cell is on the grid.

        Out-of-bounds requests leave the player where it is and return
        ``False``.
        """

        if not self._in_bounds(x, y):
            return False
        self.player = Position(x, y)
        return True

    def place_treasure(self, x: int, y: int) -> bool:
        """Move the treasure to ``(x, y)`` if that cell is on the grid."""

        if not self._in_bounds(x, y):
            return False
        self.treasure = Position(x, y)
        return True

    def move_player_left(self) -> bool:
        return self.place_player(self.player.x - 1, self.player.y)

    def move_player_right(self) -> bool:
        return self.place_player(self.player.x + 1, self.player.y)

    def reset_treasure_tracking(self) -> None:
        self.treasure_steps = 0
        self.treasure_out_of_bounds = False

    # ------------------------------------------------------------------
    # Terrain interaction
    # ------------------------------------------------------------------
    def push_player(self, dy: int) -> bool:
        """Carry the player ``dy`` rows with the terrain.

        Returns ``False`` when the push would leave the grid, which means the
        player has been crushed.
        """

        return self.place_player(self.player.x, self.player.y + dy)

    def push_treasure(self, dy: int) -> None:
        """Carry the treasure ``dy`` rows, flagging it when it leaves the grid."""

        if not self.place_treasure(self.treasure.x, self.treasure.y + dy):
            LOGGER.debug("Treasure out of bounds at %s", self.treasure)
            self.treasure_out_of_bounds = True

    def count_scroll(self) -> None:
        """Register one terrain scroll against the treasure's step budget."""

        self.treasure_steps += 1

    def clear_markers(self, grid: Grid) -> None:
        """Reset every player and treasure marker in ``grid`` to empty."""

        grid[(grid == Block.PLAYER) | (grid == Block.TREASURE)] = Block.EMPTY

    def stamp_player(self, grid: Grid) -> None:
        grid[self.player.x, self.player.y] = Block.PLAYER

    def stamp_markers(self, grid: Grid) -> None:
        """Write both markers, the player last."""

        grid[self.treasure.x, self.treasure.y] = Block.TREASURE
        self.stamp_player(grid)

    # ------------------------------------------------------------------
    # Per-frame steps
    # ------------------------------------------------------------------
    def step_treasure(self, grid: Grid) -> None:
        """Apply relocation and gravity to the treasure and stamp its marker."""

        if self.treasure_out_of_bounds:
            self.relocate_treasure(grid)

        x, y = self.treasure.as_tuple()
        if y < self.height - 1 and is_non_static(grid[x, y + 1]):
            self.place_treasure(x, y + 1)

        if self.treasure_steps >= self.max_treasure_steps:
            self.relocate_treasure(grid)

        if self.treasure.y == self.height - 1:
            self.treasure_out_of_bounds = True

        grid[self.treasure.x, self.treasure.y] = Block.TREASURE

    def step_player(self, grid: Grid) -> PlayerOutcome:
        """Apply gravity to the player and detect the terminal conditions.

        A player on the last row is dead.  A player on row ``0`` does not
        fall.  The player marker is stamped last.
        """

        outcome = PlayerOutcome.ALIVE
        x, y = self.player.as_tuple()
        if y == self.height - 1:
            outcome = PlayerOutcome.DEAD
        elif y != 0 and is_non_static(grid[x, y + 1]):
            self.place_player(x, y + 1)

        if outcome is PlayerOutcome.ALIVE and self.player == self.treasure:
            outcome = PlayerOutcome.FOUND_TREASURE

        grid[self.player.x, self.player.y] = Block.PLAYER
        return outcome

    # ------------------------------------------------------------------
    # Relocation
    # ------------------------------------------------------------------
    def _is_resting_spot(self, grid: Grid, x: int, y: int) -> bool:
        if (x, y) == self.player.as_tuple():
            return False
        if grid[x, y] == Block.PLAYER or is_static(grid[x, y]):
            return False
        return is_static(grid[x, y + 1])

    def relocate_treasure(self, grid: Grid) -> None:
        """Move the treasure to a random cell resting on terrain.

        Candidate rows are ``0 .. height - 3``.  The cell must rest on a static
        block, must not be terrain itself and must not hold the player.  After
        ``max_relocation_attempts`` unsuccessful random samples every candidate
        is enumerated instead.

        Raises:
            RuntimeError: If the grid has no valid resting cell at all.
        """

        self.reset_treasure_tracking()
        rows = self.height - 2
        for _ in range(self.max_relocation_attempts):
            x = self._rng.randrange(self.width)
            y = self._rng.randrange(rows)
            if self._is_resting_spot(grid, x, y):
                LOGGER.debug("Moving treasure to random position (%d, %d)", x, y)
                self.place_treasure(x, y)
                return

        statics = static_mask(grid)
        candidates = statics[:, 1 : rows + 1] & ~statics[:, :rows]
        candidates &= grid[:, :rows] != Block.PLAYER
        if self.player.y < rows:
            candidates[self.player.x, self.player.y] = False
        spots = np.argwhere(candidates)
        if len(spots) == 0:
            raise RuntimeError(
                f"No resting position for the treasure on the {self.width}x{self.height} grid"
            )
        x, y = (int(v) for v in spots[self._rng.randrange(len(spots))])
        LOGGER.debug("Moving treasure to scanned position (%d, %d)", x, y)
        self.place_treasure(x, y)
