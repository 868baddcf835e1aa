"""Grid representation for the Falldown playfield.

The grid is a numpy array of shape ``(width, height)`` addressed as
``grid[x, y]``.  Row ``0`` is the top of the display.  The playfield is split
into ``columns`` vertical bands of equal width; a band's parity decides which
way its terrain scrolls.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .blocks import STATIC_BLOCKS, Block


Grid = NDArray[np.uint8]

_STATIC_VALUES = np.array(sorted(int(b) for b in STATIC_BLOCKS), dtype=np.uint8)


def create_empty_grid(width: int, height: int) -> Grid:
    """Return a new grid filled with :attr:`Block.EMPTY`."""

    return np.full((width, height), Block.EMPTY, dtype=np.uint8)


def validate_dimensions(width: int, height: int, columns: int) -> int:
    """Check the playfield dimensions and return the width of one column band.

    Raises:
        ValueError: If the grid cannot be split into ``columns`` equal bands or
            is too small to hold a resting treasure.
    """

    if width <= 0:
        raise ValueError(f"Grid width must be positive, got {width}")
    if height < 3:
        raise ValueError(f"Grid height must be at least 3, got {height}")
    if columns <= 0:
        raise ValueError(f"Column count must be positive, got {columns}")
    if width % columns:
        raise ValueError(
            f"Grid width {width} cannot be split into {columns} equal columns"
        )
    return width // columns


def column_x(local_x: int, column: int, column_width: int) -> int:
    """Map an offset inside a column band to the global ``x`` coordinate."""

    return local_x + column * column_width


def column_span(column: int, column_width: int) -> slice:
    """Return the ``x`` slice covered by ``column``."""

    start = column_x(0, column, column_width)
    return slice(start, start + column_width)


def column_of(x: int, column_width: int) -> int:
    """Return the index of the column band containing ``x``."""

    return x // column_width


def scrolls_upward(column: int) -> bool:
    """Even columns move up, odd columns move down."""

    return column % 2 == 0


def static_mask(grid: Grid) -> NDArray[np.bool_]:
    """Return a boolean mask marking every terrain cell of ``grid``."""

    return np.isin(grid, _STATIC_VALUES)


def is_row_non_static(grid: Grid, column: int, y: int, column_width: int) -> bool:
    """Return ``True`` if no cell of ``column`` at row ``y`` holds terrain.

    New terrain rows are only spawned where this holds for both boundary rows
    so that lingering terrain is never overwritten.
    """

    cells = grid[column_span(column, column_width), y]
    return not bool(np.any(np.isin(cells, _STATIC_VALUES)))


def count_cells(grid: Grid, value: int) -> int:
    """Return how many cells of ``grid`` hold ``value``."""

    return int(np.count_nonzero(grid == value))
