"""Conversions from the grid to displayable data.

Renderers want either an RGB image to blit or push to a remote display, or a
text frame for terminals.  Both helpers leave the grid untouched.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .blocks import Block
from .grid import Grid


Color = Tuple[int, int, int]

CELL_COLORS: Dict[Block, Color] = {
    Block.EMPTY: (0, 0, 0),
    Block.NORMAL: (0, 255, 0),
    Block.FADING: (0, 150, 0),
    Block.PLAYER: (0, 0, 255),
    Block.TREASURE: (255, 255, 0),
    Block.RED: (255, 0, 0),
    # Placeholder, RANDOM cells receive a fresh colour on every render
    Block.RANDOM: (255, 255, 255),
}

CELL_CHARS: Dict[Block, str] = {
    Block.EMPTY: ".",
    Block.NORMAL: "#",
    Block.FADING: "+",
    Block.PLAYER: "@",
    Block.TREASURE: "$",
    Block.RED: "x",
    Block.RANDOM: "*",
}

_PALETTE = np.array([CELL_COLORS[block] for block in Block], dtype=np.uint8)


def grid_to_rgb(
    grid: Grid, rng: Optional[np.random.Generator] = None
) -> NDArray[np.uint8]:
    """Return an RGB image of ``grid`` with shape ``(width, height, 3)``.

    The image keeps the grid's ``[x, y]`` addressing, which is the layout
    ``pygame.surfarray`` expects.  ``RANDOM`` cells are coloured with values
    drawn from ``rng``.
    """

    image = _PALETTE[grid]
    sparkles = grid == Block.RANDOM
    count = int(np.count_nonzero(sparkles))
    if count:
        rng = rng or np.random.default_rng()
        image[sparkles] = rng.integers(0, 256, size=(count, 3), dtype=np.uint8)
    return image


def grid_to_text(grid: Grid) -> List[str]:
    """Return one string per grid row, top row first."""

    width, height = grid.shape
    return [
        "".join(CELL_CHARS[Block(int(grid[x, y]))] for x in range(width))
        for y in range(height)
    ]
