"""Cell values stored in the Falldown grid."""

from __future__ import annotations

from enum import IntEnum


class Block(IntEnum):
    """Enumeration of every value a grid cell can hold."""

    EMPTY = 0
    NORMAL = 1
    FADING = 2
    PLAYER = 3
    TREASURE = 4
    RED = 5
    RANDOM = 6


# Background terrain.  Only the scroll step moves these blocks.
STATIC_BLOCKS = frozenset({Block.NORMAL, Block.FADING})

# Transient cells which gravity may move through and new rows may replace.
NON_STATIC_BLOCKS = frozenset({Block.EMPTY, Block.PLAYER, Block.TREASURE})


def is_static(value: int) -> bool:
    """Return ``True`` if ``value`` is a terrain block."""

    return int(value) in STATIC_BLOCKS


def is_non_static(value: int) -> bool:
    """Return ``True`` if ``value`` is empty space or an actor marker.

    ``RED`` and ``RANDOM`` are animation-only values and are neither static nor
    non-static.
    """

    return int(value) in NON_STATIC_BLOCKS
