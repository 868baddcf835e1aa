"""Time-paced transition animations.

Each animation is a generator that performs exactly one cell mutation per
resumption and then yields a delay multiplier.  :class:`TransitionAnimator`
owns at most one such generator and resumes it whenever its clock says the
next mutation is due.  Everything runs on the caller's thread: the simulation
ticks the animator from ``update`` so that animation mutations and gameplay
updates never interleave.

Cancelling closes the generator, after which it can no longer touch the grid.
"""

from __future__ import annotations

import logging
import random
import time
from enum import Enum
from typing import Callable, Iterator, Optional, Protocol

from .blocks import Block, is_static
from .config import ANIMATION_DELAY, GAME_END_DELAY_FACTOR, MAX_ANIMATION_LAG
from .grid import Grid


LOGGER = logging.getLogger(__name__)

# A running animation.  Every yielded value multiplies the base delay before
# the next mutation.
Steps = Iterator[int]


class AnimationKind(str, Enum):
    """The transition sequences the animator can run."""

    IDLE = "idle"
    PLACEHOLDER_LOOP = "placeholder-loop"
    PLAYER_DEATH_WIPE = "player-death-wipe"
    TREASURE_FOUND_REVEAL = "treasure-found-reveal"
    GAME_END_SPARKLE = "game-end-sparkle"


# ----------------------------------------------------------------------------
# Sequences
# ----------------------------------------------------------------------------


class GridOwner(Protocol):
    """Anything holding the grid being animated.

    ``grid`` is read on every mutation so the sequences always act on the
    owner's current grid.
    """

    grid: Grid


def placeholder_loop(target: GridOwner) -> Steps:
    """Sweep the grid forever, toggling each cell between fading and empty."""

    while True:
        width, height = target.grid.shape
        for x in range(width):
            for y in range(height):
                grid = target.grid
                grid[x, y] = Block.FADING if grid[x, y] == Block.EMPTY else Block.EMPTY
                yield 1


def player_death_wipe(target: GridOwner) -> Steps:
    """Paint every cell red, starting at the bottom right corner."""

    width, height = target.grid.shape
    for y in reversed(range(height)):
        for x in reversed(range(width)):
            target.grid[x, y] = Block.RED
            yield 1


def treasure_found_reveal(target: GridOwner) -> Steps:
    """Clear the terrain, then fill every empty cell with treasure.

    Only cells that actually change consume a tick.
    """

    width, height = target.grid.shape
    for x in range(width):
        for y in range(height):
            if is_static(target.grid[x, y]):
                target.grid[x, y] = Block.EMPTY
                yield 1
    for y in range(height):
        for x in range(width):
            if target.grid[x, y] == Block.EMPTY:
                target.grid[x, y] = Block.TREASURE
                yield 1


def game_end_sparkle(
    target: GridOwner, rng: random.Random, delay_factor: int = GAME_END_DELAY_FACTOR
) -> Steps:
    """Toggle random cells between ``RANDOM`` and empty until cancelled."""

    while True:
        width, height = target.grid.shape
        x = rng.randrange(width)
        y = rng.randrange(height)
        grid = target.grid
        grid[x, y] = Block.EMPTY if grid[x, y] == Block.RANDOM else Block.RANDOM
        yield delay_factor


# ----------------------------------------------------------------------------
# Scheduler
# ----------------------------------------------------------------------------


class TransitionAnimator:
    """Run one cancellable animation at a time, paced by ``clock``.

    ``clock`` is a zero-argument callable returning seconds, defaulting to
    :func:`time.monotonic`.  Start requests while an animation runs are
    dropped rather than queued.

    A tick catches up on mutations that became due since the previous one, but
    only within ``max_lag`` seconds.  When the caller stalls for longer the
    schedule restarts from the current time, so a single tick never replays a
    long backlog.
    """

    def __init__(
        self,
        *,
        delay: float = ANIMATION_DELAY,
        clock: Optional[Callable[[], float]] = None,
        max_lag: float = MAX_ANIMATION_LAG,
    ) -> None:
        if delay <= 0:
            raise ValueError(f"Animation delay must be positive, got {delay}")
        if max_lag < 0:
            raise ValueError(f"Maximum animation lag must not be negative, got {max_lag}")
        self.delay = delay
        self.max_lag = max_lag
        self._clock = clock or time.monotonic
        self._kind = AnimationKind.IDLE
        self._steps: Optional[Steps] = None
        self._on_complete: Optional[Callable[[], None]] = None
        self._due = 0.0

    @property
    def kind(self) -> AnimationKind:
        return self._kind

    @property
    def active(self) -> bool:
        return self._steps is not None

    def start(
        self,
        kind: AnimationKind,
        steps: Steps,
        on_complete: Optional[Callable[[], None]] = None,
    ) -> bool:
        """Begin ``steps`` unless another animation is running.

        The first mutation is due immediately.  ``on_complete`` runs when the
        sequence finishes on its own, never after :meth:`cancel`.

        Returns:
            ``True`` if the animation was started.
        """

        if self.active:
            LOGGER.debug("Ignoring %s request while %s runs", kind.value, self._kind.value)
            return False
        LOGGER.info("Starting %s animation", kind.value)
        self._kind = kind
        self._steps = steps
        self._on_complete = on_complete
        self._due = self._clock()
        return True

    def cancel(self) -> None:
        """Stop the running animation before its next mutation."""

        if self._steps is None:
            return
        LOGGER.debug("Ending %s animation", self._kind.value)
        steps = self._steps
        self._clear()
        steps.close()

    def step(self) -> bool:
        """Perform one mutation regardless of the clock.

        Returns:
            ``True`` if a mutation happened, ``False`` if nothing was running
            or the animation has just completed.
        """

        if self._steps is None:
            return False
        try:
            factor = next(self._steps)
        except StopIteration:
            self._finish()
            return False
        self._due += self.delay * factor
        return True

    def tick(self) -> int:
        """Perform every mutation that is due and return how many ran."""

        performed = 0
        now = self._clock()
        if self._steps is not None and now - self._due > self.max_lag:
            LOGGER.debug("Animation fell %.3fs behind, skipping ahead", now - self._due)
            self._due = now
        while self._steps is not None and self._due <= now:
            if not self.step():
                break
            performed += 1
        return performed

    def drain(self, limit: int = 100_000) -> int:
        """Run the current animation to completion, ignoring the clock.

        Endless animations stop after ``limit`` mutations.
        """

        performed = 0
        while performed < limit and self.step():
            performed += 1
        return performed

    def _clear(self) -> None:
        self._kind = AnimationKind.IDLE
        self._steps = None
        self._on_complete = None

    def _finish(self) -> None:
        kind = self._kind
        callback = self._on_complete
        self._clear()
        LOGGER.debug("%s animation finished", kind.value)
        if callback is not None:
            callback()
