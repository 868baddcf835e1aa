"""Simple pygame front-end for the Falldown simulation.

This module provides a playable desktop window around
:class:`~falldown.simulation.FalldownSimulation`.  It is intentionally
lightweight and only glues the simulation to ``pygame`` for rendering and
keyboard input.  Column bands are drawn with a small gap between them.

Keys: ``a``/left arrow and ``d``/right arrow move the player, ``r`` starts a
new game and ``p`` pauses or resumes.
"""

from __future__ import annotations

import asyncio
import logging

import pygame

from .config import FPS
from .grid import Grid, column_of
from .render import grid_to_rgb
from .simulation import FalldownSimulation


LOGGER = logging.getLogger(__name__)

# Size of a single grid cell in pixels
CELL_SIZE = 30
# Pixels between two column bands
COLUMN_GAP = 5
BACKGROUND = (150, 150, 150)
OUTLINE = (50, 50, 50)


def window_size(simulation: FalldownSimulation) -> tuple[int, int]:
    width = simulation.width * CELL_SIZE + (simulation.columns - 1) * COLUMN_GAP
    return width, simulation.height * CELL_SIZE


def draw_grid(screen: pygame.Surface, grid: Grid, column_width: int) -> None:
    """Render ``grid`` cell by cell with gaps between the column bands."""

    image = grid_to_rgb(grid)
    width, height = grid.shape
    for x in range(width):
        gap = column_of(x, column_width) * COLUMN_GAP
        for y in range(height):
            rect = pygame.Rect(x * CELL_SIZE + gap, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, tuple(int(v) for v in image[x, y]), rect)
            pygame.draw.rect(screen, OUTLINE, rect, 1)


def handle_key(event: pygame.event.Event, simulation: FalldownSimulation) -> None:
    """Translate a key press into a player intent."""

    if event.key in (pygame.K_LEFT, pygame.K_a):
        simulation.move_player_left()
    elif event.key in (pygame.K_RIGHT, pygame.K_d):
        simulation.move_player_right()
    elif event.key == pygame.K_r:
        simulation.reset_and_purge()


class GameRunner:
    """Manage the game loop with a pause toggle bound to ``p``."""

    def __init__(self, simulation: FalldownSimulation | None = None) -> None:
        self._running = False
        self._paused = False
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self.simulation = simulation or FalldownSimulation()
        self.frame = 0

    @property
    def paused(self) -> bool:
        return self._paused

    def toggle_pause(self) -> None:
        self._paused = not self._paused
        LOGGER.info("Paused" if self._paused else "Resumed")

    def handle_event(self, event: pygame.event.Event) -> None:
        """Dispatch one pygame event.  Player keys are ignored while paused."""

        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_p:
                self.toggle_pause()
            elif not self._paused:
                handle_key(event, self.simulation)

    async def _run_loop(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(window_size(self.simulation))
        pygame.display.set_caption("Falldown")
        self._clock = pygame.time.Clock()
        LOGGER.info("Window opened")

        self.frame = 0
        self._running = True
        while self._running:
            self._clock.tick(FPS)
            # Even when paused, process events so the window remains responsive
            for event in pygame.event.get():
                self.handle_event(event)

            if not self._paused:
                self.simulation.update(self.frame)
                self.frame += 1

            self._screen.fill(BACKGROUND)
            draw_grid(self._screen, self.simulation.get_grid(), self.simulation.column_width)
            pygame.display.set_caption(
                f"Falldown - {'Paused - ' if self._paused else ''}"
                f"Level {self.simulation.level + 1} ({self.simulation.state.value})"
            )
            pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Window closed")

    def start(self) -> None:
        if self._running:
            LOGGER.info("Game already running")
            return
        self._paused = False
        asyncio.run(self._run_loop())


def main(simulation: FalldownSimulation | None = None) -> None:
    """Open the window and block until it is closed."""

    GameRunner(simulation).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
