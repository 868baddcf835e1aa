"""High level Falldown simulation.

:class:`FalldownSimulation` owns the grid, the actors and the transition
animator.  A driving shell calls :meth:`FalldownSimulation.update` once per
displayed frame, forwards player intents and reads
:meth:`FalldownSimulation.get_grid` to render.  The simulation is not thread
safe; every call is expected to come from the same thread, which makes the
simulation object the single gate for grid mutations.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Optional

from .actors import ActorTracker, PlayerOutcome
from .animations import (
    AnimationKind,
    Steps,
    TransitionAnimator,
    game_end_sparkle,
    placeholder_loop,
    player_death_wipe,
    treasure_found_reveal,
)
from .config import FalldownConfig
from .grid import Grid, create_empty_grid, validate_dimensions
from .level import LevelGenerator, LevelParams
from .scroller import ColumnScroller


LOGGER = logging.getLogger(__name__)


class SimulationState(str, Enum):
    """Lifecycle of a Falldown session."""

    IDLE = "idle"
    PLAYING = "playing"
    TREASURE_WON = "treasure-won"
    PLAYER_LOST = "player-lost"
    ENDED = "ended"


# States in which a game session is in progress
_ACTIVE_STATES = frozenset(
    {SimulationState.PLAYING, SimulationState.TREASURE_WON, SimulationState.PLAYER_LOST}
)


class FalldownSimulation:
    """Grid simulation for one Falldown display.

    Parameters
    ----------
    width, height:
        Size of the grid, addressed as ``grid[x, y]``.
    columns:
        Number of equally wide column bands.  ``width`` must be divisible by
        it.
    config:
        Tunables; defaults to :class:`FalldownConfig`.
    rng:
        Random source for level layouts, spawned rows, treasure relocation and
        the game-end sparkle.  Pass a seeded :class:`random.Random` for
        reproducible runs.
    clock:
        Zero-argument callable returning seconds, used to pace animations.

    The simulation starts idle with the placeholder animation running.
    """

    def __init__(
        self,
        width: int = 9,
        height: int = 14,
        columns: int = 3,
        *,
        config: Optional[FalldownConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config = config or FalldownConfig()
        self.column_width = validate_dimensions(width, height, columns)
        spawn_x, spawn_y = self.config.player_spawn
        if not (0 <= spawn_x < width and 0 <= spawn_y < height):
            raise ValueError(
                f"Player spawn {self.config.player_spawn} is outside the {width}x{height} grid"
            )
        self.width = width
        self.height = height
        self.columns = columns
        self._rng = rng or random.Random()

        self.grid: Grid = create_empty_grid(width, height)
        self.levels = LevelGenerator(width, height, self.config, self._rng)
        self.scroller = ColumnScroller(
            width,
            height,
            columns,
            self.column_width,
            rng=self._rng,
            hole_chance=self.config.hole_chance,
        )
        self.actors = ActorTracker(
            width,
            height,
            rng=self._rng,
            max_relocation_attempts=self.config.max_relocation_attempts,
        )
        self.animator = TransitionAnimator(delay=self.config.animation_delay, clock=clock)
        self.state = SimulationState.IDLE
        self.level = 0
        self.params: LevelParams = self.levels.parameters(0)

        LOGGER.info("Falldown game created (%dx%d, %d columns)", width, height, columns)
        self.play_idle_animation()

    # ------------------------------------------------------------------
    # Public accessors
    # ------------------------------------------------------------------
    @property
    def animation(self) -> AnimationKind:
        return self.animator.kind

    def get_grid(self) -> Grid:
        """Return a copy of the current grid for rendering."""

        return self.grid.copy()

    def is_player_dead(self) -> bool:
        return self.state is SimulationState.PLAYER_LOST

    def is_active(self) -> bool:
        """Return ``True`` while a game session is in progress.

        Idle and ended simulations are inactive; the driving shell may start a
        new game with :meth:`reset_and_purge`.
        """

        return self.state in _ACTIVE_STATES

    # ------------------------------------------------------------------
    # Player intents
    # ------------------------------------------------------------------
    def move_player_left(self) -> None:
        if self.state is SimulationState.PLAYING:
            self.actors.move_player_left()

    def move_player_right(self) -> None:
        if self.state is SimulationState.PLAYING:
            self.actors.move_player_right()

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------
    def update(self, frame: int) -> None:
        """Advance the simulation by one displayed frame.

        Due animation mutations run first.  Gameplay only proceeds while
        playing: the terrain scrolls on frames divisible by the level's scroll
        interval and the actors are stepped on every frame.
        """

        self.animator.tick()
        if self.state is not SimulationState.PLAYING:
            return

        if frame % self.params.scroll_interval(self.config.fps) == 0:
            self.scroll_columns()
            if self.state is not SimulationState.PLAYING:
                self.actors.stamp_markers(self.grid)
                return
        self.step_actors()

    def scroll_columns(self) -> None:
        """Run one terrain scroll step over every column band."""

        self.grid, crushed = self.scroller.step(
            self.grid, self.actors, self.params.generate_holes
        )
        if crushed:
            self._player_died("Player died moving up")

    def step_actors(self) -> None:
        """Move the treasure and the player and react to terminal conditions."""

        self.actors.clear_markers(self.grid)
        self.actors.step_treasure(self.grid)
        outcome = self.actors.step_player(self.grid)
        if outcome is PlayerOutcome.DEAD:
            self._player_died("Player died at the bottom")
        elif outcome is PlayerOutcome.FOUND_TREASURE:
            self._treasure_found()

    # ------------------------------------------------------------------
    # Level lifecycle
    # ------------------------------------------------------------------
    def reset_and_purge(self) -> None:
        """Restart at level 0, equivalent to building a new simulation."""

        LOGGER.info("The game will be reset")
        self.level = 0
        self._purge()
        self._load_level(0)

    def advance_level(self) -> None:
        """Load the next level, or end the game after the last one."""

        LOGGER.info("Advancing to next level")
        self.level += 1
        if self.level >= self.config.level_count:
            self._end_game()
            return
        self._purge()
        self._load_level(self.level)

    def _purge(self) -> None:
        LOGGER.debug("Purging game")
        self.animator.cancel()
        self.actors.reset_treasure_tracking()
        self.state = SimulationState.PLAYING

    def _load_level(self, level: int) -> None:
        self.params = self.levels.parameters(level)
        self.actors.max_treasure_steps = self.params.max_treasure_steps
        self.grid = self.levels.build_grid(self.params.generate_holes)
        self.actors.place_player(*self.config.player_spawn)
        self.actors.stamp_player(self.grid)
        self.actors.relocate_treasure(self.grid)
        self.actors.stamp_markers(self.grid)

    def _end_game(self) -> None:
        self.animator.cancel()
        self.state = SimulationState.ENDED
        self._play(
            AnimationKind.GAME_END_SPARKLE,
            game_end_sparkle(self, self._rng, self.config.game_end_delay_factor),
            fresh_grid=True,
        )

    # ------------------------------------------------------------------
    # Terminal conditions
    # ------------------------------------------------------------------
    def _player_died(self, reason: str) -> None:
        if self.state is not SimulationState.PLAYING:
            return
        LOGGER.info(reason)
        self.state = SimulationState.PLAYER_LOST
        self._play(
            AnimationKind.PLAYER_DEATH_WIPE,
            player_death_wipe(self),
            on_complete=self._death_wipe_finished,
        )

    def _death_wipe_finished(self) -> None:
        self.play_idle_animation()

    def _treasure_found(self) -> None:
        LOGGER.info("Player reached treasure on level %d", self.level)
        self.state = SimulationState.TREASURE_WON
        self._play(
            AnimationKind.TREASURE_FOUND_REVEAL,
            treasure_found_reveal(self),
            on_complete=self.advance_level,
        )

    # ------------------------------------------------------------------
    # Animations
    # ------------------------------------------------------------------
    def play_idle_animation(self) -> bool:
        """Return to the idle state with the placeholder animation.

        Ignored while another animation is running.
        """

        if self.animator.active:
            LOGGER.debug("Idle animation requested while %s runs", self.animator.kind.value)
            return False
        self.state = SimulationState.IDLE
        return self._play(AnimationKind.PLACEHOLDER_LOOP, placeholder_loop(self), fresh_grid=True)

    def _play(
        self,
        kind: AnimationKind,
        steps: Steps,
        on_complete: Optional[Callable[[], None]] = None,
        *,
        fresh_grid: bool = False,
    ) -> bool:
        if self.animator.active:
            LOGGER.debug("Dropping %s request while %s runs", kind.value, self.animator.kind.value)
            steps.close()
            return False
        if fresh_grid:
            self.grid = create_empty_grid(self.width, self.height)
        return self.animator.start(kind, steps, on_complete)
