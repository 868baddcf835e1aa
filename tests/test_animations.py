from __future__ import annotations

import random
import types

import numpy as np
import pytest

from falldown.animations import (
    AnimationKind,
    TransitionAnimator,
    game_end_sparkle,
    placeholder_loop,
    player_death_wipe,
    treasure_found_reveal,
)
from falldown.blocks import Block
from falldown.grid import count_cells, create_empty_grid


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def make_target(width: int = 3, height: int = 3):
    return types.SimpleNamespace(grid=create_empty_grid(width, height))


def test_start_request_is_dropped_while_an_animation_runs() -> None:
    target = make_target()
    animator = TransitionAnimator(clock=FakeClock())
    assert animator.kind is AnimationKind.IDLE
    assert animator.start(AnimationKind.PLACEHOLDER_LOOP, placeholder_loop(target))
    assert not animator.start(AnimationKind.PLAYER_DEATH_WIPE, player_death_wipe(target))
    assert animator.kind is AnimationKind.PLACEHOLDER_LOOP
    assert animator.active


def test_tick_runs_mutations_as_they_become_due() -> None:
    clock = FakeClock()
    target = make_target()
    animator = TransitionAnimator(delay=0.02, clock=clock)
    animator.start(AnimationKind.PLACEHOLDER_LOOP, placeholder_loop(target))

    assert animator.tick() == 1
    assert animator.tick() == 0
    clock.advance(0.05)
    assert animator.tick() == 2
    assert np.all(target.grid[0] == Block.FADING)
    assert count_cells(target.grid, Block.FADING) == 3


def test_cancel_stops_before_the_next_mutation() -> None:
    clock = FakeClock()
    target = make_target()
    finished = []
    animator = TransitionAnimator(clock=clock)
    animator.start(
        AnimationKind.PLAYER_DEATH_WIPE,
        player_death_wipe(target),
        on_complete=lambda: finished.append(True),
    )
    animator.tick()
    snapshot = target.grid.copy()

    animator.cancel()
    clock.advance(10.0)

    assert animator.tick() == 0
    assert animator.step() is False
    assert np.array_equal(target.grid, snapshot)
    assert animator.kind is AnimationKind.IDLE
    assert not animator.active
    assert finished == []


def test_death_wipe_paints_everything_red_from_the_bottom() -> None:
    target = make_target()
    finished = []
    animator = TransitionAnimator(clock=FakeClock())
    animator.start(
        AnimationKind.PLAYER_DEATH_WIPE,
        player_death_wipe(target),
        on_complete=lambda: finished.append(True),
    )
    animator.step()
    assert target.grid[2, 2] == Block.RED
    assert count_cells(target.grid, Block.RED) == 1

    assert animator.drain() == 8
    assert np.all(target.grid == Block.RED)
    assert finished == [True]
    assert not animator.active


def test_treasure_reveal_clears_terrain_then_fills_with_treasure() -> None:
    target = make_target()
    target.grid[0, 0] = Block.NORMAL
    target.grid[1, 2] = Block.NORMAL
    target.grid[2, 1] = Block.FADING
    target.grid[1, 1] = Block.PLAYER
    steps = treasure_found_reveal(target)

    for _ in range(3):
        next(steps)
    assert count_cells(target.grid, Block.NORMAL) == 0
    assert count_cells(target.grid, Block.FADING) == 0
    assert count_cells(target.grid, Block.TREASURE) == 0

    assert sum(1 for _ in steps) == 8
    assert count_cells(target.grid, Block.TREASURE) == 8
    assert target.grid[1, 1] == Block.PLAYER


def test_placeholder_loop_toggles_cells_on_every_sweep() -> None:
    target = make_target()
    animator = TransitionAnimator(clock=FakeClock())
    animator.start(AnimationKind.PLACEHOLDER_LOOP, placeholder_loop(target))
    assert animator.drain(limit=9) == 9
    assert np.all(target.grid == Block.FADING)
    assert animator.drain(limit=9) == 9
    assert np.all(target.grid == Block.EMPTY)
    assert animator.active


def test_game_end_sparkle_never_finishes_and_runs_slower() -> None:
    clock = FakeClock()
    target = make_target(4, 4)
    animator = TransitionAnimator(delay=0.02, clock=clock)
    animator.start(
        AnimationKind.GAME_END_SPARKLE,
        game_end_sparkle(target, random.Random(3), delay_factor=3),
    )

    assert animator.tick() == 1
    clock.advance(0.05)
    assert animator.tick() == 0
    clock.advance(0.02)
    assert animator.tick() == 1

    assert animator.drain(limit=50) == 50
    assert animator.active
    values = set(int(v) for v in np.unique(target.grid))
    assert values <= {Block.EMPTY, Block.RANDOM}


def test_tick_skips_ahead_after_a_long_stall() -> None:
    clock = FakeClock()
    target = make_target()
    animator = TransitionAnimator(delay=0.02, clock=clock)
    animator.start(AnimationKind.PLACEHOLDER_LOOP, placeholder_loop(target))
    assert animator.tick() == 1

    clock.advance(10.0)
    assert animator.tick() == 1
    assert animator.tick() == 0
    assert count_cells(target.grid, Block.FADING) == 2

    clock.advance(0.02)
    assert animator.tick() == 1


@pytest.mark.parametrize("delay", [0.0, -0.02])
def test_non_positive_delay_is_rejected(delay: float) -> None:
    with pytest.raises(ValueError):
        TransitionAnimator(delay=delay, clock=FakeClock())
