from __future__ import annotations

import random

import numpy as np

from falldown.actors import ActorTracker
from falldown.blocks import Block
from falldown.grid import create_empty_grid
from falldown.scroller import ColumnScroller


WIDTH = 9
HEIGHT = 6


def make_scroller(hole_chance: int = 20, height: int = HEIGHT) -> ColumnScroller:
    return ColumnScroller(
        WIDTH, height, 3, 3, rng=random.Random(0), hole_chance=hole_chance
    )


def make_actors(height: int = HEIGHT) -> ActorTracker:
    actors = ActorTracker(WIDTH, height, rng=random.Random(0), max_relocation_attempts=100)
    actors.place_player(4, 1)
    actors.place_treasure(5, 1)
    return actors


def test_even_columns_move_up_and_odd_columns_move_down() -> None:
    grid = create_empty_grid(WIDTH, HEIGHT)
    grid[0:3, 3] = Block.NORMAL
    grid[3:6, 2] = Block.NORMAL
    grid[6:9, 1] = Block.NORMAL
    before = grid.copy()

    next_grid, crushed = make_scroller().step(grid, make_actors())

    assert crushed is False
    # Column 0 moves up and spawns a row at the bottom
    assert np.all(next_grid[0:3, 2] == Block.NORMAL)
    assert np.all(next_grid[0:3, HEIGHT - 1] == Block.NORMAL)
    assert np.count_nonzero(next_grid[0:3]) == 6
    # Column 1 moves down and spawns a row at the top
    assert np.all(next_grid[3:6, 3] == Block.NORMAL)
    assert np.all(next_grid[3:6, 0] == Block.NORMAL)
    assert np.count_nonzero(next_grid[3:6]) == 6
    # Column 2 fades out at the top
    assert np.all(next_grid[6:9, 0] == Block.FADING)
    assert np.all(next_grid[6:9, HEIGHT - 1] == Block.NORMAL)

    # The step writes a separate buffer
    assert next_grid is not grid
    assert np.array_equal(grid, before)


def test_downward_column_fades_at_the_bottom() -> None:
    grid = create_empty_grid(WIDTH, HEIGHT)
    grid[3:6, HEIGHT - 2] = Block.NORMAL
    next_grid, _ = make_scroller().step(grid, make_actors())
    assert np.all(next_grid[3:6, HEIGHT - 1] == Block.FADING)
    assert not np.any(next_grid[3:6, HEIGHT - 2] == Block.NORMAL)


def test_fading_blocks_disappear_on_the_next_step() -> None:
    scroller = make_scroller()
    actors = make_actors()
    grid = create_empty_grid(WIDTH, HEIGHT)
    grid[0:3, 1] = Block.NORMAL

    first, _ = scroller.step(grid, actors)
    assert np.all(first[0:3, 0] == Block.FADING)

    second, _ = scroller.step(first, actors)
    assert np.all(second[0:3, 0] == Block.EMPTY)


def test_no_row_spawns_over_lingering_terrain() -> None:
    grid = create_empty_grid(WIDTH, HEIGHT)
    # A single block on the row above the bottom of an upward column
    grid[1, HEIGHT - 2] = Block.NORMAL
    # A fading block on the second row of a downward column
    grid[4, 1] = Block.FADING

    next_grid, _ = make_scroller().step(grid, make_actors())

    assert np.all(next_grid[0:3, HEIGHT - 1] == Block.EMPTY)
    assert next_grid[1, HEIGHT - 3] == Block.NORMAL
    assert np.all(next_grid[3:6, 0] == Block.EMPTY)
    # The untouched upward column still spawns
    assert np.all(next_grid[6:9, HEIGHT - 1] == Block.NORMAL)


def test_actor_markers_do_not_block_spawning() -> None:
    grid = create_empty_grid(WIDTH, HEIGHT)
    grid[1, HEIGHT - 1] = Block.PLAYER
    grid[2, HEIGHT - 2] = Block.TREASURE
    next_grid, _ = make_scroller().step(grid, make_actors())
    assert np.all(next_grid[0:3, HEIGHT - 1] == Block.NORMAL)


def test_spawned_rows_honour_the_hole_chance() -> None:
    assert np.all(make_scroller(hole_chance=100).spawn_row(True) == Block.EMPTY)
    assert np.all(make_scroller(hole_chance=100).spawn_row(False) == Block.NORMAL)
    assert np.all(make_scroller(hole_chance=0).spawn_row(True) == Block.NORMAL)


def test_upward_then_downward_step_restores_static_blocks() -> None:
    height = 8
    scroller = make_scroller(height=height)
    actors = make_actors(height)
    grid = create_empty_grid(WIDTH, height)
    grid[0:3, 2] = Block.NORMAL
    grid[0, 3] = Block.NORMAL
    original = grid[0:3].copy()

    up, _ = scroller.step(grid, actors)

    # Replay the moved band through a downward column
    mirrored = create_empty_grid(WIDTH, height)
    mirrored[3:6] = up[0:3]
    back, _ = scroller.step(mirrored, actors)

    assert np.array_equal(back[3:6, 1:-1], original[:, 1:-1])


def test_step_counts_against_the_treasure_budget() -> None:
    actors = make_actors()
    scroller = make_scroller()
    grid = create_empty_grid(WIDTH, HEIGHT)
    scroller.step(grid, actors)
    scroller.step(grid, actors)
    assert actors.treasure_steps == 2


def test_upward_column_carries_the_player_and_crushes_it_at_the_top() -> None:
    scroller = make_scroller()
    grid = create_empty_grid(WIDTH, HEIGHT)

    actors = make_actors()
    actors.place_player(1, 3)
    _, crushed = scroller.step(grid, actors)
    assert crushed is False
    assert actors.player.as_tuple() == (1, 2)

    actors.place_player(1, 0)
    _, crushed = scroller.step(grid, actors)
    assert crushed is True
    assert actors.player.as_tuple() == (1, 0)


def test_downward_column_leaves_the_player_alone() -> None:
    actors = make_actors()
    actors.place_player(4, 3)
    _, crushed = make_scroller().step(create_empty_grid(WIDTH, HEIGHT), actors)
    assert crushed is False
    assert actors.player.as_tuple() == (4, 3)


def test_treasure_is_carried_and_flagged_when_leaving_the_grid() -> None:
    scroller = make_scroller()
    grid = create_empty_grid(WIDTH, HEIGHT)

    actors = make_actors()
    actors.place_treasure(4, 2)
    scroller.step(grid, actors)
    assert actors.treasure.as_tuple() == (4, 3)
    assert actors.treasure_out_of_bounds is False

    actors.place_treasure(4, HEIGHT - 1)
    scroller.step(grid, actors)
    assert actors.treasure_out_of_bounds is True
    assert actors.treasure.as_tuple() == (4, HEIGHT - 1)

    actors = make_actors()
    actors.place_treasure(7, 0)
    scroller.step(grid, actors)
    assert actors.treasure_out_of_bounds is True
