import numpy as np
import pytest

from roofrun_rl.game import BoundsError, ClickResult, ColorGrid, EMPTY, GameConfig, RoofrunGame

A, B, C = 1, 2, 3
_ = EMPTY


def make_game(rows):
    game = RoofrunGame(GameConfig(grid_size=len(rows), random_seed=0))
    game.grid = ColorGrid.from_rows(rows)
    return game


def settled(before, group):
    """Expected board after removing ``group`` from ``before`` and settling."""
    size = len(before)
    columns = []
    for c in range(size):
        kept = [before[r][c] for r in range(size) if (r, c) not in group and before[r][c] != EMPTY]
        if kept:
            columns.append([EMPTY] * (size - len(kept)) + kept)
    while len(columns) < size:
        columns.append([EMPTY] * size)
    return np.array(columns, dtype=np.int8).T


def assert_settled(grid):
    size = grid.shape[0]
    for c in range(size):
        filled = grid[:, c] != EMPTY
        # No filled cell above an empty one
        first = np.argmax(filled) if filled.any() else size
        assert filled[first:].all()
    non_empty = [bool(grid[:, c].any()) for c in range(size)]
    assert non_empty == sorted(non_empty, reverse=True)


def test_reference_scenario():
    game = make_game([
        [A, A, B],
        [A, B, B],
        [B, B, A],
    ])
    assert game.grid.same_color_component(0, 0) == {(0, 0), (0, 1), (1, 0)}
    assert game.click(0, 0) == ClickResult(valid_move=True, removed_count=3)
    np.testing.assert_array_equal(game.get_state(), np.array([
        [_, _, B],
        [_, B, B],
        [B, B, A],
    ]))


def test_click_isolated_cell_is_a_no_op():
    rows = [
        [A, B, C],
        [B, C, C],
        [A, A, B],
    ]
    game = make_game(rows)
    before = game.grid.clone_state()
    assert game.click(0, 0) == ClickResult(False, 0)
    np.testing.assert_array_equal(game.grid.grid, before)
    assert game.moves_made == 0


def test_click_empty_cell_is_a_no_op():
    game = make_game([
        [_, _, _],
        [_, A, _],
        [A, A, B],
    ])
    before = game.grid.clone_state()
    assert game.click(0, 0) == ClickResult(False, 0)
    np.testing.assert_array_equal(game.grid.grid, before)


def test_click_out_of_range_raises():
    game = make_game([[A, A], [B, B]])
    with pytest.raises(BoundsError):
        game.click(2, 0)


def test_removed_column_collapses_left():
    game = make_game([
        [C, A, B, C],
        [B, A, C, A],
        [C, A, B, C],
        [B, A, C, A],
    ])
    assert game.click(0, 1) == ClickResult(True, 4)
    np.testing.assert_array_equal(game.get_state(), np.array([
        [C, B, C, _],
        [B, C, A, _],
        [C, B, C, _],
        [B, C, A, _],
    ]))


def test_cells_fall_after_removal():
    game = make_game([
        [A, B, C],
        [B, A, A],
        [C, B, C],
    ])
    assert game.click(1, 2) == ClickResult(True, 2)
    np.testing.assert_array_equal(game.get_state(), np.array([
        [A, _, _],
        [B, B, C],
        [C, B, C],
    ]))


def test_clearing_the_board_wins():
    game = make_game([[A, A], [B, B]])
    assert game.click(0, 0).removed_count == 2
    assert not game.is_won()
    assert game.click(1, 1).removed_count == 2
    assert game.is_won()
    assert not game.is_lost()


def test_win_and_lose_on_fixed_boards():
    empty = make_game([[_, _], [_, _]])
    assert empty.is_won() and not empty.is_lost()
    assert not empty.has_valid_moves()

    scattered = make_game([
        [A, B, A],
        [B, A, B],
        [A, B, A],
    ])
    assert scattered.is_lost() and not scattered.is_won()

    playing = make_game([
        [A, A, B],
        [B, C, A],
        [C, B, C],
    ])
    assert not playing.is_lost() and not playing.is_won()


def test_queries_do_not_mutate():
    game = make_game([
        [A, B, A],
        [B, A, B],
        [A, B, B],
    ])
    before = game.grid.clone_state()
    game.is_won()
    game.is_lost()
    game.has_valid_moves()
    game.valid_moves()
    game.action_mask()
    np.testing.assert_array_equal(game.grid.grid, before)


def test_valid_moves_and_action_mask():
    game = make_game([
        [A, B, B],
        [C, A, C],
        [A, A, B],
    ])
    assert game.valid_moves() == [(0, 1), (1, 1)]
    mask = game.action_mask()
    assert mask.sum() == 5
    assert mask[0, 1] and mask[0, 2] and mask[1, 1] and mask[2, 0] and mask[2, 1]
    assert not mask[0, 0]


@pytest.mark.parametrize("seed", range(10))
def test_random_play_keeps_invariants(seed):
    game = RoofrunGame(GameConfig(grid_size=8, random_seed=seed))
    rng = np.random.default_rng(seed)
    assert game.has_valid_moves()
    while not (game.is_won() or game.is_lost()):
        moves = game.valid_moves()
        row, col = moves[int(rng.integers(len(moves)))]
        before = game.grid.clone_state()
        group = game.grid.same_color_component(row, col)
        filled = game.grid.count_filled()

        result = game.click(row, col)

        assert result == ClickResult(True, len(group))
        assert game.grid.count_filled() == filled - len(group)
        np.testing.assert_array_equal(game.grid.grid, settled(before.tolist(), group))
        assert_settled(game.grid.grid)
        assert not (game.is_won() and game.is_lost())


def test_reset_replaces_grid_and_can_resize():
    game = RoofrunGame(GameConfig(grid_size=6, random_seed=1))
    old = game.grid
    game.reset(grid_size=9)
    assert game.grid is not old
    assert game.grid_size == 9
    assert old.size == 6
    assert game.has_valid_moves()


def test_reset_with_seed_is_reproducible():
    game = RoofrunGame(GameConfig(grid_size=7))
    game.reset(seed=42)
    first = game.grid.clone_state()
    game.reset(seed=42)
    np.testing.assert_array_equal(game.grid.grid, first)
