import pytest

from roofrun_rl.game import ColorGrid, EMPTY, GameSession, GameState, ScoringRules, SessionConfig

A, B = 1, 2
_ = EMPTY


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return GameSession(SessionConfig(random_seed=0), clock=clock)


def test_new_session_is_idle(session):
    assert session.state == GameState.IDLE
    assert session.score == 0
    assert session.seconds_left == 30
    assert session.game.grid_size == 6
    assert session.click(0, 0).valid_move is False


def test_start_enters_playing_with_fresh_grid(session):
    old = session.game.grid
    session.start()
    assert session.state == GameState.PLAYING
    assert session.game.grid is not old
    assert session.game.has_valid_moves()


def test_timer_expiry_loses(session, clock):
    session.start()
    clock.advance(0.2)
    assert session.seconds_left == 30
    clock.advance(10)
    session.game.grid = ColorGrid.from_rows([[A, A], [B, B]])
    assert session.update() == GameState.PLAYING
    assert session.seconds_left == 20
    clock.advance(25)
    assert session.update() == GameState.LOST
    assert session.time_left == 0.0
    # Terminal state ignores further clicks
    assert session.click(0, 0).valid_move is False


def test_clearing_the_board_wins_and_scores(session):
    session.start()
    session.game.grid = ColorGrid.from_rows([[A, A], [B, B]])
    assert session.click(0, 0).removed_count == 2
    assert session.state == GameState.PLAYING
    assert session.click(1, 0).removed_count == 2
    assert session.state == GameState.WON
    assert session.score == 40


def test_move_that_leaves_no_pairs_loses_immediately(session):
    session.start()
    session.game.grid = ColorGrid.from_rows([
        [_, _, _],
        [_, _, _],
        [A, A, B],
    ])
    result = session.click(2, 0)
    assert result.valid_move and result.removed_count == 2
    assert session.state == GameState.LOST
    assert session.score == 20


def test_invalid_click_scores_nothing(session):
    session.start()
    session.game.grid = ColorGrid.from_rows([[A, B], [A, A]])
    assert session.click(0, 1).valid_move is False
    assert session.score == 0
    assert session.state == GameState.PLAYING


def test_stall_poll_detects_stuck_board(session, clock):
    session.start()
    session.game.grid = ColorGrid.from_rows([[A, B], [B, A]])
    clock.advance(0.4)
    assert session.update() == GameState.PLAYING
    clock.advance(0.2)
    assert session.update() == GameState.LOST
    remaining = session.time_left
    clock.advance(5)
    assert session.time_left == remaining


def test_grid_size_locked_while_playing(session):
    session.start()
    assert session.set_grid_size(9) is False
    assert session.game.grid_size == 6
    session.reset()
    assert session.state == GameState.IDLE
    assert session.set_grid_size(9) is True
    assert session.game.grid_size == 9
    session.start()
    assert session.game.grid_size == 9


@pytest.mark.parametrize("size", [4, 13])
def test_grid_size_out_of_range(session, size):
    with pytest.raises(ValueError):
        session.set_grid_size(size)


def test_custom_scoring_rules(clock):
    session = GameSession(SessionConfig(random_seed=1), rules=ScoringRules(points_per_cell=3), clock=clock)
    session.start()
    session.game.grid = ColorGrid.from_rows([[A, A], [B, A]])
    session.click(0, 0)
    assert session.score == 9


def test_restart_after_loss(session, clock):
    session.start()
    clock.advance(31)
    session.update()
    assert session.state == GameState.LOST
    session.start()
    assert session.state == GameState.PLAYING
    assert session.score == 0
    assert session.seconds_left == 30


def test_click_after_time_runs_out_is_rejected(session, clock):
    session.start()
    session.game.grid = ColorGrid.from_rows([[A, A], [_, _]])
    clock.advance(45)
    assert session.click(0, 0).valid_move is False
    assert session.state == GameState.LOST
    assert session.score == 0
    assert session.game.grid.count_filled() == 2
