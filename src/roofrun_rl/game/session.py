from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .core import ClickResult, GameConfig, INVALID_MOVE, RoofrunGame
from .rules import ScoringRules


logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class GameState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass
class SessionConfig:
    grid_size: int = 6
    time_limit: float = 30.0
    stall_check_interval: float = 0.5
    min_grid_size: int = 5
    max_grid_size: int = 12
    random_seed: Optional[int] = None


class GameSession:
    """Timed single-player round built on top of ``RoofrunGame``.

    The session owns the countdown and the periodic "any moves left" check.
    Time is read from an injectable ``clock`` (seconds, monotonic); the front
    end calls ``update()`` as often as it likes, typically once per frame.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        rules: Optional[ScoringRules] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.config = config or SessionConfig()
        self.rules = rules or ScoringRules()
        self.clock = clock
        self._validate_size(self.config.grid_size)
        self.grid_size = self.config.grid_size
        self.game = RoofrunGame(GameConfig(grid_size=self.grid_size, random_seed=self.config.random_seed))
        self.state = GameState.IDLE
        self.score = 0
        self._started_at: Optional[float] = None
        self._ended_at: Optional[float] = None
        self._next_stall_check = 0.0

    def _validate_size(self, size: int) -> None:
        if not self.config.min_grid_size <= size <= self.config.max_grid_size:
            raise ValueError(
                f"grid size must be between {self.config.min_grid_size} and "
                f"{self.config.max_grid_size}, got {size}"
            )

    @property
    def is_over(self) -> bool:
        return self.state in (GameState.WON, GameState.LOST)

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._ended_at if self._ended_at is not None else self.clock()
        return end - self._started_at

    @property
    def time_left(self) -> float:
        return max(0.0, self.config.time_limit - self.elapsed)

    @property
    def seconds_left(self) -> int:
        return int(math.ceil(self.time_left))

    def start(self) -> None:
        self.game.reset(grid_size=self.grid_size)
        self.score = 0
        self.state = GameState.PLAYING
        self._started_at = self.clock()
        self._ended_at = None
        self._next_stall_check = self._started_at + self.config.stall_check_interval
        logger.info("Started %dx%d round", self.grid_size, self.grid_size)

    def reset(self) -> None:
        self.game.reset(grid_size=self.grid_size)
        self.score = 0
        self.state = GameState.IDLE
        self._started_at = None
        self._ended_at = None

    def set_grid_size(self, size: int) -> bool:
        """Select the size for the next grid. Returns False while playing."""
        self._validate_size(size)
        if self.state == GameState.PLAYING:
            return False
        self.grid_size = size
        self.game.reset(grid_size=size)
        return True

    def click(self, row: int, col: int) -> ClickResult:
        # Expire the countdown before accepting a move
        if self.update() != GameState.PLAYING:
            return INVALID_MOVE
        result = self.game.click(row, col)
        if not result.valid_move:
            return result
        self.score += self.rules.score_for_removal(result.removed_count)
        if self.game.is_won():
            self._finish(GameState.WON)
        elif self.game.is_lost():
            self._finish(GameState.LOST)
        return result

    def update(self) -> GameState:
        if self.state != GameState.PLAYING:
            return self.state
        now = self.clock()
        if now - self._started_at >= self.config.time_limit:
            self._finish(GameState.LOST, now=self._started_at + self.config.time_limit)
        elif now >= self._next_stall_check:
            # Catch up without replaying every missed check
            while self._next_stall_check <= now:
                self._next_stall_check += self.config.stall_check_interval
            if not self.game.has_valid_moves():
                self._finish(GameState.LOST, now=now)
        return self.state

    def _finish(self, state: GameState, now: Optional[float] = None) -> None:
        self.state = state
        self._ended_at = self.clock() if now is None else now
        logger.info("Round ended: %s with score %d", state.value, self.score)
