from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .generator import DEFAULT_MAX_ATTEMPTS, GridGenerator
from .grid import Color, ColorGrid, Coordinate, EMPTY


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    grid_size: int = 6
    random_seed: Optional[int] = None
    max_generation_attempts: int = DEFAULT_MAX_ATTEMPTS
    palette: Tuple[int, ...] = field(default_factory=lambda: tuple(Color))


@dataclass(frozen=True)
class ClickResult:
    valid_move: bool
    removed_count: int


INVALID_MOVE = ClickResult(valid_move=False, removed_count=0)


class RoofrunGame:
    """Puzzle grid engine: one mutable grid, one click at a time.

    Timers, scoring and the idle/playing/won/lost state machine live with the
    caller (see ``GameSession``); the engine only answers ``click`` and the
    pure win/lose queries.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.generator = GridGenerator(
            palette=self.config.palette,
            rng=np.random.default_rng(self.config.random_seed),
            max_attempts=self.config.max_generation_attempts,
        )
        self.grid: ColorGrid = self.generator.generate(self.config.grid_size)
        self.moves_made = 0

    @property
    def grid_size(self) -> int:
        return self.grid.size

    def reset(self, seed: Optional[int] = None, grid_size: Optional[int] = None) -> None:
        """Replace the grid with a freshly generated one."""
        if seed is not None:
            self.generator.rng = np.random.default_rng(seed)
        size = self.config.grid_size if grid_size is None else int(grid_size)
        self.grid = self.generator.generate(size)
        self.moves_made = 0

    def click(self, row: int, col: int) -> ClickResult:
        """Remove the same-color group under (row, col) and settle the grid.

        Raises ``BoundsError`` for coordinates outside the grid. Clicking an
        empty cell or an isolated cell is a no-op that reports an invalid move.
        """
        color = self.grid.color_at(row, col)
        if color == EMPTY:
            return INVALID_MOVE
        group = self.grid.same_color_component(row, col)
        if len(group) < 2:
            return INVALID_MOVE
        removed = self.grid.remove(group)
        self.grid.apply_gravity()
        self.moves_made += 1
        logger.debug("Removed %d cells of color %d at (%d, %d)", removed, color, row, col)
        return ClickResult(valid_move=True, removed_count=removed)

    def has_valid_moves(self) -> bool:
        return self.grid.has_adjacent_pair()

    def is_won(self) -> bool:
        return self.grid.is_cleared()

    def is_lost(self) -> bool:
        return not self.grid.is_cleared() and not self.grid.has_adjacent_pair()

    def valid_moves(self) -> List[Coordinate]:
        """One representative cell per removable group, in row-major order."""
        moves: List[Coordinate] = []
        for group in self.grid.components():
            if len(group) >= 2:
                moves.append(min(group))
        moves.sort()
        return moves

    def action_mask(self) -> np.ndarray:
        mask = np.zeros((self.grid_size, self.grid_size), dtype=np.bool_)
        for group in self.grid.components():
            if len(group) < 2:
                continue
            for row, col in group:
                mask[row, col] = True
        return mask

    def get_state(self) -> np.ndarray:
        return self.grid.snapshot()
