from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Sequence, Set, Tuple

import numpy as np


Coordinate = Tuple[int, int]  # (row, col), row 0 is the top

EMPTY = 0

NEIGHBOR_OFFSETS: Tuple[Coordinate, ...] = ((-1, 0), (0, 1), (1, 0), (0, -1))


class Color(IntEnum):
    RED = 1
    GREEN = 2
    BLUE = 3


COLOR_HEX = {
    Color.RED: "#C22022",
    Color.GREEN: "#7CA24A",
    Color.BLUE: "#4882A3",
}


class BoundsError(IndexError):
    """Raised when a (row, col) coordinate falls outside the grid."""


class ColorGrid:
    """Square grid of colored cells.

    The grid uses 0 (``EMPTY``) for cleared cells and positive integers for
    palette colors. Indexing is ``grid[row, col]`` with row 0 at the top, so
    gravity pulls cells toward the highest row index and collapses emptied
    columns toward column 0.
    """

    def __init__(self, size: int) -> None:
        self.size = int(size)
        if self.size < 1:
            raise ValueError(f"grid size must be positive, got {size}")
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "ColorGrid":
        size = len(rows)
        if size == 0 or any(len(row) != size for row in rows):
            raise ValueError("rows must describe a non-empty square grid")
        values = np.array(rows)
        allowed = [EMPTY] + [int(c) for c in Color]
        if not np.all(np.isin(values, allowed)):
            raise ValueError("cell values must be EMPTY or a palette color")
        result = cls(size)
        result.grid[:, :] = values
        return result

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def check_bounds(self, row: int, col: int) -> None:
        if not self.is_inside(row, col):
            raise BoundsError(f"cell ({row}, {col}) is outside a {self.size}x{self.size} grid")

    def color_at(self, row: int, col: int) -> int:
        self.check_bounds(row, col)
        return int(self.grid[row, col])

    def is_empty_cell(self, row: int, col: int) -> bool:
        return self.color_at(row, col) == EMPTY

    def count_filled(self) -> int:
        return int(np.count_nonzero(self.grid))

    def is_cleared(self) -> bool:
        return not np.any(self.grid)

    # Connectivity

    def same_color_component(self, row: int, col: int) -> Set[Coordinate]:
        """Return every cell 4-connected to (row, col) through its color.

        Uses an explicit stack so large grids never hit the recursion limit.
        An empty origin yields an empty set.
        """
        color = self.color_at(row, col)
        if color == EMPTY:
            return set()
        visited: Set[Coordinate] = {(row, col)}
        stack: List[Coordinate] = [(row, col)]
        while stack:
            r, c = stack.pop()
            for dr, dc in NEIGHBOR_OFFSETS:
                nr, nc = r + dr, c + dc
                if not self.is_inside(nr, nc) or (nr, nc) in visited:
                    continue
                if self.grid[nr, nc] != color:
                    continue
                visited.add((nr, nc))
                stack.append((nr, nc))
        return visited

    def has_adjacent_pair(self) -> bool:
        """True if any two 4-adjacent non-empty cells share a color."""
        g = self.grid
        horizontal = (g[:, :-1] == g[:, 1:]) & (g[:, :-1] != EMPTY)
        if np.any(horizontal):
            return True
        vertical = (g[:-1, :] == g[1:, :]) & (g[:-1, :] != EMPTY)
        return bool(np.any(vertical))

    def components(self) -> List[Set[Coordinate]]:
        """Partition the non-empty cells into same-color components."""
        seen: Set[Coordinate] = set()
        result: List[Set[Coordinate]] = []
        for row, col in zip(*np.nonzero(self.grid)):
            cell = (int(row), int(col))
            if cell in seen:
                continue
            group = self.same_color_component(*cell)
            seen.update(group)
            result.append(group)
        return result

    # Mutation

    def remove(self, cells: Iterable[Coordinate]) -> int:
        count = 0
        for row, col in cells:
            self.check_bounds(row, col)
            self.grid[row, col] = EMPTY
            count += 1
        return count

    def apply_gravity(self) -> None:
        self._fall()
        self._collapse_columns()

    def _fall(self) -> None:
        # Stable compaction toward the bottom of every column
        for col in range(self.size):
            column = self.grid[:, col]
            remaining = column[column != EMPTY]
            settled = np.zeros(self.size, dtype=np.int8)
            if remaining.size:
                settled[self.size - remaining.size :] = remaining
            self.grid[:, col] = settled

    def _collapse_columns(self) -> None:
        non_empty = np.flatnonzero(np.any(self.grid != EMPTY, axis=0))
        if non_empty.size == self.size:
            return
        collapsed = np.zeros_like(self.grid)
        collapsed[:, : non_empty.size] = self.grid[:, non_empty]
        self.grid = collapsed

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def snapshot(self) -> np.ndarray:
        view = self.grid.copy()
        view.setflags(write=False)
        return view

    def copy(self) -> "ColorGrid":
        new_grid = ColorGrid(self.size)
        new_grid.grid = self.grid.copy()
        return new_grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorGrid):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.grid, other.grid)

    def __str__(self) -> str:
        rows = []
        for row in self.grid:
            rows.append(" ".join(str(int(v)) if v != EMPTY else "." for v in row))
        return "\n".join(rows)
