from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from .grid import Color, ColorGrid


logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


class GridGenerator:
    """Draws random grids that contain at least one playable move.

    Every cell is an independent uniform draw from the palette. A draw with
    no adjacent same-color pair is thrown away and redrawn. After
    ``max_attempts`` rejected draws the last one is repaired by copying the
    top-left color onto its right-hand neighbour, so ``generate`` always
    terminates.
    """

    def __init__(
        self,
        palette: Sequence[int] = tuple(Color),
        rng: Optional[np.random.Generator] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if len(palette) == 0:
            raise ValueError("palette must contain at least one color")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.palette = np.array([int(c) for c in palette], dtype=np.int8)
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = int(max_attempts)

    def draw(self, size: int) -> ColorGrid:
        grid = ColorGrid(size)
        grid.grid[:, :] = self.rng.choice(self.palette, size=(size, size))
        return grid

    def generate(self, size: int) -> ColorGrid:
        if size < 2:
            raise ValueError(f"grid size must be at least 2 to hold a move, got {size}")
        for attempt in range(1, self.max_attempts + 1):
            grid = self.draw(size)
            if grid.has_adjacent_pair():
                if attempt > 1:
                    logger.debug("Generated %dx%d grid after %d draws", size, size, attempt)
                return grid
        logger.warning(
            "No playable %dx%d grid after %d draws; repairing the last draw",
            size, size, self.max_attempts,
        )
        grid.grid[0, 1] = grid.grid[0, 0]
        return grid
