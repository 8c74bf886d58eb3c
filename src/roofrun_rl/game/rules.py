from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_cell: int = 10

    def score_for_removal(self, removed_count: int) -> int:
        if removed_count <= 0:
            return 0
        return removed_count * self.points_per_cell
