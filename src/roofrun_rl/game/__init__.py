"""Game module for Roofrun RL.

Exports the puzzle grid engine and supporting classes:
- ColorGrid: Grid representation, connectivity and gravity
- GridGenerator: Random grids guaranteed to hold a playable move
- RoofrunGame: Click handling and win/lose queries
- ScoringRules: Caller-side score multiplier
- GameSession: Timed idle/playing/won/lost round around the engine
"""

from .grid import BoundsError, Color, ColorGrid, COLOR_HEX, EMPTY
from .generator import GridGenerator
from .rules import ScoringRules
from .core import ClickResult, GameConfig, RoofrunGame
from .session import GameSession, GameState, SessionConfig

__all__ = [
    "BoundsError",
    "Color",
    "ColorGrid",
    "COLOR_HEX",
    "EMPTY",
    "GridGenerator",
    "ScoringRules",
    "ClickResult",
    "GameConfig",
    "RoofrunGame",
    "GameSession",
    "GameState",
    "SessionConfig",
]
