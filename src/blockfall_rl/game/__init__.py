"""Game module for Blockfall RL.

Exports the rules engine and supporting classes:
- ShapeKind / SHAPES: tetromino variants and their precomputed rotations
- GameGrid: Fixed-size well with collision tests and row clearing
- PieceGenerator: Uniform random stream of upcoming pieces
- ScoringRules: Score, level and gravity-speed policy
- FallingBlockGame: Spawn / fall / lock / clear state machine
"""

from .shapes import KIND_COUNT, Point, ShapeKind, SHAPES, shape_for
from .grid import GameGrid, PlacementError
from .randomizer import PieceGenerator
from .rules import ScoringRules
from .core import ActivePiece, Command, FallingBlockGame, GameConfig, TickResult, new_game

__all__ = [
    "KIND_COUNT",
    "Point",
    "ShapeKind",
    "SHAPES",
    "shape_for",
    "GameGrid",
    "PlacementError",
    "PieceGenerator",
    "ScoringRules",
    "ActivePiece",
    "Command",
    "FallingBlockGame",
    "GameConfig",
    "TickResult",
    "new_game",
]
