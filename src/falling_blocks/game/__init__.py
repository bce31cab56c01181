"""Game engine for Falling Blocks.

Exports the core engine and supporting pieces:
- board: grid creation, line clearing, locking
- check_collision: placement legality
- PieceType / CATALOG: the seven tetrominoes and their rotation states
- try_spawn: random piece spawning with blocked-spawn detection
- GameSession: lifecycle and command handling
- GravityTimer: periodic tick source
"""

from .board import (
    clear_completed_rows,
    create_empty,
    is_row_complete,
    lock_and_clear,
    lock_piece,
)
from .collision import check_collision, piece_cells
from .rules import ScoringRules
from .session import Command, GameConfig, GameSession, GameState
from .shapes import CATALOG, PieceDefinition, PieceType, shape_for
from .spawner import ActivePiece, spawn_piece, try_spawn
from .ticker import GravityTimer

__all__ = [
    "clear_completed_rows",
    "create_empty",
    "is_row_complete",
    "lock_and_clear",
    "lock_piece",
    "check_collision",
    "piece_cells",
    "ScoringRules",
    "Command",
    "GameConfig",
    "GameSession",
    "GameState",
    "CATALOG",
    "PieceDefinition",
    "PieceType",
    "shape_for",
    "ActivePiece",
    "spawn_piece",
    "try_spawn",
    "GravityTimer",
]
