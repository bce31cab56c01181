from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .collision import Position, check_collision
from .shapes import PieceType


@dataclass
class ActivePiece:
    kind: PieceType
    x: int
    y: int
    rotation: int = 0  # 0..3

    @property
    def position(self) -> Position:
        return self.x, self.y


def spawn_piece(rng: random.Random, spawn_x: int, spawn_y: int = 0) -> ActivePiece:
    # Uniform per spawn, repeats allowed
    kind = rng.choice(list(PieceType))
    return ActivePiece(kind=kind, x=spawn_x, y=spawn_y, rotation=0)


def try_spawn(board: np.ndarray, rng: random.Random, spawn_x: int, spawn_y: int = 0) -> Optional[ActivePiece]:
    """Spawn the next piece, or return None when its start placement is blocked."""
    piece = spawn_piece(rng, spawn_x, spawn_y)
    if check_collision(board, piece.kind, piece.position, piece.rotation):
        return None
    return piece
