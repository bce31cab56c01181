from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np

from .shapes import shape_for


Coordinate = Tuple[int, int]
Position = Tuple[int, int]


def piece_cells(kind: int, position: Position, rotation: int) -> Iterator[Coordinate]:
    """Yield absolute ``(x, y)`` board coordinates of the occupied cells."""
    shape = shape_for(kind, rotation)
    origin_x, origin_y = position
    for dy, dx in zip(*np.nonzero(shape)):
        yield origin_x + int(dx), origin_y + int(dy)


def check_collision(board: np.ndarray, kind: int, position: Position, rotation: int) -> bool:
    """True if placing ``kind`` at ``position``/``rotation`` would be illegal.

    Cells above the top edge are only checked against the side walls, so a
    freshly spawned piece may hang partly off the board.
    """
    height, width = board.shape
    for x, y in piece_cells(kind, position, rotation):
        if x < 0 or x >= width:
            return True
        if y >= height:
            return True
        if y >= 0 and board[y, x] != 0:
            return True
    return False
