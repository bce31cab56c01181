from __future__ import annotations

from typing import Tuple

import numpy as np

from .collision import Position, piece_cells
from .shapes import color_for


Board = np.ndarray

CELL_DTYPE = np.int8


def create_empty(width: int, height: int) -> Board:
    return np.zeros((int(height), int(width)), dtype=CELL_DTYPE)


def is_row_complete(board: Board, row: int) -> bool:
    return bool(np.all(board[row] != 0))


def clear_completed_rows(board: Board) -> Tuple[Board, int]:
    """Remove full rows and refill from the top.

    Returns a fresh board of the same shape and the number of rows removed.
    Surviving rows keep their top-to-bottom order.
    """
    height, width = board.shape
    full_rows = np.where(np.all(board != 0, axis=1))[0]
    num = int(full_rows.size)
    if num == 0:
        return board.copy(), 0
    kept = np.delete(board, full_rows, axis=0)
    new_rows = np.zeros((num, width), dtype=board.dtype)
    return np.vstack((new_rows, kept)), num


def lock_piece(board: Board, kind: int, position: Position, rotation: int) -> Board:
    """Copy ``board`` and stamp the piece's in-bounds cells with its color tag."""
    height, width = board.shape
    value = color_for(kind)
    locked = board.copy()
    for x, y in piece_cells(kind, position, rotation):
        if 0 <= y < height and 0 <= x < width:
            locked[y, x] = value
    return locked


def lock_and_clear(board: Board, kind: int, position: Position, rotation: int) -> Tuple[Board, int]:
    return clear_completed_rows(lock_piece(board, kind, position, rotation))


def max_height(board: Board) -> int:
    # y=0 is top; find first non-empty from top
    non_empty_rows = np.where(np.any(board != 0, axis=1))[0]
    if non_empty_rows.size == 0:
        return 0
    return board.shape[0] - int(non_empty_rows[0])


def count_holes(board: Board) -> int:
    holes = 0
    for x in range(board.shape[1]):
        seen_block = False
        for cell in board[:, x]:
            if cell != 0:
                seen_block = True
            elif seen_block:
                holes += 1
    return holes
