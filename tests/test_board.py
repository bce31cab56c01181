import random

import numpy as np

from falling_blocks.game.board import (
    clear_completed_rows,
    count_holes,
    create_empty,
    is_row_complete,
    lock_and_clear,
    lock_piece,
    max_height,
)
from falling_blocks.game.collision import piece_cells
from falling_blocks.game.shapes import PieceType


def _random_board(rng: random.Random, width: int = 10, height: int = 20) -> np.ndarray:
    board = create_empty(width, height)
    for y in range(height):
        roll = rng.random()
        if roll < 0.3:
            board[y] = rng.randint(1, 7)
        elif roll < 0.7:
            for x in range(width):
                if rng.random() < 0.6:
                    board[y, x] = rng.randint(1, 7)
    return board


def test_create_empty():
    board = create_empty(10, 20)
    assert board.shape == (20, 10)
    assert not board.any()


def test_is_row_complete():
    board = create_empty(4, 3)
    board[2] = [1, 2, 3, 4]
    board[1] = [1, 0, 3, 4]
    assert is_row_complete(board, 2)
    assert not is_row_complete(board, 1)
    assert not is_row_complete(board, 0)


def test_clear_without_full_rows_returns_copy():
    board = create_empty(4, 4)
    board[3, 0] = 5
    cleared, lines = clear_completed_rows(board)
    assert lines == 0
    assert np.array_equal(cleared, board)
    assert cleared is not board


def test_clear_completed_rows_preserves_height_and_order():
    rng = random.Random(1234)
    for _ in range(200):
        board = _random_board(rng)
        original = board.copy()
        full = [y for y in range(board.shape[0]) if is_row_complete(board, y)]
        survivors = [board[y].copy() for y in range(board.shape[0]) if y not in full]

        cleared, lines = clear_completed_rows(board)

        assert np.array_equal(board, original)
        assert cleared.shape == board.shape
        assert lines == len(full)
        assert not cleared[:lines].any()
        for expected, row in zip(survivors, cleared[lines:]):
            assert np.array_equal(expected, row)


def test_clear_every_row():
    board = np.full((5, 3), 4, dtype=np.int8)
    cleared, lines = clear_completed_rows(board)
    assert lines == 5
    assert cleared.shape == (5, 3)
    assert not cleared.any()


def test_lock_piece_covers_only_piece_cells():
    rng = random.Random(99)
    for _ in range(300):
        board = _random_board(rng)
        kind = rng.choice(list(PieceType))
        rotation = rng.randrange(4)
        position = (rng.randint(-3, 10), rng.randint(-3, 20))
        original = board.copy()

        locked = lock_piece(board, kind, position, rotation)

        assert np.array_equal(board, original)
        covered = {
            (x, y)
            for x, y in piece_cells(kind, position, rotation)
            if 0 <= x < board.shape[1] and 0 <= y < board.shape[0]
        }
        for y in range(board.shape[0]):
            for x in range(board.shape[1]):
                if (x, y) in covered:
                    assert locked[y, x] == int(kind)
                else:
                    assert locked[y, x] == original[y, x]


def test_lock_and_clear_completes_bottom_row():
    board = create_empty(10, 20)
    board[19] = 6
    board[19, 3:5] = 0
    new_board, lines = lock_and_clear(board, PieceType.O, (3, 18), 0)
    assert lines == 1
    assert new_board.shape == (20, 10)
    assert list(new_board[19]) == [0, 0, 0, 2, 2, 0, 0, 0, 0, 0]
    assert not new_board[:19].any()


def test_board_features():
    board = create_empty(4, 5)
    assert max_height(board) == 0
    assert count_holes(board) == 0
    board[2, 1] = 1
    board[4, 2] = 1
    assert max_height(board) == 3
    assert count_holes(board) == 2
