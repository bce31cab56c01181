from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

import numpy as np

from .board import create_empty, lock_and_clear
from .collision import check_collision, piece_cells
from .rules import ScoringRules
from .shapes import BOX, ROTATIONS, color_for
from .spawner import ActivePiece, try_spawn


logger = logging.getLogger(__name__)


class GameState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


class Command(IntEnum):
    START = 0
    RESTART = 1
    MOVE_LEFT = 2
    MOVE_RIGHT = 3
    SOFT_DROP = 4
    ROTATE = 5
    TOGGLE_PAUSE = 6
    TICK = 7


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    spawn_x: Optional[int] = None
    spawn_y: int = 0
    tick_interval_ms: int = 1000
    random_seed: Optional[int] = None

    def spawn_column(self) -> int:
        if self.spawn_x is not None:
            return self.spawn_x
        return (self.width - BOX) // 2


class GameSession:
    """Single-player game: board, active piece, score and lifecycle.

    All mutation goes through the command methods below (or ``dispatch``).
    Illegal moves are rejected by returning False and leave the state as is.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.board = create_empty(self.config.width, self.config.height)
        self.active: Optional[ActivePiece] = None
        self.score = 0
        self.lines_cleared_total = 0
        self.state = GameState.NOT_STARTED
        self.generation = 0

    @property
    def is_running(self) -> bool:
        return self.state is GameState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state is GameState.PAUSED

    @property
    def is_over(self) -> bool:
        return self.state is GameState.OVER

    # Lifecycle

    def start(self) -> bool:
        if self.state not in (GameState.NOT_STARTED, GameState.OVER):
            return False
        self._new_game()
        return True

    def restart(self) -> bool:
        self._new_game()
        return True

    def _new_game(self) -> None:
        self.generation += 1
        self.board = create_empty(self.config.width, self.config.height)
        self.score = 0
        self.lines_cleared_total = 0
        self.active = None
        self.state = GameState.RUNNING
        logger.info("Starting game %d", self.generation)
        self._spawn_next()

    def toggle_pause(self) -> bool:
        if self.state is GameState.RUNNING:
            self.state = GameState.PAUSED
            return True
        if self.state is GameState.PAUSED:
            self.state = GameState.RUNNING
            return True
        return False

    # Piece commands

    def move_left(self) -> bool:
        return self._shift(-1, 0)

    def move_right(self) -> bool:
        return self._shift(1, 0)

    def rotate(self) -> bool:
        if not self.is_running or self.active is None:
            return False
        piece = self.active
        rotation = (piece.rotation + 1) % ROTATIONS
        if check_collision(self.board, piece.kind, piece.position, rotation):
            return False
        piece.rotation = rotation
        return True

    def soft_drop(self) -> bool:
        if not self.is_running or self.active is None:
            return False
        if self._shift(0, 1):
            return True
        self._lock_piece()
        return True

    def tick(self) -> bool:
        return self.soft_drop()

    def dispatch(self, command: Command) -> bool:
        """Apply one command, honouring the input gating for the current state."""
        command = Command(command)
        if command is Command.RESTART:
            return self.restart()
        if self.state in (GameState.NOT_STARTED, GameState.OVER):
            return command is Command.START and self.start()
        if self.state is GameState.PAUSED:
            return command is Command.TOGGLE_PAUSE and self.toggle_pause()
        if command is Command.MOVE_LEFT:
            return self.move_left()
        if command is Command.MOVE_RIGHT:
            return self.move_right()
        if command is Command.SOFT_DROP:
            return self.soft_drop()
        if command is Command.TICK:
            return self.tick()
        if command is Command.ROTATE:
            return self.rotate()
        if command is Command.TOGGLE_PAUSE:
            return self.toggle_pause()
        return False

    # Internals

    def _shift(self, dx: int, dy: int) -> bool:
        if not self.is_running or self.active is None:
            return False
        piece = self.active
        new_pos = (piece.x + dx, piece.y + dy)
        if check_collision(self.board, piece.kind, new_pos, piece.rotation):
            return False
        piece.x, piece.y = new_pos
        return True

    def _lock_piece(self) -> None:
        assert self.active is not None
        piece = self.active
        self.board, lines = lock_and_clear(self.board, piece.kind, piece.position, piece.rotation)
        self.lines_cleared_total += lines
        self.score += self.rules.score_for_lines(lines)
        logger.debug("Locked %s at %s, cleared %d line(s)", piece.kind.name, piece.position, lines)
        self._spawn_next()

    def _spawn_next(self) -> None:
        self.active = try_spawn(self.board, self.rng, self.config.spawn_column(), self.config.spawn_y)
        if self.active is None:
            self.state = GameState.OVER
            logger.info("Game over: spawn blocked, final score %d", self.score)

    def display_grid(self) -> np.ndarray:
        # Overlay current piece on a copy of the board
        grid = self.board.copy()
        if self.active is not None:
            height, width = grid.shape
            piece = self.active
            value = color_for(piece.kind)
            for x, y in piece_cells(piece.kind, piece.position, piece.rotation):
                if 0 <= y < height and 0 <= x < width:
                    grid[y, x] = value
        return grid
