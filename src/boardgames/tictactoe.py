"""
Tic-Tac-Toe game model.

A 3x3 two-player state machine: X moves first, players alternate, three
in a row wins and a full board without a line is a draw.
"""
import logging
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

BOARD_SIZE = 3

Line = Tuple[Tuple[int, int], ...]


def _win_lines() -> List[Line]:
    """Rows, columns and both diagonals of the grid."""
    indices = range(BOARD_SIZE)
    lines = [tuple((row, col) for col in indices) for row in indices]
    lines += [tuple((row, col) for row in indices) for col in indices]
    lines.append(tuple((i, i) for i in indices))
    lines.append(tuple((i, BOARD_SIZE - 1 - i) for i in indices))
    return lines


WIN_LINES = _win_lines()


class Player(Enum):
    """Mark placed by each player. Values double as observation codes."""

    X = 1
    O = 2

    @property
    def other(self) -> "Player":
        return Player.O if self is Player.X else Player.X


Marks = Tuple[Tuple[Optional[Player], ...], ...]


def _empty_board() -> Marks:
    return tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE))


class TicTacToeGame:
    """Tic-Tac-Toe state: board, current player, winner and game-over flag."""

    def __init__(self) -> None:
        self.board: Marks = _empty_board()
        self.current_player = Player.X
        self.winner: Optional[Player] = None
        self.is_game_over = False

    def on_cell_clicked(self, row: int, col: int) -> bool:
        """
        Place the current player's mark at (row, col).

        Clicks on occupied cells or after the game ended are ignored.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if a mark was placed.

        Raises:
            IndexError: If the position is outside the 3x3 grid.
        """
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise IndexError(f"Cell ({row}, {col}) is outside the board")
        if self.is_game_over or self.board[row][col] is not None:
            return False

        grid = [list(marks) for marks in self.board]
        grid[row][col] = self.current_player
        self.board = tuple(tuple(marks) for marks in grid)

        if self._has_line(self.current_player):
            self.winner = self.current_player
            self.is_game_over = True
            logger.info("%s wins", self.current_player.name)
        elif self._is_board_full():
            self.is_game_over = True
            logger.info("Draw")
        else:
            self.current_player = self.current_player.other
        return True

    def _has_line(self, player: Player) -> bool:
        return any(
            all(self.board[row][col] is player for row, col in line)
            for line in WIN_LINES
        )

    def _is_board_full(self) -> bool:
        return all(mark is not None for marks in self.board for mark in marks)

    @property
    def is_draw(self) -> bool:
        return self.is_game_over and self.winner is None

    def get_observation(self) -> np.ndarray:
        """Board as int8 array: 0 empty, 1 X, 2 O."""
        obs = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        for row, marks in enumerate(self.board):
            for col, mark in enumerate(marks):
                if mark is not None:
                    obs[row, col] = mark.value
        return obs

    def render(self) -> str:
        return "\n".join(
            " ".join(mark.name if mark else "." for mark in marks)
            for marks in self.board
        )

    def reset_game(self) -> None:
        self.board = _empty_board()
        self.current_player = Player.X
        self.winner = None
        self.is_game_over = False
