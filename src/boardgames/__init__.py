"""
Board games module.

Provides the Minesweeper engine (cells, board snapshots, click results,
Gymnasium wrapper) and the Tic-Tac-Toe model.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, DEFAULT_CONFIG, generate_board
from .results import (
    ClickResult,
    NoEffect,
    NumberRevealed,
    GameOver,
    Victory,
    CellsCleared,
    MINE_HIT,
    FLAGGED_MINE_HIT,
)
from .engine import MinesweeperEngine, GameState
from .environment import MinesweeperEnv
from .tictactoe import TicTacToeGame, Player

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "DEFAULT_CONFIG",
    "generate_board",
    "ClickResult",
    "NoEffect",
    "NumberRevealed",
    "GameOver",
    "Victory",
    "CellsCleared",
    "MINE_HIT",
    "FLAGGED_MINE_HIT",
    "MinesweeperEngine",
    "GameState",
    "MinesweeperEnv",
    "TicTacToeGame",
    "Player",
]
