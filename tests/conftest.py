"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, Tuple

# Add src and the project root (for main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from boardgames import (
    Board,
    BoardConfig,
    Cell,
    CellState,
    MinesweeperEngine,
    TicTacToeGame,
)


def make_engine(mines: Iterable[Tuple[int, int]], size: int = 5) -> MinesweeperEngine:
    """Create an engine playing on a board with mines at fixed positions."""
    mines = list(mines)
    engine = MinesweeperEngine(BoardConfig(size, len(mines)), seed=0)
    engine.load_board(Board.from_mines(size, mines))
    return engine


def expected_neighbor_mines(board: Board, row: int, col: int) -> int:
    """Count mine-bearing neighbors by scanning the 3x3 block around a cell."""
    count = 0
    for n_row in range(row - 1, row + 2):
        for n_col in range(col - 1, col + 2):
            if (n_row, n_col) == (row, col):
                continue
            if 0 <= n_row < board.size and 0 <= n_col < board.size:
                count += board.cells[n_row][n_col].has_mine
    return count


def uncover_all_safe(board: Board, except_at: Iterable[Tuple[int, int]] = ()) -> Board:
    """Uncover every safe cell of a board, optionally skipping some."""
    skipped = set(except_at)
    for row, col, cell in board:
        if not cell.has_mine and (row, col) not in skipped:
            board = board.with_cell_state(row, col, CellState.UNCOVERED)
    return board


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def default_engine() -> MinesweeperEngine:
    """Create a default 5x5 engine with 3 mines and a fixed seed."""
    return MinesweeperEngine(seed=42)


@pytest.fixture
def empty_engine() -> MinesweeperEngine:
    """Create an engine with no mines for flood-fill testing."""
    return MinesweeperEngine(BoardConfig(5, 0))


@pytest.fixture
def center_mine_engine() -> MinesweeperEngine:
    """Create a 5x5 engine with a single mine at (2, 2)."""
    return make_engine([(2, 2)])


@pytest.fixture
def wall_engine() -> MinesweeperEngine:
    """Create a 5x5 engine with a column of mines down column 2."""
    return make_engine([(row, 2) for row in range(5)])


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def small_board() -> Board:
    """Create a 3x3 board with mines at (0, 0) and (0, 2)."""
    return Board.from_mines(3, [(0, 0), (0, 2)])


@pytest.fixture
def covered_board() -> Board:
    """Create a 5x5 board without mines."""
    return Board.empty(5)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def covered_cell() -> Cell:
    """Create a covered cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(has_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(5, 3)


# ============================================================================
# Tic-Tac-Toe Fixtures
# ============================================================================

@pytest.fixture
def tictactoe() -> TicTacToeGame:
    """Create a fresh Tic-Tac-Toe game."""
    return TicTacToeGame()
