"""
Board module for the Minesweeper engine.

Implements the board configuration, the immutable board snapshot and
mine layout generation. A board is never mutated in place: every change
builds a new ``Board`` so that anyone holding a reference always sees a
complete grid.
"""
import logging
import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Grid = List[List[Cell]]


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        size: Number of rows and columns of the square grid.
        num_mines: Total mines to place.
    """

    size: int = 5
    num_mines: int = 3

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.size < 1:
            raise ValueError("Board size must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.size * self.size - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.size * self.size


DEFAULT_CONFIG = BoardConfig()


# ============================================================================
# Neighbor Utilities
# ============================================================================

def is_valid_position(row: int, col: int, size: int) -> bool:
    """Check if position is within a ``size`` x ``size`` grid."""
    return 0 <= row < size and 0 <= col < size


def neighbor_positions(row: int, col: int, size: int) -> List[Position]:
    """
    Get the in-bounds 8-connected neighbors of a position.

    Args:
        row: Row index of center cell.
        col: Column index of center cell.
        size: Grid dimension.

    Returns:
        List of (row, col) tuples, clipped at the grid edges.
    """
    neighbors = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if is_valid_position(new_row, new_col, size):
                neighbors.append((new_row, new_col))
    return neighbors


def _fill_neighbor_counts(grid: Grid) -> None:
    """Set ``neighbor_mines`` on every safe cell of a working grid."""
    size = len(grid)
    for row in range(size):
        for col in range(size):
            cell = grid[row][col]
            if cell.has_mine:
                continue
            count = sum(
                1 for n_row, n_col in neighbor_positions(row, col, size)
                if grid[n_row][n_col].has_mine
            )
            grid[row][col] = Cell(
                has_mine=False, state=cell.state, neighbor_mines=count
            )


# ============================================================================
# Board Snapshot
# ============================================================================

@dataclass(frozen=True)
class Board:
    """
    Immutable snapshot of a square Minesweeper grid.

    Cells are addressed by (row, col) with 0-indexed bounds ``[0, size)``.
    Out-of-range coordinates are a caller bug and raise ``IndexError``.
    """

    cells: Tuple[Tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        size = len(self.cells)
        if size == 0 or any(len(row) != size for row in self.cells):
            raise ValueError("Board must be a non-empty square grid")

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def empty(cls, size: int) -> "Board":
        """Create a board of covered, mine-free cells."""
        return cls.from_grid([[Cell() for _ in range(size)] for _ in range(size)])

    @classmethod
    def from_grid(cls, grid: Grid) -> "Board":
        """Freeze a working grid into a new snapshot."""
        return cls(tuple(tuple(row) for row in grid))

    @classmethod
    def from_mines(cls, size: int, mines: Iterable[Position]) -> "Board":
        """
        Create a covered board with mines at the given positions.

        Neighbor counts are computed for every safe cell.

        Args:
            size: Grid dimension.
            mines: (row, col) positions holding a mine.
        """
        grid = [[Cell() for _ in range(size)] for _ in range(size)]
        for row, col in mines:
            if not is_valid_position(row, col, size):
                raise IndexError(f"Mine position ({row}, {col}) is off the board")
            grid[row][col] = Cell(has_mine=True)
        _fill_neighbor_counts(grid)
        return cls.from_grid(grid)

    def to_grid(self) -> Grid:
        """Return a mutable working copy of the grid."""
        return [list(row) for row in self.cells]

    def with_cell(self, row: int, col: int, cell: Cell) -> "Board":
        """Return a new board with one cell replaced."""
        self._check_position(row, col)
        grid = self.to_grid()
        grid[row][col] = cell
        return Board.from_grid(grid)

    def with_cell_state(self, row: int, col: int, state: CellState) -> "Board":
        """Return a new board with one cell's visibility changed."""
        cell = self.get_cell(row, col)
        return self.with_cell(
            row, col, Cell(cell.has_mine, state, cell.neighbor_mines)
        )

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def num_mines(self) -> int:
        return len(self.mine_positions())

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return is_valid_position(row, col, self.size)

    def _check_position(self, row: int, col: int) -> None:
        if not self.is_valid_position(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) is outside the {self.size}x{self.size} board"
            )

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position."""
        self._check_position(row, col)
        return self.cells[row][col]

    def neighbors(self, row: int, col: int) -> List[Position]:
        """Get valid neighboring cell positions."""
        self._check_position(row, col)
        return neighbor_positions(row, col, self.size)

    def __iter__(self) -> Iterator[Tuple[int, int, Cell]]:
        for row, cells in enumerate(self.cells):
            for col, cell in enumerate(cells):
                yield row, col, cell

    def mine_positions(self) -> List[Position]:
        """Positions of all mine-bearing cells, row-major."""
        return [(row, col) for row, col, cell in self if cell.has_mine]

    def count(self, state: CellState) -> int:
        """Number of cells currently in ``state``."""
        return sum(1 for _, _, cell in self if cell.state == state)

    def is_cleared(self) -> bool:
        """
        Check the win condition.

        Every mine is covered or flagged and every safe cell is uncovered.
        """
        return all(cell.is_cleared for _, _, cell in self)

    # ========================================================================
    # Views
    # ========================================================================

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = covered
                -2 = flagged
                0-8 = uncovered with neighbor count
                9 = uncovered mine
        """
        obs = np.zeros((self.size, self.size), dtype=np.int8)
        for row, col, cell in self:
            obs[row, col] = cell.to_observation()
        return obs

    def render(self, reveal_mines: bool = False) -> str:
        """
        Render board as text, one line per row.

        Args:
            reveal_mines: Show covered mines as ``X`` (for debugging).
        """
        return "\n".join(
            " ".join(cell.to_symbol(reveal_mines) for cell in row)
            for row in self.cells
        )


# ============================================================================
# Layout Generation
# ============================================================================

def generate_board(
    config: BoardConfig, rng: Optional[random.Random] = None
) -> Board:
    """
    Create a fresh covered board with randomly placed mines.

    Mines are placed by rejection sampling: a uniformly random position
    is drawn and kept if it does not already hold a mine, until
    ``config.num_mines`` are placed. Neighbor counts are computed once
    afterwards.

    Args:
        config: Grid size and mine count.
        rng: Random source (an unseeded generator if omitted).

    Returns:
        New covered board.
    """
    rng = rng or random.Random()
    size = config.size
    grid = [[Cell() for _ in range(size)] for _ in range(size)]

    placed = 0
    while placed < config.num_mines:
        row = rng.randrange(size)
        col = rng.randrange(size)
        if not grid[row][col].has_mine:
            grid[row][col] = Cell(has_mine=True)
            placed += 1
            logger.debug("Mine placed at (%d, %d)", row, col)

    _fill_neighbor_counts(grid)
    return Board.from_grid(grid)
