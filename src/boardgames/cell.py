"""
Cell module for the Minesweeper engine.

Represents individual grid positions with their visibility
(covered/flagged/uncovered) and content (mine/number). Cells are
immutable values; a state change produces a new cell.
"""
from dataclasses import dataclass, replace
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Visibility of a cell."""

    COVERED = auto()
    FLAGGED = auto()
    UNCOVERED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass(frozen=True)
class Cell:
    """
    Represents a single position in the Minesweeper grid.

    Attributes:
        has_mine: Whether this cell contains a mine.
        state: Current visibility (covered, flagged, or uncovered).
        neighbor_mines: Count of mines in neighboring cells (0-8).
            Left at 0 for mine cells.
    """

    has_mine: bool = False
    state: CellState = CellState.COVERED
    neighbor_mines: int = 0

    def uncovered(self) -> "Cell":
        """Return a copy of this cell in the uncovered state."""
        return replace(self, state=CellState.UNCOVERED)

    def toggled_flag(self) -> "Cell":
        """
        Return a copy of this cell with its flag toggled.

        Uncovered cells are terminal and come back unchanged.
        """
        if self.state == CellState.COVERED:
            return replace(self, state=CellState.FLAGGED)
        if self.state == CellState.FLAGGED:
            return replace(self, state=CellState.COVERED)
        return self

    @property
    def is_covered(self) -> bool:
        """Check if cell is covered."""
        return self.state == CellState.COVERED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_uncovered(self) -> bool:
        """Check if cell is uncovered."""
        return self.state == CellState.UNCOVERED

    @property
    def is_cleared(self) -> bool:
        """
        Check if this cell is in its winning state.

        Mines must stay covered or flagged, safe cells must be uncovered.
        """
        if self.has_mine:
            return self.state != CellState.UNCOVERED
        return self.state == CellState.UNCOVERED

    def to_observation(self) -> int:
        """
        Convert cell to its view value.

        Returns:
            -1: Covered cell
            -2: Flagged cell
            0-8: Uncovered cell with neighbor mine count
            9: Uncovered mine
        """
        if self.state == CellState.COVERED:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.has_mine:
            return 9
        return self.neighbor_mines

    def to_symbol(self, reveal_mines: bool = False) -> str:
        """Single-character text form of the cell."""
        if self.state == CellState.FLAGGED:
            return "F"
        if self.state == CellState.COVERED:
            return "X" if reveal_mines and self.has_mine else "."
        if self.has_mine:
            return "*"
        if self.neighbor_mines == 0:
            return " "
        return str(self.neighbor_mines)
