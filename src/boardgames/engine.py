"""
Minesweeper game-state engine.

Owns the board, the mine layout and the game-phase flags, and turns
clicks into ``ClickResult`` values. The engine never mutates a published
board: each click works on a private copy of the grid and publishes a new
``Board`` in one assignment, after which subscribers are notified.
"""
import logging
import random
from enum import Enum, auto
from typing import Callable, List, Optional

from .board import (
    DEFAULT_CONFIG,
    Board,
    BoardConfig,
    Grid,
    generate_board,
    neighbor_positions,
)
from .results import (
    FLAGGED_MINE_HIT,
    MINE_HIT,
    CellsCleared,
    ClickResult,
    GameOver,
    NoEffect,
    NumberRevealed,
    Victory,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


Listener = Callable[["MinesweeperEngine"], None]


# ============================================================================
# Engine
# ============================================================================

class MinesweeperEngine:
    """
    Minesweeper session manager.

    A session starts on construction and on every ``initialize`` /
    ``reset_game`` / ``load_board`` call. Flag mode is an input setting
    and survives new sessions.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Create the engine and start the first session.

        Args:
            config: Grid size and mine count (default: 5x5 with 3 mines).
            seed: Random seed for reproducible mine layouts.
        """
        self.config = config or DEFAULT_CONFIG
        self._rng = random.Random(seed)
        self._listeners: List[Listener] = []
        self._board = Board.empty(self.config.size)
        self._mine_count = self.config.num_mines
        self._is_game_over = False
        self._is_victory = False
        self._is_flag_mode = False
        self.initialize()

    # ========================================================================
    # Sessions
    # ========================================================================

    def seed(self, seed: Optional[int]) -> None:
        """Reseed the layout generator for the next session."""
        self._rng.seed(seed)

    def initialize(self) -> None:
        """Start a new session with a freshly generated mine layout."""
        self._start_session(generate_board(self.config, self._rng))

    def load_board(self, board: Board) -> None:
        """
        Start a new session on a prearranged board.

        Args:
            board: Board to play on; its cells are used as they are.

        Raises:
            ValueError: If the board size differs from the configured size,
                or if the board leaves no safe cell.
        """
        if board.size != self.config.size:
            raise ValueError(
                f"Board is {board.size}x{board.size}, "
                f"engine is configured for {self.config.size}x{self.config.size}"
            )
        max_mines = board.size * board.size - 1
        if board.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")
        self._start_session(board)

    def reset_game(self) -> None:
        """Discard the current session and start a new one."""
        logger.info("Resetting the game")
        self.initialize()

    def _start_session(self, board: Board) -> None:
        self._board = board
        self._mine_count = board.num_mines
        self._is_game_over = False
        self._is_victory = False
        logger.debug("Board after initialization:\n%s", board.render(reveal_mines=True))
        self._notify()

    # ========================================================================
    # Input
    # ========================================================================

    def toggle_flag_mode(self) -> None:
        """Switch between flagging and revealing. No board effect."""
        self._is_flag_mode = not self._is_flag_mode
        logger.debug("Flag mode %s", "on" if self._is_flag_mode else "off")
        self._notify()

    def on_cell_clicked(self, row: int, col: int) -> ClickResult:
        """
        Apply a click at (row, col) according to the current mode.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The outcome of the click. ``NoEffect`` once the game is over.

        Raises:
            IndexError: If the position is outside the board while the
                game is still running.
        """
        if self._is_game_over:
            return NoEffect()
        if not self._board.is_valid_position(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) is outside the "
                f"{self._board.size}x{self._board.size} board"
            )

        logger.debug(
            "Cell clicked at (%d, %d) in %s mode",
            row, col, "flag" if self._is_flag_mode else "reveal",
        )
        if self._is_flag_mode:
            return self._handle_flag(row, col)
        return self._handle_reveal(row, col)

    def _handle_flag(self, row: int, col: int) -> ClickResult:
        """Toggle the flag on a covered or flagged cell."""
        cell = self._board.get_cell(row, col)
        if cell.is_uncovered:
            return NoEffect()

        board = self._board.with_cell(row, col, cell.toggled_flag())
        if cell.is_flagged:
            logger.debug("Flag removed from (%d, %d)", row, col)
            self._publish(board)
            return NoEffect()

        logger.debug("Flag placed at (%d, %d)", row, col)
        if board.is_cleared():
            self._publish(board, game_over=True, victory=True)
            return Victory()
        self._publish(board)
        return NoEffect()

    def _handle_reveal(self, row: int, col: int) -> ClickResult:
        """Uncover a cell, flood-filling from empty ones."""
        cell = self._board.get_cell(row, col)

        if cell.is_flagged:
            # A flagged mine still detonates when clicked in reveal mode.
            if cell.has_mine:
                self._publish(self._board, game_over=True)
                return GameOver(FLAGGED_MINE_HIT)
            return NoEffect()
        if cell.is_uncovered:
            return NoEffect()

        grid = self._board.to_grid()
        grid[row][col] = cell.uncovered()

        if cell.has_mine:
            self._publish(Board.from_grid(grid), game_over=True)
            return GameOver(MINE_HIT)

        if cell.neighbor_mines > 0:
            # No win check here; the game is won by a flood fill or a flag.
            self._publish(Board.from_grid(grid))
            return NumberRevealed(cell.neighbor_mines)

        cleared = 1 + self._flood_fill(grid, row, col)
        logger.debug("Flood fill from (%d, %d) uncovered %d cells", row, col, cleared)
        board = Board.from_grid(grid)
        if board.is_cleared():
            self._publish(board, game_over=True, victory=True)
            return Victory()
        self._publish(board)
        return CellsCleared(cleared)

    @staticmethod
    def _flood_fill(grid: Grid, row: int, col: int) -> int:
        """
        Uncover everything reachable from an empty cell.

        Covered neighbors are uncovered and counted; empty ones are pushed
        so their neighbors get visited too. Flagged and uncovered cells are
        left alone, which makes flags a barrier.

        Args:
            grid: Working grid, modified in place.
            row: Row of the already uncovered empty cell.
            col: Column of the already uncovered empty cell.

        Returns:
            Number of cells uncovered, not counting the start cell.
        """
        size = len(grid)
        uncovered = 0
        stack = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            for n_row, n_col in neighbor_positions(current_row, current_col, size):
                neighbor = grid[n_row][n_col]
                if not neighbor.is_covered or neighbor.has_mine:
                    continue
                grid[n_row][n_col] = neighbor.uncovered()
                uncovered += 1
                if neighbor.neighbor_mines == 0:
                    stack.append((n_row, n_col))
        return uncovered

    def _publish(
        self, board: Board, game_over: bool = False, victory: bool = False
    ) -> None:
        """Swap in a finished snapshot and the matching phase flags."""
        self._board = board
        if game_over:
            self._is_game_over = True
            self._is_victory = victory
            if victory:
                logger.info("Victory achieved!")
            else:
                logger.info("Game over, mine hit")
        self._notify()

    # ========================================================================
    # Observers
    # ========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback invoked with the engine after every change.

        Returns:
            A function that removes the callback again.
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a previously registered callback, if present."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        """Current board snapshot."""
        return self._board

    @property
    def is_game_over(self) -> bool:
        return self._is_game_over

    @property
    def is_victory(self) -> bool:
        return self._is_victory

    @property
    def is_flag_mode(self) -> bool:
        return self._is_flag_mode

    @property
    def mine_count(self) -> int:
        """Number of mines in the current session."""
        return self._mine_count

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        if not self._is_game_over:
            return GameState.PLAYING
        return GameState.WON if self._is_victory else GameState.LOST
