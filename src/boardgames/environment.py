"""
Gymnasium environment wrapper for the Minesweeper engine.

Provides a standard RL interface over the engine's click API so that
scripted players can drive it the same way a front-end does.
"""
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import CellState
from .engine import MinesweeperEngine
from .results import CellsCleared, ClickResult, GameOver, NumberRevealed, Victory


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = covered cell
        - -2 = flagged cell
        - 0-8 = uncovered cell with neighbor mine count
        - 9 = uncovered mine

    Actions:
        Discrete action space of size 2 * size * size.
        Action i < size * size reveals cell (i // size, i % size);
        action i >= size * size toggles the flag on cell i - size * size.

    Rewards:
        - +10 for winning the game
        - -10 for hitting a mine
        - +1 for revealing a numbered cell
        - +count for clearing an empty area
        - -0.1 for a click with no effect
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 5x5 with 3 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.engine = MinesweeperEngine(config)
        self.config = self.engine.config
        self.render_mode = render_mode

        size = self.config.size
        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(size, size),
            dtype=np.int8,
        )
        # Reveal actions first, flag actions after
        self.action_space = spaces.Discrete(2 * size * size)

        self._steps = 0
        self._last_result: Optional[ClickResult] = None

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.engine.seed(seed)
        self.engine.reset_game()
        self._steps = 0
        self._last_result = None

        return self.engine.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index, offset by size * size for flag actions.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, row, col = self._decode_action(action)
        self._steps += 1

        if self.engine.is_flag_mode != flag:
            self.engine.toggle_flag_mode()
        result = self.engine.on_cell_clicked(row, col)
        self._last_result = result

        observation = self.engine.board.get_observation()
        terminated = self.engine.is_game_over
        truncated = False

        return observation, self._calculate_reward(result), terminated, truncated, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (flag, row, col)."""
        cells = self.config.total_cells
        if not 0 <= action < 2 * cells:
            raise IndexError(f"Action {action} is outside the action space")
        flag = action >= cells
        index = action - cells if flag else action
        return flag, index // self.config.size, index % self.config.size

    @staticmethod
    def _calculate_reward(result: ClickResult) -> float:
        """Map a click result to a reward."""
        if isinstance(result, Victory):
            return 10.0
        if isinstance(result, GameOver):
            return -10.0
        if isinstance(result, NumberRevealed):
            return 1.0
        if isinstance(result, CellsCleared):
            return float(result.count)
        return -0.1

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.engine.board
        return {
            "steps": self._steps,
            "uncovered": board.count(CellState.UNCOVERED),
            "flagged": board.count(CellState.FLAGGED),
            "game_state": self.engine.game_state.name,
            "result": self._last_result,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.engine.board.render()
        if self.render_mode == "human":
            print(self.engine.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the board.

        Returns:
            int8 array where 1 = useful action. Covered cells can be
            revealed or flagged, flagged cells can be unflagged.
        """
        cells = self.config.total_cells
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        if self.engine.is_game_over:
            return mask
        for row, col, cell in self.engine.board:
            index = row * self.config.size + col
            if cell.is_covered:
                mask[index] = 1
            if not cell.is_uncovered:
                mask[cells + index] = 1
        return mask
