"""
Click results for the Minesweeper engine.

Every click returns exactly one of the classes below. Callers are expected
to handle all of them; ``message`` gives the notification text a front-end
can show as-is.
"""
from dataclasses import dataclass
from typing import Optional, Union


MINE_HIT = "mine hit"
FLAGGED_MINE_HIT = "flagged mine hit"

_GAME_OVER_MESSAGES = {
    MINE_HIT: "Game over! You hit a mine.",
    FLAGGED_MINE_HIT: "Game over! You hit a flagged mine.",
}


@dataclass(frozen=True)
class NoEffect:
    """The click changed nothing worth reporting."""

    @property
    def message(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class NumberRevealed:
    """A single numbered cell was uncovered."""

    number: int

    @property
    def message(self) -> Optional[str]:
        return f"{self.number} mines nearby"


@dataclass(frozen=True)
class GameOver:
    """A mine went off. ``reason`` is ``MINE_HIT`` or ``FLAGGED_MINE_HIT``."""

    reason: str

    @property
    def message(self) -> Optional[str]:
        return _GAME_OVER_MESSAGES.get(self.reason, f"Game over! {self.reason}")


@dataclass(frozen=True)
class Victory:
    """The win condition was reached by this click."""

    @property
    def message(self) -> Optional[str]:
        return "You won!"


@dataclass(frozen=True)
class CellsCleared:
    """An empty area was flood-filled; ``count`` includes the clicked cell."""

    count: int

    @property
    def message(self) -> Optional[str]:
        return f"{self.count} cells cleared"


ClickResult = Union[NoEffect, NumberRevealed, GameOver, Victory, CellsCleared]
