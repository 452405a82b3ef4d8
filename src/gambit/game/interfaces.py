"""Abstract interfaces for the game layer.

The controller depends on these ABCs, not on concrete players.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from gambit.core.enums import Color

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position


class GamePhase(IntEnum):
    """Who the game is waiting for."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    THINKING = auto()  # engine is computing
    GAME_OVER = auto()


class IPlayer(ABC):
    """A game participant (human or engine)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, position: Position) -> None:
        """Begin choosing a move for *position*.

        Humans answer through the controller; engines start a search.
        """

    @abstractmethod
    def cancel(self) -> None:
        """Abort a running move computation."""


class IGameController(ABC):
    """The game orchestrator as seen by players and the UI."""

    @abstractmethod
    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def resign(self, color: Color) -> None:
        """Player of *color* resigns."""

    @abstractmethod
    def undo_move(self) -> bool:
        """Take back the last move. Returns True on success."""
