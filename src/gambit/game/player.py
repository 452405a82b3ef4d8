"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from gambit.core.enums import Color
from gambit.game.interfaces import IPlayer

if TYPE_CHECKING:
    from gambit.core.position import Position


class HumanPlayer(IPlayer):
    """Moves arrive through ``GameController.submit_move``."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color!s})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position) -> None:
        pass

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """An engine participant that hands work to a callback.

    The callback usually forwards the position to an ``EngineWorker`` living
    in a worker thread; the answer comes back through
    ``GameController.submit_engine_move``.

    Args:
        color: Side the engine plays.
        name: Display name.
        on_request_move: ``(Position) -> None``, called when it is the
            engine's turn.
        on_cancel: ``() -> None``, called to abort a running search.
    """

    __slots__ = ("_color", "_name", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Stockfish",
        on_request_move: Callable[[Position], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, position: Position) -> None:
        if self._on_request_move is not None:
            self._on_request_move(position)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
