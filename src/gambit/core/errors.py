"""Exceptions raised by the rules engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.move import Move


class ChessError(Exception):
    """Base class for every rules-engine error."""


class IllegalMoveError(ChessError, ValueError):
    """A move is not in the legal set of the position it was applied to."""

    def __init__(self, move: Move, reason: str = "not a legal move") -> None:
        self.move = move
        self.reason = reason
        super().__init__(f"Illegal move {move}: {reason}")


class MalformedNotationError(ChessError, ValueError):
    """Text does not match the expected FEN / UCI / SAN grammar."""

    def __init__(self, text: str, reason: str = "malformed notation") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"{reason}: {text!r}")


class InvariantViolation(ChessError, RuntimeError):
    """Internal consistency broken (e.g. a side without exactly one king).

    This is a programming error, not a game condition.
    """
