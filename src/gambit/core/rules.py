"""Game state machine transitions: move application and terminal detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.attacks import is_king_in_check
from gambit.core.enums import Color, GameResult, StatusKind
from gambit.core.errors import IllegalMoveError
from gambit.core.legality import has_any_legal_move, legal_moves

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position


@dataclass(frozen=True, slots=True)
class GameStatus:
    """``InProgress(side_to_move)``, ``Checkmate(winner)`` or ``Stalemate``."""

    kind: StatusKind
    side_to_move: Color
    winner: Color | None = None

    @property
    def is_over(self) -> bool:
        return self.kind != StatusKind.IN_PROGRESS

    @property
    def result(self) -> GameResult:
        if self.kind == StatusKind.CHECKMATE:
            return (
                GameResult.WHITE_WINS
                if self.winner == Color.WHITE
                else GameResult.BLACK_WINS
            )
        if self.kind == StatusKind.STALEMATE:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS

    @classmethod
    def in_progress(cls, side_to_move: Color) -> GameStatus:
        return cls(StatusKind.IN_PROGRESS, side_to_move)


def is_in_check(position: Position) -> bool:
    """Is the side to move in check?"""
    return is_king_in_check(position, position.side_to_move)


def game_status(position: Position) -> GameStatus:
    """Classify *position* from the perspective of its side to move."""
    side = position.side_to_move
    if has_any_legal_move(position, side):
        return GameStatus.in_progress(side)
    if is_king_in_check(position, side):
        return GameStatus(StatusKind.CHECKMATE, side, winner=side.opposite)
    return GameStatus(StatusKind.STALEMATE, side)


def is_checkmate(position: Position) -> bool:
    return game_status(position).kind == StatusKind.CHECKMATE


def is_stalemate(position: Position) -> bool:
    return game_status(position).kind == StatusKind.STALEMATE


def apply_move(position: Position, move: Move) -> tuple[Position, GameStatus]:
    """Validate *move* against *position*, apply it, classify the result.

    Raises:
        IllegalMoveError: *move* is not among the legal moves of the side to
            move. *position* is untouched (positions are immutable).
    """
    piece = position.board[move.from_sq]
    if piece is None:
        raise IllegalMoveError(move, "no piece on the origin square")
    if piece.color != position.side_to_move:
        raise IllegalMoveError(move, f"it is {position.side_to_move!s}'s turn")
    if move not in legal_moves(position, move.from_sq):
        raise IllegalMoveError(move)

    new_position = position.apply(move)
    return new_position, game_status(new_position)
