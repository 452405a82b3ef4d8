"""Legality filter: pseudo-legal moves that keep the mover's king safe."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.attacks import is_king_in_check, is_square_attacked
from gambit.core.enums import Color, MoveFlag
from gambit.core.move_generator import pseudo_legal_moves
from gambit.core.types import Square, make_square, rank_of

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position


# flag -> files the king stands on, crosses, and lands on
_CASTLE_KING_PATH: dict[MoveFlag, tuple[int, ...]] = {
    MoveFlag.CASTLE_KINGSIDE: (4, 5, 6),
    MoveFlag.CASTLE_QUEENSIDE: (4, 3, 2),
}


def legal_moves(position: Position, sq: Square) -> list[Move]:
    """Legal moves of the piece on *sq*.

    Empty when *sq* is empty or holds a piece of the side not to move.
    """
    piece = position.board[sq]
    if piece is None or piece.color != position.side_to_move:
        return []
    return [
        move
        for move in pseudo_legal_moves(position, sq)
        if _keeps_king_safe(position, move, piece.color)
    ]


def all_legal_moves(position: Position) -> list[Move]:
    """Legal moves for every piece of the side to move."""
    moves: list[Move] = []
    for sq in position.board.all_pieces(position.side_to_move):
        moves.extend(legal_moves(position, sq))
    return moves


def has_any_legal_move(position: Position, color: Color) -> bool:
    """Whether *color* has at least one legal move in *position*.

    Only meaningful for the side to move; any other color has none.
    """
    if color != position.side_to_move:
        return False
    for sq in position.board.all_pieces(color):
        for move in pseudo_legal_moves(position, sq):
            if _keeps_king_safe(position, move, color):
                return True
    return False


def is_legal(position: Position, move: Move) -> bool:
    """Whether *move* is in the legal set of its origin square."""
    return move in legal_moves(position, move.from_sq)


def _keeps_king_safe(position: Position, move: Move, mover: Color) -> bool:
    path = _CASTLE_KING_PATH.get(move.flag)
    if path is not None:
        rank = rank_of(move.from_sq)
        opponent = mover.opposite
        for file_idx in path:
            if is_square_attacked(position, make_square(file_idx, rank), opponent):
                return False
    return not is_king_in_check(position.apply(move), mover)
