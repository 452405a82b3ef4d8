"""Pseudo-legal move generation, one origin square at a time.

Moves produced here obey each piece's movement pattern and board occupancy
but ignore whether the mover's own king is left in check. Castling is
offered whenever the right is held and the squares between king and rook are
empty; the check-related castling conditions belong to
:mod:`gambit.core.legality`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
)
from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from gambit.core.position import Position


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

# color -> (kingside right, queenside right)
_CASTLE_RIGHTS: dict[Color, tuple[CastlingRights, CastlingRights]] = {
    Color.WHITE: (CastlingRights.WHITE_KINGSIDE, CastlingRights.WHITE_QUEENSIDE),
    Color.BLACK: (CastlingRights.BLACK_KINGSIDE, CastlingRights.BLACK_QUEENSIDE),
}

_SLIDER_RAYS = {
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.ROOK: ROOK_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}


def home_rank(color: Color) -> int:
    """Back rank index for *color* (0 for white, 7 for black)."""
    return 0 if color == Color.WHITE else 7


def pseudo_legal_moves(position: Position, sq: Square) -> list[Move]:
    """Every pattern-legal move of the piece on *sq*; empty if *sq* is empty."""
    piece = position.board[sq]
    if piece is None:
        return []

    moves: list[Move] = []
    kind = piece.piece_type
    if kind == PieceType.PAWN:
        _gen_pawn(position, sq, piece.color, moves)
    elif kind == PieceType.KNIGHT:
        _gen_steps(position, sq, piece.color, KNIGHT_TARGETS[sq], moves)
    elif kind == PieceType.KING:
        _gen_steps(position, sq, piece.color, KING_TARGETS[sq], moves)
        _gen_castling(position, sq, piece.color, moves)
    else:
        _gen_sliding(position, sq, piece.color, _SLIDER_RAYS[kind][sq], moves)
    return moves


def pseudo_legal_moves_for(position: Position, color: Color) -> list[Move]:
    """Pseudo-legal moves of every piece of *color*."""
    moves: list[Move] = []
    for sq in position.board.all_pieces(color):
        moves.extend(pseudo_legal_moves(position, sq))
    return moves


# -- Piece-specific generators (private) -----------------------------------


def _gen_pawn(position: Position, sq: Square, color: Color, moves: list[Move]) -> None:
    board = position.board
    step = 8 if color == Color.WHITE else -8
    start_rank = 1 if color == Color.WHITE else 6
    last_rank = 7 if color == Color.WHITE else 0
    file_idx = file_of(sq)

    one_step = sq + step
    if not 0 <= one_step < 64:
        return

    if board.is_empty(one_step):
        _add_pawn_move(sq, one_step, last_rank, moves)
        if rank_of(sq) == start_rank:
            two_step = one_step + step
            if board.is_empty(two_step):
                moves.append(Move(sq, two_step))

    for df in (-1, 1):
        if not 0 <= file_idx + df < 8:
            continue
        cap_sq = one_step + df
        target = board[cap_sq]
        if target is not None:
            if target.color != color:
                _add_pawn_move(sq, cap_sq, last_rank, moves)
        elif cap_sq == position.en_passant and color == position.side_to_move:
            moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT))


def _add_pawn_move(
    from_sq: Square, to_sq: Square, last_rank: int, moves: list[Move]
) -> None:
    if rank_of(to_sq) == last_rank:
        for pt in PROMOTION_TYPES:
            moves.append(Move.promote(from_sq, to_sq, pt))
    else:
        moves.append(Move(from_sq, to_sq))


def _gen_steps(
    position: Position,
    sq: Square,
    color: Color,
    targets: tuple[Square, ...],
    moves: list[Move],
) -> None:
    board = position.board
    for to_sq in targets:
        target = board[to_sq]
        if target is None or target.color != color:
            moves.append(Move(sq, to_sq))


def _gen_sliding(
    position: Position,
    sq: Square,
    color: Color,
    rays: tuple[tuple[Square, ...], ...],
    moves: list[Move],
) -> None:
    board = position.board
    for ray in rays:
        for to_sq in ray:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
                continue
            if target.color != color:
                moves.append(Move(sq, to_sq))
            break


def _gen_castling(
    position: Position, king_sq: Square, color: Color, moves: list[Move]
) -> None:
    rank = home_rank(color)
    if king_sq != make_square(4, rank):
        return

    board = position.board
    rook = Piece(color, PieceType.ROOK)
    kingside, queenside = _CASTLE_RIGHTS[color]

    if (
        position.castling & kingside
        and board[make_square(7, rank)] == rook
        and board.is_empty(make_square(5, rank))
        and board.is_empty(make_square(6, rank))
    ):
        moves.append(Move(king_sq, make_square(6, rank), MoveFlag.CASTLE_KINGSIDE))

    if (
        position.castling & queenside
        and board[make_square(0, rank)] == rook
        and board.is_empty(make_square(1, rank))
        and board.is_empty(make_square(2, rank))
        and board.is_empty(make_square(3, rank))
    ):
        moves.append(Move(king_sq, make_square(2, rank), MoveFlag.CASTLE_QUEENSIDE))
