"""SAN-like algebraic notation for history display."""

from __future__ import annotations

import re

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.errors import MalformedNotationError
from gambit.core.legality import all_legal_moves, legal_moves
from gambit.core.move import Move
from gambit.core.position import Position
from gambit.core.rules import game_status, is_in_check
from gambit.core.types import FILES, file_of, parse_square, rank_of, square_name

_SAN_PIECE: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceType] = {v: k for k, v in _SAN_PIECE.items()}

_SAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?(?P<file>[a-h])?(?P<rank>[1-8])?(?P<capture>x)?"
    r"(?P<to>[a-h][1-8])(?:=?(?P<promo>[NBRQ]))?$"
)


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    board = position.board
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")

    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        san = ""
        is_capture = board[move.to_sq] is not None or move.flag == MoveFlag.EN_PASSANT

        if piece.piece_type == PieceType.PAWN:
            if is_capture:
                san += FILES[file_of(move.from_sq)]
        else:
            san += _SAN_PIECE[piece.piece_type]
            san += _disambiguation(position, move, piece.piece_type)

        if is_capture:
            san += "x"
        san += square_name(move.to_sq)

        if move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]

    after = position.apply(move)
    if is_in_check(after):
        san += "#" if game_status(after).is_over else "+"
    return san


def _disambiguation(position: Position, move: Move, kind: PieceType) -> str:
    rivals = [
        m.from_sq
        for m in all_legal_moves(position)
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and position.board[m.from_sq].piece_type == kind  # type: ignore[union-attr]
    ]
    if not rivals:
        return ""
    if all(file_of(sq) != file_of(move.from_sq) for sq in rivals):
        return FILES[file_of(move.from_sq)]
    if all(rank_of(sq) != rank_of(move.from_sq) for sq in rivals):
        return str(rank_of(move.from_sq) + 1)
    return square_name(move.from_sq)


def parse_san(position: Position, san: str) -> Move:
    """Parse SAN text into the matching legal :class:`Move` of *position*.

    Raises:
        MalformedNotationError: *san* does not follow the grammar, or it
            names no legal move / more than one legal move.
    """
    clean = san.strip().rstrip("+#!?")

    if clean in ("O-O", "0-0", "O-O-O", "0-0-0"):
        if clean.count("-") == 2:
            flag = MoveFlag.CASTLE_QUEENSIDE
        else:
            flag = MoveFlag.CASTLE_KINGSIDE
        for m in all_legal_moves(position):
            if m.flag == flag:
                return m
        raise MalformedNotationError(san, "no legal move matches")

    match = _SAN_RE.match(clean)
    if match is None:
        raise MalformedNotationError(san, "invalid SAN move")

    piece_type = _SAN_PIECE_REV.get(match["piece"] or "", PieceType.PAWN)
    to_sq = parse_square(match["to"])
    from_file = FILES.index(match["file"]) if match["file"] else None
    from_rank = int(match["rank"]) - 1 if match["rank"] else None
    promotion = _SAN_PIECE_REV[match["promo"]] if match["promo"] else None

    candidates: list[Move] = []
    for sq in position.board.all_pieces(position.side_to_move):
        p = position.board[sq]
        if p is None or p.piece_type != piece_type:
            continue
        if from_file is not None and file_of(sq) != from_file:
            continue
        if from_rank is not None and rank_of(sq) != from_rank:
            continue
        for m in legal_moves(position, sq):
            if m.to_sq != to_sq or m.is_castle:
                continue
            if m.promotion is None:
                if promotion is not None:
                    continue
            elif m.promotion != (promotion or PieceType.QUEEN):
                continue
            candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise MalformedNotationError(san, "no legal move matches")
    raise MalformedNotationError(san, "ambiguous move")
