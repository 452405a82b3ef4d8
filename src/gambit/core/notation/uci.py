"""UCI coordinate notation (``e2e4``, ``e7e8q``)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.errors import MalformedNotationError
from gambit.core.move import Move
from gambit.core.move_generator import pseudo_legal_moves
from gambit.core.piece import kind_from_char
from gambit.core.types import parse_square

if TYPE_CHECKING:
    from gambit.core.position import Position

UCI_MOVE_RE = re.compile(r"^([a-h][1-8])([a-h][1-8])([nbrq])?$")


def move_to_uci(move: Move) -> str:
    """Four- or five-character coordinate notation for *move*."""
    return move.uci


def move_from_uci(text: str, position: Position | None = None) -> Move:
    """Parse UCI coordinate text into a :class:`Move`.

    Without *position* only the structure is known, so the result is tagged
    ``NORMAL`` or ``PROMOTION``. With *position* the text is matched against
    the pseudo-legal moves of the piece on the origin square, which recovers
    castling and en-passant tags. A pawn reaching the last rank without a
    suffix is read as a queen promotion.

    Raises:
        MalformedNotationError: *text* is not coordinate notation.
    """
    match = UCI_MOVE_RE.match(text.strip())
    if match is None:
        raise MalformedNotationError(text, "invalid UCI move")
    from_sq = parse_square(match.group(1))
    to_sq = parse_square(match.group(2))
    if from_sq == to_sq:
        raise MalformedNotationError(text, "UCI move must change squares")
    promotion: PieceType | None = None
    if match.group(3):
        promotion = kind_from_char(match.group(3))

    if position is not None:
        for candidate in pseudo_legal_moves(position, from_sq):
            if candidate.to_sq != to_sq:
                continue
            if candidate.promotion is None and promotion is None:
                return candidate
            if candidate.promotion == (promotion or PieceType.QUEEN):
                return candidate

    if promotion is not None:
        return Move.promote(from_sq, to_sq, promotion)
    return Move(from_sq, to_sq, MoveFlag.NORMAL)
