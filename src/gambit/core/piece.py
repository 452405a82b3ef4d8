"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, PieceType
from gambit.core.errors import MalformedNotationError

_KIND_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_CHAR_KINDS: dict[str, PieceType] = {v: k for k, v in _KIND_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable piece: kind plus color, nothing else."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        char = _KIND_CHARS[self.piece_type]
        return char.upper() if self.color == Color.WHITE else char

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        ptype = _CHAR_KINDS.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise MalformedNotationError(char, "invalid piece character")
        color = Color.WHITE if char.isupper() else Color.BLACK
        return cls(color, ptype)


def kind_char(piece_type: PieceType) -> str:
    """Lowercase letter for *piece_type* (UCI promotion suffix alphabet)."""
    return _KIND_CHARS[piece_type]


def kind_from_char(char: str) -> PieceType | None:
    """Inverse of :func:`kind_char`; case-insensitive, ``None`` if unknown."""
    return _CHAR_KINDS.get(char.lower())
