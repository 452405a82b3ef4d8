"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.piece import kind_char
from gambit.core.types import Square, square_name

_PROMOTABLE: frozenset[PieceType] = frozenset(
    (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)
)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable, self-describing move.

    ``flag`` is the special tag; ``promotion`` names the new piece kind and is
    present exactly when ``flag`` is :attr:`MoveFlag.PROMOTION`.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    def __post_init__(self) -> None:
        if not (0 <= self.from_sq < 64 and 0 <= self.to_sq < 64):
            raise ValueError(f"Square out of range: {self.from_sq}, {self.to_sq}")
        if self.from_sq == self.to_sq:
            raise ValueError("A move must change squares")
        if (self.flag == MoveFlag.PROMOTION) != (self.promotion is not None):
            raise ValueError("Promotion kind must be given exactly for promotions")
        if self.promotion is not None and self.promotion not in _PROMOTABLE:
            raise ValueError(f"Cannot promote to {self.promotion.name}")

    @classmethod
    def promote(cls, from_sq: Square, to_sq: Square, kind: PieceType) -> Move:
        return cls(from_sq, to_sq, MoveFlag.PROMOTION, kind)

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += kind_char(self.promotion)
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
