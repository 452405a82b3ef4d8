"""Position: immutable per-ply snapshot of board plus auxiliary state."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.errors import InvariantViolation
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, file_of, make_square, rank_of, square_name

_LOGGER = logging.getLogger(__name__)

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}

# flag -> (rook from file, rook to file)
_CASTLE_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


def en_passant_victim_square(move: Move) -> Square:
    """Square of the pawn removed by an en-passant *move* (behind ``to_sq``)."""
    return make_square(file_of(move.to_sq), rank_of(move.from_sq))


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are never changed after construction; :meth:`apply` derives the
    successor. Construction enforces exactly one king per side.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def __post_init__(self) -> None:
        self.validate()

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls()

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        kings = self.board.pieces(color, PieceType.KING)
        if len(kings) != 1:
            _LOGGER.error(
                "Position has %d %s kings:\n%r", len(kings), color, self.board
            )
            raise InvariantViolation(
                f"Expected exactly one {color!s} king, found {len(kings)}"
            )
        return kings[0]

    def validate(self) -> None:
        """Raise :class:`InvariantViolation` unless each side has one king."""
        self.king_square(Color.WHITE)
        self.king_square(Color.BLACK)

    @property
    def white_kingside(self) -> bool:
        return bool(self.castling & CastlingRights.WHITE_KINGSIDE)

    @property
    def white_queenside(self) -> bool:
        return bool(self.castling & CastlingRights.WHITE_QUEENSIDE)

    @property
    def black_kingside(self) -> bool:
        return bool(self.castling & CastlingRights.BLACK_KINGSIDE)

    @property
    def black_queenside(self) -> bool:
        return bool(self.castling & CastlingRights.BLACK_QUEENSIDE)

    # ── Successor ────────────────────────────────────────────────────────

    def apply(self, move: Move) -> Position:
        """Return the position after *move*'s full effect.

        No legality check is made here; see :func:`gambit.core.rules.apply_move`.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {square_name(move.from_sq)}")

        board = self.board.copy()
        captured = board[move.to_sq]

        if move.flag == MoveFlag.EN_PASSANT:
            victim_sq = en_passant_victim_square(move)
            captured = board[victim_sq]
            board[victim_sq] = None

        board[move.from_sq] = None
        placed = piece
        if move.flag == MoveFlag.PROMOTION:
            assert move.promotion is not None
            placed = Piece(piece.color, move.promotion)
        board[move.to_sq] = placed

        # Slide the rook for castling
        rook_files = _CASTLE_ROOK_FILES.get(move.flag)
        if rook_files is not None:
            r = rank_of(move.from_sq)
            rook_from = make_square(rook_files[0], r)
            rook_to = make_square(rook_files[1], r)
            rook = board[rook_from]
            if rook is None or rook.piece_type != PieceType.ROOK:
                raise ValueError(f"No rook on {square_name(rook_from)} to castle with")
            board[rook_from] = None
            board[rook_to] = rook

        # En passant target for the opponent
        next_en_passant: Square | None = None
        if (
            piece.piece_type == PieceType.PAWN
            and abs(rank_of(move.to_sq) - rank_of(move.from_sq)) == 2
        ):
            next_en_passant = make_square(
                file_of(move.from_sq),
                (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2,
            )

        if piece.piece_type == PieceType.PAWN or captured is not None:
            halfmove = 0
        else:
            halfmove = self.halfmove_clock + 1

        fullmove = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove += 1

        return Position(
            board=board,
            side_to_move=self.side_to_move.opposite,
            castling=self._next_castling(move, piece),
            en_passant=next_en_passant,
            halfmove_clock=halfmove,
            fullmove_number=fullmove,
        )

    def _next_castling(self, move: Move, piece: Piece) -> CastlingRights:
        rights = self.castling
        if piece.piece_type == PieceType.KING:
            if piece.color == Color.WHITE:
                rights &= ~CastlingRights.WHITE_BOTH
            else:
                rights &= ~CastlingRights.BLACK_BOTH

        # A rook leaving its corner, or anything landing on it (a capture).
        for sq in (move.from_sq, move.to_sq):
            corner = _ROOK_CORNERS.get(sq)
            if corner is not None:
                rights &= ~corner
        return rights

    def __repr__(self) -> str:
        ep = square_name(self.en_passant) if self.en_passant is not None else "-"
        return (
            f"Position({self.side_to_move!s} to move, castling={self.castling!r}, "
            f"ep={ep})\n{self.board!r}"
        )
