"""FEN parsing and serialization."""

from __future__ import annotations

from gambit.core.attacks import is_king_in_check
from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.errors import MalformedNotationError
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The two clock fields are optional and default to ``0 1``.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise MalformedNotationError(fen, "FEN needs 4-6 fields")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = _parse_placement(placement, fen)

    # Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise MalformedNotationError(fen, "invalid FEN side-to-move field")

    # Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        for ch in castling_part:
            right = rights.pop(ch, None)
            if right is None:
                raise MalformedNotationError(fen, "invalid FEN castling field")
            castling |= right

    # En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise MalformedNotationError(fen, "invalid FEN en-passant square")
        # The pawn that just double-pushed sits one rank past the target.
        pushed_from = ep - 8 if side == Color.WHITE else ep + 8
        if board[ep] is not None or board[pushed_from] != Piece(
            side.opposite, PieceType.PAWN
        ):
            raise MalformedNotationError(
                fen, "FEN en-passant square has no pawn behind it"
            )

    halfmove = _parse_clock(parts, 4, default=0, minimum=0, fen=fen)
    fullmove = _parse_clock(parts, 5, default=1, minimum=1, fen=fen)

    position = Position(board, side, castling, ep, halfmove, fullmove)
    if is_king_in_check(position, side.opposite):
        raise MalformedNotationError(fen, "side not to move is in check")
    return position


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedNotationError(fen, "FEN board must contain 8 ranks")

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise MalformedNotationError(fen, f"invalid FEN digit {ch!r}")
                file += step
            else:
                if file >= 8:
                    raise MalformedNotationError(fen, "invalid FEN rank width")
                board[make_square(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise MalformedNotationError(fen, "invalid FEN rank width")
        if file != 8:
            raise MalformedNotationError(fen, "invalid FEN rank width")

    for color in (Color.WHITE, Color.BLACK):
        if board.count(color, PieceType.KING) != 1:
            raise MalformedNotationError(
                fen, f"FEN must place exactly one {color!s} king"
            )
    return board


def _parse_clock(
    parts: list[str], index: int, *, default: int, minimum: int, fen: str
) -> int:
    if len(parts) <= index:
        return default
    try:
        value = int(parts[index])
    except ValueError:
        raise MalformedNotationError(fen, "invalid FEN clock field") from None
    if value < minimum:
        raise MalformedNotationError(fen, "invalid FEN clock field")
    return value


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str or '-'} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
