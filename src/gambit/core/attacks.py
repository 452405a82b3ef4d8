"""Attack detection: the single source of truth for "is this square attacked".

Check detection, castling safety, notation suffixes and terminal detection all
go through :func:`is_square_attacked`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, PieceType
from gambit.core.types import Square, make_square

if TYPE_CHECKING:
    from gambit.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


def _build_pawn_sources() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    # [color][target] -> squares from which a pawn of color attacks target.
    per_color: list[tuple[tuple[Square, ...], ...]] = []
    for color in (Color.WHITE, Color.BLACK):
        behind = -1 if color == Color.WHITE else 1
        sources: list[tuple[Square, ...]] = []
        for sq in range(64):
            file_idx = sq & 7
            rank_idx = (sq >> 3) + behind
            found: list[Square] = []
            if 0 <= rank_idx < 8:
                for df in (-1, 1):
                    if 0 <= file_idx + df < 8:
                        found.append(make_square(file_idx + df, rank_idx))
            sources.append(tuple(found))
        per_color.append(tuple(sources))
    return tuple(per_color)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)
_PAWN_SOURCES = _build_pawn_sources()

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


# -- Public API -------------------------------------------------------------


def is_square_attacked(position: Position, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Pawns attack only their two forward diagonals; a straight push is never
    an attack.
    """
    board = position.board

    for src in _PAWN_SOURCES[int(by_color)][sq]:
        piece = board[src]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.PAWN
        ):
            return True

    if board.pieces_bitboard(by_color, PieceType.KNIGHT):
        for src in KNIGHT_TARGETS[sq]:
            piece = board[src]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.KNIGHT
            ):
                return True

    for src in KING_TARGETS[sq]:
        piece = board[src]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KING
        ):
            return True

    if _walk_rays(position, BISHOP_RAYS[sq], by_color, _DIAGONAL_SLIDERS):
        return True
    return _walk_rays(position, ROOK_RAYS[sq], by_color, _ORTHOGONAL_SLIDERS)


def is_king_in_check(position: Position, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    return is_square_attacked(position, position.king_square(color), color.opposite)


# -- Internal ---------------------------------------------------------------


def _walk_rays(
    position: Position,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    kinds: tuple[PieceType, ...],
) -> bool:
    board = position.board
    if not any(board.pieces_bitboard(by_color, kind) for kind in kinds):
        return False
    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in kinds:
                return True
            break
    return False

