"""Core rules engine: pure chess logic with no I/O and no shared state.

Quick start::

    from gambit.core import Position, apply_move, legal_moves, parse_square

    pos = Position.initial()
    for move in legal_moves(pos, parse_square("g1")):
        print(move)
    pos, status = apply_move(pos, legal_moves(pos, parse_square("e2"))[-1])
"""

from gambit.core.attacks import is_king_in_check, is_square_attacked
from gambit.core.board import Board
from gambit.core.enums import (
    CastlingRights,
    Color,
    GameResult,
    MoveFlag,
    PieceType,
    StatusKind,
)
from gambit.core.errors import (
    ChessError,
    IllegalMoveError,
    InvariantViolation,
    MalformedNotationError,
)
from gambit.core.legality import all_legal_moves, has_any_legal_move, legal_moves
from gambit.core.move import Move
from gambit.core.move_generator import pseudo_legal_moves, pseudo_legal_moves_for
from gambit.core.notation import (
    STARTING_FEN,
    move_from_uci,
    move_to_san,
    move_to_uci,
    parse_san,
    position_from_fen,
    position_to_fen,
)
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import GameStatus, apply_move, game_status
from gambit.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    row_col_of,
    square_from_row_col,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    "StatusKind",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "InvariantViolation",
    "MalformedNotationError",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "row_col_of",
    "square_from_row_col",
    "square_name",
    # Domain objects
    "Board",
    "GameStatus",
    "Move",
    "Piece",
    "Position",
    # Operations
    "all_legal_moves",
    "apply_move",
    "game_status",
    "has_any_legal_move",
    "is_king_in_check",
    "is_square_attacked",
    "legal_moves",
    "pseudo_legal_moves",
    "pseudo_legal_moves_for",
    # Notation
    "STARTING_FEN",
    "move_from_uci",
    "move_to_san",
    "move_to_uci",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
]
