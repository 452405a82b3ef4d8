"""Notation package: FEN board encoding, SAN-like algebraic and UCI moves."""

from gambit.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from gambit.core.notation.san import move_to_san, parse_san
from gambit.core.notation.uci import move_from_uci, move_to_uci

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "move_to_san",
    "parse_san",
    "move_from_uci",
    "move_to_uci",
]
