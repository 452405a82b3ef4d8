"""Turn advisory engine output into a move that is known to be legal."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from gambit.core.enums import PieceType
from gambit.core.errors import MalformedNotationError
from gambit.core.legality import all_legal_moves
from gambit.core.notation import move_from_uci, position_to_fen
from gambit.engine.search import (
    CancelCheck,
    Difficulty,
    EngineError,
    IEngine,
    SearchLimits,
    select_candidate,
)

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position

_LOGGER = logging.getLogger(__name__)


def random_legal_move(
    position: Position, rng: random.Random | None = None
) -> Move | None:
    """Uniformly random legal move (promotions to a queen only), or ``None``."""
    moves = [
        m
        for m in all_legal_moves(position)
        if m.promotion is None or m.promotion == PieceType.QUEEN
    ]
    if not moves:
        return None
    return (rng or random.Random()).choice(moves)


def choose_engine_move(
    position: Position,
    engine: IEngine | None,
    difficulty: Difficulty = Difficulty.MEDIUM,
    rng: random.Random | None = None,
    is_cancelled: CancelCheck | None = None,
) -> Move | None:
    """Ask *engine* for a move in *position* and re-validate it.

    Falls back to :func:`random_legal_move` when there is no engine, the
    engine fails, the difficulty roll asks for a random move, or the
    suggestion is not legal here. ``None`` only when no legal move exists.
    """
    rng = rng or random.Random()
    legal = all_legal_moves(position)
    if not legal:
        return None
    if engine is None:
        return random_legal_move(position, rng)

    try:
        result = engine.search(
            position_to_fen(position),
            SearchLimits.for_difficulty(difficulty),
            is_cancelled,
        )
    except EngineError as exc:
        _LOGGER.warning("Engine search failed, playing a random move: %s", exc)
        return random_legal_move(position, rng)

    if result.best_move_uci is None and not result.candidates:
        _LOGGER.warning("Engine returned no move, playing a random move")
        return random_legal_move(position, rng)

    uci_text = select_candidate(result, difficulty, rng)
    if uci_text is None:
        _LOGGER.info("Difficulty %s rolled a random move", difficulty)
        return random_legal_move(position, rng)

    try:
        move = move_from_uci(uci_text, position)
    except MalformedNotationError:
        _LOGGER.warning("Engine returned unparseable move %r", uci_text)
        return random_legal_move(position, rng)

    if move not in legal:
        _LOGGER.warning("Engine suggested illegal move %s; ignoring it", uci_text)
        return random_legal_move(position, rng)
    return move
