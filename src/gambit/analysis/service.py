"""Move-trainer analysis: rate candidate moves by centipawn loss."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gambit.analysis.models import MoveEvaluation, MoveQuality, TrainerReport
from gambit.core.enums import Color
from gambit.core.notation import position_to_fen
from gambit.engine.search import (
    CancelCheck,
    EngineError,
    IEngine,
    SearchLimits,
    SearchResult,
)

if TYPE_CHECKING:
    from gambit.config import EngineSettings
    from gambit.core.position import Position
    from gambit.core.types import Square

_LOGGER = logging.getLogger(__name__)

_EXCELLENT_MAX_CP_LOSS = 25
_GOOD_MAX_CP_LOSS = 50
_OKAY_MAX_CP_LOSS = 100
_DUBIOUS_MAX_CP_LOSS = 200


def classify_cp_loss(cp_loss: int) -> MoveQuality:
    """Bucket a non-negative centipawn loss."""
    if cp_loss <= 0:
        return MoveQuality.BEST
    if cp_loss < _EXCELLENT_MAX_CP_LOSS:
        return MoveQuality.EXCELLENT
    if cp_loss < _GOOD_MAX_CP_LOSS:
        return MoveQuality.GOOD
    if cp_loss < _OKAY_MAX_CP_LOSS:
        return MoveQuality.OKAY
    if cp_loss < _DUBIOUS_MAX_CP_LOSS:
        return MoveQuality.DUBIOUS
    return MoveQuality.BAD


def rate_candidates(
    result: SearchResult,
    side_to_move: Color,
    from_square: Square | None = None,
) -> TrainerReport:
    """Rate every engine line in *result* against the best one.

    Losses are measured from *side_to_move*'s point of view. When
    *from_square* is given, only moves starting there are kept, but the
    loss is still relative to the best move of the whole position.
    """
    if not result.candidates:
        return TrainerReport(eval_white_cp=None, best_move_uci=result.best_move_uci)

    sign = 1 if side_to_move == Color.WHITE else -1
    best = max(result.candidates, key=lambda c: sign * c.white_cp)
    evaluations = []
    for candidate in result.candidates:
        cp_loss = max(0, sign * (best.white_cp - candidate.white_cp))
        evaluations.append(
            MoveEvaluation(
                uci=candidate.uci,
                white_cp=candidate.white_cp,
                cp_loss=cp_loss,
                quality=classify_cp_loss(cp_loss),
            )
        )
    evaluations.sort(key=lambda e: e.cp_loss)

    report = TrainerReport(
        eval_white_cp=best.white_cp,
        best_move_uci=best.uci,
        evaluations=tuple(evaluations),
    )
    if from_square is None:
        return report
    return TrainerReport(
        eval_white_cp=report.eval_white_cp,
        best_move_uci=report.best_move_uci,
        evaluations=report.for_square(from_square),
    )


class MoveTrainer:
    """Runs a wide multi-PV search and rates the lines for the mover."""

    __slots__ = ("_engine", "_limits")

    def __init__(
        self, engine: IEngine, settings: EngineSettings | None = None
    ) -> None:
        self._engine = engine
        if settings is None:
            self._limits = SearchLimits(depth=15, multipv=20)
        else:
            self._limits = SearchLimits(
                depth=settings.analysis_depth,
                multipv=settings.analysis_multipv,
                timeout_s=settings.timeout_s,
            )

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    def analyse(
        self,
        position: Position,
        from_square: Square | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> TrainerReport | None:
        """Rate the engine's candidate moves in *position*.

        Returns ``None`` when the engine is unavailable; the trainer is
        advisory and never blocks play.
        """
        try:
            result = self._engine.search(
                position_to_fen(position), self._limits, is_cancelled
            )
        except EngineError as exc:
            _LOGGER.warning("Trainer analysis unavailable: %s", exc)
            return None
        return rate_candidates(result, position.side_to_move, from_square)
