"""Data models produced by move-trainer analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from gambit.core.types import Square, parse_square


class MoveQuality(StrEnum):
    """Centipawn-loss buckets shown for candidate moves."""

    BEST = "Best"
    EXCELLENT = "Excellent"
    GOOD = "Good"
    OKAY = "Okay"
    DUBIOUS = "Dubious"
    BAD = "Bad"

    @property
    def color_hex(self) -> str:
        """Hex colour string for UI display."""
        return _QUALITY_COLOR[self]


_QUALITY_COLOR: dict[MoveQuality, str] = {
    MoveQuality.BEST: "#16a34a",
    MoveQuality.EXCELLENT: "#34d399",
    MoveQuality.GOOD: "#a3e635",
    MoveQuality.OKAY: "#facc15",
    MoveQuality.DUBIOUS: "#fb923c",
    MoveQuality.BAD: "#dc2626",
}


@dataclass(slots=True, frozen=True)
class MoveEvaluation:
    """One engine line rated from the mover's point of view."""

    uci: str
    white_cp: int
    cp_loss: int
    quality: MoveQuality

    @property
    def from_square(self) -> Square:
        return parse_square(self.uci[:2])


@dataclass(slots=True, frozen=True)
class TrainerReport:
    """Rated candidate moves for one position.

    ``evaluations`` are ordered best first. Legal moves the engine did not
    list are unrated.
    """

    eval_white_cp: int | None
    best_move_uci: str | None
    evaluations: tuple[MoveEvaluation, ...] = ()

    def for_square(self, sq: Square) -> tuple[MoveEvaluation, ...]:
        """Evaluations of moves that start on *sq*."""
        return tuple(e for e in self.evaluations if e.from_square == sq)

    def quality_of(self, uci: str) -> MoveQuality | None:
        for evaluation in self.evaluations:
            if evaluation.uci == uci:
                return evaluation.quality
        return None
