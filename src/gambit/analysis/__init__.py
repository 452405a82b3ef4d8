"""Move-trainer analysis APIs."""

from gambit.analysis.models import MoveEvaluation, MoveQuality, TrainerReport
from gambit.analysis.service import MoveTrainer, classify_cp_loss, rate_candidates

__all__ = [
    "MoveEvaluation",
    "MoveQuality",
    "MoveTrainer",
    "TrainerReport",
    "classify_cp_loss",
    "rate_candidates",
]
