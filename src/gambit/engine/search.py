"""Shared engine search models, difficulty presets and protocol."""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

CancelCheck = Callable[[], bool]


class EngineError(Exception):
    """The external engine failed (missing binary, crash, timeout, bad output)."""


class Difficulty(StrEnum):
    """Playing strength presets for the engine opponent."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def preset(self) -> DifficultyPreset:
        return _PRESETS[self]


@dataclass(slots=True, frozen=True)
class DifficultyPreset:
    """Search depth, line count and how a candidate is drawn from the lines.

    ``weights`` are the probabilities of picking candidates 1..n.
    ``engine_share`` is the chance that an engine line is used at all; the
    rest of the time a random legal move is played.
    """

    depth: int
    multipv: int
    weights: tuple[float, ...] = ()
    engine_share: float = 1.0


_PRESETS: dict[Difficulty, DifficultyPreset] = {
    Difficulty.EASY: DifficultyPreset(depth=1, multipv=10, engine_share=0.2),
    Difficulty.MEDIUM: DifficultyPreset(
        depth=10, multipv=3, weights=(0.60, 0.25, 0.15)
    ),
    Difficulty.HARD: DifficultyPreset(
        depth=15, multipv=3, weights=(0.80, 0.15, 0.05)
    ),
    Difficulty.EXPERT: DifficultyPreset(depth=20, multipv=1, weights=(1.0,)),
}


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single engine request."""

    depth: int = 10
    multipv: int = 1
    timeout_s: float | None = 30.0

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> SearchLimits:
        preset = difficulty.preset
        return cls(depth=preset.depth, multipv=preset.multipv)


@dataclass(slots=True, frozen=True)
class Candidate:
    """One principal variation's first move with a white-perspective score."""

    uci: str
    white_cp: int
    rank: int = 1


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by an engine search.

    ``candidates`` are ordered best first (``multipv`` 1, 2, ...).
    """

    best_move_uci: str | None
    candidates: tuple[Candidate, ...] = ()

    @property
    def best(self) -> Candidate | None:
        return self.candidates[0] if self.candidates else None


class IEngine(Protocol):
    """Protocol for move-search collaborators."""

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...


def select_candidate(
    result: SearchResult,
    difficulty: Difficulty,
    rng: random.Random,
) -> str | None:
    """Pick the UCI move to play from *result* for *difficulty*.

    ``None`` means "play a random legal move instead".
    """
    preset = difficulty.preset
    candidates = result.candidates
    if not candidates:
        return result.best_move_uci

    if rng.random() >= preset.engine_share:
        return None

    if not preset.weights:
        return rng.choice(candidates).uci

    roll = rng.random()
    threshold = 0.0
    for weight, candidate in zip(preset.weights, candidates):
        threshold += weight
        if roll < threshold:
            return candidate.uci
    return candidates[0].uci
