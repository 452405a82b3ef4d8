"""External move-search collaborator: UCI protocol, process driver, Qt worker.

Engine output is advisory. :func:`choose_engine_move` re-validates every
suggestion against the rules engine and falls back to a random legal move
whenever the engine is unavailable.
"""

from gambit.engine.picker import choose_engine_move, random_legal_move
from gambit.engine.process import UciEngine
from gambit.engine.search import (
    Candidate,
    Difficulty,
    EngineError,
    IEngine,
    SearchLimits,
    SearchResult,
)

__all__ = [
    "Candidate",
    "Difficulty",
    "EngineError",
    "IEngine",
    "SearchLimits",
    "SearchResult",
    "UciEngine",
    "choose_engine_move",
    "random_legal_move",
]
