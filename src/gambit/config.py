"""User-configurable settings for the engine and opening lookups."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from gambit.engine.search import Difficulty

# ── Settings data classes ────────────────────────────────────────────────────


@dataclass
class EngineSettings:
    """External UCI engine process and playing strength."""

    executable: str = "stockfish"
    difficulty: Difficulty = Difficulty.MEDIUM
    analysis_depth: int = 15
    analysis_multipv: int = 20
    timeout_s: float = 30.0


@dataclass
class OpeningSettings:
    """Opening-statistics explorer endpoint."""

    enabled: bool = True
    base_url: str = "https://explorer.lichess.ovh/lichess"
    variant: str = "standard"
    speeds: tuple[str, ...] = ("blitz", "rapid", "classical")
    ratings: tuple[int, ...] = (2000, 2200, 2500)
    timeout_s: float = 5.0
    max_plies: int = 20


@dataclass
class AppSettings:
    """All user-configurable settings."""

    engine: EngineSettings = field(default_factory=EngineSettings)
    openings: OpeningSettings = field(default_factory=OpeningSettings)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> AppSettings:
        """Build settings from a plain dict (e.g. decoded JSON).

        Unknown keys are ignored; missing keys keep their defaults.
        """
        engine_data = _known_keys(EngineSettings, data.get("engine", {}))
        if "difficulty" in engine_data:
            engine_data["difficulty"] = Difficulty(engine_data["difficulty"])

        opening_data = _known_keys(OpeningSettings, data.get("openings", {}))
        for key in ("speeds", "ratings"):
            if key in opening_data:
                opening_data[key] = tuple(opening_data[key])

        return cls(
            engine=EngineSettings(**engine_data),
            openings=OpeningSettings(**opening_data),
        )


def _known_keys(cls: type, data: dict[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}
