"""Opening-explorer statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, frozen=True)
class OpeningMove:
    """A continuation played from the looked-up position."""

    uci: str
    san: str
    white: int
    draws: int
    black: int

    @property
    def total(self) -> int:
        return self.white + self.draws + self.black

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> OpeningMove:
        return cls(
            uci=str(data["uci"]),
            san=str(data["san"]),
            white=int(data.get("white", 0)),
            draws=int(data.get("draws", 0)),
            black=int(data.get("black", 0)),
        )


@dataclass(slots=True, frozen=True)
class OpeningStats:
    """Game counts and the named opening for a move sequence."""

    white: int
    draws: int
    black: int
    opening_name: str | None = None
    eco: str | None = None
    moves: tuple[OpeningMove, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return self.white + self.draws + self.black

    def top_moves(self, count: int = 3) -> tuple[OpeningMove, ...]:
        """The *count* most played continuations."""
        return tuple(sorted(self.moves, key=lambda m: m.total, reverse=True)[:count])

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> OpeningStats:
        """Decode an explorer JSON object.

        Raises:
            KeyError, TypeError, ValueError: The payload has the wrong shape.
        """
        opening = data.get("opening") or {}
        return cls(
            white=int(data.get("white", 0)),
            draws=int(data.get("draws", 0)),
            black=int(data.get("black", 0)),
            opening_name=opening.get("name"),
            eco=opening.get("eco"),
            moves=tuple(OpeningMove.from_payload(m) for m in data.get("moves", [])),
        )
