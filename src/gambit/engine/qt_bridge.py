"""Qt bridge to run engine move selection in a worker thread."""

from __future__ import annotations

import logging
import random
import threading
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.position import Position
from gambit.engine.picker import choose_engine_move
from gambit.engine.search import Difficulty, IEngine

if TYPE_CHECKING:
    from gambit.config import EngineSettings

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Results carry the request id so the receiving side can drop answers to
    positions that are no longer current.
    """

    best_move_ready = pyqtSignal(int, object)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    def __init__(
        self,
        engine: IEngine | None = None,
        *,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__()
        self._engine = engine
        self._difficulty = difficulty
        self._rng = rng or random.Random()
        self._cancel_event = threading.Event()

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        engine: IEngine | None = None,
        *,
        rng: random.Random | None = None,
    ) -> EngineWorker:
        return cls(engine, difficulty=settings.difficulty, rng=rng)

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Pick a move for *position_obj* and emit the outcome."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        self._cancel_event.clear()
        try:
            move = choose_engine_move(
                position_obj,
                self._engine,
                self._difficulty,
                self._rng,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Engine move selection failed")
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if move is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(request_id, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(str)
    def set_difficulty(self, difficulty: str) -> None:
        """Change playing strength (takes effect on the next request)."""
        self._difficulty = Difficulty(difficulty)
