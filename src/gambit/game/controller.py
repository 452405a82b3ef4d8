"""GameController, the single mutable handle the UI drives a game through.

Coordinates players and the GameState. Emits events via simple callbacks
so the UI and tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.enums import Color, GameResult, MoveFlag, PieceType
from gambit.core.errors import IllegalMoveError, MalformedNotationError
from gambit.core.move import Move
from gambit.core.move_generator import home_rank
from gambit.core.notation import move_from_uci
from gambit.core.types import rank_of
from gambit.game.interfaces import GamePhase, IGameController, IPlayer
from gambit.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Validates and applies moves, switches turns, notifies listeners.

    Methods are meant to be called from one thread (the UI thread). Engine
    answers come back through :meth:`submit_engine_move` together with the
    FEN they were computed for, so answers to an outdated position are
    dropped instead of applied.
    """

    __slots__ = ("_state", "_players", "events", "auto_queen")

    def __init__(self, *, auto_queen: bool = True) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()
        self.auto_queen = auto_queen

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        """Start a game between *white* and *black*.

        Raises:
            MalformedNotationError: *fen* cannot be decoded.
        """
        self._cancel_engine()
        state = GameState()
        state.setup(fen)
        self._state = state
        self._players = {Color.WHITE: white, Color.BLACK: black}

        if state.is_game_over:
            self._emit_game_over(state.result)
            return
        self._prompt_current_player()

    def submit_move(self, move: Move) -> bool:
        """Apply *move* for the side to move. Illegal input returns False."""
        if self._state.is_game_over:
            return False
        move = self._with_auto_queen(move)
        try:
            record = self._state.apply_move(move)
        except IllegalMoveError as exc:
            _LOGGER.info("Rejected move: %s", exc)
            return False

        self._emit_move(record)
        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
            return True
        self._prompt_current_player()
        return True

    def submit_uci(self, text: str) -> bool:
        """Like :meth:`submit_move` for UCI text; malformed text returns False."""
        try:
            move = move_from_uci(text, self._state.position)
        except MalformedNotationError as exc:
            _LOGGER.info("Rejected move: %s", exc)
            return False
        return self.submit_move(move)

    def submit_engine_move(self, fen: str, move: Move | None) -> bool:
        """Apply an engine answer computed for the position *fen*.

        Answers for a position that is no longer current, or arriving when
        the side to move is not an engine, are dropped.
        """
        player = self.current_player
        if fen != self._state.fen or player is None or player.is_human:
            _LOGGER.warning("Dropping stale engine answer %s", move)
            return False
        if move is None:
            _LOGGER.warning("Engine found no move in %s", fen)
            return False
        return self.submit_move(move)

    def resign(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        self._cancel_engine()
        self._state.resign(color)
        self._emit_game_over(self._state.result)

    def undo_move(self) -> bool:
        if not self._state.move_history:
            return False
        self._cancel_engine()
        self._state.undo_last_move()
        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _with_auto_queen(self, move: Move) -> Move:
        """Turn a plain pawn move onto the last rank into a queen promotion."""
        if not self.auto_queen or move.flag != MoveFlag.NORMAL:
            return move
        piece = self._state.position.board[move.from_sq]
        if piece is None or piece.piece_type != PieceType.PAWN:
            return move
        if rank_of(move.to_sq) != home_rank(piece.color.opposite):
            return move
        return Move.promote(move.from_sq, move.to_sq, PieceType.QUEEN)

    def _cancel_engine(self) -> None:
        if self._state.phase != GamePhase.THINKING:
            return
        player = self.current_player
        if player is not None and not player.is_human:
            player.cancel()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        player = self.current_player
        if player is None or player.is_human:
            self._set_phase(GamePhase.AWAITING_MOVE)
            return
        self._set_phase(GamePhase.THINKING)
        player.request_move(self._state.position)

    def _set_phase(self, phase: GamePhase) -> None:
        self._state.phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self, result: GameResult) -> None:
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)
