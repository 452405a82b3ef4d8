"""Game record: authoritative position, status, phase and move history."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field

from gambit.core import rules
from gambit.core.enums import Color, GameResult, MoveFlag
from gambit.core.errors import IllegalMoveError, MalformedNotationError
from gambit.core.legality import all_legal_moves
from gambit.core.move import Move
from gambit.core.notation import (
    STARTING_FEN,
    move_from_uci,
    move_to_san,
    move_to_uci,
    position_from_fen,
    position_to_fen,
)
from gambit.core.position import Position
from gambit.core.rules import GameStatus
from gambit.game.interfaces import GamePhase


@dataclass(slots=True, frozen=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    san: str
    uci: str
    fen_after: str
    was_check: bool = False
    was_capture: bool = False


@dataclass
class GameState:
    """Owns one game: the current immutable Position and how it was reached.

    Every transition goes through :func:`gambit.core.rules.apply_move`, so an
    illegal move leaves the state untouched.
    """

    position: Position = field(default_factory=Position.initial, init=False)
    status: GameStatus = field(init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    resigned: Color | None = field(default=None, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)
    _positions: list[Position] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.status = GameStatus.in_progress(self.position.side_to_move)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game from *fen* or the standard start.

        Raises:
            MalformedNotationError: *fen* cannot be decoded.
        """
        position = position_from_fen(fen) if fen else Position.initial()
        self.start_fen = fen or STARTING_FEN
        self.position = position
        self.status = rules.game_status(position)
        self.phase = (
            GamePhase.GAME_OVER if self.status.is_over else GamePhase.AWAITING_MOVE
        )
        self.resigned = None
        self.move_history.clear()
        self._positions.clear()

    def reset(self) -> None:
        """Back to the standard starting position."""
        self.setup()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply *move* if legal and return the history record.

        Raises:
            IllegalMoveError: The game is over or *move* is not legal here.
        """
        if self.is_game_over:
            raise IllegalMoveError(move, "the game is over")

        before = self.position
        after, status = rules.apply_move(before, move)

        record = MoveRecord(
            move=move,
            san=move_to_san(before, move),
            uci=move_to_uci(move),
            fen_after=position_to_fen(after),
            was_check=rules.is_in_check(after),
            was_capture=(
                before.board[move.to_sq] is not None
                or move.flag == MoveFlag.EN_PASSANT
            ),
        )
        self._positions.append(before)
        self.move_history.append(record)
        self.position = after
        self.status = status
        if status.is_over:
            self.phase = GamePhase.GAME_OVER
        return record

    def apply_uci(self, text: str) -> MoveRecord:
        """Apply a move given in UCI notation.

        Raises:
            MalformedNotationError: *text* is not a UCI move.
            IllegalMoveError: The move is not legal here.
        """
        return self.apply_move(move_from_uci(text, self.position))

    def undo_last_move(self) -> Move | None:
        """Restore the position before the last move.

        Returns the undone Move, or ``None`` if nothing has been played.
        A resignation is withdrawn along with the move.
        """
        if not self.move_history:
            return None
        record = self.move_history.pop()
        self.position = self._positions.pop()
        self.status = rules.game_status(self.position)
        self.resigned = None
        self.phase = GamePhase.AWAITING_MOVE
        return record.move

    # ── Resignation ──────────────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self.resigned = color
        self.phase = GamePhase.GAME_OVER

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def result(self) -> GameResult:
        if self.resigned is not None:
            return (
                GameResult.BLACK_WINS
                if self.resigned == Color.WHITE
                else GameResult.WHITE_WINS
            )
        return self.status.result

    @property
    def fen(self) -> str:
        return position_to_fen(self.position)

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def uci_history(self) -> list[str]:
        return [r.uci for r in self.move_history]

    @property
    def san_history(self) -> list[str]:
        return [r.san for r in self.move_history]

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return all_legal_moves(self.position)

    # ── Persistence ──────────────────────────────────────────────────────

    @classmethod
    def replay(cls, uci_moves: Iterable[str], fen: str | None = None) -> GameState:
        """Rebuild a game by replaying *uci_moves* from *fen*.

        Raises:
            MalformedNotationError: A start FEN or a move cannot be decoded.
            IllegalMoveError: A move is not legal at its point in the game.
        """
        state = cls()
        state.setup(fen)
        for text in uci_moves:
            state.apply_uci(text)
        return state

    def to_json(self) -> str:
        """Serialize as ``{"start_fen": ..., "moves": [uci, ...]}``."""
        return json.dumps({"start_fen": self.start_fen, "moves": self.uci_history})

    @classmethod
    def from_json(cls, text: str) -> GameState:
        """Inverse of :meth:`to_json`.

        Raises:
            MalformedNotationError: The payload is not a saved game.
            IllegalMoveError: A saved move is not legal at its point.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedNotationError(text, "invalid game JSON") from exc
        if not isinstance(data, dict):
            raise MalformedNotationError(text, "game JSON must be an object")
        moves = data.get("moves", [])
        fen = data.get("start_fen")
        if not isinstance(moves, list) or not all(isinstance(m, str) for m in moves):
            raise MalformedNotationError(text, "'moves' must be a list of strings")
        if fen is not None and not isinstance(fen, str):
            raise MalformedNotationError(text, "'start_fen' must be a string")
        return cls.replay(moves, fen)
