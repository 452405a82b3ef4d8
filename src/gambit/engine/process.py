"""External UCI engine driven over a subprocess's stdin/stdout.

Every failure of the collaborator (missing executable, crash, silence past
the timeout, unparseable answer) surfaces as :class:`EngineError`; callers
degrade instead of propagating it.
"""

from __future__ import annotations

import logging
import queue
import subprocess
import threading
import time
from collections.abc import Sequence
from types import TracebackType
from typing import TYPE_CHECKING

from gambit.engine import uci
from gambit.engine.search import (
    CancelCheck,
    Candidate,
    EngineError,
    IEngine,
    SearchLimits,
    SearchResult,
)

if TYPE_CHECKING:
    from gambit.config import EngineSettings

_LOGGER = logging.getLogger(__name__)

_HANDSHAKE_TIMEOUT_S = 10.0
_QUIT_TIMEOUT_S = 2.0


class UciEngine(IEngine):
    """A UCI engine process (e.g. Stockfish) implementing :class:`IEngine`.

    Args:
        command: Executable path, or the full argv to launch it.
        timeout_s: Default per-search timeout when the limits give none.
    """

    __slots__ = ("_argv", "_timeout_s", "_process", "_lines", "_reader", "_lock")

    def __init__(
        self, command: str | Sequence[str], *, timeout_s: float = 30.0
    ) -> None:
        self._argv = [command] if isinstance(command, str) else list(command)
        self._timeout_s = timeout_s
        self._process: subprocess.Popen[str] | None = None
        self._lines: queue.Queue[str | None] = queue.Queue()
        self._reader: threading.Thread | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> UciEngine:
        """Engine for the configured executable; not started yet."""
        return cls(settings.executable, timeout_s=settings.timeout_s)

    # ── Lifecycle ────────────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> None:
        """Launch the process and complete the ``uci`` / ``isready`` handshake."""
        if self.is_running:
            return
        try:
            self._process = subprocess.Popen(
                self._argv,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                bufsize=1,
            )
        except OSError as exc:
            msg = f"Cannot start engine {self._argv[0]!r}: {exc}"
            raise EngineError(msg) from exc

        self._lines = queue.Queue()
        self._reader = threading.Thread(
            target=self._pump_stdout,
            args=(self._process, self._lines),
            name="uci-engine-reader",
            daemon=True,
        )
        self._reader.start()

        deadline = time.monotonic() + _HANDSHAKE_TIMEOUT_S
        try:
            self._send(uci.CMD_UCI)
            self._wait_for("uciok", deadline)
            self._send(uci.CMD_NEWGAME)
            self._sync(deadline)
        except EngineError:
            self.close()
            raise
        _LOGGER.info("UCI engine started: %s", " ".join(self._argv))

    def close(self) -> None:
        """Ask the engine to quit; kill it if it does not."""
        process = self._process
        self._process = None
        if process is None:
            return
        try:
            if process.poll() is None and process.stdin is not None:
                process.stdin.write(uci.CMD_QUIT + "\n")
                process.stdin.flush()
        except OSError:
            _LOGGER.debug("Engine stdin already closed")
        try:
            process.wait(timeout=_QUIT_TIMEOUT_S)
        except subprocess.TimeoutExpired:
            _LOGGER.warning("UCI engine ignored quit; killing it")
            process.kill()
            process.wait()

    def __enter__(self) -> UciEngine:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ── IEngine protocol ─────────────────────────────────────────────────

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """Search *fen* and return the best move plus one candidate per PV.

        Scores in the result are normalised to White's perspective.
        """
        try:
            side = uci.side_to_move_from_fen(fen)
        except ValueError as exc:
            raise EngineError(str(exc)) from exc

        with self._lock:
            try:
                best, latest = self._run_search(fen, limits, is_cancelled)
            except EngineError:
                self.close()
                raise

        candidates = tuple(
            Candidate(
                uci=info.move,
                white_cp=uci.white_perspective_cp(info.score_cp, side),
                rank=rank,
            )
            for rank, info in sorted(latest.items())
        )
        return SearchResult(best_move_uci=best, candidates=candidates)

    # ── Internal ─────────────────────────────────────────────────────────

    def _run_search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None,
    ) -> tuple[str | None, dict[int, uci.InfoLine]]:
        if not self.is_running:
            self.start()

        timeout = limits.timeout_s
        if timeout is None:
            timeout = self._timeout_s
        deadline = time.monotonic() + timeout

        self._send(uci.cmd_multipv(limits.multipv))
        self._sync(deadline)
        self._send(uci.cmd_position(fen))
        self._send(uci.cmd_go_depth(limits.depth))

        latest: dict[int, uci.InfoLine] = {}
        stop_sent = False
        while True:
            if not stop_sent and is_cancelled is not None and is_cancelled():
                self._send(uci.CMD_STOP)
                stop_sent = True
            line = self._read_line(deadline)
            if line.startswith("bestmove"):
                try:
                    return uci.parse_bestmove(line), latest
                except ValueError as exc:
                    raise EngineError(str(exc)) from exc
            info = uci.parse_info_line(line)
            if info is not None and info.multipv <= limits.multipv:
                latest[info.multipv] = info

    @staticmethod
    def _pump_stdout(
        process: subprocess.Popen[str], lines: queue.Queue[str | None]
    ) -> None:
        assert process.stdout is not None
        for raw in process.stdout:
            lines.put(raw.strip())
        lines.put(None)

    def _send(self, command: str) -> None:
        process = self._process
        if process is None or process.stdin is None:
            raise EngineError("Engine is not running")
        _LOGGER.debug("> %s", command)
        try:
            process.stdin.write(command + "\n")
            process.stdin.flush()
        except OSError as exc:
            raise EngineError(f"Engine pipe closed: {exc}") from exc

    def _read_line(self, deadline: float) -> str:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise EngineError("Engine timed out")
        try:
            line = self._lines.get(timeout=remaining)
        except queue.Empty:
            raise EngineError("Engine timed out") from None
        if line is None:
            raise EngineError("Engine process exited")
        _LOGGER.debug("< %s", line)
        return line

    def _wait_for(self, token: str, deadline: float) -> None:
        while self._read_line(deadline) != token:
            pass

    def _sync(self, deadline: float) -> None:
        self._send(uci.CMD_ISREADY)
        self._wait_for("readyok", deadline)
