"""UCI text protocol: command builders and engine output parsing.

Only the subset used to request moves and multi-PV evaluations is covered::

    > setoption name MultiPV value 3
    > position fen <FEN>
    > go depth 10
    < info depth 10 multipv 1 score cp 25 nodes 1234 pv e2e4 e7e5
    < bestmove e2e4 ponder e7e5
"""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color
from gambit.core.notation.uci import UCI_MOVE_RE

MATE_SCORE = 10_000


# ── Commands ────────────────────────────────────────────────────────────────


def cmd_position(fen: str) -> str:
    return f"position fen {fen}"


def cmd_go_depth(depth: int) -> str:
    if depth < 1:
        raise ValueError(f"Search depth must be positive, got {depth}")
    return f"go depth {depth}"


def cmd_multipv(lines: int) -> str:
    if lines < 1:
        raise ValueError(f"MultiPV must be positive, got {lines}")
    return f"setoption name MultiPV value {lines}"


CMD_UCI = "uci"
CMD_ISREADY = "isready"
CMD_NEWGAME = "ucinewgame"
CMD_STOP = "stop"
CMD_QUIT = "quit"


# ── Engine output ───────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class InfoLine:
    """A scored ``info`` line; scores are relative to the side to move."""

    multipv: int
    score_cp: int
    pv: tuple[str, ...]
    depth: int = 0
    mate_in: int | None = None

    @property
    def move(self) -> str:
        return self.pv[0]


def parse_info_line(line: str) -> InfoLine | None:
    """Parse an ``info`` line carrying a score and a PV; else ``None``.

    ``multipv`` defaults to 1 when the engine omits it (single-PV mode).
    Mate scores become ±(``MATE_SCORE`` − distance).
    """
    tokens = line.split()
    if not tokens or tokens[0] != "info":
        return None

    multipv = 1
    depth = 0
    score_cp: int | None = None
    mate_in: int | None = None
    pv: list[str] = []

    idx = 1
    try:
        while idx < len(tokens):
            token = tokens[idx]
            if token == "multipv":
                multipv = int(tokens[idx + 1])
                idx += 2
            elif token == "depth":
                depth = int(tokens[idx + 1])
                idx += 2
            elif token == "score":
                kind, value = tokens[idx + 1], int(tokens[idx + 2])
                if kind == "cp":
                    score_cp = value
                elif kind == "mate":
                    mate_in = value
                    score_cp = _mate_to_cp(value)
                idx += 3
            elif token == "pv":
                pv = [t for t in tokens[idx + 1 :] if UCI_MOVE_RE.match(t)]
                break
            else:
                idx += 1
    except (IndexError, ValueError):
        return None

    if score_cp is None or not pv:
        return None
    return InfoLine(
        multipv=multipv, score_cp=score_cp, pv=tuple(pv), depth=depth, mate_in=mate_in
    )


def parse_bestmove(line: str) -> str | None:
    """Move from a ``bestmove`` line, ``None`` for ``bestmove (none)``.

    Raises:
        ValueError: *line* is not a well-formed ``bestmove`` line.
    """
    tokens = line.split()
    if len(tokens) < 2 or tokens[0] != "bestmove":
        raise ValueError(f"Not a bestmove line: {line!r}")
    if tokens[1] in ("(none)", "0000"):
        return None
    if not UCI_MOVE_RE.match(tokens[1]):
        raise ValueError(f"Invalid bestmove: {line!r}")
    return tokens[1]


def white_perspective_cp(score_cp: int, side_to_move: Color) -> int:
    """Flip a side-to-move-relative score to White's point of view."""
    return score_cp if side_to_move == Color.WHITE else -score_cp


def side_to_move_from_fen(fen: str) -> Color:
    fields = fen.split()
    if len(fields) < 2 or fields[1] not in ("w", "b"):
        raise ValueError(f"FEN without side-to-move field: {fen!r}")
    return Color.WHITE if fields[1] == "w" else Color.BLACK


def _mate_to_cp(mate_in: int) -> int:
    if mate_in > 0:
        return MATE_SCORE - mate_in
    return -MATE_SCORE - mate_in
