"""Perft tests, the gold standard for move-generator correctness.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.legality import all_legal_moves
from gambit.core.move_generator import pseudo_legal_moves, pseudo_legal_moves_for
from gambit.core.notation import STARTING_FEN, position_from_fen
from gambit.core.position import Position
from gambit.core.types import parse_square


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes at *depth* by deriving successor positions."""
    moves = all_legal_moves(position)
    if depth == 1:
        return len(moves)
    return sum(perft(position.apply(move), depth - 1) for move in moves)


# ── Starting position ────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 3) == 8_902

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 4) == 197_281


# ── Kiwipete (rich in tactics: castling, ep, promotions) ─────────────────────

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 1) == 48

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 3) == 97_862


# ── Position 3: en-passant + promotion edge cases ───────────────────────────

POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS3), 2) == 191

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS3), 3) == 2_812

    @pytest.mark.slow
    def test_depth_4(self) -> None:
        assert perft(position_from_fen(POS3), 4) == 43_238


# ── Position 4: promotions and castling under attack ────────────────────────

POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"


class TestPerftPos4:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS4), 1) == 6

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS4), 2) == 264

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS4), 3) == 9_467


# ── Position 5 ───────────────────────────────────────────────────────────────

POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftPos5:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS5), 1) == 44

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS5), 2) == 1_486

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS5), 3) == 62_379


# ── Per-square generation ────────────────────────────────────────────────────


def targets(position: Position, name: str) -> set[str]:
    return {
        str(m)[2:4] for m in pseudo_legal_moves(position, parse_square(name))
    }


class TestPseudoLegal:
    def test_empty_square_has_no_moves(self) -> None:
        assert pseudo_legal_moves(Position.initial(), parse_square("e4")) == []

    def test_pawn_single_and_double_push(self) -> None:
        assert targets(Position.initial(), "e2") == {"e3", "e4"}

    def test_blocked_pawn_cannot_double_push(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/4n3/4P3/4K3 w - - 0 1")
        assert targets(pos, "e2") == set()

    def test_knight_from_corner(self) -> None:
        assert targets(Position.initial(), "b1") == {"a3", "c3"}

    def test_slider_stops_at_blockers(self) -> None:
        pos = position_from_fen("4k3/8/8/3p4/8/8/3R4/4K3 w - - 0 1")
        assert targets(pos, "d2") == {
            "d1", "d3", "d4", "d5", "a2", "b2", "c2", "e2", "f2", "g2", "h2",
        }

    def test_promotions_emit_every_kind_queen_first(self) -> None:
        pos = position_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        moves = pseudo_legal_moves(pos, parse_square("a7"))
        assert [m.promotion for m in moves] == [
            PieceType.QUEEN,
            PieceType.ROOK,
            PieceType.BISHOP,
            PieceType.KNIGHT,
        ]
        assert all(m.flag == MoveFlag.PROMOTION for m in moves)

    def test_en_passant_is_tagged(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        moves = pseudo_legal_moves(pos, parse_square("e5"))
        ep = [m for m in moves if m.flag == MoveFlag.EN_PASSANT]
        assert len(ep) == 1
        assert str(ep[0]) == "e5d6"

    def test_castling_requires_empty_path(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/RN2K2R w KQ - 0 1")
        flags = {m.flag for m in pseudo_legal_moves(pos, parse_square("e1"))}
        assert MoveFlag.CASTLE_KINGSIDE in flags
        assert MoveFlag.CASTLE_QUEENSIDE not in flags

    def test_castling_requires_right(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w - - 0 1")
        assert not any(
            m.is_castle for m in pseudo_legal_moves(pos, parse_square("e1"))
        )

    def test_moves_for_color(self) -> None:
        moves = pseudo_legal_moves_for(Position.initial(), Color.BLACK)
        assert len(moves) == 20
