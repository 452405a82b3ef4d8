"""Tests for FEN, SAN and UCI notation."""

import pytest

from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.errors import MalformedNotationError
from gambit.core.legality import all_legal_moves
from gambit.core.move import Move
from gambit.core.notation import (
    STARTING_FEN,
    move_from_uci,
    move_to_san,
    move_to_uci,
    parse_san,
    position_from_fen,
    position_to_fen,
)
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import E1, E3, E8, parse_square

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def sq(name: str) -> int:
    return parse_square(name)


class TestFenParsing:
    def test_starting_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos == Position.initial()
        assert pos.board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert position_from_fen(fen).en_passant == E3

    def test_partial_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w Kq - 0 1"
        assert position_from_fen(fen).castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )

    def test_clocks_are_optional(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1
        assert pos.side_to_move == Color.BLACK

    @pytest.mark.parametrize(
        ("fen", "reason"),
        [
            ("invalid", "4-6 fields"),
            ("4k3/8/8/8/8/8/8/4K3 x - - 0 1", "side-to-move"),
            ("4k3/8/8/8/8/8/4K3 w - - 0 1", "8 ranks"),
            ("4k4/8/8/8/8/8/8/4K3 w - - 0 1", "rank width"),
            ("4k3/8/8/8/8/8/8/4K3 w Kx - 0 1", "castling"),
            ("4k3/8/8/8/8/8/8/4K3 w - e3 0 1", "en-passant"),
            ("4k3/8/8/8/8/8/8/4K3 w - - x 1", "clock"),
            ("4k3/8/8/8/8/8/8/4X3 w - - 0 1", "piece character"),
            ("4k3/8/8/8/8/8/8/4R1K1 w - - 0 1", "not to move is in check"),
            ("4k3/8/8/8/8/8/8/4K3 w - d6 0 1", "no pawn behind it"),
            ("4k3/8/8/3P4/8/8/8/4K3 w - d6 0 1", "no pawn behind it"),
            ("4k3/8/3p4/3p4/8/8/8/4K3 w - d6 0 1", "no pawn behind it"),
        ],
    )
    def test_malformed_fen_raises(self, fen: str, reason: str) -> None:
        with pytest.raises(MalformedNotationError, match=reason):
            position_from_fen(fen)

    def test_king_count_is_checked(self) -> None:
        with pytest.raises(MalformedNotationError, match="one white king"):
            position_from_fen("4k3/8/8/8/8/8/8/8 w - - 0 1")
        with pytest.raises(MalformedNotationError, match="one black king"):
            position_from_fen("4k2k/8/8/8/8/8/8/4K3 w - - 0 1")

    def test_side_to_move_may_be_in_check(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4R1K1 b - - 0 1")
        assert pos.side_to_move == Color.BLACK
        assert all_legal_moves(pos)

    def test_malformed_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            position_from_fen("")


class TestFenSerialisation:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            KIWIPETE,
            "8/8/4k3/8/8/4K3/8/8 w - - 0 1",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert position_to_fen(position_from_fen(fen)) == fen


class TestSAN:
    def test_pawn_push(self) -> None:
        assert move_to_san(Position.initial(), Move(sq("e2"), sq("e4"))) == "e4"

    def test_knight_move(self) -> None:
        assert move_to_san(Position.initial(), Move(sq("g1"), sq("f3"))) == "Nf3"

    def test_pawn_capture_names_file(self) -> None:
        pos = position_from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        assert move_to_san(pos, Move(sq("e4"), sq("d5"))) == "exd5"

    def test_en_passant_is_capture(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        move = Move(sq("e5"), sq("d6"), MoveFlag.EN_PASSANT)
        assert move_to_san(pos, move) == "exd6"

    def test_castles(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert move_to_san(pos, Move(E1, sq("g1"), MoveFlag.CASTLE_KINGSIDE)) == "O-O"
        assert (
            move_to_san(pos, Move(E1, sq("c1"), MoveFlag.CASTLE_QUEENSIDE))
            == "O-O-O"
        )

    def test_promotion_with_check(self) -> None:
        pos = position_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        move = Move.promote(sq("a7"), sq("a8"), PieceType.QUEEN)
        assert move_to_san(pos, move) == "a8=Q+"

    def test_checkmate_suffix(self) -> None:
        pos = position_from_fen(
            "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2"
        )
        assert move_to_san(pos, Move(sq("d8"), sq("h4"))) == "Qh4#"

    def test_file_disambiguation(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4K3/R6R w - - 0 1")
        assert move_to_san(pos, Move(sq("a1"), sq("d1"))) == "Rad1"
        assert move_to_san(pos, Move(sq("h1"), sq("d1"))) == "Rhd1"

    def test_rank_disambiguation(self) -> None:
        pos = position_from_fen("R7/7k/8/8/8/8/8/R3K3 w - - 0 1")
        assert move_to_san(pos, Move(sq("a1"), sq("a4"))) == "R1a4"

    def test_square_disambiguation(self) -> None:
        pos = position_from_fen("k7/8/8/8/8/2Q1Q3/8/2Q1K3 w - - 0 1")
        assert move_to_san(pos, Move(sq("c3"), sq("d2"))) == "Qc3d2"


class TestParseSAN:
    def test_every_legal_move_round_trips(self) -> None:
        pos = position_from_fen(KIWIPETE)
        for move in all_legal_moves(pos):
            assert parse_san(pos, move_to_san(pos, move)) == move

    def test_castling_tokens(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert parse_san(pos, "O-O").flag == MoveFlag.CASTLE_KINGSIDE
        assert parse_san(pos, "0-0-0").flag == MoveFlag.CASTLE_QUEENSIDE

    def test_promotion_defaults_to_queen(self) -> None:
        pos = position_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        assert parse_san(pos, "a8").promotion == PieceType.QUEEN
        assert parse_san(pos, "a8=N").promotion == PieceType.KNIGHT

    def test_invalid_text(self) -> None:
        with pytest.raises(MalformedNotationError, match="invalid SAN"):
            parse_san(Position.initial(), "Zz9")

    def test_no_matching_move(self) -> None:
        with pytest.raises(MalformedNotationError, match="no legal move"):
            parse_san(Position.initial(), "e5")

    def test_ambiguous_move(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4K3/R6R w - - 0 1")
        with pytest.raises(MalformedNotationError, match="ambiguous"):
            parse_san(pos, "Rd1")


class TestUCI:
    def test_plain_move(self) -> None:
        move = move_from_uci("e2e4")
        assert move == Move(sq("e2"), sq("e4"))
        assert move_to_uci(move) == "e2e4"

    def test_promotion_suffix(self) -> None:
        move = move_from_uci("e7e8n")
        assert move.flag == MoveFlag.PROMOTION
        assert move.promotion == PieceType.KNIGHT
        assert move_to_uci(move) == "e7e8n"

    @pytest.mark.parametrize("text", ["", "e2", "e2e4x", "i2e4", "e9e4", "e2e2"])
    def test_malformed(self, text: str) -> None:
        with pytest.raises(MalformedNotationError):
            move_from_uci(text)

    def test_resolves_castling_with_position(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/R3K2R w KQ - 0 1")
        assert move_from_uci("e1g1", pos).flag == MoveFlag.CASTLE_KINGSIDE
        assert move_from_uci("e1c1", pos).flag == MoveFlag.CASTLE_QUEENSIDE

    def test_resolves_en_passant_with_position(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        assert move_from_uci("e5d6", pos).flag == MoveFlag.EN_PASSANT

    def test_missing_suffix_means_queen(self) -> None:
        pos = position_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        assert move_from_uci("a7a8", pos).promotion == PieceType.QUEEN

    def test_round_trip_over_generated_moves(self) -> None:
        pos = position_from_fen(KIWIPETE)
        for move in all_legal_moves(pos):
            assert move_from_uci(move_to_uci(move), pos) == move
