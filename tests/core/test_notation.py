"""Tests for FEN, move-log notation and UCI move strings."""

from __future__ import annotations

import pytest

from metricchess.core.board import Board
from metricchess.core.enums import Color, PieceType
from metricchess.core.move import Move
from metricchess.core.notation import (
    STARTING_FEN,
    board_to_fen,
    move_notation,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from metricchess.core.piece import Piece
from metricchess.core.position import Position
from metricchess.core.types import make_square


class TestFen:
    def test_starting_fen_matches_initial_board(self) -> None:
        assert position_to_fen(Position()) == STARTING_FEN

    def test_round_trip(self) -> None:
        assert position_to_fen(position_from_fen(STARTING_FEN)) == STARTING_FEN

    def test_parse_starting_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.board == Board.initial()
        assert pos.side_to_move == Color.WHITE
        assert pos.move_count == 0

    def test_two_digit_and_split_runs(self) -> None:
        fen = "10/10/10/10/4T5/10/10/10/10/k8K b - - 0 7"
        pos = position_from_fen(fen)
        assert pos.board[make_square(4, 5)] == Piece(Color.WHITE, PieceType.TREBUCHET)
        assert pos.board[make_square(0, 0)] == Piece(Color.BLACK, PieceType.KING)
        assert pos.board[make_square(9, 0)] == Piece(Color.WHITE, PieceType.KING)
        assert pos.side_to_move == Color.BLACK
        assert pos.move_count == 13
        assert position_to_fen(pos) == fen

    def test_fullmove_from_move_count(self) -> None:
        assert position_to_fen(Position(move_count=1)).endswith(" w - - 0 1")
        assert position_to_fen(Position(move_count=2)).endswith(" w - - 0 2")

    def test_heir_letter(self) -> None:
        board = Board()
        board[make_square(0, 9)] = Piece(Color.BLACK, PieceType.HEIR)
        board[make_square(9, 0)] = Piece(Color.WHITE, PieceType.HEIR)
        assert board_to_fen(board) == "h9/10/10/10/10/10/10/10/10/9H"

    def test_optional_clock_fields(self) -> None:
        pos = position_from_fen("10/10/10/10/10/10/10/10/10/10 w - -")
        assert pos.move_count == 0

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "10/10/10/10/10/10/10/10/10 w - - 0 1",
            "11/10/10/10/10/10/10/10/10/10 w - - 0 1",
            "9/10/10/10/10/10/10/10/10/10 w - - 0 1",
            "0T9/10/10/10/10/10/10/10/10/10 w - - 0 1",
            "x9/10/10/10/10/10/10/10/10/10 w - - 0 1",
            "10/10/10/10/10/10/10/10/10/10 x - - 0 1",
            "10/10/10/10/10/10/10/10/10/10 w KQkq - 0 1",
            "10/10/10/10/10/10/10/10/10/10 w - e3 0 1",
            "10/10/10/10/10/10/10/10/10/10 w - - -1 1",
            "10/10/10/10/10/10/10/10/10/10 w - - 0 0",
        ],
    )
    def test_invalid_fen(self, fen: str) -> None:
        with pytest.raises(ValueError):
            position_from_fen(fen)


class TestMoveNotation:
    def test_quiet_move(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        move = Move(make_square(0, 1), make_square(0, 3))
        assert move_notation(pawn, move, is_capture=False) == "P01-03"

    def test_capture(self) -> None:
        treb = Piece(Color.BLACK, PieceType.TREBUCHET)
        move = Move(make_square(0, 9), make_square(3, 6), is_capture=True)
        assert move_notation(treb, move, is_capture=True) == "T09x36"

    def test_promotion_suffix(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        move = Move(make_square(2, 8), make_square(2, 9), promotion=PieceType.HEIR)
        assert move_notation(pawn, move, is_capture=False) == "P28-29=H"


class TestUci:
    def test_simple(self) -> None:
        assert parse_uci("a2a4") == Move(make_square(0, 1), make_square(0, 3))

    def test_two_digit_ranks(self) -> None:
        assert parse_uci("j10j9") == Move(99, 89)

    def test_promotion(self) -> None:
        move = parse_uci("b9b10t")
        assert move.to_sq == make_square(1, 9)
        assert move.promotion == PieceType.TREBUCHET

    def test_case_and_whitespace_tolerated(self) -> None:
        assert parse_uci(" A2A4\n") == Move(10, 30)

    def test_move_uci_round_trip(self) -> None:
        move = Move(make_square(1, 8), make_square(1, 9), promotion=PieceType.QUEEN)
        assert move.uci == "b9b10q"
        assert parse_uci(move.uci) == move

    @pytest.mark.parametrize(
        "text", ["", "a1", "k1a2", "a11a2", "a0a1", "a01a2", "a1a1", "a2a3k", "a2a3p"]
    )
    def test_rejects_malformed(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_uci(text)
