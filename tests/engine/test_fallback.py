"""Tests for the random legal-move engine."""

from __future__ import annotations

from metricchess.core.board import Board
from metricchess.core.enums import Color, PieceType
from metricchess.core.move_generator import MoveGenerator
from metricchess.core.notation import STARTING_FEN, board_to_fen, parse_uci
from metricchess.core.piece import Piece
from metricchess.core.types import make_square
from metricchess.engine.fallback import RandomMoveEngine
from metricchess.engine.search import SearchLimits

LIMITS = SearchLimits(time_limit_ms=10)


class TestRandomMoveEngine:
    def test_returns_legal_move(self) -> None:
        result = RandomMoveEngine(seed=1).search(STARTING_FEN, LIMITS)

        assert result.best_move_uci is not None
        move = parse_uci(result.best_move_uci)
        legal = MoveGenerator(Board.initial()).generate_legal_moves(Color.WHITE)
        assert (move.from_sq, move.to_sq) in {(m.from_sq, m.to_sq) for m in legal}

    def test_seed_is_reproducible(self) -> None:
        first = RandomMoveEngine(seed=42).search(STARTING_FEN, LIMITS)
        second = RandomMoveEngine(seed=42).search(STARTING_FEN, LIMITS)
        assert first == second

    def test_no_move_when_mated(self) -> None:
        board = Board()
        board[make_square(0, 9)] = Piece(Color.BLACK, PieceType.KING)
        board[make_square(1, 8)] = Piece(Color.WHITE, PieceType.QUEEN)
        board[make_square(2, 7)] = Piece(Color.WHITE, PieceType.KING)
        fen = f"{board_to_fen(board)} b - - 0 1"

        result = RandomMoveEngine().search(fen, LIMITS)

        assert result.best_move_uci is None

    def test_close_is_noop(self) -> None:
        RandomMoveEngine().close()
