"""Tests for player implementations."""

from __future__ import annotations

from metricchess.core.enums import Color
from metricchess.core.position import Position
from metricchess.game.interfaces import GamePhase
from metricchess.game.player import AIPlayer, HumanPlayer


class TestHumanPlayer:
    def test_properties(self) -> None:
        player = HumanPlayer(Color.WHITE)
        assert player.is_human
        assert player.color == Color.WHITE
        assert player.name == "Player (white)"

    def test_request_and_cancel_are_noops(self) -> None:
        player = HumanPlayer(Color.BLACK, "Ada")
        player.request_move(Position())
        player.cancel()
        assert player.name == "Ada"


class TestAIPlayer:
    def test_delegates_to_callbacks(self) -> None:
        requested: list[Position] = []
        cancelled: list[bool] = []
        player = AIPlayer(
            Color.BLACK,
            on_request_move=requested.append,
            on_cancel=lambda: cancelled.append(True),
        )
        pos = Position()
        player.request_move(pos)
        player.cancel()
        assert not player.is_human
        assert requested == [pos]
        assert cancelled == [True]

    def test_without_callbacks(self) -> None:
        player = AIPlayer(Color.WHITE)
        player.request_move(Position())
        player.cancel()
        assert player.name == "Engine"

    def test_repr_names_seat(self) -> None:
        assert repr(AIPlayer(Color.WHITE, "Fairy")) == "AIPlayer(white, 'Fairy')"


class TestGamePhase:
    def test_accepts_moves(self) -> None:
        assert GamePhase.AWAITING_MOVE.accepts_moves
        assert GamePhase.THINKING.accepts_moves
        assert not GamePhase.NOT_STARTED.accepts_moves
        assert not GamePhase.GAME_OVER.accepts_moves
