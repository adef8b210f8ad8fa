"""High-level rules: check, checkmate, stalemate."""

from __future__ import annotations

from metricchess.core.enums import Color, GameResult
from metricchess.core.move_generator import MoveGenerator
from metricchess.core.position import Position
from metricchess.core.variant import VariantRules


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Terminal conditions are computed on demand, never cached.
    """

    @staticmethod
    def is_in_check(position: Position, rules: VariantRules | None = None) -> bool:
        gen = MoveGenerator(position.board, rules)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position, rules: VariantRules | None = None) -> bool:
        gen = MoveGenerator(position.board, rules)
        color = position.side_to_move
        return gen.is_in_check(color) and not gen.has_legal_move(color)

    @staticmethod
    def is_stalemate(position: Position, rules: VariantRules | None = None) -> bool:
        gen = MoveGenerator(position.board, rules)
        color = position.side_to_move
        return not gen.is_in_check(color) and not gen.has_legal_move(color)

    @staticmethod
    def game_result(
        position: Position, rules: VariantRules | None = None
    ) -> GameResult:
        """Determine the current game result."""
        gen = MoveGenerator(position.board, rules)
        color = position.side_to_move

        if gen.has_legal_move(color):
            return GameResult.IN_PROGRESS
        if gen.is_in_check(color):
            return (
                GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
            )
        return GameResult.DRAW  # stalemate
