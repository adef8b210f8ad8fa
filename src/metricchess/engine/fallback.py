"""Random legal-move engine, used when no external engine is usable."""

from __future__ import annotations

import random

from metricchess.core.move_generator import MoveGenerator
from metricchess.core.notation import position_from_fen
from metricchess.core.variant import VariantRules
from metricchess.engine.search import CancelCheck, SearchLimits, SearchResult


class RandomMoveEngine:
    """Picks a uniformly random legal move for the side to move.

    Args:
        rules: Variant rules used for legality.
        seed: Optional seed for reproducible games.
    """

    __slots__ = ("_rules", "_rng")

    def __init__(
        self, rules: VariantRules | None = None, seed: int | None = None
    ) -> None:
        self._rules = rules
        self._rng = random.Random(seed)

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del limits, is_cancelled
        position = position_from_fen(fen)
        gen = MoveGenerator(position.board, self._rules)
        moves = gen.generate_legal_moves(position.side_to_move)
        if not moves:
            return SearchResult(best_move_uci=None)
        return SearchResult(best_move_uci=self._rng.choice(moves).uci)

    def close(self) -> None:
        pass
