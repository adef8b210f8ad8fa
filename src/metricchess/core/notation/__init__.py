"""Notation package: FEN, move-log notation and UCI move strings."""

from metricchess.core.notation.fen import (
    STARTING_FEN,
    board_to_fen,
    position_from_fen,
    position_to_fen,
)
from metricchess.core.notation.moves import move_notation, parse_uci

__all__ = [
    "STARTING_FEN",
    "board_to_fen",
    "position_from_fen",
    "position_to_fen",
    "move_notation",
    "parse_uci",
]
