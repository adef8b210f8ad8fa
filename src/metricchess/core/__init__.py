"""Core domain layer: pure Metric Chess logic with zero external dependencies.

Quick start::

    from metricchess.core import Board, MoveGenerator, make_square

    board = Board.initial()
    gen = MoveGenerator(board)
    for move in gen.legal_moves(make_square(0, 0)):
        print(move)
"""

from metricchess.core.board import Board
from metricchess.core.enums import (
    Color,
    GameResult,
    Orientation,
    PawnDoubleStep,
    PieceType,
)
from metricchess.core.geometry import (
    board_to_screen,
    render_text,
    rotate_grid,
    screen_to_board,
)
from metricchess.core.move import Move
from metricchess.core.move_generator import MoveGenerator
from metricchess.core.notation import (
    STARTING_FEN,
    move_notation,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from metricchess.core.piece import Piece
from metricchess.core.position import Position
from metricchess.core.rules import Rules
from metricchess.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)
from metricchess.core.variant import VariantRules

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "Orientation",
    "PawnDoubleStep",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "VariantRules",
    # Geometry
    "board_to_screen",
    "render_text",
    "rotate_grid",
    "screen_to_board",
    # Notation
    "STARTING_FEN",
    "move_notation",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
