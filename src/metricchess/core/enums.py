"""Core enumerations for the Metric Chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Metric Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    TREBUCHET = 4
    ROOK = 5
    QUEEN = 6
    HEIR = 7
    KING = 8


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3


class Orientation(Enum):
    """Screen edge the white side is drawn against.

    Values are clockwise rotations of the canonical (white at bottom) view.
    """

    BOTTOM = 0
    LEFT = 90
    TOP = 180
    RIGHT = 270

    @property
    def degrees(self) -> int:
        return self.value

    def __str__(self) -> str:
        return self.name.lower()


class PawnDoubleStep(IntEnum):
    """Where a pawn may advance two squares at once."""

    ANYWHERE = 0
    HOME_RANK = 1
