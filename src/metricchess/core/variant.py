"""Variant rule switches and the per-piece movement table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING

from metricchess.core.enums import Color, PawnDoubleStep, PieceType
from metricchess.core.types import BOARD_SIZE

if TYPE_CHECKING:
    from collections.abc import Mapping

    from metricchess.config import GameSettings


Offsets = tuple[tuple[int, int], ...]

KNIGHT_OFFSETS: Offsets = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: Offsets = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: Offsets = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: Offsets = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: Offsets = BISHOP_DIRS + ROOK_DIRS

TREBUCHET_RANGE = 3


def _ring(distance: int) -> Offsets:
    """All offsets at exactly Chebyshev *distance* from the origin."""
    return tuple(
        (df, dr)
        for df in range(-distance, distance + 1)
        for dr in range(-distance, distance + 1)
        if max(abs(df), abs(dr)) == distance
    )


TREBUCHET_OFFSETS: Offsets = _ring(TREBUCHET_RANGE)


class MoveKind(IntEnum):
    """How a piece uses its offsets."""

    SLIDE = auto()  # repeat each direction until blocked
    LEAP = auto()  # single jump per offset
    PAWN = auto()  # forward push plus diagonal capture


@dataclass(frozen=True, slots=True)
class MovementRule:
    kind: MoveKind
    offsets: Offsets


MOVEMENT_RULES: Mapping[PieceType, MovementRule] = MappingProxyType(
    {
        PieceType.QUEEN: MovementRule(MoveKind.SLIDE, QUEEN_DIRS),
        PieceType.ROOK: MovementRule(MoveKind.SLIDE, ROOK_DIRS),
        PieceType.BISHOP: MovementRule(MoveKind.SLIDE, BISHOP_DIRS),
        PieceType.KING: MovementRule(MoveKind.LEAP, KING_OFFSETS),
        PieceType.HEIR: MovementRule(MoveKind.LEAP, KING_OFFSETS),
        PieceType.KNIGHT: MovementRule(MoveKind.LEAP, KNIGHT_OFFSETS),
        PieceType.TREBUCHET: MovementRule(MoveKind.LEAP, TREBUCHET_OFFSETS),
        PieceType.PAWN: MovementRule(MoveKind.PAWN, ()),
    }
)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.TREBUCHET,
    PieceType.HEIR,
)


def pawn_direction(color: Color) -> int:
    return 1 if color == Color.WHITE else -1


def pawn_home_rank(color: Color) -> int:
    return 1 if color == Color.WHITE else BOARD_SIZE - 2


def promotion_rank(color: Color) -> int:
    return BOARD_SIZE - 1 if color == Color.WHITE else 0


@dataclass(frozen=True, slots=True)
class VariantRules:
    """Rule switches that differ between Metric Chess rule sets.

    Args:
        pawn_double_step: Where pawns may advance two squares.  The classic
            Metric Chess rule allows it from any rank.
        royal_heir: When set, the heir is also a royal piece: attacking it
            gives check and it may not be left en prise.
        default_promotion: Piece a pawn becomes on the last rank when the
            caller does not choose one.
    """

    pawn_double_step: PawnDoubleStep = PawnDoubleStep.ANYWHERE
    royal_heir: bool = False
    default_promotion: PieceType = PieceType.QUEEN

    def __post_init__(self) -> None:
        if self.default_promotion not in PROMOTION_TYPES:
            raise ValueError(
                f"Invalid default promotion: {self.default_promotion.name}"
            )

    @property
    def royal_types(self) -> tuple[PieceType, ...]:
        if self.royal_heir:
            return (PieceType.KING, PieceType.HEIR)
        return (PieceType.KING,)

    def allows_double_step(self, color: Color, rank: int) -> bool:
        if self.pawn_double_step == PawnDoubleStep.ANYWHERE:
            return True
        return rank == pawn_home_rank(color)

    @classmethod
    def from_settings(cls, settings: GameSettings) -> VariantRules:
        return cls(
            pawn_double_step=settings.pawn_double_step,
            royal_heir=settings.royal_heir,
        )
