"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass, field

from metricchess.core.enums import PieceType
from metricchess.core.piece import PIECE_LETTERS
from metricchess.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A transient request to move the piece on ``from_sq`` to ``to_sq``.

    ``is_capture`` is informational and excluded from equality, so a move
    typed in by a player matches the generated one for the same squares.
    """

    from_sq: Square
    to_sq: Square
    is_capture: bool = field(default=False, compare=False)
    promotion: PieceType | None = None

    @property
    def uci(self) -> str:
        """Long-algebraic text on the 10×10 board, e.g. ``a2a4`` or ``b9b10q``."""
        suffix = PIECE_LETTERS[self.promotion] if self.promotion is not None else ""
        return square_name(self.from_sq) + square_name(self.to_sq) + suffix

    def __str__(self) -> str:
        return self.uci
