"""Piece value object and the FEN letters of the eight piece types."""

from __future__ import annotations

from dataclasses import dataclass

from metricchess.core.enums import Color, PieceType

# Lowercase letter per piece type; white pieces use the uppercase form.
PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.TREBUCHET: "t",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.HEIR: "h",
    PieceType.KING: "k",
}

_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in PIECE_LETTERS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """A coloured piece.  Promotion places a new value, never mutates one."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        if self.color == Color.WHITE:
            return self.letter
        return PIECE_LETTERS[self.piece_type]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Parse a FEN character, e.g. ``'T'`` is a white trebuchet."""
        ptype = _TYPES_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    @property
    def letter(self) -> str:
        """Uppercase letter regardless of colour, as used in the move log."""
        return PIECE_LETTERS[self.piece_type].upper()

    def promoted(self, piece_type: PieceType) -> Piece:
        return Piece(self.color, piece_type)
