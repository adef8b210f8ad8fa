"""Board - piece placement on a 10x10 board."""

from __future__ import annotations

from collections.abc import Iterator

from metricchess.core.enums import Color, PieceType
from metricchess.core.piece import Piece
from metricchess.core.types import (
    BOARD_SIZE,
    FILE_LETTERS,
    SQUARE_COUNT,
    Square,
    make_square,
)

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.TREBUCHET,
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
    PieceType.TREBUCHET,
)


class Board:
    """Mutable 100-square board.

    Squares hold immutable :class:`Piece` values, so :meth:`copy` is a
    structural copy that never aliases the original.
    """

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * SQUARE_COUNT

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._squares[sq] = piece

    def piece_at(self, file: int, rank: int) -> Piece | None:
        """Piece on (*file*, *rank*); raises ``ValueError`` off the board."""
        return self._squares[make_square(file, rank)]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every occupied square."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        return [
            sq
            for sq, piece in self.occupied()
            if piece.color == color and piece.piece_type == piece_type
        ]

    def all_pieces(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` when it is not on the board."""
        kings = self.pieces(color, PieceType.KING)
        return kings[0] if kings else None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        return b

    def clear(self) -> None:
        self._squares = [None] * SQUARE_COUNT

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Metric Chess starting position."""
        b = cls()
        last = BOARD_SIZE - 1
        for f in range(BOARD_SIZE):
            b[make_square(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(f, last - 1)] = Piece(Color.BLACK, PieceType.PAWN)

        for f, pt in enumerate(BACK_RANK):
            b[make_square(f, 0)] = Piece(Color.WHITE, pt)
            b[make_square(f, last)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for file in range(BOARD_SIZE):
                p = self[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1:>2} {' '.join(row)}")
        rows.append("   " + " ".join(FILE_LETTERS))
        return "\n".join(rows)
