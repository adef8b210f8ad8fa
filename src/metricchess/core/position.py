"""Position: board plus side to move and the ply counter."""

from __future__ import annotations

from metricchess.core.board import Board
from metricchess.core.enums import Color


class Position:
    """Snapshot-friendly game position.

    ``move_count`` counts plies played so far; the displayed fullmove number
    is derived from it.
    """

    __slots__ = ("board", "side_to_move", "move_count")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        move_count: int = 0,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.move_count = move_count

    @property
    def fullmove_number(self) -> int:
        return self.move_count // 2 + 1

    def copy(self) -> Position:
        return Position(self.board.copy(), self.side_to_move, self.move_count)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (
            self.board == other.board
            and self.side_to_move == other.side_to_move
            and self.move_count == other.move_count
        )

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move}, "
            f"move_count={self.move_count})\n{self.board!r}"
        )
