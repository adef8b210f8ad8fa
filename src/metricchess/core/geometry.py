"""Board orientation: grid rotation and board ↔ screen coordinates.

Every transform here goes through one primitive, a clockwise quarter turn
of a square grid.  The board is laid out on a 12×12 display grid (10×10
board plus a one-cell label border) before rotation:

* board rank ``r`` sits on grid row ``10 - r``; board file ``f`` on column ``f + 1``
* file labels run along row 11, rank labels along column 0
* corners carry square-colour markers: ``D`` (dark) top-left / bottom-right,
  ``L`` (light) top-right / bottom-left
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from metricchess.core.board import Board
from metricchess.core.enums import Orientation
from metricchess.core.types import BOARD_SIZE, Square, file_of, make_square, rank_of

T = TypeVar("T")

GRID_SIZE = BOARD_SIZE + 2

DARK_SQUARE = "·"
LIGHT_SQUARE = "."
DARK_CORNER = "D"
LIGHT_CORNER = "L"


# -- Rotation primitive ---------------------------------------------------


def _quarter_turns(degrees: int) -> int:
    if degrees % 90 != 0:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
    return (degrees // 90) % 4


def rotate_cell(x: int, y: int, size: int, degrees: int) -> tuple[int, int]:
    """Where cell (*x*, *y*) of a *size* grid lands after a clockwise turn.

    *x* is the row and *y* the column.  One quarter turn maps
    ``(x, y) → (y, size - 1 - x)``.
    """
    for _ in range(_quarter_turns(degrees)):
        x, y = y, size - 1 - x
    return x, y


def rotate_grid(grid: Sequence[Sequence[T]], degrees: int) -> list[list[T]]:
    """Return a copy of square *grid* rotated clockwise by *degrees*.

    The input is left untouched.  Raises ``ValueError`` unless *degrees* is a
    multiple of 90.
    """
    turns = _quarter_turns(degrees)
    result = [list(row) for row in grid]
    size = len(result)
    if any(len(row) != size for row in result):
        raise ValueError("Grid must be square")

    for _ in range(turns):
        rotated: list[list[T]] = [list(row) for row in result]
        for x in range(size):
            for y in range(size):
                rotated[y][size - 1 - x] = result[x][y]
        result = rotated
    return result


# -- Board ↔ screen -------------------------------------------------------


def _board_to_grid(sq: Square) -> tuple[int, int]:
    return BOARD_SIZE - rank_of(sq), file_of(sq) + 1


def board_to_screen(sq: Square, orientation: Orientation) -> tuple[int, int]:
    """Screen cell ``(column, row)`` of board square *sq*.

    Columns grow to the right and rows downward, both 0–9 on the play area.
    """
    row, col = rotate_cell(*_board_to_grid(sq), GRID_SIZE, orientation.degrees)
    return col - 1, row - 1


def screen_to_board(col: int, row: int, orientation: Orientation) -> Square:
    """Board square under screen cell (*col*, *row*); inverse of :func:`board_to_screen`."""
    if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
        raise ValueError(f"Screen cell out of range: ({col}, {row})")
    grid_row, grid_col = rotate_cell(
        row + 1, col + 1, GRID_SIZE, 360 - orientation.degrees
    )
    return make_square(grid_col - 1, BOARD_SIZE - grid_row)


# -- Text rendering -------------------------------------------------------


def is_dark_square(sq: Square) -> bool:
    return (file_of(sq) + rank_of(sq)) % 2 == 1


def display_grid(board: Board | None = None) -> list[list[str]]:
    """Unrotated 12×12 grid with pieces, empty-square marks and labels."""
    grid = [[" "] * GRID_SIZE for _ in range(GRID_SIZE)]
    for sq in range(BOARD_SIZE * BOARD_SIZE):
        row, col = _board_to_grid(sq)
        piece = board[sq] if board is not None else None
        if piece is not None:
            grid[row][col] = str(piece)
        else:
            grid[row][col] = DARK_SQUARE if is_dark_square(sq) else LIGHT_SQUARE

    last = GRID_SIZE - 1
    for i in range(BOARD_SIZE):
        grid[last][i + 1] = str(i)
        grid[i + 1][0] = str(BOARD_SIZE - 1 - i)

    grid[0][0] = DARK_CORNER
    grid[last][last] = DARK_CORNER
    grid[0][last] = LIGHT_CORNER
    grid[last][0] = LIGHT_CORNER
    return grid


def border_labels(orientation: Orientation) -> dict[str, list[str]]:
    """Coordinate labels along each screen edge after rotation.

    Edges without labels come back as lists of blanks.
    """
    grid = rotate_grid(display_grid(), orientation.degrees)
    last = GRID_SIZE - 1
    inner = slice(1, last)
    return {
        "top": [cell.strip() for cell in grid[0][inner]],
        "bottom": [cell.strip() for cell in grid[last][inner]],
        "left": [row[0].strip() for row in grid[inner]],
        "right": [row[last].strip() for row in grid[inner]],
    }


def render_text(board: Board, orientation: Orientation = Orientation.BOTTOM) -> str:
    """Plain-text board seen from *orientation*."""
    grid = rotate_grid(display_grid(board), orientation.degrees)
    return "\n".join(" ".join(row).rstrip() for row in grid)
