"""Square type alias and coordinate helpers.

Board layout (rank-major, file-minor):
    a1=0,  b1=1,  ..., j1=9
    a2=10, b2=11, ..., j2=19
    ...
    a10=90, b10=91, ..., j10=99
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = int  # 0–99

BOARD_SIZE = 10
SQUARE_COUNT = BOARD_SIZE * BOARD_SIZE

FILE_LETTERS = "abcdefghij"


def file_of(sq: Square) -> int:
    """File index 0–9 (a–j)."""
    return sq % BOARD_SIZE


def rank_of(sq: Square) -> int:
    """Rank index 0–9 (1–10)."""
    return sq // BOARD_SIZE


def is_on_board(file: int, rank: int) -> bool:
    """Whether (*file*, *rank*) lies inside the 10×10 board."""
    return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–9) and rank (0–9)."""
    if not is_on_board(file, rank):
        raise ValueError(f"Coordinates out of range: ({file}, {rank})")
    return rank * BOARD_SIZE + file


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0 → 'a1', 99 → 'j10'."""
    return FILE_LETTERS[file_of(sq)] + str(rank_of(sq) + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 34, 'j10' → 99."""
    if (
        not 2 <= len(name) <= 3
        or name[0] not in FILE_LETTERS
        or not name[1:].isdigit()
        or name[1] == "0"
    ):
        raise ValueError(f"Invalid square name: {name!r}")
    rank = int(name[1:]) - 1
    if rank >= BOARD_SIZE:
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(ord(name[0]) - ord("a"), rank)


def is_valid_square(sq: int) -> bool:
    """Check whether integer is a valid square index."""
    return 0 <= sq < SQUARE_COUNT
