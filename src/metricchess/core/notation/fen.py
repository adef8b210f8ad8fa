"""FEN parsing and serialization for the 10×10 board.

Empty runs may take two digits (``10``); castling and en passant are not
part of Metric Chess and are always written as ``-``.
"""

from __future__ import annotations

from metricchess.core.board import Board
from metricchess.core.enums import Color
from metricchess.core.piece import Piece
from metricchess.core.position import Position
from metricchess.core.types import BOARD_SIZE, make_square

STARTING_FEN = (
    "trnbqkbnrt/pppppppppp/10/10/10/10/10/10/PPPPPPPPPP/TRNBQKBNRT w - - 0 1"
)


def _parse_rank(rank_text: str, rank: int, board: Board, fen: str) -> None:
    file = 0
    run = ""
    for ch in rank_text + "/":
        if ch.isdigit():
            run += ch
            continue
        if run:
            step = int(run)
            if not (1 <= step <= BOARD_SIZE) or run.startswith("0"):
                raise ValueError(f"Invalid FEN empty run {run!r}: {fen!r}")
            file += step
            run = ""
        if ch == "/":
            break
        if file >= BOARD_SIZE:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
        board[make_square(file, rank)] = Piece.from_char(ch)
        file += 1
    if file != BOARD_SIZE:
        raise ValueError(f"Invalid FEN rank width: {fen!r}")


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid FEN board (must contain 10 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        _parse_rank(rank_text, BOARD_SIZE - 1 - rank_idx, board, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3–4. Castling / en passant are not modelled
    if castling_part != "-":
        raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
    if ep_part != "-":
        raise ValueError(f"Invalid FEN en-passant field: {ep_part!r}")

    # 5–6. Clocks (optional)
    if len(parts) > 4:
        if not parts[4].isdigit():
            raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")

    fullmove = 1
    if len(parts) > 5:
        if not parts[5].isdigit() or int(parts[5]) < 1:
            raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")
        fullmove = int(parts[5])

    move_count = (fullmove - 1) * 2 + (1 if side == Color.BLACK else 0)
    return Position(board, side, move_count)


def board_to_fen(board: Board) -> str:
    """Piece-placement field only, ranks 10 → 1."""
    rows: list[str] = []
    for rank in range(BOARD_SIZE - 1, -1, -1):
        empty = 0
        row = ""
        for file in range(BOARD_SIZE):
            piece = board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    return f"{board_to_fen(pos.board)} {side_str} - - 0 {pos.fullmove_number}"
