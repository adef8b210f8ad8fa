"""Move notation: the coordinate move log and UCI move strings."""

from __future__ import annotations

import re

from metricchess.core.move import Move
from metricchess.core.piece import PIECE_LETTERS, Piece
from metricchess.core.types import file_of, make_square, rank_of
from metricchess.core.variant import PROMOTION_TYPES

_PROMOTION_BY_LETTER = {PIECE_LETTERS[pt]: pt for pt in PROMOTION_TYPES}

_UCI_RE = re.compile(
    r"^([a-j])(\d{1,2})([a-j])(\d{1,2})([" + "".join(_PROMOTION_BY_LETTER) + r"])?$"
)


def move_notation(piece: Piece, move: Move, *, is_capture: bool) -> str:
    """Coordinate notation used in the move log.

    Format is ``<letter><file><rank>-<file><rank>`` with 0-based digits and
    ``x`` instead of ``-`` for captures, e.g. ``P01-03`` or ``T00x33``.
    A promotion appends ``=<letter>``.
    """
    sep = "x" if is_capture else "-"
    text = (
        f"{piece.letter}{file_of(move.from_sq)}{rank_of(move.from_sq)}"
        f"{sep}{file_of(move.to_sq)}{rank_of(move.to_sq)}"
    )
    if move.promotion is not None:
        text += "=" + PIECE_LETTERS[move.promotion].upper()
    return text


def _parse_rank(text: str, uci: str) -> int:
    rank = int(text) - 1
    if not 0 <= rank <= 9 or text.startswith("0"):
        raise ValueError(f"Invalid UCI move rank: {uci!r}")
    return rank


def parse_uci(text: str) -> Move:
    """Parse a 10×10 UCI move such as ``a2a4``, ``j10j9`` or ``b9b10q``.

    Board rank is the written rank minus one.  Raises ``ValueError`` on
    malformed text; legality is not checked here.
    """
    uci = text.strip().lower()
    match = _UCI_RE.match(uci)
    if match is None:
        raise ValueError(f"Invalid UCI move: {text!r}")
    from_file, from_rank, to_file, to_rank, promo = match.groups()
    from_sq = make_square(ord(from_file) - ord("a"), _parse_rank(from_rank, text))
    to_sq = make_square(ord(to_file) - ord("a"), _parse_rank(to_rank, text))
    if from_sq == to_sq:
        raise ValueError(f"Invalid UCI move (null move): {text!r}")
    promotion = _PROMOTION_BY_LETTER[promo] if promo else None
    return Move(from_sq, to_sq, promotion=promotion)
