"""Pseudo-legal and legal move generation + attack detection."""

from __future__ import annotations

from collections.abc import Callable

from metricchess.core.board import Board
from metricchess.core.enums import Color, PieceType
from metricchess.core.move import Move
from metricchess.core.piece import Piece
from metricchess.core.types import Square, file_of, is_on_board, make_square, rank_of
from metricchess.core.variant import (
    MOVEMENT_RULES,
    MoveKind,
    Offsets,
    VariantRules,
    pawn_direction,
    promotion_rank,
)

_DEFAULT_RULES = VariantRules()


def play_on_board(
    board: Board,
    move: Move,
    rules: VariantRules = _DEFAULT_RULES,
) -> Piece | None:
    """Apply *move* to *board* in place and return the captured piece.

    A pawn landing on its last rank is replaced by ``move.promotion`` or, when
    that is unset, by ``rules.default_promotion``.
    """
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on square {move.from_sq}")
    captured = board[move.to_sq]

    placed = piece
    if piece.piece_type == PieceType.PAWN and rank_of(move.to_sq) == promotion_rank(
        piece.color
    ):
        placed = piece.promoted(move.promotion or rules.default_promotion)

    board[move.from_sq] = None
    board[move.to_sq] = placed
    return captured


class MoveGenerator:
    """Generates moves for the pieces on a :class:`Board`.

    Legality is decided by simulation: every candidate is played on a scratch
    copy of the board, which is then checked for an attacked royal piece.
    The board passed in is never modified.
    """

    __slots__ = ("_board", "_rules", "_dispatch")

    def __init__(self, board: Board, rules: VariantRules | None = None) -> None:
        self._board = board
        self._rules = rules if rules is not None else _DEFAULT_RULES
        self._dispatch: dict[
            MoveKind, Callable[[Square, Piece, Offsets, list[Move]], None]
        ] = {
            MoveKind.SLIDE: self._gen_sliding,
            MoveKind.LEAP: self._gen_leaping,
            MoveKind.PAWN: self._gen_pawn,
        }

    @property
    def board(self) -> Board:
        return self._board

    @property
    def rules(self) -> VariantRules:
        return self._rules

    # -- Public API ---------------------------------------------------------

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """Moves obeying movement and occupancy rules for the piece on *sq*.

        Returns an empty list for an empty square.  Self-check is ignored.
        """
        piece = self._board[sq]
        if piece is None:
            return []
        rule = MOVEMENT_RULES[piece.piece_type]
        moves: list[Move] = []
        self._dispatch[rule.kind](sq, piece, rule.offsets, moves)
        return moves

    def legal_moves(self, sq: Square) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq* that keep its side out of check."""
        piece = self._board[sq]
        if piece is None:
            return []
        return [
            move
            for move in self.pseudo_legal_moves(sq)
            if not self._leaves_in_check(move, piece.color)
        ]

    def generate_pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves for *color* (may leave own king in check)."""
        moves: list[Move] = []
        for sq in self._board.all_pieces(color):
            moves.extend(self.pseudo_legal_moves(sq))
        return moves

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All strictly legal moves for *color*."""
        return [
            move
            for move in self.generate_pseudo_legal_moves(color)
            if not self._leaves_in_check(move, color)
        ]

    def has_legal_move(self, color: Color) -> bool:
        """Whether *color* has at least one legal move (stops at the first)."""
        return any(
            not self._leaves_in_check(move, color)
            for move in self.generate_pseudo_legal_moves(color)
        )

    # -- Attack detection (public) -----------------------------------------

    def royal_squares(self, color: Color) -> list[Square]:
        """Squares of *color*'s royal pieces (the king, plus the heir if royal)."""
        squares: list[Square] = []
        for piece_type in self._rules.royal_types:
            squares.extend(self._board.pieces(color, piece_type))
        return squares

    def is_in_check(self, color: Color) -> bool:
        """Is any of *color*'s royal pieces attacked by the opponent?

        A side with no royal piece on the board is never in check.
        """
        royal = self.royal_squares(color)
        if not royal:
            return False
        return any(
            move.to_sq in royal
            for move in self.generate_pseudo_legal_moves(color.opposite)
        )

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Could a piece of *by_color* capture on *sq* if an enemy stood there?"""
        board = self._board
        target = board[sq]
        if target is None or target.color == by_color:
            board = board.copy()
            board[sq] = Piece(by_color.opposite, PieceType.PAWN)
        gen = MoveGenerator(board, self._rules)
        return any(
            move.to_sq == sq for move in gen.generate_pseudo_legal_moves(by_color)
        )

    # -- Simulation ---------------------------------------------------------

    def _leaves_in_check(self, move: Move, color: Color) -> bool:
        scratch = self._board.copy()
        play_on_board(scratch, move, self._rules)
        return MoveGenerator(scratch, self._rules).is_in_check(color)

    # -- Piece-specific generators (private) -------------------------------

    def _add(
        self, sq: Square, file: int, rank: int, piece: Piece, moves: list[Move]
    ) -> bool:
        """Append a move to (*file*, *rank*) if reachable; True if square was empty."""
        to_sq = make_square(file, rank)
        target = self._board[to_sq]
        if target is None:
            moves.append(Move(sq, to_sq))
            return True
        if target.color != piece.color:
            moves.append(Move(sq, to_sq, is_capture=True))
        return False

    def _gen_sliding(
        self, sq: Square, piece: Piece, offsets: Offsets, moves: list[Move]
    ) -> None:
        origin_file, origin_rank = file_of(sq), rank_of(sq)
        for df, dr in offsets:
            file, rank = origin_file + df, origin_rank + dr
            while is_on_board(file, rank):
                if not self._add(sq, file, rank, piece, moves):
                    break
                file += df
                rank += dr

    def _gen_leaping(
        self, sq: Square, piece: Piece, offsets: Offsets, moves: list[Move]
    ) -> None:
        origin_file, origin_rank = file_of(sq), rank_of(sq)
        for df, dr in offsets:
            file, rank = origin_file + df, origin_rank + dr
            if is_on_board(file, rank):
                self._add(sq, file, rank, piece, moves)

    def _gen_pawn(
        self, sq: Square, piece: Piece, _offsets: Offsets, moves: list[Move]
    ) -> None:
        board = self._board
        file, rank = file_of(sq), rank_of(sq)
        step = pawn_direction(piece.color)

        one_rank = rank + step
        if is_on_board(file, one_rank) and board.is_empty(make_square(file, one_rank)):
            moves.append(Move(sq, make_square(file, one_rank)))
            two_rank = one_rank + step
            if (
                is_on_board(file, two_rank)
                and board.is_empty(make_square(file, two_rank))
                and self._rules.allows_double_step(piece.color, rank)
            ):
                moves.append(Move(sq, make_square(file, two_rank)))

        for df in (-1, 1):
            if not is_on_board(file + df, one_rank):
                continue
            cap_sq = make_square(file + df, one_rank)
            target = board[cap_sq]
            if target is not None and target.color != piece.color:
                moves.append(Move(sq, cap_sq, is_capture=True))
