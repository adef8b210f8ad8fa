"""Game state machine: move application, undo/redo history and notation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from metricchess.core.enums import Color, GameResult, Orientation, PieceType
from metricchess.core.move import Move
from metricchess.core.move_generator import MoveGenerator, play_on_board
from metricchess.core.notation import (
    STARTING_FEN,
    move_notation,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from metricchess.core.rules import Rules
from metricchess.core.types import rank_of
from metricchess.core.variant import PROMOTION_TYPES, VariantRules, promotion_rank
from metricchess.game.interfaces import GamePhase

if TYPE_CHECKING:
    from collections.abc import Mapping

    from metricchess.core.board import Board
    from metricchess.core.piece import Piece
    from metricchess.core.position import Position
    from metricchess.core.types import Square

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NotationEntry:
    """One line of the move log; both plies of a pair share ``move_number``."""

    move_number: int
    player: Color
    notation: str


@dataclass(frozen=True, slots=True)
class _Snapshot:
    position: Position
    captured: Mapping[Color, tuple[Piece, ...]]
    notation: tuple[NotationEntry, ...]


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """A played move with the full state before and after it.

    Undo restores ``before``; redo restores ``after``.  Snapshots are private
    copies and never alias the live board.
    """

    move: Move
    notation: str
    captured: Piece | None
    before: _Snapshot
    after: _Snapshot


@dataclass
class GameState:
    """Owns the board, side to move, history/redo stacks and move log.

    This is a pure data/logic class with no threading or UI.  Invalid requests
    return ``False`` and leave the state untouched.
    """

    rules: VariantRules = field(default_factory=VariantRules)
    orientation: Orientation = Orientation.BOTTOM
    position: Position = field(init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    history: list[HistoryEntry] = field(default_factory=list, init=False)
    redo_stack: list[HistoryEntry] = field(default_factory=list, init=False)
    captured_pieces: dict[Color, list[Piece]] = field(init=False)
    notation_log: list[NotationEntry] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)

    def __post_init__(self) -> None:
        self.reset()

    # ── Initialisation ───────────────────────────────────────────────────

    def reset(self) -> None:
        """Restore the starting layout and clear every stack and counter."""
        self.setup(STARTING_FEN)

    def setup(self, fen: str | None = None) -> None:
        """Initialise the game from *fen* (the starting layout by default)."""
        self.start_fen = fen or STARTING_FEN
        self.position = position_from_fen(self.start_fen)
        self.history.clear()
        self.redo_stack.clear()
        self.captured_pieces = {Color.WHITE: [], Color.BLACK: []}
        self.notation_log.clear()
        self.phase = GamePhase.AWAITING_MOVE

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self.position.board

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def move_count(self) -> int:
        return self.position.move_count

    @property
    def last_move(self) -> Move | None:
        return self.history[-1].move if self.history else None

    @property
    def result(self) -> GameResult:
        return Rules.game_result(self.position, self.rules)

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    def _generator(self) -> MoveGenerator:
        return MoveGenerator(self.position.board, self.rules)

    # ── Queries ──────────────────────────────────────────────────────────

    def available_moves(self, sq: Square) -> list[Move]:
        """Legal moves for the piece on *sq* if it belongs to the side to move."""
        piece = self.board[sq]
        if piece is None or piece.color != self.side_to_move:
            return []
        return self._generator().legal_moves(sq)

    def legal_moves(self) -> list[Move]:
        """All legal moves for the side to move."""
        return self._generator().generate_legal_moves(self.side_to_move)

    def is_in_check(self, color: Color | None = None) -> bool:
        return self._generator().is_in_check(
            self.side_to_move if color is None else color
        )

    def is_check(self) -> bool:
        return self.is_in_check()

    def is_checkmate(self) -> bool:
        return Rules.is_checkmate(self.position, self.rules)

    def is_stalemate(self) -> bool:
        return Rules.is_stalemate(self.position, self.rules)

    def generate_fen(self) -> str:
        return position_to_fen(self.position)

    def board_snapshot(self) -> Position:
        """Independent copy of the position, safe to hand to another thread."""
        return self.position.copy()

    # ── Move application ─────────────────────────────────────────────────

    def move_piece(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Play the piece on *from_sq* to *to_sq* if that move is legal.

        A pawn reaching its last rank becomes *promotion*, or the variant's
        default promotion piece (a queen) when none is given.
        """
        piece = self.board[from_sq]
        if piece is None or piece.color != self.side_to_move:
            _LOGGER.debug("Rejected move from %s: no piece of side to move", from_sq)
            return False

        candidate = next(
            (m for m in self.available_moves(from_sq) if m.to_sq == to_sq), None
        )
        if candidate is None:
            _LOGGER.debug("Rejected illegal move %s -> %s", from_sq, to_sq)
            return False

        promotes = piece.piece_type == PieceType.PAWN and rank_of(
            to_sq
        ) == promotion_rank(piece.color)
        if promotes and promotion is not None and promotion not in PROMOTION_TYPES:
            _LOGGER.debug("Rejected promotion to %s", promotion.name)
            return False

        move = Move(
            from_sq,
            to_sq,
            is_capture=candidate.is_capture,
            promotion=(promotion or self.rules.default_promotion) if promotes else None,
        )

        before = self._snapshot()
        notation = move_notation(piece, move, is_capture=move.is_capture)
        captured = play_on_board(self.position.board, move, self.rules)
        if captured is not None:
            self.captured_pieces[piece.color].append(captured)
        self.notation_log.append(
            NotationEntry(self.position.fullmove_number, piece.color, notation)
        )
        self.position.side_to_move = self.side_to_move.opposite
        self.position.move_count += 1

        self.history.append(
            HistoryEntry(
                move=move,
                notation=notation,
                captured=captured,
                before=before,
                after=self._snapshot(),
            )
        )
        self.redo_stack.clear()
        return True

    def apply_move(self, move: Move) -> bool:
        return self.move_piece(move.from_sq, move.to_sq, move.promotion)

    def apply_uci(self, text: str) -> bool:
        """Parse and play an externally produced UCI move; ``False`` if unusable."""
        try:
            move = parse_uci(text)
        except ValueError:
            _LOGGER.debug("Rejected malformed UCI move %r", text)
            return False
        return self.apply_move(move)

    # ── History ──────────────────────────────────────────────────────────

    def undo_move(self) -> bool:
        if not self.history:
            return False
        entry = self.history.pop()
        self._restore(entry.before)
        self.redo_stack.append(entry)
        return True

    def redo_move(self) -> bool:
        if not self.redo_stack:
            return False
        entry = self.redo_stack.pop()
        self._restore(entry.after)
        self.history.append(entry)
        return True

    def _snapshot(self) -> _Snapshot:
        return _Snapshot(
            position=self.position.copy(),
            captured=MappingProxyType(
                {color: tuple(pieces) for color, pieces in self.captured_pieces.items()}
            ),
            notation=tuple(self.notation_log),
        )

    def _restore(self, snapshot: _Snapshot) -> None:
        self.position = snapshot.position.copy()
        self.captured_pieces = {
            color: list(pieces) for color, pieces in snapshot.captured.items()
        }
        self.notation_log[:] = snapshot.notation
