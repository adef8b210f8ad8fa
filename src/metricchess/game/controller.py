"""GameController: the central orchestrator of a Metric Chess game.

Coordinates: Players, GameState, MoveGenerator.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from metricchess.config import GameSettings
from metricchess.core.enums import Color, GameResult
from metricchess.core.move import Move
from metricchess.core.notation import parse_uci
from metricchess.core.variant import VariantRules
from metricchess.game.interfaces import GamePhase, IGameController, IPlayer
from metricchess.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, str, "GameState"], None]  # move, notation, state
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full game: validates moves, switches turns,
    notifies listeners.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).  AI results arrive via ``submit_uci`` from an
    ``EngineSession`` living on the same thread.
    """

    __slots__ = ("_settings", "_state", "_players", "events")

    def __init__(self, settings: GameSettings | None = None) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._state = self._make_state()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    def _make_state(self) -> GameState:
        return GameState(
            rules=VariantRules.from_settings(self._settings),
            orientation=self._settings.orientation,
        )

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def current_player(self) -> IPlayer | None:
        color = self._state.side_to_move
        return self._players.get(color)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        self._cancel_ai()
        self._players = {Color.WHITE: white, Color.BLACK: black}

        self._state = self._make_state()
        self._state.setup(fen)

        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._after_position_change()

    def reset(self) -> None:
        """Start over from the initial layout with the same players."""
        self._cancel_ai()
        self._state.reset()
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._after_position_change()

    def submit_move(self, move: Move) -> bool:
        if not self._state.phase.accepts_moves:
            return False

        if not self._state.apply_move(move):
            return False

        entry = self._state.history[-1]
        self._emit_move(entry.move, entry.notation)
        self._after_position_change()
        return True

    def submit_uci(self, text: str) -> bool:
        """Submit a move given as UCI text; malformed text is rejected."""
        try:
            move = parse_uci(text)
        except ValueError:
            _LOGGER.debug("Rejected malformed UCI move %r", text)
            return False
        return self.submit_move(move)

    def undo_move(self) -> bool:
        if not self._state.history:
            return False

        self._cancel_ai()
        self._state.undo_move()
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._after_position_change()
        return True

    def redo_move(self) -> bool:
        if not self._state.redo_stack:
            return False

        self._cancel_ai()
        self._state.redo_move()
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._after_position_change()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _cancel_ai(self) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

    def _after_position_change(self) -> None:
        result = self._state.result
        if result != GameResult.IN_PROGRESS:
            self._state.phase = GamePhase.GAME_OVER
            self._emit_game_over(result)
            return
        self._prompt_current_player()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            self._state.phase = GamePhase.AWAITING_MOVE
            return

        if cp.is_human:
            self._state.phase = GamePhase.AWAITING_MOVE
            self._emit_phase(GamePhase.AWAITING_MOVE)
        else:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            cp.request_move(self._state.board_snapshot())

    def _emit_move(self, move: Move, notation: str) -> None:
        for cb in self.events.on_move:
            cb(move, notation, self._state)

    def _emit_game_over(self, result: GameResult) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
