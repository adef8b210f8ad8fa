"""Engine request orchestration for the main (UI) thread.

An :class:`EngineSession` turns the worker's raw signals into one
:class:`EngineOutcome` per request.  Every move coming back is checked
against the game's own legality filter; anything unusable (malformed text,
an illegal move, no move, an error or a timeout) is replaced by a random
legal move.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThread, QTimer, pyqtSignal

from metricchess.config import EngineSettings
from metricchess.core.enums import Color
from metricchess.core.move import Move
from metricchess.core.notation import parse_uci, position_to_fen
from metricchess.core.position import Position
from metricchess.engine._default import create_engine
from metricchess.engine.fallback import RandomMoveEngine
from metricchess.engine.qt_bridge import EngineWorker
from metricchess.engine.search import (
    EngineOutcome,
    EngineStatus,
    IEngine,
    SearchLimits,
)
from metricchess.game.controller import GameController
from metricchess.game.interfaces import GamePhase
from metricchess.game.player import AIPlayer

_LOGGER = logging.getLogger(__name__)

OutcomeCallback = Callable[[EngineOutcome], None]


class _EngineCommandBus(QObject):
    """Signal bridge living on the main thread.

    Commands are queued to the worker; worker replies are relayed back here so
    the session handlers always run on the main thread.
    """

    request_move = pyqtSignal(str, int)
    set_limits_requested = pyqtSignal(int)

    best_move_ready = pyqtSignal(int, str)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)


class EngineSession:
    """Owns the worker-thread lifecycle and hands engine moves to the controller.

    Requests are tagged with increasing ids; replies whose id or position no
    longer match the pending request are dropped.  Cancellation is idempotent
    and never modifies the board.
    """

    _SHUTDOWN_WAIT_MS = 2000

    __slots__ = (
        "__weakref__",
        "_controller",
        "_settings",
        "_command_bus",
        "_timeout_timer",
        "_engine_thread",
        "_engine_worker",
        "_fallback_engine",
        "_engine_request_id",
        "_pending_engine_request",
        "_pending_engine_fen",
        "_is_shutting_down",
        "_is_started",
        "on_outcome",
    )

    def __init__(
        self,
        *,
        controller: GameController,
        settings: EngineSettings | None = None,
        engine: IEngine | None = None,
        parent: QObject | None = None,
    ) -> None:
        self._controller = controller
        self._settings = settings if settings is not None else EngineSettings()
        self.on_outcome: list[OutcomeCallback] = []

        self._command_bus = _EngineCommandBus(parent)
        self._timeout_timer = QTimer(parent)
        self._timeout_timer.setSingleShot(True)
        self._timeout_timer.timeout.connect(self._on_request_timeout)

        rules = controller.state.rules
        self._engine_thread = QThread(parent)
        self._engine_worker = EngineWorker(
            engine if engine is not None else create_engine(self._settings, rules),
            time_limit_ms=self._settings.time_limit_ms,
        )
        self._fallback_engine = RandomMoveEngine(
            rules, seed=self._settings.fallback_seed
        )

        self._engine_request_id = 0
        self._pending_engine_request: int | None = None
        self._pending_engine_fen: str | None = None
        self._is_shutting_down = False
        self._is_started = False

    @property
    def is_busy(self) -> bool:
        return self._pending_engine_request is not None

    # ── Lifecycle ────────────────────────────────────────────────────────

    def setup(self) -> None:
        """Start engine worker in a dedicated thread and connect callbacks."""
        if self._is_started:
            return
        self._is_shutting_down = False
        bus, worker = self._command_bus, self._engine_worker
        worker.moveToThread(self._engine_thread)
        bus.request_move.connect(worker.request_move)
        bus.set_limits_requested.connect(worker.set_limits)
        worker.best_move_ready.connect(bus.best_move_ready)
        worker.search_cancelled.connect(bus.search_cancelled)
        worker.search_no_move.connect(bus.search_no_move)
        worker.search_error.connect(bus.search_error)
        bus.best_move_ready.connect(self._on_engine_best_move)
        bus.search_cancelled.connect(self._on_engine_cancelled)
        bus.search_no_move.connect(self._on_engine_no_move)
        bus.search_error.connect(self._on_engine_error)
        self._engine_thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Stop any active request, shut down the worker thread and the engine."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel_ai_search()
        self._engine_thread.quit()
        self._engine_thread.wait(self._SHUTDOWN_WAIT_MS)
        # The thread has stopped, so the worker can be closed from here.
        self._engine_worker.close_engine()
        self._is_started = False

    def set_time_limit(self, time_limit_ms: int) -> None:
        """Update the engine time budget for subsequent requests."""
        self._settings.time_limit_ms = time_limit_ms
        if self._is_started:
            self._command_bus.set_limits_requested.emit(time_limit_ms)
            return
        self._engine_worker.set_limits(time_limit_ms)

    def create_ai_player(self, color: Color) -> AIPlayer:
        """Create an AI player wired to this session."""
        return AIPlayer(
            color,
            "Metric Chess AI",
            on_request_move=self.request_ai_move,
            on_cancel=self.cancel_ai_search,
        )

    # ── Requests ─────────────────────────────────────────────────────────

    def request_ai_move(self, position: Position) -> int | None:
        """Send a FEN snapshot of *position* to the engine; returns the request id."""
        if not self._is_started or self._is_shutting_down:
            return None
        self.cancel_ai_search()

        self._engine_request_id += 1
        request_id = self._engine_request_id
        fen = position_to_fen(position.copy())
        self._pending_engine_request = request_id
        self._pending_engine_fen = fen
        self._timeout_timer.start(self._settings.timeout_ms)
        self._command_bus.request_move.emit(fen, request_id)
        return request_id

    def cancel_ai_search(self) -> None:
        """Cancel the pending request, if any.  Safe to call repeatedly."""
        self._timeout_timer.stop()
        request_id = self._pending_engine_request
        if request_id is None:
            return
        self._clear_pending_request()
        self._engine_worker.cancel()
        self._emit_outcome(EngineOutcome(request_id, EngineStatus.CANCELLED))

    # ── Worker replies ───────────────────────────────────────────────────

    def _on_engine_best_move(self, request_id: int, uci: str) -> None:
        if not self._accepts_reply(request_id):
            return
        self._clear_pending_request()

        move = self._validate(uci)
        if move is None:
            self._play_fallback(
                request_id,
                EngineStatus.ILLEGAL_MOVE,
                f"Engine returned unusable move {uci!r}",
            )
            return

        if not self._controller.submit_move(move):
            self._play_fallback(
                request_id,
                EngineStatus.ILLEGAL_MOVE,
                f"Controller rejected engine move {uci!r}",
            )
            return
        self._emit_outcome(
            EngineOutcome(request_id, EngineStatus.BEST_MOVE, move_uci=move.uci)
        )

    def _on_engine_no_move(self, request_id: int) -> None:
        if not self._accepts_reply(request_id):
            return
        self._clear_pending_request()
        self._play_fallback(request_id, EngineStatus.NO_MOVE, "Engine produced no move")

    def _on_engine_error(self, request_id: int, message: str) -> None:
        if not self._accepts_reply(request_id):
            return
        self._clear_pending_request()
        self._play_fallback(request_id, EngineStatus.ERROR, message)

    def _on_engine_cancelled(self, request_id: int) -> None:
        if self._is_shutting_down or request_id != self._pending_engine_request:
            return
        self._clear_pending_request()
        self._emit_outcome(EngineOutcome(request_id, EngineStatus.CANCELLED))

    def _on_request_timeout(self) -> None:
        request_id = self._pending_engine_request
        if request_id is None or not self._accepts_reply(request_id):
            return
        self._clear_pending_request()
        self._engine_worker.cancel()
        self._play_fallback(
            request_id,
            EngineStatus.TIMED_OUT,
            f"No engine reply within {self._settings.timeout_ms} ms",
        )

    # ── Helpers ──────────────────────────────────────────────────────────

    def _accepts_reply(self, request_id: int) -> bool:
        if self._is_shutting_down:
            return False
        if request_id != self._pending_engine_request:
            _LOGGER.debug("Dropping stale engine reply %d", request_id)
            return False
        state = self._controller.state
        if (
            state.phase != GamePhase.THINKING
            or state.generate_fen() != self._pending_engine_fen
        ):
            _LOGGER.debug("Dropping engine reply %d: position changed", request_id)
            self._clear_pending_request()
            return False
        return True

    def _validate(self, uci: str) -> Move | None:
        """Parse *uci* and match it against the current legal moves."""
        try:
            parsed = parse_uci(uci)
        except ValueError:
            return None
        for move in self._controller.state.legal_moves():
            if move.from_sq == parsed.from_sq and move.to_sq == parsed.to_sq:
                return parsed
        return None

    def _play_fallback(
        self, request_id: int, status: EngineStatus, message: str
    ) -> None:
        _LOGGER.warning(
            "Engine request %d failed (%s): %s", request_id, status.name, message
        )
        state = self._controller.state
        result = self._fallback_engine.search(
            state.generate_fen(), SearchLimits(self._settings.time_limit_ms)
        )
        played: str | None = None
        if result.best_move_uci is not None and self._controller.submit_uci(
            result.best_move_uci
        ):
            played = result.best_move_uci
        self._emit_outcome(
            EngineOutcome(
                request_id,
                status,
                move_uci=played,
                message=message,
                used_fallback=played is not None,
            )
        )

    def _clear_pending_request(self) -> None:
        self._timeout_timer.stop()
        self._pending_engine_request = None
        self._pending_engine_fen = None

    def _emit_outcome(self, outcome: EngineOutcome) -> None:
        for cb in self.on_outcome:
            cb(outcome)
