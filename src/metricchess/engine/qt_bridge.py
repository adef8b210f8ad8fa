"""Qt bridge to run engine requests in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from metricchess.engine._default import create_engine
from metricchess.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that asks the engine for moves on demand.

    Requests carry a FEN string, never a live position, so the worker shares
    no mutable state with the main thread.
    """

    best_move_ready = pyqtSignal(int, str)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_limits")

    def __init__(
        self,
        engine: IEngine | None = None,
        *,
        time_limit_ms: int = 1000,
    ) -> None:
        super().__init__()
        self._engine = engine if engine is not None else create_engine()
        self._limits = SearchLimits(time_limit_ms=time_limit_ms)
        self._cancel_event = threading.Event()

    @pyqtSlot(str, int)
    def request_move(self, fen: str, request_id: int) -> None:
        """Ask the engine for a move in *fen* and emit the result."""
        if not fen:
            self.search_error.emit(request_id, "Engine received empty position")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                fen,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.warning("Engine request %d failed: %s", request_id, exc)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move_uci is None:
            self.search_no_move.emit(request_id)
            return

        self.best_move_ready.emit(request_id, result.best_move_uci)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search.

        Only sets a ``threading.Event``, so it may be called from any thread.
        """
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_limits(self, time_limit_ms: int) -> None:
        """Update the time budget (takes effect on the next request)."""
        self._limits = SearchLimits(time_limit_ms=time_limit_ms)

    @pyqtSlot()
    def close_engine(self) -> None:
        """Release the engine process, if any."""
        self._engine.close()
