"""Tests for Qt engine bridge worker."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from metricchess.core.notation import STARTING_FEN
from metricchess.engine.qt_bridge import EngineWorker
from metricchess.engine.search import CancelCheck, SearchLimits, SearchResult

pytestmark = pytest.mark.usefixtures("qapp")


class _FixedEngine:
    def __init__(self, uci: str | None) -> None:
        self.uci = uci
        self.limits: list[SearchLimits] = []
        self.closed = False

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del fen, is_cancelled
        self.limits.append(limits)
        return SearchResult(best_move_uci=self.uci)

    def close(self) -> None:
        self.closed = True


class _CancellingEngine:
    def __init__(self, worker: EngineWorker) -> None:
        self._worker = worker

    def search(
        self,
        _fen: str,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        self._worker.cancel()
        assert is_cancelled is not None and is_cancelled()
        return SearchResult(best_move_uci="a2a4")

    def close(self) -> None:
        pass


class _FailingEngine:
    def search(
        self,
        _fen: str,
        _limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        raise RuntimeError("engine crashed")

    def close(self) -> None:
        pass


class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        worker = EngineWorker(_FixedEngine("a2a4"))
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(STARTING_FEN, 3)

        assert len(best_moves) == 1
        assert best_moves[0][0] == 3
        assert best_moves[0][1] == "a2a4"

    def test_emits_cancelled_when_search_is_cancelled(self) -> None:
        worker = EngineWorker(_FixedEngine(None))
        worker._engine = _CancellingEngine(worker)

        cancelled = QSignalSpy(worker.search_cancelled)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(STARTING_FEN, 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(best_moves) == 0

    def test_cancel_flag_is_cleared_for_next_request(self) -> None:
        worker = EngineWorker(_FixedEngine("a2a4"))
        worker.cancel()
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(STARTING_FEN, 1)

        assert len(best_moves) == 1

    def test_emits_no_move_when_search_returns_none(self) -> None:
        worker = EngineWorker(_FixedEngine(None))

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(STARTING_FEN, 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_emits_error_when_engine_raises(self) -> None:
        worker = EngineWorker(_FailingEngine())
        errors = QSignalSpy(worker.search_error)

        worker.request_move(STARTING_FEN, 5)

        assert len(errors) == 1
        assert errors[0][0] == 5
        assert "engine crashed" in errors[0][1]

    def test_empty_fen_is_an_error(self) -> None:
        engine = _FixedEngine("a2a4")
        worker = EngineWorker(engine)
        errors = QSignalSpy(worker.search_error)

        worker.request_move("", 2)

        assert len(errors) == 1
        assert engine.limits == []

    def test_set_limits_applies_to_next_search(self) -> None:
        engine = _FixedEngine("a2a4")
        worker = EngineWorker(engine, time_limit_ms=200)

        worker.set_limits(750)
        worker.request_move(STARTING_FEN, 1)

        assert engine.limits == [SearchLimits(time_limit_ms=750)]

    def test_close_engine(self) -> None:
        engine = _FixedEngine(None)
        worker = EngineWorker(engine)
        worker.close_engine()
        assert engine.closed
