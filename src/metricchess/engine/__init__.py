"""Engine package: external UCI engine, fallback engine and Qt worker bridge."""

from metricchess.engine._default import create_engine
from metricchess.engine.fallback import RandomMoveEngine
from metricchess.engine.qt_bridge import EngineWorker
from metricchess.engine.search import (
    EngineOutcome,
    EngineStatus,
    IEngine,
    SearchLimits,
    SearchResult,
)
from metricchess.engine.uci import UciEngine, UciEngineError

__all__ = [
    "EngineOutcome",
    "EngineStatus",
    "EngineWorker",
    "IEngine",
    "RandomMoveEngine",
    "SearchLimits",
    "SearchResult",
    "UciEngine",
    "UciEngineError",
    "create_engine",
]
