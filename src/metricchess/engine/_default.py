"""Resolves the engine to use from settings without import cycles.

Both ``metricchess.engine.__init__`` and ``metricchess.engine.qt_bridge``
import from here instead of from each other.
"""

from __future__ import annotations

from metricchess.config import EngineSettings
from metricchess.core.variant import VariantRules
from metricchess.engine.fallback import RandomMoveEngine
from metricchess.engine.search import IEngine
from metricchess.engine.uci import UciEngine


def create_engine(
    settings: EngineSettings | None = None, rules: VariantRules | None = None
) -> IEngine:
    """External UCI engine when one is configured, random mover otherwise."""
    settings = settings if settings is not None else EngineSettings()
    if settings.engine_path:
        return UciEngine(
            settings.engine_path,
            variant_name=settings.variant_name,
            variant_path=settings.variant_path or None,
            startup_timeout=settings.startup_timeout_s,
            timeout_grace_ms=settings.timeout_grace_ms,
        )
    return RandomMoveEngine(rules, seed=settings.fallback_seed)


__all__ = ["create_engine"]
