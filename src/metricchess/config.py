"""User-tunable settings for games and the external engine."""

from __future__ import annotations

from dataclasses import dataclass

from metricchess.core.enums import Orientation, PawnDoubleStep


@dataclass
class GameSettings:
    orientation: Orientation = Orientation.BOTTOM
    pawn_double_step: PawnDoubleStep = PawnDoubleStep.ANYWHERE
    royal_heir: bool = False


@dataclass
class EngineSettings:
    """How the AI opponent is consulted.

    ``engine_path`` points at a UCI engine that understands 10×10 variants
    (e.g. Fairy-Stockfish).  When it is empty the random fallback engine
    plays instead.
    """

    engine_path: str = ""
    variant_name: str = "metricchess"
    variant_path: str = ""
    time_limit_ms: int = 1000
    timeout_grace_ms: int = 2000
    startup_timeout_s: float = 10.0
    fallback_seed: int | None = None

    @property
    def timeout_ms(self) -> int:
        """Hard deadline for one engine request."""
        return self.time_limit_ms + self.timeout_grace_ms
