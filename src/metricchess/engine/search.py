"""Shared engine models and protocol.

Engines speak FEN in, UCI move text out.  They never touch live game
objects, so a request can run on another thread without sharing state.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Protocol

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Constraints for a single move computation."""

    time_limit_ms: int = 1000


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Raw engine answer; ``best_move_uci`` is ``None`` when it has no move."""

    best_move_uci: str | None


class IEngine(Protocol):
    """Protocol for engines used by the game layer."""

    def search(
        self,
        fen: str,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...

    def close(self) -> None: ...


class EngineStatus(IntEnum):
    """How an engine request ended."""

    BEST_MOVE = auto()
    NO_MOVE = auto()
    ILLEGAL_MOVE = auto()  # malformed or not legal in the position
    TIMED_OUT = auto()
    CANCELLED = auto()
    ERROR = auto()


@dataclass(slots=True, frozen=True)
class EngineOutcome:
    """Single result for one engine request, success or failure.

    ``move_uci`` is the move actually played, which is the fallback move when
    ``used_fallback`` is set.  It is ``None`` when nothing was played.
    """

    request_id: int
    status: EngineStatus
    move_uci: str | None = None
    message: str = ""
    used_fallback: bool = False

    @property
    def ok(self) -> bool:
        return self.status == EngineStatus.BEST_MOVE
