"""Human and engine-backed seats."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from metricchess.core.enums import Color
from metricchess.game.interfaces import IPlayer

if TYPE_CHECKING:
    from metricchess.core.position import Position

RequestMoveCallback = Callable[["Position"], None]
CancelCallback = Callable[[], None]


class HumanPlayer(IPlayer):
    """Moves arrive through ``GameController.submit_move`` from the front end."""

    __slots__ = ()

    def __init__(self, color: Color, name: str = "") -> None:
        super().__init__(color, name or f"Player ({color})")

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position) -> None:
        del position

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """Seat whose moves come from an engine.

    The player itself holds no engine.  ``on_request_move`` and ``on_cancel``
    are normally bound to an ``EngineSession``, which answers by calling back
    into the controller; either may be omitted for a seat that never moves.
    """

    __slots__ = ("_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        on_request_move: RequestMoveCallback | None = None,
        on_cancel: CancelCallback | None = None,
    ) -> None:
        super().__init__(color, name)
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, position: Position) -> None:
        if self._on_request_move is not None:
            self._on_request_move(position)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
