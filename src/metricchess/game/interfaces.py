"""Abstract seams of the game layer.

:class:`GameController` talks to participants only through :class:`IPlayer`
and is itself described by :class:`IGameController`, so a UI or a test can
drive a game without knowing whether a seat is a person or an engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from metricchess.core.enums import Color

if TYPE_CHECKING:
    from metricchess.core.move import Move
    from metricchess.core.position import Position


class GamePhase(IntEnum):
    """Where the controller's state machine currently is."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()  # a human is to move
    THINKING = auto()  # an engine request is outstanding
    GAME_OVER = auto()

    @property
    def accepts_moves(self) -> bool:
        return self in (GamePhase.AWAITING_MOVE, GamePhase.THINKING)


class IPlayer(ABC):
    """One seat at the board.

    The seat's colour and display name are fixed at construction; subclasses
    decide how a move is produced once :meth:`request_move` is called.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str) -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def request_move(self, position: Position) -> None:
        """Called when it is this seat's turn; *position* is a private copy."""

    @abstractmethod
    def cancel(self) -> None:
        """Withdraw an outstanding move request, if any."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._color}, {self._name!r})"


class IGameController(ABC):
    """Operations a front end may invoke on a running game."""

    @abstractmethod
    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        """Seat both players and start from *fen* (the initial layout if None)."""

    @abstractmethod
    def reset(self) -> None: ...

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Apply *move* for the side to move; False if it is not legal now."""

    @abstractmethod
    def submit_uci(self, text: str) -> bool: ...

    @abstractmethod
    def undo_move(self) -> bool: ...

    @abstractmethod
    def redo_move(self) -> bool: ...
