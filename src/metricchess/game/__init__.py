"""Game layer: state machine, players and the controller."""

from metricchess.game.controller import GameController, GameEvents
from metricchess.game.interfaces import GamePhase, IGameController, IPlayer
from metricchess.game.player import AIPlayer, HumanPlayer
from metricchess.game.state import GameState, HistoryEntry, NotationEntry

__all__ = [
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GamePhase",
    "GameState",
    "HistoryEntry",
    "HumanPlayer",
    "IGameController",
    "IPlayer",
    "NotationEntry",
]
