"""Game management layer — controller, players, state machine.

Quick start::

    from chessbook.game import GameController, Player

    ctrl = GameController(white=Player(1, "Alice"), black=Player(2, "Bob"))
    ctrl.play(1, "e2 e4")
    ctrl.play(2, "e7 e5")
"""

from chessbook.game.controller import GameController, GameEvents
from chessbook.game.interfaces import DrawOffer, GamePhase, IGameController
from chessbook.game.player import Player
from chessbook.game.state import GameState

__all__ = [
    # Interfaces
    "DrawOffer",
    "GamePhase",
    "IGameController",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
    "Player",
]
