"""Game management layer — controller, players, state machine.

Quick start::

    from callchess.core import Color
    from callchess.game import AIPlayer, GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE),
        black=AIPlayer(Color.BLACK, "Sam"),
    )
    ctrl.select_cell(6, 4)
    ctrl.select_cell(4, 4)
"""

from callchess.game.controller import GameController, GameEvents
from callchess.game.interfaces import (
    GameEndReason,
    GamePhase,
    IGameController,
    IPlayer,
)
from callchess.game.player import AIPlayer, HumanPlayer
from callchess.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GameEndReason",
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
]
