"""Game management layer — controller, players and input events.

Quick start::

    from konane.core import Color
    from konane.game import AIPlayer, GameController

    ctrl = GameController()
    ctrl.new_game(
        black=AIPlayer(Color.BLACK, depth=3),
        white=AIPlayer(Color.WHITE, depth=3),
        board_size=6,
    )
    result = ctrl.run_until_over()
"""

from konane.game.controller import GameController, GameEvents
from konane.game.interfaces import (
    InputCancelled,
    IPlayer,
    JumpSelected,
    PlayerInput,
    PositionSelected,
)
from konane.game.player import AIPlayer, HumanPlayer

__all__ = [
    # Interfaces
    "IPlayer",
    "InputCancelled",
    "JumpSelected",
    "PlayerInput",
    "PositionSelected",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "HumanPlayer",
]
