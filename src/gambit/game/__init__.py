"""Game management layer: controller, players, game record.

Quick start::

    from gambit.core.enums import Color
    from gambit.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=HumanPlayer(Color.BLACK, "Bob"),
    )
    ctrl.submit_uci("e2e4")
"""

from gambit.game.controller import GameController, GameEvents
from gambit.game.interfaces import GamePhase, IGameController, IPlayer
from gambit.game.player import AIPlayer, HumanPlayer
from gambit.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
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
