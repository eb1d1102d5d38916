"""Game management layer — the session coordinator and its read-only views.

Quick start::

    from deckmate.game import GameController

    ctrl = GameController()
    ctrl.events.on_card.append(lambda card, event, board: print(card.title, event))
    origin, moves = ctrl.legal_moves[0]
    ctrl.submit_move(moves[0])
"""

from deckmate.game.controller import GameController, GameEvents
from deckmate.game.snapshot import GameSnapshot, build_snapshot

__all__ = [
    "GameController",
    "GameEvents",
    "GameSnapshot",
    "build_snapshot",
]
