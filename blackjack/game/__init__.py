"""Turn controller, round loop and event system."""

from blackjack.game.events import EventEmitter, EventType, GameEvent, log_event
from blackjack.game.rules import RuleSet
from blackjack.game.state import Decision, GameState, TurnState
from blackjack.game.turn import TurnController
from blackjack.game.engine import BlackjackGame

__all__ = [
    "EventEmitter",
    "EventType",
    "GameEvent",
    "log_event",
    "RuleSet",
    "Decision",
    "GameState",
    "TurnState",
    "TurnController",
    "BlackjackGame",
]
