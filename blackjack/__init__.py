"""Console blackjack: hand scoring, turn decisions and the round loop."""

from blackjack.cards import Card, Deck, DeckSource, Rank, StackedDeck, Suit
from blackjack.console import EndOfInputError, UserIo
from blackjack.hand import Hand, compare_hands, is_natural, score_hand
from blackjack.player import Player

__all__ = [
    "Card",
    "Deck",
    "DeckSource",
    "StackedDeck",
    "Rank",
    "Suit",
    "Hand",
    "score_hand",
    "is_natural",
    "compare_hands",
    "Player",
    "UserIo",
    "EndOfInputError",
]
