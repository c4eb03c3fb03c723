"""Pytest fixtures for console blackjack tests."""

import io
from random import Random

import pytest

from blackjack.cards import Card, Deck, Rank, StackedDeck, Suit
from blackjack.console import UserIo
from blackjack.hand import Hand
from blackjack.player import Player
from blackjack.game import EventEmitter, RuleSet, TurnController


def make_hand(*ranks: int, bet: int = 0) -> Hand:
    """Build a hand from rank numbers, cycling through the suits."""
    suits = list(Suit)
    return Hand(
        cards=[Card(Rank(rank), suits[i % len(suits)]) for i, rank in enumerate(ranks)],
        bet=bet,
    )


class Table:
    """A turn controller wired to in-memory streams and a stacked deck."""

    def __init__(self, text: str = "", cards: list[Card] | None = None) -> None:
        self.input = io.StringIO(text)
        self.output = io.StringIO()
        self.deck = StackedDeck(cards or [])
        self.events = EventEmitter()
        self.io = UserIo(self.input, self.output)
        self.controller = TurnController(self.deck, self.io, self.events)

    @property
    def text(self) -> str:
        """Everything written to the player so far."""
        return self.output.getvalue()

    def play(self, player: Player) -> None:
        self.controller.play(player)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled single-pack deck."""
    return Deck(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    hand = Hand()
    hand.add_card(Card(Rank.ACE, Suit.SPADES))
    hand.add_card(Card(Rank.KING, Suit.HEARTS))
    return hand


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    hand = Hand()
    hand.add_card(Card(Rank.ACE, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    return hand


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    hand = Hand()
    hand.add_card(Card(Rank.TEN, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    return hand


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    hand = Hand()
    hand.add_card(Card(Rank.EIGHT, Suit.SPADES))
    hand.add_card(Card(Rank.EIGHT, Suit.HEARTS))
    return hand


@pytest.fixture
def bust_hand():
    """A busted hand."""
    hand = Hand()
    hand.add_card(Card(Rank.TEN, Suit.SPADES))
    hand.add_card(Card(Rank.SIX, Suit.HEARTS))
    hand.add_card(Card(Rank.KING, Suit.CLUBS))
    return hand


@pytest.fixture
def rules():
    """Default ruleset."""
    return RuleSet()


@pytest.fixture
def table():
    """Factory for a turn controller fed with the given input and cards."""
    def _table(text: str = "", cards: list[Card] | None = None) -> Table:
        return Table(text, cards)
    return _table


@pytest.fixture
def player():
    """Factory for player 1 holding the given ranks."""
    def _player(*ranks: int, bet: int = 0) -> Player:
        return Player(1, hands=[make_hand(*ranks, bet=bet)])
    return _player
