"""Card, Rank and Suit values plus the deck sources cards are drawn from."""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from random import Random
from typing import Callable, Iterable, Protocol

logger = logging.getLogger(__name__)


class Suit(Enum):
    """Card suits."""

    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]


class Rank(IntEnum):
    """Card ranks, numbered 1 (Ace) through 13 (King)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        if 2 <= self.value <= 10:
            return str(self.value)
        return {
            Rank.ACE: "A",
            Rank.JACK: "J",
            Rank.QUEEN: "Q",
            Rank.KING: "K",
        }[self]

    @property
    def blackjack_value(self) -> int:
        """Return the blackjack point value (Ace = 11, face cards = 10)."""
        if self == Rank.ACE:
            return 11
        return min(self.value, 10)

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            try:
                object.__setattr__(self, "rank", Rank(self.rank))
            except ValueError:
                raise ValueError(f"Invalid rank: {self.rank!r}") from None
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit!r}")

    def __str__(self) -> str:
        return f"{self.rank!s}{self.suit!s}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the blackjack point value."""
        return self.rank.blackjack_value

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '2♣', 'AS', 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {
            "A": Rank.ACE,
            "1": Rank.ACE,
            "2": Rank.TWO,
            "3": Rank.THREE,
            "4": Rank.FOUR,
            "5": Rank.FIVE,
            "6": Rank.SIX,
            "7": Rank.SEVEN,
            "8": Rank.EIGHT,
            "9": Rank.NINE,
            "10": Rank.TEN,
            "T": Rank.TEN,
            "J": Rank.JACK,
            "Q": Rank.QUEEN,
            "K": Rank.KING,
        }

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])


class DeckSource(Protocol):
    """Anything that hands out cards one at a time."""

    def draw(self) -> Card:
        ...


class Deck:
    """
    Shuffled deck built from one or more standard 52-card packs.

    The deck never runs dry: once the last card is drawn, every pack is
    gathered up and reshuffled before the next draw.
    """

    def __init__(
        self,
        num_decks: int = 1,
        rng: Random | None = None,
        on_reshuffle: Callable[[], None] | None = None,
    ) -> None:
        """
        Initialize and shuffle the deck.

        Args:
            num_decks: Number of 52-card packs
            rng: Random number generator for shuffling
            on_reshuffle: Called each time an exhausted deck is reshuffled
        """
        if num_decks < 1:
            raise ValueError("Deck must have at least 1 pack")

        self._num_decks = num_decks
        self._rng = rng or Random()
        self._on_reshuffle = on_reshuffle
        self._cards: list[Card] = []
        self.shuffle()

    def shuffle(self) -> None:
        """Gather every card and shuffle."""
        self._cards = [
            Card(rank, suit)
            for _ in range(self._num_decks)
            for suit in Suit
            for rank in Rank
        ]
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card, reshuffling first if the deck is exhausted."""
        if not self._cards:
            logger.info("Deck exhausted, reshuffling %d pack(s)", self._num_decks)
            self.shuffle()
            if self._on_reshuffle is not None:
                self._on_reshuffle()
        return self._cards.pop()

    def __len__(self) -> int:
        return len(self._cards)


class StackedDeck:
    """A deck that deals a predetermined sequence of cards, in order."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: deque[Card] = deque(cards)

    def draw(self) -> Card:
        """Draw the next card in the stack."""
        if not self._cards:
            raise IndexError("Cannot draw from empty deck")
        return self._cards.popleft()

    def __len__(self) -> int:
        return len(self._cards)
