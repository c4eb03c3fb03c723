"""Hand scoring and comparison for blackjack."""

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from blackjack.cards import Card


def score_hand(cards: Sequence[Card]) -> int:
    """
    Calculate the best score for a sequence of cards.

    Every Ace starts at 11; while the total is over 21, Aces are demoted to 1
    one at a time.
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        total += card.value

    while total > 21 and aces > 0:
        total -= 10
        aces -= 1

    return total


def is_natural(cards: Sequence[Card]) -> bool:
    """Check for a natural blackjack: exactly two cards scoring 21."""
    return len(cards) == 2 and score_hand(cards) == 21


def compare_hands(hand_a: Sequence[Card], hand_b: Sequence[Card]) -> int:
    """
    Compare two finished hands.

    A natural blackjack beats any other hand, including a 21 made with more
    cards. Otherwise the higher score wins. Busted hands are not handled
    here; callers must settle busts before comparing.

    Returns:
        1 if hand A wins
        -1 if hand B wins
        0 if tied
    """
    natural_a = is_natural(hand_a)
    natural_b = is_natural(hand_b)

    if natural_a != natural_b:
        return 1 if natural_a else -1

    score_a = score_hand(hand_a)
    score_b = score_hand(hand_b)
    if score_a > score_b:
        return 1
    if score_b > score_a:
        return -1
    return 0


@dataclass
class Hand:
    """A blackjack hand and the wager riding on it."""

    cards: list[Card] = field(default_factory=list)
    bet: int = 0
    is_doubled: bool = False
    is_split_hand: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        """Return the best score for this hand."""
        return score_hand(self.cards)

    @property
    def is_soft(self) -> bool:
        """
        Check if the hand is soft (has an ace counted as 11).

        A hand is soft if it contains an ace that can be counted as 11
        without busting.
        """
        if not any(card.is_ace for card in self.cards):
            return False

        total_hard = sum(1 if card.is_ace else card.value for card in self.cards)
        return total_hard + 10 <= 21

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return is_natural(self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    @property
    def is_pair(self) -> bool:
        """Check if the hand is two cards of equal value."""
        return (
            len(self.cards) == 2
            and self.cards[0].value == self.cards[1].value
        )

    @property
    def can_double(self) -> bool:
        """Check if the hand can be doubled down."""
        return len(self.cards) == 2 and not self.is_doubled

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"
