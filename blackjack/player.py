"""Player state: one hand, or two after a split, each with its own bet."""

from dataclasses import dataclass, field
from decimal import Decimal

from blackjack.cards import Card
from blackjack.hand import Hand


@dataclass
class Player:
    """
    A seated player.

    The first hand always exists. The second hand, and with it the split
    bet, only exists after a split.
    """

    number: int
    hands: list[Hand] = field(default_factory=lambda: [Hand()])
    total: Decimal = Decimal("0")

    @property
    def hand(self) -> Hand:
        """Return the first hand."""
        return self.hands[0]

    @property
    def split_hand(self) -> Hand | None:
        """Return the second hand, if the player has split."""
        return self.hands[1] if self.is_split else None

    @property
    def is_split(self) -> bool:
        """Check if the player has split into two hands."""
        return len(self.hands) > 1

    @property
    def current_bet(self) -> int:
        """Return the bet on the first hand."""
        return self.hands[0].bet

    @current_bet.setter
    def current_bet(self, amount: int) -> None:
        self.hands[0].bet = amount

    @property
    def split_bet(self) -> int | None:
        """Return the bet on the second hand, or None when unsplit."""
        return self.hands[1].bet if self.is_split else None

    def get_hand(self, hand_number: int) -> Hand:
        """Return hand 1 or hand 2."""
        if hand_number not in (1, 2) or hand_number > len(self.hands):
            raise ValueError(f"Player {self.number} has no hand {hand_number}")
        return self.hands[hand_number - 1]

    def deal_card(self, card: Card, hand_number: int = 1) -> None:
        """Add a card to hand 1 or hand 2."""
        self.get_hand(hand_number).add_card(card)

    @property
    def can_split(self) -> bool:
        """Check if the first hand may still be split."""
        return not self.is_split and self.hand.is_pair

    def split(self) -> Hand:
        """
        Split the first hand into two.

        The second card moves to a new hand that carries a bet equal to the
        current bet. Each hand is left with one card; the caller deals the
        second card to each.

        Returns:
            The new second hand
        """
        if not self.can_split:
            raise ValueError(f"Player {self.number} cannot split")

        first = self.hands[0]
        second = Hand(cards=[first.cards.pop()], bet=first.bet, is_split_hand=True)
        first.is_split_hand = True
        self.hands.append(second)
        return second

    def reset_hands(self) -> None:
        """Drop all hands and start over with one empty hand."""
        self.hands = [Hand()]
