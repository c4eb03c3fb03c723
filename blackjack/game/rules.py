"""Table rules for the console game."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    Covers the limits and dealer behaviour the round loop needs.
    """

    # Betting limits
    min_bet: int = 1
    max_bet: int = 500

    # Dealer rules
    dealer_hits_soft_17: bool = False  # H17 vs S17

    # Blackjack payout (3:2 = 1.5, 6:5 = 1.2)
    blackjack_payout: float = 1.5

    # Seats at the table
    max_players: int = 7

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
        if self.max_bet < self.min_bet:
            raise ValueError("max_bet must not be below min_bet")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.max_players < 1:
            raise ValueError("max_players must be at least 1")
