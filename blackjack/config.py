"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field

from blackjack.game.rules import RuleSet


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _parse_seed() -> int | None:
    """Parse BLACKJACK_SEED; unset or empty means an unseeded deck."""
    seed = os.getenv("BLACKJACK_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class GameConfig:
    """Default game configuration."""

    num_decks: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_NUM_DECKS", "1"))
    )
    seed: int | None = field(default_factory=_parse_seed)
    min_bet: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_MIN_BET", "1"))
    )
    max_bet: int = field(
        default_factory=lambda: int(os.getenv("BLACKJACK_MAX_BET", "500"))
    )
    dealer_hits_soft_17: bool = field(
        default_factory=lambda: _env_flag("BLACKJACK_HIT_SOFT_17")
    )
    blackjack_payout: float = 1.5
    max_players: int = 7

    def rules(self) -> RuleSet:
        """Build the table rules for this configuration."""
        return RuleSet(
            min_bet=self.min_bet,
            max_bet=self.max_bet,
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            blackjack_payout=self.blackjack_payout,
            max_players=self.max_players,
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG"))
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper()
    )

    game: GameConfig = field(default_factory=GameConfig)

    @property
    def effective_log_level(self) -> str:
        """DEBUG when debugging, otherwise the configured level."""
        return "DEBUG" if self.debug else self.log_level


# Global configuration instance
config = AppConfig()
