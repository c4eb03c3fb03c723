"""Entry point for the console game."""

import logging
import sys
from random import Random

from blackjack.cards import Deck
from blackjack.config import AppConfig, config
from blackjack.console import EndOfInputError, UserIo
from blackjack.game import BlackjackGame, EventEmitter, EventType, log_event


def build_game(app_config: AppConfig, io: UserIo) -> BlackjackGame:
    """Wire a deck, the event log and the rules into a game."""
    events = EventEmitter()
    events.subscribe(log_event)

    deck = Deck(
        num_decks=app_config.game.num_decks,
        rng=Random(app_config.game.seed),
        on_reshuffle=lambda: events.emit_new(EventType.DECK_SHUFFLED),
    )
    return BlackjackGame(deck, io, rules=app_config.game.rules(), events=events)


def main() -> None:
    """Entry point for the console UI."""
    logging.basicConfig(
        level=config.effective_log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    io = UserIo(sys.stdin, sys.stdout)
    game = build_game(config, io)
    try:
        game.run()
    except EndOfInputError as exc:
        io.println()
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
