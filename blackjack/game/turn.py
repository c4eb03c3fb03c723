"""Turn controller: runs one player's decisions across one or two hands."""

import logging

from transitions import Machine

from blackjack.cards import Card, DeckSource
from blackjack.console import UserIo
from blackjack.hand import Hand
from blackjack.player import Player
from blackjack.game.events import EventEmitter, EventType
from blackjack.game.state import (
    Decision,
    TurnState,
    invalid_decision_message,
    legal_decisions,
    parse_decision,
)

logger = logging.getLogger(__name__)


class HandTurn:
    """
    State machine for playing a single hand.

    Cards are drawn by the controller before the matching trigger fires, so
    the ``hit`` trigger can route to BUSTED on the resulting score.
    """

    STATES = [s.name.lower() for s in TurnState]

    TRANSITIONS = [
        {
            "trigger": "hit",
            "source": "awaiting_decision",
            "dest": "busted",
            "conditions": "hand_is_busted",
        },
        {"trigger": "hit", "source": "awaiting_decision", "dest": "awaiting_decision"},
        {"trigger": "stay", "source": "awaiting_decision", "dest": "stay"},
        {"trigger": "double_down", "source": "awaiting_decision", "dest": "double_down"},
        {"trigger": "split", "source": "awaiting_decision", "dest": "split_requested"},
    ]

    def __init__(self, hand: Hand, hand_number: int = 1) -> None:
        self.hand = hand
        self.hand_number = hand_number
        self.decisions = 0

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="awaiting_decision",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> TurnState:
        """Get current turn state as enum."""
        return TurnState[self._machine_state.upper()]  # type: ignore

    def hand_is_busted(self) -> bool:
        """Condition for the hit → busted transition."""
        return self.hand.is_busted


class TurnController:
    """
    Plays a player's turn from a stream of decision tokens.

    Each hand is prompted for until it stays, busts or doubles down. A split
    on the first decision turns the player's single hand into two, which are
    then played in order. Which tokens are legal is worked out before every
    prompt; an unusable token is answered with a message and a re-prompt and
    changes nothing.
    """

    def __init__(
        self,
        deck: DeckSource,
        io: UserIo,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            deck: Where hit, double-down and split cards come from
            io: Prompts go out and decision tokens come in here
            events: Optional emitter for game events
        """
        self.deck = deck
        self.io = io
        self.events = events or EventEmitter()

    def play(self, player: Player) -> None:
        """
        Run the player's whole turn.

        Raises:
            EndOfInputError: If input runs out while a decision is awaited
        """
        first_decision = True
        index = 0

        while index < len(player.hands):
            turn = HandTurn(player.hands[index], hand_number=index + 1)
            if player.is_split:
                prompt = f"HAND {turn.hand_number} ? "
            else:
                prompt = f"PLAYER {player.number} ? "

            self._play_hand(player, turn, prompt, first_decision)
            first_decision = False

            # A split replaces hand 1 in place, so it is played again from scratch
            if turn.state is not TurnState.SPLIT_REQUESTED:
                index += 1

    def _play_hand(
        self,
        player: Player,
        turn: HandTurn,
        prompt: str,
        first_decision: bool,
    ) -> None:
        """Prompt for decisions on one hand until it reaches a terminal state."""
        while not turn.state.is_terminal:
            legal = legal_decisions(
                turn.hand,
                first_decision=first_decision and turn.decisions == 0,
                split_allowed=not player.is_split,
            )
            token = self.io.prompt(prompt)
            decision = parse_decision(token, legal)

            if decision is Decision.INVALID:
                self.io.println(invalid_decision_message(legal))
                self.events.emit_new(
                    EventType.INVALID_ACTION,
                    player=player.number,
                    token=token,
                    legal=sorted(d.token for d in legal),
                )
                prompt = "? "
                continue

            turn.decisions += 1
            logger.debug(
                "Player %d hand %d: %s", player.number, turn.hand_number, decision.name
            )

            if decision is Decision.HIT:
                self._hit(player, turn)
                prompt = "HIT? "
            elif decision is Decision.STAY:
                self._stay(player, turn)
            elif decision is Decision.DOUBLE_DOWN:
                self._double_down(player, turn)
            elif decision is Decision.SPLIT:
                self._split(player, turn)

    def _hit(self, player: Player, turn: HandTurn) -> None:
        card = self._deal_card(player, turn.hand_number)
        turn.hit()
        self.events.emit_new(
            EventType.PLAYER_HIT,
            player=player.number,
            hand_number=turn.hand_number,
            hand_value=turn.hand.value,
        )

        if turn.state is TurnState.BUSTED:
            self.io.println(f"RECEIVED {card} ...BUSTED")
            self._emit_bust(player, turn)
        else:
            self.io.print(f"RECEIVED {card}  ")

    def _stay(self, player: Player, turn: HandTurn) -> None:
        turn.stay()
        self.events.emit_new(
            EventType.PLAYER_STAND,
            player=player.number,
            hand_number=turn.hand_number,
            hand_value=turn.hand.value,
        )

    def _double_down(self, player: Player, turn: HandTurn) -> None:
        hand = turn.hand
        hand.bet *= 2
        hand.is_doubled = True

        card = self._deal_card(player, turn.hand_number)
        turn.double_down()
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            player=player.number,
            hand_number=turn.hand_number,
            hand_value=hand.value,
            new_bet=hand.bet,
        )

        if hand.is_busted:
            self.io.println(f"RECEIVED {card} ...BUSTED")
            self._emit_bust(player, turn)
        else:
            self.io.println(f"RECEIVED {card}  TOTAL IS {hand.value}")

    def _split(self, player: Player, turn: HandTurn) -> None:
        turn.split()
        second_hand = player.split()

        first_card = self._deal_card(player, 1)
        second_card = self._deal_card(player, 2)
        self.io.println(f"FIRST HAND RECEIVES {first_card}")
        self.io.println(f"SECOND HAND RECEIVES {second_card}")

        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            player=player.number,
            hand1_value=player.hand.value,
            hand2_value=second_hand.value,
            split_bet=player.split_bet,
        )

    def _deal_card(self, player: Player, hand_number: int) -> Card:
        card = self.deck.draw()
        player.deal_card(card, hand_number)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand=f"player {player.number}/{hand_number}",
            hand_value=player.get_hand(hand_number).value,
        )
        return card

    def _emit_bust(self, player: Player, turn: HandTurn) -> None:
        self.events.emit_new(
            EventType.PLAYER_BUSTS,
            player=player.number,
            hand_number=turn.hand_number,
            hand_value=turn.hand.value,
        )
