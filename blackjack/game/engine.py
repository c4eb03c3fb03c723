"""Round loop: bets, dealing, player turns, dealer play and settlement."""

import logging
from decimal import Decimal

from transitions import Machine

from blackjack.cards import Card, DeckSource
from blackjack.console import UserIo
from blackjack.hand import Hand, compare_hands
from blackjack.player import Player
from blackjack.game.events import EventEmitter, EventType
from blackjack.game.rules import RuleSet
from blackjack.game.state import GameState
from blackjack.game.turn import TurnController

logger = logging.getLogger(__name__)

INSTRUCTIONS = """\
THIS IS THE GAME OF 21. AS MANY AS 7 PLAYERS MAY PLAY THE
GAME. ON EACH DEAL, BETS WILL BE ASKED FOR, AND THE
PLAYERS' BETS SHOULD BE TYPED IN. THE CARDS WILL THEN BE
DEALT, AND EACH PLAYER IN TURN PLAYS THEIR HAND. THE
FIRST RESPONSE SHOULD BE EITHER 'D', INDICATING THAT THE
PLAYER IS DOUBLING DOWN, 'S', INDICATING THAT THEY ARE
STANDING, 'H', INDICATING THEY WANT ANOTHER CARD, OR '/',
INDICATING THAT THEY WANT TO SPLIT THEIR CARDS. AFTER THE
INITIAL RESPONSE, ALL FURTHER RESPONSES SHOULD BE 'S' OR
'H', UNLESS THE CARDS WERE SPLIT, IN WHICH CASE DOUBLING
DOWN IS AGAIN PERMITTED. IN ORDER TO COLLECT FOR
BLACKJACK, THE INITIAL RESPONSE SHOULD BE 'S'."""


def settle_hand(hand: Hand, dealer_hand: Hand, rules: RuleSet) -> Decimal:
    """
    Work out what a finished player hand wins or loses against the dealer.

    Busts are settled here, before the hands are compared: a busted player
    hand always loses, then a busted dealer loses to every remaining hand.

    Returns:
        Positive amount won, negative amount lost, zero on a push
    """
    bet = Decimal(hand.bet)

    if hand.is_busted:
        return -bet

    outcome = 1 if dealer_hand.is_busted else compare_hands(hand, dealer_hand)

    if outcome > 0:
        if hand.is_blackjack and not hand.is_split_hand:
            return bet * Decimal(str(rules.blackjack_payout))
        return bet
    if outcome < 0:
        return -bet
    return Decimal("0")


def format_amount(amount: Decimal) -> str:
    """Format money without trailing zeros: 150, 22.5, -10."""
    return format(amount.normalize(), "f")


class BlackjackGame:
    """
    Console blackjack round loop using a state machine.

    Player turns are delegated to the TurnController; this class handles
    everything around them.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "place_bets", "source": "waiting_for_bet", "dest": "dealing"},
        {"trigger": "deal_cards", "source": "dealing", "dest": "player_turn"},
        {"trigger": "dealer_blackjack", "source": "dealing", "dest": "resolving"},
        {"trigger": "players_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_plays", "source": "dealer_turn", "dest": "resolving"},
        {"trigger": "resolve", "source": "resolving", "dest": "round_complete"},
        {"trigger": "new_round", "source": "round_complete", "dest": "waiting_for_bet"},
    ]

    def __init__(
        self,
        deck: DeckSource,
        io: UserIo,
        rules: RuleSet | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize a new game.

        Args:
            deck: Card source shared by every player and the dealer
            io: Console transport
            rules: Table rules (uses defaults if not provided)
            events: Optional emitter for game events
        """
        self.rules = rules or RuleSet()
        self.deck = deck
        self.io = io
        self.events = events or EventEmitter()
        self.turns = TurnController(deck, io, self.events)

        self.players: list[Player] = []
        self.dealer_hand = Hand()
        self.dealer_total = Decimal("0")

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting_for_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    def run(self) -> None:
        """
        Play rounds until the input runs out.

        Raises:
            EndOfInputError: When the input stream ends
        """
        self.io.println(" " * 31 + "BLACK JACK")
        self.io.println(" " * 15 + "CREATIVE COMPUTING  MORRISTOWN, NEW JERSEY")
        self.io.println()
        if self.io.prompt_yes_no("DO YOU WANT INSTRUCTIONS? "):
            self.io.println(INSTRUCTIONS)

        self.seat_players(self._ask_player_count())
        while True:
            self.play_round()

    def seat_players(self, count: int) -> None:
        """Seat ``count`` players, numbered from 1."""
        self.players = [Player(number) for number in range(1, count + 1)]
        self.events.emit_new(EventType.GAME_STARTED, players=count)

    def _ask_player_count(self) -> int:
        while True:
            count = self.io.prompt_int("NUMBER OF PLAYERS? ")
            if 1 <= count <= self.rules.max_players:
                return count
            self.io.println(f"BETWEEN 1 AND {self.rules.max_players} PLAYERS, PLEASE")

    def play_round(self) -> None:
        """
        Play one complete round for every seated player.

        Each step runs for the state the machine is in and fires the trigger
        that moves it on, so a dealer blackjack goes straight from DEALING to
        RESOLVING.
        """
        steps = {
            GameState.WAITING_FOR_BET: self._take_bets,
            GameState.DEALING: self._deal,
            GameState.PLAYER_TURN: self._play_players,
            GameState.DEALER_TURN: self._play_dealer,
            GameState.RESOLVING: self._resolve_round,
        }
        while self.state is not GameState.ROUND_COMPLETE:
            steps[self.state]()
        self.new_round()

    def _deal(self) -> None:
        self._deal_initial_cards()
        if self.dealer_hand.is_blackjack:
            self.io.println(f"DEALER HAS {self.dealer_hand[1]} IN THE HOLE FOR BLACKJACK")
            self.events.emit_new(EventType.DEALER_BLACKJACK)
            self.dealer_blackjack()
        else:
            self.deal_cards()

    def _play_players(self) -> None:
        for player in self.players:
            if player.hand.is_blackjack:
                self.io.println(f"PLAYER {player.number} HAS BLACKJACK!")
                self.events.emit_new(EventType.PLAYER_BLACKJACK, player=player.number)
                continue
            self.turns.play(player)
        self.players_done()

    def _take_bets(self) -> None:
        self.io.println("BETS:")
        for player in self.players:
            player.reset_hands()
            while True:
                amount = self.io.prompt_int(f"# {player.number} ? ")
                if self.rules.min_bet <= amount <= self.rules.max_bet:
                    break
                self.io.println(
                    f"BET MUST BE BETWEEN {self.rules.min_bet} AND {self.rules.max_bet}"
                )
            player.current_bet = amount
            self.events.emit_new(EventType.BET_PLACED, player=player.number, amount=amount)
        self.place_bets()

    def _deal_initial_cards(self) -> None:
        self.dealer_hand = Hand()
        self.events.emit_new(EventType.ROUND_STARTED, players=len(self.players))

        # Two passes round the table, dealer last; the dealer's second card is the hole card
        for face_up in (True, False):
            for player in self.players:
                self._deal_card_to_hand(player.hand, f"player {player.number}")
            self._deal_card_to_hand(self.dealer_hand, "dealer", face_up=face_up)

        self.io.println("PLAYER " + " ".join(f"{p.number:>6}" for p in self.players) + "  DEALER")
        for row in range(2):
            cards = " ".join(f"{str(p.hand[row]):>6}" for p in self.players)
            dealer_card = str(self.dealer_hand[0]) if row == 0 else "XX"
            self.io.println(f"{'':7}{cards}  {dealer_card:>6}")
        self.io.println()

    def _deal_card_to_hand(self, hand: Hand, owner: str, face_up: bool = True) -> Card:
        card = self.deck.draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            hand=owner,
            hand_value=hand.value if face_up or owner != "dealer" else None,
        )
        return card

    def _play_dealer(self) -> None:
        hole_card = self.dealer_hand[1]
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            card=str(hole_card),
            hand_value=self.dealer_hand.value,
        )

        if all(hand.is_busted for player in self.players for hand in player.hands):
            self.io.println(f"DEALER HAD {hole_card} CONCEALED.")
        else:
            self._draw_dealer_cards(hole_card)
        self.dealer_plays()

    def _draw_dealer_cards(self, hole_card: Card) -> None:
        self.io.print(f"DEALER HAS {hole_card} CONCEALED FOR A TOTAL OF {self.dealer_hand.value}")
        if self._dealer_should_hit():
            self.io.print("\nDRAWS")
        while self._dealer_should_hit():
            card = self._deal_card_to_hand(self.dealer_hand, "dealer")
            self.io.print(f" {card}")
            self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)

        if self.dealer_hand.is_busted:
            self.io.println(" ...BUSTED")
            self.events.emit_new(EventType.DEALER_BUSTS)
        else:
            self.io.println(f"   ---TOTAL IS {self.dealer_hand.value}")
            self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer_hand.value)
        self.io.println()

    def _dealer_should_hit(self) -> bool:
        """Determine if dealer should hit."""
        value = self.dealer_hand.value
        if value < 17:
            return True
        if value == 17 and self.dealer_hand.is_soft and self.rules.dealer_hits_soft_17:
            return True
        return False

    def _resolve_round(self) -> None:
        """Settle every hand against the dealer and print the totals."""
        round_result = Decimal("0")

        for player in self.players:
            for hand_number, hand in enumerate(player.hands, start=1):
                result = settle_hand(hand, self.dealer_hand, self.rules)
                label = f"PLAYER {player.number}"
                if player.is_split:
                    label += f" HAND {hand_number}"

                if result > 0:
                    self.io.println(f"{label} WINS {format_amount(result)}")
                    self.events.emit_new(
                        EventType.PLAYER_WINS,
                        player=player.number,
                        hand_number=hand_number,
                        amount=float(result),
                    )
                elif result < 0:
                    self.io.println(f"{label} LOSES {format_amount(-result)}")
                    self.events.emit_new(
                        EventType.PLAYER_LOSES,
                        player=player.number,
                        hand_number=hand_number,
                        amount=float(-result),
                    )
                else:
                    self.io.println(f"{label} PUSHES")
                    self.events.emit_new(
                        EventType.PUSH, player=player.number, hand_number=hand_number
                    )

                player.total += result
                round_result += result

        self.dealer_total -= round_result
        for player in self.players:
            self.io.println(f"PLAYER {player.number} TOTAL: {format_amount(player.total)}")
        self.io.println(f"DEALER'S TOTAL: {format_amount(self.dealer_total)}")
        self.io.println()

        logger.info("Round settled, players net %s", round_result)
        self.events.emit_new(
            EventType.ROUND_ENDED,
            result=float(round_result),
            dealer_total=float(self.dealer_total),
        )
        self.resolve()
