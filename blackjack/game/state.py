"""Turn states, player decisions and the rules for which decisions are legal."""

from enum import Enum, auto

from blackjack.hand import Hand


class TurnState(Enum):
    """
    States of a single hand during a player's turn.

    Flow: AWAITING_DECISION → STAY | BUSTED | DOUBLE_DOWN | SPLIT_REQUESTED
    """

    # Waiting for the player's next token
    AWAITING_DECISION = auto()

    # Terminal: player kept the hand
    STAY = auto()

    # Terminal: hand went over 21
    BUSTED = auto()

    # Terminal: bet doubled and the single extra card dealt
    DOUBLE_DOWN = auto()

    # Hand was split; play moves on to the two new hands
    SPLIT_REQUESTED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def is_terminal(self) -> bool:
        """Check if no further decisions are taken on this hand."""
        return self is not TurnState.AWAITING_DECISION


class Decision(Enum):
    """A parsed player decision."""

    HIT = "H"
    STAY = "S"
    DOUBLE_DOWN = "D"
    SPLIT = "/"
    INVALID = ""

    @property
    def token(self) -> str:
        """Return the token a player types for this decision."""
        return self.value


def legal_decisions(
    hand: Hand,
    *,
    first_decision: bool,
    split_allowed: bool,
) -> frozenset[Decision]:
    """
    Work out which decisions are legal for a hand right now.

    Args:
        hand: The hand being played
        first_decision: True before any decision on the player's turn
        split_allowed: True while the player has not split

    Returns:
        The set of legal decisions (never includes INVALID)
    """
    legal = {Decision.HIT, Decision.STAY}
    if hand.can_double:
        legal.add(Decision.DOUBLE_DOWN)
    if first_decision and split_allowed and hand.is_pair:
        legal.add(Decision.SPLIT)
    return frozenset(legal)


def parse_decision(token: str, legal: frozenset[Decision]) -> Decision:
    """
    Turn a raw input token into a decision.

    Tokens are case-insensitive and surrounding whitespace is ignored. A
    token that is unknown, or names a decision not in ``legal``, is INVALID.
    """
    token = token.strip().upper()
    for decision in legal:
        if decision.token == token:
            return decision
    return Decision.INVALID


def invalid_decision_message(legal: frozenset[Decision]) -> str:
    """Return the message shown after an unusable token."""
    if Decision.DOUBLE_DOWN in legal:
        return "TYPE H, S OR D, PLEASE"
    return "TYPE H, OR S, PLEASE"


class GameState(Enum):
    """
    Round state machine states.

    Flow: WAITING_FOR_BET → DEALING → PLAYER_TURN → DEALER_TURN → RESOLVING → ROUND_COMPLETE
    """

    WAITING_FOR_BET = auto()

    # Cards being dealt
    DEALING = auto()

    # Players take their turns
    PLAYER_TURN = auto()

    # Dealer plays
    DEALER_TURN = auto()

    # Determining winners
    RESOLVING = auto()

    # Round finished, ready for next
    ROUND_COMPLETE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()
