"""Tests for hand scoring, natural detection and hand comparison."""

from hypothesis import given, strategies as st

from blackjack.cards import Card, Rank, Suit
from blackjack.hand import Hand, compare_hands, is_natural, score_hand


def cards_of(*ranks):
    """Build a card list from rank numbers, all spades."""
    return [Card(rank, Suit.SPADES) for rank in ranks]


@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


def hand_strategy(min_cards=2, max_cards=6):
    """Generate a random list of cards."""
    return st.lists(card_strategy(), min_size=min_cards, max_size=max_cards)


class TestScoreHand:
    """Tests for the hand scorer."""

    def test_sums_values_normally(self):
        """4 + 6 + 10 = 20."""
        assert score_hand(cards_of(4, 6, 10)) == 20

    def test_face_cards_count_ten(self):
        """J + Q + K = 30."""
        assert score_hand(cards_of(11, 12, 13)) == 30

    def test_soft_ace(self):
        """An ace counts 11 when that does not bust: 10 + A = 21."""
        assert score_hand(cards_of(10, 1)) == 21

    def test_hard_ace(self):
        """An ace counts 1 when 11 would bust: 10 + 9 + A = 20."""
        assert score_hand(cards_of(10, 9, 1)) == 20

    def test_three_aces(self):
        """A + A + A = 13 (11 + 1 + 1)."""
        assert score_hand(cards_of(1, 1, 1)) == 13

    def test_two_aces_and_nine(self):
        """A + A + 9 = 21 (11 + 1 + 9)."""
        assert score_hand(cards_of(1, 1, 9)) == 21

    def test_every_ace_demoted(self):
        """A + A + A + 9 + K = 22; each ace at 1 still busts."""
        assert score_hand(cards_of(1, 1, 1, 9, 13)) == 22

    def test_empty(self):
        """No cards scores zero."""
        assert score_hand([]) == 0

    @given(hand_strategy(), st.data())
    def test_order_invariant(self, cards, data):
        """Scoring ignores the order of the cards."""
        shuffled = data.draw(st.permutations(cards))
        assert score_hand(shuffled) == score_hand(cards)

    @given(hand_strategy())
    def test_no_aces_is_plain_sum(self, cards):
        """Without aces the score is the sum of face values."""
        cards = [c for c in cards if not c.is_ace]
        assert score_hand(cards) == sum(min(c.rank, 10) for c in cards)

    @given(hand_strategy())
    def test_aces_only_demoted_when_over_21(self, cards):
        """The score is the all-aces-high total unless that busts."""
        high = sum(c.value for c in cards)
        aces = sum(1 for c in cards if c.is_ace)
        score = score_hand(cards)
        if high <= 21:
            assert score == high
        else:
            assert score <= 21 or score == high - 10 * aces


class TestIsNatural:
    """Tests for natural blackjack detection."""

    def test_ace_and_ten(self):
        assert is_natural(cards_of(1, 10))
        assert is_natural(cards_of(13, 1))

    def test_three_card_21(self):
        assert not is_natural(cards_of(7, 7, 7))

    def test_two_cards_not_21(self):
        assert not is_natural(cards_of(10, 9))


class TestCompareHands:
    """Tests for the outcome comparator."""

    def test_a_wins_higher_score(self):
        """20 beats 12."""
        assert compare_hands(cards_of(10, 10), cards_of(1, 1)) == 1

    def test_b_wins_higher_score(self):
        """4 loses to 18."""
        assert compare_hands(cards_of(2, 2), cards_of(5, 6, 7)) == -1

    def test_natural_beats_three_card_21(self):
        """A natural beats 21 made with more cards."""
        assert compare_hands(cards_of(10, 1), cards_of(6, 7, 8)) == 1
        assert compare_hands(cards_of(6, 7, 8), cards_of(10, 1)) == -1

    def test_two_naturals_tie(self):
        """J + 10 against 10 + J is a tie."""
        hand_a = [Card(11, Suit.SPADES), Card(10, Suit.CLUBS)]
        hand_b = [Card(10, Suit.SPADES), Card(11, Suit.CLUBS)]
        assert compare_hands(hand_a, hand_b) == 0

    def test_tie_without_natural(self):
        """Equal totals tie."""
        hand_a = [Card(10, Suit.DIAMONDS), Card(10, Suit.HEARTS)]
        hand_b = [Card(10, Suit.SPADES), Card(10, Suit.CLUBS)]
        assert compare_hands(hand_a, hand_b) == 0

    def test_natural_is_two_cards_scoring_21(self):
        """Two cards totalling 20 are compared numerically."""
        assert compare_hands(cards_of(10, 10), cards_of(5, 5, 1)) == -1

    def test_accepts_hand_objects(self, blackjack_hand, hard_16_hand):
        """Hand objects compare like card lists."""
        assert compare_hands(blackjack_hand, hard_16_hand) == 1

    @given(hand_strategy(), hand_strategy())
    def test_antisymmetric(self, hand_a, hand_b):
        """compare(A, B) == -compare(B, A)."""
        assert compare_hands(hand_a, hand_b) == -compare_hands(hand_b, hand_a)

    @given(hand_strategy())
    def test_hand_ties_itself(self, cards):
        assert compare_hands(cards, list(cards)) == 0


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self, empty_hand):
        """Test empty hand properties."""
        assert len(empty_hand) == 0
        assert empty_hand.value == 0
        assert not empty_hand.is_soft
        assert not empty_hand.is_blackjack
        assert not empty_hand.is_busted

    def test_add_card(self, empty_hand):
        """Test adding cards to hand."""
        empty_hand.add_card(Card(Rank.TEN, Suit.SPADES))
        assert len(empty_hand) == 1
        assert empty_hand.value == 10

    def test_hard_hand_value(self, hard_16_hand):
        """Test hard hand value calculation."""
        assert hard_16_hand.value == 16
        assert not hard_16_hand.is_soft

    def test_soft_hand_value(self, soft_17_hand):
        """Test soft hand value calculation."""
        assert soft_17_hand.value == 17
        assert soft_17_hand.is_soft

    def test_blackjack(self, blackjack_hand):
        """Test blackjack detection."""
        assert blackjack_hand.is_blackjack
        assert blackjack_hand.value == 21
        assert blackjack_hand.is_soft

    def test_bust(self, bust_hand):
        """Test bust detection."""
        assert bust_hand.is_busted
        assert bust_hand.value == 26
        assert "(BUST)" in str(bust_hand)

    def test_soft_to_hard_transition(self):
        """Test ace switching from 11 to 1."""
        hand = Hand()
        hand.add_card(Card(Rank.ACE, Suit.SPADES))
        hand.add_card(Card(Rank.FIVE, Suit.HEARTS))
        assert hand.value == 16
        assert hand.is_soft

        hand.add_card(Card(Rank.EIGHT, Suit.CLUBS))
        assert hand.value == 14
        assert not hand.is_soft

    def test_pair_detection(self, pair_8s_hand):
        """Test pair detection."""
        assert pair_8s_hand.is_pair

    def test_ten_value_cards_pair(self):
        """Ten and King share a value, so they pair."""
        hand = Hand(cards=[Card(Rank.TEN, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)])
        assert hand.is_pair

    def test_not_pair(self):
        """Different values or three cards are not a pair."""
        assert not Hand(cards=cards_of(8, 9)).is_pair
        assert not Hand(cards=cards_of(8, 8, 2)).is_pair

    def test_can_double(self):
        """Only an undoubled two-card hand can double."""
        hand = Hand(cards=cards_of(5, 6))
        assert hand.can_double

        hand.is_doubled = True
        assert not hand.can_double

        hand = Hand(cards=cards_of(5, 6, 2))
        assert not hand.can_double
