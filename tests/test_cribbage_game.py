import pytest

from cribsim.cards import Card, Deck, Hand, Rank, Suit
from cribsim.constants import KEEP_SIZE, PLAYER_A, PLAYER_B, WIN_SCORE
from cribsim.game import CribbageGame
from cribsim.players import make_strategy

HAND_0 = "2♥ 2♦ 4♥ 6♥"
HAND_1 = "A♠ A♣ A♥ 8♠"
CRIB = "2♠ 4♣ 6♣ 8♣"
TEN = Card(Rank.TEN, Suit.CLUB)
JACK = Card(Rank.JACK, Suit.CLUB)


def new_game(seed=None):
    return CribbageGame([make_strategy("exhaustive:low"), make_strategy("random:low", seed=2)], seed=seed)


def evaluate(initial_scores, starter):
    game = new_game(seed=1)
    game.state.scores = list(initial_scores)
    hands = [Hand.parse(HAND_0, size=5), Hand.parse(HAND_1, size=5)]
    crib = Hand.parse(CRIB, size=5)
    done = game.evaluate_hands(hands, crib, starter)
    return game, done


@pytest.mark.parametrize(
    "initial_scores, starter, expect_scores, expect_winner, expect_done",
    [
        # dealer pegs the last card and has three aces; player 0 has one pair
        ([0, 0], TEN, [2, 7], None, False),
        # a jack turned up is 2 more for the dealer
        ([0, 0], JACK, [2, 9], None, False),
        # the jack alone decides it: no pegging, no counting
        ([120, 119], JACK, [120, 121], PLAYER_B, True),
        # player 0 counts first and goes out before the dealer's hand is scored
        ([119, 0], TEN, [121, 1], PLAYER_A, True),
        # the dealer wins during pegging
        ([0, 120], TEN, [0, 121], PLAYER_B, True),
    ],
)
def test_evaluate_hands(initial_scores, starter, expect_scores, expect_winner, expect_done):
    game, done = evaluate(initial_scores, starter)
    assert game.state.scores == expect_scores
    assert game.state.winner == expect_winner
    assert done is expect_done


def test_evaluate_hands_adds_starter_to_every_hand():
    game = new_game(seed=1)
    hands = [Hand.parse(HAND_0, size=5), Hand.parse(HAND_1, size=5)]
    crib = Hand.parse(CRIB, size=5)
    game.evaluate_hands(hands, crib, TEN)
    for hand in (hands[0], hands[1], crib):
        assert hand.ncards == 5
        assert hand.starter_card() == TEN


def test_play_hand_deals_and_discards():
    game = new_game(seed=123)
    game.play_hand()
    assert game.deck.offset == 12
    assert all(score >= 0 for score in game.state.scores)
    # somebody always pegs the last card
    assert sum(game.state.scores) >= 1


def test_play_game_until_winner():
    game = new_game(seed=2024)
    winner = game.play_game()
    loser = 1 - winner
    assert winner == game.state.winner
    assert game.state.scores[winner] >= WIN_SCORE
    assert game.state.scores[loser] < WIN_SCORE
    assert game.state.num_hands > 0


class RecordingGame(CribbageGame):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.dealers = []

    def play_hand(self):
        self.dealers.append(self.state.dealer)
        return super().play_hand()


def test_dealer_alternates():
    game = RecordingGame([make_strategy("exhaustive:low"), make_strategy("random:low", seed=2)], seed=9)
    game.play_game()
    assert len(game.dealers) == game.state.num_hands
    assert game.state.num_hands > 1
    # seats are swapped before the first hand, so player a deals first
    expected = [PLAYER_A if i % 2 == 0 else PLAYER_B for i in range(game.state.num_hands)]
    assert game.dealers == expected


def test_shared_deck_is_used():
    deck = Deck(77)
    game = CribbageGame([make_strategy("exhaustive:low"), make_strategy("exhaustive:high")], deck=deck)
    game.play_hand()
    assert deck.remaining() == 52 - 2 * (KEEP_SIZE + 2)


def test_needs_two_strategies():
    with pytest.raises(ValueError):
        CribbageGame([make_strategy("exhaustive:low")])
