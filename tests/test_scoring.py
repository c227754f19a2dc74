import pytest

from cribsim.cards import Card, Hand, Rank, Suit
from cribsim.exceptions import InvalidInput
from cribsim.scoring import (
    ScoreBreakdown,
    count_15s,
    count_flush,
    count_pairs,
    count_right_jack,
    count_runs,
    format_score,
    score_hand,
    score_starter_jack,
)


def hand_with_starter(text, starter):
    hand = Hand.parse(text)
    hand.starter = starter
    return hand


@pytest.mark.parametrize("text", ["2♦", "K♦", "5♣"])
def test_one_card_has_no_fifteens(text):
    assert count_15s(Hand.parse(text)) == 0
    assert score_hand(Hand.parse(text)).fifteens == 0


@pytest.mark.parametrize(
    "text, expected",
    [
        ("A♥ 3♥ 5♠ 6♦", 1),  # takes all 4 cards
        ("2♦ 3♥ 5♠ 8♥", 1),  # 2 + 5 + 8
        ("2♦ 3♥ 7♠ 8♥", 1),  # 7 + 8
        ("2♦ 3♥ 5♠ Q♥", 2),  # 2 + 3 + Q, 5 + Q
        ("5♦ 5♠ 0♥ J♥", 4),
    ],
)
def test_count_15s(text, expected):
    assert count_15s(Hand.parse(text)) == expected


def test_fifteens_are_stored_as_points():
    assert score_hand(Hand.parse("A♥ 3♥ 5♠ 6♦")).fifteens == 2
    assert score_hand(Hand.parse("2♦ 3♥ 5♠ Q♥")).fifteens == 4


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2♦", 0),
        ("2♦ 3♥", 0),
        ("2♦ 2♥", 1),
        ("2♦ 2♥ 5♣ 5♠", 2),
        ("2♦ 2♥ 2♠ 5♠", 3),
        ("2♣ 2♦ 2♥ 2♠", 6),
    ],
)
def test_count_pairs(text, expected):
    assert count_pairs(Hand.parse(text)) == expected


def test_pairs_are_stored_as_points():
    assert score_hand(Hand.parse("2♦ 2♥ 2♠ 5♠")).pairs == 6
    assert score_hand(Hand.parse("2♣ 2♦ 2♥ 2♠")).pairs == 12


@pytest.mark.parametrize(
    "text, expected",
    [
        ("4♥ 5♦ 5♠ 0♥ J♥", 0),  # nice hand, but no runs
        ("4♥ 5♦ 6♠ 0♥ J♥", 3),  # single run of 3
        ("4♥ 5♦ 9♠ 0♥ J♥", 3),  # single run of 3, but at the end
        ("4♥ 8♦ 9♠ 0♥ J♥", 4),  # single run of 4
        ("4♥ 8♦ 8♠ 9♠ 0♥ Q♥", 6),  # double run of 3
        ("4♥ 8♦ 8♠ 9♠ 0♥ 0♥", 12),  # double double run of 3
        ("3♣ 3♦ 3♥ 4♠ 5♠", 12),  # three of a kind doubles twice
        ("A♣ 2♦ 3♥ 7♠ 8♠ 9♦", 6),  # two separate runs
        ("J♣ Q♦ K♥", 3),
        ("A♣ Q♦ K♥", 0),  # no wrapping around the king
    ],
)
def test_count_runs(text, expected):
    assert count_runs(Hand.parse(text)) == expected


def test_flush_without_starter():
    assert count_flush(Hand.parse("4♥ 6♥ 7♥ K♥")) == 4
    assert count_flush(Hand.parse("4♥ 6♥ 7♠ K♥")) == 0


def test_flush_with_starter():
    # starter breaks the suit: flush of the 4 hand cards
    assert count_flush(hand_with_starter("4♥ 6♥ 7♥ K♥ K♠", 4)) == 4
    # starter matches: flush of 5
    assert count_flush(hand_with_starter("4♥ 6♥ 7♥ Q♥ K♥", 4)) == 5
    # a hand card breaks the suit
    assert count_flush(hand_with_starter("4♥ 6♦ 7♥ Q♥ K♥", 4)) == 0
    # same cards, but now the 6♦ is the starter
    assert count_flush(hand_with_starter("4♥ 6♦ 7♥ Q♥ K♥", 1)) == 4
    # starter is the lowest card
    assert count_flush(hand_with_starter("4♦ 6♥ 7♥ Q♥ K♥", 0)) == 4


def test_count_right_jack():
    text = "4♥ 7♣ 9♣ J♦ J♥"
    # starter not set: no points possible
    assert count_right_jack(Hand.parse(text)) == 0
    # starter does not match either jack
    assert count_right_jack(hand_with_starter(text, 1)) == 0
    # starter matches the jack of hearts
    assert count_right_jack(hand_with_starter(text, 0)) == 1
    # the starter itself is a jack: no right jack from it
    assert count_right_jack(hand_with_starter(text, 3)) == 0
    assert count_right_jack(hand_with_starter(text, 4)) == 0


def test_score_hand_totals():
    # four 15s and a pair
    assert score_hand(Hand.parse("5♦ 5♠ 0♥ J♥")).total == 10
    # three 15s and a double run of 4
    assert score_hand(Hand.parse("6♦ 7♥ 7♠ 8♠ 9♥")).total == 16
    # two 15s, run of 4, flush of 4
    assert score_hand(Hand.parse("6♠ 7♠ 8♠ 9♠")) == ScoreBreakdown(
        fifteens=4, pairs=0, runs=4, flush=4, right_jack=0, total=12
    )


def test_score_hand_with_starter():
    # two 15s, run of 4, flush of 5, right jack
    hand = hand_with_starter("6♠ 7♠ 8♠ 9♠ J♠", 2)
    score = score_hand(hand)
    assert score.right_jack == 1
    assert score.flush == 5
    assert score.total == 14

    # but if the starter is the jack, that's not counted here
    hand.starter = 4
    assert score_hand(hand).total == 13


def test_score_hand_is_repeatable():
    hand = hand_with_starter("5♣ 5♦ 5♥ J♠ 5♠", 4)
    hand.sort()
    hand.starter = hand.cards.index(Card(Rank.FIVE, Suit.SPADE))
    assert score_hand(hand) == score_hand(hand)
    # the famous 29: eight 15s, four of a kind, right jack
    assert score_hand(hand).total == 29


def test_empty_hand_is_rejected():
    with pytest.raises(InvalidInput):
        score_hand(Hand(5))


def test_score_starter_jack():
    assert score_starter_jack(Card(Rank.JACK, Suit.CLUB)) == 2
    assert score_starter_jack(Card(Rank.QUEEN, Suit.CLUB)) == 0


def test_format_score():
    assert format_score(score_hand(Hand.parse("6♠ 7♠ 8♠ 9♠")), "hand") == (
        "hand: 12 (2 fifteen(s) for 4, run(s) for 4, flush for 4)"
    )
    assert format_score(ScoreBreakdown()) == "0"
    assert format_score(score_hand(Hand.parse("2♦ 2♥"))) == "2 (1 pair(s) for 2)"
