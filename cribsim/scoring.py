from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
from logging import getLogger

from cribsim.cards import Card, Hand, Rank
from cribsim.exceptions import InvalidInput
from cribsim.utils import iter_subsets

logger = getLogger(__name__)


@dataclass(frozen=True)
class ScoreBreakdown:
    # Each field counts the number of points from that source.
    fifteens: int = 0
    pairs: int = 0
    runs: int = 0
    flush: int = 0
    right_jack: int = 0
    total: int = 0


def count_15s(hand: Hand) -> int:
    """Number of distinct subsets (2 cards or more) whose count values sum to 15."""
    values = [c.value for c in hand]
    return sum(1 for subset in iter_subsets(len(values), 2) if sum(values[i] for i in subset) == 15)


def count_pairs(hand: Hand) -> int:
    # Search for pairs in a sorted hand.
    #
    #  2♦ 3♥ 3♠ 5♠ -> 1 pair
    #  2♦ 2♥ 5♣ 5♠ -> 2 pairs
    #  2♦ 2♥ 2♠ 5♠ -> 3 pairs
    cards = hand.cards
    num_pairs = 0
    for i in range(len(cards) - 1):
        j = i + 1
        while j < len(cards) and cards[j].rank == cards[i].rank:
            num_pairs += 1
            j += 1
    return num_pairs


def count_runs(hand: Hand) -> int:
    """Points for runs of 3 or more in a sorted hand, including double runs."""
    cards = hand.cards
    run_points = 0
    current_run = 1
    repeats = 1
    for prev, cur in zip(cards, cards[1:]):
        # 3 4 5: extend current_run to 3
        if cur.rank == prev.rank + 1:
            current_run += 1
        # 3 4 4 5: double run (repeats = 2)
        # 3 4 4 5 5: double double run (repeats = 4)
        # 3 3 3 4 5: every repeat doubles again (repeats = 4)
        elif cur.rank == prev.rank:
            repeats *= 2
        else:
            if current_run >= 3:
                run_points += current_run * repeats
                logger.debug("run ended at %s: current_run=%d, repeats=%d", cur, current_run, repeats)
            current_run = 1
            repeats = 1

    # Fall off the end also counts as the end of a run.
    if current_run >= 3:
        run_points += current_run * repeats
        logger.debug("run ended at end of hand: current_run=%d, repeats=%d", current_run, repeats)
    return run_points


def count_flush(hand: Hand) -> int:
    flush_suit = None
    cur_flush = 0
    for i, card in enumerate(hand.cards):
        # Skip the starter card, no matter where it is in the hand.
        if i == hand.starter:
            continue
        if flush_suit is None:
            flush_suit = card.suit
        elif card.suit != flush_suit:
            return 0
        cur_flush += 1

    # The starter can extend a flush by one.
    starter = hand.starter_card()
    if starter is not None and cur_flush > 0 and starter.suit == flush_suit:
        cur_flush += 1
    return cur_flush


def count_right_jack(hand: Hand) -> int:
    starter = hand.starter_card()
    if starter is None:
        return 0
    for i, card in enumerate(hand.cards):
        if i != hand.starter and card.rank == Rank.JACK and card.suit == starter.suit:
            return 1
    return 0


def score_hand(hand: Hand) -> ScoreBreakdown:
    """Score a single hand of any size. The hand must already be sorted."""
    if hand.ncards == 0:
        raise InvalidInput("cannot score an empty hand")
    fifteens = 2 * count_15s(hand)
    pairs = 2 * count_pairs(hand)
    runs = count_runs(hand)
    flush = count_flush(hand)
    right_jack = count_right_jack(hand)
    return ScoreBreakdown(
        fifteens=fifteens,
        pairs=pairs,
        runs=runs,
        flush=flush,
        right_jack=right_jack,
        total=fifteens + pairs + runs + flush + right_jack,
    )


def score_starter_jack(starter: Card) -> int:
    """Points to the dealer when the turned-up starter is a jack."""
    return 2 if starter.rank == Rank.JACK else 0


def format_score(score: ScoreBreakdown, prefix: Optional[str] = None) -> str:
    parts = []
    if score.fifteens > 0:
        parts.append(f"{score.fifteens // 2} fifteen(s) for {score.fifteens}")
    if score.pairs > 0:
        parts.append(f"{score.pairs // 2} pair(s) for {score.pairs}")
    if score.runs > 0:
        parts.append(f"run(s) for {score.runs}")
    if score.flush > 0:
        parts.append(f"flush for {score.flush}")
    if score.right_jack > 0:
        parts.append(f"right jack for {score.right_jack}")
    out = f"{score.total}"
    if parts:
        out += " (" + ", ".join(parts) + ")"
    if prefix is not None:
        out = f"{prefix}: {out}"
    return out
