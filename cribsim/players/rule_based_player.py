from __future__ import annotations
from typing import Optional
from logging import getLogger

from cribsim.cards import Hand
from cribsim.constants import MAX_COUNT
from cribsim.exceptions import ContractViolation
from cribsim.pegging import PegState
from cribsim.players.base_player import DiscardStrategy, PegSelector
from cribsim.scoring import score_hand
from cribsim.utils import get_possible_hands

logger = getLogger(__name__)


class ExhaustiveDiscard(DiscardStrategy):
    """Keep the 4 cards that maximize the fixed score, i.e. the score of the
    kept cards ignoring the starter."""

    name = "exhaustive"

    def discard(self, hand: Hand, crib: Hand) -> None:
        top_score = 0
        winner = None
        kept = discards = None
        for kept, discards in get_possible_hands(hand.cards):
            score = score_hand(Hand.from_cards(kept)).total
            if score > top_score:
                # Ignore ties -- just use the first candidate to get to the top.
                logger.debug("new winner: top_score = %d, score = %d", top_score, score)
                top_score = score
                winner = (kept, discards)

        # In case every candidate had score 0, arbitrarily pick the last one.
        if winner is None:
            winner = (kept, discards)
        kept, discards = winner
        logger.debug("winning candidate: %s (score %d)", " ".join(str(c) for c in kept), top_score)

        for c in discards:
            crib.append(c)
        hand.truncate()
        for c in kept:
            hand.append(c)


class LowCardFirst(PegSelector):
    """Play the smallest available card as long as it doesn't go over 31.
    Assumes the pool of available cards is sorted."""

    name = "low"

    def select_card(self, peg: PegState, player: int, other: int) -> Optional[int]:
        avail = peg.avail[player]
        if avail.ncards == 0:
            raise ContractViolation(f"player {player} asked to play with no cards")
        if peg.cur_count + avail[0].value <= MAX_COUNT:
            return 0
        return None


class HighCardFirst(PegSelector):
    """Play the largest available card that doesn't go over 31.
    Assumes the pool of available cards is sorted."""

    name = "high"

    def select_card(self, peg: PegState, player: int, other: int) -> Optional[int]:
        avail = peg.avail[player]
        for i in range(avail.ncards - 1, -1, -1):
            if peg.cur_count + avail[i].value <= MAX_COUNT:
                return i
        # Ran out of cards before we got under 31.
        return None
