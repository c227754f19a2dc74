from __future__ import annotations
import random
from logging import getLogger

from cribsim.cards import Hand
from cribsim.exceptions import ContractViolation
from cribsim.players.base_player import DiscardStrategy

logger = getLogger(__name__)


class RandomDiscard(DiscardStrategy):
    name = "random"

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def discard(self, hand: Hand, crib: Hand) -> None:
        if hand.ncards < 2:
            raise ContractViolation(f"cannot discard two cards from a hand of {hand.ncards}")
        drop1, drop2 = self._rng.sample(range(hand.ncards), 2)
        logger.debug("discard_random: drop1=%d, drop2=%d", drop1, drop2)
        crib.append(hand[drop1])
        crib.append(hand[drop2])
        # delete the higher index first so the lower one doesn't shift
        for idx in sorted((drop1, drop2), reverse=True):
            hand.delete(idx)
