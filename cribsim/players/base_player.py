from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from cribsim.cards import Hand

if TYPE_CHECKING:
    from cribsim.pegging import PegState


class DiscardStrategy(ABC):
    name = "discard"

    @abstractmethod
    def discard(self, hand: Hand, crib: Hand) -> None:
        """Leave `hand` with 4 cards and append the 2 removed cards to `crib`."""
        return NotImplemented


class PegSelector(ABC):
    name = "peg"

    @abstractmethod
    def select_card(self, peg: PegState, player: int, other: int) -> Optional[int]:
        # index into peg.avail[player], or None if no card fits under 31
        return NotImplemented


@dataclass
class Strategy:
    discard: DiscardStrategy
    peg: PegSelector
    name: str = ""

    def __post_init__(self):
        if not self.name:
            self.name = f"{self.discard.name}:{self.peg.name}"
