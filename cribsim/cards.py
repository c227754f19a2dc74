from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, List, Optional
import os
import random
import time
from logging import getLogger

from cribsim.constants import RANK_VALUE
from cribsim.exceptions import ContractViolation, InvalidInput

logger = getLogger(__name__)


class Rank(IntEnum):
    JOKER = 0
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


class Suit(IntEnum):
    NONE = 0
    CLUB = 1
    DIAMOND = 2
    HEART = 3
    SPADE = 4


RANK_CHARS = "*A234567890JQK"
SUIT_SYMBOLS = {
    Suit.NONE: "",
    Suit.CLUB: "♣",
    Suit.DIAMOND: "♦",
    Suit.HEART: "♥",
    Suit.SPADE: "♠",
}
SYMBOL_SUITS = {sym: suit for suit, sym in SUIT_SYMBOLS.items() if sym}


@dataclass(frozen=True, order=True)
class Card:
    rank: Rank
    suit: Suit

    @property
    def value(self) -> int:
        """Count value used for fifteens and pegging."""
        return RANK_VALUE[self.rank]

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def debug(self) -> str:
        return f"{int(self.rank):02d}:{int(self.suit)}"

    @classmethod
    def parse(cls, text: str) -> Card:
        text = text.strip()
        if not text:
            raise InvalidInput("empty card string")
        rank_ch, suit_str = text[0], text[1:]
        idx = RANK_CHARS.find(rank_ch)
        if idx < 0:
            raise InvalidInput(f"invalid rank char: {rank_ch!r}")
        if suit_str == "":
            return cls(Rank(idx), Suit.NONE)
        if suit_str not in SYMBOL_SUITS:
            raise InvalidInput(f"invalid suit string: {suit_str!r}")
        return cls(Rank(idx), SYMBOL_SUITS[suit_str])


def parse_cards(text: str) -> List[Card]:
    """Parse a string like "A♥ 3♥ 5♠ 6♦" into a list of cards."""
    return [Card.parse(tok) for tok in text.split()]


def cards_str(cards: Iterable[Card]) -> str:
    return " ".join(str(c) for c in cards)


class Hand:
    """A bounded, ordered run of cards.

    `size` is the capacity, `ncards` the number of cards in use. Once the
    starter has been added, `starter` is its index in `cards`.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ContractViolation(f"hand size must be >= 0, got {size}")
        self.size = size
        self.cards: List[Card] = []
        self.starter: Optional[int] = None

    @classmethod
    def from_cards(cls, cards: Iterable[Card], size: int | None = None) -> Hand:
        cards = list(cards)
        hand = cls(len(cards) if size is None else size)
        for c in cards:
            hand.append(c)
        return hand

    @classmethod
    def parse(cls, text: str, size: int | None = None) -> Hand:
        return cls.from_cards(parse_cards(text), size)

    @property
    def ncards(self) -> int:
        return len(self.cards)

    def is_full(self) -> bool:
        return len(self.cards) >= self.size

    def truncate(self) -> None:
        self.cards.clear()
        self.starter = None

    def append(self, card: Card) -> None:
        if self.is_full():
            raise ContractViolation(f"hand is full ({self.size} cards), cannot append {card}")
        self.cards.append(card)

    def delete(self, idx: int) -> Card:
        if idx < 0 or idx >= len(self.cards):
            raise ContractViolation(f"index {idx} out of range for hand of {len(self.cards)} cards")
        return self.cards.pop(idx)

    def copy_to(self, dest: Hand) -> None:
        if dest.size < len(self.cards):
            raise ContractViolation(
                f"cannot copy {len(self.cards)} cards into hand of size {dest.size}"
            )
        dest.cards = list(self.cards)
        dest.starter = self.starter

    def sort(self) -> None:
        self.cards.sort()

    def add_starter(self, starter: Card) -> None:
        """Append the starter, sort, and record where the starter ended up."""
        self.append(starter)
        self.sort()
        self.starter = self.cards.index(starter)

    def starter_card(self) -> Optional[Card]:
        if self.starter is None:
            return None
        return self.cards[self.starter]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, idx):
        return self.cards[idx]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Hand):
            return NotImplemented
        return self.cards == other.cards and self.starter == other.starter

    def __str__(self) -> str:
        return cards_str(self.cards)

    def __repr__(self) -> str:
        return f"Hand(size={self.size}, cards=[{self}], starter={self.starter})"


def copy_hand(dest: Hand, src: Hand) -> None:
    src.copy_to(dest)


def default_seed() -> int:
    # Same recipe as a C simulator seeding rand(): wall clock mixed with the PID.
    pid = os.getpid()
    return (int(time.time()) ^ pid ^ (pid << 16)) & 0xFFFFFFFF


class Deck:
    def __init__(self, seed: int | None = None):
        self.seed = default_seed() if seed is None else seed
        self._rng = random.Random(self.seed)
        self.cards: List[Card] = [
            Card(Rank(r), Suit(s))
            for r in range(Rank.ACE, Rank.KING + 1)
            for s in range(Suit.CLUB, Suit.SPADE + 1)
        ]
        # next card to deal; 0 means nothing dealt yet
        self.offset = 0
        logger.debug("new deck, seed=%d", self.seed)

    @property
    def ncards(self) -> int:
        return len(self.cards)

    def remaining(self) -> int:
        return len(self.cards) - self.offset

    def shuffle(self) -> None:
        self._rng.shuffle(self.cards)
        self.offset = 0

    def deal_card(self) -> Card:
        if self.offset >= len(self.cards):
            raise ContractViolation("deck is exhausted")
        card = self.cards[self.offset]
        self.offset += 1
        return card

    def deal(self, n: int) -> List[Card]:
        return [self.deal_card() for _ in range(n)]

    def cut(self) -> Card:
        """Turn up a random card from the undealt remainder without consuming it."""
        if self.remaining() <= 0:
            raise ContractViolation("no cards left to cut")
        idx = self._rng.randrange(self.offset, len(self.cards))
        card = self.cards[idx]
        logger.debug("starter: deck[%d] = %s", idx, card)
        return card
