from itertools import combinations
from typing import Iterator, List, Sequence, Tuple

from cribsim.cards import Card
from cribsim.constants import HAND_SIZE, KEEP_SIZE
from cribsim.exceptions import InvalidInput


def iter_combos(n: int, m: int) -> Iterator[Tuple[int, ...]]:
    """Yield every m-element combination of the indices 0..n-1, each once."""
    if n < 0 or m < 0:
        raise InvalidInput(f"iter_combos needs n >= 0 and m >= 0, got n={n}, m={m}")
    return combinations(range(n), m)


def iter_subsets(n: int, min_size: int = 2) -> Iterator[Tuple[int, ...]]:
    """Yield every subset of 0..n-1 with at least min_size members, largest first."""
    for size in range(n, min_size - 1, -1):
        yield from iter_combos(n, size)


def get_possible_hands(hand: Sequence[Card], keep: int = KEEP_SIZE) -> List[Tuple[List[Card], List[Card]]]:
    """
    Given a dealt hand (normally 6 cards), return all possible (cards_to_keep, crib_cards)
    pairs in enumeration order, where cards_to_keep has `keep` cards and crib_cards the rest.
    """
    if len(hand) < keep or len(hand) > HAND_SIZE:
        raise InvalidInput(f"Hand must have {keep} to {HAND_SIZE} cards, got {len(hand)}")
    all_combos = []
    for kept_idx in iter_combos(len(hand), keep):
        kept = [hand[i] for i in kept_idx]
        crib = [hand[i] for i in range(len(hand)) if i not in kept_idx]
        all_combos.append((kept, crib))
    return all_combos
