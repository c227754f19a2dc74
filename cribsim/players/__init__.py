from __future__ import annotations
from typing import Dict, Type

from cribsim.players.base_player import DiscardStrategy, PegSelector, Strategy
from cribsim.players.random_player import RandomDiscard
from cribsim.players.rule_based_player import ExhaustiveDiscard, HighCardFirst, LowCardFirst

DISCARD_STRATEGIES: Dict[str, Type[DiscardStrategy]] = {
    "exhaustive": ExhaustiveDiscard,
    "random": RandomDiscard,
}
PEG_SELECTORS: Dict[str, Type[PegSelector]] = {
    "low": LowCardFirst,
    "high": HighCardFirst,
}


def make_strategy(text: str, seed: int | None = None) -> Strategy:
    """Build a Strategy from a "discard:peg" string such as "exhaustive:low"."""
    discard_name, sep, peg_name = text.strip().partition(":")
    if not sep:
        peg_name = "low"
    if discard_name not in DISCARD_STRATEGIES:
        raise ValueError(f"Unknown discard strategy: {discard_name!r} (choose from {sorted(DISCARD_STRATEGIES)})")
    if peg_name not in PEG_SELECTORS:
        raise ValueError(f"Unknown pegging strategy: {peg_name!r} (choose from {sorted(PEG_SELECTORS)})")
    if discard_name == "random":
        discard = RandomDiscard(seed=seed)
    else:
        discard = DISCARD_STRATEGIES[discard_name]()
    return Strategy(discard=discard, peg=PEG_SELECTORS[peg_name]())


__all__ = [
    "DiscardStrategy",
    "PegSelector",
    "Strategy",
    "ExhaustiveDiscard",
    "RandomDiscard",
    "LowCardFirst",
    "HighCardFirst",
    "make_strategy",
]
