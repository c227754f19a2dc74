from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence
from logging import getLogger

from cribsim.cards import Hand, cards_str
from cribsim.constants import MAX_COUNT, MAX_ROUNDS
from cribsim.exceptions import ContractViolation

logger = getLogger(__name__)

# Longest possible run while pegging: A 2 3 4 5 6 7 adds up to 28.
MAX_PEG_RUN = 7

# on_points(seat, points) -> True when the game is over
PointsCallback = Callable[[int, int], bool]


@dataclass
class PegState:
    avail: List[Hand]
    cur_played: Hand
    cur_count: int = 0
    cards_played: List[Hand] = field(default_factory=list)
    counts: List[int] = field(default_factory=list)
    points: List[int] = field(default_factory=lambda: [0, 0])

    @property
    def num_rounds(self) -> int:
        return len(self.cards_played)


def new_peg_state(ncards: int) -> PegState:
    return PegState(avail=[Hand(ncards), Hand(ncards)], cur_played=Hand(ncards * 2))


def peg_count_pairs(peg: PegState) -> int:
    """Points for the M-of-a-kind ending with the card just played: 2, 6 or 12."""
    played = peg.cur_played.cards
    if not played:
        return 0
    last_rank = played[-1].rank
    same_rank = 1
    for card in reversed(played[:-1]):
        if card.rank != last_rank:
            break
        same_rank += 1
    return same_rank * (same_rank - 1)


def peg_count_runs(peg: PegState) -> int:
    """Length of the longest run formed by the tail of the current round, or 0.

    Only the longest tail counts, so a run of 7 is never also scored as a run of 3.
    """
    # cur_played = {4, 6, 8, 7}       : run of 3
    # cur_played = {A, 3, 5, 7, 8}    : no runs
    # cur_played = {3, A, 5, 7, 8, 6} : run of 4
    # cur_played = {2, 5, 6, 4, 7}    : run of 4 (preceding run already counted)
    played = peg.cur_played.cards
    max_run = min(MAX_PEG_RUN, len(played))
    for length in range(max_run, 2, -1):
        ranks = sorted(c.rank for c in played[-length:])
        if all(b == a + 1 for a, b in zip(ranks, ranks[1:])):
            return length
    return 0


def _archive_round(peg: PegState) -> None:
    if peg.num_rounds >= MAX_ROUNDS:
        raise ContractViolation(f"pegging needed more than {MAX_ROUNDS} rounds")
    peg.cards_played.append(peg.cur_played)
    peg.counts.append(peg.cur_count)
    peg.cur_played = Hand(peg.cur_played.size)
    peg.cur_count = 0


def peg_hands(
    peg: PegState,
    hands: Sequence[Hand],
    select: Sequence,
    on_points: Optional[PointsCallback] = None,
) -> bool:
    """Play out the pegging phase for two hands of equal size.

    Player 0 leads, which makes player 1 the dealer. `select[i]` is the
    PegSelector for player i; it picks an index into the (sorted) pool
    `peg.avail[i]`, or returns None when it cannot play without going over 31.
    Every award is passed to `on_points` as it happens. Returns True if
    `on_points` reported the end of the game, False once all cards are played.
    """
    if len(hands) != 2 or len(select) != 2:
        raise ContractViolation("pegging needs exactly two players")
    if hands[0].ncards != hands[1].ncards:
        raise ContractViolation(
            f"hands must be the same size, got {hands[0].ncards} and {hands[1].ncards}"
        )

    hands[0].copy_to(peg.avail[0])
    hands[1].copy_to(peg.avail[1])
    peg.avail[0].starter = peg.avail[1].starter = None
    logger.debug("peg_hands(): hands[0]=%s, hands[1]=%s", hands[0], hands[1])

    def award(seat: int, points: int) -> bool:
        peg.points[seat] += points
        return on_points is not None and on_points(seat, points)

    # Start from player 0: flipping on the first pass selects them.
    player, other = 1, 0

    # A blocked player cannot play a card and keep the count at 31 or lower.
    blocked = [False, False]
    need_reset = False

    while True:
        if need_reset:
            # We either hit 31, or both players are blocked.
            _archive_round(peg)
            blocked = [False, False]
            need_reset = False

        # Flip to the other player ... unless they are blocked.
        if not blocked[other]:
            player, other = other, player

        player_left = peg.avail[player].ncards
        other_left = peg.avail[other].ncards
        if player_left + other_left == 0:
            raise ContractViolation("pegging loop ran with no cards left")

        if player_left == 0:
            logger.debug("  player %d out: try the other player", player)
            if blocked[other]:
                logger.debug("  but player %d blocked: need reset", other)
                need_reset = True
            continue

        if blocked[player] and blocked[other]:
            logger.debug("  both players blocked, still have %d cards left: need reset",
                         player_left + other_left)
            need_reset = True
            continue

        selected = select[player].select_card(peg, player, other)
        if selected is None:
            logger.debug("  player %d says go (is blocked)", player)
            if not blocked[other]:
                logger.debug("  player %d blocked: 1 point to player %d", player, other)
                if award(other, 1):
                    return True
            blocked[player] = True
            continue

        if selected < 0 or selected >= player_left:
            raise ContractViolation(
                f"player {player} selected index {selected} from {player_left} available cards"
            )
        card = peg.avail[player].delete(selected)
        peg.cur_played.append(card)
        peg.cur_count += card.value
        if peg.cur_count > MAX_COUNT:
            raise ContractViolation(
                f"player {player} played {card} and took the count to {peg.cur_count}"
            )
        player_left -= 1
        logger.debug("  player %d played card %s, cur_count=%d", player, card, peg.cur_count)

        if peg.cur_count == 15:
            logger.debug("  fifteen: 2 points to player %d", player)
            if award(player, 2):
                return True
        elif peg.cur_count == MAX_COUNT:
            if blocked[other]:
                logger.debug("  31: 1 point to player %d because player %d is blocked", player, other)
                points = 1
            elif other_left == 0 and player_left == 0:
                logger.debug("  31: 1 point to player %d for last card", player)
                points = 1
            else:
                logger.debug("  31: 2 points to player %d", player)
                points = 2
            if award(player, points):
                return True
            if player_left > 0:
                need_reset = True

        pair_points = peg_count_pairs(peg)
        if pair_points > 0:
            logger.debug("  found pair(s): %d points to player %d", pair_points, player)
            if award(player, pair_points):
                return True

        run_points = peg_count_runs(peg)
        if run_points > 0:
            logger.debug("  found run of %d: %d points to player %d", run_points, run_points, player)
            if award(player, run_points):
                return True

        if other_left == 0 and player_left == 0:
            logger.debug("  player %d played last card: 1 point, done pegging", player)
            if award(player, 1):
                return True
            break

        logger.debug("  need_reset=%s, points={%d, %d}", need_reset, peg.points[0], peg.points[1])

    _archive_round(peg)
    logger.debug("pegging done: rounds=%s, %d points to player 0, %d points to player 1",
                 " | ".join(cards_str(h) for h in peg.cards_played), peg.points[0], peg.points[1])
    return False
