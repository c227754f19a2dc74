from __future__ import annotations
from typing import List, Optional, Sequence
from logging import getLogger

from cribsim.cards import Card, Deck, Hand
from cribsim.constants import HAND_SIZE, KEEP_SIZE, WIN_SCORE
from cribsim.exceptions import ContractViolation
from cribsim.gamestate import GameState, player_label
from cribsim.pegging import new_peg_state, peg_hands
from cribsim.players.base_player import Strategy
from cribsim.scoring import format_score, score_hand, score_starter_jack

logger = getLogger(__name__)


def add_starter(hand: Hand, starter: Card) -> None:
    hand.add_starter(starter)


class CribbageGame:
    """Two-player game. `strategies` is indexed by stable identity
    (PLAYER_A, PLAYER_B); who deals alternates from hand to hand."""

    def __init__(
        self,
        strategies: Sequence[Strategy],
        deck: Optional[Deck] = None,
        seed: int | None = None,
        win_score: int = WIN_SCORE,
    ):
        if len(strategies) != 2:
            raise ValueError(f"cribbage needs exactly two strategies, got {len(strategies)}")
        self.strategies = list(strategies)
        self.deck = deck if deck is not None else Deck(seed)
        self.state = GameState(win_score=win_score)

    def update_scores(self, seat: int, points: int) -> bool:
        done = self.state.add_points(seat, points)
        if done:
            winner = self.state.winner
            logger.info("winner: player %d/%s with %d points",
                        seat, player_label(winner), self.state.scores[winner])
        return done

    def evaluate_hands(self, hands: List[Hand], crib: Hand, starter: Card) -> bool:
        """Starter jack, pegging, then the counting of hand 0, hand 1 and the crib.
        Returns True as soon as somebody has won."""
        if hands[0].ncards != hands[1].ncards or hands[0].ncards != crib.ncards:
            raise ContractViolation(
                f"hands and crib must match in size, got {hands[0].ncards}, {hands[1].ncards}, {crib.ncards}"
            )

        jack_points = score_starter_jack(starter)
        if jack_points:
            logger.debug("starter %s is a jack: %d points to the dealer", starter, jack_points)
            if self.update_scores(1, jack_points):
                return True

        seats = self.state.seats
        select = [self.strategies[seats[0]].peg, self.strategies[seats[1]].peg]
        peg = new_peg_state(hands[0].ncards)
        if peg_hands(peg, hands, select, self.update_scores):
            return True

        # Add starter to each hand and the crib, and score all three.
        for hand in (hands[0], hands[1], crib):
            add_starter(hand, starter)

        score = score_hand(hands[0])
        logger.debug(format_score(score, "hands[0] with starter"))
        if self.update_scores(0, score.total):
            return True

        score = score_hand(hands[1])
        logger.debug(format_score(score, "hands[1] with starter"))
        if self.update_scores(1, score.total):
            return True

        # The crib always belongs to the dealer.
        score = score_hand(crib)
        logger.debug(format_score(score, "crib with starter"))
        return self.update_scores(1, score.total)

    def play_hand(self) -> bool:
        hands = [Hand(HAND_SIZE), Hand(HAND_SIZE)]
        crib = Hand(KEEP_SIZE + 1)

        self.deck.shuffle()
        for _ in range(HAND_SIZE):
            hands[0].append(self.deck.deal_card())
            hands[1].append(self.deck.deal_card())

        # Discard strategies rely on sorted hands.
        seats = self.state.seats
        for seat in (0, 1):
            hands[seat].sort()
            logger.debug("hands[%d] after dealing: %s", seat, hands[seat])
            self.strategies[seats[seat]].discard.discard(hands[seat], crib)
            if hands[seat].ncards != KEEP_SIZE:
                raise ContractViolation(
                    f"discard left {hands[seat].ncards} cards in hands[{seat}], expected {KEEP_SIZE}"
                )
            hands[seat].sort()
            logger.debug("hands[%d] after discard: %s", seat, hands[seat])
        if crib.ncards != KEEP_SIZE:
            raise ContractViolation(f"crib has {crib.ncards} cards after discarding, expected {KEEP_SIZE}")
        crib.sort()
        logger.debug("crib after discard: %s", crib)

        starter = self.deck.cut()
        return self.evaluate_hands(hands, crib, starter)

    def play_game(self) -> int:
        """Play hands until somebody wins; returns the winner's identity."""
        while self.state.winner is None:
            # Swap seats: the dealer alternates.
            self.state.swap_seats()
            self.play_hand()
            self.state.num_hands += 1
            scores = self.state.scores
            if self.state.winner is not None:
                status = f"winner={player_label(self.state.winner)}"
            else:
                status = "no winner yet"
            logger.debug("after %d hand(s): scores={a: %d, b: %d}, %s",
                         self.state.num_hands, scores[0], scores[1], status)
        return self.state.winner
