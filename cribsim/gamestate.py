from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import List, Optional
import json
import hashlib

from cribsim.constants import PLAYER_A, PLAYER_B, WIN_SCORE


def player_label(player: int) -> str:
    # PLAYER_A = 0, PLAYER_B = 1
    return chr(ord("a") + player)


@dataclass
class GameState:
    # scores and winner are indexed by stable identity (PLAYER_A / PLAYER_B);
    # seats maps seat -> identity, seat 1 being the dealer.
    seats: List[int] = field(default_factory=lambda: [PLAYER_A, PLAYER_B])
    scores: List[int] = field(default_factory=lambda: [0, 0])
    winner: Optional[int] = None
    num_hands: int = 0
    win_score: int = WIN_SCORE

    @property
    def dealer(self) -> int:
        return self.seats[1]

    def swap_seats(self) -> None:
        self.seats = [self.seats[1], self.seats[0]]

    def add_points(self, seat: int, points: int) -> bool:
        """Credit `points` to whoever sits in `seat`. Returns True once there is a winner."""
        player = self.seats[seat]
        self.scores[player] += points
        if self.winner is None and self.scores[player] >= self.win_score:
            self.winner = player
        return self.winner is not None

    def serialize(self) -> str:
        return json.dumps(asdict(self), sort_keys=True)

    def hash(self) -> str:
        s = self.serialize()
        return hashlib.sha256(s.encode('utf-8')).hexdigest()
