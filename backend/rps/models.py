from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class UnknownPlayer(LookupError):
    """Raised when a handle is not (or no longer) in the player registry."""

    def __init__(self, player_id):
        super().__init__(f"could not find player with id {player_id}")
        self.player_id = player_id


class Move(Enum):
    ROCK = 'rock'
    PAPER = 'paper'
    SCISSORS = 'scissors'

    def beats(self, other: Move) -> bool:
        return _BEATS[self] is other

    @classmethod
    def parse(cls, value) -> Move:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unrecognized move: {value!r}") from None

    def __str__(self):
        return self.name


_BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}


class Phase(Enum):
    WAITING = 'waiting'
    PICKING = 'picking'
    REVIEW = 'review'


@dataclass
class PlayerRecord:
    player_id: int
    name: str
    disconnected: bool = False
    wins: int = 0

    def to_dict(self):
        return {
            'id': self.player_id,
            'name': self.name,
            'disconnected': self.disconnected,
            'wins': self.wins,
        }


@dataclass
class Matchup:
    """One pairing for the current round.

    Participants are fixed for the round. Each move slot is written at most
    once, and ``winner`` is set once by judging.
    """

    players: Tuple[int, int]
    moves: List[Optional[Move]] = field(default_factory=lambda: [None, None])
    winner: Optional[int] = None

    def slot_of(self, player_id: int) -> Optional[int]:
        if self.players[0] == player_id:
            return 0
        if self.players[1] == player_id:
            return 1
        return None


@dataclass(frozen=True)
class PlayerView:
    player: PlayerRecord
    phase: Phase
    time_left: float
    player_move: Optional[Move] = None
    opponent: Optional[PlayerRecord] = None
    opponent_move: Optional[Move] = None
    winner: Optional[int] = None
    rankings: Tuple[PlayerRecord, ...] = ()

    def to_dict(self):
        return {
            'player': self.player.to_dict(),
            'phase': self.phase.value,
            'time_left': self.time_left,
            'player_move': self.player_move.value if self.player_move else None,
            'opponent': self.opponent.to_dict() if self.opponent else None,
            'opponent_move': self.opponent_move.value if self.opponent_move else None,
            'winner': self.winner,
            'rankings': [p.to_dict() for p in self.rankings],
        }
