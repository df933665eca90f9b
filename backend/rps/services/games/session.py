import itertools
import logging
import random
import threading
from typing import Dict, List, Optional

from rps.models import Matchup, Move, Phase, PlayerRecord, PlayerView, UnknownPlayer
from . import phases
from .clock import Clock, system_clock
from .views import build_view


class Session:
    """Authoritative tournament state: players, matchups, phase and deadline.

    Every public method takes the same lock for its whole duration and first
    lets the phase machine catch up with the clock, so a transition can never
    interleave with a read or fire twice for one deadline.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        picking_duration: float = 10,
        review_duration: float = 5,
        min_players: int = 2,
        rng: Optional[random.Random] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.lock = threading.Lock()
        self.clock = clock or system_clock
        self.picking_duration = picking_duration
        self.review_duration = review_duration
        self.min_players = max(2, int(min_players))
        self.rng = rng
        self.logger = logger or logging.getLogger(__name__)

        self._ids = itertools.count(1)
        self.players: Dict[int, PlayerRecord] = {}
        self.matchups: List[Matchup] = []
        self.sitting_out: Optional[int] = None
        self.round_no = 0
        self.phase = Phase.WAITING
        self.phase_deadline: Optional[float] = None

    def add_player(self, name: Optional[str] = None) -> int:
        with self.lock:
            now = self.clock()
            phases.advance(self, now)

            player_id = next(self._ids)
            name = (name or '').strip() or f"P{player_id}"
            self.players[player_id] = PlayerRecord(player_id=player_id, name=name)
            phases.maybe_start(self, now)

            active, total = self._player_count()
            self.logger.info(f"[player-join] player={player_id} name={name!r} active={active} total={total}")
            return player_id

    def remove_player(self, player_id: int) -> None:
        with self.lock:
            phases.advance(self, self.clock())

            player = self.players.get(player_id)
            if player is None or player.disconnected:
                return
            if self.phase is Phase.WAITING:
                del self.players[player_id]
            else:
                # Kept until the next purge so this round's matchups stay intact
                player.disconnected = True

            active, total = self._player_count()
            self.logger.info(f"[player-leave] player={player_id} active={active} total={total}")

    def pick(self, player_id: int, move: Move) -> None:
        """Record a move. Inert outside picking, when sitting out, after
        leaving, or once picked."""
        move = Move.parse(move)
        with self.lock:
            phases.advance(self, self.clock())

            player = self.players.get(player_id)
            if player is None:
                raise UnknownPlayer(player_id)
            # A player who has left keeps only the move made before leaving
            if player.disconnected or self.phase is not Phase.PICKING:
                return
            for m in self.matchups:
                slot = m.slot_of(player_id)
                if slot is None:
                    continue
                if m.moves[slot] is None:
                    m.moves[slot] = move
                    self.logger.debug(f"[pick] player={player_id} move={move.value}")
                return

    def get_state(self, player_id: int) -> PlayerView:
        with self.lock:
            now = self.clock()
            phases.advance(self, now)
            return build_view(self, player_id, now)

    # Assumes self.lock is held.
    def _player_count(self):
        active = sum(1 for p in self.players.values() if not p.disconnected)
        return active, len(self.players)
