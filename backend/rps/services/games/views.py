from dataclasses import replace
from typing import Dict, Iterable, Tuple

from rps.models import Phase, PlayerRecord, PlayerView, UnknownPlayer


def rankings(players: Iterable[PlayerRecord]) -> Tuple[PlayerRecord, ...]:
    """Copies of all players by descending wins; ties go to the lower handle."""
    ordered = sorted(players, key=lambda p: p.player_id)
    ordered.sort(key=lambda p: p.wins, reverse=True)
    return tuple(replace(p) for p in ordered)


def build_view(session, player_id: int, now: float) -> PlayerView:
    """Snapshot of the session as seen by one player. Assumes the lock is held."""
    players: Dict[int, PlayerRecord] = session.players
    player = players.get(player_id)
    if player is None:
        raise UnknownPlayer(player_id)

    time_left = 0.0
    if session.phase is not Phase.WAITING:
        time_left = session.phase_deadline - now

    player_move = opponent = opponent_move = winner = None
    for m in session.matchups:
        slot = m.slot_of(player_id)
        if slot is None:
            continue
        other = 1 - slot
        player_move = m.moves[slot]
        opp = players.get(m.players[other])
        if opp is not None:
            opponent = replace(opp)
            opponent_move = m.moves[other]
        else:
            session.logger.warning(f"[view] player {m.players[other]} is in matchup but not in registry")
        winner = m.winner
        break

    return PlayerView(
        player=replace(player),
        phase=session.phase,
        time_left=time_left,
        player_move=player_move,
        opponent=opponent,
        opponent_move=opponent_move,
        winner=winner,
        rankings=rankings(players.values()),
    )
