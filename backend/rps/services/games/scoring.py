import logging
from typing import Dict, Iterable, List, Optional, Tuple

from rps.models import Matchup, PlayerRecord

logger = logging.getLogger(__name__)


def judge_matchup(matchup: Matchup, players: Dict[int, PlayerRecord]) -> Tuple[Optional[int], str]:
    """Decide one matchup. Returns (winner, reason).

    A side is usable when its player is still in the registry and has a move.
    Two usable sides compare moves; one usable side wins by forfeit; anything
    else is a draw. The forfeiting side's standing is not consulted.
    """
    a, b = matchup.players
    move_a, move_b = matchup.moves
    a_ready = a in players and move_a is not None
    b_ready = b in players and move_b is not None

    if a_ready and b_ready:
        if move_a.beats(move_b):
            return a, 'move'
        if move_b.beats(move_a):
            return b, 'move'
        return None, 'draw'
    if a_ready:
        return a, 'forfeit'
    if b_ready:
        return b, 'forfeit'
    return None, 'draw'


def score_round(matchups: Iterable[Matchup], players: Dict[int, PlayerRecord], log=None) -> List[dict]:
    """Judge every matchup of the round and credit wins.

    Sets ``winner`` on each matchup and increments the winner's ``wins``.
    Returns a summary per matchup.
    """
    log = log or logger
    results = []
    for m in matchups:
        winner, reason = judge_matchup(m, players)
        m.winner = winner
        if winner is not None:
            players[winner].wins += 1
        log.info(f"[judge] matchup={m.players} moves={[mv.value if mv else None for mv in m.moves]} winner={winner} reason={reason}")
        results.append({
            'players': m.players,
            'winner': winner,
            'reason': reason,
        })
    return results
