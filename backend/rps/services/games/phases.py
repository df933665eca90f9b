"""Lazy phase transitions for the tournament.

There is no timer thread. Every session operation calls ``advance`` with the
current instant before doing its own work, and the machine moves forward if
the stored deadline has passed:

- waiting -> picking: as soon as enough eligible players are registered
- picking -> review: deadline passed; every matchup is judged
- review -> picking | waiting: deadline passed; disconnected players are
  purged and a new round starts if enough players remain

All functions here assume the session lock is held.
"""
from rps.models import Phase
from .pairing import pair_players
from .scoring import score_round


def eligible_count(session) -> int:
    return sum(1 for p in session.players.values() if not p.disconnected)


def start_round(session, now: float) -> None:
    ids = [pid for pid, p in session.players.items() if not p.disconnected]
    session.matchups, sitting_out = pair_players(ids, session.rng)
    session.sitting_out = sitting_out
    session.round_no += 1
    session.phase = Phase.PICKING
    session.phase_deadline = now + session.picking_duration
    session.logger.info(
        f"[round-start] round={session.round_no} players={len(ids)} matchups={len(session.matchups)} "
        f"sitting_out={sitting_out} deadline={session.phase_deadline}"
    )


def purge_disconnected(session) -> None:
    gone = [pid for pid, p in session.players.items() if p.disconnected]
    for pid in gone:
        del session.players[pid]
    if gone:
        session.logger.info(f"[purge] removed={gone}")


def enter_waiting(session) -> None:
    session.matchups = []
    session.sitting_out = None
    session.phase = Phase.WAITING
    session.phase_deadline = None


def maybe_start(session, now: float) -> bool:
    """Start a round from waiting if enough eligible players are present."""
    if session.phase is Phase.WAITING and eligible_count(session) >= session.min_players:
        start_round(session, now)
        return True
    return False


def advance(session, now: float) -> None:
    prev = session.phase
    if session.phase is Phase.PICKING:
        if now > session.phase_deadline:
            results = score_round(session.matchups, session.players, session.logger)
            reasons = [r['reason'] for r in results]
            session.logger.info(
                f"[round-summary] round={session.round_no} decided={reasons.count('move')} "
                f"forfeits={reasons.count('forfeit')} draws={reasons.count('draw')}"
            )
            session.phase = Phase.REVIEW
            session.phase_deadline = now + session.review_duration
    elif session.phase is Phase.REVIEW:
        if now > session.phase_deadline:
            purge_disconnected(session)
            if eligible_count(session) >= session.min_players:
                start_round(session, now)
            else:
                enter_waiting(session)
    if session.phase is not prev:
        session.logger.info(f"[phase] {prev.value} -> {session.phase.value} deadline={session.phase_deadline}")
