"""Tournament domain services: pairing, judging, phases and the session.

This package holds the round/session state machine and is imported by the
HTTP routes and socket handlers, keeping transport concerns separated from
core game mechanics. Nothing here performs I/O.
"""
from flask import current_app

from .clock import FakeClock, system_clock
from .session import Session


def create_session(app) -> Session:
    cfg = app.config
    return Session(
        clock=cfg.get('RPS_CLOCK') or system_clock,
        picking_duration=float(cfg.get('PICKING_DURATION_SEC', 10)),
        review_duration=float(cfg.get('REVIEW_DURATION_SEC', 5)),
        min_players=int(cfg.get('MIN_PLAYERS', 2)),
        logger=app.logger,
    )


def get_session() -> Session:
    return current_app.extensions['rps_session']
