from flask_socketio import join_room, leave_room, emit
from flask import current_app, request
from rps import socketio
from rps.models import Move, UnknownPlayer
from rps.services.games import get_session
from rps.ui import Pointer, Screen
from typing import Dict, Any
import time

ROOM = 'tournament'

# Per-socket context: player handle, screen and frame pacing
_sid_to_ctx: Dict[str, Dict[str, Any]] = {}


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(data) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _session_ended(ctx) -> None:
    emit('session_ended', {'player_id': ctx['player_id']})


def handle_connect(auth=None):
    name = auth.get('name') if isinstance(auth, dict) else None
    session = get_session()
    player_id = session.add_player(name)
    _sid_to_ctx[_get_sid()] = {
        'player_id': player_id,
        'screen': Screen(session, player_id),
        'next_frame_at': 0.0,
    }
    join_room(ROOM)
    current_app.logger.info(f"[sio-connect] sid={_get_sid()} player={player_id}")
    emit('connected', {'player_id': player_id, 'name': session.get_state(player_id).player.name})
    emit('state_update', {}, to=ROOM, include_self=False)


def handle_disconnect(reason=None):
    ctx = _sid_to_ctx.pop(_get_sid(), None)
    if not ctx:
        return
    get_session().remove_player(ctx['player_id'])
    current_app.logger.info(f"[sio-disconnect] sid={_get_sid()} player={ctx['player_id']} reason={reason}")
    socketio.emit('state_update', {}, to=ROOM, namespace=request.namespace)


def handle_pick(data):
    ctx = _sid_to_ctx.get(_get_sid())
    if not ctx:
        emit('error', {'message': 'not connected to the tournament'})
        return
    try:
        move = Move.parse(_payload(data).get('move'))
    except ValueError as exc:
        emit('error', {'message': str(exc)})
        return
    try:
        get_session().pick(ctx['player_id'], move)
    except UnknownPlayer:
        _session_ended(ctx)
        return
    emit('picked', {'move': move.value})
    emit('state_update', {}, to=ROOM, include_self=False)


def handle_get_state(data=None):
    ctx = _sid_to_ctx.get(_get_sid())
    if not ctx:
        emit('error', {'message': 'not connected to the tournament'})
        return
    try:
        view = get_session().get_state(ctx['player_id'])
    except UnknownPlayer:
        _session_ended(ctx)
        return
    emit('state', view.to_dict())


def handle_pointer(data):
    ctx = _sid_to_ctx.get(_get_sid())
    if not ctx:
        emit('error', {'message': 'not connected to the tournament'})
        return
    data = _payload(data)
    try:
        pointer = Pointer(data.get('x', -1), data.get('y', -1), data.get('button_mask', 0))
    except (TypeError, ValueError):
        emit('error', {'message': 'x, y and button_mask must be integers'})
        return
    try:
        frame = ctx['screen'].update(pointer)
    except UnknownPlayer:
        _session_ended(ctx)
        return
    emit('frame', frame)


def handle_request_frame(data=None):
    """Render a frame, pacing each connection to at most MAX_FPS frames/sec."""
    ctx = _sid_to_ctx.get(_get_sid())
    if not ctx:
        emit('error', {'message': 'not connected to the tournament'})
        return
    wait = ctx['next_frame_at'] - time.monotonic()
    if wait > 0:
        socketio.sleep(wait)
    try:
        frame = ctx['screen'].update()
    except UnknownPlayer:
        _session_ended(ctx)
        return
    emit('frame', frame)
    max_fps = int(current_app.config.get('MAX_FPS', 20)) or 20
    ctx['next_frame_at'] = time.monotonic() + 1.0 / max_fps


def handle_leave_game(data=None):
    ctx = _sid_to_ctx.get(_get_sid())
    if not ctx:
        emit('error', {'message': 'not connected to the tournament'})
        return
    get_session().remove_player(ctx['player_id'])
    leave_room(ROOM)
    emit('left', {'player_id': ctx['player_id']})
    socketio.emit('state_update', {}, to=ROOM, namespace=request.namespace)


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    handlers = {
        'connect': handle_connect,
        'disconnect': handle_disconnect,
        'pick': handle_pick,
        'get_state': handle_get_state,
        'pointer': handle_pointer,
        'request_frame': handle_request_frame,
        'leave_game': handle_leave_game,
        'ping': handle_ping,
    }
    for event, handler in handlers.items():
        socketio.on_event(event, handler, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        for event, handler in handlers.items():
            socketio.on_event(event, handler, namespace='/')
