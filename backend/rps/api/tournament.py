from flask import Blueprint, jsonify, request, current_app
from rps import socketio
from rps.models import Move, UnknownPlayer
from rps.services.games import get_session
from rps.ui import Screen


tournament = Blueprint('tournament', __name__)

ROOM = 'tournament'


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _player_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _notify():
    socketio.emit('state_update', {}, to=ROOM, namespace='/ws')


@tournament.errorhandler(UnknownPlayer)
def unknown_player(exc):
    return jsonify({'error': str(exc), 'player_id': exc.player_id}), 404


@tournament.route('/join', methods=['POST'])
def join():
    data = _json_body()
    session = get_session()
    player_id = session.add_player(data.get('name'))
    name = session.get_state(player_id).player.name
    _notify()
    return jsonify({'player_id': player_id, 'name': name}), 201


@tournament.route('/leave', methods=['POST'])
def leave():
    data = _json_body()
    player_id = _player_id(data.get('player_id'))
    if player_id is None:
        return jsonify({'error': 'player_id is required'}), 400
    get_session().remove_player(player_id)
    _notify()
    return jsonify({'message': 'You have left the tournament.'}), 200


@tournament.route('/pick', methods=['POST'])
def pick():
    data = _json_body()
    player_id = _player_id(data.get('player_id'))
    if player_id is None:
        return jsonify({'error': 'player_id is required'}), 400
    try:
        move = Move.parse(data.get('move'))
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    get_session().pick(player_id, move)
    _notify()
    return jsonify({'message': 'Move submitted'}), 200


@tournament.route('/state', methods=['GET'])
def state():
    player_id = _player_id(request.args.get('player_id'))
    if player_id is None:
        return jsonify({'error': 'player_id is required'}), 400
    payload = get_session().get_state(player_id).to_dict()
    # Include phase durations so clients can scale countdowns
    cfg = current_app.config
    payload['durations'] = {
        'picking': int(cfg.get('PICKING_DURATION_SEC', 10)),
        'review': int(cfg.get('REVIEW_DURATION_SEC', 5)),
    }
    return jsonify(payload)


@tournament.route('/screen', methods=['GET'])
def screen():
    player_id = _player_id(request.args.get('player_id'))
    if player_id is None:
        return jsonify({'error': 'player_id is required'}), 400
    return jsonify(Screen(get_session(), player_id).update())
