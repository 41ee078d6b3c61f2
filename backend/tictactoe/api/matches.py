from flask import Blueprint, current_app, jsonify, request

from tictactoe.main import get_stats, get_store
from tictactoe.services.matches import BadRequest


matches = Blueprint('matches', __name__)


def _require(data: dict, *names):
    missing = [name for name in names if data.get(name) in (None, '')]
    if missing:
        raise BadRequest(f"Missing required field(s): {', '.join(missing)}")
    if 'player' in names and not isinstance(data['player'], str):
        raise BadRequest('player must be a string')
    return [data[name] for name in names]


@matches.route('/matches', methods=['POST'])
def create_match():
    data = request.get_json(silent=True) or {}
    player, = _require(data, 'player')
    mode = data.get('mode') or 'classic'
    match_id = get_store().create(player, mode)
    return jsonify({'game_id': match_id, 'mode': mode}), 201


@matches.route('/matches/<string:match_id>', methods=['GET'])
def get_match(match_id):
    return jsonify(get_store().get(match_id))


@matches.route('/matches/<string:match_id>/join', methods=['POST'])
def join_match(match_id):
    data = request.get_json(silent=True) or {}
    player, = _require(data, 'player')
    store = get_store()
    game = store.join(match_id, player)
    # Timed matches start their first turn clock once both seats are taken
    if game['mode'] == 'timed' and len(game['players']) == 2:
        current_app.logger.info(f"[join] starting initial timer for match={game['id']}")
        store.start_turn_timer(match_id)
        game = store.get(match_id)
    return jsonify(game)


@matches.route('/matches/<string:match_id>/moves', methods=['POST'])
def make_move(match_id):
    data = request.get_json(silent=True) or {}
    player, index = _require(data, 'player', 'index')
    return jsonify(get_store().apply_move(match_id, player, index))


@matches.route('/matches/<string:match_id>/reset', methods=['POST'])
def reset_match(match_id):
    return jsonify(get_store().reset(match_id))


@matches.route('/leaderboard', methods=['GET'])
def leaderboard():
    default_limit = int(current_app.config.get('LEADERBOARD_LIMIT', 10))
    limit = request.args.get('limit', default_limit, type=int)
    return jsonify(get_stats().get_leaderboard(limit))


@matches.route('/players/<string:player>/stats', methods=['GET'])
def player_stats(player):
    return jsonify(get_stats().get_player(player))
