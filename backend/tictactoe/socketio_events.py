from flask import current_app
from flask_socketio import emit, join_room, leave_room

from tictactoe import socketio
from tictactoe.main import get_stats, get_store
from tictactoe.services.matches import BadRequest, MatchError
from tictactoe.services.matches.events import MatchEvent

NAMESPACE = '/ws'


def broadcast_match_event(event: MatchEvent) -> None:
    """Relay a store event to everyone in the match room."""
    # Use socketio.emit since this may be called from a background task
    socketio.emit(event.type.value, event.data, to=event.match_id, namespace=NAMESPACE)


def _emit_error(err: MatchError) -> None:
    emit('error', {'message': err.message, 'code': err.code})


def _field(data, name):
    value = (data or {}).get(name)
    if value in (None, ''):
        raise BadRequest(f"{name} is required")
    if name == 'player' and not isinstance(value, str):
        raise BadRequest('player must be a string')
    return value


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_disconnect():
    current_app.logger.info("[disconnect] client disconnected")


def _create(data, mode):
    try:
        player = _field(data, 'player')
        game_id = get_store().create(player, mode)
    except MatchError as err:
        _emit_error(err)
        return
    join_room(game_id)
    emit('game_created', {'game_id': game_id, 'mode': mode})


def handle_create_game(data):
    _create(data, (data or {}).get('mode') or 'classic')


def handle_create_timed_game(data):
    _create(data, 'timed')


def handle_join_game(data):
    try:
        game_id = str(_field(data, 'game_id')).upper()
        player = _field(data, 'player')
    except MatchError as err:
        _emit_error(err)
        return
    # Join the room first so the joiner also receives player_joined
    join_room(game_id)
    store = get_store()
    try:
        game = store.join(game_id, player)
    except MatchError as err:
        leave_room(game_id)
        _emit_error(err)
        return
    if game['mode'] == 'timed' and len(game['players']) == 2:
        current_app.logger.info(f"[join] starting initial timer for match={game_id}")
        store.start_turn_timer(game_id)


def handle_make_move(data):
    try:
        get_store().apply_move(_field(data, 'game_id'), _field(data, 'player'), (data or {}).get('index'))
    except MatchError as err:
        _emit_error(err)


def handle_reset_game(data):
    try:
        get_store().reset(_field(data, 'game_id'))
    except MatchError as err:
        _emit_error(err)


def handle_get_game(data):
    try:
        emit('game_state', get_store().get(_field(data, 'game_id')))
    except MatchError as err:
        _emit_error(err)


def handle_get_leaderboard(data=None):
    limit = int(current_app.config.get('LEADERBOARD_LIMIT', 10))
    emit('leaderboard_data', get_stats().get_leaderboard(limit))


def handle_get_player_stats(data):
    try:
        emit('player_stats', get_stats().get_player(_field(data, 'player')))
    except MatchError as err:
        _emit_error(err)


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('create_game', handle_create_game, namespace=NAMESPACE)
    socketio.on_event('create_timed_game', handle_create_timed_game, namespace=NAMESPACE)
    socketio.on_event('join_game', handle_join_game, namespace=NAMESPACE)
    socketio.on_event('make_move', handle_make_move, namespace=NAMESPACE)
    socketio.on_event('reset_game', handle_reset_game, namespace=NAMESPACE)
    socketio.on_event('get_game', handle_get_game, namespace=NAMESPACE)
    socketio.on_event('get_leaderboard', handle_get_leaderboard, namespace=NAMESPACE)
    socketio.on_event('get_player_stats', handle_get_player_stats, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)
