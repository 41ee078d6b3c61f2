from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from tictactoe.services.matches import MatchError, MatchStore, StatsTracker

main = Blueprint('main', __name__)


def get_store() -> MatchStore:
    return current_app.extensions['match_store']


def get_stats() -> StatsTracker:
    return current_app.extensions['stats_tracker']


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the tic-tac-toe game server!'})


@main.route('/health')
def health():
    return jsonify({'status': 'healthy', 'timestamp': datetime.now(timezone.utc).isoformat()}), 200


@main.app_errorhandler(MatchError)
def handle_match_error(err):
    return jsonify(err.to_dict()), err.status_code
