from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config, scheduler=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', '*')
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Stores live for the lifetime of this app instance
    from tictactoe.services.matches import MatchStore, StatsTracker
    from tictactoe.services.matches.scheduler import BackgroundScheduler
    from tictactoe.socketio_events import broadcast_match_event

    if scheduler is None:
        scheduler = BackgroundScheduler(
            socketio,
            logger=flask_app.logger,
            heartbeat_sec=int(flask_app.config.get('TIMER_HEARTBEAT_SEC', 0)),
        )
    stats = StatsTracker(logger=flask_app.logger)
    store = MatchStore(
        stats,
        scheduler,
        turn_duration=int(flask_app.config.get('TURN_DURATION_SEC', 30)),
        publish=broadcast_match_event,
        logger=flask_app.logger,
    )
    flask_app.extensions['match_store'] = store
    flask_app.extensions['stats_tracker'] = stats

    from tictactoe.main import main
    flask_app.register_blueprint(main)

    from tictactoe.api.matches import matches
    flask_app.register_blueprint(matches, url_prefix='/api')

    # Register Socket.IO event handlers on the shared socketio instance
    from tictactoe.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    return flask_app
