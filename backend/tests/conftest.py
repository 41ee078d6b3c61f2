import os
import sys
import pytest

# Ensure the backend root (containing the `tictactoe` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tictactoe import create_app, socketio
from tictactoe.services.matches import MatchStore, StatsTracker
from tictactoe.services.matches.scheduler import TurnTimer


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    TURN_DURATION_SEC = 30
    LEADERBOARD_LIMIT = 10
    TIMER_HEARTBEAT_SEC = 0
    CORS_ORIGINS = ['http://localhost:5173']
    LOG_LEVEL = 'DEBUG'


class ManualScheduler:
    """Records scheduled timers; tests fire them explicitly."""

    def __init__(self):
        self.timers = []

    def schedule(self, match_id, delay, callback):
        timer = TurnTimer(match_id, delay)
        self.timers.append((timer, callback))
        return timer

    def active(self, match_id=None):
        return [
            t for t, _ in self.timers
            if t.active and (match_id is None or t.match_id == match_id)
        ]

    def fire(self, timer):
        """Simulate the timer elapsing, as the background worker would."""
        for t, callback in self.timers:
            if t is timer:
                if t.cancelled:
                    return
                callback(t)
                return
        raise AssertionError('unknown timer')

    def fire_latest(self, match_id):
        matching = [t for t, _ in self.timers if t.match_id == match_id]
        assert matching, f'no timer scheduled for {match_id}'
        self.fire(matching[-1])


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def stats():
    return StatsTracker()


@pytest.fixture()
def events():
    return []


@pytest.fixture()
def store(stats, scheduler, events):
    return MatchStore(stats, scheduler, turn_duration=30, publish=events.append)


@pytest.fixture()
def flask_app(scheduler):
    application = create_app(TestConfig, scheduler=scheduler)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        c = socketio.test_client(flask_app, namespace='/ws')
        c.get_received('/ws')  # flush connected ack
        clients.append(c)
        return c

    yield _make
    for c in clients:
        try:
            c.disconnect(namespace='/ws')
        except Exception:
            pass
