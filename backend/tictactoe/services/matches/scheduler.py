import logging
import time
from typing import Callable

# Longest single sleep, so cancelled timers exit promptly
POLL_SEC = 1.0


class TurnTimer:
    """Handle for one scheduled turn timeout.

    ``cancel`` is synchronous: once it returns the callback will not commit,
    because both the worker and the store check ``cancelled`` before acting.
    """

    def __init__(self, match_id: str, delay: float):
        self.match_id = match_id
        self.delay = delay
        self.deadline = time.time() + delay
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled


class BackgroundScheduler:
    """Runs turn timers as Flask-SocketIO background tasks."""

    def __init__(self, socketio, logger: logging.Logger = None, heartbeat_sec: int = 0):
        self.socketio = socketio
        self.logger = logger or logging.getLogger(__name__)
        self.heartbeat_sec = heartbeat_sec

    def schedule(self, match_id: str, delay: float, callback: Callable[[TurnTimer], None]) -> TurnTimer:
        timer = TurnTimer(match_id, delay)
        self.socketio.start_background_task(self._worker, timer, callback)
        return timer

    def _worker(self, timer: TurnTimer, callback: Callable[[TurnTimer], None]) -> None:
        last_beat = time.time()
        remaining = max(0.0, timer.deadline - last_beat)
        while remaining > 0 and not timer.cancelled:
            self.socketio.sleep(min(POLL_SEC, remaining))
            now = time.time()
            remaining = max(0.0, timer.deadline - now)
            # heartbeat log if enabled
            if self.heartbeat_sec > 0 and now - last_beat >= self.heartbeat_sec and remaining > 0 and not timer.cancelled:
                last_beat = now
                self.logger.info(f"[timer-heartbeat] match={timer.match_id} remaining={remaining:.1f}s")
        if timer.cancelled:
            self.logger.debug(f"[timer-abort] match={timer.match_id} cancelled before firing")
            return
        self.logger.info(f"[timer-fire] match={timer.match_id}")
        callback(timer)
