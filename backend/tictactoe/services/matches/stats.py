import logging
import threading
from typing import Dict, List

from tictactoe.models import PlayerRecord


class StatsTracker:
    """Cumulative win/loss/streak counters per player.

    Records are created lazily with every counter at zero and are never
    deleted. Callers only ever receive dict snapshots.
    """

    def __init__(self, logger: logging.Logger = None):
        self._records: Dict[str, PlayerRecord] = {}
        self._lock = threading.Lock()
        self.logger = logger or logging.getLogger(__name__)

    def _record(self, player_id: str) -> PlayerRecord:
        record = self._records.get(player_id)
        if record is None:
            record = self._records[player_id] = PlayerRecord()
        return record

    def ensure_player(self, player_id: str) -> None:
        with self._lock:
            self._record(player_id)

    def record_outcome(self, winner_id: str, loser_id: str) -> None:
        """Apply one decisive result. Draws never reach this method."""
        with self._lock:
            winner = self._record(winner_id)
            loser = self._record(loser_id)
            winner.wins += 1
            winner.streak += 1
            winner.max_streak = max(winner.max_streak, winner.streak)
            loser.losses += 1
            loser.streak = 0
            summary = (
                f"winner={winner_id} wins={winner.wins} streak={winner.streak} "
                f"loser={loser_id} losses={loser.losses}"
            )
        self.logger.info(f"[stats] {summary}")

    def get_player(self, player_id: str) -> dict:
        with self._lock:
            return self._record(player_id).to_dict(player_id)

    def get_leaderboard(self, limit: int = 10) -> List[dict]:
        """Top ``limit`` players by win rate.

        Equal win rates fall back to more wins first, then player id.
        """
        with self._lock:
            entries = [record.to_dict(player_id) for player_id, record in self._records.items()]
        entries.sort(key=lambda e: (-e['win_rate'], -e['wins'], e['player']))
        return entries[:max(0, limit)]
