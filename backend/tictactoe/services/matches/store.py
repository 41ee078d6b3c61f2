import logging
import threading
import time
from typing import Callable, Dict, Optional

from tictactoe.models import BOARD_SIZE, DRAW, Mark, Match, Mode, generate_match_code
from .board import check_winner
from .errors import (
    BadRequest,
    CellOccupied,
    GameOver,
    InvalidCell,
    InvalidMode,
    MatchFull,
    MatchNotFound,
    PlayerNotInMatch,
    WrongTurn,
)
from .events import (
    MatchEvent,
    game_reset_event,
    game_update_event,
    match_created_event,
    player_joined_event,
    turn_timeout_event,
)
from .stats import StatsTracker


def _check_player(player_id) -> None:
    if not isinstance(player_id, str) or not player_id:
        raise BadRequest("player must be a non-empty string")


def _noop_publish(event: MatchEvent) -> None:
    return None


class MatchStore:
    """In-memory registry of matches and the only path that mutates them.

    Every mutation of a match runs under that match's lock, so a firing turn
    timer and a move for the same match never interleave. Callers receive
    ``Match.to_dict()`` snapshots, never the live objects.
    """

    def __init__(
        self,
        stats: StatsTracker,
        scheduler,
        turn_duration: float = 30,
        publish: Callable[[MatchEvent], None] = None,
        logger: logging.Logger = None,
    ):
        self.stats = stats
        self.scheduler = scheduler
        self.turn_duration = turn_duration
        self.publish = publish or _noop_publish
        self.logger = logger or logging.getLogger(__name__)
        self._matches: Dict[str, Match] = {}
        self._registry_lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._matches)

    def _get(self, match_id) -> Match:
        match = self._matches.get(str(match_id or '').upper())
        if match is None:
            raise MatchNotFound()
        return match

    def create(self, creator_id: str, mode='classic') -> str:
        _check_player(creator_id)
        try:
            mode = Mode(mode)
        except ValueError:
            raise InvalidMode(f"Unknown game mode: {mode}") from None
        self.stats.ensure_player(creator_id)
        with self._registry_lock:
            match_id = generate_match_code(self._matches)
            match = Match(
                id=match_id,
                mode=mode,
                players=[creator_id],
                time_limit=self.turn_duration if mode is Mode.TIMED else None,
            )
            self._matches[match_id] = match
        self.logger.info(f"[create] match={match_id} mode={mode.value} creator={creator_id}")
        self.publish(match_created_event(match.to_dict()))
        return match_id

    def get(self, match_id) -> dict:
        match = self._get(match_id)
        with match.lock:
            return match.to_dict()

    def join(self, match_id, player_id: str) -> dict:
        """Add the second player.

        Does not arm the turn timer; call ``start_turn_timer`` once a timed
        match is full.
        """
        _check_player(player_id)
        match = self._get(match_id)
        with match.lock:
            if match.is_full:
                raise MatchFull()
            self.stats.ensure_player(player_id)
            match.players.append(player_id)
            snapshot = match.to_dict()
        self.logger.info(f"[join] match={match.id} player={player_id} players={len(snapshot['players'])}")
        self.publish(player_joined_event(snapshot, player_id))
        return snapshot

    def start_turn_timer(self, match_id) -> Optional[float]:
        """Arm the timer for the player to move. Returns the deadline, if any.

        Publishes a ``game_update`` carrying the new deadline when armed.
        """
        match = self._get(match_id)
        with match.lock:
            self._arm_timer(match)
            deadline = match.turn_deadline
            snapshot = match.to_dict()
        if deadline is not None:
            self.publish(game_update_event(snapshot))
        return deadline

    def apply_move(self, match_id, player_id: str, index) -> dict:
        match = self._get(match_id)
        with match.lock:
            if match.winner is not None:
                raise GameOver()
            mark = match.mark_of(player_id)
            if mark is None:
                raise PlayerNotInMatch()
            if mark is not match.turn:
                raise WrongTurn()
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_SIZE:
                raise InvalidCell()
            if match.board[index] is not None:
                raise CellOccupied()

            self._disarm_timer(match)
            match.board[index] = mark
            match.last_move_at = time.time()
            match.winner = check_winner(match.board)
            self.logger.info(f"[move] match={match.id} player={player_id} mark={mark.value} cell={index}")

            if match.winner is None:
                match.turn = mark.opponent
                self._arm_timer(match)
            else:
                self._finish(match)
            snapshot = match.to_dict()
        self.publish(game_update_event(snapshot))
        return snapshot

    def handle_turn_timeout(self, match_id, timer=None) -> Optional[dict]:
        """Forfeit the player to move when their turn timer expires.

        Only the currently armed timer may resolve the match; a timer that
        was cancelled, replaced or outlived its match does nothing.
        """
        match = self._matches.get(str(match_id or '').upper())
        if match is None:
            return None
        with match.lock:
            if match.winner is not None or not match.is_full:
                return None
            if timer is not None and (timer.cancelled or match.timer is not timer):
                self.logger.info(f"[timer-abort] match={match.id} stale timer")
                return None
            timed_out_player = match.player_for(match.turn)
            match.winner = match.turn.opponent
            self.logger.info(f"[timeout] match={match.id} player={timed_out_player} mark={match.turn.value}")
            self._finish(match)
            snapshot = match.to_dict()
        self.publish(turn_timeout_event(snapshot, timed_out_player))
        return snapshot

    def reset(self, match_id) -> dict:
        match = self._get(match_id)
        with match.lock:
            self._disarm_timer(match)
            match.board = [None] * BOARD_SIZE
            match.turn = Mark.X
            match.winner = None
            match.last_move_at = time.time()
            self._arm_timer(match)
            snapshot = match.to_dict()
        self.logger.info(f"[reset] match={match.id}")
        self.publish(game_reset_event(snapshot))
        return snapshot

    def _finish(self, match: Match) -> None:
        # Caller holds match.lock
        self._disarm_timer(match)
        if match.winner != DRAW:
            winner_id = match.player_for(match.winner)
            loser_id = match.player_for(match.winner.opponent)
            if winner_id is not None and loser_id is not None:
                self.stats.record_outcome(winner_id, loser_id)
        self.logger.info(f"[finish] match={match.id} winner={match.to_dict()['winner']}")

    def _arm_timer(self, match: Match) -> None:
        # Caller holds match.lock
        if not match.is_timed or match.winner is not None or not match.is_full:
            return
        self._disarm_timer(match)
        match.timer = self.scheduler.schedule(match.id, self.turn_duration, self._on_timer_fired)
        match.turn_deadline = match.timer.deadline
        self.logger.info(
            f"[timer-set] match={match.id} turn={match.turn.value} duration={self.turn_duration}s "
            f"deadline={match.turn_deadline}"
        )

    def _disarm_timer(self, match: Match) -> None:
        # Caller holds match.lock
        if match.timer is not None:
            match.timer.cancel()
            self.logger.debug(f"[timer-cancel] match={match.id}")
        match.timer = None
        match.turn_deadline = None

    def _on_timer_fired(self, timer) -> None:
        self.handle_turn_timeout(timer.match_id, timer)
