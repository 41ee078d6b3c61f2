"""Match domain services: board evaluation, statistics, turn timers.

``MatchStore`` owns every live tic-tac-toe match and reports finished
games to ``StatsTracker``. Both are built once per Flask app in
``create_app``; the REST blueprint and the Socket.IO handlers only parse
input and relay the snapshots and events these objects produce.
"""

from .errors import (
    BadRequest,
    CellOccupied,
    GameOver,
    InvalidCell,
    InvalidMode,
    MatchError,
    MatchFull,
    MatchNotFound,
    PlayerNotInMatch,
    WrongTurn,
)
from .board import check_winner
from .stats import StatsTracker
from .store import MatchStore

__all__ = [
    'BadRequest',
    'CellOccupied',
    'GameOver',
    'InvalidCell',
    'InvalidMode',
    'MatchError',
    'MatchFull',
    'MatchNotFound',
    'PlayerNotInMatch',
    'WrongTurn',
    'check_winner',
    'StatsTracker',
    'MatchStore',
]
