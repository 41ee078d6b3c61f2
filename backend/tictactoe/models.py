import random
import string
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

BOARD_SIZE = 9
DRAW = 'Draw'


class Mark(str, Enum):
    X = 'X'
    O = 'O'

    @property
    def opponent(self) -> 'Mark':
        return Mark.O if self is Mark.X else Mark.X

    @classmethod
    def for_seat(cls, seat: int) -> 'Mark':
        return cls.X if seat == 0 else cls.O


class Mode(str, Enum):
    CLASSIC = 'classic'
    TIMED = 'timed'


def generate_match_code(taken, length=6):
    """Generate a short match code not present in ``taken``."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in taken:
            return code


@dataclass
class Match:
    id: str
    mode: Mode
    players: List[str] = field(default_factory=list)
    board: List[Optional[Mark]] = field(default_factory=lambda: [None] * BOARD_SIZE)
    turn: Mark = Mark.X
    winner: Optional[str] = None  # Mark.X, Mark.O or DRAW once decided
    time_limit: Optional[int] = None
    turn_deadline: Optional[float] = None
    created_at: float = field(default_factory=time.time)
    last_move_at: float = field(default_factory=time.time)
    # Store-private: the armed turn timer and the single-flight lock
    timer: Any = field(default=None, repr=False, compare=False)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def is_timed(self) -> bool:
        return self.mode is Mode.TIMED

    @property
    def is_full(self) -> bool:
        return len(self.players) >= 2

    @property
    def outcome(self) -> str:
        if self.winner is None:
            return 'undecided'
        if self.winner == DRAW:
            return 'draw'
        return 'winner'

    def mark_of(self, player_id: str) -> Optional[Mark]:
        if player_id not in self.players:
            return None
        return Mark.for_seat(self.players.index(player_id))

    def player_for(self, mark: Mark) -> Optional[str]:
        seat = 0 if mark is Mark.X else 1
        return self.players[seat] if seat < len(self.players) else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'board': [cell.value if cell else None for cell in self.board],
            'turn': self.turn.value,
            'players': list(self.players),
            'winner': self.winner.value if isinstance(self.winner, Mark) else self.winner,
            'outcome': self.outcome,
            'mode': self.mode.value,
            'time_limit': self.time_limit,
            'turn_deadline': self.turn_deadline,
            'last_move_at': self.last_move_at,
        }


@dataclass
class PlayerRecord:
    wins: int = 0
    losses: int = 0
    streak: int = 0
    max_streak: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        if self.total == 0:
            return 0
        return self.wins / self.total * 100

    def to_dict(self, player_id: str) -> Dict[str, Any]:
        return {
            'player': player_id,
            'wins': self.wins,
            'losses': self.losses,
            'streak': self.streak,
            'max_streak': self.max_streak,
            'total': self.total,
            'win_rate': self.win_rate,
        }
