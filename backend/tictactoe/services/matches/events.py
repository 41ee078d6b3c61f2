from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class EventType(str, Enum):
    MATCH_CREATED = "game_created"
    PLAYER_JOINED = "player_joined"
    GAME_UPDATE = "game_update"
    TURN_TIMEOUT = "turn_timeout"
    GAME_RESET = "game_reset"


@dataclass
class MatchEvent:
    """A state change the store announces after a successful mutation."""

    type: EventType
    match_id: str
    data: dict = field(default_factory=dict)
    timestamp: str = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "match_id": self.match_id,
            "timestamp": self.timestamp,
            "data": self.data,
        }


def match_created_event(snapshot: dict) -> MatchEvent:
    return MatchEvent(
        type=EventType.MATCH_CREATED,
        match_id=snapshot["id"],
        data={"game_id": snapshot["id"], "mode": snapshot["mode"]},
    )


def player_joined_event(snapshot: dict, player_id: str) -> MatchEvent:
    return MatchEvent(
        type=EventType.PLAYER_JOINED,
        match_id=snapshot["id"],
        data={
            "player": player_id,
            "game_id": snapshot["id"],
            "mode": snapshot["mode"],
            "game": snapshot,
        },
    )


def game_update_event(snapshot: dict) -> MatchEvent:
    return MatchEvent(type=EventType.GAME_UPDATE, match_id=snapshot["id"], data=snapshot)


def turn_timeout_event(snapshot: dict, timed_out_player: str) -> MatchEvent:
    return MatchEvent(
        type=EventType.TURN_TIMEOUT,
        match_id=snapshot["id"],
        data={"game": snapshot, "timed_out_player": timed_out_player},
    )


def game_reset_event(snapshot: dict) -> MatchEvent:
    return MatchEvent(type=EventType.GAME_RESET, match_id=snapshot["id"], data=snapshot)
