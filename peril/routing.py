"""Exchange names, routing keys and the message models carried over them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

ARMY_MOVES_PREFIX = "army_moves"
WAR_RECOGNITIONS_PREFIX = "war"
PAUSE_KEY = "pause"
GAME_LOG_SLUG = "game_logs"

EXCHANGE_PERIL_DIRECT = "peril_direct"
EXCHANGE_PERIL_TOPIC = "peril_topic"


def rfc3339(moment: datetime, fraction: bool = True) -> str:
    """Format a timestamp as RFC 3339, with trailing fraction zeros dropped."""
    moment = moment if moment.tzinfo else moment.astimezone()
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    digits = f"{moment.microsecond:06d}".rstrip("0")
    if fraction and digits:
        text += "." + digits
    minutes = int((moment.utcoffset() or timedelta(0)).total_seconds()) // 60
    if minutes == 0:
        return text + "Z"
    hours, mins = divmod(abs(minutes), 60)
    return f"{text}{'+' if minutes > 0 else '-'}{hours:02d}:{mins:02d}"


def _parse_time(text: str) -> datetime:
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    text = re.sub(r"\.(\d+)", lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


@dataclass
class PlayingState:
    """Whether the game is paused."""

    is_paused: bool

    def to_dict(self) -> dict[str, Any]:
        return {"IsPaused": self.is_paused}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayingState:
        return cls(bool(data.get("IsPaused", False)))


@dataclass
class GameLog:
    """A log entry sent by a player."""

    current_time: datetime
    message: str
    username: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "CurrentTime": rfc3339(self.current_time),
            "Message": self.message,
            "Username": self.username,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameLog:
        return cls(_parse_time(data["CurrentTime"]), data.get("Message", ""), data.get("Username", ""))