"""Persisting game logs to disk."""

from __future__ import annotations

import logging
import os
import time

from peril.gamedata import GameError
from peril.routing import GameLog, rfc3339

LOGS_FILE = "game.log"
WRITE_TO_DISK_SLEEP = 1.0

_logger = logging.getLogger(__name__)


def format_log_line(game_log: GameLog) -> str:
    """Render a game log as one line of the log file."""
    return f"{rfc3339(game_log.current_time, fraction=False)} {game_log.username}: {game_log.message}\n"


def write_log(
    game_log: GameLog,
    path: str | os.PathLike[str] = LOGS_FILE,
    delay: float = WRITE_TO_DISK_SLEEP,
) -> None:
    """Append a game log to the log file after a simulated disk delay."""
    _logger.info("received game log...")
    time.sleep(delay)
    try:
        handle = open(path, "a", encoding="utf-8")
    except OSError as exc:
        raise GameError(f"could not open logs file: {exc}") from exc
    with handle:
        try:
            handle.write(format_log_line(game_log))
        except OSError as exc:
            raise GameError(f"could not write to logs file: {exc}") from exc