from datetime import datetime, timedelta, timezone

import pytest

from peril.routing import GameLog, PlayingState


@pytest.mark.parametrize("paused", [True, False])
def test_playing_state_round_trip(paused):
    state = PlayingState(is_paused=paused)
    assert PlayingState.from_dict(state.to_dict()) == state


def test_playing_state_uses_wire_field_name():
    assert PlayingState(True).to_dict() == {"IsPaused": True}


def test_playing_state_missing_field_defaults_to_not_paused():
    assert PlayingState.from_dict({}).is_paused is False


def test_game_log_utc_time_uses_z_suffix():
    log = GameLog(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc), "hi", "alice")
    assert log.to_dict()["CurrentTime"] == "2024-01-02T03:04:05Z"


def test_game_log_round_trip_with_fraction_and_offset():
    zone = timezone(timedelta(hours=-5, minutes=-30))
    log = GameLog(datetime(2023, 6, 7, 8, 9, 10, 123400, tzinfo=zone), "msg", "bob")
    restored = GameLog.from_dict(log.to_dict())
    assert restored == log
    assert restored.current_time.utcoffset() == zone.utcoffset(None)


def test_game_log_parses_nanosecond_fraction():
    restored = GameLog.from_dict(
        {"CurrentTime": "2024-01-02T03:04:05.123456789Z", "Message": "m", "Username": "u"}
    )
    assert restored.current_time.microsecond == 123456
    assert restored.current_time.utcoffset() == timedelta(0)


def test_game_log_rejects_bad_time():
    with pytest.raises(ValueError):
        GameLog.from_dict({"CurrentTime": "yesterday", "Message": "", "Username": ""})