import json
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from pika.exceptions import AMQPChannelError

from peril.gamedata import Player, RecognitionOfWar, Unit, UnitRank
from peril.pubsub import SimpleQueueType, declare_and_bind, encode_json, publish_json
from peril.routing import GameLog, PlayingState


class FakeChannel:
    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.calls = []

    def queue_declare(self, **kwargs):
        self.calls.append(("declare", kwargs))
        if self.fail_on == "declare":
            raise AMQPChannelError("declare failed")
        return SimpleNamespace(method=SimpleNamespace(queue=kwargs["queue"] or "amq.gen-x"))

    def queue_bind(self, **kwargs):
        self.calls.append(("bind", kwargs))
        if self.fail_on == "bind":
            raise AMQPChannelError("bind failed")

    def basic_publish(self, **kwargs):
        self.calls.append(("publish", kwargs))


class FakeConnection:
    def __init__(self, channel=None, fail=False):
        self._channel = channel or FakeChannel()
        self._fail = fail

    def channel(self):
        if self._fail:
            raise AMQPChannelError("no channel")
        return self._channel


def test_encode_playing_state():
    assert encode_json(PlayingState(True)) == b'{"IsPaused":true}'


def test_encode_escapes_html_characters():
    encoded = encode_json({"Message": "<a & b>"})
    assert b"<" not in encoded and b"&" not in encoded
    assert json.loads(encoded) == {"Message": "<a & b>"}


def test_encode_war_round_trip():
    war = RecognitionOfWar(
        attacker=Player("alice", {1: Unit(1, UnitRank.INFANTRY, "asia")}),
        defender=Player("bob", {}),
    )
    assert RecognitionOfWar.from_dict(json.loads(encode_json(war))) == war


@pytest.mark.parametrize(
    "queue_type, durable",
    [(SimpleQueueType.DURABLE, True), (SimpleQueueType.TRANSIENT, False)],
)
def test_declare_and_bind_flags(queue_type, durable):
    channel = FakeChannel()
    result_channel, name = declare_and_bind(
        FakeConnection(channel), "peril_topic", "army_moves.alice", "army_moves.*", queue_type
    )
    assert result_channel is channel
    assert name == "army_moves.alice"
    declare = channel.calls[0][1]
    assert declare["durable"] is durable
    assert declare["auto_delete"] is not durable
    assert declare["exclusive"] is not durable
    assert channel.calls[1] == (
        "bind",
        {"queue": name, "exchange": "peril_topic", "routing_key": "army_moves.*", "arguments": None},
    )


@pytest.mark.parametrize(
    "connection, message",
    [
        (FakeConnection(fail=True), "could not create channel"),
        (FakeConnection(FakeChannel(fail_on="declare")), "could not declare queue"),
        (FakeConnection(FakeChannel(fail_on="bind")), "could not bind queue"),
    ],
)
def test_declare_and_bind_errors(connection, message):
    with pytest.raises(ConnectionError, match=message):
        declare_and_bind(connection, "ex", "q", "k", SimpleQueueType.DURABLE)


def test_publish_json_sends_encoded_body():
    channel = FakeChannel()
    log = GameLog(datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc), "hi", "alice")
    publish_json(channel, "peril_topic", "game_logs.alice", log)
    kind, kwargs = channel.calls[0]
    assert kind == "publish"
    assert kwargs["exchange"] == "peril_topic"
    assert kwargs["routing_key"] == "game_logs.alice"
    assert kwargs["properties"].content_type == "application/json"
    assert GameLog.from_dict(json.loads(kwargs["body"])) == log