"""Declaring queues and publishing JSON messages over AMQP."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from enum import IntEnum
from typing import Any

import pika
from pika.exceptions import AMQPError

_ESCAPES = {ord(c): f"\\u{ord(c):04x}" for c in "<>&\u2028\u2029"}


class SimpleQueueType(IntEnum):
    DURABLE = 0
    TRANSIENT = 1


class AckType(IntEnum):
    ACK = 0
    NACK_REQUEUE = 1
    NACK_DISCARD = 2


def _default(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"cannot encode {type(value).__name__} as JSON")


def encode_json(value: Any) -> bytes:
    """Encode a value as compact JSON bytes."""
    text = json.dumps(value, default=_default, separators=(",", ":"), ensure_ascii=False)
    return text.translate(_ESCAPES).encode("utf-8")


@contextmanager
def _amqp_step(what: str) -> Iterator[None]:
    try:
        yield
    except AMQPError as exc:
        raise ConnectionError(f"could not {what}: {exc}") from exc


def declare_and_bind(
    connection: Any,
    exchange: str,
    queue_name: str,
    key: str,
    queue_type: SimpleQueueType,
) -> tuple[Any, str]:
    """Open a channel, declare a queue and bind it; return the channel and queue name."""
    durable = queue_type == SimpleQueueType.DURABLE
    with _amqp_step("create channel"):
        channel = connection.channel()
    with _amqp_step("declare queue"):
        result = channel.queue_declare(
            queue=queue_name,
            durable=durable,
            auto_delete=not durable,
            exclusive=not durable,
            arguments=None,
        )
    name = result.method.queue
    with _amqp_step("bind queue"):
        channel.queue_bind(queue=name, exchange=exchange, routing_key=key, arguments=None)
    return channel, name


def publish_json(channel: Any, exchange: str, key: str, value: Any) -> None:
    """Publish a value as a JSON message."""
    channel.basic_publish(
        exchange=exchange,
        routing_key=key,
        body=encode_json(value),
        properties=pika.BasicProperties(content_type="application/json"),
    )