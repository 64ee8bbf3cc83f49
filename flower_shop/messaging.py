from __future__ import annotations

import datetime as dt
import json
import logging

import pika
from pika.exceptions import AMQPError

from .config import EVENTS_EXCHANGE, RABBITMQ_URL

logger = logging.getLogger(__name__)


def _connect() -> pika.BlockingConnection:
    params = pika.URLParameters(RABBITMQ_URL)
    params.heartbeat = 30
    params.blocked_connection_timeout = 30
    return pika.BlockingConnection(params)


def events_enabled() -> bool:
    return bool(RABBITMQ_URL)


def publish_event(routing_key: str, payload: dict) -> bool:
    """Publish a JSON event to the topic exchange.

    Best-effort: returns False when events are disabled or the broker is
    unreachable. Callers have already committed their changes.
    """
    if not events_enabled():
        return False

    body = {
        "event": routing_key,
        "occurred_at": dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z"),
        **payload,
    }
    connection = None
    try:
        connection = _connect()
        ch = connection.channel()
        ch.exchange_declare(exchange=EVENTS_EXCHANGE, exchange_type="topic", durable=True)
        ch.basic_publish(
            exchange=EVENTS_EXCHANGE,
            routing_key=routing_key,
            body=json.dumps(body, ensure_ascii=False, default=str).encode("utf-8"),
            properties=pika.BasicProperties(
                content_type="application/json",
                delivery_mode=2,  # persistent
            ),
        )
        return True
    except (AMQPError, OSError) as e:
        logger.warning("Failed to publish %s: %s", routing_key, e)
        return False
    finally:
        if connection is not None and connection.is_open:
            connection.close()


def booking_event_payload(booking) -> dict:
    return {
        "booking_id": booking.id,
        "product_id": booking.product_id,
        "guest_id": booking.guest_id,
        "quantity": booking.quantity,
        "total_cost": float(booking.total_cost),
        "status": booking.status,
    }
