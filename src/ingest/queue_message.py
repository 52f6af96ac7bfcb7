"""Queue message encoding.

Queue messages carry a pointer to the stored payload, never the payload
itself, so they stay far below the queue's message size limit.
"""

from __future__ import annotations

import json

from core.errors import ProcessingErrorKind, ReadmapProcessingError
from core.timestamps import format_rfc3339, parse_rfc3339, utc_now
from core.types import QueueMessage


def encode_queue_message(message: QueueMessage) -> str:
    """Serialize a queue message to its JSON body.

    Args:
        message: Message to send.

    Returns:
        JSON text with ``uuid``, ``user`` and ``timestamp`` keys.
    """
    return json.dumps(
        {
            "uuid": message.event_uuid,
            "user": message.user,
            "timestamp": format_rfc3339(message.timestamp),
        }
    )


def decode_queue_message(body: str) -> QueueMessage:
    """Parse a queue message body.

    Unparsable timestamps fall back to the current time.

    Args:
        body: Raw message body.

    Returns:
        Parsed queue message.

    Raises:
        ReadmapProcessingError: With kind ``INVALID_MESSAGE`` for malformed bodies.
    """
    try:
        document = json.loads(body)
    except (json.JSONDecodeError, TypeError, RecursionError) as error:
        raise _invalid_message(f"body is not JSON: {error}") from error
    if not isinstance(document, dict):
        raise _invalid_message("body is not a JSON object")
    event_uuid = document.get("uuid")
    if not isinstance(event_uuid, str) or not event_uuid.strip():
        raise _invalid_message("missing 'uuid'")
    user = document.get("user")
    raw_timestamp = document.get("timestamp")
    timestamp = parse_rfc3339(raw_timestamp) if isinstance(raw_timestamp, str) else None
    return QueueMessage(
        event_uuid=event_uuid.strip(),
        user=user if isinstance(user, str) else "",
        timestamp=timestamp or utc_now(),
    )


def _invalid_message(detail: str) -> ReadmapProcessingError:
    return ReadmapProcessingError(
        kind=ProcessingErrorKind.INVALID_MESSAGE,
        operation="parse_message",
        detail=detail,
    )
