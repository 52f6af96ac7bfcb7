"""Event queue publisher.

This module sends queue pointers for stored payloads to SQS.
Delivery downstream is at-least-once.
"""

from __future__ import annotations

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.errors import ReadmapQueueError
from core.logging_config import get_logger
from core.types import QueueMessage
from ingest.queue_message import encode_queue_message

_LOGGER = get_logger(__name__)


class EventQueue:
    """SQS-backed queue for event pointers."""

    def __init__(self, sqs_client: Any, queue_url: str) -> None:
        self._client = sqs_client
        self._queue_url = queue_url

    def send(self, message: QueueMessage) -> str:
        """Send one event pointer.

        Args:
            message: Pointer to a stored payload.

        Returns:
            Queue-assigned message id.

        Raises:
            ReadmapQueueError: If the queue rejects the message.
        """
        try:
            response = self._client.send_message(
                QueueUrl=self._queue_url,
                MessageBody=encode_queue_message(message),
            )
        except (BotoCoreError, ClientError) as error:
            raise ReadmapQueueError(
                f"Failed to send event {message.event_uuid} to {self._queue_url}: {error}"
            ) from error
        message_id = str(response.get("MessageId", ""))
        _LOGGER.info("event_enqueued", event_uuid=message.event_uuid, message_id=message_id)
        return message_id
