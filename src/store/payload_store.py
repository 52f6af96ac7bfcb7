"""Raw payload persistence in S3.

This module stores the verbatim webhook body under a key derived from
the event UUID, and classifies fetch failures for the consumer.
"""

from __future__ import annotations

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.constants import JSON_CONTENT_TYPE, PAYLOAD_KEY_PREFIX
from core.errors import (
    ProcessingErrorKind,
    ReadmapPayloadError,
    ReadmapProcessingError,
    ReadmapStoreError,
)
from core.logging_config import get_logger
from core.types import WebhookPayload
from ingest.payload_codec import parse_webhook_payload

_LOGGER = get_logger(__name__)
_MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def payload_key(event_uuid: str) -> str:
    """Return the object key for an event payload."""
    return f"{PAYLOAD_KEY_PREFIX}/{event_uuid}.json"


class PayloadStore:
    """Write-once, read-many store for raw webhook bodies."""

    def __init__(self, s3_client: Any, bucket_name: str) -> None:
        self._client = s3_client
        self._bucket = bucket_name

    def save(self, event_uuid: str, body: str) -> str:
        """Store a raw webhook body.

        Args:
            event_uuid: Event UUID.
            body: Verbatim request body.

        Returns:
            Object key written.

        Raises:
            ReadmapStoreError: If the object cannot be written.
        """
        key = payload_key(event_uuid)
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=body.encode("utf-8"),
                ContentType=JSON_CONTENT_TYPE,
            )
        except (BotoCoreError, ClientError) as error:
            raise ReadmapStoreError(
                f"Failed to store payload at s3://{self._bucket}/{key}: {error}"
            ) from error
        _LOGGER.info("payload_saved", event_uuid=event_uuid, bucket=self._bucket, key=key)
        return key

    def delete(self, event_uuid: str) -> bool:
        """Delete a stored payload, logging instead of raising on failure.

        Args:
            event_uuid: Event UUID.

        Returns:
            Whether the delete request succeeded.
        """
        key = payload_key(event_uuid)
        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
        except (BotoCoreError, ClientError) as error:
            _LOGGER.warning(
                "payload_cleanup_failed", event_uuid=event_uuid, key=key, error=str(error)
            )
            return False
        _LOGGER.info("payload_deleted", event_uuid=event_uuid, key=key)
        return True

    def fetch(self, event_uuid: str) -> WebhookPayload:
        """Fetch and parse a stored payload.

        Args:
            event_uuid: Event UUID.

        Returns:
            Parsed payload.

        Raises:
            ReadmapProcessingError: ``PAYLOAD_NOT_FOUND`` when the object is missing,
                ``PAYLOAD_FETCH_FAILURE`` for transient errors, and
                ``INVALID_PAYLOAD_JSON`` when the body cannot be parsed.
        """
        body = self._read_body(event_uuid)
        try:
            payload = parse_webhook_payload(body)
        except ReadmapPayloadError as error:
            raise ReadmapProcessingError(
                kind=ProcessingErrorKind.INVALID_PAYLOAD_JSON,
                operation="fetch_payload",
                detail=str(error),
                event_uuid=event_uuid,
            ) from error
        _LOGGER.info(
            "payload_fetched",
            event_uuid=event_uuid,
            user=payload.profile.name,
            desafio_count=len(payload.desafios),
        )
        return payload

    def _read_body(self, event_uuid: str) -> bytes:
        key = payload_key(event_uuid)
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except ClientError as error:
            code = str(error.response.get("Error", {}).get("Code", ""))
            kind = (
                ProcessingErrorKind.PAYLOAD_NOT_FOUND
                if code in _MISSING_OBJECT_CODES
                else ProcessingErrorKind.PAYLOAD_FETCH_FAILURE
            )
            raise ReadmapProcessingError(
                kind=kind,
                operation="fetch_payload",
                detail=f"s3://{self._bucket}/{key}: {error}",
                event_uuid=event_uuid,
            ) from error
        except BotoCoreError as error:
            raise ReadmapProcessingError(
                kind=ProcessingErrorKind.PAYLOAD_FETCH_FAILURE,
                operation="fetch_payload",
                detail=f"s3://{self._bucket}/{key}: {error}",
                event_uuid=event_uuid,
            ) from error
