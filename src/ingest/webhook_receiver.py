"""Inbound webhook receiver.

This module validates a submitted event, stores its raw body, and
enqueues a pointer for asynchronous processing. The body is always
stored before the pointer is sent so the consumer can find it.
"""

from __future__ import annotations

import uuid
from typing import Mapping

from core.constants import API_KEY_HEADER, MAX_PAYLOAD_BYTES, QUEUED_STATUS
from core.errors import ReadmapPayloadError, ReadmapQueueError, ReadmapStoreError
from core.logging_config import get_logger
from core.runtime_context import RuntimeContext
from core.timestamps import utc_now
from core.types import QueueMessage, WebhookPayload, WebhookRequest, WebhookResponse
from ingest.payload_codec import parse_webhook_payload

_LOGGER = get_logger(__name__)


def receive_webhook(request: WebhookRequest, context: RuntimeContext) -> WebhookResponse:
    """Accept a webhook submission and queue it for processing.

    Args:
        request: Raw body and headers.
        context: Runtime wiring.

    Returns:
        ``202`` with the event UUID on success, ``200`` for ignored series,
        ``400``/``401`` for client errors and ``500`` for storage or queue errors.
    """
    body_size = len(request.body.encode("utf-8"))
    _LOGGER.info("webhook_received", body_bytes=body_size)
    if body_size > MAX_PAYLOAD_BYTES:
        _LOGGER.warning("webhook_rejected", reason="payload_too_large", body_bytes=body_size)
        return error_response(400, "PAYLOAD_TOO_LARGE", "Payload exceeds 1 MB limit")
    if not context.authorizer.is_valid(extract_api_key(request.headers)):
        _LOGGER.warning("webhook_rejected", reason="unauthorized")
        return error_response(401, "UNAUTHORIZED", "Invalid or missing API key")
    try:
        payload = parse_webhook_payload(request.body)
    except ReadmapPayloadError as error:
        _LOGGER.warning("webhook_rejected", reason="invalid_json", error=str(error))
        return error_response(400, "INVALID_JSON", "Failed to parse JSON payload")
    if payload.series.identifier not in context.config.allowed_series:
        _LOGGER.info("webhook_ignored", series=payload.series.identifier)
        return success_response("Event ignored - invalid identificador")
    validation_message = validate_payload(payload)
    if validation_message:
        _LOGGER.warning("webhook_rejected", reason="validation", detail=validation_message)
        return error_response(400, "VALIDATION_ERROR", validation_message)
    return _store_and_enqueue(request.body, payload, context)


def validate_payload(payload: WebhookPayload) -> str | None:
    """Check required payload fields.

    Args:
        payload: Parsed payload.

    Returns:
        A validation message, or None when the payload is acceptable.
    """
    if not payload.profile.name.strip():
        return "Missing required field: perfil.nome"
    if not payload.desafios:
        return "No desafios provided"
    return None


def extract_api_key(headers: Mapping[str, str] | None) -> str:
    """Return the API key header value, matching the name case-insensitively."""
    for name, value in (headers or {}).items():
        if name.lower() == API_KEY_HEADER:
            return value or ""
    return ""


def error_response(status_code: int, code: str, message: str) -> WebhookResponse:
    """Build an error response body."""
    return WebhookResponse(status_code=status_code, body={"error": code, "message": message})


def success_response(message: str) -> WebhookResponse:
    """Build a ``200`` response for events accepted without processing."""
    return WebhookResponse(status_code=200, body={"success": True, "message": message})


def accepted_response(event_uuid: str) -> WebhookResponse:
    """Build the ``202`` response for a queued event."""
    return WebhookResponse(
        status_code=202,
        body={
            "success": True,
            "uuid": event_uuid,
            "status": QUEUED_STATUS,
            "message": "Webhook queued for processing",
        },
    )


def _store_and_enqueue(
    body: str,
    payload: WebhookPayload,
    context: RuntimeContext,
) -> WebhookResponse:
    """Persist the raw body, then send its pointer, compensating on queue failure."""
    event_uuid = str(uuid.uuid4())
    message = QueueMessage(event_uuid=event_uuid, user=payload.profile.name, timestamp=utc_now())
    _LOGGER.info("webhook_accepted", event_uuid=event_uuid, user=message.user)
    try:
        context.payload_store.save(event_uuid, body)
    except ReadmapStoreError as error:
        _LOGGER.error("payload_store_failed", event_uuid=event_uuid, error=str(error))
        return error_response(500, "STORAGE_ERROR", "Failed to store payload")
    try:
        context.event_queue.send(message)
    except ReadmapQueueError as error:
        _LOGGER.error("event_enqueue_failed", event_uuid=event_uuid, error=str(error))
        context.payload_store.delete(event_uuid)
        return error_response(500, "QUEUE_ERROR", "Failed to queue message")
    _LOGGER.info("webhook_queued", event_uuid=event_uuid, user=message.user)
    return accepted_response(event_uuid)
