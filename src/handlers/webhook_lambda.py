"""API Gateway entrypoint for webhook submissions."""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Mapping

from core.constants import JSON_CONTENT_TYPE
from core.logging_config import get_logger
from core.runtime_context import RuntimeContext
from core.types import WebhookRequest, WebhookResponse
from handlers.bootstrap import get_runtime_context
from ingest.webhook_receiver import error_response, receive_webhook

_LOGGER = get_logger(__name__)


def lambda_handler(event: Mapping[str, Any], _context: Any) -> dict[str, Any]:
    """Handle an API Gateway HTTP API (payload v2) event."""
    return handle_http_event(event, get_runtime_context())


def handle_http_event(event: Mapping[str, Any], context: RuntimeContext) -> dict[str, Any]:
    """Run the receiver for an HTTP event and encode its response.

    Bodies that are not valid base64 or UTF-8 are rejected as unparsable
    before they reach the receiver.

    Args:
        event: API Gateway event.
        context: Runtime wiring.

    Returns:
        API Gateway response dictionary.
    """
    try:
        body = _request_body(event)
    except (binascii.Error, UnicodeDecodeError) as error:
        _LOGGER.warning("webhook_rejected", reason="undecodable_body", error=str(error))
        return to_http_response(error_response(400, "INVALID_JSON", "Failed to parse JSON payload"))
    request = WebhookRequest(body=body, headers=dict(event.get("headers") or {}))
    return to_http_response(receive_webhook(request, context))


def to_http_response(response: WebhookResponse) -> dict[str, Any]:
    """Encode a receiver response for API Gateway."""
    return {
        "statusCode": response.status_code,
        "headers": {"Content-Type": JSON_CONTENT_TYPE},
        "body": json.dumps(response.body),
    }


def _request_body(event: Mapping[str, Any]) -> str:
    """Return the request body text, strictly decoding base64 bodies.

    Raises:
        binascii.Error: If the body is not valid base64.
        UnicodeDecodeError: If the decoded bytes are not UTF-8.
    """
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        return base64.b64decode(body, validate=True).decode("utf-8")
    return str(body)
