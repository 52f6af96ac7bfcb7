"""Public surface for Readmap.

This module provides a stable import path for the Lambda entrypoints,
the receiver and consumer operations, and their typed models.
"""

from __future__ import annotations

from consumer.event_consumer import consume_message, decide_status
from core.config import ReadmapConfig
from core.errors import ProcessingErrorKind, ReadmapError, ReadmapProcessingError, is_retryable
from core.runtime_context import RuntimeContext
from core.types import (
    ConsumeOutcome,
    Desafio,
    NormalizedReading,
    ProcessingResult,
    QueueMessage,
    Vinculado,
    WebhookPayload,
    WebhookRequest,
    WebhookResponse,
)
from handlers.bootstrap import build_runtime_context
from ingest.payload_codec import parse_webhook_payload, payload_to_dict
from ingest.webhook_receiver import receive_webhook
from transforms.desafio_processor import DesafioProcessor, clamp_progress

__all__ = [
    "ConsumeOutcome",
    "Desafio",
    "DesafioProcessor",
    "NormalizedReading",
    "ProcessingErrorKind",
    "ProcessingResult",
    "QueueMessage",
    "ReadmapConfig",
    "ReadmapError",
    "ReadmapProcessingError",
    "RuntimeContext",
    "Vinculado",
    "WebhookPayload",
    "WebhookRequest",
    "WebhookResponse",
    "build_runtime_context",
    "clamp_progress",
    "consume_message",
    "decide_status",
    "is_retryable",
    "parse_webhook_payload",
    "payload_to_dict",
    "receive_webhook",
]
