"""Queue message consumer.

Each delivery walks RECEIVED -> PARSED -> PAYLOAD_FETCHED ->
READINGS_REPLACED -> ITEMS_PROCESSED and ends ACKNOWLEDGED or RETRIED.
Permanent failures are acknowledged and dropped; only transient ones
return the message to the queue.
"""

from __future__ import annotations

from typing import Sequence

from core.errors import (
    ProcessingErrorKind,
    ReadmapProcessingError,
    ReadmapStoreError,
    is_retryable,
)
from core.logging_config import get_logger
from core.runtime_context import RuntimeContext
from core.types import (
    ConsumeOutcome,
    MessageStage,
    MessageStatus,
    ProcessingMeta,
    ProcessingResult,
    QueueMessage,
)
from ingest.queue_message import decode_queue_message
from transforms.desafio_processor import DesafioProcessor, count_results

_LOGGER = get_logger(__name__)


def consume_message(body: str, context: RuntimeContext) -> ConsumeOutcome:
    """Process one queue message end to end.

    Args:
        body: Raw queue message body.
        context: Runtime wiring.

    Returns:
        Outcome with terminal status, last stage reached and per-item results.
    """
    try:
        message = decode_queue_message(body)
    except ReadmapProcessingError as error:
        return _failed_outcome(MessageStage.RECEIVED, error)
    _LOGGER.info("message_parsed", event_uuid=message.event_uuid, user=message.user)
    return _consume_parsed(message, context)


def decide_status(results: Sequence[ProcessingResult]) -> MessageStatus:
    """Aggregate per-item results into the message's terminal state.

    Any success acknowledges the message. With no success, a retryable
    failure sends it back to the queue; anything else is dropped.

    Args:
        results: Per-Desafio results.

    Returns:
        Terminal message status.
    """
    if any(result.processed for result in results):
        return MessageStatus.ACKNOWLEDGED
    for result in results:
        if result.error is not None and is_retryable(result.error.kind):
            return MessageStatus.RETRIED
    return MessageStatus.ACKNOWLEDGED


def _consume_parsed(message: QueueMessage, context: RuntimeContext) -> ConsumeOutcome:
    try:
        payload = context.payload_store.fetch(message.event_uuid)
    except ReadmapProcessingError as error:
        return _failed_outcome(MessageStage.PARSED, error)
    user = payload.profile.name or message.user
    _replace_user_readings(context, user, message.event_uuid)
    meta = ProcessingMeta(
        event_uuid=message.event_uuid,
        user=user,
        avatar_url=payload.profile.avatar_url,
        timestamp=message.timestamp,
    )
    processor = DesafioProcessor(context.reading_store, context.resolve_country)
    results = processor.process_all(payload, meta)
    return _aggregate_outcome(message.event_uuid, results)


def _replace_user_readings(context: RuntimeContext, user: str, event_uuid: str) -> None:
    """Delete the user's previous readings; failures are logged, not raised."""
    try:
        context.reading_store.delete_user_readings(user)
    except ReadmapStoreError as error:
        _LOGGER.warning(
            "old_readings_delete_failed", event_uuid=event_uuid, user=user, error=str(error)
        )


def _aggregate_outcome(
    event_uuid: str,
    results: tuple[ProcessingResult, ...],
) -> ConsumeOutcome:
    processed_count, error_count = count_results(results)
    for result in results:
        if result.error is None or result.error.kind is ProcessingErrorKind.COUNTRY_NOT_FOUND:
            continue
        _LOGGER.error(
            "desafio_failed",
            event_uuid=event_uuid,
            country=result.country,
            kind=result.error.kind.value,
            error=str(result.error),
        )
    status = decide_status(results)
    error = _retry_error(event_uuid, results) if status is MessageStatus.RETRIED else None
    _LOGGER.info(
        "message_processed",
        event_uuid=event_uuid,
        status=status.value,
        processed_count=processed_count,
        error_count=error_count,
    )
    return ConsumeOutcome(
        status=status,
        stage=MessageStage.ITEMS_PROCESSED,
        event_uuid=event_uuid,
        processed_count=processed_count,
        error_count=error_count,
        results=results,
        error=error,
    )


def _failed_outcome(stage: MessageStage, error: ReadmapProcessingError) -> ConsumeOutcome:
    """Build the outcome for a whole-message failure at a given stage."""
    status = MessageStatus.RETRIED if error.retryable else MessageStatus.ACKNOWLEDGED
    log_method = _LOGGER.warning if error.retryable else _LOGGER.error
    log_method(
        "message_failed",
        event_uuid=error.event_uuid,
        stage=stage.value,
        kind=error.kind.value,
        status=status.value,
        error=str(error),
    )
    return ConsumeOutcome(status=status, stage=stage, event_uuid=error.event_uuid, error=error)


def _retry_error(
    event_uuid: str,
    results: Sequence[ProcessingResult],
) -> ReadmapProcessingError:
    """Build the whole-message error for a retried delivery."""
    kind = next(
        result.error.kind
        for result in results
        if result.error is not None and is_retryable(result.error.kind)
    )
    return ReadmapProcessingError(
        kind=kind,
        operation="process_desafios",
        detail="no Desafio was written and at least one failure is transient",
        event_uuid=event_uuid,
    )
