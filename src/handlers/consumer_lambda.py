"""SQS entrypoint for queued webhook events.

Retried messages are reported as partial batch failures so only they
are redelivered. Unexpected exceptions and platform timeouts are not
caught here and make the whole batch visible again.
"""

from __future__ import annotations

from typing import Any, Mapping

from consumer.event_consumer import consume_message
from core.logging_config import get_logger
from core.runtime_context import RuntimeContext
from handlers.bootstrap import get_runtime_context

_LOGGER = get_logger(__name__)


def lambda_handler(event: Mapping[str, Any], _context: Any) -> dict[str, list[dict[str, str]]]:
    """Handle an SQS event with ``ReportBatchItemFailures`` enabled."""
    return handle_sqs_event(event, get_runtime_context())


def handle_sqs_event(
    event: Mapping[str, Any],
    context: RuntimeContext,
) -> dict[str, list[dict[str, str]]]:
    """Consume every record and collect the ones to redeliver.

    Args:
        event: SQS event.
        context: Runtime wiring.

    Returns:
        Partial batch response listing retried message ids.
    """
    records = event.get("Records") or []
    _LOGGER.info("batch_received", record_count=len(records))
    failures: list[dict[str, str]] = []
    for record in records:
        message_id = str(record.get("messageId", ""))
        outcome = consume_message(str(record.get("body", "")), context)
        if outcome.should_retry:
            _LOGGER.warning(
                "message_retry_requested",
                message_id=message_id,
                event_uuid=outcome.event_uuid,
            )
            failures.append({"itemIdentifier": message_id})
    return {"batchItemFailures": failures}
