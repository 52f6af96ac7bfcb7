"""Unit tests for the SQS Lambda adapter."""

from __future__ import annotations

from datetime import datetime, timezone

from core.types import QueueMessage
from handlers.consumer_lambda import handle_sqs_event
from ingest.queue_message import encode_queue_message
from tests.fakes import FakeAws, client_error, make_context, valid_event_text


def _record(message_id: str, event_uuid: str) -> dict[str, str]:
    message = QueueMessage(event_uuid, "Ana Leitora", datetime(2026, 1, 21, tzinfo=timezone.utc))
    return {"messageId": message_id, "body": encode_queue_message(message)}


def test_handle_sqs_event_reports_no_failures_on_success() -> None:
    """Successful records should not be redelivered."""
    aws = FakeAws()
    aws.s3.objects["payloads/ok.json"] = valid_event_text().encode("utf-8")

    response = handle_sqs_event({"Records": [_record("m-1", "ok")]}, make_context(aws))

    assert response == {"batchItemFailures": []}


def test_handle_sqs_event_lists_only_retried_records() -> None:
    """Only transiently failing records should be reported."""
    aws = FakeAws()
    aws.s3.objects["payloads/ok.json"] = valid_event_text().encode("utf-8")
    aws.table.put_error = client_error("ProvisionedThroughputExceededException", "PutItem")
    records = [_record("m-1", "ok"), _record("m-2", "missing"), {"messageId": "m-3", "body": "?"}]

    response = handle_sqs_event({"Records": records}, make_context(aws))

    assert response == {"batchItemFailures": [{"itemIdentifier": "m-1"}]}


def test_handle_sqs_event_accepts_empty_batches() -> None:
    """Empty events should produce an empty failure list."""
    assert handle_sqs_event({}, make_context(FakeAws())) == {"batchItemFailures": []}
