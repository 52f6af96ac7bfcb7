"""Unit tests for the queue message consumer."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from core.errors import ProcessingErrorKind, ReadmapProcessingError
from core.types import MessageStage, MessageStatus, ProcessingResult, QueueMessage
from consumer.event_consumer import consume_message, decide_status
from ingest.queue_message import encode_queue_message
from tests.fakes import FakeAws, client_error, make_context, valid_event_document, valid_event_text

_EVENT_UUID = "11111111-2222-3333-4444-555555555555"


def _message_body(user: str = "Ana Leitora") -> str:
    message = QueueMessage(_EVENT_UUID, user, datetime(2026, 1, 21, tzinfo=timezone.utc))
    return encode_queue_message(message)


def _stored_aws(body: str | None = None) -> FakeAws:
    aws = FakeAws()
    aws.s3.objects[f"payloads/{_EVENT_UUID}.json"] = (body or valid_event_text()).encode("utf-8")
    return aws


def _error(kind: ProcessingErrorKind) -> ReadmapProcessingError:
    return ReadmapProcessingError(kind=kind, operation="test", detail="boom")


def test_consume_message_writes_one_reading_per_processed_desafio() -> None:
    """Supported Desafios should be written; other types skipped."""
    aws = _stored_aws()

    outcome = consume_message(_message_body(), make_context(aws))

    assert sorted(item["iso3"] for item in aws.table.readings()) == ["BRA", "JPN"] and (
        outcome.processed_count == 2
    )


def test_consume_message_writes_expected_reading_fields() -> None:
    """The Brazil reading should carry extracted book and progress data."""
    aws = _stored_aws()

    consume_message(_message_body(), make_context(aws))
    item = aws.table.items[("EVENT#LEITURA", f"{_EVENT_UUID}#BRA#0")]

    assert (item["progresso"], item["livro"], item["updatedAt"], item["user"]) == (
        80,
        "Dom Casmurro",
        "2026-01-20T10:00:00Z",
        "Ana Leitora",
    )


def test_consume_message_replaces_previous_readings() -> None:
    """Readings from the user's earlier events should be removed."""
    aws = _stored_aws()
    aws.table.add({"PK": "EVENT#LEITURA", "SK": "old#PRT#0", "user": "Ana Leitora", "iso3": "PRT"})

    consume_message(_message_body(), make_context(aws))

    assert ("EVENT#LEITURA", "old#PRT#0") not in aws.table.items


def test_consume_message_acknowledges_on_success() -> None:
    """A fully processed message should be acknowledged at the last stage."""
    outcome = consume_message(_message_body(), make_context(_stored_aws()))

    assert (outcome.status, outcome.stage) == (
        MessageStatus.ACKNOWLEDGED,
        MessageStage.ITEMS_PROCESSED,
    )


def test_consume_message_drops_malformed_body() -> None:
    """Malformed messages should be acknowledged, not retried."""
    outcome = consume_message("not json", make_context(FakeAws()))

    assert (outcome.status, outcome.stage) == (MessageStatus.ACKNOWLEDGED, MessageStage.RECEIVED)


def test_consume_message_drops_missing_payload() -> None:
    """A missing stored payload should not be retried."""
    outcome = consume_message(_message_body(), make_context(FakeAws()))

    assert (outcome.status, outcome.error.kind if outcome.error else None) == (
        MessageStatus.ACKNOWLEDGED,
        ProcessingErrorKind.PAYLOAD_NOT_FOUND,
    )


def test_consume_message_retries_transient_fetch_failure() -> None:
    """Transient object store errors should send the message back."""
    aws = _stored_aws()
    aws.s3.get_error = client_error("SlowDown", "GetObject")

    outcome = consume_message(_message_body(), make_context(aws))

    assert outcome.should_retry is True


def test_consume_message_drops_corrupt_payload() -> None:
    """Stored bodies that no longer parse should be acknowledged."""
    outcome = consume_message(_message_body(), make_context(_stored_aws("{broken")))

    assert outcome.status is MessageStatus.ACKNOWLEDGED


def test_consume_message_acknowledges_partial_country_failures() -> None:
    """One resolved country should acknowledge despite unknown ones."""
    document = valid_event_document()
    document["desafios"][1]["descricao"] = "Atlântida"

    outcome = consume_message(_message_body(), make_context(_stored_aws(json.dumps(document))))

    assert (outcome.status, outcome.processed_count, outcome.error_count) == (
        MessageStatus.ACKNOWLEDGED,
        1,
        1,
    )


def test_consume_message_drops_when_no_country_resolves() -> None:
    """Only permanent failures should acknowledge without writing."""
    document = valid_event_document()
    for desafio in document["desafios"]:
        desafio["descricao"] = "Atlântida"
    aws = _stored_aws(json.dumps(document))

    outcome = consume_message(_message_body(), make_context(aws))

    assert (outcome.status, aws.table.readings()) == (MessageStatus.ACKNOWLEDGED, [])


def test_consume_message_retries_when_every_write_fails() -> None:
    """All-failed writes should send the message back to the queue."""
    aws = _stored_aws()
    aws.table.put_error = client_error("ProvisionedThroughputExceededException", "PutItem")

    outcome = consume_message(_message_body(), make_context(aws))

    assert (outcome.status, outcome.error.kind if outcome.error else None) == (
        MessageStatus.RETRIED,
        ProcessingErrorKind.STORE_WRITE_FAILURE,
    )


def test_consume_message_continues_when_delete_fails() -> None:
    """A failed replacement query should not block new writes."""
    aws = _stored_aws()
    aws.table.query_error = client_error("InternalServerError", "Query")

    outcome = consume_message(_message_body(), make_context(aws))

    assert outcome.processed_count == 2


def test_consume_message_falls_back_to_message_user() -> None:
    """The message user should be used when the profile has no name."""
    document = valid_event_document()
    document["perfil"]["nome"] = ""
    aws = _stored_aws(json.dumps(document))

    consume_message(_message_body(user="Ana do Queue"), make_context(aws))

    assert {item["user"] for item in aws.table.readings()} == {"Ana do Queue"}


def test_decide_status_acknowledges_any_success() -> None:
    """Any processed item should acknowledge the message."""
    results = [
        ProcessingResult(error=_error(ProcessingErrorKind.STORE_WRITE_FAILURE)),
        ProcessingResult(iso3="BRA", processed=True),
    ]

    assert decide_status(results) is MessageStatus.ACKNOWLEDGED


def test_decide_status_retries_transient_failures() -> None:
    """With no success, a retryable failure should retry."""
    results = [
        ProcessingResult(error=_error(ProcessingErrorKind.COUNTRY_NOT_FOUND)),
        ProcessingResult(error=_error(ProcessingErrorKind.STORE_WRITE_FAILURE)),
    ]

    assert decide_status(results) is MessageStatus.RETRIED


def test_decide_status_acknowledges_empty_results() -> None:
    """A payload with nothing to process should be acknowledged."""
    assert decide_status([]) is MessageStatus.ACKNOWLEDGED
