"""Unit tests for the failure taxonomy."""

from __future__ import annotations

import pytest

from core.errors import ProcessingErrorKind, ReadmapProcessingError, is_retryable


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (ProcessingErrorKind.INVALID_MESSAGE, False),
        (ProcessingErrorKind.PAYLOAD_NOT_FOUND, False),
        (ProcessingErrorKind.PAYLOAD_FETCH_FAILURE, True),
        (ProcessingErrorKind.INVALID_PAYLOAD_JSON, False),
        (ProcessingErrorKind.COUNTRY_NOT_FOUND, False),
        (ProcessingErrorKind.STORE_WRITE_FAILURE, True),
    ],
)
def test_is_retryable_classifies_each_kind(kind: ProcessingErrorKind, expected: bool) -> None:
    """Only transient infrastructure kinds should be retryable."""
    assert is_retryable(kind) is expected


def test_processing_error_message_includes_context() -> None:
    """Rendered message should carry operation, uuid, country and kind."""
    error = ReadmapProcessingError(
        kind=ProcessingErrorKind.STORE_WRITE_FAILURE,
        operation="save_reading",
        detail="throttled",
        event_uuid="abc",
        country="Brasil",
    )

    assert str(error) == "save_reading [uuid=abc, country=Brasil]: store_write_failure: throttled"


def test_processing_error_exposes_retryable_flag() -> None:
    """Error should report retryability from its kind."""
    error = ReadmapProcessingError(
        kind=ProcessingErrorKind.PAYLOAD_NOT_FOUND,
        operation="fetch_payload",
        detail="missing",
    )

    assert error.retryable is False
