"""Readmap exception hierarchy and failure taxonomy.

This module defines traceable domain errors with clear boundaries.
Consumer failures carry a closed error kind that drives retry decisions.
"""

from __future__ import annotations

from enum import Enum


class ReadmapError(Exception):
    """Base exception for all Readmap failures."""


class ReadmapConfigError(ReadmapError):
    """Raised for invalid or missing runtime configuration."""


class ReadmapPayloadError(ReadmapError):
    """Raised when a webhook payload cannot be decoded into typed models."""


class ReadmapStoreError(ReadmapError):
    """Raised for object store and document store failures."""


class ReadmapQueueError(ReadmapError):
    """Raised when a queue message cannot be sent."""


class ProcessingErrorKind(str, Enum):
    """Closed set of consumer failure kinds."""

    INVALID_MESSAGE = "invalid_message"
    PAYLOAD_NOT_FOUND = "payload_not_found"
    PAYLOAD_FETCH_FAILURE = "payload_fetch_failure"
    INVALID_PAYLOAD_JSON = "invalid_payload_json"
    COUNTRY_NOT_FOUND = "country_not_found"
    STORE_WRITE_FAILURE = "store_write_failure"


_RETRYABLE_KINDS = frozenset(
    {
        ProcessingErrorKind.PAYLOAD_FETCH_FAILURE,
        ProcessingErrorKind.STORE_WRITE_FAILURE,
    }
)


def is_retryable(kind: ProcessingErrorKind) -> bool:
    """Return whether a failure kind should send the message back to the queue.

    Args:
        kind: Classified failure kind.

    Returns:
        True for transient infrastructure failures, False for permanent ones.
    """
    return kind in _RETRYABLE_KINDS


class ReadmapProcessingError(ReadmapError):
    """Classified consumer failure with processing context.

    Attributes:
        kind: Failure kind used for retry classification.
        operation: Consumer step that failed, e.g. ``fetch_payload``.
        event_uuid: Event UUID being processed, empty when unknown.
        country: Country being processed, when the failure is per item.
    """

    def __init__(
        self,
        kind: ProcessingErrorKind,
        operation: str,
        detail: str,
        event_uuid: str = "",
        country: str | None = None,
    ) -> None:
        self.kind = kind
        self.operation = operation
        self.detail = detail
        self.event_uuid = event_uuid
        self.country = country
        super().__init__(self._render())

    @property
    def retryable(self) -> bool:
        """Return whether this failure is transient."""
        return is_retryable(self.kind)

    def _render(self) -> str:
        if self.country:
            context = f"uuid={self.event_uuid}, country={self.country}"
        else:
            context = f"uuid={self.event_uuid}"
        return f"{self.operation} [{context}]: {self.kind.value}: {self.detail}"
