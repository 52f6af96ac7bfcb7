"""Shared typed models.

This module defines immutable data models used by the receiver,
consumer, processor, and store layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from core.errors import ReadmapProcessingError


@dataclass(frozen=True)
class Profile:
    """Submitting user's profile.

    Attributes:
        name: Display name, also the user key for readings.
        link: External profile link.
        avatar_url: Avatar image URL.
    """

    name: str = ""
    link: str = ""
    avatar_url: str = ""


@dataclass(frozen=True)
class Series:
    """Challenge series the event belongs to.

    Attributes:
        name: Human-readable series name.
        identifier: Stable identifier checked against the allow-list.
    """

    name: str = ""
    identifier: str = ""


@dataclass(frozen=True)
class Edition:
    """Book edition linked to a progress entry."""

    title: str = ""
    author: str = ""
    cover_url: str = ""


@dataclass(frozen=True)
class Vinculado:
    """Linked progress entry inside a Desafio.

    Attributes:
        completed: Whether the linked entry is finished.
        progress: Raw progress value, nominally 0-100.
        updated_at: Date-only or RFC 3339 timestamp string.
        edition: Optional book edition.
        entry_id: Optional upstream identifier.
        rating: Optional rating given by the reader.
        comment: Optional reader comment.
        marked_day: Optional day the entry was marked.
    """

    completed: bool = False
    progress: int = 0
    updated_at: str = ""
    edition: Edition | None = None
    entry_id: str = ""
    rating: int = 0
    comment: str = ""
    marked_day: str = ""


@dataclass(frozen=True)
class Desafio:
    """One country challenge within a submitted event.

    Attributes:
        description: Country name, possibly decorated with emoji.
        category: Month label, possibly decorated with emoji.
        completed: Whether the challenge is finished.
        kind: Upstream type tag, e.g. ``leitura``.
        linked: Ordered linked progress entries.
        desafio_id: Optional upstream identifier.
    """

    description: str = ""
    category: str = ""
    completed: bool = False
    kind: str = ""
    linked: tuple[Vinculado, ...] = ()
    desafio_id: str = ""


@dataclass(frozen=True)
class WebhookPayload:
    """Submitted reading progress event."""

    profile: Profile = field(default_factory=Profile)
    series: Series = field(default_factory=Series)
    desafios: tuple[Desafio, ...] = ()


@dataclass(frozen=True)
class QueueMessage:
    """Lightweight queue pointer to a stored payload.

    Attributes:
        event_uuid: Event UUID keying the stored payload.
        user: Profile name of the submitter.
        timestamp: Submission time.
    """

    event_uuid: str
    user: str
    timestamp: datetime


@dataclass(frozen=True)
class ProcessingMeta:
    """Per-event context shared by every processed Desafio."""

    event_uuid: str
    user: str
    avatar_url: str
    timestamp: datetime


@dataclass(frozen=True)
class DesafioSummary:
    """Values extracted from a Desafio's linked entries.

    Attributes:
        progress: Clamped progress in [0, 100].
        latest_update: Latest parsed update time, or now when unknown.
        book_title: Title from the most recently updated entry.
        cover_url: Cover URL from the most recently updated entry.
    """

    progress: int
    latest_update: datetime
    book_title: str
    cover_url: str


@dataclass(frozen=True)
class NormalizedReading:
    """Persisted per-country reading record.

    Attributes:
        partition_key: Fixed record-type marker.
        sort_key: ``{uuid}#{iso3}#{index}``.
        iso3: Three-letter country code.
        country: Cleaned country display name.
        category: Cleaned category label.
        progress: Progress in [0, 100].
        user: Profile name.
        avatar_url: Profile avatar URL.
        book_title: Book title being read.
        cover_url: Book cover URL.
        event_uuid: Owning event UUID.
        updated_at: ISO-8601 UTC timestamp of the last update.
    """

    partition_key: str
    sort_key: str
    iso3: str
    country: str
    category: str
    progress: int
    user: str
    avatar_url: str
    book_title: str
    cover_url: str
    event_uuid: str
    updated_at: str


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of processing one Desafio.

    Attributes:
        iso3: Resolved country code, empty when unresolved.
        country: Cleaned country name.
        processed: Whether a reading was written.
        error: Classified failure, if any.
    """

    iso3: str = ""
    country: str = ""
    processed: bool = False
    error: ReadmapProcessingError | None = None


class MessageStage(str, Enum):
    """Consumer progress stages for one queue message."""

    RECEIVED = "received"
    PARSED = "parsed"
    PAYLOAD_FETCHED = "payload_fetched"
    READINGS_REPLACED = "readings_replaced"
    ITEMS_PROCESSED = "items_processed"


class MessageStatus(str, Enum):
    """Terminal consumer states."""

    ACKNOWLEDGED = "acknowledged"
    RETRIED = "retried"


@dataclass(frozen=True)
class ConsumeOutcome:
    """Result of consuming one queue message.

    Attributes:
        status: Terminal state for the message.
        stage: Last stage reached before the terminal state.
        event_uuid: Event UUID, empty when the message was unparsable.
        processed_count: Number of readings written.
        error_count: Number of per-item failures.
        results: Per-Desafio results in payload order.
        error: Whole-message failure, if any.
    """

    status: MessageStatus
    stage: MessageStage
    event_uuid: str = ""
    processed_count: int = 0
    error_count: int = 0
    results: tuple[ProcessingResult, ...] = ()
    error: ReadmapProcessingError | None = None

    @property
    def should_retry(self) -> bool:
        """Return whether the message must go back to the queue."""
        return self.status is MessageStatus.RETRIED


@dataclass(frozen=True)
class WebhookRequest:
    """Inbound webhook request independent of the HTTP front end.

    Attributes:
        body: Raw request body text.
        headers: Request headers as received.
    """

    body: str
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class WebhookResponse:
    """Receiver response before HTTP encoding."""

    status_code: int
    body: dict[str, object]
