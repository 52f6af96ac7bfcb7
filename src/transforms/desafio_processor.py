"""Desafio to normalized reading transform.

This module extracts progress, book and timing data from a Desafio's
linked entries, resolves its country, and writes one reading per item.
Processing folds every Desafio into a result and never stops early.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Protocol, Sequence

from core.constants import (
    MAX_PROGRESS,
    MIN_PROGRESS,
    PROCESSED_DESAFIO_TYPES,
    READING_PARTITION_KEY,
)
from core.country_codes import resolve_iso3
from core.errors import ProcessingErrorKind, ReadmapProcessingError
from core.logging_config import get_logger
from core.text_cleaning import strip_emojis
from core.timestamps import format_rfc3339, parse_update_timestamp, utc_now
from core.types import (
    Desafio,
    DesafioSummary,
    NormalizedReading,
    ProcessingMeta,
    ProcessingResult,
    Vinculado,
    WebhookPayload,
)

_LOGGER = get_logger(__name__)

CountryResolver = Callable[[str], Optional[str]]


class ReadingWriter(Protocol):
    """Persistence seam used by the processor."""

    def save(self, reading: NormalizedReading) -> None:
        """Persist one reading."""


def clamp_progress(progress: int) -> int:
    """Clamp a progress value into [0, 100]."""
    return max(MIN_PROGRESS, min(MAX_PROGRESS, progress))


def build_sort_key(event_uuid: str, iso3: str, index: int) -> str:
    """Build the reading sort key ``{uuid}#{iso3}#{index}``.

    The payload index keeps keys unique when several Desafios
    resolve to the same country within one event.
    """
    return f"{event_uuid}#{iso3}#{index}"


def summarize_desafio(desafio: Desafio, now: datetime | None = None) -> DesafioSummary:
    """Extract progress, latest update and book data from linked entries.

    Progress is the maximum entry progress, forced to 100 when the
    Desafio is completed, then clamped. Book title and cover come from
    the most recently updated entry that carries them; entries with
    unparsable timestamps rank below dated ones, later entries win ties.

    Args:
        desafio: Desafio to summarize.
        now: Fallback timestamp, defaults to the current UTC time.

    Returns:
        Extracted summary.
    """
    max_progress = MIN_PROGRESS
    latest_update: datetime | None = None
    title_rank: datetime | None = None
    cover_rank: datetime | None = None
    book_title = ""
    cover_url = ""
    for entry in desafio.linked:
        max_progress = max(max_progress, entry.progress)
        moment = parse_update_timestamp(entry.updated_at)
        if moment is not None and (latest_update is None or moment > latest_update):
            latest_update = moment
        title = _entry_title(entry)
        if title and _ranks_at_least(moment, title_rank, bool(book_title)):
            book_title, title_rank = title, moment
        cover = _entry_cover(entry)
        if cover and _ranks_at_least(moment, cover_rank, bool(cover_url)):
            cover_url, cover_rank = cover, moment
    if latest_update is None:
        latest_update = now or utc_now()
    if desafio.completed:
        max_progress = MAX_PROGRESS
    return DesafioSummary(
        progress=clamp_progress(max_progress),
        latest_update=latest_update,
        book_title=book_title,
        cover_url=cover_url,
    )


def prepare_reading(
    desafio: Desafio,
    index: int,
    meta: ProcessingMeta,
    resolve_country: CountryResolver = resolve_iso3,
) -> tuple[NormalizedReading | None, ProcessingResult]:
    """Transform one Desafio into a reading without writing it.

    Args:
        desafio: Desafio to transform.
        index: Position of the Desafio in the payload.
        meta: Event-level context.
        resolve_country: Country name to ISO3 resolver.

    Returns:
        The reading (None when skipped or unresolved) and its pending result.
    """
    if desafio.kind not in PROCESSED_DESAFIO_TYPES:
        _LOGGER.debug("desafio_skipped", event_uuid=meta.event_uuid, index=index, kind=desafio.kind)
        return None, ProcessingResult()
    summary = summarize_desafio(desafio)
    country = strip_emojis(desafio.description)
    category = strip_emojis(desafio.category)
    iso3 = resolve_country(country)
    if not iso3:
        _LOGGER.warning(
            "country_not_found",
            event_uuid=meta.event_uuid,
            country=country,
            original=desafio.description,
        )
        error = ReadmapProcessingError(
            kind=ProcessingErrorKind.COUNTRY_NOT_FOUND,
            operation="resolve_country",
            detail=f"no ISO3 code for '{country}'",
            event_uuid=meta.event_uuid,
            country=country,
        )
        return None, ProcessingResult(country=country, error=error)
    reading = NormalizedReading(
        partition_key=READING_PARTITION_KEY,
        sort_key=build_sort_key(meta.event_uuid, iso3, index),
        iso3=iso3,
        country=country,
        category=category,
        progress=summary.progress,
        user=meta.user,
        avatar_url=meta.avatar_url,
        book_title=summary.book_title,
        cover_url=summary.cover_url,
        event_uuid=meta.event_uuid,
        updated_at=format_rfc3339(summary.latest_update),
    )
    return reading, ProcessingResult(iso3=iso3, country=country)


class DesafioProcessor:
    """Processes Desafios into persisted readings."""

    def __init__(
        self,
        writer: ReadingWriter,
        resolve_country: CountryResolver = resolve_iso3,
    ) -> None:
        self._writer = writer
        self._resolve_country = resolve_country

    def process(self, desafio: Desafio, index: int, meta: ProcessingMeta) -> ProcessingResult:
        """Transform and persist one Desafio.

        Args:
            desafio: Desafio to process.
            index: Position of the Desafio in the payload.
            meta: Event-level context.

        Returns:
            Per-item result; failures are recorded, never raised.
        """
        reading, result = prepare_reading(desafio, index, meta, self._resolve_country)
        if reading is None:
            return result
        try:
            self._writer.save(reading)
        except ReadmapProcessingError as error:
            _LOGGER.error(
                "reading_write_failed",
                event_uuid=meta.event_uuid,
                iso3=reading.iso3,
                error=str(error),
            )
            return ProcessingResult(iso3=reading.iso3, country=reading.country, error=error)
        _LOGGER.info(
            "desafio_processed",
            event_uuid=meta.event_uuid,
            user=meta.user,
            iso3=reading.iso3,
            country=reading.country,
            category=reading.category,
            progress=reading.progress,
        )
        return ProcessingResult(iso3=reading.iso3, country=reading.country, processed=True)

    def process_all(
        self,
        payload: WebhookPayload,
        meta: ProcessingMeta,
    ) -> tuple[ProcessingResult, ...]:
        """Process every Desafio in payload order.

        Args:
            payload: Parsed webhook payload.
            meta: Event-level context.

        Returns:
            One result per Desafio.
        """
        return tuple(
            self.process(desafio, index, meta) for index, desafio in enumerate(payload.desafios)
        )


def count_results(results: Sequence[ProcessingResult]) -> tuple[int, int]:
    """Return ``(processed, failed)`` counts for a result sequence."""
    processed = sum(1 for result in results if result.processed)
    failed = sum(1 for result in results if result.error is not None)
    return processed, failed


def _entry_title(entry: Vinculado) -> str:
    return entry.edition.title if entry.edition is not None else ""


def _entry_cover(entry: Vinculado) -> str:
    return entry.edition.cover_url if entry.edition is not None else ""


def _ranks_at_least(
    moment: datetime | None,
    current_rank: datetime | None,
    has_current: bool,
) -> bool:
    """Return whether an entry's timestamp ranks at or above the current pick."""
    if not has_current:
        return True
    if moment is None:
        return current_rank is None
    return current_rank is None or moment >= current_rank
