"""Runtime context passed to the receiver and consumer entrypoints.

Client handles are built once per process and never mutated afterwards.
Tests construct the context directly with fake AWS clients.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from core.config import ReadmapConfig
from core.country_codes import resolve_iso3
from ingest.event_queue import EventQueue
from store.payload_store import PayloadStore
from store.reading_store import ReadingStore


class Authorizer(Protocol):
    """Credential check for inbound webhook calls."""

    def is_valid(self, api_key: str) -> bool:
        """Return whether the key is accepted."""


@dataclass(frozen=True)
class RuntimeContext:
    """Immutable per-process wiring for one deployment."""

    config: ReadmapConfig
    payload_store: PayloadStore
    event_queue: EventQueue
    reading_store: ReadingStore
    authorizer: Authorizer
    resolve_country: Callable[[str], Optional[str]] = resolve_iso3
