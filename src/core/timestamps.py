"""Timestamp parsing and formatting helpers.

Upstream senders mix date-only and RFC 3339 values, so parsing
tries the date-only layout first and the full timestamp second.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from core.constants import DATE_ONLY_FORMAT, RFC3339_UTC_FORMAT

_FRACTIONAL_SECONDS = re.compile(r"([Tt]\d{2}:\d{2}:\d{2})\.(\d+)")


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_rfc3339(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp.

    A trailing ``Z`` is accepted. Values without an offset are read as UTC.
    Fractional seconds of any length are cut or padded to microseconds.

    Args:
        value: Timestamp text.

    Returns:
        Aware datetime, or None when the text is not a timestamp.
    """
    text = value.strip()
    if "T" not in text and "t" not in text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTIONAL_SECONDS.sub(_microsecond_fraction, text)
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_update_timestamp(value: str) -> datetime | None:
    """Parse a progress update timestamp in either accepted layout.

    Args:
        value: Date-only (``YYYY-MM-DD``) or RFC 3339 text.

    Returns:
        Aware UTC-comparable datetime, or None when neither layout matches.
    """
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), DATE_ONLY_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return parse_rfc3339(value)


def format_rfc3339(moment: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC timestamp with second precision."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(RFC3339_UTC_FORMAT)


def _microsecond_fraction(match: re.Match[str]) -> str:
    """Rewrite a fractional-seconds group to exactly six digits."""
    return f"{match.group(1)}.{match.group(2)[:6].ljust(6, '0')}"
