"""Runtime configuration model for Readmap.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    ALLOWED_SERIES_ENV,
    AWS_PROFILE_ENV,
    AWS_REGION_ENV,
    BUCKET_NAME_ENV,
    DEFAULT_ALLOWED_SERIES,
    DEFAULT_LOG_LEVEL,
    LOG_LEVEL_ENV,
    QUEUE_URL_ENV,
    TABLE_NAME_ENV,
)
from core.errors import ReadmapConfigError

SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class ReadmapConfig:
    """Validated runtime configuration.

    Attributes:
        table_name: Document store table holding readings and API keys.
        bucket_name: Object store bucket holding raw payloads.
        queue_url: Queue URL receiving event pointers.
        aws_region: Optional AWS region for boto3 sessions.
        aws_profile: Optional AWS profile for boto3 sessions.
        allowed_series: Challenge-series identifiers that are processed.
        log_level: Minimum structured log level.
    """

    table_name: str
    bucket_name: str
    queue_url: str
    aws_region: str | None = None
    aws_profile: str | None = None
    allowed_series: tuple[str, ...] = DEFAULT_ALLOWED_SERIES
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "ReadmapConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ReadmapConfigError: If required values are missing or invalid.
        """
        required = {
            TABLE_NAME_ENV: os.getenv(TABLE_NAME_ENV, "").strip(),
            BUCKET_NAME_ENV: os.getenv(BUCKET_NAME_ENV, "").strip(),
            QUEUE_URL_ENV: os.getenv(QUEUE_URL_ENV, "").strip(),
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ReadmapConfigError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Link the data table, payload bucket, and webhook queue to this function."
            )
        return cls(
            table_name=required[TABLE_NAME_ENV],
            bucket_name=required[BUCKET_NAME_ENV],
            queue_url=required[QUEUE_URL_ENV],
            aws_region=os.getenv(AWS_REGION_ENV) or None,
            aws_profile=os.getenv(AWS_PROFILE_ENV) or None,
            allowed_series=_parse_allowed_series(os.getenv(ALLOWED_SERIES_ENV)),
            log_level=_parse_log_level(os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)),
        )


def _parse_allowed_series(raw_value: str | None) -> tuple[str, ...]:
    """Parse the comma-separated series allow-list.

    Args:
        raw_value: Raw string from environment, or None when unset.

    Returns:
        Tuple of series identifiers.

    Raises:
        ReadmapConfigError: If the variable is set but lists no identifier.
    """
    if raw_value is None:
        return DEFAULT_ALLOWED_SERIES
    identifiers = tuple(part.strip() for part in raw_value.split(",") if part.strip())
    if not identifiers:
        raise ReadmapConfigError(
            f"Invalid {ALLOWED_SERIES_ENV} value: expected comma-separated identifiers, "
            f"got '{raw_value}'. Unset it to use the defaults."
        )
    return identifiers


def _parse_log_level(raw_value: str) -> str:
    """Parse and validate the log level value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Upper-cased log level name.

    Raises:
        ReadmapConfigError: If the level name is unknown.
    """
    level = raw_value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise ReadmapConfigError(
            f"Invalid {LOG_LEVEL_ENV} value: expected one of {SUPPORTED_LOG_LEVELS}, "
            f"got '{raw_value}'."
        )
    return level
