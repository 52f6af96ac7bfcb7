"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import ReadmapConfig
from core.errors import ReadmapConfigError


@pytest.fixture
def required_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Set every required resource variable."""
    monkeypatch.setenv("SST_Resource_DataTable_name", "readmap-data")
    monkeypatch.setenv("SST_Resource_PayloadBucket_name", "readmap-payloads")
    monkeypatch.setenv("SST_Resource_WebhookQueue_url", "https://sqs.local/queue")
    monkeypatch.delenv("READMAP_ALLOWED_SERIES", raising=False)
    monkeypatch.delenv("READMAP_LOG_LEVEL", raising=False)
    return monkeypatch


def test_from_env_reads_resource_names(required_env: pytest.MonkeyPatch) -> None:
    """Config should resolve linked resource names from environment."""
    config = ReadmapConfig.from_env()

    assert (config.table_name, config.bucket_name) == ("readmap-data", "readmap-payloads")


def test_from_env_uses_default_series(required_env: pytest.MonkeyPatch) -> None:
    """Config should allow both known series when unset."""
    config = ReadmapConfig.from_env()

    assert config.allowed_series == ("maratona-lendo-paises", "mundotalendo-2026")


def test_from_env_parses_series_list(required_env: pytest.MonkeyPatch) -> None:
    """Config should split and trim the series allow-list."""
    required_env.setenv("READMAP_ALLOWED_SERIES", " serie-a , serie-b ,")

    config = ReadmapConfig.from_env()

    assert config.allowed_series == ("serie-a", "serie-b")


def test_from_env_lists_every_missing_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should name all missing resource variables at once."""
    monkeypatch.delenv("SST_Resource_DataTable_name", raising=False)
    monkeypatch.delenv("SST_Resource_PayloadBucket_name", raising=False)
    monkeypatch.setenv("SST_Resource_WebhookQueue_url", "https://sqs.local/queue")

    with pytest.raises(ReadmapConfigError) as error_info:
        ReadmapConfig.from_env()

    assert "SST_Resource_DataTable_name, SST_Resource_PayloadBucket_name" in str(error_info.value)


def test_from_env_raises_for_invalid_log_level(required_env: pytest.MonkeyPatch) -> None:
    """Config should fail for unknown log level names."""
    required_env.setenv("READMAP_LOG_LEVEL", "chatty")

    with pytest.raises(ReadmapConfigError):
        ReadmapConfig.from_env()


def test_from_env_raises_for_blank_series_list(required_env: pytest.MonkeyPatch) -> None:
    """Config should reject an allow-list with no identifiers."""
    required_env.setenv("READMAP_ALLOWED_SERIES", " , ")

    with pytest.raises(ReadmapConfigError):
        ReadmapConfig.from_env()
