"""Core constants used across Readmap modules.

This module centralizes wire keys, limits, and storage markers.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

MAX_PAYLOAD_BYTES = 1024 * 1024
API_KEY_HEADER = "x-api-key"
JSON_CONTENT_TYPE = "application/json"
PAYLOAD_KEY_PREFIX = "payloads"
READING_PARTITION_KEY = "EVENT#LEITURA"
API_KEY_PARTITION_PREFIX = "APIKEY#"
USER_INDEX_NAME = "UserIndex"
DEFAULT_ALLOWED_SERIES = ("maratona-lendo-paises", "mundotalendo-2026")
PROCESSED_DESAFIO_TYPES = frozenset({"leitura", "atividade"})
MIN_PROGRESS = 0
MAX_PROGRESS = 100
DATE_ONLY_FORMAT = "%Y-%m-%d"
RFC3339_UTC_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DEFAULT_LOG_LEVEL = "INFO"
QUEUED_STATUS = "QUEUED"
TABLE_NAME_ENV = "SST_Resource_DataTable_name"
BUCKET_NAME_ENV = "SST_Resource_PayloadBucket_name"
QUEUE_URL_ENV = "SST_Resource_WebhookQueue_url"
AWS_REGION_ENV = "READMAP_AWS_REGION"
AWS_PROFILE_ENV = "READMAP_AWS_PROFILE"
ALLOWED_SERIES_ENV = "READMAP_ALLOWED_SERIES"
LOG_LEVEL_ENV = "READMAP_LOG_LEVEL"
