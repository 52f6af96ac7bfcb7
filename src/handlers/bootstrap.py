"""Cold-start wiring for Lambda entrypoints."""

from __future__ import annotations

from functools import lru_cache

from core.config import ReadmapConfig
from core.logging_config import configure_logging, get_logger
from core.runtime_context import RuntimeContext
from ingest.event_queue import EventQueue
from store.api_key_store import ApiKeyStore
from store.aws_clients import (
    create_dynamodb_table,
    create_s3_client,
    create_session,
    create_sqs_client,
)
from store.payload_store import PayloadStore
from store.reading_store import ReadingStore

_LOGGER = get_logger(__name__)


def build_runtime_context(config: ReadmapConfig) -> RuntimeContext:
    """Create AWS clients and adapters for a validated config.

    Args:
        config: Runtime configuration.

    Returns:
        Immutable runtime context.
    """
    session = create_session(config)
    table = create_dynamodb_table(session, config.table_name)
    context = RuntimeContext(
        config=config,
        payload_store=PayloadStore(create_s3_client(session), config.bucket_name),
        event_queue=EventQueue(create_sqs_client(session), config.queue_url),
        reading_store=ReadingStore(table),
        authorizer=ApiKeyStore(table),
    )
    _LOGGER.info(
        "runtime_initialized",
        table_name=config.table_name,
        bucket_name=config.bucket_name,
        queue_url=config.queue_url,
    )
    return context


@lru_cache(maxsize=1)
def get_runtime_context() -> RuntimeContext:
    """Return the process-wide runtime context, building it on first use.

    Raises:
        ReadmapConfigError: If required environment variables are missing.
    """
    config = ReadmapConfig.from_env()
    configure_logging(config.log_level)
    return build_runtime_context(config)
