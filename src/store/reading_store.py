"""Normalized reading persistence in DynamoDB.

Readings share a single table with other record kinds. Replacement
deletes only ``EVENT#LEITURA`` items found through the user index.
"""

from __future__ import annotations

from typing import Any, Iterator

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from core.constants import READING_PARTITION_KEY, USER_INDEX_NAME
from core.errors import ProcessingErrorKind, ReadmapProcessingError, ReadmapStoreError
from core.logging_config import get_logger
from core.types import NormalizedReading

_LOGGER = get_logger(__name__)


def reading_to_item(reading: NormalizedReading) -> dict[str, object]:
    """Serialize a reading into a DynamoDB item.

    Args:
        reading: Normalized reading.

    Returns:
        Item attribute map.
    """
    return {
        "PK": reading.partition_key,
        "SK": reading.sort_key,
        "iso3": reading.iso3,
        "pais": reading.country,
        "categoria": reading.category,
        "progresso": reading.progress,
        "user": reading.user,
        "imagemURL": reading.avatar_url,
        "capaURL": reading.cover_url,
        "livro": reading.book_title,
        "webhookUUID": reading.event_uuid,
        "updatedAt": reading.updated_at,
    }


class ReadingStore:
    """DynamoDB-backed store for normalized readings."""

    def __init__(self, table: Any) -> None:
        self._table = table

    def save(self, reading: NormalizedReading) -> None:
        """Persist one reading.

        Args:
            reading: Reading to write.

        Raises:
            ReadmapProcessingError: With kind ``STORE_WRITE_FAILURE`` if the write fails.
        """
        try:
            self._table.put_item(Item=reading_to_item(reading))
        except (BotoCoreError, ClientError) as error:
            raise ReadmapProcessingError(
                kind=ProcessingErrorKind.STORE_WRITE_FAILURE,
                operation="save_reading",
                detail=str(error),
                event_uuid=reading.event_uuid,
                country=reading.country,
            ) from error
        _LOGGER.debug(
            "reading_saved",
            event_uuid=reading.event_uuid,
            iso3=reading.iso3,
            user=reading.user,
            progress=reading.progress,
        )

    def delete_user_readings(self, user: str) -> int:
        """Delete every reading owned by a user.

        Items of other kinds that share the user index are left untouched.
        A failed single delete is logged and skipped.

        Args:
            user: Profile name.

        Returns:
            Number of readings deleted.

        Raises:
            ReadmapStoreError: If the user index cannot be queried.
        """
        deleted_count = 0
        for item in self._query_user_items(user):
            partition_key = item.get("PK")
            sort_key = item.get("SK")
            if not isinstance(partition_key, str) or not isinstance(sort_key, str):
                _LOGGER.warning("reading_item_malformed", user=user)
                continue
            if partition_key != READING_PARTITION_KEY:
                continue
            if self._delete_item(partition_key, sort_key):
                deleted_count += 1
        _LOGGER.info("old_readings_deleted", user=user, deleted_count=deleted_count)
        return deleted_count

    def _query_user_items(self, user: str) -> Iterator[dict[str, Any]]:
        query_kwargs: dict[str, Any] = {
            "IndexName": USER_INDEX_NAME,
            "KeyConditionExpression": Key("user").eq(user),
        }
        while True:
            try:
                response = self._table.query(**query_kwargs)
            except (BotoCoreError, ClientError) as error:
                raise ReadmapStoreError(
                    f"Failed to query {USER_INDEX_NAME} for user '{user}': {error}"
                ) from error
            yield from response.get("Items", [])
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return
            query_kwargs["ExclusiveStartKey"] = last_key

    def _delete_item(self, partition_key: str, sort_key: str) -> bool:
        try:
            self._table.delete_item(Key={"PK": partition_key, "SK": sort_key})
        except (BotoCoreError, ClientError) as error:
            _LOGGER.warning(
                "reading_delete_failed",
                partition_key=partition_key,
                sort_key=sort_key,
                error=str(error),
            )
            return False
        return True
