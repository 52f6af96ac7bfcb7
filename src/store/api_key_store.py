"""API key validation against the data table."""

from __future__ import annotations

from typing import Any, Iterator

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from core.constants import API_KEY_PARTITION_PREFIX
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class ApiKeyStore:
    """Credential lookup for webhook senders.

    Keys live in the data table as ``APIKEY#`` items with ``key``,
    ``name`` and ``active`` attributes.
    """

    def __init__(self, table: Any) -> None:
        self._table = table

    def is_valid(self, api_key: str) -> bool:
        """Return whether an API key matches an active credential.

        Lookup errors deny access.

        Args:
            api_key: Key presented by the caller.

        Returns:
            True when an active matching key exists.
        """
        if not api_key:
            _LOGGER.info("api_key_rejected", reason="empty")
            return False
        try:
            for item in self._scan_active_keys():
                if item.get("key") == api_key and item.get("active") is True:
                    _LOGGER.info("api_key_accepted", key_name=str(item.get("name", "")))
                    return True
        except (BotoCoreError, ClientError) as error:
            _LOGGER.error("api_key_lookup_failed", error=str(error))
            return False
        _LOGGER.info("api_key_rejected", reason="unknown_or_inactive")
        return False

    def _scan_active_keys(self) -> Iterator[dict[str, Any]]:
        scan_kwargs: dict[str, Any] = {
            "FilterExpression": Attr("PK").begins_with(API_KEY_PARTITION_PREFIX)
            & Attr("active").eq(True),
        }
        while True:
            response = self._table.scan(**scan_kwargs)
            yield from response.get("Items", [])
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return
            scan_kwargs["ExclusiveStartKey"] = last_key
