"""In-memory AWS fakes and context builders for tests."""

from __future__ import annotations

import io
import json
from typing import Any

from botocore.exceptions import ClientError

from core.config import ReadmapConfig
from core.runtime_context import RuntimeContext
from ingest.event_queue import EventQueue
from store.api_key_store import ApiKeyStore
from store.payload_store import PayloadStore
from store.reading_store import ReadingStore
from tests.fixture_paths import fixture_path

TEST_BUCKET = "readmap-payloads"
TEST_QUEUE_URL = "https://sqs.us-east-1.amazonaws.com/123456789012/readmap-webhooks"
TEST_TABLE = "readmap-data"
TEST_API_KEY = "test-key-123"


def client_error(code: str, operation: str = "Operation") -> ClientError:
    """Build a botocore client error with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeS3Client:
    """Dictionary-backed stand-in for the S3 client calls used by the store."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.put_error: Exception | None = None
        self.get_error: Exception | None = None
        self.delete_error: Exception | None = None
        self.deleted_keys: list[str] = []

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str) -> dict[str, Any]:
        if self.put_error is not None:
            raise self.put_error
        self.objects[Key] = Body
        self.content_types[Key] = ContentType
        return {}

    def get_object(self, Bucket: str, Key: str) -> dict[str, Any]:
        if self.get_error is not None:
            raise self.get_error
        if Key not in self.objects:
            raise client_error("NoSuchKey", "GetObject")
        return {"Body": io.BytesIO(self.objects[Key])}

    def delete_object(self, Bucket: str, Key: str) -> dict[str, Any]:
        if self.delete_error is not None:
            raise self.delete_error
        self.objects.pop(Key, None)
        self.deleted_keys.append(Key)
        return {}


class FakeSqsClient:
    """Records sent message bodies."""

    def __init__(self) -> None:
        self.sent_bodies: list[str] = []
        self.send_error: Exception | None = None

    def send_message(self, QueueUrl: str, MessageBody: str) -> dict[str, Any]:
        if self.send_error is not None:
            raise self.send_error
        self.sent_bodies.append(MessageBody)
        return {"MessageId": f"msg-{len(self.sent_bodies)}"}


class FakeTable:
    """Dictionary-backed stand-in for a DynamoDB table resource.

    Query and scan results are paginated with ``page_size`` so callers
    must follow ``LastEvaluatedKey``.
    """

    def __init__(self, page_size: int = 2) -> None:
        self.items: dict[tuple[str, str], dict[str, Any]] = {}
        self.page_size = page_size
        self.put_error: Exception | None = None
        self.query_error: Exception | None = None
        self.scan_error: Exception | None = None
        self.failing_delete_keys: set[tuple[str, str]] = set()
        self.query_calls: list[dict[str, Any]] = []

    def add(self, item: dict[str, Any]) -> None:
        self.items[(item["PK"], item["SK"])] = dict(item)

    def put_item(self, Item: dict[str, Any]) -> dict[str, Any]:
        if self.put_error is not None:
            raise self.put_error
        self.add(Item)
        return {}

    def delete_item(self, Key: dict[str, str]) -> dict[str, Any]:
        item_key = (Key["PK"], Key["SK"])
        if item_key in self.failing_delete_keys:
            raise client_error("ProvisionedThroughputExceededException", "DeleteItem")
        self.items.pop(item_key, None)
        return {}

    def query(self, **kwargs: Any) -> dict[str, Any]:
        self.query_calls.append(kwargs)
        if self.query_error is not None:
            raise self.query_error
        user = kwargs["KeyConditionExpression"].get_expression()["values"][1]
        matches = [item for item in self.items.values() if item.get("user") == user]
        return self._page(matches, kwargs.get("ExclusiveStartKey"))

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        if self.scan_error is not None:
            raise self.scan_error
        matches = [
            item
            for item in self.items.values()
            if str(item.get("PK", "")).startswith("APIKEY#") and item.get("active") is True
        ]
        return self._page(matches, kwargs.get("ExclusiveStartKey"))

    def readings(self) -> list[dict[str, Any]]:
        return [
            item
            for (partition_key, _), item in self.items.items()
            if partition_key == "EVENT#LEITURA"
        ]

    def _page(self, matches: list[dict[str, Any]], start_key: Any) -> dict[str, Any]:
        offset = int(start_key["offset"]) if start_key else 0
        page = matches[offset : offset + self.page_size]
        response: dict[str, Any] = {"Items": [dict(item) for item in page]}
        if offset + self.page_size < len(matches):
            response["LastEvaluatedKey"] = {"offset": offset + self.page_size}
        return response


class FakeAws:
    """Bundle of fake clients sharing one table."""

    def __init__(self) -> None:
        self.s3 = FakeS3Client()
        self.sqs = FakeSqsClient()
        self.table = FakeTable()
        self.table.add(
            {
                "PK": "APIKEY#maratona",
                "SK": "METADATA",
                "key": TEST_API_KEY,
                "name": "maratona",
                "active": True,
            }
        )


def make_config(**overrides: Any) -> ReadmapConfig:
    """Build a config pointing at the fake resources."""
    values: dict[str, Any] = {
        "table_name": TEST_TABLE,
        "bucket_name": TEST_BUCKET,
        "queue_url": TEST_QUEUE_URL,
    }
    values.update(overrides)
    return ReadmapConfig(**values)


def make_context(aws: FakeAws, config: ReadmapConfig | None = None) -> RuntimeContext:
    """Build a runtime context backed by fake clients."""
    return RuntimeContext(
        config=config or make_config(),
        payload_store=PayloadStore(aws.s3, TEST_BUCKET),
        event_queue=EventQueue(aws.sqs, TEST_QUEUE_URL),
        reading_store=ReadingStore(aws.table),
        authorizer=ApiKeyStore(aws.table),
    )


def valid_event_text() -> str:
    """Return the sample webhook payload as text."""
    return fixture_path("payloads/valid_event.json").read_text(encoding="utf-8")


def valid_event_document() -> dict[str, Any]:
    """Return the sample webhook payload as a decoded document."""
    return json.loads(valid_event_text())
