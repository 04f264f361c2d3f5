"""Shared fixtures: in-memory stand-ins for the queue, blob store and table."""

from __future__ import annotations

import typing as typ

import pytest

from awskit.core.config import Settings
from awskit.core.exceptions import StoreUnavailableError
from awskit.services.extended_sqs_service import ExtendedMessageCodec, ExtendedSQSService


class InMemoryBlobStore:
    """Blob store keeping objects in a dict and recording every call."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.puts: list[dict[str, typ.Any]] = []
        self.gets: list[tuple[str, str]] = []
        self.fail_puts = False

    async def put(self, bucket, key, data, content_encoding, expires_at=None):
        self.puts.append(
            {
                "bucket": bucket,
                "key": key,
                "data": data,
                "content_encoding": content_encoding,
                "expires_at": expires_at,
            }
        )
        if self.fail_puts:
            raise StoreUnavailableError("put refused", bucket, key)
        self.objects[(bucket, key)] = data
        return {"ETag": '"etag"'}

    async def get(self, bucket, key):
        self.gets.append((bucket, key))
        try:
            return self.objects[(bucket, key)]
        except KeyError:
            raise StoreUnavailableError(f"no such key {key}", bucket, key) from None


class InMemoryQueueTransport:
    """Queue transport delivering sent messages back on receive."""

    def __init__(self) -> None:
        self.sent: list[dict[str, typ.Any]] = []
        self.receives: list[dict[str, typ.Any]] = []
        self.deleted: list[tuple[str, list]] = []
        self.purged: list[str] = []
        self.visibility: list[tuple[str, str, int]] = []
        self.inbox: list[dict[str, typ.Any]] = []

    async def send(self, queue_url, body, attributes, group_id=None, dedup_id=None):
        message_id = f"msg-{len(self.sent)}"
        self.sent.append(
            {
                "queue_url": queue_url,
                "body": body,
                "attributes": attributes,
                "group_id": group_id,
                "dedup_id": dedup_id,
            }
        )
        self.inbox.append(
            {
                "MessageId": message_id,
                "ReceiptHandle": f"handle-{message_id}",
                "Body": body,
                "MessageAttributes": attributes,
            }
        )
        return {"MessageId": message_id}

    async def receive(self, queue_url, max_messages, wait_seconds, visibility_timeout, attribute_names):
        self.receives.append(
            {
                "queue_url": queue_url,
                "max_messages": max_messages,
                "wait_seconds": wait_seconds,
                "visibility_timeout": visibility_timeout,
                "attribute_names": list(attribute_names),
            }
        )
        batch, self.inbox = self.inbox[:max_messages], self.inbox[max_messages:]
        return {"Messages": batch} if batch else {}

    async def delete(self, queue_url, entries):
        self.deleted.append((queue_url, entries))
        return {"Successful": [{"Id": entry["Id"]} for entry in entries]}

    async def purge(self, queue_url):
        self.purged.append(queue_url)
        return {}

    async def change_visibility(self, queue_url, handle, timeout):
        self.visibility.append((queue_url, handle, timeout))
        return {}


class ScriptedPagedSource:
    """Paged source replaying a fixed list of responses."""

    def __init__(self, pages: list[dict[str, typ.Any]]) -> None:
        self.pages = list(pages)
        self.requests: list[tuple[str, dict[str, typ.Any]]] = []

    async def _next(self, operation, params):
        self.requests.append((operation, dict(params)))
        return self.pages[len(self.requests) - 1]

    async def query(self, params):
        return await self._next("query", params)

    async def scan(self, params):
        return await self._next("scan", params)


@pytest.fixture
def settings() -> Settings:
    """Return settings for a fixed test account without reading the environment."""
    return Settings(
        _env_file=None,
        AWS_REGION="us-east-1",
        AWS_ACCOUNT_ID="123456789012",
        SQS_QUEUE_PREFIX="dev-",
        SQS_QUEUE_SUFFIX=".fifo",
        SQS_EXTENDED_BUCKET="test",
    )


@pytest.fixture
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture
def transport() -> InMemoryQueueTransport:
    return InMemoryQueueTransport()


@pytest.fixture
def codec(blob_store: InMemoryBlobStore) -> ExtendedMessageCodec:
    return ExtendedMessageCodec(blob_store, "test")


@pytest.fixture
def service(
    transport: InMemoryQueueTransport,
    codec: ExtendedMessageCodec,
    settings: Settings,
) -> ExtendedSQSService:
    return ExtendedSQSService(transport, codec, settings)


@pytest.fixture
def scripted_source() -> type[ScriptedPagedSource]:
    """Return the scripted source class so tests can supply their own pages."""
    return ScriptedPagedSource
