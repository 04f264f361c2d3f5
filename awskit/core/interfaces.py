# core/interfaces.py
"""
Narrow collaborator interfaces consumed by the extended SQS codec and the
paging runner. The boto3-backed adapters in awskit.integrations implement
them; tests substitute in-memory fakes.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Sequence


class QueueTransport(Protocol):
    """Interface for queue primitives against a queue URL."""

    async def send(
        self,
        queue_url: str,
        body: str,
        attributes: Dict[str, Dict[str, Any]],
        group_id: Optional[str] = None,
        dedup_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Send one message and return the service acknowledgement."""
        ...

    async def receive(
        self,
        queue_url: str,
        max_messages: int,
        wait_seconds: int,
        visibility_timeout: int,
        attribute_names: Sequence[str],
    ) -> Dict[str, Any]:
        """Receive up to max_messages; the result carries a "Messages" list."""
        ...

    async def delete(self, queue_url: str, entries: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Delete (ack) a batch of messages."""
        ...

    async def purge(self, queue_url: str) -> Dict[str, Any]:
        """Remove every message from the queue."""
        ...

    async def change_visibility(self, queue_url: str, handle: str, timeout: int) -> Dict[str, Any]:
        """Change the visibility timeout of a received message."""
        ...


class BlobStore(Protocol):
    """Interface for the overflow blob store."""

    async def put(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_encoding: str,
        expires_at: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Store data at (bucket, key)."""
        ...

    async def get(self, bucket: str, key: str) -> bytes:
        """Return the bytes stored at (bucket, key)."""
        ...


class PagedSource(Protocol):
    """Interface for a paginated query/scan primitive."""

    async def query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run one query page; the result may carry Items and LastEvaluatedKey."""
        ...

    async def scan(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Run one scan page; the result may carry Items and LastEvaluatedKey."""
        ...
