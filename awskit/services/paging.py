# services/paging.py
"""
Paging over DynamoDB query/scan results.

A page is requested only after the previous one has been handled, which
gives natural backpressure against the table.
"""

from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List

from awskit.core.config import Settings
from awskit.core.interfaces import PagedSource
from awskit.core.logger import logger

PageCallback = Callable[[List[Any]], Awaitable[Any]]


class PagingQueryRunner:
    """Reissues a query or scan with the continuation key until exhausted."""

    def __init__(self, source: PagedSource) -> None:
        self.source = source

    @classmethod
    def from_settings(cls, settings: Settings) -> "PagingQueryRunner":
        from awskit.core.aws_client import get_dynamodb_document_client
        from awskit.core.logger import configure_logger
        from awskit.integrations.dynamo_client import ConsistentReadSource, DynamoDBSource

        configure_logger(settings)
        source = DynamoDBSource(get_dynamodb_document_client(settings))
        if settings.DYNAMO_CONSISTENT_READ:
            source = ConsistentReadSource(source)
        return cls(source)

    async def iter_pages(self, operation: str, params: Dict[str, Any]) -> AsyncIterator[List[Any]]:
        """
        Yield the items of each page in turn.

        Args:
            operation: "query" or "scan"
            params: Request parameters; ExclusiveStartKey is managed here

        The next page is only fetched when the consumer asks for it, so
        breaking out of the loop stops paging.
        """
        if operation not in ("query", "scan"):
            raise ValueError(f"Unsupported paging operation: {operation}")

        fetch = getattr(self.source, operation)
        request = dict(params)
        pages = 0
        while True:
            resp = await fetch(request)
            pages += 1
            # Empty pages may omit Items entirely
            yield resp.get("Items") or []

            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                logger.debug(
                    f"DynamoDB {operation} exhausted",
                    extra={"table": params.get("TableName"), "pages": pages},
                )
                return
            request = {**request, "ExclusiveStartKey": last_key}

    async def _collect(self, operation: str, params: Dict[str, Any]) -> List[Any]:
        items: List[Any] = []
        async for page in self.iter_pages(operation, params):
            items.extend(page)
        return items

    async def _paged(self, operation: str, params: Dict[str, Any], on_page: PageCallback) -> None:
        async for page in self.iter_pages(operation, params):
            await on_page(page)

    async def query_all(self, params: Dict[str, Any]) -> List[Any]:
        """Return every item matched by a query."""
        return await self._collect("query", params)

    async def scan_all(self, params: Dict[str, Any]) -> List[Any]:
        """Return every item of a scan."""
        return await self._collect("scan", params)

    async def query_paged(self, params: Dict[str, Any], on_page: PageCallback) -> None:
        """
        Hand each query page to on_page, awaiting it before the next request.
        A failing callback stops paging and its error propagates.
        """
        await self._paged("query", params, on_page)

    async def scan_paged(self, params: Dict[str, Any], on_page: PageCallback) -> None:
        """Scan counterpart of query_paged."""
        await self._paged("scan", params, on_page)
