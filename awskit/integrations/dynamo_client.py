# integrations/dynamo_client.py
import asyncio
from typing import Any, Dict

from botocore.exceptions import BotoCoreError, ClientError

from awskit.core.exceptions import TransportError
from awskit.core.interfaces import PagedSource
from awskit.core.logger import logger


class DynamoDBSource:
    """One-page query/scan primitives over a DynamoDB document client."""

    def __init__(self, client) -> None:
        self._ddb = client

    async def _call(self, operation: str, params: Dict[str, Any]) -> Dict[str, Any]:
        method = getattr(self._ddb, operation)
        try:
            return await asyncio.to_thread(method, **params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"DynamoDB {operation} failed: {e}", extra={"table": params.get("TableName")})
            raise TransportError(f"DynamoDB {operation} failed: {e}") from e

    async def query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("query", params)

    async def scan(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("scan", params)


class ConsistentReadSource:
    """Wraps a PagedSource so every request asks for strongly consistent reads."""

    def __init__(self, source: PagedSource) -> None:
        self.source = source

    async def query(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.source.query({**params, "ConsistentRead": True})

    async def scan(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self.source.scan({**params, "ConsistentRead": True})
