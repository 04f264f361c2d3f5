# integrations/s3_client.py
import asyncio
from datetime import datetime
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from awskit.core.exceptions import StoreUnavailableError
from awskit.core.logger import logger


class S3BlobStore:
    """Overflow blob store backed by S3. Objects are written once and never mutated."""

    def __init__(self, client) -> None:
        self._s3 = client

    async def put(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_encoding: str,
        expires_at: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "Bucket": bucket,
            "Key": key,
            "Body": data,
            "ContentEncoding": content_encoding,
        }
        if expires_at is not None:
            params["Expires"] = expires_at

        try:
            resp = await asyncio.to_thread(self._s3.put_object, **params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 put failed: {e}", extra={"bucket": bucket, "key": key})
            raise StoreUnavailableError(f"S3 put failed for s3://{bucket}{key}: {e}", bucket, key) from e

        logger.info("Stored extended payload", extra={"bucket": bucket, "key": key, "bytes": len(data)})
        return resp

    async def get(self, bucket: str, key: str) -> bytes:
        def _read() -> bytes:
            resp = self._s3.get_object(Bucket=bucket, Key=key)
            return resp["Body"].read()

        try:
            return await asyncio.to_thread(_read)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 get failed: {e}", extra={"bucket": bucket, "key": key})
            raise StoreUnavailableError(f"S3 get failed for s3://{bucket}{key}: {e}", bucket, key) from e
