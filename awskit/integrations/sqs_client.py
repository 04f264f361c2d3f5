# integrations/sqs_client.py
import asyncio
from typing import Any, Dict, List, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from awskit.core.exceptions import TransportError
from awskit.core.logger import logger


def get_queue_url(name: str, *, region: str, account: str, prefix: str = "", suffix: str = "") -> str:
    """Format the URL of a queue from its bare name."""
    return f"https://sqs.{region}.amazonaws.com/{account}/{prefix}{name}{suffix}"


def _unique_by_id(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # delete_message_batch rejects repeated Ids; keep the first of each
    seen = set()
    unique = []
    for entry in entries:
        if entry.get("Id") in seen:
            continue
        seen.add(entry.get("Id"))
        unique.append(entry)
    return unique


class SQSTransport:
    """
    Async queue primitives over a boto3 SQS client.

    boto3 calls block, so each one runs in a worker thread. Failures are
    re-raised as TransportError; no retry happens here.
    """

    def __init__(self, client) -> None:
        self._sqs = client

    async def _call(self, operation: str, **params) -> Dict[str, Any]:
        method = getattr(self._sqs, operation)
        try:
            return await asyncio.to_thread(method, **params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"SQS {operation} failed: {e}", extra={"queue_url": params.get("QueueUrl")})
            raise TransportError(f"SQS {operation} failed: {e}") from e

    async def send(
        self,
        queue_url: str,
        body: str,
        attributes: Dict[str, Dict[str, Any]],
        group_id: Optional[str] = None,
        dedup_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "QueueUrl": queue_url,
            "MessageBody": body,
            "MessageAttributes": attributes,
        }
        if group_id:
            params["MessageGroupId"] = group_id
        if dedup_id:
            params["MessageDeduplicationId"] = dedup_id

        resp = await self._call("send_message", **params)
        logger.debug("SQS send ok", extra={"queue_url": queue_url, "msg_id": resp.get("MessageId")})
        return resp

    async def receive(
        self,
        queue_url: str,
        max_messages: int,
        wait_seconds: int,
        visibility_timeout: int,
        attribute_names: Sequence[str],
    ) -> Dict[str, Any]:
        return await self._call(
            "receive_message",
            QueueUrl=queue_url,
            MaxNumberOfMessages=max_messages,
            WaitTimeSeconds=wait_seconds,
            VisibilityTimeout=visibility_timeout,
            MessageAttributeNames=list(attribute_names),
        )

    async def delete(self, queue_url: str, entries: List[Dict[str, Any]]) -> Dict[str, Any]:
        return await self._call(
            "delete_message_batch",
            QueueUrl=queue_url,
            Entries=_unique_by_id(entries),
        )

    async def purge(self, queue_url: str) -> Dict[str, Any]:
        logger.info("Purging SQS queue", extra={"queue_url": queue_url})
        return await self._call("purge_queue", QueueUrl=queue_url)

    async def change_visibility(self, queue_url: str, handle: str, timeout: int) -> Dict[str, Any]:
        return await self._call(
            "change_message_visibility",
            QueueUrl=queue_url,
            ReceiptHandle=handle,
            VisibilityTimeout=timeout,
        )
