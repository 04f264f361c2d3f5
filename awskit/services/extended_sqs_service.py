# services/extended_sqs_service.py
"""
Extended SQS Service

SQS caps a message (body + attributes) at 256 KiB. This module moves
payloads past that ceiling through S3 transparently:

- On send, payloads are serialized to JSON, compressed and either inlined
  (base64) or uploaded to S3 and replaced by a pointer message.
- On receive, pointer messages are resolved back through S3, and every body
  is decompressed and parsed. Each message decodes independently, so one
  corrupt or unreachable payload never blocks its siblings.
"""

import asyncio
import base64
import binascii
import json
import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

from awskit.core.aws_client import get_s3_client, get_sqs_client
from awskit.core.config import Settings
from awskit.core.exceptions import (
    AWSKitError,
    CodecError,
    ConfigurationError,
    SerializationError,
    StoreUnavailableError,
)
from awskit.core.interfaces import BlobStore, QueueTransport
from awskit.core.logger import configure_logger, logger
from awskit.integrations.s3_client import S3BlobStore
from awskit.integrations.sqs_client import SQSTransport, get_queue_url
from awskit.schemas.sqs_models import (
    EXTENDED_S3_BUCKET,
    EXTENDED_S3_KEY,
    POINTER_ATTRIBUTE_NAMES,
    POINTER_BODY,
    AttributeInput,
    EncodeResult,
    LogicalMessage,
    ReceivedEnvelope,
    SendResult,
    WireMessage,
    normalize_attributes,
)
from awskit.services.compressor import NO_COMPRESSION, DeflateCompressor
from awskit.utils.message_size import compute_message_size

SQS_MAX_MESSAGE_BYTES = 262144
SMALL_PAYLOAD_BYTES = 65536
DEFAULT_SHARD_COUNT = 50


# ============================================================================
# HELPERS
# ============================================================================

def serialize_payload(payload: Any) -> str:
    """Return the canonical text of a payload; strings pass through untouched."""
    if isinstance(payload, str):
        return payload
    try:
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Payload is not JSON serializable: {e}") from e


def parse_payload(data: bytes) -> Any:
    """
    Inverse of serialize_payload.

    Text that is not JSON is returned as-is, since string payloads are sent
    verbatim.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CodecError(f"Payload is not valid UTF-8: {e}") from e
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _string_attribute(attributes: Mapping[str, Any], name: str) -> Optional[str]:
    value = attributes.get(name) or {}
    return value.get("StringValue")


def _b64decode_attribute(name: str, value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CodecError(f"Binary attribute {name!r} is not valid base64: {e}") from e


def _from_event_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Map a Lambda-delivered SQS record (camelCase keys) onto the
    receive_message shape. Records already in that shape pass through.

    Raises:
        CodecError: a binary attribute value is not valid base64
    """
    if "Body" in record or "body" not in record:
        return dict(record)

    attributes: Dict[str, Dict[str, Any]] = {}
    for name, value in (record.get("messageAttributes") or {}).items():
        attribute: Dict[str, Any] = {"DataType": value.get("dataType", "String")}
        if value.get("stringValue") is not None:
            attribute["StringValue"] = value["stringValue"]
        if value.get("binaryValue") is not None:
            attribute["BinaryValue"] = _b64decode_attribute(name, value["binaryValue"])
        if value.get("stringListValues"):
            attribute["StringListValues"] = list(value["stringListValues"])
        if value.get("binaryListValues"):
            attribute["BinaryListValues"] = [_b64decode_attribute(name, v) for v in value["binaryListValues"]]
        attributes[name] = attribute

    return {
        "MessageId": record.get("messageId"),
        "ReceiptHandle": record.get("receiptHandle"),
        "Body": record["body"],
        "MessageAttributes": attributes,
    }


# ============================================================================
# CODEC
# ============================================================================

class ExtendedMessageCodec:
    """
    Per-message encode/decode policy between logical payloads and SQS wire
    messages.

    Offloading is purely a function of measured size: a small payload never
    touches the blob store even though a bucket is configured.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        bucket: Optional[str],
        *,
        shard_count: int = DEFAULT_SHARD_COUNT,
        blob_ttl_days: Optional[int] = None,
        compressor: Optional[DeflateCompressor] = None,
    ) -> None:
        if not bucket:
            raise ConfigurationError("An S3 bucket is required for extended SQS payloads")
        if shard_count < 1:
            raise ConfigurationError("shard_count must be at least 1")

        self.blob_store = blob_store
        self.bucket = bucket
        self.shard_count = shard_count
        self.blob_ttl_days = blob_ttl_days
        self.compressor = compressor or DeflateCompressor()

    def _new_blob_key(self) -> str:
        return f"/{random.randrange(self.shard_count)}/{uuid.uuid4()}.json.gz"

    def _blob_expiry(self) -> Optional[datetime]:
        if self.blob_ttl_days is None:
            return None
        return datetime.now(timezone.utc) + timedelta(days=self.blob_ttl_days)

    async def encode(
        self,
        payload: Any,
        attributes: Optional[Mapping[str, AttributeInput]] = None,
        *,
        queue_url: str,
        message_group_id: Optional[str] = None,
        message_deduplication_id: Optional[str] = None,
    ) -> EncodeResult:
        """
        Build the wire message for a payload, offloading it to S3 when its
        estimated size reaches the SQS ceiling.

        Raises:
            SerializationError: payload cannot be serialized (nothing is sent or stored)
            ConfigurationError: the payload must be offloaded but no bucket is set
            StoreUnavailableError: the S3 upload failed

        String payloads are sent verbatim. One that is itself JSON text
        (e.g. "42" or "null") decodes to the parsed value, not the string.
        """
        message = LogicalMessage(payload=payload, attributes=normalize_attributes(attributes))
        text = serialize_payload(message.payload)
        raw = text.encode("utf-8")
        estimated_size = compute_message_size(raw, message.attributes)

        # Small payloads are inlined anyway, so skip the deflate effort
        level = NO_COMPRESSION if estimated_size < SMALL_PAYLOAD_BYTES else None
        compressed = self.compressor.compress(raw, level)

        wire_attributes = dict(message.attributes)
        blob_key = None

        if estimated_size >= SQS_MAX_MESSAGE_BYTES:
            if not self.bucket:
                raise ConfigurationError("An S3 bucket is required to offload oversized payloads")
            blob_key = self._new_blob_key()
            await self.blob_store.put(
                self.bucket,
                blob_key,
                compressed,
                self.compressor.encoding,
                self._blob_expiry(),
            )
            body = POINTER_BODY
            wire_attributes[EXTENDED_S3_BUCKET] = {"DataType": "String", "StringValue": self.bucket}
            wire_attributes[EXTENDED_S3_KEY] = {"DataType": "String", "StringValue": blob_key}

            logger.info(
                "Offloaded oversized SQS payload to S3",
                extra={
                    "queue_url": queue_url,
                    "bucket": self.bucket,
                    "key": blob_key,
                    "estimated_size": estimated_size,
                    "compressed_size": len(compressed),
                },
            )
        else:
            body = base64.b64encode(compressed).decode("ascii")

        wire_message = WireMessage(
            queue_url=queue_url,
            body=body,
            attributes=wire_attributes,
            message_group_id=message_group_id,
            message_deduplication_id=message_deduplication_id,
        )
        return EncodeResult(wire_message=wire_message, was_offloaded=blob_key is not None, blob_key=blob_key)

    async def _compressed_body(self, message: Mapping[str, Any]) -> bytes:
        attributes = message.get("MessageAttributes") or {}
        bucket = _string_attribute(attributes, EXTENDED_S3_BUCKET)
        key = _string_attribute(attributes, EXTENDED_S3_KEY)

        if bucket and key:
            try:
                return await self.blob_store.get(bucket, key)
            except StoreUnavailableError:
                raise
            except Exception as e:
                raise StoreUnavailableError(f"Failed to fetch s3://{bucket}{key}: {e}", bucket, key) from e

        try:
            return base64.b64decode(message.get("Body") or "", validate=True)
        except (binascii.Error, ValueError) as e:
            raise CodecError(f"Message body is not valid base64: {e}") from e

    async def decode(self, message: Mapping[str, Any]) -> ReceivedEnvelope:
        """
        Resolve one received message into its payload.

        Never raises: fetch, decompression and parse failures are returned on
        the envelope together with the original message.
        """
        original = dict(message)
        try:
            compressed = await self._compressed_body(message)
            payload = parse_payload(self.compressor.decompress(compressed))
        except AWSKitError as e:
            logger.warning(
                f"Failed to decode SQS message: {e}",
                extra={"message_id": message.get("MessageId"), "error_type": e.__class__.__name__},
            )
            return ReceivedEnvelope(original_message=original, error=e)

        return ReceivedEnvelope(original_message=original, payload=payload)

    async def decode_batch(self, messages: Sequence[Mapping[str, Any]]) -> List[ReceivedEnvelope]:
        """Decode messages concurrently; results keep the input order."""
        return list(await asyncio.gather(*(self.decode(message) for message in messages)))


# ============================================================================
# SERVICE
# ============================================================================

class ExtendedSQSService:
    """
    Queue client addressed by queue name, sending and retrieving through
    an ExtendedMessageCodec.
    """

    def __init__(self, transport: QueueTransport, codec: ExtendedMessageCodec, settings: Settings) -> None:
        self.transport = transport
        self.codec = codec
        self.settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExtendedSQSService":
        """Build the service on boto3 SQS and S3 clients."""
        configure_logger(settings)
        codec = ExtendedMessageCodec(
            S3BlobStore(get_s3_client(settings)),
            settings.SQS_EXTENDED_BUCKET,
            shard_count=settings.SQS_EXTENDED_SHARD_COUNT,
            blob_ttl_days=settings.SQS_EXTENDED_BLOB_TTL_DAYS,
        )
        return cls(SQSTransport(get_sqs_client(settings)), codec, settings)

    def get_queue_url(self, queue_name: str) -> str:
        return get_queue_url(
            queue_name,
            region=self.settings.AWS_REGION,
            account=self.settings.AWS_ACCOUNT_ID,
            prefix=self.settings.SQS_QUEUE_PREFIX,
            suffix=self.settings.SQS_QUEUE_SUFFIX,
        )

    async def send(
        self,
        queue_name: str,
        payload: Any,
        attrs: Optional[Mapping[str, AttributeInput]] = None,
        *,
        message_group_id: Optional[str] = None,
        message_deduplication_id: Optional[str] = None,
    ) -> SendResult:
        """Publish a payload of any size to a queue."""
        encoded = await self.codec.encode(
            payload,
            attrs,
            queue_url=self.get_queue_url(queue_name),
            message_group_id=message_group_id,
            message_deduplication_id=message_deduplication_id,
        )
        wire = encoded.wire_message
        response = await self.transport.send(
            wire.queue_url,
            wire.body,
            wire.attributes,
            wire.message_group_id,
            wire.message_deduplication_id,
        )
        return SendResult(response=response, was_offloaded=encoded.was_offloaded)

    async def retrieve(
        self,
        queue_name: str,
        max_messages: int = 10,
        message_attribute_names: Sequence[str] = (),
        visibility_timeout: Optional[int] = None,
    ) -> List[ReceivedEnvelope]:
        """
        Receive up to `max_messages` messages and decode each one.

        The pointer attributes are always requested so offloaded payloads can
        be recognised, whatever names the caller asks for.
        """
        attribute_names = list(message_attribute_names)
        for name in POINTER_ATTRIBUTE_NAMES:
            if name not in attribute_names:
                attribute_names.append(name)

        resp = await self.transport.receive(
            self.get_queue_url(queue_name),
            max_messages,
            self.settings.SQS_WAIT_TIME_SECONDS,
            self.settings.SQS_DEFAULT_VISIBILITY_TIMEOUT if visibility_timeout is None else visibility_timeout,
            attribute_names,
        )
        return await self.codec.decode_batch(resp.get("Messages") or [])

    async def decode_message(self, message: Mapping[str, Any]) -> ReceivedEnvelope:
        """Decode a message delivered outside retrieve(), e.g. a Lambda SQS record."""
        try:
            record = _from_event_record(message)
        except CodecError as e:
            logger.warning(
                f"Failed to decode SQS message: {e}",
                extra={"message_id": message.get("messageId"), "error_type": e.__class__.__name__},
            )
            return ReceivedEnvelope(original_message=dict(message), error=e)

        envelope = await self.codec.decode(record)
        envelope.original_message = dict(message)
        return envelope

    async def remove(self, queue_name: str, entries: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Delete (ack) messages; entries are {"Id", "ReceiptHandle"} dicts."""
        return await self.transport.delete(self.get_queue_url(queue_name), entries)

    async def purge(self, queue_name: str) -> Dict[str, Any]:
        return await self.transport.purge(self.get_queue_url(queue_name))

    async def set_visibility_timeout(self, queue_name: str, handle: str, timeout: int) -> Dict[str, Any]:
        return await self.transport.change_visibility(self.get_queue_url(queue_name), handle, timeout)
