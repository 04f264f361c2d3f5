# awskit/__init__.py
from awskit.core.config import Settings
from awskit.core.exceptions import (
    AWSKitError,
    CodecError,
    ConfigurationError,
    SerializationError,
    StoreUnavailableError,
    TransportError,
)
from awskit.integrations.sns_client import SNSPublisher
from awskit.schemas.sqs_models import EXTENDED_S3_BUCKET, EXTENDED_S3_KEY, ReceivedEnvelope, SendResult
from awskit.services.extended_sqs_service import ExtendedMessageCodec, ExtendedSQSService
from awskit.services.paging import PagingQueryRunner
from awskit.utils.message_size import compute_message_size

__all__ = [
    "AWSKitError",
    "CodecError",
    "ConfigurationError",
    "EXTENDED_S3_BUCKET",
    "EXTENDED_S3_KEY",
    "ExtendedMessageCodec",
    "ExtendedSQSService",
    "PagingQueryRunner",
    "ReceivedEnvelope",
    "SNSPublisher",
    "SendResult",
    "SerializationError",
    "Settings",
    "StoreUnavailableError",
    "TransportError",
    "compute_message_size",
]
