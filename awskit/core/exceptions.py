# core/exceptions.py
"""
Error taxonomy shared by the adapters and the extended SQS codec.

Adapters translate botocore failures into StoreUnavailableError (S3) or
TransportError (SQS, SNS, DynamoDB); the codec raises the rest.
"""


class AWSKitError(Exception):
    """Base class for every error raised by awskit."""


class ConfigurationError(AWSKitError):
    """A required collaborator parameter is missing (e.g. no overflow bucket)."""


class SerializationError(AWSKitError):
    """A payload could not be turned into its canonical JSON text."""


class StoreUnavailableError(AWSKitError):
    """A blob store put/get failed."""

    def __init__(self, message: str, bucket: str = "", key: str = ""):
        super().__init__(message)
        self.bucket = bucket
        self.key = key


class CodecError(AWSKitError):
    """A payload could not be decompressed, base64-decoded or parsed."""


class TransportError(AWSKitError):
    """An underlying queue, topic or table operation failed."""
