# schemas/sqs_models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Mapping, Optional, Union

# Reserved attributes identifying an offloaded payload
EXTENDED_S3_BUCKET = "EXTENDED_S3_BUCKET"
EXTENDED_S3_KEY = "EXTENDED_S3_KEY"
POINTER_ATTRIBUTE_NAMES = (EXTENDED_S3_BUCKET, EXTENDED_S3_KEY)

# Inline body of every pointer message
POINTER_BODY = "true"


class MessageAttributeValue(BaseModel):
    """One SQS message attribute, in the shape boto3 sends and receives."""
    DataType: str = "String"
    StringValue: Optional[str] = None
    BinaryValue: Optional[bytes] = None
    StringListValues: List[str] = Field(default_factory=list)
    BinaryListValues: List[bytes] = Field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        wire: Dict[str, Any] = {"DataType": self.DataType}
        if self.StringValue is not None:
            wire["StringValue"] = self.StringValue
        if self.BinaryValue is not None:
            wire["BinaryValue"] = self.BinaryValue
        if self.StringListValues:
            wire["StringListValues"] = list(self.StringListValues)
        if self.BinaryListValues:
            wire["BinaryListValues"] = list(self.BinaryListValues)
        return wire


AttributeInput = Union[str, Mapping[str, Any], MessageAttributeValue]


def normalize_attributes(attributes: Optional[Mapping[str, AttributeInput]]) -> Dict[str, Dict[str, Any]]:
    """
    Turn caller-supplied attributes into boto3 wire dicts.

    Plain strings become String attributes; dicts are validated against
    MessageAttributeValue.
    """
    normalized: Dict[str, Dict[str, Any]] = {}
    for name, value in (attributes or {}).items():
        if isinstance(value, MessageAttributeValue):
            normalized[name] = value.to_wire()
        elif isinstance(value, str):
            normalized[name] = {"DataType": "String", "StringValue": value}
        else:
            normalized[name] = MessageAttributeValue.model_validate(dict(value)).to_wire()
    return normalized


class LogicalMessage(BaseModel):
    """Caller-supplied payload plus attributes, before encoding."""
    payload: Any
    attributes: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class WireMessage(BaseModel):
    """What is actually transmitted to the queue."""
    queue_url: str
    body: str
    attributes: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    message_group_id: Optional[str] = None
    message_deduplication_id: Optional[str] = None

    def is_pointer(self) -> bool:
        return all(name in self.attributes for name in POINTER_ATTRIBUTE_NAMES)


class EncodeResult(BaseModel):
    wire_message: WireMessage
    was_offloaded: bool = False
    blob_key: Optional[str] = None


class SendResult(BaseModel):
    response: Dict[str, Any] = Field(default_factory=dict)
    was_offloaded: bool = False


class ReceivedEnvelope(BaseModel):
    """
    Outcome of decoding one received message.

    Failures are isolated per message: a poisoned message yields an
    envelope carrying the error, alongside the raw message so the caller
    can dead-letter it.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    original_message: Dict[str, Any]
    payload: Any = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
