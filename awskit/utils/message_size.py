# utils/message_size.py
import base64
import math
from typing import Any, Dict, Mapping, Optional


def _byte_length(value: Any) -> int:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return len(value)
    return len(str(value).encode("utf-8"))


def _body_size(body: Any) -> int:
    """Length of the body once base64-encoded, padding included."""
    if isinstance(body, str):
        body = body.encode("utf-8")
    if isinstance(body, (bytes, bytearray)):
        return 4 * math.ceil(len(body) / 3)
    try:
        raw = bytes(body)
    except TypeError:
        raw = str(body).encode("utf-8")
    return len(base64.b64encode(raw))


def _attribute_size(name: str, value: Mapping[str, Any]) -> int:
    if value.get("StringValue"):
        return _byte_length(value["StringValue"]) + _byte_length(name)

    if value.get("StringListValues"):
        return sum(_byte_length(v) for v in value["StringListValues"]) + _byte_length(name)

    if value.get("BinaryValue"):
        return _byte_length(value["BinaryValue"]) + _byte_length(name)

    if value.get("BinaryListValues"):
        return sum(_byte_length(v) for v in value["BinaryListValues"]) + _byte_length(name)

    # Not a recognised attribute shape
    return 0


def compute_message_size(body: Any, attributes: Optional[Dict[str, Mapping[str, Any]]] = None) -> int:
    """
    Compute the size SQS charges for a message: the base64-encoded body
    plus the byte length of every attribute name and value.

    Args:
        body: Message body (str, bytes or anything buffer-like)
        attributes: Map of SQS message attributes in wire shape

    Returns:
        Estimated size in bytes
    """
    attributes_size = sum(
        _attribute_size(name, value) for name, value in (attributes or {}).items()
    )
    return _body_size(body) + attributes_size
