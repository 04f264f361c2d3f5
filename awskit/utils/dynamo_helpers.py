# utils/dynamo_helpers.py
"""
Builders for DynamoDB expression parameters, using the convention that
every field `f` is referenced as `#f` and its value as `:f`.
"""
from typing import Any, Dict, Iterable, Mapping, Union


def prepare_attribute_names(fields: Iterable[str]) -> Dict[str, str]:
    """
    ExpressionAttributeNames for a list of fields.

    >>> prepare_attribute_names(["plan", "status"])
    {'#plan': 'plan', '#status': 'status'}
    """
    return {f"#{field}": field for field in fields}


def prepare_attribute_values(values: Mapping[str, Any]) -> Dict[str, Any]:
    """
    ExpressionAttributeValues for a map of values.

    >>> prepare_attribute_values({"plan": "free1"})
    {':plan': 'free1'}
    """
    return {f":{key}": value for key, value in values.items()}


def prepare_update_expression(updates: Union[Mapping[str, Any], Iterable[str]]) -> str:
    """
    UpdateExpression setting each field (a map's keys, or a list of fields).

    >>> prepare_update_expression({"plan": "free1", "status": "active"})
    'SET #plan = :plan, #status = :status'
    """
    keys = updates.keys() if isinstance(updates, Mapping) else updates
    return "SET " + ", ".join(f"#{key} = :{key}" for key in keys)


def prepare_update(updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Full UpdateItem parameters (expression, names and values) for a map of updates."""
    return {
        "UpdateExpression": prepare_update_expression(updates),
        "ExpressionAttributeNames": prepare_attribute_names(updates.keys()),
        "ExpressionAttributeValues": prepare_attribute_values(updates),
    }
