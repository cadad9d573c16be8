"""Conversion of model attributes to and from JSON-compatible values."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID


def serialize_value(value: Any) -> Any:
    """Serialize a value to JSON-compatible primitives.

    Recursively converts non-JSON-serializable types to their
    string or primitive representations.

    Args:
        value: Any value to serialize

    Returns:
        JSON-serializable representation of the value
    """
    # Pass through JSON primitives
    if value is None or isinstance(value, str | int | float | bool):
        return value

    # Handle specific types that need conversion
    result: Any
    if isinstance(value, UUID):
        result = str(value)
    elif isinstance(value, datetime | date):
        result = value.isoformat()
    elif isinstance(value, Decimal):
        result = str(value)
    elif isinstance(value, Enum):
        result = value.value
    elif isinstance(value, bytes):
        result = value.hex()
    elif isinstance(value, dict):
        result = {str(k): serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list | tuple | set | frozenset):
        result = [serialize_value(item) for item in value]
    else:
        # Fallback: convert to string
        result = str(value)

    return result


def deserialize_value(value: Any, python_type: type | None) -> Any:
    """Convert a serialized value back to a column's Python type.

    Only the conversions performed by ``serialize_value`` are reversed;
    anything else is returned unchanged.

    Args:
        value: The JSON value stored in a version
        python_type: The column's Python type, if known

    Returns:
        The value coerced to ``python_type`` where possible
    """
    if value is None or python_type is None or isinstance(value, python_type):
        return value

    if issubclass(python_type, Enum):
        return python_type(value)

    if not isinstance(value, str):
        return value

    if issubclass(python_type, UUID):
        return UUID(value)
    if issubclass(python_type, datetime):
        return datetime.fromisoformat(value)
    if issubclass(python_type, date):
        return date.fromisoformat(value)
    if issubclass(python_type, Decimal):
        return Decimal(value)
    if issubclass(python_type, bytes):
        return bytes.fromhex(value)

    return value
