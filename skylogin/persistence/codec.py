"""JSON encoding of stored records."""

import json

from skylogin.domain.repository import JsonValue
from skylogin.persistence.error import RecordSerializationError


def encode_value(key: str, value: JsonValue) -> str:
    """Encode a record value for storage.

    Raises:
        RecordSerializationError: If the value is not JSON-compatible
    """
    try:
        return json.dumps(value, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise RecordSerializationError(key, str(e)) from e


def decode_value(key: str, raw: str | bytes) -> JsonValue:
    """Decode a stored record value.

    Raises:
        RecordSerializationError: If the stored text is not valid JSON
    """
    try:
        return json.loads(raw)
    except ValueError as e:
        raise RecordSerializationError(key, str(e)) from e
