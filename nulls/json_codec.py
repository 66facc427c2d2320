"""
JSON helpers for documents containing NullTime values.

Within a larger document a present NullTime is always emitted as a
JSON string, whatever the quote setting, so the document stays valid.
"""

import json
from typing import Any

from nulls.errors import FormatError
from nulls.null_time import NullTime


class NullTimeEncoder(json.JSONEncoder):
    """JSON encoder that serializes NullTime values."""

    def default(self, obj):
        if isinstance(obj, NullTime):
            if not obj.valid:
                return None
            return obj.marshal_json(quote=False).decode("ascii")
        return super().default(obj)


def dumps(obj: Any, **kwargs: Any) -> str:
    """Serialize obj to JSON, encoding any NullTime values it contains."""
    return json.dumps(obj, cls=NullTimeEncoder, **kwargs)


def decode_null_time(raw: Any) -> NullTime:
    """Build a NullTime from a value taken out of json.loads output.

    Args:
        raw: None or a timestamp string in the fixed layout.

    Raises:
        FormatError: If raw is neither None nor a parseable string.
    """
    result = NullTime()
    if raw is None:
        return result
    if not isinstance(raw, str):
        raise FormatError(repr(raw), f"expected string or null, got {type(raw).__name__}")
    result.unmarshal_json(raw, quote=False)
    return result
