"""
SQLAlchemy column type for NullTime.

Bridges NullTime's scan/value pair to SQLAlchemy's bind/result
processing so columns read and write NullTime objects directly.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import DateTime
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

from nulls.null_time import NullTime


class NullTimeType(TypeDecorator):
    """DateTime column that surfaces SQL NULL as an absent NullTime.

    Usage:
        Column("published_at", NullTimeType(timezone=True))
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> Optional[datetime]:
        """Convert a NullTime (or plain datetime) to a driver value."""
        if value is None:
            return None
        if isinstance(value, NullTime):
            return value.value()
        if isinstance(value, datetime):
            return value
        raise TypeError(
            f"NullTimeType cannot bind value of type {type(value).__name__}"
        )

    def process_result_value(self, value: Any, dialect: Dialect) -> NullTime:
        """Scan a driver value into a fresh NullTime."""
        result = NullTime()
        result.scan(value)
        return result
