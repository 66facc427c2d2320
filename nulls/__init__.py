"""
Nullable value types with database driver and JSON support.
"""

from nulls.errors import FormatError, NullsError, RangeError, ScanError
from nulls.null_time import TIME_LAYOUT, DriverValueKind, NullTime, new_null_time

__all__ = [
    "DriverValueKind",
    "FormatError",
    "NullTime",
    "NullsError",
    "RangeError",
    "ScanError",
    "TIME_LAYOUT",
    "new_null_time",
]
