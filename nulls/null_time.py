"""
Nullable timestamp value.

NullTime pairs a datetime with a validity flag so that SQL NULL and
JSON null are represented explicitly rather than by a sentinel time.
It implements both halves of the database driver boundary (scan/value)
and both halves of the JSON boundary (marshal_json/unmarshal_json).

Marshalled timestamps are NOT quoted unless quote mode is enabled, so the
default output of marshal_json for a present value is bare text such as
2022-03-01T10:30:00+0000. Existing consumers depend on those exact bytes;
set NULLS_QUOTE_JSON=true to emit a valid JSON string instead.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Optional

from dateutil import tz

from nulls.config import settings
from nulls.errors import FormatError, RangeError, ScanError

logger = logging.getLogger(__name__)

TIME_LAYOUT = "%Y-%m-%dT%H:%M:%S%z"
NULL_LITERAL = b"null"
MIN_YEAR = 0
MAX_YEAR = 9999

ZERO_TIME = datetime(1, 1, 1, tzinfo=tz.UTC)

_LAYOUT_RE = re.compile(
    r"(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:[.,](?P<fraction>[0-9]+))?"
    r"(?P<sign>[+-])(?P<off_hour>[0-9]{2})(?P<off_minute>[0-9]{2})"
)


class DriverValueKind(Enum):
    """Classification of a value handed over by a database driver."""

    TIMESTAMP = "timestamp"
    NULL = "null"
    OTHER = "other"


def classify_driver_value(value: Any) -> DriverValueKind:
    """Return which variant a driver value belongs to.

    Any datetime (subclasses included) is a timestamp, None is NULL and
    everything else, plain dates included, is OTHER.
    """
    if isinstance(value, datetime):
        return DriverValueKind.TIMESTAMP
    if value is None:
        return DriverValueKind.NULL
    return DriverValueKind.OTHER


def format_time(t: datetime) -> str:
    """Render a datetime in the fixed YYYY-MM-DDThh:mm:ss+hhmm layout.

    Naive datetimes are rendered with a +0000 offset. Microseconds are
    appended only when non-zero.
    """
    offset = t.utcoffset() or timedelta(0)
    # Whole minutes, truncated toward zero, decide the sign
    off_minutes = int(offset / timedelta(minutes=1))
    sign = "-" if off_minutes < 0 else "+"
    off_hour, off_minute = divmod(abs(off_minutes), 60)
    fraction = f".{t.microsecond:06d}" if t.microsecond else ""
    return (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d}"
        f"T{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
        f"{fraction}{sign}{off_hour:02d}{off_minute:02d}"
    )


def _as_aware(t: datetime) -> datetime:
    """Return t with naive values read as UTC, matching how format_time renders them."""
    if t.utcoffset() is None:
        return t.replace(tzinfo=tz.UTC)
    return t


def parse_time(text: str) -> datetime:
    """Parse text in the fixed layout into an aware datetime.

    Raises:
        FormatError: If the text does not match the layout or names an
            impossible date, time or offset.
    """
    match = _LAYOUT_RE.fullmatch(text)
    if match is None:
        raise FormatError(text, f"does not match layout {TIME_LAYOUT}")

    parts = match.groupdict()
    off_hour = int(parts["off_hour"])
    off_minute = int(parts["off_minute"])
    if off_hour > 23 or off_minute > 59:
        raise FormatError(text, "utc offset out of range")
    off_seconds = (off_hour * 60 + off_minute) * 60
    if parts["sign"] == "-":
        off_seconds = -off_seconds
    tzinfo = tz.UTC if off_seconds == 0 else tz.tzoffset(None, off_seconds)

    # Digits past microseconds are truncated
    fraction = (parts["fraction"] or "").ljust(6, "0")[:6]

    try:
        return datetime(
            int(parts["year"]),
            int(parts["month"]),
            int(parts["day"]),
            int(parts["hour"]),
            int(parts["minute"]),
            int(parts["second"]),
            int(fraction),
            tzinfo=tzinfo,
        )
    except ValueError as exc:
        raise FormatError(text, str(exc)) from exc


@dataclass(eq=False)
class NullTime:
    """A datetime that may be NULL.

    Attributes:
        time: The timestamp. Unspecified and never read while valid is False.
        valid: True if time holds a value, False for SQL NULL / JSON null.
    """

    time: datetime = field(default=ZERO_TIME)
    valid: bool = False

    @classmethod
    def of(cls, t: datetime) -> "NullTime":
        """Return a present NullTime holding t."""
        return cls(time=t, valid=True)

    @classmethod
    def from_optional(cls, t: Optional[datetime]) -> "NullTime":
        """Return an absent NullTime for None, a present one otherwise."""
        if t is None:
            return cls()
        return cls.of(t)

    def to_optional(self) -> Optional[datetime]:
        """Return the timestamp, or None when absent."""
        return self.time if self.valid else None

    def _set(self, t: datetime, valid: bool) -> None:
        self.time, self.valid = t, valid

    def scan(self, value: Any, *, strict: Optional[bool] = None) -> None:
        """Populate from a value supplied by a database driver.

        A datetime makes the value present; None makes it absent. Any other
        value is treated as NULL unless strict scanning is on.

        Args:
            value: The raw driver value.
            strict: Override the NULLS_STRICT_SCAN setting.

        Raises:
            ScanError: In strict mode, for values that are neither a
                datetime nor None.
        """
        kind = classify_driver_value(value)
        if kind is DriverValueKind.TIMESTAMP:
            self._set(value, True)
            return

        self._set(ZERO_TIME, False)
        if kind is DriverValueKind.OTHER:
            if settings.strict_scan if strict is None else strict:
                raise ScanError(value)
            logger.debug(
                "Scanned %s into NullTime as NULL", type(value).__name__
            )

    def value(self) -> Optional[datetime]:
        """Return the driver value: the timestamp unmodified, or None when absent."""
        if not self.valid:
            return None
        return self.time

    def marshal_json(self, *, quote: Optional[bool] = None) -> bytes:
        """Render the value as JSON text.

        Args:
            quote: Override the NULLS_QUOTE_JSON setting.

        Returns:
            b"null" when absent, otherwise the timestamp in the fixed layout.

        Raises:
            RangeError: If the year is outside [0, 9999].
        """
        if not self.valid:
            return NULL_LITERAL

        year = self.time.year
        if year < MIN_YEAR or year > MAX_YEAR:
            raise RangeError(year)

        text = format_time(self.time)
        if settings.quote_json if quote is None else quote:
            text = f'"{text}"'
        return text.encode("ascii")

    def unmarshal_json(self, text: bytes | str, *, quote: Optional[bool] = None) -> None:
        """Populate from JSON text.

        The value is marked absent before anything else, so it stays absent
        on failure. null and empty input leave it absent without error.

        Args:
            text: Raw JSON fragment.
            quote: Override the NULLS_QUOTE_JSON setting. When on, one pair
                of surrounding double quotes is stripped before parsing.

        Raises:
            FormatError: If the text does not match the fixed layout.
        """
        self.valid = False

        if isinstance(text, (bytes, bytearray)):
            try:
                text = bytes(text).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise FormatError(repr(bytes(text)), "not valid utf-8") from exc

        if text == "null" or text == "":
            return

        if settings.quote_json if quote is None else quote:
            if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
                text = text[1:-1]

        self._set(parse_time(text), True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NullTime):
            return NotImplemented
        if not self.valid or not other.valid:
            return self.valid == other.valid
        return _as_aware(self.time) == _as_aware(other.time)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self.valid:
            return "NullTime(NULL)"
        return f"NullTime({format_time(self.time)})"


def new_null_time(t: datetime) -> NullTime:
    """Return a new, properly instantiated present NullTime."""
    return NullTime.of(t)
