"""Date reading and formatting helpers.

Key functions:
- read_date: Split a date into named parts or format it with a %-pattern
- padding: Left-pad a number (or any value) to a fixed width
- to_datetime: Normalize DateLike input to a pendulum DateTime

Key classes:
- DateParts: Calendar fields of a moment with short keys for formatting
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import ClassVar

import pendulum

DateLike = str | date | datetime | int | float

# A run of % followed by a field key; the longest keys must come first
_FORMAT_TOKEN = re.compile(r"(%+)(y|mm|m|dd|d|D|HH|H|MM|M|SS|S|TT|T)")


def to_datetime(value: DateLike, tz: str | None = None) -> pendulum.DateTime:
    """Convert DateLike input to a pendulum DateTime.

    Args:
        value: datetime/date object, ISO 8601 string or Unix timestamp in seconds
        tz: Timezone name for timestamps (e.g. 'Europe/Berlin'). If None, uses the
            local timezone. Other inputs keep their own wall-clock fields.

    Raises:
        TypeError: If value has an unsupported type
        ValueError: If a string cannot be parsed as a date/time
    """
    if isinstance(value, datetime):
        return pendulum.instance(value)
    if isinstance(value, date):
        return pendulum.datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        parsed = pendulum.parse(value)
        if not isinstance(parsed, pendulum.DateTime):
            raise ValueError(f"not a date/time string: {value!r}")
        return parsed
    # bool is an int subclass but never a timestamp
    if isinstance(value, int | float) and not isinstance(value, bool):
        return pendulum.from_timestamp(value, tz=tz or pendulum.local_timezone())
    raise TypeError(f"unsupported date value: {value!r}")


def padding(src: object, length: int, char: str = "0") -> str:
    """
    Left-pad the string form of src up to length.

    Args:
        src: Value to pad, usually an int or a numeric string
        length: Minimal width of the result
        char: Padding text, repeated as a whole (default "0"; empty falls back to "0")

    Returns:
        Padded string; src is never truncated

    Examples:
        >>> padding(1, 2)
        '01'

        >>> padding(1, 2, "~")
        '~1'

        >>> padding(123, 2)
        '123'
    """
    char = char or "0"
    text = str(src)
    return char * max(0, length - len(text)) + text


@dataclass
class DateParts:
    """Calendar fields of one moment, addressable by short keys.

    Fields are plain attributes and may be edited; padded keys are computed on
    every read, so they follow those edits.

    Attributes:
        year: Full year (y)
        month: Month, 1-12 (m, padded mm)
        date: Day of month (d, padded dd)
        day: Day of week, Sunday = 0 (D)
        hour: Hour (H, padded HH)
        minute: Minute (M, padded MM)
        second: Second (S, padded SS)
        millisecond: Millisecond (T, padded to 3 digits as TT)

    Examples:
        >>> parts = DateParts.from_datetime(datetime(2018, 1, 1, 1, 1, 1, 1000))
        >>> parts["y"], parts["mm"], parts["TT"]
        (2018, '01', '001')
        >>> parts.format("%y-%mm-%dd %HH:%MM:%SS.%TT")
        '2018-01-01 01:01:01.001'
    """

    year: int
    month: int
    date: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    SHORT_KEYS: ClassVar[dict[str, str]] = {
        "y": "year",
        "m": "month",
        "d": "date",
        "D": "day",
        "H": "hour",
        "M": "minute",
        "S": "second",
        "T": "millisecond",
    }
    PADDED_KEYS: ClassVar[dict[str, tuple[str, int]]] = {
        "mm": ("month", 2),
        "dd": ("date", 2),
        "HH": ("hour", 2),
        "MM": ("minute", 2),
        "SS": ("second", 2),
        "TT": ("millisecond", 3),
    }

    @classmethod
    def from_datetime(cls, moment: datetime) -> DateParts:
        return cls(
            year=moment.year,
            month=moment.month,
            date=moment.day,
            day=moment.isoweekday() % 7,
            hour=moment.hour,
            minute=moment.minute,
            second=moment.second,
            millisecond=moment.microsecond // 1000,
        )

    def __getitem__(self, key: str) -> int | str:
        if key in self.SHORT_KEYS:
            return getattr(self, self.SHORT_KEYS[key])
        if key in self.PADDED_KEYS:
            name, width = self.PADDED_KEYS[key]
            return padding(getattr(self, name), width)
        raise KeyError(key)

    def as_dict(self) -> dict[str, int | str]:
        """Return every short and padded key with its current value."""
        return {key: self[key] for key in (*self.SHORT_KEYS, *self.PADDED_KEYS)}

    def format(self, pattern: str) -> str:
        """Replace %-prefixed keys in pattern with field values.

        Every run of `%` in front of a key is halved. An odd run substitutes the
        value, an even run keeps the key text, so `%%` escapes a literal `%`.

        Examples:
            >>> parts = DateParts(2018, 1, 1, 1, 1, 1, 1, 1)
            >>> parts.format("%y-%m-%d")
            '2018-1-1'

            >>> parts.format("%%%y-%%m")
            '%2018-%m'
        """

        def replace(match: re.Match[str]) -> str:
            run, key = match.group(1), match.group(2)
            text = str(self[key]) if len(run) % 2 else key
            return "%" * (len(run) // 2) + text

        return _FORMAT_TOKEN.sub(replace, pattern)


def read_date(value: DateLike, pattern: str | None = None, *, tz: str | None = None) -> DateParts | str:
    """
    Read a date into named parts, or format it directly.

    Args:
        value: datetime/date object, ISO 8601 string or Unix timestamp in seconds
        pattern: Optional format pattern, see DateParts.format
        tz: Timezone for timestamps (default: local timezone)

    Returns:
        Formatted string when pattern is given, otherwise DateParts

    Examples:
        >>> read_date(datetime(2018, 1, 1, 1, 1, 1, 1000), "%y-%m-%d %H:%M:%S.%T")
        '2018-1-1 1:1:1.1'

        >>> read_date("2018-01-01T01:01:01.001", "%y-%mm-%dd %HH:%MM:%SS.%TT")
        '2018-01-01 01:01:01.001'

        >>> read_date(date(2024, 3, 16)).day  # Saturday
        6
    """
    parts = DateParts.from_datetime(to_datetime(value, tz=tz))
    if pattern:
        return parts.format(pattern)
    return parts
