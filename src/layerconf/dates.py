"""
Date parsing for configuration values.

Date formats are written with single-letter field codes, the notation config
authors already know from ``date()`` style formatting:

    Y  4-digit year          y  2-digit year
    m  month, 2 digits       n  month, 1-2 digits
    M  short month name      F  full month name
    d  day, 2 digits         j  day, 1-2 digits
    D  short weekday name    l  full weekday name
    H  hour 00-23            G  hour 0-23
    h  hour 01-12            g  hour 1-12
    i  minutes               s  seconds
    u  microseconds          v  milliseconds
    a  am/pm                 A  AM/PM
    O  offset +0200          P  offset +02:00

The placeholders ``#``, ``?``, ``*`` and ``+`` have no strptime equivalent.
Like any other letter not listed above, they make the format unusable;
escape them to match them literally.

``\\`` escapes the next character. ``!`` and ``|`` reset every field that the
format does not parse to the Unix epoch. Without them, missing date fields
take today's date and missing time fields take the current time (or zero if
the format parses any time field at all).

Naive results are interpreted in local time.
"""

import dataclasses as _dataclasses
import datetime as _datetime
import functools as _functools
import logging as _logging

_logger = _logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = "Y-m-d"
DEFAULT_DATETIME_FORMAT = "Y-m-d H:i"

# Format letter -> (strptime directive, field it sets)
_DIRECTIVES: dict[str, tuple[str, str | None]] = {
    "Y": ("%Y", "year"),
    "y": ("%y", "year"),
    "m": ("%m", "month"),
    "n": ("%m", "month"),
    "M": ("%b", "month"),
    "F": ("%B", "month"),
    "d": ("%d", "day"),
    "j": ("%d", "day"),
    "D": ("%a", None),
    "l": ("%A", None),
    "H": ("%H", "hour"),
    "G": ("%H", "hour"),
    "h": ("%I", "hour"),
    "g": ("%I", "hour"),
    "i": ("%M", "minute"),
    "s": ("%S", "second"),
    "u": ("%f", "microsecond"),
    "v": ("%f", "microsecond"),
    "a": ("%p", None),
    "A": ("%p", None),
    "O": ("%z", None),
    "P": ("%z", None),
}

_TIME_FIELDS = frozenset({"hour", "minute", "second", "microsecond"})

# Wildcard and separator placeholders with no strptime equivalent
_UNSUPPORTED_SYMBOLS = frozenset("#?*+")

# Leap year used while parsing formats without a year field
_PARSE_YEAR = 2000


@_dataclasses.dataclass(frozen=True)
class DateFormat:
    """A date format translated to a strptime pattern."""

    source: str
    pattern: str
    fields: frozenset[str]
    reset: bool = False

    @property
    def has_time(self) -> bool:
        """Whether the format parses any time-of-day field."""
        return bool(self.fields & _TIME_FIELDS)


@_functools.lru_cache(maxsize=64)
def translate_format(fmt: str) -> DateFormat | None:
    """
    Translate a date format to a strptime pattern.

    Args:
        fmt: Format using the field letters listed in the module docstring.

    Returns:
        The translated format, or None if it uses an unsupported letter or
        placeholder symbol.
    """
    parts: list[str] = []
    fields: set[str] = set()
    reset = False
    escaped = False

    for char in fmt:
        if escaped:
            parts.append("%%" if char == "%" else char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in ("!", "|"):
            reset = True
        elif char in _DIRECTIVES:
            directive, field = _DIRECTIVES[char]
            parts.append(directive)
            if field is not None:
                fields.add(field)
        elif char in _UNSUPPORTED_SYMBOLS:
            _logger.debug("Unsupported symbol %r in date format %r", char, fmt)
            return None
        elif char.isascii() and char.isalpha():
            _logger.debug("Unsupported letter %r in date format %r", char, fmt)
            return None
        else:
            parts.append("%%" if char == "%" else char)

    return DateFormat(
        source=fmt,
        pattern="".join(parts),
        fields=frozenset(fields),
        reset=reset,
    )


def _complete(
    parsed: _datetime.datetime,
    date_format: DateFormat,
    now: _datetime.datetime,
) -> _datetime.datetime:
    """Fill in the fields the format did not parse."""
    fields = date_format.fields
    if "year" in fields:
        year = parsed.year
    else:
        year = 1970 if date_format.reset else now.year

    if date_format.reset:
        # strptime already defaults month/day to 1 and time to zero
        month, day = parsed.month, parsed.day
    else:
        month = parsed.month if "month" in fields else now.month
        day = parsed.day if "day" in fields else now.day
    # Overflowing days roll into the next month (e.g. 31 in a 30-day month)
    date = _datetime.date(year, month, 1) + _datetime.timedelta(days=day - 1)

    if date_format.reset or date_format.has_time:
        time = parsed.timetz()
    else:
        time = now.time().replace(tzinfo=parsed.tzinfo)
    return _datetime.datetime.combine(date, time)


def to_timestamp(value: _datetime.date, *, midnight: bool) -> int | None:
    """
    Convert a date or datetime to a Unix timestamp.

    Args:
        value: Date (taken as local midnight) or datetime.
        midnight: Drop the time of day.

    Returns:
        Timestamp in seconds, or None if it cannot be represented.
    """
    if isinstance(value, _datetime.datetime):
        moment = value
        if midnight:
            moment = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    else:
        moment = _datetime.datetime.combine(value, _datetime.time())
    try:
        return int(moment.timestamp())
    except (OverflowError, OSError, ValueError):
        return None


def parse_timestamp(
    text: str,
    fmt: str,
    *,
    midnight: bool,
    now: _datetime.datetime | None = None,
) -> int | None:
    """
    Parse text with a date format and return a Unix timestamp.

    Args:
        text: Text to parse. The whole string must match the format.
        fmt: Date format (see module docstring).
        midnight: Drop the time of day from the result.
        now: Reference time for fields the format does not parse.

    Returns:
        Timestamp in seconds, or None if the text does not match the format,
        names an invalid date, or the format is unsupported.
    """
    date_format = translate_format(fmt)
    if date_format is None:
        return None

    pattern, subject = date_format.pattern, text
    if "year" not in date_format.fields:
        # Parse against a leap year so 29 February is accepted; the real
        # year is filled in afterwards
        pattern, subject = f"{pattern} %Y", f"{text} {_PARSE_YEAR}"

    try:
        parsed = _datetime.datetime.strptime(subject, pattern)
    except ValueError:
        _logger.debug("Date %r does not match format %r", text, fmt)
        return None

    if now is None:
        now = _datetime.datetime.now(parsed.tzinfo)
    try:
        complete = _complete(parsed, date_format, now)
    except (OverflowError, ValueError):
        return None
    return to_timestamp(complete, midnight=midnight)
