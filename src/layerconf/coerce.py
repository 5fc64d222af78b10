"""
Loose coercion of configuration values.

Config files are edited by hand, so values arrive as whatever the parser made
of them: ``"8080"``, ``8080`` and ``8080.0`` should all read as the same port.
These helpers convert a raw node to the requested type without raising.
Unparseable numeric text becomes zero; unrecognised boolean text becomes the
caller's default.
"""

import datetime as _datetime
import math as _math
import re as _re
import typing as _typing

import layerconf.types as types

# Accepted spellings (compared case-insensitively)
TRUE_VALUES = frozenset({"true", "on", "yes", "1"})
FALSE_VALUES = frozenset({"false", "off", "no", "none", "0"})

# Leading numeric part of a string: "  12.5e3abc" -> "  12.5e3"
_NUMERIC_PREFIX = _re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_TEXT = _re.compile(r"\s*[+-]?\d+")


def _numeric_prefix(text: str) -> str | None:
    match = _NUMERIC_PREFIX.match(text)
    return match.group(0) if match else None


def to_string(value: _typing.Any, default: str = "") -> str:
    """
    Convert a node to its string form.

    Args:
        value: Raw node.
        default: Returned for mappings and sequences, which have no string form.

    Returns:
        String form of the value.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, str):
        return value
    if isinstance(value, float):
        if _math.isfinite(value) and value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    if isinstance(value, (_datetime.date, _datetime.datetime)):
        return value.isoformat()
    if types.is_container(value):
        return default
    return str(value)


def to_int(value: _typing.Any) -> int:
    """
    Convert a node to int.

    Strings are read up to the first character that cannot continue a
    number, so ``"12px"`` is 12 and ``"1e3"`` is 1000. Text without a
    leading number is 0.
    """
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, float):
        return int(value) if _math.isfinite(value) else 0
    if isinstance(value, str):
        prefix = _numeric_prefix(value)
        if prefix is None:
            return 0
        if _INTEGER_TEXT.fullmatch(prefix):
            return int(prefix)
        number = float(prefix)
        return int(number) if _math.isfinite(number) else 0
    if types.is_container(value):
        return 1 if value else 0
    return 0


def to_float(value: _typing.Any) -> float:
    """Convert a node to float, reading strings like `to_int` does."""
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        prefix = _numeric_prefix(value)
        return float(prefix) if prefix is not None else 0.0
    if types.is_container(value):
        return 1.0 if value else 0.0
    return 0.0


def is_true(text: str) -> bool:
    """Check whether text spells boolean true (true, on, yes, 1)."""
    return text.lower() in TRUE_VALUES


def is_false(text: str) -> bool:
    """Check whether text spells boolean false (false, off, no, none, 0)."""
    return text.lower() in FALSE_VALUES


def bool_from_string(text: str, default: bool = False) -> bool:
    """
    Convert text to bool.

    Args:
        text: Text to interpret.
        default: Returned when text is neither a true nor a false spelling.

    Returns:
        The interpreted value.
    """
    if is_true(text):
        return True
    if is_false(text):
        return False
    return default
