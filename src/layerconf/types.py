"""Type definitions for configuration documents.

A configuration document is a tree of three kinds of node:

- Scalar: str, int, float, bool, None (plus the date/datetime values that
  YAML produces for unquoted timestamps)
- Sequence: an ordered list of nodes
- Mapping: a dict from key to node

Mappings whose keys are exactly 0..n-1 in insertion order behave like
sequences for merging. Everything else is associative.
"""

from __future__ import annotations

import datetime as _datetime
import typing as _typing

Scalar: _typing.TypeAlias = "str | int | float | bool | _datetime.date | None"

if _typing.TYPE_CHECKING:
    ConfigValue: _typing.TypeAlias = (
        "Scalar | list[ConfigValue] | dict[_typing.Any, ConfigValue]"
    )
else:
    # Runtime-safe fallback (mypy uses TYPE_CHECKING branch)
    ConfigValue: _typing.TypeAlias = object

Sequence: _typing.TypeAlias = "list[ConfigValue]"
Mapping: _typing.TypeAlias = "dict[_typing.Any, ConfigValue]"

# Root of a document is always a mapping
ConfigDocument: _typing.TypeAlias = "dict[_typing.Any, ConfigValue]"


def is_container(value: object) -> bool:
    """Check whether a node is a mapping or a sequence."""
    return isinstance(value, (dict, list))


def is_associative(value: object) -> bool:
    """
    Check whether a container is associative.

    Only a mapping whose keys are exactly the integers 0..n-1, in that
    order, counts as a sequence. Lists and empty containers are never
    associative.

    Args:
        value: Node to check.

    Returns:
        True for a non-empty mapping with any other key layout.
    """
    if not isinstance(value, dict) or not value:
        return False
    for expected, key in enumerate(value):
        # bool is an int subclass but never a sequence index
        if type(key) is not int or key != expected:
            return True
    return False


@_typing.runtime_checkable
class ConfigReader(_typing.Protocol):
    """
    Read surface shared by every configuration store.

    Consumers should depend on this protocol rather than on a concrete
    store so that file-backed and in-memory stores are interchangeable.
    """

    def get_value(self, path: str, default: _typing.Any = None) -> _typing.Any: ...

    def get_string(self, path: str, default: str = "") -> str: ...

    def get_int(self, path: str, default: int = 0) -> int: ...

    def get_float(self, path: str, default: float = 0.0) -> float: ...

    def get_bool(self, path: str, default: bool = False) -> bool: ...

    def get_date(self, path: str, default: int = 0) -> int: ...

    def get_datetime(self, path: str, default: int = 0) -> int: ...

    def get_array(
        self,
        path: str,
        default: _typing.Any = None,
    ) -> _typing.Any: ...

    def get_config(self) -> ConfigDocument: ...
