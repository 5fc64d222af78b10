"""
ConfigStore: typed, dotted-path access to a nested configuration document.

Every getter takes a default and returns it when the path is missing or the
value cannot be read as the requested type. Getters never raise for missing
or malformed data, so call sites can stay one-liners:

    >>> store = ConfigStore({"server": {"port": "8080", "debug": "yes"}})
    >>> store.get_int("server.port", 80)
    8080
    >>> store.get_bool("server.debug")
    True
    >>> store.get_string("server.host", "localhost")
    'localhost'

Stores are combined with `merge_with`; the merged-in document always wins, so
merge layers in ascending priority:

    >>> defaults = ConfigStore({"a": {"c1": "red", "c2": "green"}})
    >>> defaults.merge_with(ConfigStore({"a": {"c2": "blue", "c3": "yellow"}}))
    >>> defaults.get_config()
    {'a': {'c1': 'red', 'c2': 'blue', 'c3': 'yellow'}}

Thread safety: `merge_with` and the format setters mutate the store. Treat a
store as read-only after merging, or synchronise externally.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import datetime as _datetime
import logging as _logging
import re as _re
import typing as _typing

import layerconf.coerce as coerce
import layerconf.dates as dates
import layerconf.merge as merge
import layerconf.types as types

if _typing.TYPE_CHECKING:
    import layerconf.settings as settings_module

_logger = _logging.getLogger(__name__)

PATH_SEPARATOR = "."

# Canonical list index / integer key: "0", "7", "12" (not "07" or "-1")
_INDEX = _re.compile(r"0|[1-9][0-9]*")


def split_path(path: str) -> list[str]:
    """Split a dotted path into its segments."""
    return path.split(PATH_SEPARATOR)


def _lookup(container: _typing.Any, segment: str) -> _typing.Any:
    """Look up one path segment in a mapping or sequence; None if missing."""
    is_index = _INDEX.fullmatch(segment) is not None
    if isinstance(container, list):
        if not is_index:
            return None
        index = int(segment)
        return container[index] if index < len(container) else None
    if segment in container:
        return container[segment]
    if is_index:
        # YAML and JSON-with-int-keys documents store numeric keys as int;
        # bool keys hash like 0/1 but are not indices
        index = int(segment)
        for key, value in container.items():
            if type(key) is int and key == index:
                return value
    return None


class ConfigStore:
    """
    Nested configuration document with typed getters and deep merge.

    The store keeps a private deep copy of its document. Containers returned
    by the getters are copies too, so callers may modify them freely.

    Args:
        document: Parsed configuration, or None for an unset store. An unset
            store returns the default from every getter.
        settings: Optional settings supplying the date formats.
    """

    def __init__(
        self,
        document: _abc.Mapping[_typing.Any, _typing.Any] | None = None,
        *,
        settings: settings_module.StoreSettings | None = None,
    ) -> None:
        self._document: types.ConfigDocument | None = (
            _copy.deepcopy(dict(document)) if document is not None else None
        )
        self._date_format = dates.DEFAULT_DATE_FORMAT
        self._datetime_format = dates.DEFAULT_DATETIME_FORMAT
        if settings is not None:
            self._date_format = settings.date_format
            self._datetime_format = settings.datetime_format

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._document!r})"

    @property
    def is_loaded(self) -> bool:
        """Whether the store holds a document."""
        return self._document is not None

    @property
    def date_format(self) -> str:
        return self._date_format

    @property
    def datetime_format(self) -> str:
        return self._datetime_format

    def set_date_format(self, fmt: str) -> None:
        """
        Set the format used by `get_date`.

        Args:
            fmt: Date format, see `layerconf.dates`. Not validated here; an
                unusable format makes every non-numeric date read as default.
        """
        self._date_format = fmt

    def set_datetime_format(self, fmt: str) -> None:
        """Set the format used by `get_datetime`."""
        self._datetime_format = fmt

    # =========================================================================
    # Getters
    # =========================================================================

    def get_value(self, path: str, default: _typing.Any = None) -> _typing.Any:
        """
        Get the value at a dotted path.

        A stored None counts as missing. Falsy values (False, 0, "") are
        returned as stored.

        Args:
            path: Dotted path such as ``"database.pool.size"``.
            default: Returned if the store is unset, any segment is missing,
                or a segment would have to descend into a scalar.

        Returns:
            The leaf value, which may be a mapping or a sequence.
        """
        if self._document is None:
            return default

        current: _typing.Any = self._document
        for segment in split_path(path):
            if not types.is_container(current):
                return default
            current = _lookup(current, segment)
            if current is None:
                return default

        if types.is_container(current):
            return _copy.deepcopy(current)
        return current

    def get_string(self, path: str, default: str = "") -> str:
        """Get the value at path as a string."""
        return coerce.to_string(self.get_value(path, default), default)

    def get_int(self, path: str, default: int = 0) -> int:
        """
        Get the value at path as an int.

        Text without a leading number is 0, not the default; only a missing
        path yields the default.
        """
        return coerce.to_int(self.get_value(path, default))

    def get_float(self, path: str, default: float = 0.0) -> float:
        """Get the value at path as a float (non-numeric text is 0.0)."""
        return coerce.to_float(self.get_value(path, default))

    def get_bool(self, path: str, default: bool = False) -> bool:
        """
        Get the value at path as a bool.

        Accepted (case-insensitive): true, on, yes, 1 and false, off, no,
        none, 0. Anything else yields the default.
        """
        value = self.get_value(path, default)
        if isinstance(value, bool):
            return value
        if types.is_container(value):
            return default
        return coerce.bool_from_string(coerce.to_string(value), default)

    def get_date(self, path: str, default: int = 0) -> int:
        """
        Get the date at path as a Unix timestamp at local midnight.

        All-digit values are taken as timestamps already. Other text is
        parsed with `date_format`.

        Args:
            path: Dotted path.
            default: Timestamp returned if the path is missing or unparsable.

        Returns:
            Timestamp in seconds.
        """
        return self._timestamp(path, default, self._date_format, midnight=True)

    def get_datetime(self, path: str, default: int = 0) -> int:
        """Get the date and time at path as a Unix timestamp (`datetime_format`)."""
        return self._timestamp(path, default, self._datetime_format, midnight=False)

    def _timestamp(
        self,
        path: str,
        default: int,
        fmt: str,
        *,
        midnight: bool,
    ) -> int:
        value = self.get_value(path, default)
        if isinstance(value, _datetime.date):
            timestamp = dates.to_timestamp(value, midnight=midnight)
            return default if timestamp is None else timestamp

        text = coerce.to_string(value)
        if text.isascii() and text.isdigit():
            return int(text)
        timestamp = dates.parse_timestamp(text, fmt, midnight=midnight)
        return default if timestamp is None else timestamp

    def get_array(self, path: str, default: _typing.Any = None) -> _typing.Any:
        """
        Get the mapping or sequence at path.

        Args:
            path: Dotted path.
            default: Returned if the value is missing or a scalar. None means
                an empty list.

        Returns:
            A copy of the mapping or sequence, or the default.
        """
        if default is None:
            default = []
        value = self.get_value(path, default)
        return value if types.is_container(value) else default

    def get_config(self) -> types.ConfigDocument:
        """Return a copy of the whole document (empty if unset)."""
        if self._document is None:
            return {}
        return _copy.deepcopy(self._document)

    # =========================================================================
    # Merging
    # =========================================================================

    def merge_with(
        self,
        other: types.ConfigReader | _abc.Mapping[_typing.Any, _typing.Any],
    ) -> None:
        """
        Merge another configuration into this one.

        Values from ``other`` always take priority: a key present in both is
        replaced by the other's value, except that nested mappings are merged
        key by key. Sequences are replaced whole. Merge several layers in
        ascending priority order.

        Args:
            other: Another store, or a plain mapping.
        """
        if isinstance(other, _abc.Mapping):
            incoming = dict(other)
        else:
            incoming = other.get_config()

        if self._document is None:
            self._document = _copy.deepcopy(incoming)
            _logger.debug("Adopted document with %d top-level keys", len(incoming))
            return

        self._document = merge.merge_documents(self._document, incoming)
        _logger.debug("Merged %d top-level keys", len(incoming))
