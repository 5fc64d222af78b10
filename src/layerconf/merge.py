"""
Deep merge of configuration documents.

Merge policy:
- both sides containers, at least one associative -> merge recursively
- anything else -> the override replaces the base value

Two sequences are therefore never merged element by element; the override
sequence replaces the base sequence wholesale. A sequence merged with an
associative mapping is keyed by index first, so the result is a mapping.

Example:
    >>> base = {"a": {"c1": "red", "c2": "green"}}
    >>> override = {"a": {"c2": "blue", "c3": "yellow"}}
    >>> merge_documents(base, override)
    {'a': {'c1': 'red', 'c2': 'blue', 'c3': 'yellow'}}

A shallow update would drop ``c1``; a naive recursive merge that collects
colliding scalars would turn ``c2`` into ``["green", "blue"]``.
"""

from __future__ import annotations

import copy as _copy
import typing as _typing

import layerconf.types as types


def _entries(value: _typing.Any) -> dict[_typing.Any, _typing.Any]:
    """Return a container as a new dict, keying sequences by index."""
    # Index keys compare equal to bool keys True/False, so a mapping with bool
    # keys merged against a sequence shares entries at 0 and 1
    if isinstance(value, list):
        return dict(enumerate(value))
    return dict(value)


def merge_documents(
    base: types.Mapping | types.Sequence,
    override: types.Mapping | types.Sequence,
) -> dict[_typing.Any, _typing.Any]:
    """
    Merge ``override`` into ``base``, with ``override`` taking priority.

    Neither input is mutated. Values taken from ``override`` are deep
    copied; untouched subtrees of ``base`` are shared with the result.

    Args:
        base: Lower-priority container.
        override: Higher-priority container.

    Returns:
        New merged mapping.
    """
    result = _entries(base)
    for key, value in _entries(override).items():
        current = result.get(key)
        if (
            current is not None
            and types.is_container(current)
            and types.is_container(value)
            and (types.is_associative(current) or types.is_associative(value))
        ):
            result[key] = merge_documents(current, value)
            continue
        # Inserted, or replaces the base value (scalars, sequences, type mismatch)
        result[key] = _copy.deepcopy(value)
    return result
