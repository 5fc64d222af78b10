"""
Shared pytest fixtures for layerconf tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import json as _json
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest
import yaml as _yaml

# Environment keys that should be cleared for isolated tests
ENV_KEYS_TO_CLEAR = [
    "LAYERCONF_DATE_FORMAT",
    "LAYERCONF_DATETIME_FORMAT",
]


@_pytest.fixture(autouse=True)
def isolated_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Keep the developer's LAYERCONF_* variables out of every test."""
    for key in ENV_KEYS_TO_CLEAR:
        monkeypatch.delenv(key, raising=False)


@_pytest.fixture
def write_config(
    tmp_path: _pathlib.Path,
) -> _typing.Callable[[str, _typing.Any], _pathlib.Path]:
    """
    Write a document to a file under tmp_path.

    The format follows the suffix of the file name; strings are written
    verbatim so tests can produce malformed files.
    """

    def _write(name: str, data: _typing.Any) -> _pathlib.Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        elif path.suffix == ".json":
            path.write_text(_json.dumps(data), encoding="utf-8")
        else:
            path.write_text(_yaml.safe_dump(data), encoding="utf-8")
        return path

    return _write


@_pytest.fixture
def sample_document() -> dict[str, _typing.Any]:
    """A document exercising every node kind."""
    return {
        "server": {
            "host": "example.org",
            "port": "8080",
            "timeout": 2.5,
            "debug": "yes",
            "workers": 0,
            "verbose": False,
            "name": "",
        },
        "colors": ["red", "green", "blue"],
        "layers": [{"name": "base"}, {"name": "top"}],
        "season": {"start": "2021-01-22", "opens": "2021-01-22 09:30"},
        "nothing": None,
    }
