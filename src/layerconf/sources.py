"""
File-backed configuration stores.

This module provides:

- load_document: parse a YAML or JSON file into a document
- FileConfig / YamlConfig / JsonConfig: stores loaded from a single file
- load_layered: merge several files into one store

Layers are merged in the order given, lowest priority first:

    store = load_layered(
        "/etc/myapp/config.yaml",           # built-in defaults
        "~/.config/myapp/config.yaml",      # user overrides
        ".myapp/config.yaml",               # project overrides (highest)
    )

Missing layer files are skipped. Unreadable or malformed files raise
ConfigFileError; once loaded, store getters never raise.
"""

import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import layerconf.settings as settings_module
import layerconf.store as store

_logger = _logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})
JSON_SUFFIXES = frozenset({".json"})

PathLike: _typing.TypeAlias = "str | _os.PathLike[str]"


class ConfigFileError(Exception):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


def _parse(path: _pathlib.Path, content: str) -> _typing.Any:
    """Parse file content according to the file suffix."""
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        try:
            return _yaml.safe_load(content)
        except _yaml.YAMLError as e:
            raise ConfigFileError(path, f"invalid YAML: {e}") from e
    if suffix in JSON_SUFFIXES:
        if not content.strip():
            return None
        try:
            return _json.loads(content)
        except _json.JSONDecodeError as e:
            raise ConfigFileError(path, f"invalid JSON: {e}") from e
    raise ConfigFileError(path, f"unsupported file type {path.suffix!r}")


def load_document(path: PathLike) -> dict[_typing.Any, _typing.Any]:
    """
    Load a YAML or JSON file and return its contents as a dict.

    Args:
        path: File to load. The format is chosen by suffix
            (.yaml/.yml or .json).

    Returns:
        Parsed document; an empty file gives an empty dict.

    Raises:
        ConfigFileError: If the file cannot be read, is malformed, has an
            unsupported suffix, or its top level is not a mapping.
    """
    path = _pathlib.Path(path).expanduser()

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise ConfigFileError(path, f"cannot read file: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigFileError(path, f"invalid UTF-8: {e}") from e

    parsed = _parse(path, content)
    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise ConfigFileError(
            path,
            f"config must be a mapping (dict), got {type_name}",
        )

    _logger.debug("Loaded config file %s", path)
    return parsed


class FileConfig(store.ConfigStore):
    """
    Store loaded from a single YAML or JSON file.

    A missing file leaves the store unset, so every getter returns its
    default, unless ``required`` is set.

    Args:
        path: File to load.
        settings: Settings supplying the date formats. Read from the
            environment when omitted.
        required: Raise ConfigFileError if the file does not exist.

    Raises:
        ConfigFileError: If the file exists but cannot be loaded, or is
            missing and required, or its suffix is not accepted.
    """

    suffixes: _typing.ClassVar[frozenset[str]] = YAML_SUFFIXES | JSON_SUFFIXES

    def __init__(
        self,
        path: PathLike,
        *,
        settings: settings_module.StoreSettings | None = None,
        required: bool = False,
    ) -> None:
        if settings is None:
            settings = settings_module.StoreSettings()
        super().__init__(None, settings=settings)
        self.path = _pathlib.Path(path).expanduser()

        if self.path.suffix.lower() not in self.suffixes:
            raise ConfigFileError(
                self.path,
                f"unsupported file type {self.path.suffix!r} for {type(self).__name__}",
            )

        if not self.path.exists():
            if required:
                raise ConfigFileError(self.path, "file not found")
            _logger.debug("Config file %s not found, using defaults", self.path)
            return

        self.merge_with(load_document(self.path))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"


class YamlConfig(FileConfig):
    """Store loaded from a YAML file."""

    suffixes = YAML_SUFFIXES


class JsonConfig(FileConfig):
    """Store loaded from a JSON file."""

    suffixes = JSON_SUFFIXES


def load_layered(
    *paths: PathLike,
    settings: settings_module.StoreSettings | None = None,
) -> store.ConfigStore:
    """
    Merge configuration files into one store.

    Args:
        *paths: Files in ascending priority (last wins). Missing files are
            skipped.
        settings: Settings supplying the date formats. Read from the
            environment when omitted.

    Returns:
        Store holding the merged document; unset if no file existed.

    Raises:
        ConfigFileError: If an existing file cannot be loaded.
    """
    if settings is None:
        settings = settings_module.StoreSettings()
    result = store.ConfigStore(None, settings=settings)
    for path in paths:
        layer = _pathlib.Path(path).expanduser()
        if not layer.exists():
            _logger.debug("Skipping missing config layer %s", layer)
            continue
        result.merge_with(load_document(layer))
    return result
