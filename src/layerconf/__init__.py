"""
layerconf - layered configuration with typed, defaulted lookups

Read nested YAML/JSON configuration by dotted path, with getters that always
return a value, and deep-merge configuration layers in priority order.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("layerconf")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from layerconf.merge import merge_documents  # noqa: E402
from layerconf.settings import StoreSettings  # noqa: E402
from layerconf.sources import (  # noqa: E402
    ConfigFileError,
    FileConfig,
    JsonConfig,
    YamlConfig,
    load_document,
    load_layered,
)
from layerconf.store import ConfigStore  # noqa: E402
from layerconf.types import ConfigReader, is_associative  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "ConfigFileError",
    "ConfigReader",
    "ConfigStore",
    "FileConfig",
    "JsonConfig",
    "StoreSettings",
    "YamlConfig",
    "is_associative",
    "load_document",
    "load_layered",
    "merge_documents",
]
