"""
Library settings using pydantic-settings.

Loads from:
1. Constructor arguments (highest precedence)
2. Environment variables with LAYERCONF_ prefix

  LAYERCONF_DATE_FORMAT=d.m.Y
  LAYERCONF_DATETIME_FORMAT="d.m.Y H:i"
"""

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import layerconf.dates as dates


class StoreSettings(_pydantic_settings.BaseSettings):
    """
    Defaults applied to every store built by the loaders.

    Formats use the field letters documented in `layerconf.dates`.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="LAYERCONF_",
        extra="ignore",
    )

    date_format: str = _pydantic.Field(
        default=dates.DEFAULT_DATE_FORMAT,
        description="Format for get_date()",
    )

    datetime_format: str = _pydantic.Field(
        default=dates.DEFAULT_DATETIME_FORMAT,
        description="Format for get_datetime()",
    )
