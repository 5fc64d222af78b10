"""Tests for StoreSettings."""

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings
import pytest as _pytest

import layerconf.dates as dates
import layerconf.settings as settings


class TestStoreSettings:
    def test_is_pydantic_settings(self) -> None:
        assert issubclass(settings.StoreSettings, _pydantic_settings.BaseSettings)

    def test_defaults(self) -> None:
        store_settings = settings.StoreSettings()

        assert store_settings.date_format == dates.DEFAULT_DATE_FORMAT == "Y-m-d"
        assert store_settings.datetime_format == dates.DEFAULT_DATETIME_FORMAT == "Y-m-d H:i"

    def test_env_vars(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LAYERCONF_DATE_FORMAT", "d.m.Y")
        monkeypatch.setenv("LAYERCONF_DATETIME_FORMAT", "d.m.Y H:i")

        store_settings = settings.StoreSettings()

        assert store_settings.date_format == "d.m.Y"
        assert store_settings.datetime_format == "d.m.Y H:i"

    def test_constructor_overrides_env(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LAYERCONF_DATE_FORMAT", "d.m.Y")

        assert settings.StoreSettings(date_format="Y/m/d").date_format == "Y/m/d"

    def test_unrelated_env_ignored(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LAYERCONF_UNKNOWN", "x")

        assert not hasattr(settings.StoreSettings(), "unknown")

    def test_wrong_type_rejected(self) -> None:
        with _pytest.raises(_pydantic.ValidationError):
            settings.StoreSettings(date_format=["Y"])  # type: ignore[arg-type]
