from __future__ import annotations

import pytest
from pydantic import ValidationError

from hotel_catalog.config.settings import CATALOG_URL, Settings


def test_settings_defaults_point_at_catalog_endpoint(tmp_path):
    settings = Settings(
        _env_file=None,
        log_dir=tmp_path / "logs",
        download_dir=tmp_path / "downloads",
    )

    assert settings.catalog_url == CATALOG_URL
    assert settings.locale == "en"
    assert settings.default_currency == "AED"
    settings.ensure_directories()
    assert settings.log_dir.exists()
    assert settings.download_dir.exists()


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOTEL_CATALOG_LOCALE", "ar")
    monkeypatch.setenv("HOTEL_CATALOG_REQUEST_TIMEOUT_S", "2.5")
    monkeypatch.setenv("HOTEL_CATALOG_CATALOG_URL", "https://mirror.example.test/hotels.json")

    settings = Settings(_env_file=None)

    assert settings.locale == "ar"
    assert settings.request_timeout_s == 2.5
    assert settings.catalog_url == "https://mirror.example.test/hotels.json"


def test_settings_expand_user_paths():
    settings = Settings(_env_file=None, log_dir="~/hotel-logs")
    assert "~" not in str(settings.log_dir)


@pytest.mark.parametrize("overrides", [{"request_timeout_s": 0}, {"locale": "  "}, {"default_currency": ""}])
def test_settings_reject_invalid_values(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)
