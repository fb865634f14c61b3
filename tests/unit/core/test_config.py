"""Tests for Settings loading."""

import pytest

from crudpanel.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("CRUDPANEL_PASSWORD_BCRYPT_ROUNDS", raising=False)
    monkeypatch.delenv("CRUDPANEL_LOCALE", raising=False)

    settings = Settings(_env_file=None)

    assert settings.locale == "en"
    assert settings.translations_dir is None
    assert settings.password_bcrypt_rounds == 12


def test_environment_overrides(monkeypatch, reset_caches):
    monkeypatch.setenv("CRUDPANEL_LOCALE", "fa")

    assert get_settings().locale == "fa"


def test_rounds_are_bounded(monkeypatch):
    monkeypatch.setenv("CRUDPANEL_PASSWORD_BCRYPT_ROUNDS", "2")

    with pytest.raises(ValueError):
        Settings(_env_file=None)
