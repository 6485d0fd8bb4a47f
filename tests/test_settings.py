"""Unit tests for config.settings."""

from __future__ import annotations

from config import FactorsSettings, HypatiaSettings, LoggingSettings, Settings


def test_hypatia_defaults(monkeypatch):
    for name in ("HYPATIA_HOST", "HYPATIA_ROUTE", "HYPATIA_TIMEOUT", "HYPATIA_DEFAULT_DATA_SOURCE"):
        monkeypatch.delenv(name, raising=False)

    settings = HypatiaSettings()

    assert settings.host == "http://hypatia.api.cnn.com/"
    assert settings.route == "svc/content/v2/search/collection1/"
    assert settings.timeout == 5.0
    assert settings.default_data_source == "cnn"


def test_hypatia_env_overrides(monkeypatch):
    monkeypatch.setenv("HYPATIA_HOST", "http://hypatia.test/")
    monkeypatch.setenv("HYPATIA_TIMEOUT", "20")

    settings = HypatiaSettings()

    assert settings.host == "http://hypatia.test/"
    assert settings.timeout == 20.0


def test_timeout_is_clamped_to_one_second(monkeypatch):
    monkeypatch.setenv("HYPATIA_TIMEOUT", "0")
    assert HypatiaSettings().timeout == 1.0


def test_factors_and_logging_from_env(monkeypatch):
    monkeypatch.setenv("FACTORS_URL", "http://factors.test/factors.json")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_USE_RICH", "false")

    assert FactorsSettings().url == "http://factors.test/factors.json"
    logging_settings = LoggingSettings()
    assert logging_settings.level == "DEBUG"
    assert logging_settings.use_rich is False


def test_load_from_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("HYPATIA_ROUTE", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("HYPATIA_ROUTE=svc/content/v3/\n", encoding="utf-8")

    settings = Settings.load_from_env_file(env_file)

    assert settings.hypatia.route == "svc/content/v3/"
    monkeypatch.delenv("HYPATIA_ROUTE", raising=False)
