import logging

import pytest

from jobs.config import (
    DEFAULT_BASE_URL,
    SOURCES,
    get_source_by_key,
    iter_sources,
    load_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "DATA_GOV_IN_BASE_URL",
        "DATA_GOV_IN_API_KEY",
        "SOURCE_TIMEOUT_SECONDS",
        "SOURCE_RETRY_ATTEMPTS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_three_independent_sources():
    assert [source.key for source in SOURCES] == [
        "survey_preferences",
        "platform_usage",
        "school_infrastructure",
    ]
    assert len({source.resource_id for source in SOURCES}) == 3


def test_source_lookup():
    assert get_source_by_key("platform_usage").resource_id == "3b01bcb8-0b14-4abf-b6f2-c1bfd384ba69"
    assert get_source_by_key("unknown") is None
    assert [s.key for s in iter_sources(["school_infrastructure", "nope"])] == [
        "school_infrastructure"
    ]


def test_defaults_warn_about_missing_api_key(caplog):
    with caplog.at_level(logging.WARNING, logger="jobs.config"):
        settings = load_settings()

    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.api_key is None
    assert settings.timeout_seconds == 10.0
    assert settings.retry_attempts == 1
    assert "DATA_GOV_IN_API_KEY" in caplog.text


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DATA_GOV_IN_BASE_URL", "https://mirror.example.test/resource/")
    monkeypatch.setenv("DATA_GOV_IN_API_KEY", "secret")
    monkeypatch.setenv("SOURCE_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("SOURCE_RETRY_ATTEMPTS", "3")

    settings = load_settings()

    assert settings.base_url == "https://mirror.example.test/resource"
    assert settings.api_key == "secret"
    assert settings.timeout_seconds == 2.5
    assert settings.retry_attempts == 3


@pytest.mark.parametrize(
    "name, value",
    [
        ("SOURCE_TIMEOUT_SECONDS", "soon"),
        ("SOURCE_TIMEOUT_SECONDS", "0"),
        ("SOURCE_RETRY_ATTEMPTS", "1.5"),
        ("SOURCE_RETRY_ATTEMPTS", "-1"),
    ],
)
def test_invalid_numeric_settings(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        load_settings()
