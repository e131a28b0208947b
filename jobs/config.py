"""Static configuration for the government data sources and runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Iterable

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.data.gov.in/resource"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_RETRY_ATTEMPTS = 1

BASE_URL_ENV = "DATA_GOV_IN_BASE_URL"
API_KEY_ENV = "DATA_GOV_IN_API_KEY"
TIMEOUT_ENV = "SOURCE_TIMEOUT_SECONDS"
RETRY_ATTEMPTS_ENV = "SOURCE_RETRY_ATTEMPTS"
LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class SourceConfig:
    """Configuration describing one data.gov.in dataset backing the dashboard."""

    key: str
    resource_id: str
    title: str
    description: str


@dataclass(frozen=True)
class Settings:
    """Runtime settings shared by every source client."""

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS
    log_level: str = "INFO"


SURVEY_PREFERENCES = SourceConfig(
    key="survey_preferences",
    resource_id="9ef84268-d583-465a-b399-0a5d0b5ace15",
    title="National Sample Survey (NSS)",
    description="Career preferences reported by students",
)

PLATFORM_USAGE = SourceConfig(
    key="platform_usage",
    resource_id="3b01bcb8-0b14-4abf-b6f2-c1bfd384ba69",
    title="National Career Readiness (NCR)",
    description="Career platform usage split by urban and rural students",
)

SCHOOL_INFRASTRUCTURE = SourceConfig(
    key="school_infrastructure",
    resource_id="5c62f4a0-9e94-4fb1-9008-6aac87d61e8f",
    title="Unified District Information System for Education (UDISE)",
    description="School counts and career counseling availability",
)

SOURCES: tuple[SourceConfig, ...] = (
    SURVEY_PREFERENCES,
    PLATFORM_USAGE,
    SCHOOL_INFRASTRUCTURE,
)


def get_source_by_key(key: str) -> SourceConfig | None:
    for source in SOURCES:
        if source.key == key:
            return source
    return None


def iter_sources(keys: Iterable[str] | None = None) -> Iterable[SourceConfig]:
    if keys is None:
        return SOURCES
    selected = []
    for key in keys:
        source = get_source_by_key(key)
        if source:
            selected.append(source)
    return tuple(selected)


def _parse_positive(name: str, raw: str, cast: type) -> float | int:
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a {cast.__name__}, got {raw!r}.") from exc
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero, got {raw!r}.")
    return value


def load_settings() -> Settings:
    """Resolve runtime settings from the environment (``.env`` is honoured)."""

    api_key = os.getenv(API_KEY_ENV) or None
    if not api_key:
        logger.warning(
            "%s is not set. Requests to data.gov.in will likely be rejected and "
            "the dashboard will fall back to default figures.",
            API_KEY_ENV,
        )

    timeout_seconds = DEFAULT_TIMEOUT_SECONDS
    raw_timeout = os.getenv(TIMEOUT_ENV)
    if raw_timeout:
        timeout_seconds = float(_parse_positive(TIMEOUT_ENV, raw_timeout, float))

    retry_attempts = DEFAULT_RETRY_ATTEMPTS
    raw_attempts = os.getenv(RETRY_ATTEMPTS_ENV)
    if raw_attempts:
        retry_attempts = int(_parse_positive(RETRY_ATTEMPTS_ENV, raw_attempts, int))

    return Settings(
        base_url=os.getenv(BASE_URL_ENV, DEFAULT_BASE_URL).rstrip("/"),
        api_key=api_key,
        timeout_seconds=timeout_seconds,
        retry_attempts=retry_attempts,
        log_level=os.getenv(LOG_LEVEL_ENV, "INFO"),
    )


__all__ = [
    "SourceConfig",
    "Settings",
    "SOURCES",
    "SURVEY_PREFERENCES",
    "PLATFORM_USAGE",
    "SCHOOL_INFRASTRUCTURE",
    "get_source_by_key",
    "iter_sources",
    "load_settings",
]
