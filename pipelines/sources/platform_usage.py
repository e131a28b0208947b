"""National Career Readiness (NCR) platform usage ingestor."""

from __future__ import annotations

from typing import Mapping

from jobs.config import PLATFORM_USAGE
from pipelines.model import PlatformUsageRecord
from pipelines.sources.base import SourceClient

PLATFORM_FIELD_DEFAULTS: Mapping[str, tuple[str, int | float]] = {
    "urban_usage": ("urban_usage", 65.0),
    "rural_usage": ("rural_usage", 28.0),
    "total_users": ("total_users", 1_250_000),
}

# Feedback loop strengths from the causal loop analysis, in [-1, 1].
PLATFORM_CONSTANTS: Mapping[str, float] = {
    "curiosity_awareness_strength": 0.75,
    "visibility_awareness_strength": 0.65,
    "traditional_pressure_strength": -0.60,
}


class PlatformUsageClient(SourceClient):
    config = PLATFORM_USAGE
    record_model = PlatformUsageRecord
    field_defaults = PLATFORM_FIELD_DEFAULTS
    constants = PLATFORM_CONSTANTS


__all__ = ["PlatformUsageClient", "PLATFORM_FIELD_DEFAULTS", "PLATFORM_CONSTANTS"]
