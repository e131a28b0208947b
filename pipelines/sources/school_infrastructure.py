"""UDISE school infrastructure ingestor."""

from __future__ import annotations

from typing import Mapping

from jobs.config import SCHOOL_INFRASTRUCTURE
from pipelines.model import SchoolInfrastructureRecord
from pipelines.sources.base import SourceClient

SCHOOL_FIELD_DEFAULTS: Mapping[str, tuple[str, int | float]] = {
    "total_schools": ("total_schools", 1_500_000),
    "rural_schools": ("rural_schools", 1_200_000),
    "urban_schools": ("urban_schools", 300_000),
    "career_counseling": ("career_counseling_availability", 35.0),
}


class SchoolInfrastructureClient(SourceClient):
    config = SCHOOL_INFRASTRUCTURE
    record_model = SchoolInfrastructureRecord
    field_defaults = SCHOOL_FIELD_DEFAULTS


__all__ = ["SchoolInfrastructureClient", "SCHOOL_FIELD_DEFAULTS"]
