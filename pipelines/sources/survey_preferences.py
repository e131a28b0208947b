"""National Sample Survey (NSS) career preference ingestor."""

from __future__ import annotations

from typing import Mapping

from jobs.config import SURVEY_PREFERENCES
from pipelines.model import SurveyPreferencesRecord
from pipelines.sources.base import SourceClient

# Raw NSS field -> (metric, default share of students, %)
SURVEY_FIELD_DEFAULTS: Mapping[str, tuple[str, float]] = {
    "engineering": ("engineering_preference", 68.0),
    "medicine": ("medicine_preference", 45.0),
    "design": ("design_preference", 12.0),
    "entrepreneurship": ("entrepreneurship_preference", 8.0),
    "arts": ("arts_preference", 5.0),
    "content_creation": ("content_creation_preference", 7.0),
}

# The NSS dataset does not publish awareness splits; these are fixed.
SURVEY_CONSTANTS: Mapping[str, float] = {
    "traditional_career_preference": 78.0,
    "non_traditional_awareness": 22.0,
    "urban_rural_gap": 42.0,
}


class SurveyPreferencesClient(SourceClient):
    config = SURVEY_PREFERENCES
    record_model = SurveyPreferencesRecord
    field_defaults = SURVEY_FIELD_DEFAULTS
    constants = SURVEY_CONSTANTS


__all__ = ["SurveyPreferencesClient", "SURVEY_FIELD_DEFAULTS", "SURVEY_CONSTANTS"]
