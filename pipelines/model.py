"""Canonical data model for the dashboard: raw source records, the view model
and the outcome types passed between source clients, reconciler and store."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Annotated, Any, ClassVar, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

_SENTINEL_STRINGS = {"", "N/A", "NA", "null", "Null", "-", "."}


def coerce_numeric(value: Any) -> float | None:
    """Return ``value`` as a finite float, or ``None`` when it is not numeric."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if value in _SENTINEL_STRINGS:
            return None
    elif not isinstance(value, (int, float)):
        return None
    try:
        numeric = float(value)
    except (OverflowError, ValueError):
        return None
    if math.isnan(numeric) or math.isinf(numeric):
        return None
    return numeric


class SourceRecord(BaseModel):
    """First record of a data.gov.in response; every field may be absent.

    Values that are not numeric, or fall outside the field's range, are read
    as absent so that only the offending field falls back to its default.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    percent_fields: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_field(cls, value: Any, info: ValidationInfo) -> float | None:
        numeric = coerce_numeric(value)
        if numeric is None or numeric < 0:
            return None
        if info.field_name in cls.percent_fields and numeric > 100:
            return None
        return numeric


class SurveyPreferencesRecord(SourceRecord):
    percent_fields: ClassVar[frozenset[str]] = frozenset(
        {"engineering", "medicine", "design", "entrepreneurship", "arts", "content_creation"}
    )

    engineering: Optional[float] = None
    medicine: Optional[float] = None
    design: Optional[float] = None
    entrepreneurship: Optional[float] = None
    arts: Optional[float] = None
    content_creation: Optional[float] = None


class PlatformUsageRecord(SourceRecord):
    percent_fields: ClassVar[frozenset[str]] = frozenset({"urban_usage", "rural_usage"})

    urban_usage: Optional[float] = None
    rural_usage: Optional[float] = None
    total_users: Optional[float] = None


class SchoolInfrastructureRecord(SourceRecord):
    percent_fields: ClassVar[frozenset[str]] = frozenset({"career_counseling"})

    total_schools: Optional[float] = None
    rural_schools: Optional[float] = None
    urban_schools: Optional[float] = None
    career_counseling: Optional[float] = None


Percentage = Annotated[float, Field(ge=0, le=100)]
Count = Annotated[int, Field(ge=0)]
Strength = Annotated[float, Field(ge=-1, le=1)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class AwarenessStats(_CamelModel):
    traditional: Percentage
    non_traditional: Percentage
    urban_rural_gap: Percentage


class PlatformUsage(_CamelModel):
    urban: Percentage
    rural: Percentage
    total_users: Count


class CareerPreference(_CamelModel):
    name: str
    value: Percentage


class FeedbackLoop(_CamelModel):
    name: str
    strength: Strength
    type: Literal["Reinforcing", "Balancing"]


class EducationStats(_CamelModel):
    """School counts; rural and urban are not reconciled against the total."""

    total_schools: Count
    rural_schools: Count
    urban_schools: Count
    career_counseling_availability: Percentage


class ViewModel(_CamelModel):
    """Fully populated, render-ready dashboard data."""

    awareness_stats: AwarenessStats
    platform_usage: PlatformUsage
    career_preferences: tuple[CareerPreference, ...] = Field(min_length=6, max_length=6)
    feedback_loops: tuple[FeedbackLoop, ...] = Field(min_length=3, max_length=3)
    education_stats: EducationStats


@dataclass(frozen=True)
class Success:
    """A source answered with a usable record; ``metrics`` is fully populated."""

    source: str
    metrics: Mapping[str, Any]


@dataclass(frozen=True)
class Failure:
    """A source could not be used; ``metrics`` holds its default table."""

    source: str
    reason: str
    metrics: Mapping[str, Any] = field(default_factory=dict)


FetchOutcome = Union[Success, Failure]


@dataclass(frozen=True)
class LoadResult:
    view_model: ViewModel
    warning_message: str | None = None


class DashboardSnapshot(_CamelModel):
    """What the presentation layer reads: ``{viewModel, isLoading, warningMessage}``."""

    view_model: Optional[ViewModel] = None
    is_loading: bool = False
    warning_message: Optional[str] = None


__all__ = [
    "coerce_numeric",
    "SourceRecord",
    "SurveyPreferencesRecord",
    "PlatformUsageRecord",
    "SchoolInfrastructureRecord",
    "AwarenessStats",
    "PlatformUsage",
    "CareerPreference",
    "FeedbackLoop",
    "EducationStats",
    "ViewModel",
    "Success",
    "Failure",
    "FetchOutcome",
    "LoadResult",
    "DashboardSnapshot",
]
