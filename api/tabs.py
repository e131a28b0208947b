"""Headline figures for the four dashboard tabs, derived from the view model.

Only the arithmetic the tabs display lives here; layout and charts belong to
the front end.
"""

from __future__ import annotations

import enum
import math
from typing import Any, Callable

from pipelines.model import ViewModel

# (year, awareness/counseling uplift, urban-rural gap reduction)
PROJECTION_STEPS: tuple[tuple[int, int, int], ...] = (
    (2023, 0, 0),
    (2024, 5, 2),
    (2025, 12, 5),
    (2026, 20, 8),
    (2027, 28, 12),
    (2028, 35, 15),
    (2029, 42, 18),
    (2030, 50, 22),
)


class Tab(str, enum.Enum):
    PROBLEM = "problem"
    ANALYSIS = "analysis"
    SOLUTIONS = "solutions"
    ROADMAP = "roadmap"


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_count(value: float) -> str:
    return f"{round_half_up(value):,}"


def share(part: float, total: float) -> int | None:
    if total <= 0:
        return None
    return round_half_up(part / total * 100)


def problem_summary(model: ViewModel) -> dict[str, Any]:
    education = model.education_stats
    awareness = model.awareness_stats
    return {
        "traditionalPreference": awareness.traditional,
        "nonTraditionalAwareness": awareness.non_traditional,
        "urbanRuralGap": awareness.urban_rural_gap,
        "totalSchoolsLabel": f"{round_half_up(education.total_schools / 1000)}K",
        "ruralSchoolShare": share(education.rural_schools, education.total_schools),
        "urbanSchoolShare": share(education.urban_schools, education.total_schools),
        "careerCounselingAvailability": education.career_counseling_availability,
        "totalUsersLabel": format_count(model.platform_usage.total_users),
    }


def analysis_summary(model: ViewModel) -> dict[str, Any]:
    loops = model.feedback_loops
    preference_total = sum(item.value for item in model.career_preferences)
    reinforcing = [loop.strength for loop in loops if loop.type == "Reinforcing"]
    balancing = [loop.strength for loop in loops if loop.type == "Balancing"]
    return {
        "careerPreferences": [
            {
                "name": item.name,
                "value": item.value,
                "share": share(item.value, preference_total),
            }
            for item in model.career_preferences
        ],
        "feedbackLoops": [
            {
                "name": loop.name,
                "type": loop.type,
                "strength": loop.strength,
                "strengthPercent": round_half_up(abs(loop.strength) * 100),
            }
            for loop in loops
        ],
        "reinforcingAverageStrength": round_half_up(
            sum(reinforcing) / len(reinforcing) * 100
        )
        if reinforcing
        else None,
        "balancingStrength": round_half_up(abs(balancing[0]) * 100) if balancing else None,
        "urbanUsage": model.platform_usage.urban,
        "ruralUsage": model.platform_usage.rural,
        "totalUsersLabel": format_count(model.platform_usage.total_users),
    }


def solutions_summary(model: ViewModel) -> dict[str, Any]:
    curiosity, visibility, pressure = (loop.strength for loop in model.feedback_loops)
    return {
        "effectivenessScore": round_half_up(
            (curiosity + visibility + abs(pressure)) * 100 / 2
        ),
        "traditionalPressurePercent": round_half_up(abs(pressure) * 100),
        "urbanSchoolsLabel": f"{round_half_up(model.education_stats.urban_schools / 1000)}K",
        "targetCounseling": model.education_stats.career_counseling_availability + 30,
        "targetRuralUsage": model.platform_usage.rural + 20,
        "usageGap": model.platform_usage.urban - model.platform_usage.rural,
        "schoolsToIntegrate": format_count(model.education_stats.total_schools),
        "ruralSchoolsFirst": format_count(model.education_stats.rural_schools),
        "platformUsers": format_count(model.platform_usage.total_users),
    }


def roadmap_summary(model: ViewModel) -> dict[str, Any]:
    awareness = model.awareness_stats.non_traditional
    gap = model.awareness_stats.urban_rural_gap
    counseling = model.education_stats.career_counseling_availability
    schools = model.education_stats
    users = model.platform_usage.total_users
    return {
        "currentAwareness": awareness,
        "projections": [
            {
                "year": year,
                "awareness": awareness + uplift,
                "counseling": counseling + uplift,
                "gap": gap - reduction,
            }
            for year, uplift, reduction in PROJECTION_STEPS
        ],
        "phases": [
            {
                "name": "Short-Term (1-2 Years)",
                "targetAwareness": awareness + 5,
                "targetCounseling": counseling + 5,
                "partnerUrbanSchools": round_half_up(schools.urban_schools / 10),
                "parentSessionDistricts": round_half_up(schools.rural_schools / 100),
                "pilotUrbanSchools": round_half_up(schools.urban_schools / 2000),
                "pilotRuralSchools": round_half_up(schools.rural_schools / 4000),
                "campaignUsers": users,
            },
            {
                "name": "Medium-Term (3-5 Years)",
                "targetAwareness": awareness + 15,
                "targetCounseling": counseling + 15,
                "targetGap": gap - 8,
                "mentoredUsers": round_half_up(users * 0.2),
                "careerClassSchools": round_half_up(schools.total_schools * 0.3),
                "careerLabSchools": round_half_up(schools.total_schools / 3000),
            },
            {
                "name": "Long-Term (5-10 Years)",
                "targetAwareness": awareness + 30,
                "trackedSchools": schools.total_schools,
                "careerMentors": round_half_up(users * 0.01),
            },
        ],
    }


TAB_SUMMARIES: dict[Tab, Callable[[ViewModel], dict[str, Any]]] = {
    Tab.PROBLEM: problem_summary,
    Tab.ANALYSIS: analysis_summary,
    Tab.SOLUTIONS: solutions_summary,
    Tab.ROADMAP: roadmap_summary,
}


def summarize_tab(tab: Tab, model: ViewModel) -> dict[str, Any]:
    return TAB_SUMMARIES[tab](model)


__all__ = ["Tab", "TAB_SUMMARIES", "summarize_tab", "format_count", "round_half_up", "share"]
