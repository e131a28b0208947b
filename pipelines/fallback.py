"""Static snapshot served when source data cannot be reconciled."""

from __future__ import annotations

from pipelines.model import ViewModel

FALLBACK_WARNING = "Failed to load data. Please try again later. Showing sample data instead."

_FALLBACK_PAYLOAD = {
    "awarenessStats": {
        "traditional": 78,
        "nonTraditional": 22,
        "urbanRuralGap": 42,
    },
    "platformUsage": {
        "urban": 65,
        "rural": 28,
        "totalUsers": 1250000,
    },
    "careerPreferences": [
        {"name": "Engineering", "value": 68},
        {"name": "Medicine", "value": 45},
        {"name": "Design", "value": 12},
        {"name": "Entrepreneurship", "value": 8},
        {"name": "Arts", "value": 5},
        {"name": "Content Creation", "value": 7},
    ],
    "feedbackLoops": [
        {"name": "Curiosity-Awareness", "strength": 0.75, "type": "Reinforcing"},
        {"name": "Visibility-Awareness", "strength": 0.65, "type": "Reinforcing"},
        {"name": "Traditional Pressure", "strength": -0.6, "type": "Balancing"},
    ],
    "educationStats": {
        "totalSchools": 1500000,
        "ruralSchools": 1200000,
        "urbanSchools": 300000,
        "careerCounselingAvailability": 35,
    },
}


def fallback_view_model() -> ViewModel:
    return ViewModel.model_validate(_FALLBACK_PAYLOAD)


__all__ = ["fallback_view_model", "FALLBACK_WARNING"]
