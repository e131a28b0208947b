"""Concurrent acquisition of all sources and their merge into one view model.

Degradation happens at two levels. Source clients replace missing fields with
their own defaults, so one source going down only affects its own figures.
If the merge itself fails (a client broke its contract), the whole static
snapshot is served instead together with a warning message.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Sequence

import httpx

from jobs.config import Settings, load_settings
from pipelines.errors import ReconciliationFailure
from pipelines.fallback import FALLBACK_WARNING, fallback_view_model
from pipelines.model import FetchOutcome, Failure, LoadResult, Success, ViewModel
from pipelines.sources.base import SourceClient
from pipelines.sources.platform_usage import PlatformUsageClient
from pipelines.sources.school_infrastructure import SchoolInfrastructureClient
from pipelines.sources.survey_preferences import SurveyPreferencesClient

logger = logging.getLogger(__name__)

# (display name, survey metric)
CAREER_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Engineering", "engineering_preference"),
    ("Medicine", "medicine_preference"),
    ("Design", "design_preference"),
    ("Entrepreneurship", "entrepreneurship_preference"),
    ("Arts", "arts_preference"),
    ("Content Creation", "content_creation_preference"),
)

# (display name, platform metric, loop type)
FEEDBACK_LOOPS: tuple[tuple[str, str, str], ...] = (
    ("Curiosity-Awareness", "curiosity_awareness_strength", "Reinforcing"),
    ("Visibility-Awareness", "visibility_awareness_strength", "Reinforcing"),
    ("Traditional Pressure", "traditional_pressure_strength", "Balancing"),
)


def build_default_clients(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[SourceClient, ...]:
    return (
        SurveyPreferencesClient(settings, transport=transport),
        PlatformUsageClient(settings, transport=transport),
        SchoolInfrastructureClient(settings, transport=transport),
    )


def merge_view_model(
    survey: Mapping[str, Any],
    platform: Mapping[str, Any],
    school: Mapping[str, Any],
) -> ViewModel:
    """Map the three normalized metric sets onto the view model shape.

    Raises ``KeyError`` or ``pydantic.ValidationError`` when a metric set does
    not honour its client's contract.
    """

    return ViewModel(
        awareness_stats={
            "traditional": survey["traditional_career_preference"],
            "non_traditional": survey["non_traditional_awareness"],
            "urban_rural_gap": survey["urban_rural_gap"],
        },
        platform_usage={
            "urban": platform["urban_usage"],
            "rural": platform["rural_usage"],
            "total_users": platform["total_users"],
        },
        career_preferences=[
            {"name": name, "value": survey[metric]} for name, metric in CAREER_CATEGORIES
        ],
        feedback_loops=[
            {"name": name, "strength": platform[metric], "type": loop_type}
            for name, metric, loop_type in FEEDBACK_LOOPS
        ],
        education_stats={
            "total_schools": school["total_schools"],
            "rural_schools": school["rural_schools"],
            "urban_schools": school["urban_schools"],
            "career_counseling_availability": school["career_counseling_availability"],
        },
    )


class Reconciler:
    """Run every source client concurrently and merge the results."""

    def __init__(self, clients: Sequence[SourceClient]) -> None:
        self._clients = tuple(clients)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Reconciler":
        return cls(build_default_clients(settings or load_settings(), transport=transport))

    async def load(self) -> LoadResult:
        """Return a renderable view model; never raises."""

        settled = await asyncio.gather(
            *(self._settle(client) for client in self._clients),
            return_exceptions=True,
        )
        try:
            outcomes = self._collect(settled)
            view_model = merge_view_model(
                self._metrics(outcomes, "survey_preferences"),
                self._metrics(outcomes, "platform_usage"),
                self._metrics(outcomes, "school_infrastructure"),
            )
        except Exception:
            logger.exception("Could not reconcile source data; serving static snapshot.")
            return LoadResult(view_model=fallback_view_model(), warning_message=FALLBACK_WARNING)

        failed = sorted(o.source for o in outcomes.values() if isinstance(o, Failure))
        if failed:
            logger.info("Dashboard loaded with default figures for: %s", ", ".join(failed))
        else:
            logger.info("Dashboard loaded from all %s sources.", len(outcomes))
        return LoadResult(view_model=view_model)

    @staticmethod
    async def _settle(client: SourceClient) -> FetchOutcome | BaseException:
        # Also covers clients that raise before returning an awaitable.
        try:
            return await client.fetch()
        except Exception as exc:
            return exc

    def _collect(self, settled: Sequence[Any]) -> dict[str, FetchOutcome]:
        outcomes: dict[str, FetchOutcome] = {}
        for client, result in zip(self._clients, settled):
            if isinstance(result, BaseException):
                logger.warning("%s raised past its boundary: %r", client.key, result)
                result = client.failure(f"{type(result).__name__}: {result}")
            elif not isinstance(result, (Success, Failure)):
                raise ReconciliationFailure(
                    f"{client.key} returned {type(result).__name__}, expected a fetch outcome"
                )
            outcomes[client.key] = result
        return outcomes

    @staticmethod
    def _metrics(outcomes: Mapping[str, FetchOutcome], key: str) -> Mapping[str, Any]:
        try:
            return outcomes[key].metrics
        except KeyError as exc:
            raise ReconciliationFailure(f"no client registered for {key}") from exc


__all__ = [
    "Reconciler",
    "build_default_clients",
    "merge_view_model",
    "CAREER_CATEGORIES",
    "FEEDBACK_LOOPS",
]
