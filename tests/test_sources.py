import asyncio

import httpx
import pytest

from conftest import (
    PLATFORM_ID,
    SCHOOL_ID,
    SURVEY_ID,
    build_transport,
    connection_refused,
    status,
    timeout,
)
from pipelines.model import Failure, Success
from pipelines.sources.platform_usage import PlatformUsageClient
from pipelines.sources.school_infrastructure import SchoolInfrastructureClient
from pipelines.sources.survey_preferences import SurveyPreferencesClient

SURVEY_DEFAULTS = {
    "engineering_preference": 68.0,
    "medicine_preference": 45.0,
    "design_preference": 12.0,
    "entrepreneurship_preference": 8.0,
    "arts_preference": 5.0,
    "content_creation_preference": 7.0,
    "traditional_career_preference": 78.0,
    "non_traditional_awareness": 22.0,
    "urban_rural_gap": 42.0,
}


def _fetch(client):
    return asyncio.run(client.fetch())


def test_survey_client_normalizes_full_record(settings):
    body = {
        "records": [
            {
                "engineering": "61",
                "medicine": 40,
                "design": 15,
                "entrepreneurship": 10,
                "arts": 6,
                "content_creation": 11,
            },
            {"engineering": 1},
        ]
    }
    client = SurveyPreferencesClient(settings, transport=build_transport({SURVEY_ID: body}))

    outcome = _fetch(client)

    assert isinstance(outcome, Success)
    assert outcome.source == "survey_preferences"
    assert outcome.metrics["engineering_preference"] == pytest.approx(61.0)
    assert outcome.metrics["content_creation_preference"] == pytest.approx(11.0)
    # awareness figures are never fetched
    assert outcome.metrics["traditional_career_preference"] == 78.0
    assert outcome.metrics["non_traditional_awareness"] == 22.0


def test_missing_field_falls_back_individually(settings):
    body = {"records": [{"urban_usage": 70, "total_users": "2,000,000"}]}
    client = PlatformUsageClient(settings, transport=build_transport({PLATFORM_ID: body}))

    outcome = _fetch(client)

    assert isinstance(outcome, Success)
    assert outcome.metrics["urban_usage"] == pytest.approx(70.0)
    assert outcome.metrics["rural_usage"] == 28.0
    assert outcome.metrics["total_users"] == 2_000_000
    assert isinstance(outcome.metrics["total_users"], int)
    assert outcome.metrics["traditional_pressure_strength"] == pytest.approx(-0.60)


def test_zero_is_kept_as_a_real_value(settings):
    body = {"records": [{"career_counseling": 0, "urban_schools": "0"}]}
    client = SchoolInfrastructureClient(settings, transport=build_transport({SCHOOL_ID: body}))

    outcome = _fetch(client)

    assert outcome.metrics["career_counseling_availability"] == 0.0
    assert outcome.metrics["urban_schools"] == 0
    assert outcome.metrics["total_schools"] == 1_500_000


@pytest.mark.parametrize(
    "response, reason_fragment",
    [
        (timeout, "timed out"),
        (connection_refused, "request failed"),
        (status(503), "HTTP 503"),
        (lambda request: httpx.Response(200, text="<html>maintenance</html>"), "non-JSON"),
        ({"records": []}, "no records"),
        ({"message": "invalid key"}, "no records"),
        ({"records": ["engineering"]}, "not an object"),
        ([{"engineering": 80}], "not a JSON object"),
    ],
)
def test_unusable_responses_become_failures_with_defaults(settings, response, reason_fragment):
    client = SurveyPreferencesClient(settings, transport=build_transport({SURVEY_ID: response}))

    outcome = _fetch(client)

    assert isinstance(outcome, Failure)
    assert reason_fragment in outcome.reason
    assert dict(outcome.metrics) == SURVEY_DEFAULTS


def test_school_client_defaults(settings):
    client = SchoolInfrastructureClient(settings, transport=build_transport({}))

    outcome = _fetch(client)

    assert isinstance(outcome, Failure)
    assert dict(outcome.metrics) == {
        "total_schools": 1_500_000,
        "rural_schools": 1_200_000,
        "urban_schools": 300_000,
        "career_counseling_availability": 35.0,
    }


def test_fetch_sends_exactly_one_request_with_api_key(settings):
    calls: list[httpx.Request] = []
    client = PlatformUsageClient(
        settings, transport=build_transport({PLATFORM_ID: status(500)}, calls)
    )

    _fetch(client)

    assert len(calls) == 1
    request = calls[0]
    assert request.method == "GET"
    assert request.url.path == f"/resource/{PLATFORM_ID}"
    assert request.url.params["api-key"] == "test-key"
    assert request.url.params["format"] == "json"


def test_clients_do_not_share_defaults(settings):
    first = SurveyPreferencesClient(settings)
    second = SurveyPreferencesClient(settings)

    defaults = first.defaults()
    defaults["engineering_preference"] = 0

    assert second.defaults()["engineering_preference"] == 68.0
    assert first.defaults()["engineering_preference"] == 68.0


def test_oversized_value_only_defaults_that_field(settings):
    body = {"records": [{"total_schools": 10**400, "rural_schools": 1_100_000, "career_counseling": 40}]}
    client = SchoolInfrastructureClient(settings, transport=build_transport({SCHOOL_ID: body}))

    outcome = _fetch(client)

    assert isinstance(outcome, Success)
    assert outcome.metrics["total_schools"] == 1_500_000
    assert outcome.metrics["rural_schools"] == 1_100_000
    assert outcome.metrics["career_counseling_availability"] == 40.0


def test_unexpected_processing_error_becomes_failure(settings):
    class BrokenNormalize(PlatformUsageClient):
        def normalize(self, record):
            raise ArithmeticError("bad arithmetic")

    body = {"records": [{"urban_usage": 70}]}
    client = BrokenNormalize(settings, transport=build_transport({PLATFORM_ID: body}))

    outcome = _fetch(client)

    assert isinstance(outcome, Failure)
    assert "ArithmeticError" in outcome.reason
    assert outcome.metrics["urban_usage"] == 65.0
