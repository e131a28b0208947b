from __future__ import annotations

from typing import Any, Callable, Mapping

import httpx
import pytest

from jobs.config import (
    PLATFORM_USAGE,
    SCHOOL_INFRASTRUCTURE,
    SURVEY_PREFERENCES,
    Settings,
)

SURVEY_ID = SURVEY_PREFERENCES.resource_id
PLATFORM_ID = PLATFORM_USAGE.resource_id
SCHOOL_ID = SCHOOL_INFRASTRUCTURE.resource_id

Responder = Callable[[httpx.Request], httpx.Response]


def timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)


def connection_refused(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def status(code: int) -> Responder:
    return lambda request: httpx.Response(code, json={"message": "error"})


def build_transport(
    responses: Mapping[str, Any], calls: list[httpx.Request] | None = None
) -> httpx.MockTransport:
    """Serve ``responses`` keyed by resource id; unknown resources time out.

    A value is either a JSON-serialisable body (served with 200) or a
    callable taking the request and returning a response or raising.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        resource_id = request.url.path.rsplit("/", 1)[-1]
        answer = responses.get(resource_id, timeout)
        if callable(answer):
            return answer(request)
        return httpx.Response(200, json=answer)

    return httpx.MockTransport(handler)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        base_url="https://data.example.test/resource",
        api_key="test-key",
        timeout_seconds=1.0,
        retry_attempts=1,
    )
