"""Shared utilities for retrieving external API responses."""

from __future__ import annotations

from typing import Any, Mapping

import httpx
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

DEFAULT_TIMEOUT_SECONDS = 10.0
_DEFAULT_WAIT = wait_exponential(min=1, max=8)


Headers = Mapping[str, str] | None
Params = Mapping[str, Any] | None


async def fetch_json(
    url: str,
    *,
    headers: Headers = None,
    params: Params = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    attempts: int = 1,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Execute a GET request and return the decoded JSON payload.

    Every attempt is bounded by ``timeout``. With the default single attempt
    exactly one request goes out; larger values retry with exponential backoff
    and re-raise the last error. ``transport`` lets callers (and tests) swap
    the underlying httpx transport without patching.
    """

    retrying = AsyncRetrying(
        wait=_DEFAULT_WAIT,
        stop=stop_after_attempt(max(1, attempts)),
        reraise=True,
    )
    async for attempt in retrying:
        with attempt:
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                response = await client.get(url, headers=headers, params=params)
            response.raise_for_status()
            return response.json()


__all__ = ["fetch_json", "DEFAULT_TIMEOUT_SECONDS"]
