"""Common behaviour for the data.gov.in source clients.

A client performs one GET against its dataset, validates the first record of
the ``records`` array and maps it onto a fixed set of metrics. Anything that
prevents a usable response becomes a ``Failure`` carrying the client's
default table; nothing is raised past ``fetch``.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping

import httpx
from pydantic import ValidationError

from jobs.config import Settings, SourceConfig
from pipelines.common import fetch_json
from pipelines.errors import DashboardDataError, MalformedResponse, SourceUnavailable
from pipelines.model import Failure, FetchOutcome, SourceRecord, Success

logger = logging.getLogger(__name__)


class SourceClient:
    """Fetch and normalize one external dataset."""

    config: ClassVar[SourceConfig]
    record_model: ClassVar[type[SourceRecord]]
    # raw record field -> (metric name, default)
    field_defaults: ClassVar[Mapping[str, tuple[str, int | float]]]
    # metrics that are never fetched
    constants: ClassVar[Mapping[str, int | float]] = {}

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def key(self) -> str:
        return self.config.key

    @property
    def url(self) -> str:
        return f"{self._settings.base_url}/{self.config.resource_id}"

    def defaults(self) -> dict[str, Any]:
        """The complete metric set used when nothing could be fetched."""

        metrics = {metric: default for metric, default in self.field_defaults.values()}
        metrics.update(self.constants)
        return metrics

    def normalize(self, record: SourceRecord) -> dict[str, Any]:
        """Apply ``value if present else default`` to every field of ``record``."""

        metrics: dict[str, Any] = {}
        for field_name, (metric, default) in self.field_defaults.items():
            value = getattr(record, field_name, None)
            if value is None:
                metrics[metric] = default
            elif isinstance(default, int):
                metrics[metric] = round(value)
            else:
                metrics[metric] = float(value)
        metrics.update(self.constants)
        return metrics

    def failure(self, reason: str) -> Failure:
        return Failure(source=self.key, reason=reason, metrics=self.defaults())

    async def fetch(self) -> FetchOutcome:
        try:
            payload = await self._request()
            record = self._first_record(payload)
            metrics = self.normalize(record)
        except DashboardDataError as exc:
            logger.warning(
                "%s unavailable, using default figures: %s", self.config.title, exc
            )
            return self.failure(str(exc))
        except Exception as exc:
            logger.exception("%s could not be processed, using default figures.", self.config.title)
            return self.failure(f"{type(exc).__name__}: {exc}")
        return Success(source=self.key, metrics=metrics)

    async def _request(self) -> Any:
        params = {"format": "json"}
        if self._settings.api_key:
            params["api-key"] = self._settings.api_key
        try:
            return await fetch_json(
                self.url,
                headers={"Accept": "application/json"},
                params=params,
                timeout=self._settings.timeout_seconds,
                attempts=self._settings.retry_attempts,
                transport=self._transport,
            )
        except httpx.TimeoutException as exc:
            raise SourceUnavailable(
                f"{self.key} timed out after {self._settings.timeout_seconds}s"
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise SourceUnavailable(
                f"{self.key} returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailable(f"{self.key} request failed: {exc!r}") from exc
        except ValueError as exc:
            raise MalformedResponse(f"{self.key} returned a non-JSON body") from exc

    def _first_record(self, payload: Any) -> SourceRecord:
        if not isinstance(payload, Mapping):
            raise MalformedResponse(f"{self.key} payload is not a JSON object")
        records = payload.get("records")
        if not isinstance(records, list) or not records:
            raise MalformedResponse(f"{self.key} payload has no records")
        first = records[0]
        if not isinstance(first, Mapping):
            raise MalformedResponse(f"{self.key} first record is not an object")
        try:
            return self.record_model.model_validate(first)
        except ValidationError as exc:
            raise MalformedResponse(f"{self.key} first record is invalid: {exc}") from exc


__all__ = ["SourceClient"]
