"""Error taxonomy for dashboard data acquisition."""

from __future__ import annotations


class DashboardDataError(Exception):
    """Base class for recoverable data acquisition errors."""


class SourceUnavailable(DashboardDataError):
    """Network failure, timeout or HTTP error status while calling a source."""


class MalformedResponse(DashboardDataError):
    """The source answered but the payload lacks the expected structure."""


class ReconciliationFailure(DashboardDataError):
    """Normalized source data could not be merged into a view model."""


class StoreStateError(RuntimeError):
    """Raised on an invalid view-model store transition."""


__all__ = [
    "DashboardDataError",
    "SourceUnavailable",
    "MalformedResponse",
    "ReconciliationFailure",
    "StoreStateError",
]
