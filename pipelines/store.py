"""Process-local holder for the reconciled view model."""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import Optional, Protocol

from pipelines.errors import StoreStateError
from pipelines.fallback import FALLBACK_WARNING, fallback_view_model
from pipelines.model import DashboardSnapshot, LoadResult

logger = logging.getLogger(__name__)


class Loader(Protocol):
    async def load(self) -> LoadResult: ...


class StoreState(str, enum.Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"


class ViewModelStore:
    """Holds one of NotLoaded, Loading or Loaded(view model, warning).

    The store moves forward only: NotLoaded -> Loading -> Loaded. Loaded is
    terminal, so the view model is written once and read many times.
    """

    def __init__(self) -> None:
        self._state = StoreState.NOT_LOADED
        self._result: Optional[LoadResult] = None
        self._pending: Optional[asyncio.Future[LoadResult]] = None

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def result(self) -> Optional[LoadResult]:
        return self._result

    def begin_loading(self) -> None:
        if self._state is not StoreState.NOT_LOADED:
            raise StoreStateError(f"cannot start loading from state {self._state.value}")
        self._state = StoreState.LOADING

    def complete(self, result: LoadResult) -> None:
        if self._state is not StoreState.LOADING:
            raise StoreStateError(f"cannot complete loading from state {self._state.value}")
        self._result = result
        self._state = StoreState.LOADED
        if result.warning_message:
            logger.warning("Dashboard data loaded with warning: %s", result.warning_message)

    async def activate(self, loader: Loader) -> LoadResult:
        """Run ``loader`` once; later and concurrent callers share its result."""

        if self._state is StoreState.LOADED and self._result is not None:
            return self._result
        if self._pending is None:
            self.begin_loading()
            self._pending = asyncio.ensure_future(self._run(loader))
        return await asyncio.shield(self._pending)

    async def _run(self, loader: Loader) -> LoadResult:
        try:
            result = await loader.load()
        except Exception:
            logger.exception("Loader failed; serving static snapshot.")
            result = LoadResult(view_model=fallback_view_model(), warning_message=FALLBACK_WARNING)
        self.complete(result)
        return result

    def snapshot(self) -> DashboardSnapshot:
        if self._state is StoreState.LOADED and self._result is not None:
            return DashboardSnapshot(
                view_model=self._result.view_model,
                is_loading=False,
                warning_message=self._result.warning_message,
            )
        return DashboardSnapshot(is_loading=self._state is StoreState.LOADING)


__all__ = ["ViewModelStore", "StoreState", "Loader"]
