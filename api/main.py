"""FastAPI service exposing the reconciled dashboard data."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Any

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from api.tabs import Tab, summarize_tab
from jobs.config import load_settings
from pipelines.model import DashboardSnapshot
from pipelines.reconcile import Reconciler
from pipelines.store import Loader, ViewModelStore

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    logging.basicConfig(level=settings.log_level)
    app.state.store = ViewModelStore()
    app.state.reconciler = Reconciler.from_settings(settings)
    yield


app = FastAPI(title="Career Pathways India API", version="0.1.0", lifespan=lifespan)


def _configure_cors() -> None:
    raw_origins = os.getenv("API_CORS_ORIGINS", "*")
    origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )


_configure_cors()


def get_store(request: Request) -> ViewModelStore:
    return request.app.state.store


def get_reconciler(request: Request) -> Loader:
    return request.app.state.reconciler


async def _loaded_snapshot(store: ViewModelStore, reconciler: Loader) -> DashboardSnapshot:
    await store.activate(reconciler)
    return store.snapshot()


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/dashboard", response_model=DashboardSnapshot)
async def get_dashboard(
    store: ViewModelStore = Depends(get_store),
    reconciler: Loader = Depends(get_reconciler),
) -> DashboardSnapshot:
    return await _loaded_snapshot(store, reconciler)


@app.get("/dashboard/tabs/{tab}")
async def get_tab(
    tab: str,
    store: ViewModelStore = Depends(get_store),
    reconciler: Loader = Depends(get_reconciler),
) -> dict[str, Any]:
    try:
        selected = Tab(tab.lower())
    except ValueError as exc:
        allowed = ", ".join(t.value for t in Tab)
        raise HTTPException(
            status_code=404, detail=f"Unknown tab '{tab}'. Expected one of: {allowed}."
        ) from exc

    snapshot = await _loaded_snapshot(store, reconciler)
    return {
        "tab": selected.value,
        "warningMessage": snapshot.warning_message,
        "summary": summarize_tab(selected, snapshot.view_model),
    }
