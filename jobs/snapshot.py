"""One-shot job that reconciles every source and prints the dashboard snapshot."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from typing import TextIO

from jobs.config import Settings, load_settings
from pipelines.reconcile import Reconciler
from pipelines.store import ViewModelStore

logger = logging.getLogger(__name__)


async def snapshot_async(settings: Settings | None = None) -> ViewModelStore:
    """Activate a fresh store against the live sources and return it."""

    store = ViewModelStore()
    await store.activate(Reconciler.from_settings(settings))
    return store


def main(*, pretty: bool = False, out: TextIO | None = None) -> int:
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    store = asyncio.run(snapshot_async(load_settings()))
    payload = store.snapshot().model_dump(mode="json", by_alias=True)
    stream = out or sys.stdout
    json.dump(payload, stream, indent=2 if pretty else None)
    stream.write("\n")
    if payload["warningMessage"]:
        logger.warning("Snapshot served from the static fallback.")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
