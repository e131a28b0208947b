"""Command-line entrypoint for dashboard data jobs."""

from __future__ import annotations

import argparse
import os
from typing import Iterable

from jobs.config import SOURCES, SourceConfig, iter_sources, load_settings
from jobs.snapshot import main as run_snapshot


def _format_source(source: SourceConfig, base_url: str) -> str:
    return (
        f"{source.key}: {source.title} - {source.description} "
        f"url={base_url}/{source.resource_id}"
    )


def _resolve_sources_from_cli(keys: Iterable[str] | None) -> tuple[SourceConfig, ...]:
    if not keys:
        return SOURCES
    sources = tuple(iter_sources(keys))
    unknown = set(keys) - {s.key for s in sources}
    if unknown:
        raise SystemExit(f"Unknown source keys: {', '.join(sorted(unknown))}")
    return sources


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Career Pathways India data jobs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    snapshot_parser = subparsers.add_parser(
        "snapshot", help="Fetch all sources and print the reconciled dashboard as JSON"
    )
    snapshot_parser.add_argument(
        "--pretty", action="store_true", help="Indent the JSON output"
    )
    snapshot_parser.add_argument(
        "--log-level",
        help="Override LOG_LEVEL for this invocation (e.g. DEBUG, INFO)",
    )

    list_parser = subparsers.add_parser("list-sources", help="Show configured data sources")
    list_parser.add_argument(
        "--sources",
        help="Comma-separated list of source keys to show (defaults to all configured)",
    )

    args = parser.parse_args(argv)

    if args.command == "list-sources":
        keys = [item.strip() for item in (args.sources or "").split(",") if item.strip()]
        sources = _resolve_sources_from_cli(keys)
        base_url = load_settings().base_url
        for source in sources:
            print(_format_source(source, base_url))
        return 0

    if args.command == "snapshot":
        if args.log_level:
            os.environ["LOG_LEVEL"] = args.log_level
        return run_snapshot(pretty=args.pretty)

    parser.error("Unknown command")
    return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
