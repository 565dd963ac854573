# =============================================================================
# src/cli/sync.py - Achievement Catalog Sync Command
# =============================================================================
#
# Scrapes the achievement wiki page (or a saved copy of it) into a versioned
# catalog file and records the version in index.json:
#
#   1. Load the page      - HTTP fetch, or --input for a local HTML file
#   2. Extract            - embedded JSON first, then table / heading-list
#                           scraping; the first strategy that finds anything
#   3. Build              - stable ids, optional metadata, de-duplication
#   4. Write              - achievements_v<version>.json, then index.json
#
# Exit codes: 0 on success (and for --help), 1 on any sync failure, 2 on bad
# arguments (argparse).  Failures are reported as one "Error: ..." line on
# stderr; structured logs also go to stderr so stdout stays a clean summary.
# =============================================================================

"""Sync achievements from the wiki into versioned catalog JSON.

Usage::

    python -m src.cli.sync --version 2026.02.21

    python -m src.cli.sync --input saved_page.html --out-dir public/data

    python -m src.cli.sync --url https://wiki.example.com/achievements \\
        --output public/data/achievements_vbeta.json --version beta
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from pydantic import ValidationError

from src.config.settings import DEFAULT_SOURCE_URL, Settings
from src.main import build_pipeline, run_sync
from src.models.sync import SyncResult
from src.utils.errors import CatalogSyncError
from src.utils.logging import LOG_LEVELS, configure_logging


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the sync CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.sync",
        description="Sync achievements from the official wiki page into public/data JSON.",
    )
    parser.add_argument(
        "--url",
        "--source",
        dest="url",
        default=None,
        help=f"Source page URL (default: SOURCE_URL or {DEFAULT_SOURCE_URL})",
    )
    parser.add_argument(
        "--input",
        default=None,
        help="Read HTML from a local file instead of fetching the URL",
    )
    parser.add_argument(
        "--version",
        default=None,
        help="Target list version (default: today's date, YYYY.MM.DD)",
    )
    parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory (default: OUTPUT_DIR or public/data)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Output catalog path (default: <out-dir>/achievements_v<version>.json)",
    )
    parser.add_argument(
        "--index",
        default=None,
        help="Index file path (default: <out-dir>/index.json)",
    )
    parser.add_argument(
        "--category",
        default=None,
        help="Fallback category name (default: DEFAULT_CATEGORY or 'Official Wiki')",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Extraction config file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines instead of console output",
    )
    return parser


def _settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {
        "output_dir": args.out_dir,
        "log_level": args.log_level,
    }
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


def _describe_settings_error(exc: ValidationError) -> str:
    problems = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return "invalid settings (" + "; ".join(problems) + ")"


def _print_summary(result: SyncResult) -> None:
    catalog = result.catalog
    print(
        f"Wrote {catalog.item_count} achievements across "
        f"{len(catalog.categories)} categories (strategy: {result.strategy}):"
    )
    print(f"- {result.catalog_path}")
    print(f"Updated {result.index_path} (latest={result.index.latest}).")


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, run one sync and return the process exit code."""
    args = _build_parser().parse_args(argv)
    try:
        app_settings = _settings_from_args(args)
    except ValidationError as exc:
        print(f"Error: {_describe_settings_error(exc)}", file=sys.stderr)
        return 1

    try:
        configure_logging(app_settings.log_level, json_output=args.json_logs)
        pipeline, config = build_pipeline(
            app_settings,
            from_file=args.input is not None,
            config_path=args.config,
        )
        result = asyncio.run(
            run_sync(
                pipeline,
                config,
                location=args.input or args.url,
                version=args.version,
                output_path=args.output,
                index_path=args.index,
                default_category=args.category,
            )
        )
    except CatalogSyncError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _print_summary(result)
    return 0


def main() -> None:
    """CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
