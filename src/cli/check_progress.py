"""CLI for checking an exported progress file against a catalog.

Usage::

    python -m src.cli.check_progress --progress progress_2026.02.21.json \\
        --catalog public/data/achievements_v2026.02.21.json

Without ``--progress`` the catalog is audited against an empty progress
record for its own version, which checks that the catalog file loads.

Exits 0 when every progress key matches a catalog item, 1 when keys are
orphaned or either file is invalid.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from src.models.catalog import AchievementCatalog
from src.models.progress import create_empty_progress
from src.services.progress_service import ProgressService
from src.utils.errors import ProgressValidationError
from src.utils.logging import LOG_LEVELS, configure_logging

_MAX_LISTED = 20


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.check_progress",
        description="Check that a progress export still matches a catalog's item ids.",
    )
    parser.add_argument(
        "--progress",
        default=None,
        help="Progress JSON exported from the checklist (default: empty progress)",
    )
    parser.add_argument("--catalog", required=True, help="Catalog JSON (achievements_v<version>.json)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    return parser


def _load_catalog(path: Path) -> AchievementCatalog:
    return AchievementCatalog.model_validate(json.loads(path.read_text(encoding="utf-8")))


def run(argv: list[str] | None = None) -> int:
    """Parse *argv*, audit the progress file and return the exit code."""
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level)
    service = ProgressService()

    progress = None
    if args.progress is not None:
        try:
            progress = service.load(Path(args.progress))
        except ProgressValidationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    try:
        catalog = _load_catalog(Path(args.catalog))
    except (OSError, ValueError) as exc:
        first_line = str(exc).splitlines()[0] if str(exc) else type(exc).__name__
        print(f"Error: invalid catalog {args.catalog}: {first_line}", file=sys.stderr)
        return 1

    if progress is None:
        progress = create_empty_progress(catalog.version)

    audit = service.audit(progress, catalog)
    print(
        f"Progress for {audit.list_version} vs catalog {audit.catalog_version}: "
        f"{audit.completed_items}/{audit.total_items} completed "
        f"({audit.completion_ratio:.0%})."
    )
    if audit.list_version != audit.catalog_version:
        print("Note: progress was recorded against a different catalog version.")

    if audit.is_consistent:
        print("All progress entries match catalog items.")
        return 0

    print(f"{len(audit.orphaned_ids)} progress entries have no matching catalog item:")
    for item_id in audit.orphaned_ids[:_MAX_LISTED]:
        print(f"- {item_id}")
    if len(audit.orphaned_ids) > _MAX_LISTED:
        print(f"... and {len(audit.orphaned_ids) - _MAX_LISTED} more")
    return 1


def main() -> None:
    """CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
