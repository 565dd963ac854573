"""Checks a user's progress file against a catalog.

Progress is keyed by item identifier, so a re-sync that changes identifiers
silently orphans recorded completions.  The audit makes that visible before
a new catalog is published: load the progress exported from the checklist,
compare it with the freshly written catalog and look at ``orphaned_ids``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from src.models.catalog import AchievementCatalog
from src.models.progress import ProgressData, validate_progress_data
from src.utils.errors import ProgressValidationError

logger = structlog.get_logger(logger_name=__name__)


@dataclass(frozen=True)
class ProgressAudit:
    """Outcome of comparing one progress file with one catalog.

    Attributes
    ----------
    list_version:
        Catalog version the progress was recorded against.
    catalog_version:
        Version of the catalog it was compared with.
    total_items:
        Number of items in the catalog.
    completed_items:
        Catalog items marked completed in the progress file.
    orphaned_ids:
        Progress keys (completed or noted) with no matching catalog item.
    """

    list_version: str
    catalog_version: str
    total_items: int
    completed_items: int
    orphaned_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def completion_ratio(self) -> float:
        if self.total_items == 0:
            return 0.0
        return self.completed_items / self.total_items

    @property
    def is_consistent(self) -> bool:
        return not self.orphaned_ids


class ProgressService:
    """Loads progress files and audits them against catalogs."""

    def load(self, path: Path) -> ProgressData:
        """Read and validate a progress file.

        Raises:
            ProgressValidationError: If the file is unreadable, not JSON, or
                does not match the progress schema.
        """
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ProgressValidationError(f"Cannot read progress file {path}: {exc}") from exc
        except ValueError as exc:
            raise ProgressValidationError(f"Progress file {path} is not valid JSON.") from exc
        return validate_progress_data(payload)

    def audit(self, progress: ProgressData, catalog: AchievementCatalog) -> ProgressAudit:
        """Compare *progress* with *catalog*."""
        catalog_ids = catalog.item_ids()
        recorded = list(dict.fromkeys([*progress.completed, *progress.notes]))
        orphaned = tuple(item_id for item_id in recorded if item_id not in catalog_ids)
        completed = sum(
            1 for item_id, done in progress.completed.items() if done and item_id in catalog_ids
        )

        audit = ProgressAudit(
            list_version=progress.list_version,
            catalog_version=catalog.version,
            total_items=len(catalog_ids),
            completed_items=completed,
            orphaned_ids=orphaned,
        )
        logger.info(
            "progress_audited",
            list_version=audit.list_version,
            catalog_version=audit.catalog_version,
            completed=audit.completed_items,
            orphaned=len(audit.orphaned_ids),
        )
        return audit
