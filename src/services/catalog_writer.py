"""Writes catalog snapshots and maintains the version index.

File formats: UTF-8 JSON, 2-space indent, non-ASCII kept literal, trailing
newline.  Catalog files are immutable per version: re-running a sync for
the same version may rewrite its file, but a file holding a different
version is never overwritten.

The index is only touched after the catalog file has been written.  The two
writes are not transactional; a crash in between leaves an unindexed
catalog, which the next run for that version repairs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog

from src.models.catalog import AchievementCatalog, CatalogIndex
from src.utils.errors import CatalogWriteError, IndexCorruptError

logger = structlog.get_logger(logger_name=__name__)

INDEX_FILENAME = "index.json"


def catalog_filename(version: str) -> str:
    """Return the file name for catalog *version*."""
    return f"achievements_v{version}.json"


def dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def read_index(index_path: Path) -> CatalogIndex:
    """Load an existing index.

    Raises:
        FileNotFoundError: If *index_path* does not exist.
        IndexCorruptError: If the file is not JSON or not index-shaped.
    """
    try:
        raw = json.loads(index_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except (OSError, ValueError) as exc:
        raise IndexCorruptError(f"Cannot read index {index_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise IndexCorruptError(f"Index {index_path} is not a JSON object")

    versions = raw.get("versions")
    if not isinstance(versions, list) or not all(isinstance(v, str) for v in versions):
        raise IndexCorruptError(f"Index {index_path} has no valid 'versions' list")

    latest = raw.get("latest")
    unique = tuple(dict.fromkeys(versions))
    return CatalogIndex(
        latest=latest if isinstance(latest, str) else (unique[-1] if unique else ""),
        versions=unique,
    )


class CatalogWriter:
    """Persists catalogs and keeps ``index.json`` current."""

    def write_catalog(self, catalog: AchievementCatalog, catalog_path: Path) -> Path:
        """Write *catalog* to *catalog_path*.

        Raises:
            CatalogWriteError: If the path holds a different version or the
                write fails.
        """
        existing_version = self._existing_version(catalog_path)
        if existing_version is not None and existing_version != catalog.version:
            raise CatalogWriteError(
                f"Refusing to overwrite {catalog_path}: it holds version "
                f"'{existing_version}', not '{catalog.version}'"
            )

        try:
            catalog_path.parent.mkdir(parents=True, exist_ok=True)
            catalog_path.write_text(dump_json(catalog.to_json_dict()), encoding="utf-8")
        except OSError as exc:
            raise CatalogWriteError(f"Failed to write {catalog_path}: {exc}") from exc

        logger.info("catalog_written", path=str(catalog_path), version=catalog.version)
        return catalog_path

    def update_index(self, index_path: Path, version: str) -> CatalogIndex:
        """Record *version* in the index and mark it latest.

        A missing or corrupt index is replaced by a fresh one.
        """
        try:
            current = read_index(index_path)
        except FileNotFoundError:
            current = CatalogIndex.initial(version)
        except IndexCorruptError as exc:
            logger.warning("index_corrupt_replaced", path=str(index_path), error=str(exc))
            current = CatalogIndex.initial(version)

        updated = current.with_version(version)
        try:
            index_path.parent.mkdir(parents=True, exist_ok=True)
            index_path.write_text(dump_json(updated.to_json_dict()), encoding="utf-8")
        except OSError as exc:
            raise CatalogWriteError(f"Failed to update index {index_path}: {exc}") from exc

        logger.info(
            "index_updated",
            path=str(index_path),
            latest=updated.latest,
            versions=len(updated.versions),
        )
        return updated

    def write(
        self,
        catalog: AchievementCatalog,
        catalog_path: Path,
        index_path: Path,
    ) -> CatalogIndex:
        """Write the catalog, then the index.  The index is skipped if the
        catalog write raises."""
        self.write_catalog(catalog, catalog_path)
        return self.update_index(index_path, catalog.version)

    @staticmethod
    def _existing_version(catalog_path: Path) -> str | None:
        if not catalog_path.exists():
            return None
        try:
            existing = json.loads(catalog_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("catalog_unreadable_overwritten", path=str(catalog_path))
            return None
        if isinstance(existing, dict) and isinstance(existing.get("version"), str):
            return existing["version"]
        return None
