"""Turns extracted categories into a catalog with stable identifiers.

Identifier rules (the progress-file join key depends on these):

- category: ``cat_<slug(name)>``; a later category whose slug collides with
  an earlier one gets ``_2``, ``_3``, ... appended.
- item: ``achv_<slug(name + "_" + position)>`` where position is the
  1-based index within its category after duplicate records are removed.
  Appending the position keeps two same-named items apart.  If the id is
  already taken elsewhere in the catalog, the category name is folded into
  the seed so ids stay unique catalog-wide.

Everything is derived from source text and order, so re-syncing unchanged
content reproduces the same identifiers.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import structlog

from src.models.catalog import (
    AchievementCatalog,
    AchievementCategory,
    AchievementItem,
    AchievementMeta,
)
from src.models.extraction import ExtractedAchievement, ExtractedCategory
from src.utils.errors import NoDataExtractedError
from src.utils.identifiers import build_identifier

logger = structlog.get_logger(logger_name=__name__)

CATEGORY_PREFIX = "cat"
ITEM_PREFIX = "achv"


def build_meta(record: ExtractedAchievement) -> AchievementMeta | None:
    """Return metadata for *record*, or ``None`` when it carries none."""
    meta = AchievementMeta(points=record.points, wiki_url=record.wiki_url or None)
    return None if meta.is_empty() else meta


def dedupe_records(records: tuple[ExtractedAchievement, ...]) -> list[ExtractedAchievement]:
    """Drop records repeating an earlier (name, description) pair."""
    seen: set[tuple[str, str]] = set()
    unique: list[ExtractedAchievement] = []
    for record in records:
        key = (record.name, record.description)
        if key in seen:
            continue
        seen.add(key)
        unique.append(record)
    return unique


class CatalogBuilder:
    """Assigns identifiers, attaches metadata and assembles the catalog."""

    def __init__(self, allow_cjk: bool = True) -> None:
        self._allow_cjk = allow_cjk

    def _unique(self, seed: str, prefix: str, taken: set[str]) -> str:
        candidate = build_identifier(seed, prefix, allow_cjk=self._allow_cjk)
        base, suffix = candidate, 2
        while candidate in taken:
            candidate = f"{base}_{suffix}"
            suffix += 1
        taken.add(candidate)
        return candidate

    def _item_id(self, category_name: str, record: ExtractedAchievement, position: int, taken: set[str]) -> str:
        candidate = build_identifier(f"{record.name}_{position}", ITEM_PREFIX, allow_cjk=self._allow_cjk)
        if candidate not in taken:
            taken.add(candidate)
            return candidate
        return self._unique(f"{category_name}_{record.name}_{position}", ITEM_PREFIX, taken)

    def build(
        self,
        categories: list[ExtractedCategory],
        version: str,
        updated_at: date | None = None,
    ) -> AchievementCatalog:
        """Build an :class:`AchievementCatalog` from extractor output.

        Args:
            categories: Output of the extraction chain, in source order.
            version: Catalog version string.
            updated_at: Snapshot date; defaults to today (UTC).

        Raises:
            NoDataExtractedError: If no category yields any item.
        """
        category_ids: set[str] = set()
        item_ids: set[str] = set()
        built: list[AchievementCategory] = []

        for extracted in categories:
            records = dedupe_records(extracted.items)
            if not records:
                continue

            items = tuple(
                AchievementItem(
                    id=self._item_id(extracted.name, record, position, item_ids),
                    name=record.name,
                    description=record.description,
                    optional_meta=build_meta(record),
                )
                for position, record in enumerate(records, start=1)
            )
            built.append(
                AchievementCategory(
                    id=self._unique(extracted.name, CATEGORY_PREFIX, category_ids),
                    name=extracted.name,
                    items=items,
                )
            )

        if not built:
            raise NoDataExtractedError()

        catalog = AchievementCatalog(
            version=version,
            updated_at=(updated_at or datetime.now(tz=timezone.utc).date()).isoformat(),
            categories=tuple(built),
        )
        logger.info(
            "catalog_built",
            version=version,
            categories=len(catalog.categories),
            items=catalog.item_count,
        )
        return catalog
