"""Catalog domain models: items, categories, the versioned catalog and its index.

All models use frozen config to enforce immutability: a catalog is never
mutated once built; a new sync produces a new catalog and a new index via
``with_version``.

The serialized shape is the contract consumed by the browser checklist:

    achievements_v<version>.json
        {"version", "updated_at", "categories": [{"id", "name", "items": [...]}]}
    index.json
        {"latest", "versions": [...]}

``optional_meta`` is omitted entirely (never ``null`` or ``{}``) when an
item has no metadata, which is why :meth:`AchievementCatalog.to_json_dict`
dumps with ``exclude_none``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AchievementMeta(BaseModel):
    """Optional per-item metadata scraped alongside name and description."""

    model_config = ConfigDict(frozen=True)

    points: int | float | None = None   # Reward points, only when the source value is finite
    wiki_url: str | None = None         # Link back to the wiki entry

    def is_empty(self) -> bool:
        return self.points is None and not self.wiki_url


class AchievementItem(BaseModel):
    """A single trackable achievement.

    ``id`` is the join key used by progress files, so it must stay stable
    across re-syncs of unchanged source content.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    optional_meta: AchievementMeta | None = None


class AchievementCategory(BaseModel):
    """A named, ordered group of achievement items."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    items: tuple[AchievementItem, ...] = ()


class AchievementCatalog(BaseModel):
    """One versioned snapshot of the achievement list.

    Field declaration order is the serialized key order:
    version, updated_at, categories.
    """

    model_config = ConfigDict(frozen=True)

    version: str = Field(min_length=1)
    updated_at: str                     # ISO date, YYYY-MM-DD
    categories: tuple[AchievementCategory, ...] = ()

    @property
    def item_count(self) -> int:
        return sum(len(category.items) for category in self.categories)

    def item_ids(self) -> set[str]:
        """Return every item identifier in the catalog."""
        return {item.id for category in self.categories for item in category.items}

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class CatalogIndex(BaseModel):
    """Tracks which catalog versions exist and which one is current.

    ``versions`` keeps insertion order with no duplicates; ``latest`` is the
    most recently synced version, regardless of how versions sort.
    """

    model_config = ConfigDict(frozen=True)

    latest: str
    versions: tuple[str, ...] = ()

    @classmethod
    def initial(cls, version: str) -> CatalogIndex:
        return cls(latest=version, versions=(version,))

    def with_version(self, version: str) -> CatalogIndex:
        """Return a new index with *version* recorded and marked latest."""
        versions = self.versions if version in self.versions else (*self.versions, version)
        return CatalogIndex(latest=version, versions=versions)

    def to_json_dict(self) -> dict[str, Any]:
        return {"latest": self.latest, "versions": list(self.versions)}
