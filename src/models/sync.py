"""Result of one catalog sync run."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from src.models.catalog import AchievementCatalog, CatalogIndex


class SyncResult(BaseModel):
    """What a sync produced and where it was written.

    ``strategy`` names the extraction strategy whose output became the
    catalog, which is the first thing to check when a page layout changes.
    """

    model_config = ConfigDict(frozen=True)

    catalog: AchievementCatalog
    index: CatalogIndex
    catalog_path: Path
    index_path: Path
    strategy: str
