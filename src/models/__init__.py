"""Domain models - re-exports all public model classes.

The models are organized across four submodules by domain concern:
    - catalog.py     - Catalog file and index file shapes
    - extraction.py  - Schema-less records produced by extraction strategies
    - progress.py    - Progress file contract shared with the checklist UI
    - sync.py        - Outcome of one sync run
"""

from __future__ import annotations

from src.models.catalog import (
    AchievementCatalog,
    AchievementCategory,
    AchievementItem,
    AchievementMeta,
    CatalogIndex,
)
from src.models.extraction import (
    ExtractedAchievement,
    ExtractedCategory,
    group_by_category,
)
from src.models.progress import (
    CURRENT_SCHEMA_VERSION,
    ProgressData,
    create_empty_progress,
    validate_progress_data,
)
from src.models.sync import SyncResult

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "AchievementCatalog",
    "AchievementCategory",
    "AchievementItem",
    "AchievementMeta",
    "CatalogIndex",
    "ExtractedAchievement",
    "ExtractedCategory",
    "ProgressData",
    "SyncResult",
    "create_empty_progress",
    "group_by_category",
    "validate_progress_data",
]
