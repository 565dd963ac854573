"""Pipeline orchestration for the achievement catalog sync."""

from src.pipeline.sync_pipeline import CatalogSyncPipeline

__all__ = ["CatalogSyncPipeline"]
