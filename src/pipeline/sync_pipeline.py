"""Orchestrator for one catalog sync.

Stages, in order:

    1. LOAD      - fetch the page (HTTP) or read a saved copy (file)
    2. EXTRACT   - run the extraction chain; first non-empty strategy wins
    3. BUILD     - assign identifiers and assemble the catalog
    4. WRITE     - catalog file first, then the version index

A failure in LOAD, EXTRACT/BUILD (nothing found) or WRITE aborts the run
with the stage's exception; nothing is retried and nothing is written
before BUILD succeeds.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import structlog

from src.interfaces.source_provider import ISourceProvider
from src.models.sync import SyncResult
from src.services.catalog_builder import CatalogBuilder
from src.services.catalog_writer import CatalogWriter
from src.services.extraction.chain import ExtractionChain
from src.utils.errors import NoDataExtractedError

logger = structlog.get_logger(logger_name=__name__)


class CatalogSyncPipeline:
    """Coordinates source loading, extraction, catalog building and writing.

    All collaborators are injected; see ``src.main.build_pipeline`` for the
    production wiring.
    """

    def __init__(
        self,
        source_provider: ISourceProvider,
        extraction_chain: ExtractionChain,
        catalog_builder: CatalogBuilder,
        catalog_writer: CatalogWriter,
    ) -> None:
        self._source = source_provider
        self._chain = extraction_chain
        self._builder = catalog_builder
        self._writer = catalog_writer

    async def run(
        self,
        location: str,
        version: str,
        catalog_path: Path,
        index_path: Path,
        default_category: str,
        updated_at: date | None = None,
    ) -> SyncResult:
        """Execute a full sync and return what was written.

        Raises:
            FetchError: The source could not be loaded.
            NoDataExtractedError: No strategy recognised any achievements.
            CatalogWriteError: The catalog or index could not be written.
        """
        log = logger.bind(source=location, version=version)
        log.info("sync_started", strategies=self._chain.strategy_names)

        document = await self._source.fetch_document(location)

        strategy, categories = self._chain.extract(document.html, default_category)
        if strategy is None:
            log.error("no_data_extracted", length=len(document.html))
            raise NoDataExtractedError()

        catalog = self._builder.build(categories, version=version, updated_at=updated_at)
        index = self._writer.write(catalog, catalog_path, index_path)

        log.info(
            "sync_completed",
            strategy=strategy,
            categories=len(catalog.categories),
            items=catalog.item_count,
            catalog_path=str(catalog_path),
        )
        return SyncResult(
            catalog=catalog,
            index=index,
            catalog_path=catalog_path,
            index_path=index_path,
            strategy=strategy,
        )

    async def close(self) -> None:
        await self._source.close()
