"""Composition root for the achievement catalog sync.

Wires providers and services together from resolved configuration.  The
CLI modules call :func:`build_pipeline` and :func:`run_sync`; tests call
them with explicit Settings so nothing depends on the caller's environment.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import httpx

from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.source_provider import ISourceProvider
from src.models.sync import SyncResult
from src.pipeline.sync_pipeline import CatalogSyncPipeline
from src.providers.source.file_source_provider import FileSourceProvider
from src.providers.source.http_source_provider import (
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_USER_AGENT,
    HttpSourceProvider,
)
from src.services.catalog_builder import CatalogBuilder
from src.services.catalog_writer import CatalogWriter, catalog_filename
from src.services.extraction.chain import (
    DEFAULT_STRATEGY_ORDER,
    ExtractionChain,
    build_strategies,
)
from src.services.extraction.heuristic import (
    DEFAULT_HEADER_TOKENS,
    DEFAULT_PLACEHOLDER_DESCRIPTION,
)
from src.utils.logging import get_logger


def default_version(today: date | None = None) -> str:
    """Version used when none is given: today's UTC date as ``YYYY.MM.DD``."""
    return (today or datetime.now(tz=timezone.utc).date()).strftime("%Y.%m.%d")


def build_source_provider(
    config: dict[str, Any],
    from_file: bool,
    http_client: httpx.AsyncClient | None = None,
) -> ISourceProvider:
    """Select the file provider for saved pages, the HTTP provider otherwise."""
    if from_file:
        return FileSourceProvider()

    source = config.get("source", {})
    return HttpSourceProvider(
        http_client=http_client,
        user_agent=source.get("user_agent", DEFAULT_USER_AGENT),
        accept_language=source.get("accept_language", DEFAULT_ACCEPT_LANGUAGE),
        timeout=float(source.get("timeout", 20.0)),
    )


def build_extraction_chain(config: dict[str, Any]) -> ExtractionChain:
    extraction = config.get("extraction", {})
    strategies = build_strategies(
        order=extraction.get("strategies", DEFAULT_STRATEGY_ORDER),
        header_tokens=extraction.get("header_tokens", DEFAULT_HEADER_TOKENS),
        placeholder_description=extraction.get(
            "placeholder_description", DEFAULT_PLACEHOLDER_DESCRIPTION
        ),
    )
    return ExtractionChain(strategies)


def build_pipeline(
    custom_settings: Settings | None = None,
    from_file: bool = False,
    config_path: str = "config/config.yaml",
    http_client: httpx.AsyncClient | None = None,
) -> tuple[CatalogSyncPipeline, dict[str, Any]]:
    """Construct the sync pipeline with injected dependencies.

    Returns
    -------
    tuple
        The pipeline and the resolved configuration it was built from.
    """
    logger = get_logger(__name__)
    config = load_config(config_path, settings=custom_settings or Settings())
    catalog = config.get("catalog", {})
    source_provider = build_source_provider(config, from_file, http_client=http_client)
    extraction_chain = build_extraction_chain(config)

    logger.debug(
        "pipeline_built",
        source=source_provider.get_provider_name(),
        strategies=extraction_chain.strategy_names,
        config_path=config_path,
    )
    pipeline = CatalogSyncPipeline(
        source_provider=source_provider,
        extraction_chain=extraction_chain,
        catalog_builder=CatalogBuilder(allow_cjk=bool(catalog.get("cjk_identifiers", True))),
        catalog_writer=CatalogWriter(),
    )
    return pipeline, config


async def run_sync(
    pipeline: CatalogSyncPipeline,
    config: dict[str, Any],
    location: str | None = None,
    version: str | None = None,
    output_path: str | None = None,
    index_path: str | None = None,
    default_category: str | None = None,
) -> SyncResult:
    """Run *pipeline* once, filling unset arguments from *config*.

    The pipeline's source provider is closed afterwards, even on failure.
    """
    output = config.get("output", {})
    resolved_version = version or default_version()
    out_dir = Path(output.get("dir", "public/data"))

    try:
        return await pipeline.run(
            location=location or config.get("source", {}).get("url", ""),
            version=resolved_version,
            catalog_path=Path(output_path) if output_path else out_dir / catalog_filename(resolved_version),
            index_path=Path(index_path or output.get("index_path") or out_dir / "index.json"),
            default_category=default_category or config.get("catalog", {}).get("default_category", "Official Wiki"),
        )
    finally:
        await pipeline.close()
