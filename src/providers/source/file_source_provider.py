"""Local file source provider, for re-running extraction on a saved page."""

from __future__ import annotations

from pathlib import Path

import structlog

from src.interfaces.source_provider import ISourceProvider, SourceDocument
from src.utils.errors import FetchError

logger = structlog.get_logger(logger_name=__name__)


class FileSourceProvider(ISourceProvider):
    """Reads a saved HTML document from disk as UTF-8."""

    async def fetch_document(self, location: str) -> SourceDocument:
        path = Path(location)
        try:
            html = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(
                message=f"Cannot read input file {path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        logger.info("source_fetched", path=str(path), length=len(html))
        return SourceDocument(location=str(path), html=html)

    def get_provider_name(self) -> str:
        return "file"
