"""Abstract base class for source-document providers.

A sync reads exactly one HTML document per run, either from the wiki over
HTTP or from a saved copy on disk (useful for debugging the extractors
against a page that changed).  The adapter pattern keeps the pipeline
independent of where the document comes from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceDocument:
    """A fetched HTML document.

    Attributes
    ----------
    location:
        The URL or file path the document was loaded from.
    html:
        The decoded document text.
    status_code:
        HTTP status for fetched documents, ``None`` for local files.
    """

    location: str
    html: str
    status_code: int | None = None


class ISourceProvider(ABC):
    """Contract for services that load the source HTML document."""

    @abstractmethod
    async def fetch_document(self, location: str) -> SourceDocument:
        """Load the document at *location*.

        Parameters
        ----------
        location:
            A URL or a filesystem path, depending on the provider.

        Returns
        -------
        SourceDocument
            The loaded document.

        Raises
        ------
        src.utils.errors.FetchError
            If the document cannot be retrieved.  Always fatal for a sync.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier such as ``"http"`` or ``"file"``."""

    async def close(self) -> None:
        """Release any resources held by the provider."""
