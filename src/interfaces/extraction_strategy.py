"""Abstract base class for achievement extraction strategies.

Each strategy turns a whole HTML document into categories of
achievement-shaped records.  Strategies are tried in order by
:class:`src.services.extraction.chain.ExtractionChain`; the first non-empty
result wins and results are never merged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.extraction import ExtractedCategory


class IExtractionStrategy(ABC):
    """Contract for a single way of finding achievements in a document."""

    @abstractmethod
    def extract(self, html: str, default_category: str) -> list[ExtractedCategory]:
        """Extract categories from *html*.

        Parameters
        ----------
        html:
            The full source document.
        default_category:
            Category name used for records that do not name their own.

        Returns
        -------
        list[ExtractedCategory]
            Categories in source order, each with at least one item.  An
            empty list means "nothing recognisable", never an error.
        """

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Return the configuration key of this strategy, e.g. ``"table"``."""
