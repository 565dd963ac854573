"""Ordered fallback chain over extraction strategies.

Strategies are tried in order and the first non-empty result is returned
as-is.  Results from different strategies are never merged: a structured
payload and a scraped table describe the same achievements in different
shapes, and merging them would produce duplicates with unrelated ids.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from src.interfaces.extraction_strategy import IExtractionStrategy
from src.models.extraction import ExtractedCategory
from src.services.extraction.heuristic import (
    DEFAULT_HEADER_TOKENS,
    DEFAULT_PLACEHOLDER_DESCRIPTION,
    HeadingListStrategy,
    TableStrategy,
)
from src.services.extraction.structured import StructuredFlatStrategy, StructuredTreeStrategy
from src.utils.errors import ConfigurationError

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_STRATEGY_ORDER = ("structured_tree", "structured_flat", "table", "heading_list")


class ExtractionChain:
    """Runs strategies in priority order and stops at the first hit."""

    def __init__(self, strategies: Sequence[IExtractionStrategy]) -> None:
        if not strategies:
            raise ConfigurationError("Extraction chain needs at least one strategy")
        self._strategies = list(strategies)

    @property
    def strategy_names(self) -> list[str]:
        return [strategy.get_strategy_name() for strategy in self._strategies]

    def extract(self, html: str, default_category: str) -> tuple[str | None, list[ExtractedCategory]]:
        """Return ``(strategy_name, categories)`` for the first non-empty strategy.

        ``(None, [])`` means every strategy came up empty.
        """
        for strategy in self._strategies:
            name = strategy.get_strategy_name()
            categories = strategy.extract(html, default_category)
            if categories:
                logger.info(
                    "strategy_matched",
                    strategy=name,
                    categories=len(categories),
                    items=sum(len(category.items) for category in categories),
                )
                return name, categories
            logger.debug("strategy_empty", strategy=name)

        return None, []


def build_strategies(
    order: Sequence[str] = DEFAULT_STRATEGY_ORDER,
    header_tokens: Sequence[str] = DEFAULT_HEADER_TOKENS,
    placeholder_description: str = DEFAULT_PLACEHOLDER_DESCRIPTION,
) -> list[IExtractionStrategy]:
    """Instantiate strategies by configuration key, preserving *order*.

    Raises:
        ConfigurationError: If *order* names an unknown strategy.
    """
    factories = {
        "structured_tree": StructuredTreeStrategy,
        "structured_flat": StructuredFlatStrategy,
        "table": lambda: TableStrategy(header_tokens=tuple(header_tokens)),
        "heading_list": lambda: HeadingListStrategy(placeholder_description=placeholder_description),
    }

    strategies: list[IExtractionStrategy] = []
    for key in order:
        factory = factories.get(key)
        if factory is None:
            raise ConfigurationError(
                f"Unknown extraction strategy '{key}'. Available: {', '.join(factories)}"
            )
        strategies.append(factory())
    return strategies
