"""Extraction strategies that turn a wiki page into achievement categories."""

from src.services.extraction.chain import (
    DEFAULT_STRATEGY_ORDER,
    ExtractionChain,
    build_strategies,
)
from src.services.extraction.heuristic import HeadingListStrategy, TableStrategy
from src.services.extraction.structured import (
    StructuredFlatStrategy,
    StructuredTreeStrategy,
    locate_payloads,
)

__all__ = [
    "DEFAULT_STRATEGY_ORDER",
    "ExtractionChain",
    "HeadingListStrategy",
    "StructuredFlatStrategy",
    "StructuredTreeStrategy",
    "TableStrategy",
    "build_strategies",
    "locate_payloads",
]
