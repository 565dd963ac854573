"""Unit tests for the extraction fallback chain."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from src.interfaces.extraction_strategy import IExtractionStrategy
from src.models.extraction import ExtractedAchievement, ExtractedCategory
from src.services.extraction.chain import (
    DEFAULT_STRATEGY_ORDER,
    ExtractionChain,
    build_strategies,
)
from src.services.extraction.heuristic import HeadingListStrategy, TableStrategy
from src.utils.errors import ConfigurationError


def _strategy(name: str, result: list[ExtractedCategory]) -> MagicMock:
    mock = MagicMock(spec=IExtractionStrategy)
    mock.get_strategy_name.return_value = name
    mock.extract.return_value = result
    return mock


def _category(name: str) -> ExtractedCategory:
    return ExtractedCategory(
        name=name,
        items=(ExtractedAchievement(name="Explorer", description="Visit 10 regions"),),
    )


class TestExtractionChain:
    """Tests for ordered first-hit extraction."""

    def test_first_non_empty_result_wins(self) -> None:
        empty = _strategy("a", [])
        hit = _strategy("b", [_category("B")])
        never = _strategy("c", [_category("C")])

        name, categories = ExtractionChain([empty, hit, never]).extract("<html/>", "Wiki")

        assert name == "b"
        assert [c.name for c in categories] == ["B"]
        never.extract.assert_not_called()

    def test_results_are_not_merged(self) -> None:
        first = _strategy("a", [_category("A")])
        second = _strategy("b", [_category("B")])
        _, categories = ExtractionChain([first, second]).extract("<html/>", "Wiki")
        assert [c.name for c in categories] == ["A"]

    def test_all_empty(self) -> None:
        chain = ExtractionChain([_strategy("a", []), _strategy("b", [])])
        assert chain.extract("<html/>", "Wiki") == (None, [])

    def test_passes_default_category(self) -> None:
        strategy = _strategy("a", [])
        ExtractionChain([strategy]).extract("<p/>", "Official Wiki")
        strategy.extract.assert_called_once_with("<p/>", "Official Wiki")

    def test_empty_chain_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            ExtractionChain([])

    def test_strategy_names(self) -> None:
        chain = ExtractionChain([_strategy("x", []), _strategy("y", [])])
        assert chain.strategy_names == ["x", "y"]


class TestDefaultChainOnSamplePages:
    """The default order picks the most specific strategy for each layout."""

    @pytest.fixture
    def chain(self) -> ExtractionChain:
        return ExtractionChain(build_strategies())

    def test_tree_payload(self, chain: ExtractionChain, nuxt_tree_html: str) -> None:
        name, categories = chain.extract(nuxt_tree_html, "Official Wiki")
        assert name == "structured_tree"
        assert [c.name for c in categories] == ["Combat", "Collection"]

    def test_flat_payload(self, chain: ExtractionChain, next_data_html: str) -> None:
        name, _ = chain.extract(next_data_html, "Official Wiki")
        assert name == "structured_flat"

    def test_titled_page_wrapper_keeps_record_categories(self, chain: ExtractionChain) -> None:
        payload = {
            "props": {
                "pageProps": {
                    "title": "Achievements",
                    "list": [
                        {"name": "Explorer", "description": "Visit 10 regions", "category": "World"},
                        {"name": "First Blood", "description": "Win your first battle", "category": "Combat"},
                    ],
                }
            }
        }
        html = f'<script id="__NEXT_DATA__">{json.dumps(payload)}</script>'

        _, categories = chain.extract(html, "Official Wiki")

        assert [(c.name, [i.name for i in c.items]) for c in categories] == [
            ("World", ["Explorer"]),
            ("Combat", ["First Blood"]),
        ]

    def test_table(self, chain: ExtractionChain, table_html: str) -> None:
        name, categories = chain.extract(table_html, "Official Wiki")
        assert name == "table"
        assert categories[0].name == "Official Wiki"

    def test_heading_list(self, chain: ExtractionChain, heading_list_html: str) -> None:
        name, _ = chain.extract(heading_list_html, "Official Wiki")
        assert name == "heading_list"

    def test_garbage(self, chain: ExtractionChain, garbage_html: str) -> None:
        assert chain.extract(garbage_html, "Official Wiki") == (None, [])


class TestBuildStrategies:
    """Tests for building strategies from configuration keys."""

    def test_default_order(self) -> None:
        names = [s.get_strategy_name() for s in build_strategies()]
        assert names == list(DEFAULT_STRATEGY_ORDER)

    def test_custom_order_preserved(self) -> None:
        strategies = build_strategies(["heading_list", "table"])
        assert isinstance(strategies[0], HeadingListStrategy)
        assert isinstance(strategies[1], TableStrategy)

    def test_unknown_strategy_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown extraction strategy 'regex'"):
            build_strategies(["table", "regex"])

    def test_header_tokens_forwarded(self) -> None:
        html = (
            "<table><tr><td>Title</td><td>Goal</td></tr>"
            "<tr><td>Explorer</td><td>Visit 10 regions</td></tr></table>"
        )
        (table,) = build_strategies(["table"], header_tokens=["title"])
        assert [i.name for i in table.extract(html, "Wiki")[0].items] == ["Explorer"]
