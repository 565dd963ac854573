"""Heuristic HTML extraction for pages without an embedded payload.

Two layouts show up on the wiki:

- **Tables** - one achievement per ``<tr>``: name in the first cell, the
  remaining cells (requirement, reward, ...) joined into the description.
- **Heading lists** - an ``<h2>``/``<h3>``/``<h4>`` per category followed
  by ``<li>`` entries written as ``Name: description`` (the colon may be the
  full-width ``：``).

Markup is parsed with BeautifulSoup's ``html.parser``, which tolerates
unclosed and mis-nested tags, so malformed pages degrade to "no categories"
rather than raising.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from src.interfaces.extraction_strategy import IExtractionStrategy
from src.models.extraction import ExtractedAchievement, ExtractedCategory
from src.utils.text_normalizer import normalize_text

DEFAULT_HEADER_TOKENS = ("achievement", "name", "成就", "名称")
DEFAULT_PLACEHOLDER_DESCRIPTION = "No description from source content."

_HEADING_TAGS = ["h2", "h3", "h4"]
_SEPARATORS = (":", "：")
_CELL_JOINER = " | "


def _tag_text(tag: Tag) -> str:
    return normalize_text(tag.decode_contents())


class TableStrategy(IExtractionStrategy):
    """One achievement per table row, all placed in the default category."""

    def __init__(self, header_tokens: tuple[str, ...] = DEFAULT_HEADER_TOKENS) -> None:
        self._header_tokens = tuple(token.lower() for token in header_tokens)

    def _is_header(self, name: str) -> bool:
        lowered = name.lower()
        return any(token in lowered for token in self._header_tokens)

    def extract(self, html: str, default_category: str) -> list[ExtractedCategory]:
        soup = BeautifulSoup(html, "html.parser")
        items: list[ExtractedAchievement] = []

        for row in soup.find_all("tr"):
            cells = [_tag_text(cell) for cell in row.find_all(["td", "th"], recursive=False)]
            if len(cells) < 2:
                continue

            name = cells[0]
            description = _CELL_JOINER.join(cells[1:])
            if not name or not description or self._is_header(name):
                continue

            items.append(ExtractedAchievement(name=name, description=description))

        if not items:
            return []
        return [ExtractedCategory(name=default_category, items=tuple(items))]

    def get_strategy_name(self) -> str:
        return "table"


class HeadingListStrategy(IExtractionStrategy):
    """Each heading starts a category; its list items are the achievements."""

    def __init__(self, placeholder_description: str = DEFAULT_PLACEHOLDER_DESCRIPTION) -> None:
        self._placeholder = placeholder_description

    def _split_line(self, line: str) -> ExtractedAchievement | None:
        positions = [line.find(sep) for sep in _SEPARATORS if sep in line]
        if not positions:
            name, description = line, ""
        else:
            cut = min(positions)
            name, description = line[:cut].strip(), line[cut + 1 :].strip()

        if not name:
            return None
        return ExtractedAchievement(name=name, description=description or self._placeholder)

    def extract(self, html: str, default_category: str) -> list[ExtractedCategory]:
        soup = BeautifulSoup(html, "html.parser")
        categories: list[ExtractedCategory] = []

        for heading in soup.find_all(_HEADING_TAGS):
            category_name = _tag_text(heading)
            if not category_name:
                continue

            items: list[ExtractedAchievement] = []
            for element in heading.find_all_next([*_HEADING_TAGS, "li"]):
                if element.name in _HEADING_TAGS:
                    break
                record = self._split_line(_tag_text(element))
                if record is not None:
                    items.append(record)

            if items:
                categories.append(ExtractedCategory(name=category_name, items=tuple(items)))

        return categories

    def get_strategy_name(self) -> str:
        return "heading_list"
