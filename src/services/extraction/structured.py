"""Structured-data extraction from payloads embedded in the wiki page.

Modern wiki front-ends ship their page state as JSON inside ``<script>``
blocks.  When that state is present it is far more reliable than scraping
rendered markup, so these strategies run first in the extraction chain.

Payloads are located in three ways, in document order:

1. ``<script id="__NEXT_DATA__">`` - hydration payload, strict JSON.
2. ``window.__NUXT__ = {...}`` and similar global-state assignments - object
   literals that are usually *almost* JSON (unquoted keys, single quotes,
   trailing commas).  They are parsed with ``json5``, which only ever builds
   literal values and never evaluates code.
3. Any other script whose body is a bare JSON object or array (for example
   ``application/ld+json``).

A payload that fails to parse is skipped silently; the heuristic HTML
strategies exist for exactly the case where nothing here works.

The page JSON has no documented schema, so records are found by shape:
:class:`StructuredFlatStrategy` collects every object in the payload and
keeps those that "look like" an achievement, while
:class:`StructuredTreeStrategy` follows category → children nesting for
pages that expose an explicit tree.
"""

from __future__ import annotations

import json
import math
import re
from abc import abstractmethod
from collections.abc import Iterator
from typing import Any

import json5
import structlog
from bs4 import BeautifulSoup

from src.interfaces.extraction_strategy import IExtractionStrategy
from src.models.extraction import ExtractedAchievement, ExtractedCategory, group_by_category
from src.utils.errors import ParseError

logger = structlog.get_logger(logger_name=__name__)

_HYDRATION_SCRIPT_ID = "__NEXT_DATA__"
_STATE_ASSIGNMENT = re.compile(
    r"(?:window\.)?(?:__NUXT__|__INITIAL_STATE__|__PRELOADED_STATE__|__APOLLO_STATE__)\s*=\s*"
)

# Alias lists are tried in order; the first non-empty value wins.
NAME_KEYS = ("name", "title", "label", "achievementName")
DESCRIPTION_KEYS = ("description", "desc", "content", "summary")
CATEGORY_KEYS = ("category", "group", "type")
POINTS_KEYS = ("points", "score", "point")
URL_KEYS = ("url", "link")

_TREE_NAME_KEYS = ("name", "title")
_TREE_DESCRIPTION_KEYS = ("description", "desc", "content")
_TREE_CHILD_KEYS = ("children", "items", "list", "achievements", "nodes")


# ---------------------------------------------------------------------------
# Payload location and parsing
# ---------------------------------------------------------------------------


def _slice_literal(text: str, start: int) -> str | None:
    """Return the balanced ``{...}`` / ``[...]`` literal beginning at *start*.

    Brackets inside quoted strings are ignored.  Returns ``None`` when the
    literal is not closed before the end of *text*.
    """
    if start >= len(text) or text[start] not in "{[":
        return None

    depth = 0
    quote: str | None = None
    escaped = False
    for pos in range(start, len(text)):
        char = text[pos]
        if quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif char in "\"'`":
            quote = char
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
            if depth == 0:
                return text[start : pos + 1]
    return None


def parse_strict(raw: str) -> Any:
    """Parse *raw* as strict JSON, raising :class:`ParseError` on failure."""
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as exc:
        raise ParseError(f"Invalid JSON payload: {exc}") from exc


def parse_permissive(raw: str) -> Any:
    """Parse a JavaScript object literal as JSON5 (literal values only)."""
    try:
        return json5.loads(raw)
    except (ValueError, TypeError, RecursionError) as exc:
        raise ParseError(f"Invalid object literal: {exc}") from exc


def _script_payload(script_text: str, is_hydration: bool) -> tuple[str, str] | None:
    """Decide how a script body should be parsed.

    Returns ``(mode, raw)`` where mode is ``"strict"`` or ``"permissive"``,
    or ``None`` when the script carries no recognisable payload.
    """
    content = script_text.strip()
    if not content:
        return None
    if is_hydration:
        return "strict", content

    match = _STATE_ASSIGNMENT.search(content)
    if match:
        literal = _slice_literal(content, match.end())
        return ("permissive", literal) if literal else None

    if content[0] in "{[":
        return "strict", content
    return None


def locate_payloads(html: str) -> list[Any]:
    """Find and parse every embedded payload in *html*, in document order."""
    soup = BeautifulSoup(html, "html.parser")
    payloads: list[Any] = []

    for script in soup.find_all("script"):
        is_hydration = script.get("id") == _HYDRATION_SCRIPT_ID
        found = _script_payload(script.string or script.get_text() or "", is_hydration)
        if found is None:
            continue

        mode, raw = found
        try:
            payload = parse_strict(raw) if mode == "strict" else parse_permissive(raw)
        except ParseError as exc:
            logger.debug("payload_parse_failed", mode=mode, error=str(exc))
            continue
        payloads.append(payload)

    return payloads


# ---------------------------------------------------------------------------
# Field lookup
# ---------------------------------------------------------------------------


def iter_objects(value: Any) -> Iterator[dict[str, Any]]:
    """Yield every dict inside *value*, depth-first, parents before children."""
    stack: list[Any] = [value]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            yield current
            stack.extend(reversed(list(current.values())))
        elif isinstance(current, list):
            stack.extend(reversed(current))


def looks_like_achievement(obj: dict[str, Any]) -> bool:
    """Shape test for an achievement record in schema-less JSON.

    Requires at least two non-empty string fields; in key order, the first
    must be at least 2 characters and the second at least 4.  Numeric,
    boolean and nested fields are ignored.
    """
    texts = [value.strip() for value in obj.values() if isinstance(value, str)]
    texts = [text for text in texts if text]
    if len(texts) < 2:
        return False
    return len(texts[0]) >= 2 and len(texts[1]) >= 4


def _scalar_text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def pick_text(obj: dict[str, Any], keys: tuple[str, ...]) -> str:
    """Return the first non-empty scalar among *keys*, as stripped text."""
    for key in keys:
        text = _scalar_text(obj.get(key))
        if text:
            return text
    return ""


def pick_points(obj: dict[str, Any]) -> int | float | None:
    """Return the first present points alias as a finite number, else ``None``."""
    for key in POINTS_KEYS:
        raw = obj.get(key)
        if raw is None:
            continue
        if isinstance(raw, bool):
            return None
        try:
            number = float(raw)
        except (TypeError, ValueError, OverflowError):
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def record_from_object(
    obj: dict[str, Any],
    name_keys: tuple[str, ...] = NAME_KEYS,
    description_keys: tuple[str, ...] = DESCRIPTION_KEYS,
) -> ExtractedAchievement | None:
    """Materialize an :class:`ExtractedAchievement`, or ``None`` if incomplete."""
    name = pick_text(obj, name_keys)
    description = pick_text(obj, description_keys)
    if not name or not description:
        return None

    return ExtractedAchievement(
        name=name,
        description=description,
        category=pick_text(obj, CATEGORY_KEYS) or None,
        points=pick_points(obj),
        wiki_url=pick_text(obj, URL_KEYS) or None,
    )


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class _StructuredStrategy(IExtractionStrategy):
    """Shared payload handling for the structured strategies."""

    def extract(self, html: str, default_category: str) -> list[ExtractedCategory]:
        payloads = locate_payloads(html)
        if not payloads:
            return []
        return self.extract_from_payloads(payloads, default_category)

    @abstractmethod
    def extract_from_payloads(
        self, payloads: list[Any], default_category: str
    ) -> list[ExtractedCategory]:
        """Extract categories from already-parsed payloads."""


class StructuredFlatStrategy(_StructuredStrategy):
    """Collect every achievement-shaped object and group by its own category."""

    def extract_from_payloads(
        self, payloads: list[Any], default_category: str
    ) -> list[ExtractedCategory]:
        records: list[ExtractedAchievement] = []
        for payload in payloads:
            for obj in iter_objects(payload):
                if not looks_like_achievement(obj):
                    continue
                record = record_from_object(obj)
                if record is not None:
                    records.append(record)

        return group_by_category(records, default_category)

    def get_strategy_name(self) -> str:
        return "structured_flat"


class StructuredTreeStrategy(_StructuredStrategy):
    """Follow explicit category nodes and attach items to the nearest one.

    A node with a name, no description and at least one child array is a
    category.  A node with both name and description inside a category is
    an item.  Items outside any category are ignored; the flat strategy
    picks those up.

    An item's own category alias takes precedence over the enclosing node,
    so a page wrapper such as ``{title: "Achievements", list: [...]}`` does
    not swallow the categories its records already carry.
    """

    def extract_from_payloads(
        self, payloads: list[Any], default_category: str
    ) -> list[ExtractedCategory]:
        records: list[ExtractedAchievement] = []
        for payload in payloads:
            self._visit(payload, None, records)

        return group_by_category(records, default_category)

    def _visit(
        self,
        node: Any,
        current: str | None,
        records: list[ExtractedAchievement],
    ) -> None:
        if isinstance(node, list):
            for entry in node:
                self._visit(entry, current, records)
            return
        if not isinstance(node, dict):
            return

        name = pick_text(node, _TREE_NAME_KEYS)
        description = pick_text(node, _TREE_DESCRIPTION_KEYS)
        child_lists = [node[key] for key in _TREE_CHILD_KEYS if isinstance(node.get(key), list)]

        if name and child_lists and not description:
            for children in child_lists:
                self._visit(children, name, records)
            return

        if name and description and current is not None:
            record = record_from_object(node, _TREE_NAME_KEYS, _TREE_DESCRIPTION_KEYS)
            if record is not None:
                records.append(record.model_copy(update={"category": record.category or current}))
            return

        for value in node.values():
            if isinstance(value, (dict, list)):
                self._visit(value, current, records)

    def get_strategy_name(self) -> str:
        return "structured_tree"
