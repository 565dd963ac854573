"""Intermediate records emitted by the extraction strategies.

Source pages have no documented schema, so extractors search untyped JSON
and loose markup field-by-field and only produce these small records once
a name and description are known.  Identifiers are deliberately absent:
the catalog builder assigns them after grouping and de-duplication, so the
strategies never need to agree on identifier rules.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ExtractedAchievement(BaseModel):
    """An achievement-shaped record found in the source document."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    category: str | None = None         # Category named by the record itself, if any
    points: int | float | None = None
    wiki_url: str | None = None


class ExtractedCategory(BaseModel):
    """A category name plus the records found under it, in source order."""

    model_config = ConfigDict(frozen=True)

    name: str
    items: tuple[ExtractedAchievement, ...] = ()


def group_by_category(
    records: list[ExtractedAchievement],
    default_category: str,
) -> list[ExtractedCategory]:
    """Bucket *records* by their category, keeping first-seen order.

    Records without a category go to *default_category*.  Categories with no
    records never appear in the result.
    """
    grouped: dict[str, list[ExtractedAchievement]] = {}
    for record in records:
        grouped.setdefault(record.category or default_category, []).append(record)

    return [
        ExtractedCategory(name=name, items=tuple(items))
        for name, items in grouped.items()
        if items
    ]
