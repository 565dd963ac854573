"""Shared pytest fixtures for the achievement catalog sync test suite."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from src.config.settings import Settings
from src.interfaces.source_provider import ISourceProvider, SourceDocument
from src.models.catalog import (
    AchievementCatalog,
    AchievementCategory,
    AchievementItem,
    AchievementMeta,
)

# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

NEXT_DATA_HTML = """<!DOCTYPE html>
<html><head><title>Achievements</title></head>
<body>
<div id="__next"></div>
<script id="__NEXT_DATA__" type="application/json">
{"props": {"pageProps": {"achievements": [
  {"name": "Explorer", "description": "Visit 10 regions", "category": "Exploration", "points": 10},
  {"name": "Cartographer", "description": "Unlock every waypoint", "category": "Exploration",
   "url": "https://wiki.example.com/cartographer"},
  {"name": "First Blood", "description": "Win your first battle", "category": "Combat", "points": "5"}
]}}}
</script>
</body></html>
"""

NUXT_TREE_HTML = """<html><body>
<script>window.__NUXT__ = {
  data: [{
    catalog: {
      title: 'Root',
      children: [
        {name: 'Combat', items: [
          {name: 'Sharpshooter', desc: 'Land 100 critical hits'},
          {name: 'Survivor', desc: 'Win a fight below 5% HP'},
        ]},
        {name: 'Collection', items: [
          {name: 'Hoarder', desc: 'Own 500 items'},
        ]},
      ],
    },
  }],
};</script>
</body></html>
"""

TABLE_HTML = """<html><body>
<table>
  <tr><th>Achievement</th><th>Requirement</th><th>Reward</th></tr>
  <tr><td>First Blood</td><td>Win a match</td><td>5 Astrite</td></tr>
  <tr><td><b>Explorer</b></td><td>Visit 10&nbsp;regions</td><td>10 Astrite</td></tr>
  <tr><td>Lonely cell</td></tr>
</table>
</body></html>
"""

HEADING_LIST_HTML = """<html><body>
<h2>Exploration</h2>
<ul>
  <li>Explorer: Visit 10 regions</li>
  <li>Cartographer：Unlock every waypoint</li>
</ul>
<h3>Secrets</h3>
<ul>
  <li>Hidden Door</li>
</ul>
<h2>Empty Section</h2>
<p>No list here.</p>
</body></html>
"""

GARBAGE_HTML = "this is not a wiki page at all"


@pytest.fixture
def next_data_html() -> str:
    return NEXT_DATA_HTML


@pytest.fixture
def nuxt_tree_html() -> str:
    return NUXT_TREE_HTML


@pytest.fixture
def table_html() -> str:
    return TABLE_HTML


@pytest.fixture
def heading_list_html() -> str:
    return HEADING_LIST_HTML


@pytest.fixture
def garbage_html() -> str:
    return GARBAGE_HTML


# ---------------------------------------------------------------------------
# Models and settings
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_catalog() -> AchievementCatalog:
    """A small two-category catalog."""
    return AchievementCatalog(
        version="1",
        updated_at="2026-02-21",
        categories=(
            AchievementCategory(
                id="cat_exploration",
                name="Exploration",
                items=(
                    AchievementItem(
                        id="achv_explorer_1",
                        name="Explorer",
                        description="Visit 10 regions",
                        optional_meta=AchievementMeta(points=10),
                    ),
                    AchievementItem(
                        id="achv_cartographer_2",
                        name="Cartographer",
                        description="Unlock every waypoint",
                    ),
                ),
            ),
            AchievementCategory(
                id="cat_combat",
                name="Combat",
                items=(
                    AchievementItem(
                        id="achv_first_blood_1",
                        name="First Blood",
                        description="Win a match",
                    ),
                ),
            ),
        ),
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing all output into a temporary directory."""
    return Settings(
        source_url="https://wiki.example.com/achievements",
        output_dir=str(tmp_path / "data"),
        index_path="",
        default_category="Official Wiki",
        app_env="test",
        log_level="WARNING",
    )


@pytest.fixture
def write_json():
    """Write a JSON payload to a path and return the path."""

    def _write(path: Path, payload) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Mock provider fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_source_provider():
    """Build a mock ISourceProvider that serves the given HTML."""

    def _make(html: str, location: str = "https://wiki.example.com/achievements") -> ISourceProvider:
        mock = MagicMock(spec=ISourceProvider)
        mock.get_provider_name.return_value = "mock-source"
        mock.fetch_document = AsyncMock(return_value=SourceDocument(location=location, html=html))
        mock.close = AsyncMock(return_value=None)
        return mock

    return _make


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo configure_logging() calls made by CLI tests."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
