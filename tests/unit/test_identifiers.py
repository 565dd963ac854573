"""Unit tests for the identifier builder."""

from __future__ import annotations

import re

import pytest

from src.utils.identifiers import build_identifier, slugify

_ASCII_ID = re.compile(r"^achv_[a-z0-9_]*$")
_CJK_ID = re.compile(r"^achv_[a-z0-9_一-龥]*$")


class TestSlugify:
    """Tests for slugify."""

    def test_lowercases_and_joins_words(self) -> None:
        assert slugify("First Blood") == "first_blood"

    def test_collapses_runs_of_punctuation(self) -> None:
        assert slugify("Hello,   World!!!") == "hello_world"

    def test_trims_leading_and_trailing_underscores(self) -> None:
        assert slugify("  --Explorer--  ") == "explorer"

    def test_keeps_cjk_by_default(self) -> None:
        assert slugify("成就 大师") == "成就_大师"

    def test_ascii_only_drops_cjk(self) -> None:
        assert slugify("大师 Master", allow_cjk=False) == "master"

    def test_underscore_in_input_is_collapsed(self) -> None:
        assert slugify("a__b") == "a_b"


class TestBuildIdentifier:
    """Tests for build_identifier."""

    def test_prefix_is_prepended(self) -> None:
        assert build_identifier("Exploration", "cat") == "cat_exploration"

    def test_item_seed_with_position(self) -> None:
        assert build_identifier("First Blood_1", "achv") == "achv_first_blood_1"

    def test_deterministic_for_same_input(self) -> None:
        assert build_identifier("Sharp Shooter!", "achv") == build_identifier("Sharp Shooter!", "achv")

    def test_different_prefix_differs(self) -> None:
        assert build_identifier("x", "cat") != build_identifier("x", "achv")

    def test_empty_core_falls_back_to_digest(self) -> None:
        identifier = build_identifier("!!!", "achv")
        assert re.fullmatch(r"achv_[0-9a-f]{6}", identifier)

    def test_empty_core_fallback_is_deterministic(self) -> None:
        assert build_identifier("???", "achv") == build_identifier("???", "achv")

    def test_empty_core_fallback_distinguishes_inputs(self) -> None:
        assert build_identifier("???", "achv") != build_identifier("!!!", "achv")

    def test_empty_string_still_yields_identifier(self) -> None:
        identifier = build_identifier("", "cat")
        assert identifier.startswith("cat_")
        assert len(identifier) > len("cat_")

    @pytest.mark.parametrize(
        "text",
        ["First Blood", "  spaced  out  ", "__edge__", "Ünïcödé name", "100% Done!", "★★★", "a-b-c"],
    )
    def test_ascii_output_matches_charset(self, text: str) -> None:
        identifier = build_identifier(text, "achv", allow_cjk=False)
        assert _ASCII_ID.match(identifier)
        core = identifier[len("achv_"):]
        assert not core.startswith("_")
        assert not core.endswith("_")

    @pytest.mark.parametrize("text", ["成就大师", "深渊 Abyss 12", "名称：测试"])
    def test_cjk_output_matches_extended_charset(self, text: str) -> None:
        identifier = build_identifier(text, "achv")
        assert _CJK_ID.match(identifier)
        core = identifier[len("achv_"):]
        assert core and not core.startswith("_") and not core.endswith("_")
