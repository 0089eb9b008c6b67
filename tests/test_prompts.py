"""Tests for wingit/prompts.py — field_checklist prompt text."""

from __future__ import annotations

import pytest

from wingit.prompts import build_field_checklist_prompt, day_range_label


class TestBuildFieldChecklistPrompt:
    def test_includes_location_and_range(self):
        text = build_field_checklist_prompt("Santa Fe, NM", "last 7 days")
        assert "Santa Fe, NM" in text
        assert "last 7 days" in text

    @pytest.mark.parametrize("snippet", [
        'tool "target_checklist"',
        "printable field checklist",
        '"targets" and "filters"',
        "high / medium / low",
        "Do not reprint the raw JSON; summarize it.",
    ])
    def test_core_instructions_present(self, snippet):
        assert snippet in build_field_checklist_prompt("Santa Fe, NM", "last 7 days")

    def test_blank_arguments_get_friendly_defaults(self):
        text = build_field_checklist_prompt("", "  ")
        assert "this area" in text
        assert "the recent period" in text


class TestDayRangeLabel:
    def test_plural(self):
        assert day_range_label(7) == "last 7 days"

    def test_singular(self):
        assert day_range_label(1) == "last day"
