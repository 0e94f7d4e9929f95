"""Tests for terminal rendering helpers."""

from promptsmith.builder import BuilderOptions
from promptsmith.cli_helpers import (
    display_error,
    display_insights,
    display_keywords,
    display_metrics,
    display_prompt,
    display_success,
    display_synthesis,
)
from promptsmith.engine import synthesize_prompt


class TestDisplayFunctions:
    """Test the display helpers print the expected panels."""

    def test_display_prompt_empty(self, empty_sections, capsys):
        display_prompt(synthesize_prompt(empty_sections, BuilderOptions()))

        assert "(empty prompt)" in capsys.readouterr().out

    def test_display_metrics(self, filled_sections, complete_options, capsys):
        result = synthesize_prompt(filled_sections, complete_options)

        display_metrics(result)

        out = capsys.readouterr().out
        assert f"QUALITY SCORE: {result.metrics.overall * 100:.0f}%" in out
        assert "Structure    ████████████████████ 100%" in out
        assert f"Word Count: {result.metrics.word_count}" in out

    def test_display_insights_lists_findings_and_improvements(self, empty_sections, capsys):
        display_insights(synthesize_prompt(empty_sections, BuilderOptions()))

        out = capsys.readouterr().out
        assert "1. 🛑 [CRITICAL]" in out
        assert "Suggestion:" in out
        assert "QUICK IMPROVEMENTS:" in out
        assert "[constraints] Add guardrail" in out

    def test_display_insights_when_clean(self, filled_sections, complete_options, capsys):
        options = complete_options.model_copy(update={"creativity_level": 1, "temperature": 0.2})

        display_insights(synthesize_prompt(filled_sections, options))

        out = capsys.readouterr().out
        assert "Looking sharp" in out
        assert "QUICK IMPROVEMENTS" not in out

    def test_display_keywords(self, filled_sections, complete_options, empty_sections, capsys):
        display_keywords(synthesize_prompt(filled_sections, complete_options))
        display_keywords(synthesize_prompt(empty_sections, complete_options))

        out = capsys.readouterr().out
        assert "#northwind" in out
        assert "(add content to surface themes)" in out

    def test_display_synthesis_prints_every_panel(self, filled_sections, complete_options, capsys):
        display_synthesis(synthesize_prompt(filled_sections, complete_options))

        out = capsys.readouterr().out
        for heading in ("ASSEMBLED PROMPT", "QUALITY SCORE", "INSIGHTS", "Keywords"):
            assert heading in out

    def test_display_error_and_success(self, capsys):
        display_error("Catalog file not found")
        display_success("Snapshot written")

        out = capsys.readouterr().out
        assert "❌ ERROR" in out
        assert "Catalog file not found" in out
        assert "✅ SUCCESS" in out
