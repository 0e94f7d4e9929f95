"""
Tests for builder actions.

This test suite verifies:
- Custom section creation and slug collisions
- Idempotent improvement application
- Suggestion replacement
- Guardrail and success-criterion toggles
- Template switching defaults and carry-over
- Export snapshot shape
"""

import json

import pytest
from pydantic import ValidationError

from promptsmith.builder import (
    BuilderOptions,
    SectionState,
    add_custom_section,
    add_guardrail,
    add_success_criterion,
    apply_improvement,
    apply_suggestion,
    available_guardrails,
    available_success_criteria,
    base_options_for_template,
    build_export_snapshot,
    export_filename,
    slugify,
    toggle_guardrail,
    toggle_success_criterion,
    update_section_value,
)
from promptsmith.builder.actions import (
    DEFAULT_AUDIENCE,
    DEFAULT_CUSTOM_DESCRIPTION,
    EXTRA_SUCCESS_CRITERION,
    append_snippet,
)
from promptsmith.catalog import PRESET_GUARDRAILS, PRESET_SUCCESS_CRITERIA
from promptsmith.engine import Improvement, Insight, Severity, synthesize_prompt


class TestSlugify:
    """Test slug derivation."""

    @pytest.mark.parametrize(
        "label, slug",
        [
            ("Brand Voice", "brand-voice"),
            ("  Brand Voice & Style! ", "brand-voice-style"),
            ("Q3 -- Targets", "q3-targets"),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, label, slug):
        assert slugify(label) == slug


class TestCustomSections:
    """Test add_custom_section."""

    def test_appends_section(self, empty_sections):
        sections = add_custom_section(empty_sections, "  Brand Voice ")

        assert len(sections) == len(empty_sections) + 1
        custom = sections[-1]
        assert custom.id == "brand-voice"
        assert custom.label == "Brand Voice"
        assert custom.description == DEFAULT_CUSTOM_DESCRIPTION
        assert custom.value == ""
        assert custom.required is False

    def test_keeps_given_description(self, empty_sections):
        sections = add_custom_section(empty_sections, "Rollout", "Phases and owners.")

        assert sections[-1].description == "Phases and owners."

    def test_collision_leaves_list_unchanged(self, empty_sections):
        sections = add_custom_section(empty_sections, "Objective")

        assert sections == empty_sections

    def test_blank_label_ignored(self, empty_sections):
        assert add_custom_section(empty_sections, "   ") == empty_sections
        assert add_custom_section(empty_sections, "???") == empty_sections

    def test_input_not_mutated(self, empty_sections):
        before = list(empty_sections)

        add_custom_section(empty_sections, "Rollout")

        assert empty_sections == before


class TestUpdateSectionValue:
    """Test update_section_value."""

    def test_updates_only_target(self, empty_sections):
        sections = update_section_value(empty_sections, "context", "New facts")

        assert sections[1].value == "New facts"
        assert empty_sections[1].value == ""
        assert all(s.value == "" for s in sections if s.id != "context")

    def test_unknown_id_is_noop(self, empty_sections):
        assert update_section_value(empty_sections, "nope", "x") == empty_sections

    def test_value_is_validated(self, empty_sections):
        with pytest.raises(ValidationError):
            update_section_value(empty_sections, "context", ["not", "text"])


class TestAppendSnippet:
    """Test append_snippet."""

    def test_appends_after_blank_line(self):
        assert append_snippet("First line.  ", "Snippet.") == "First line.\n\nSnippet."

    def test_empty_value_becomes_snippet(self):
        assert append_snippet("  ", "Snippet.") == "Snippet."

    def test_contained_snippet_returns_value_unchanged(self):
        value = "Keep  this\nSnippet.   \n"

        assert append_snippet(value, "Snippet.") is value


class TestApplyImprovement:
    """Test apply_improvement."""

    @pytest.fixture
    def improvement(self) -> Improvement:
        return Improvement(
            id="guardrail-preset",
            target_section_id="constraints",
            title="Add guardrail",
            snippet=f"Guardrail: {PRESET_GUARDRAILS[0]}",
        )

    def test_appends_to_target(self, filled_sections, improvement):
        sections = apply_improvement(filled_sections, improvement)
        constraints = next(s for s in sections if s.id == "constraints")

        assert constraints.value.endswith(f"\n\n{improvement.snippet}")
        assert constraints.value.startswith(filled_sections[2].value)

    def test_idempotent(self, filled_sections, improvement):
        once = apply_improvement(filled_sections, improvement)

        assert apply_improvement(once, improvement) == once

    def test_unknown_target_is_noop(self, filled_sections, improvement):
        stray = Improvement(id="x", target_section_id="missing", title="x", snippet="y")

        assert apply_improvement(filled_sections, stray) == filled_sections

    def test_applying_generated_improvements(self, empty_sections):
        result = synthesize_prompt(empty_sections, BuilderOptions())
        sections = empty_sections
        for improvement in result.improvements:
            sections = apply_improvement(sections, improvement)

        for improvement in result.improvements:
            target = next(s for s in sections if s.id == improvement.target_section_id)
            assert improvement.snippet in target.value


class TestApplySuggestion:
    """Test apply_suggestion."""

    def test_replaces_value(self, filled_sections):
        insight = Insight(
            id="missing-context",
            severity=Severity.CRITICAL,
            title="Context is empty",
            detail="",
            suggestion="Background: ...",
            target_section_id="context",
        )

        sections = apply_suggestion(filled_sections, insight)

        assert sections[1].value == "Background: ..."

    def test_without_suggestion_is_noop(self, filled_sections):
        insight = Insight(id="word-count-low", severity=Severity.WARNING, title="t", detail="d")

        assert apply_suggestion(filled_sections, insight) == filled_sections


class TestGuardrailsAndCriteria:
    """Test toggles and custom additions."""

    def test_toggle_guardrail_on_and_off(self):
        options = toggle_guardrail(BuilderOptions(), "No PII")
        assert options.guardrails == ["No PII"]

        options = toggle_guardrail(options, "No PII")
        assert options.guardrails == []

    def test_toggle_keeps_order(self):
        options = BuilderOptions(guardrails=["a", "b", "c"])

        assert toggle_guardrail(options, "b").guardrails == ["a", "c"]
        assert toggle_guardrail(options, "d").guardrails == ["a", "b", "c", "d"]

    def test_toggle_success_criterion(self):
        options = toggle_success_criterion(BuilderOptions(), PRESET_SUCCESS_CRITERIA[1])

        assert options.success_criteria == [PRESET_SUCCESS_CRITERIA[1]]

    def test_toggle_matches_padded_text(self):
        options = toggle_guardrail(BuilderOptions(), " Cite sources ")
        assert options.guardrails == ["Cite sources"]

        options = toggle_guardrail(options, "Cite sources")
        assert options.guardrails == []

    def test_toggle_result_stays_an_ordered_set(self):
        options = BuilderOptions(success_criteria=["Short"])
        # a copy built without validation can carry repeats; toggling repairs it
        options = options.model_copy(update={"success_criteria": ["Short", " Short "]})

        toggled = toggle_success_criterion(options, "Actionable")

        assert toggled.success_criteria == ["Short", "Actionable"]

    def test_toggle_keeps_options_clamped(self):
        options = BuilderOptions().model_copy(update={"creativity_level": 40})

        assert toggle_guardrail(options, "No PII").creativity_level == 10

    def test_toggle_does_not_mutate(self):
        options = BuilderOptions(guardrails=["a"])

        toggle_guardrail(options, "b")

        assert options.guardrails == ["a"]

    def test_add_guardrail(self):
        options = add_guardrail(BuilderOptions(), "  Respond in German.  ")

        assert options.guardrails == ["Respond in German."]

    def test_add_guardrail_ignores_blank_and_duplicates(self):
        options = BuilderOptions(guardrails=["a"])

        assert add_guardrail(options, "   ").guardrails == ["a"]
        assert add_guardrail(options, "a").guardrails == ["a"]

    def test_add_success_criterion(self):
        options = add_success_criterion(BuilderOptions(), "Names an owner")

        assert options.success_criteria == ["Names an owner"]
        assert add_success_criterion(options, "Names an owner").success_criteria == ["Names an owner"]


class TestTemplateSwitching:
    """Test base_options_for_template and the available vocabularies."""

    def test_fresh_options(self, catalog):
        template = catalog.template("strategic-brief")

        options = base_options_for_template(template, catalog=catalog)

        assert options.persona == template.persona
        assert options.tone == template.tone
        assert options.target_audience == DEFAULT_AUDIENCE
        assert options.response_format == template.output_format
        assert options.creativity_level == 6
        assert options.temperature == 0.6
        # template guardrails first, presets after, no repeats
        assert options.guardrails == [PRESET_GUARDRAILS[0], PRESET_GUARDRAILS[3], PRESET_GUARDRAILS[1]]
        # template criteria first, then presets 0, 2 and 3
        assert options.success_criteria == [
            PRESET_SUCCESS_CRITERIA[0],
            PRESET_SUCCESS_CRITERIA[4],
            PRESET_SUCCESS_CRITERIA[2],
            PRESET_SUCCESS_CRITERIA[3],
        ]

    def test_template_without_output_format_uses_default(self, catalog):
        options = base_options_for_template(catalog.template("research-synthesis"), catalog=catalog)

        assert options.response_format.startswith("Use structured markdown")

    def test_carries_previous_settings(self, catalog):
        previous = BuilderOptions(
            target_audience="Board members",
            response_format="Bullet list",
            creativity_level=9,
            temperature=0.9,
            tone="Old tone",
            persona="Old persona",
            guardrails=["Custom rule"],
            success_criteria=["Custom criterion"],
        )

        options = base_options_for_template(
            catalog.template("research-synthesis"), previous, catalog=catalog
        )

        assert options.target_audience == "Board members"
        assert options.response_format == "Bullet list"
        assert options.creativity_level == 9
        assert options.temperature == 0.9
        assert options.tone != "Old tone"
        assert options.persona != "Old persona"
        assert options.guardrails == [PRESET_GUARDRAILS[0], PRESET_GUARDRAILS[5], "Custom rule"]
        assert options.success_criteria == [PRESET_SUCCESS_CRITERIA[2], "Custom criterion"]

    def test_template_criteria_lead_without_repeats(self, catalog):
        previous = BuilderOptions(
            success_criteria=[PRESET_SUCCESS_CRITERIA[3], "Custom", PRESET_SUCCESS_CRITERIA[2]]
        )

        options = base_options_for_template(catalog.template("code-review"), previous, catalog=catalog)

        assert options.success_criteria == [
            PRESET_SUCCESS_CRITERIA[2],
            PRESET_SUCCESS_CRITERIA[3],
            "Custom",
        ]

    def test_template_output_format_wins_over_previous(self, catalog):
        previous = BuilderOptions(response_format="Bullet list")

        options = base_options_for_template(catalog.template("code-review"), previous, catalog=catalog)

        assert options.response_format == catalog.template("code-review").output_format

    def test_available_guardrails(self, catalog):
        template = catalog.template("code-review")
        options = BuilderOptions(guardrails=[PRESET_GUARDRAILS[0], "Custom rule"])

        available = available_guardrails(catalog, template, options)

        assert available == [*PRESET_GUARDRAILS, "Custom rule"]

    def test_available_success_criteria(self, catalog):
        options = BuilderOptions(success_criteria=["Custom criterion"])

        available = available_success_criteria(catalog, options)

        assert available == [*PRESET_SUCCESS_CRITERIA, "Custom criterion", EXTRA_SUCCESS_CRITERION]


class TestExport:
    """Test export snapshot and filename."""

    def test_snapshot_shape(self, catalog, filled_sections, complete_options):
        template = catalog.default_template
        result = synthesize_prompt(filled_sections, complete_options)

        snapshot = build_export_snapshot(template, filled_sections, complete_options, result)

        assert set(snapshot) == {
            "template", "sections", "configuration", "generated_prompt", "insights"
        }
        assert snapshot["template"]["id"] == template.id
        assert snapshot["sections"][0] == {
            "id": "objective",
            "label": filled_sections[0].label,
            "value": filled_sections[0].value,
        }
        assert snapshot["configuration"]["guardrails"] == complete_options.guardrails
        assert snapshot["generated_prompt"] == result.prompt
        json.dumps(snapshot)

    def test_export_filename(self, catalog):
        assert export_filename(catalog.template("strategic-brief")) == "strategic-brief-prompt.json"

    def test_export_filename_collapses_whitespace(self):
        from promptsmith.catalog import Template

        assert export_filename(Template(id="x", name="  My   Brief ")) == "my-brief-prompt.json"

    def test_custom_section_reaches_prompt(self, empty_sections, complete_options):
        sections = add_custom_section(empty_sections, "Rollout Plan")
        sections = update_section_value(sections, "rollout-plan", "Pilot in Munich first.")

        prompt = synthesize_prompt(sections, complete_options).prompt

        assert "## Rollout Plan\nPilot in Munich first." in prompt


def test_section_state_is_plain_model():
    """Sections built by hand work with every action."""
    sections = [SectionState(id="goal", label="Goal", required=True)]

    sections = update_section_value(sections, "goal", "Ship it")

    assert sections[0].value == "Ship it"
