"""Caller-owned builder state and the transitions between snapshots."""

from promptsmith.builder.actions import (
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
from promptsmith.builder.seeder import seed_sections
from promptsmith.builder.state import BuilderOptions, SectionState

__all__ = [
    "SectionState",
    "BuilderOptions",
    "seed_sections",
    "slugify",
    "add_custom_section",
    "update_section_value",
    "apply_improvement",
    "apply_suggestion",
    "toggle_guardrail",
    "toggle_success_criterion",
    "add_guardrail",
    "add_success_criterion",
    "base_options_for_template",
    "available_guardrails",
    "available_success_criteria",
    "build_export_snapshot",
    "export_filename",
]
