"""Caller-side state transitions for the prompt builder.

The engine never mutates caller state. These helpers are what a caller uses
to move from one snapshot to the next: adding sections, applying
improvements, toggling guardrails, switching templates and exporting.
Every function returns new objects and leaves its inputs untouched.
"""

import re
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Final, Optional

from promptsmith.builder.state import BuilderOptions, SectionState, ordered_unique
from promptsmith.catalog.defaults import DEFAULT_CATALOG
from promptsmith.catalog.models import Catalog, Template

if TYPE_CHECKING:
    from promptsmith.engine.insights import Improvement, Insight
    from promptsmith.engine.synthesizer import SynthesisResult

DEFAULT_AUDIENCE: Final[str] = (
    "Executive stakeholders and cross-functional collaborators who will act on the output."
)
DEFAULT_RESPONSE_FORMAT: Final[str] = (
    "Use structured markdown with descriptive headings, tables where relevant, "
    "and a concise executive summary."
)
DEFAULT_CREATIVITY_LEVEL: Final[int] = 6
DEFAULT_TEMPERATURE: Final[float] = 0.6
DEFAULT_CUSTOM_DESCRIPTION: Final[str] = "Add domain-specific guidance or nuance."
DEFAULT_CUSTOM_PLACEHOLDER: Final[str] = "Describe the nuance the AI should consider."
EXTRA_SUCCESS_CRITERION: Final[str] = "Explicitly state assumptions and unresolved questions."

_NON_ALNUM: Final = re.compile(r"[^a-z0-9]+")


def slugify(label: str) -> str:
    """Derive a section id from a label.

    Examples:
        >>> slugify("  Brand Voice & Style! ")
        'brand-voice-style'
    """
    return _NON_ALNUM.sub("-", label.lower()).strip("-")


def _copy_sections(sections: Sequence[SectionState]) -> list[SectionState]:
    return [section.model_copy() for section in sections]


def add_custom_section(
    sections: Sequence[SectionState],
    label: str,
    description: str = "",
    placeholder: str = DEFAULT_CUSTOM_PLACEHOLDER,
) -> list[SectionState]:
    """Append a user-defined section.

    A blank label, a label with no alphanumerics, or a slug that collides with
    an existing section id leaves the list unchanged.
    """
    updated = _copy_sections(sections)
    label = label.strip()
    section_id = slugify(label)
    if not section_id or any(section.id == section_id for section in updated):
        return updated

    updated.append(
        SectionState(
            id=section_id,
            label=label,
            description=description.strip() or DEFAULT_CUSTOM_DESCRIPTION,
            placeholder=placeholder,
            value="",
        )
    )
    return updated


def _with_value(section: SectionState, value: str) -> SectionState:
    # Attribute assignment is validated, model_copy(update=...) is not
    updated = section.model_copy()
    updated.value = value
    return updated


def _updated_options(options: BuilderOptions, **changes: Any) -> BuilderOptions:
    return BuilderOptions.model_validate({**options.model_dump(), **changes})


def update_section_value(
    sections: Sequence[SectionState], section_id: str, value: str
) -> list[SectionState]:
    """Replace one section's value."""
    return [
        _with_value(section, value) if section.id == section_id else section.model_copy()
        for section in sections
    ]


def append_snippet(value: str, snippet: str) -> str:
    """Append ``snippet`` after a blank line unless ``value`` already contains it."""
    if snippet in value:
        return value
    current = value.strip()
    if not current:
        return snippet.strip()
    return f"{current}\n\n{snippet}".strip()


def apply_improvement(
    sections: Sequence[SectionState], improvement: "Improvement"
) -> list[SectionState]:
    """Append an improvement's snippet to its target section.

    Idempotent: a section already containing the snippet is left byte-for-byte
    unchanged, so applying twice equals applying once.
    """
    return [
        _with_value(section, append_snippet(section.value, improvement.snippet))
        if section.id == improvement.target_section_id
        else section.model_copy()
        for section in sections
    ]


def apply_suggestion(
    sections: Sequence[SectionState], insight: "Insight"
) -> list[SectionState]:
    """Replace the target section's value with an insight's suggestion."""
    if not insight.suggestion or not insight.target_section_id:
        return _copy_sections(sections)
    return update_section_value(sections, insight.target_section_id, insight.suggestion)


def _toggle(items: Sequence[str], text: str) -> list[str]:
    """Remove ``text`` if selected, else append it. Matching ignores outer whitespace."""
    text = text.strip()
    if text in items:
        return [item for item in items if item != text]
    return [*items, text]


def toggle_guardrail(options: BuilderOptions, text: str) -> BuilderOptions:
    return _updated_options(options, guardrails=_toggle(options.guardrails, text))


def toggle_success_criterion(options: BuilderOptions, text: str) -> BuilderOptions:
    return _updated_options(
        options, success_criteria=_toggle(options.success_criteria, text)
    )


def add_guardrail(options: BuilderOptions, text: str) -> BuilderOptions:
    """Add a custom guardrail; blank or already-present text is ignored."""
    return _updated_options(options, guardrails=[*options.guardrails, text])


def add_success_criterion(options: BuilderOptions, text: str) -> BuilderOptions:
    """Add a custom success criterion; blank or already-present text is ignored."""
    return _updated_options(options, success_criteria=[*options.success_criteria, text])


def base_options_for_template(
    template: Template,
    previous: Optional[BuilderOptions] = None,
    *,
    catalog: Optional[Catalog] = None,
) -> BuilderOptions:
    """Options for a freshly picked template.

    Persona and tone always come from the template. Audience, creativity and
    temperature carry over from ``previous``. The template's output format
    wins over the previous response format. Template guardrails come first,
    followed by the previous guardrails (or the first two presets). Template
    success criteria likewise lead the previous criteria (or presets 0, 2 and 3).

    Args:
        template: The template being applied
        previous: Options before the switch, if any
        catalog: Source of preset vocabularies (built-in catalog by default)

    Returns:
        New BuilderOptions
    """
    catalog = catalog or DEFAULT_CATALOG
    presets = catalog.preset_guardrails
    criteria = catalog.preset_success_criteria

    previous_guardrails = (
        previous.guardrails if previous is not None else list(presets[:2])
    )
    if previous is not None:
        previous_criteria = previous.success_criteria
    else:
        previous_criteria = [criteria[i] for i in (0, 2, 3) if i < len(criteria)]

    return BuilderOptions(
        target_audience=previous.target_audience if previous is not None else DEFAULT_AUDIENCE,
        response_format=(
            template.output_format
            or (previous.response_format if previous is not None else DEFAULT_RESPONSE_FORMAT)
        ),
        creativity_level=(
            previous.creativity_level if previous is not None else DEFAULT_CREATIVITY_LEVEL
        ),
        temperature=previous.temperature if previous is not None else DEFAULT_TEMPERATURE,
        tone=template.tone,
        persona=template.persona,
        guardrails=[*template.guardrails, *previous_guardrails],
        success_criteria=[*template.success_criteria, *previous_criteria],
    )


def available_guardrails(
    catalog: Catalog, template: Template, options: BuilderOptions
) -> list[str]:
    """Presets, then template guardrails, then custom ones, without repeats."""
    return ordered_unique([*catalog.preset_guardrails, *template.guardrails, *options.guardrails])


def available_success_criteria(catalog: Catalog, options: BuilderOptions) -> list[str]:
    return ordered_unique(
        [*catalog.preset_success_criteria, *options.success_criteria, EXTRA_SUCCESS_CRITERION]
    )


def build_export_snapshot(
    template: Template,
    sections: Sequence[SectionState],
    options: BuilderOptions,
    result: "SynthesisResult",
) -> dict[str, Any]:
    """JSON-ready snapshot of the whole draft and its synthesis."""
    return {
        "template": template.model_dump(mode="json"),
        "sections": [
            {"id": section.id, "label": section.label, "value": section.value}
            for section in sections
        ],
        "configuration": options.model_dump(mode="json"),
        "generated_prompt": result.prompt,
        "insights": [insight.to_dict() for insight in result.insights],
    }


def export_filename(template: Template) -> str:
    """``<template-name>-prompt.json`` with whitespace runs as dashes."""
    return f"{'-'.join(template.name.lower().split())}-prompt.json"
