"""Insight & Improvement Generator - rule-based review of a prompt draft.

Evaluates a fixed, ordered rule set against the current sections and options.
Each rule may emit insights (findings for the user) and improvements (text
snippets the caller can append to a section). Insights come back sorted by
severity; within a severity they keep rule order.

Rule order:
    1. Empty required section (critical, with starter text)
    2. Draft below the word band (warning)
    3. Too few guardrails (warning, with a preset guardrail improvement)
    4. No success criteria (warning)
    5. Thin optional section (info, with an elaboration improvement)
    6. Persona or tone missing (critical)
    7. Thin required section (warning, with an elaboration improvement)
    8. Near-verbatim repeated section (warning)
    9. Draft above the word band (info)
    10. Creativity knobs disagree with the wording (info, with a nudge)

Example:
    >>> from promptsmith.builder.state import BuilderOptions, SectionState
    >>> sections = [SectionState(id="objective", label="Objective", required=True)]
    >>> insights, improvements = analyze_prompt(sections, BuilderOptions())
    >>> insights[0].severity
    <Severity.CRITICAL: 'critical'>
"""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Final, Optional

from promptsmith.builder.state import BuilderOptions, SectionState, ordered_unique
from promptsmith.engine.scoring import (
    ScoringConfig,
    count_words,
    creativity_target,
    find_duplicate_pairs,
    lexical_lean,
)


class Severity(str, Enum):
    """Insight severity, most urgent first."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


SEVERITY_RANK: Final[dict[Severity, int]] = {
    Severity.CRITICAL: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}


@dataclass(frozen=True)
class Improvement:
    """A snippet the caller can append to one section.

    Applying it is a no-op when the section already contains the snippet.

    Attributes:
        id: Unique within one analysis
        target_section_id: Section the snippet is appended to
        title: Short label for a UI control
        snippet: Text to append
    """

    id: str
    target_section_id: str
    title: str
    snippet: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Insight:
    """A weakness found in the draft.

    Attributes:
        id: Stable identifier for the finding
        severity: critical, warning or info
        title: One-line headline
        detail: Explanation shown under the headline
        suggestion: Replacement text for the target section, if any
        target_section_id: Section the finding is about, if any
    """

    id: str
    severity: Severity
    title: str
    detail: str
    suggestion: Optional[str] = None
    target_section_id: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


STARTER_TEXT: Final[dict[str, str]] = {
    "objective": (
        "Deliver [specific outcome] for [audience] by [deadline] so that "
        "[measurable business impact]."
    ),
    "context": (
        "Background: [current situation]. Stakeholders: [who is involved]. "
        "Known facts: [key data points]. Open questions: [gaps the model should flag]."
    ),
    "constraints": (
        "Stay within [budget or time limit]. Do not [forbidden actions or topics]. "
        "Follow [policy, brand or style guide]."
    ),
    "workflow": (
        "1. Restate the goal and assumptions. 2. Compare at least two options. "
        "3. Recommend one and justify it."
    ),
}

EXPLORATORY_NUDGE: Final[str] = (
    "Explore at least three unconventional ideas before converging on a recommendation."
)
PRECISE_NUDGE: Final[str] = (
    "Be precise: state exact figures, cite sources and respect every constraint strictly."
)


def _starter_text(section: SectionState) -> str:
    if section.id in STARTER_TEXT:
        return STARTER_TEXT[section.id]
    if section.description:
        return f"{section.label}: {section.description}"
    return f"{section.label}: describe this in at least two concrete sentences."


def _elaboration_snippet(section: SectionState) -> str:
    description = section.description.strip().rstrip(".")
    if description:
        focus = description[0].lower() + description[1:]
        return f"Go deeper on {focus}, and include at least one concrete example."
    return f"Go deeper on the {section.label.lower()}, and include at least one concrete example."


def _guardrail_target(sections: Sequence[SectionState]) -> Optional[str]:
    """Constraints section, else the first required section, else the first section."""
    for section in sections:
        if section.id == "constraints":
            return section.id
    for section in sections:
        if section.required:
            return section.id
    return sections[0].id if sections else None


def _creativity_target_section(sections: Sequence[SectionState]) -> Optional[str]:
    for section in sections:
        if section.id == "objective":
            return section.id
    return sections[0].id if sections else None


def analyze_prompt(
    sections: Sequence[SectionState],
    options: BuilderOptions,
    *,
    preset_guardrails: Sequence[str] = (),
    config: ScoringConfig | None = None,
) -> tuple[list[Insight], list[Improvement]]:
    """Run every rule against the draft.

    Args:
        sections: Current sections in display order
        options: Current builder options
        preset_guardrails: Catalog guardrails offered as improvements
        config: Thresholds (defaults when omitted)

    Returns:
        Tuple of (insights sorted by severity, improvements). Every improvement
        targets a section present in ``sections``.
    """
    config = config or ScoringConfig()
    insights: list[Insight] = []
    improvements: list[Improvement] = []
    word_count = count_words(sections)
    guardrails = ordered_unique(options.guardrails)

    # 1. Empty required sections
    for section in sections:
        if section.required and section.is_empty:
            insights.append(
                Insight(
                    id=f"missing-{section.id}",
                    severity=Severity.CRITICAL,
                    title=f"{section.label} is empty",
                    detail=(
                        f"'{section.label}' is required. Without it the model has to "
                        "guess, so start from the suggested outline and make it specific."
                    ),
                    suggestion=_starter_text(section),
                    target_section_id=section.id,
                )
            )

    # 2. Draft too short
    if word_count < config.word_band_lower:
        insights.append(
            Insight(
                id="word-count-low",
                severity=Severity.WARNING,
                title="Prompt is too thin",
                detail=(
                    f"The draft has {word_count} words. High-performing prompts usually "
                    f"sit between {config.word_band_lower} and {config.word_band_upper} words."
                ),
            )
        )

    # 3. Too few guardrails
    if len(guardrails) < config.minimum_guardrails:
        insights.append(
            Insight(
                id="guardrails-low",
                severity=Severity.WARNING,
                title="Add more guardrails",
                detail=(
                    f"{len(guardrails)} guardrail(s) selected. Add at least "
                    f"{config.minimum_guardrails} non-negotiable rules to keep the "
                    "response safe and on scope."
                ),
            )
        )
        target = _guardrail_target(sections)
        candidate = next((g for g in ordered_unique(preset_guardrails) if g not in guardrails), None)
        if target is not None and candidate is not None:
            improvements.append(
                Improvement(
                    id="guardrail-preset",
                    target_section_id=target,
                    title="Add guardrail",
                    snippet=f"Guardrail: {candidate}",
                )
            )

    # 4. No success criteria
    if not ordered_unique(options.success_criteria):
        insights.append(
            Insight(
                id="success-criteria-missing",
                severity=Severity.WARNING,
                title="Define success criteria",
                detail="Tell the model how its answer will be judged with at least one measurable criterion.",
            )
        )

    # 5. Thin optional sections
    for section in sections:
        if section.required or section.is_empty:
            continue
        if section.word_count < config.elaboration_min_words:
            insights.append(
                Insight(
                    id=f"elaborate-{section.id}",
                    severity=Severity.INFO,
                    title=f"Expand {section.label}",
                    detail=(
                        f"'{section.label}' has only {section.word_count} words. "
                        "A little more detail gives the model something concrete to use."
                    ),
                    target_section_id=section.id,
                )
            )
            improvements.append(
                Improvement(
                    id=f"elaborate-{section.id}",
                    target_section_id=section.id,
                    title=f"Elaborate {section.label}",
                    snippet=_elaboration_snippet(section),
                )
            )

    # 6. Persona or tone missing
    missing_voice = [
        name
        for name, value in (("persona", options.persona), ("tone", options.tone))
        if not value.strip()
    ]
    if missing_voice:
        insights.append(
            Insight(
                id="voice-missing",
                severity=Severity.CRITICAL,
                title="Persona or tone missing",
                detail=(
                    f"Set the {' and '.join(missing_voice)} so the model knows whose "
                    "voice to adopt and how to sound."
                ),
            )
        )

    # 7. Thin required sections
    for section in sections:
        if not section.required or section.is_empty:
            continue
        if section.word_count < config.structure_min_words:
            insights.append(
                Insight(
                    id=f"thin-{section.id}",
                    severity=Severity.WARNING,
                    title=f"{section.label} needs more detail",
                    detail=(
                        f"'{section.label}' has {section.word_count} words; "
                        f"aim for at least {config.structure_min_words}."
                    ),
                    target_section_id=section.id,
                )
            )
            improvements.append(
                Improvement(
                    id=f"deepen-{section.id}",
                    target_section_id=section.id,
                    title=f"Deepen {section.label}",
                    snippet=_elaboration_snippet(section),
                )
            )

    # 8. Near-verbatim repetition; report each repeated section once
    reported: set[int] = set()
    for first, second in find_duplicate_pairs(sections, config.duplicate_similarity):
        if second in reported:
            continue
        reported.add(second)
        insights.append(
            Insight(
                id=f"duplicate-{sections[second].id}",
                severity=Severity.WARNING,
                title=f"{sections[second].label} repeats {sections[first].label}",
                detail="Every section should carry unique information; rewrite or remove the repeat.",
                target_section_id=sections[second].id,
            )
        )

    # 9. Draft too long
    if word_count > config.word_band_upper:
        insights.append(
            Insight(
                id="word-count-high",
                severity=Severity.INFO,
                title="Prompt may be too long",
                detail=(
                    f"The draft has {word_count} words. Trim anything above "
                    f"{config.word_band_upper} words that does not change the answer."
                ),
            )
        )

    # 10. Creativity misalignment
    target_lean = creativity_target(options)
    actual_lean = lexical_lean(sections)
    alignment = 1.0 - config.creativity_alignment_penalty * abs(target_lean - actual_lean)
    if alignment < config.creativity_alert_threshold:
        wants_exploration = target_lean > actual_lean
        insights.append(
            Insight(
                id="creativity-misaligned",
                severity=Severity.INFO,
                title="Wording does not match the creativity setting",
                detail=(
                    "The creativity level and temperature ask for divergent ideas, but the "
                    "sections read as tightly constrained."
                    if wants_exploration
                    else "The creativity level and temperature ask for precision, but the "
                    "sections invite open-ended exploration."
                ),
            )
        )
        target = _creativity_target_section(sections)
        if target is not None:
            improvements.append(
                Improvement(
                    id="creativity-explore" if wants_exploration else "creativity-focus",
                    target_section_id=target,
                    title="Invite exploration" if wants_exploration else "Tighten precision",
                    snippet=EXPLORATORY_NUDGE if wants_exploration else PRECISE_NUDGE,
                )
            )

    insights.sort(key=lambda insight: SEVERITY_RANK[insight.severity])
    return insights, improvements
