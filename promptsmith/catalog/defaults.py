"""Built-in catalog tables.

The blueprint set is the canonical list of authoring dimensions. Templates
only re-word blueprints through ``section_overrides``; they never add or drop
sections.
"""

from typing import Final

from promptsmith.catalog.models import Catalog, SectionBlueprint, SectionOverride, Template

BASE_SECTIONS: Final[tuple[SectionBlueprint, ...]] = (
    SectionBlueprint(
        id="objective",
        label="Primary Objective",
        description="The single outcome the model must deliver and why it matters.",
        placeholder="e.g. Draft a go-to-market plan for our Q3 product launch in the EU.",
        required=True,
    ),
    SectionBlueprint(
        id="context",
        label="Context & Background",
        description="Situation, stakeholders, prior work and the facts the model cannot infer.",
        placeholder="Summarize the business situation, data available and relevant history.",
        required=True,
    ),
    SectionBlueprint(
        id="constraints",
        label="Constraints",
        description="Hard limits on scope, budget, time, policy and style.",
        placeholder="List budget ceilings, deadlines, forbidden topics and compliance rules.",
        required=True,
    ),
    SectionBlueprint(
        id="workflow",
        label="Reasoning Workflow",
        description="The steps the model should follow before answering.",
        placeholder="1. Clarify assumptions 2. Compare options 3. Recommend and justify.",
    ),
    SectionBlueprint(
        id="examples",
        label="Examples & References",
        description="Reference material, exemplary outputs or counter-examples to calibrate against.",
        placeholder="Paste a strong past example or link the style guide to follow.",
    ),
    SectionBlueprint(
        id="quality-bar",
        label="Quality Bar",
        description="How a reviewer will judge the response and what excellent looks like.",
        placeholder="Describe the review checklist the answer will be held to.",
    ),
)

PRESET_GUARDRAILS: Final[tuple[str, ...]] = (
    "Do not fabricate facts, figures or sources; flag uncertainty explicitly.",
    "Stay within the provided context and ask for clarification when information is missing.",
    "Never include confidential, personal or regulated data in the response.",
    "Keep recommendations consistent with applicable legal and compliance requirements.",
    "Decline requests that fall outside the defined scope.",
    "Cite the source of every quantitative claim.",
)

PRESET_SUCCESS_CRITERIA: Final[tuple[str, ...]] = (
    "Every recommendation is actionable and has a clear owner or next step.",
    "The response stays under 600 words unless more detail is requested.",
    "Key claims are backed by evidence or clearly labeled assumptions.",
    "The output follows the requested response format exactly.",
    "Trade-offs are compared across at least 2 alternatives.",
)

PROMPT_TEMPLATES: Final[tuple[Template, ...]] = (
    Template(
        id="strategic-brief",
        name="Strategic Brief",
        category="Strategy",
        description="Turn a business question into a structured, decision-ready recommendation.",
        persona="a senior strategy consultant who has advised Fortune 500 leadership teams",
        tone="Confident, concise and evidence-driven",
        guardrails=(PRESET_GUARDRAILS[0], PRESET_GUARDRAILS[3]),
        success_criteria=(PRESET_SUCCESS_CRITERIA[0], PRESET_SUCCESS_CRITERIA[4]),
        output_format=(
            "Open with a three-sentence executive summary, then use markdown headings "
            "for analysis, options and a recommendation table."
        ),
        section_overrides={
            "objective": SectionOverride(
                label="Decision to Support",
                placeholder="e.g. Decide whether to enter the Brazilian market in 2025.",
            ),
        },
    ),
    Template(
        id="campaign-concept",
        name="Campaign Concept",
        category="Marketing",
        description="Generate differentiated campaign ideas grounded in audience insight.",
        persona="an award-winning creative director who pairs bold ideas with measurable outcomes",
        tone="Energetic, vivid and on-brand",
        guardrails=(PRESET_GUARDRAILS[2],),
        success_criteria=(PRESET_SUCCESS_CRITERIA[0],),
        output_format="Present three concepts, each with a headline, core insight, channels and KPIs.",
        section_overrides={
            "context": SectionOverride(
                label="Audience & Brand Context",
                description="Who the audience is, what they care about and the brand positioning.",
            ),
            "examples": SectionOverride(
                label="Inspiration & Benchmarks",
            ),
        },
    ),
    Template(
        id="code-review",
        name="Code Review",
        category="Engineering",
        description="Review a change for correctness, security and maintainability.",
        persona="a staff software engineer known for rigorous yet constructive code reviews",
        tone="Precise, direct and respectful",
        guardrails=(PRESET_GUARDRAILS[0], PRESET_GUARDRAILS[4]),
        success_criteria=(PRESET_SUCCESS_CRITERIA[2], PRESET_SUCCESS_CRITERIA[3]),
        output_format=(
            "Group findings by severity (blocking, major, minor) with file and line "
            "references and a suggested fix for each."
        ),
        section_overrides={
            "objective": SectionOverride(
                label="Review Goal",
                placeholder="e.g. Confirm the new payment retry logic is safe to ship.",
            ),
            "examples": SectionOverride(
                label="Code Under Review",
                description="The diff, files or snippets the reviewer must inspect.",
                placeholder="Paste the diff or the relevant functions.",
            ),
        },
    ),
    Template(
        id="research-synthesis",
        name="Research Synthesis",
        category="Research",
        description="Condense interviews, papers or data into defensible findings.",
        persona="a research lead who synthesizes qualitative and quantitative evidence",
        tone="Neutral, rigorous and transparent about uncertainty",
        guardrails=(PRESET_GUARDRAILS[0], PRESET_GUARDRAILS[5]),
        success_criteria=(PRESET_SUCCESS_CRITERIA[2],),
        section_overrides={
            "context": SectionOverride(
                label="Sources & Evidence",
                description="The studies, transcripts or datasets to synthesize.",
            ),
        },
    ),
)

DEFAULT_CATALOG: Final[Catalog] = Catalog(
    blueprints=BASE_SECTIONS,
    templates=PROMPT_TEMPLATES,
    preset_guardrails=PRESET_GUARDRAILS,
    preset_success_criteria=PRESET_SUCCESS_CRITERIA,
)
