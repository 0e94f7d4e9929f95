"""Synthesis Orchestrator - the single entry point callers use.

Runs keyword extraction, scoring, analysis and assembly over one snapshot of
sections and options and packages the outputs into an immutable result. The
synthesizer holds only its injected catalog and scoring config, so one
instance can serve every keystroke of a live editor.

Example:
    >>> from promptsmith.builder import base_options_for_template, seed_sections
    >>> from promptsmith.catalog import DEFAULT_CATALOG
    >>> synthesizer = PromptSynthesizer(DEFAULT_CATALOG)
    >>> template = DEFAULT_CATALOG.default_template
    >>> result = synthesizer.synthesize(
    ...     seed_sections(DEFAULT_CATALOG.blueprints, template),
    ...     base_options_for_template(template),
    ... )
    >>> result.metrics.word_count
    0
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from promptsmith.builder.state import BuilderOptions, SectionState
from promptsmith.catalog.defaults import DEFAULT_CATALOG
from promptsmith.catalog.models import Catalog
from promptsmith.engine.assembler import assemble_prompt
from promptsmith.engine.insights import Improvement, Insight, analyze_prompt
from promptsmith.engine.keywords import extract_keywords
from promptsmith.engine.scoring import QualityMetrics, ScoringConfig, score_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SynthesisResult:
    """Everything the presentation layer renders for one draft.

    Attributes:
        prompt: Assembled instruction text
        metrics: Quality scores and counts
        insights: Findings sorted critical, warning, info
        improvements: Appliable snippets, each tied to a section
        keywords: Distinct lowercase terms, most salient first
    """

    prompt: str
    metrics: QualityMetrics
    insights: tuple[Insight, ...]
    improvements: tuple[Improvement, ...]
    keywords: tuple[str, ...]

    def to_dict(self) -> dict:
        """JSON-ready representation."""
        return {
            "prompt": self.prompt,
            "metrics": self.metrics.to_dict(),
            "insights": [insight.to_dict() for insight in self.insights],
            "improvements": [improvement.to_dict() for improvement in self.improvements],
            "keywords": list(self.keywords),
        }

    @property
    def critical_insights(self) -> tuple[Insight, ...]:
        return tuple(i for i in self.insights if i.severity == "critical")

    def improvements_for(self, section_id: str) -> tuple[Improvement, ...]:
        return tuple(i for i in self.improvements if i.target_section_id == section_id)


class PromptSynthesizer:
    """Composes the engine components around an injected catalog and config."""

    def __init__(
        self,
        catalog: Catalog | None = None,
        config: ScoringConfig | None = None,
    ) -> None:
        self.catalog = catalog or DEFAULT_CATALOG
        self.config = config or ScoringConfig()

    def synthesize(
        self,
        sections: Sequence[SectionState],
        options: BuilderOptions,
    ) -> SynthesisResult:
        """Produce the prompt, metrics, insights, improvements and keywords.

        Inputs are read, never mutated, and no reference to them is kept.

        Args:
            sections: Snapshot of the caller's sections
            options: Snapshot of the caller's options

        Returns:
            Immutable SynthesisResult
        """
        keywords = extract_keywords(sections, limit=self.config.keyword_limit)
        metrics = score_prompt(sections, options, self.config)
        insights, improvements = analyze_prompt(
            sections,
            options,
            preset_guardrails=self.catalog.preset_guardrails,
            config=self.config,
        )
        prompt = assemble_prompt(sections, options)

        logger.debug(
            f"Synthesized prompt: words={metrics.word_count}, "
            f"overall={metrics.overall:.2f}, insights={len(insights)}",
            extra={
                "extra_fields": {
                    "word_count": metrics.word_count,
                    "overall": metrics.overall,
                    "insight_count": len(insights),
                    "improvement_count": len(improvements),
                }
            },
        )

        return SynthesisResult(
            prompt=prompt,
            metrics=metrics,
            insights=tuple(insights),
            improvements=tuple(improvements),
            keywords=tuple(keywords),
        )


def synthesize_prompt(
    sections: Sequence[SectionState],
    options: BuilderOptions,
    *,
    catalog: Catalog | None = None,
    config: ScoringConfig | None = None,
) -> SynthesisResult:
    """One-shot convenience around ``PromptSynthesizer.synthesize``."""
    return PromptSynthesizer(catalog, config).synthesize(sections, options)
