"""Prompt synthesis and scoring engine.

This package contains the pure, deterministic components that turn a draft
(sections plus options) into an assembled prompt with quality feedback.
"""

from promptsmith.engine.assembler import assemble_prompt
from promptsmith.engine.insights import Improvement, Insight, Severity, analyze_prompt
from promptsmith.engine.keywords import extract_keywords
from promptsmith.engine.scoring import (
    QualityMetrics,
    ScoringConfig,
    ScoringWeights,
    get_scoring_config,
    load_scoring_config,
    score_prompt,
)
from promptsmith.engine.synthesizer import PromptSynthesizer, SynthesisResult, synthesize_prompt

__all__ = [
    "extract_keywords",
    "score_prompt",
    "QualityMetrics",
    "ScoringConfig",
    "ScoringWeights",
    "load_scoring_config",
    "get_scoring_config",
    "analyze_prompt",
    "Insight",
    "Improvement",
    "Severity",
    "assemble_prompt",
    "PromptSynthesizer",
    "SynthesisResult",
    "synthesize_prompt",
]
