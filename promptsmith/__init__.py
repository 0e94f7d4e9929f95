"""promptsmith - deterministic prompt synthesis and scoring.

This package contains:
- catalog: section blueprints, templates and preset vocabularies
- builder: caller-owned draft state and the transitions between snapshots
- engine: keyword extraction, scoring, insights and prompt assembly
"""

from promptsmith.builder import BuilderOptions, SectionState, seed_sections
from promptsmith.catalog import DEFAULT_CATALOG, Catalog
from promptsmith.engine import PromptSynthesizer, SynthesisResult, synthesize_prompt

__version__ = "0.1.0"

__all__ = [
    "BuilderOptions",
    "SectionState",
    "seed_sections",
    "Catalog",
    "DEFAULT_CATALOG",
    "PromptSynthesizer",
    "SynthesisResult",
    "synthesize_prompt",
]
