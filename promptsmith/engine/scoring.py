"""Quality Scorer - deterministic, lexical scoring of a prompt draft.

Scores five dimensions in [0.0, 1.0] and combines them into an overall score:

- clarity: word count inside a target band, no near-verbatim repeated sections
- structure: coverage of required sections
- specificity: concrete signals (numbers, names, measurable criteria) per word
- guardrails: saturating function of the number of guardrails
- creativity: agreement between the creativity knobs and the draft's wording

Every tuning constant lives in ``ScoringConfig`` so that a deployment can
override them from a JSON file and tests can pin them.

Example:
    >>> from promptsmith.builder.state import BuilderOptions
    >>> metrics = score_prompt([], BuilderOptions())
    >>> metrics.word_count, metrics.structure
    (0, 0.0)
"""

import json
import math
import re
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from difflib import SequenceMatcher
from pathlib import Path
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, model_validator

from promptsmith.builder.state import (
    MAX_CREATIVITY_LEVEL,
    MAX_TEMPERATURE,
    MIN_CREATIVITY_LEVEL,
    MIN_TEMPERATURE,
    BuilderOptions,
    SectionState,
    clamp,
    ordered_unique,
)
from promptsmith.engine.keywords import tokenize
from promptsmith.utils.config import get_settings


class ScoringWeights(BaseModel):
    """Weights of the five dimensions in the overall score. Must sum to 1.0."""

    model_config = ConfigDict(frozen=True)

    structure: float = Field(default=0.35, ge=0.0, le=1.0)
    clarity: float = Field(default=0.2, ge=0.0, le=1.0)
    specificity: float = Field(default=0.2, ge=0.0, le=1.0)
    guardrails: float = Field(default=0.125, ge=0.0, le=1.0)
    creativity: float = Field(default=0.125, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_sum(self) -> "ScoringWeights":
        total = self.structure + self.clarity + self.specificity + self.guardrails + self.creativity
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Scoring weights must sum to 1.0, got {total}")
        return self


class ScoringConfig(BaseModel):
    """Heuristic constants for scoring and insight thresholds."""

    model_config = ConfigDict(frozen=True)

    # Clarity
    word_band_lower: int = Field(default=120, ge=0)
    word_band_upper: int = Field(default=400, gt=0)
    clarity_band_penalty: float = Field(default=0.8, ge=0.0)
    duplicate_similarity: float = Field(default=0.9, gt=0.0, le=1.0)
    duplicate_penalty: float = Field(default=0.15, ge=0.0)
    clarity_floor: float = Field(default=0.2, ge=0.0, le=1.0)

    # Structure
    structure_min_words: int = Field(default=8, gt=0)

    # Specificity
    specificity_target_density: float = Field(default=0.05, gt=0.0)
    specificity_criteria_target: int = Field(default=4, gt=0)
    specificity_density_weight: float = Field(default=0.7, ge=0.0, le=1.0)

    # Guardrails
    guardrail_saturation: float = Field(default=2.0, gt=0.0)
    guardrail_count_cap: int = Field(default=20, gt=0)

    # Creativity
    creativity_alignment_penalty: float = Field(default=1.0, ge=0.0)

    # Counts
    tokens_per_word: float = Field(default=1.3, gt=0.0)
    keyword_limit: int = Field(default=12, ge=0)

    # Insight thresholds
    elaboration_min_words: int = Field(default=12, gt=0)
    minimum_guardrails: int = Field(default=2, ge=0)
    creativity_alert_threshold: float = Field(default=0.5, ge=0.0, le=1.0)

    weights: ScoringWeights = Field(default_factory=ScoringWeights)

    @model_validator(mode="after")
    def check_band(self) -> "ScoringConfig":
        if self.word_band_lower >= self.word_band_upper:
            raise ValueError("word_band_lower must be below word_band_upper")
        return self


def load_scoring_config(path: str | Path) -> ScoringConfig:
    """Load scorer constants from a JSON file; omitted keys keep their defaults.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON
        ValidationError: If a value is out of range or weights do not sum to 1.0
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Scoring config file not found: {config_path}")
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Scoring config is not valid JSON: {config_path}: {e}") from e
    return ScoringConfig.model_validate(data)


def get_scoring_config() -> ScoringConfig:
    """Return the config named by SCORING_CONFIG_FILE, or the defaults."""
    settings = get_settings()
    if settings.SCORING_CONFIG_FILE is None:
        return ScoringConfig()
    return load_scoring_config(settings.SCORING_CONFIG_FILE)


@dataclass(frozen=True)
class QualityMetrics:
    """Scores for one draft.

    Attributes:
        clarity: Word-band fit minus repetition penalties
        structure: Required-section coverage
        specificity: Concrete signals per word plus measurable criteria
        guardrails: Saturating guardrail coverage, always below 1.0
        creativity: Alignment of creativity knobs with the draft's language
        overall: Weighted average of the five dimensions
        word_count: Whitespace-delimited words across all sections
        estimated_tokens: Heuristic token estimate
    """

    clarity: float
    structure: float
    specificity: float
    guardrails: float
    creativity: float
    overall: float
    word_count: int
    estimated_tokens: int

    def to_dict(self) -> dict:
        return asdict(self)


_NUMBER_PATTERN: Final = re.compile(r"\d+(?:[.,:]\d+)*%?")
_NAMED_ENTITY_PATTERN: Final = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")
_MEASURABLE_PATTERN: Final = re.compile(
    r"\d|%|\b(?:percent|at least|at most|no more than|fewer than|less than|more than"
    r"|under|within|minimum|maximum|exactly|every)\b",
    re.IGNORECASE,
)

EXPLORATORY_TERMS: Final[frozenset[str]] = frozenset(
    {
        "alternative", "alternatives", "bold", "brainstorm", "creative", "creativity",
        "divergent", "experiment", "experimental", "explore", "exploratory", "fresh",
        "ideas", "imagine", "innovative", "inspire", "inspiring", "invent", "novel",
        "original", "playful", "possibilities", "reimagine", "story", "storytelling",
        "surprising", "unconventional", "vivid", "wild",
    }
)

PRECISE_TERMS: Final[frozenset[str]] = frozenset(
    {
        "accuracy", "accurate", "always", "cite", "compliance", "compliant", "consistent",
        "constraint", "constraints", "deterministic", "exact", "exactly", "limit",
        "limits", "measurable", "must", "never", "only", "precise", "precisely",
        "required", "requirement", "requirements", "rigorous", "specific", "strict",
        "strictly", "verify", "verified",
    }
)


def count_words(sections: Sequence[SectionState]) -> int:
    return sum(len(section.value.split()) for section in sections)


def estimate_tokens(word_count: int, tokens_per_word: float) -> int:
    """Round ``word_count * tokens_per_word`` half up."""
    return int(math.floor(word_count * tokens_per_word + 0.5))


def _normalized(text: str) -> str:
    return " ".join(tokenize(text))


def find_duplicate_pairs(
    sections: Sequence[SectionState],
    threshold: float,
) -> list[tuple[int, int]]:
    """Index pairs (i < j) of non-empty sections with near-verbatim values."""
    normalized = [_normalized(section.value) for section in sections]
    pairs = []
    for i in range(len(normalized)):
        if not normalized[i]:
            continue
        for j in range(i + 1, len(normalized)):
            if not normalized[j]:
                continue
            if normalized[i] == normalized[j]:
                pairs.append((i, j))
            elif SequenceMatcher(None, normalized[i], normalized[j]).ratio() >= threshold:
                pairs.append((i, j))
    return pairs


def is_measurable(criterion: str) -> bool:
    return bool(_MEASURABLE_PATTERN.search(criterion))


def _score_clarity(
    sections: Sequence[SectionState], word_count: int, config: ScoringConfig
) -> float:
    lower, upper = config.word_band_lower, config.word_band_upper
    if word_count < lower:
        distance = (lower - word_count) / lower
    elif word_count > upper:
        distance = (word_count - upper) / upper
    else:
        distance = 0.0

    score = 1.0 - config.clarity_band_penalty * distance
    score -= config.duplicate_penalty * len(
        find_duplicate_pairs(sections, config.duplicate_similarity)
    )
    return clamp(max(score, config.clarity_floor), 0.0, 1.0)


def _score_structure(sections: Sequence[SectionState], config: ScoringConfig) -> float:
    pool = [section for section in sections if section.required] or list(sections)
    if not pool:
        return 0.0

    # Sections under the word threshold earn proportional credit
    credits = [
        min(1.0, section.word_count / config.structure_min_words) for section in pool
    ]
    return clamp(sum(credits) / len(credits), 0.0, 1.0)


def _score_specificity(
    sections: Sequence[SectionState],
    options: BuilderOptions,
    word_count: int,
    config: ScoringConfig,
) -> float:
    if word_count == 0:
        return 0.0

    signals = 0
    for section in sections:
        signals += len(_NUMBER_PATTERN.findall(section.value))
        signals += len(_NAMED_ENTITY_PATTERN.findall(section.value))
    density = signals / word_count
    density_credit = min(1.0, density / config.specificity_target_density)

    criteria = ordered_unique(options.success_criteria)
    measurable = sum(1 for criterion in criteria if is_measurable(criterion))
    criteria_credit = min(1.0, (len(criteria) + measurable) / config.specificity_criteria_target)

    w = config.specificity_density_weight
    return clamp(w * density_credit + (1.0 - w) * criteria_credit, 0.0, 1.0)


def _score_guardrails(options: BuilderOptions, config: ScoringConfig) -> float:
    count = min(len(ordered_unique(options.guardrails)), config.guardrail_count_cap)
    return clamp(1.0 - math.exp(-count / config.guardrail_saturation), 0.0, 1.0)


def creativity_target(options: BuilderOptions) -> float:
    """Blend creativity level and temperature into a 0..1 target."""
    level = clamp(options.creativity_level, MIN_CREATIVITY_LEVEL, MAX_CREATIVITY_LEVEL)
    temperature = clamp(options.temperature, MIN_TEMPERATURE, MAX_TEMPERATURE)
    level_ratio = (level - MIN_CREATIVITY_LEVEL) / (MAX_CREATIVITY_LEVEL - MIN_CREATIVITY_LEVEL)
    return (level_ratio + temperature) / 2.0


def lexical_lean(sections: Sequence[SectionState]) -> float:
    """Share of exploratory terms among exploratory and precise ones; 0.5 if none."""
    exploratory = precise = 0
    for section in sections:
        for token in tokenize(section.value):
            if token in EXPLORATORY_TERMS:
                exploratory += 1
            elif token in PRECISE_TERMS:
                precise += 1
    if exploratory + precise == 0:
        return 0.5
    return exploratory / (exploratory + precise)


def _score_creativity(
    sections: Sequence[SectionState], options: BuilderOptions, config: ScoringConfig
) -> float:
    deviation = abs(creativity_target(options) - lexical_lean(sections))
    return clamp(1.0 - config.creativity_alignment_penalty * deviation, 0.0, 1.0)


def score_prompt(
    sections: Sequence[SectionState],
    options: BuilderOptions,
    config: ScoringConfig | None = None,
) -> QualityMetrics:
    """Score a draft on every quality dimension.

    Pure function: the same sections, options and config always produce the
    same metrics.

    Args:
        sections: Current sections in display order
        options: Current builder options
        config: Scoring constants (defaults when omitted)

    Returns:
        QualityMetrics with every dimension clamped to [0.0, 1.0]
    """
    config = config or ScoringConfig()

    word_count = count_words(sections)
    clarity = _score_clarity(sections, word_count, config)
    structure = _score_structure(sections, config)
    specificity = _score_specificity(sections, options, word_count, config)
    guardrails = _score_guardrails(options, config)
    creativity = _score_creativity(sections, options, config)

    weights = config.weights
    overall = (
        weights.structure * structure
        + weights.clarity * clarity
        + weights.specificity * specificity
        + weights.guardrails * guardrails
        + weights.creativity * creativity
    )

    return QualityMetrics(
        clarity=clarity,
        structure=structure,
        specificity=specificity,
        guardrails=guardrails,
        creativity=creativity,
        overall=clamp(overall, 0.0, 1.0),
        word_count=word_count,
        estimated_tokens=estimate_tokens(word_count, config.tokens_per_word),
    )
