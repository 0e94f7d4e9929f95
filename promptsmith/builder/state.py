"""Caller-owned authoring state.

``SectionState`` and ``BuilderOptions`` belong to whoever drives the builder
(a UI, the batch driver, a test). The engine only reads them. Both models
validate on assignment so a live-editing surface can mutate fields in place
without ever holding an out-of-range value.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_CREATIVITY_LEVEL = 1
MAX_CREATIVITY_LEVEL = 10
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 1.0


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp ``value`` into ``[lower, upper]``."""
    return max(lower, min(upper, value))


def ordered_unique(items) -> list[str]:
    """Strip entries, drop blanks and duplicates, keep first-insertion order.

    Examples:
        >>> ordered_unique(["b", " a", "b", "", "a "])
        ['b', 'a']
    """
    # dict preserves insertion order; the values are unused
    return list(dict.fromkeys(item.strip() for item in items if item and item.strip()))


class SectionState(BaseModel):
    """One editable section of the prompt draft.

    Attributes:
        id: Blueprint id or a slug coined for a custom section
        label: Heading rendered in the assembled prompt
        description: Guidance on what belongs in the section
        placeholder: Hint text for an empty editor
        value: Free text authored by the user
        required: Whether the draft is incomplete without this section
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    label: str
    description: str = ""
    placeholder: str = ""
    value: str = ""
    required: bool = False

    @property
    def word_count(self) -> int:
        return len(self.value.split())

    @property
    def is_empty(self) -> bool:
        return not self.value.strip()


class BuilderOptions(BaseModel):
    """Prompt-wide configuration.

    Numeric fields are clamped rather than rejected. ``guardrails`` and
    ``success_criteria`` behave as ordered sets.
    """

    model_config = ConfigDict(validate_assignment=True)

    target_audience: str = ""
    response_format: str = ""
    creativity_level: int = 6
    temperature: float = 0.6
    tone: str = ""
    persona: str = ""
    guardrails: list[str] = Field(default_factory=list)
    success_criteria: list[str] = Field(default_factory=list)

    @field_validator("creativity_level", mode="before")
    @classmethod
    def round_creativity_level(cls, v):
        """Round fractional levels so int parsing accepts them."""
        if isinstance(v, float):
            return round(clamp(v, MIN_CREATIVITY_LEVEL, MAX_CREATIVITY_LEVEL))
        return v

    # Clamping runs after coercion so numeric strings are bounded too
    @field_validator("creativity_level")
    @classmethod
    def clamp_creativity_level(cls, v: int) -> int:
        """Clamp to 1..10."""
        return int(clamp(v, MIN_CREATIVITY_LEVEL, MAX_CREATIVITY_LEVEL))

    @field_validator("temperature")
    @classmethod
    def clamp_temperature(cls, v: float) -> float:
        """Clamp to 0.0..1.0."""
        return clamp(v, MIN_TEMPERATURE, MAX_TEMPERATURE)

    @field_validator("guardrails", "success_criteria")
    @classmethod
    def dedupe(cls, v: list[str]) -> list[str]:
        return ordered_unique(v)
