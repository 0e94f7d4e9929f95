"""Catalog schema: section blueprints, templates and preset vocabularies.

Every model here is frozen. A catalog is built once (from the built-in tables
or a JSON file) and handed to the engine; nothing mutates it afterwards.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SectionBlueprint(BaseModel):
    """Catalog definition a section is seeded from.

    Attributes:
        id: Stable slug, unique within the catalog
        label: Heading shown to the user and used in the assembled prompt
        description: What the section should capture
        placeholder: Hint text for an empty editor
        required: Whether the prompt is considered incomplete without it
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str
    description: str = ""
    placeholder: str = ""
    required: bool = False


class SectionOverride(BaseModel):
    """Per-template replacement text for one blueprint."""

    model_config = ConfigDict(frozen=True)

    label: Optional[str] = None
    description: Optional[str] = None
    placeholder: Optional[str] = None


class Template(BaseModel):
    """A named starting configuration for a use case.

    Attributes:
        id: Unique template identifier
        name: Display name
        category: Grouping shown in the template picker
        description: One-line summary of the use case
        persona: Default actor voice
        tone: Default tone of voice
        guardrails: Guardrails switched on when the template is picked
        success_criteria: Success criteria switched on when the template is picked
        output_format: Response format replacing the default, if any
        section_overrides: Blueprint id -> replacement label/description/placeholder
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    category: str = ""
    description: str = ""
    persona: str = ""
    tone: str = ""
    guardrails: tuple[str, ...] = ()
    success_criteria: tuple[str, ...] = ()
    output_format: Optional[str] = None
    section_overrides: dict[str, SectionOverride] = Field(default_factory=dict)


class Catalog(BaseModel):
    """The complete static configuration the engine reads."""

    model_config = ConfigDict(frozen=True)

    blueprints: tuple[SectionBlueprint, ...]
    templates: tuple[Template, ...] = Field(..., min_length=1)
    preset_guardrails: tuple[str, ...] = ()
    preset_success_criteria: tuple[str, ...] = ()

    @model_validator(mode="after")
    def check_unique_ids(self) -> "Catalog":
        """Reject duplicate ids and overrides for unknown blueprints."""
        blueprint_ids = [blueprint.id for blueprint in self.blueprints]
        duplicates = sorted({bid for bid in blueprint_ids if blueprint_ids.count(bid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate blueprint ids: {duplicates}")

        template_ids = [template.id for template in self.templates]
        duplicates = sorted({tid for tid in template_ids if template_ids.count(tid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate template ids: {duplicates}")

        known = set(blueprint_ids)
        for template in self.templates:
            unknown = sorted(set(template.section_overrides) - known)
            if unknown:
                raise ValueError(
                    f"Template '{template.id}' overrides unknown sections: {unknown}"
                )
        return self

    @property
    def default_template(self) -> Template:
        return self.templates[0]

    def template(self, template_id: str) -> Template:
        """Look up a template by id.

        Raises:
            KeyError: If no template has that id
        """
        for template in self.templates:
            if template.id == template_id:
                return template
        raise KeyError(f"Unknown template: {template_id}")

    def blueprint(self, blueprint_id: str) -> Optional[SectionBlueprint]:
        return next((bp for bp in self.blueprints if bp.id == blueprint_id), None)
