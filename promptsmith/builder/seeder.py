"""Section seeding from catalog blueprints.

Example:
    >>> from promptsmith.catalog import BASE_SECTIONS, PROMPT_TEMPLATES
    >>> sections = seed_sections(BASE_SECTIONS, PROMPT_TEMPLATES[0])
    >>> sections[0].label
    'Decision to Support'
    >>> all(section.value == "" for section in sections)
    True
"""

from collections.abc import Iterable
from typing import Optional

from promptsmith.builder.state import SectionState
from promptsmith.catalog.models import SectionBlueprint, Template


def seed_sections(
    blueprints: Iterable[SectionBlueprint],
    template: Optional[Template] = None,
) -> list[SectionState]:
    """Build a fresh, empty section list for a template.

    Output order follows the blueprints. Label, description and placeholder
    come from the template's override for that blueprint id when one exists,
    otherwise from the blueprint. Calling this again for the same template is
    the reset operation.

    Args:
        blueprints: Catalog blueprints in display order
        template: Template whose overrides re-word the blueprints, if any

    Returns:
        New list of SectionState objects with empty values
    """
    overrides = template.section_overrides if template is not None else {}

    sections = []
    for blueprint in blueprints:
        override = overrides.get(blueprint.id)
        sections.append(
            SectionState(
                id=blueprint.id,
                label=(override.label if override and override.label else blueprint.label),
                description=(
                    override.description
                    if override and override.description
                    else blueprint.description
                ),
                placeholder=(
                    override.placeholder
                    if override and override.placeholder
                    else blueprint.placeholder
                ),
                value="",
                required=blueprint.required,
            )
        )
    return sections
