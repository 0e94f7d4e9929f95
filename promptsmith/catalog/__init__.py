"""Static catalog of section blueprints, templates and preset vocabularies."""

from promptsmith.catalog.defaults import (
    BASE_SECTIONS,
    DEFAULT_CATALOG,
    PRESET_GUARDRAILS,
    PRESET_SUCCESS_CRITERIA,
    PROMPT_TEMPLATES,
)
from promptsmith.catalog.loader import get_catalog, load_catalog
from promptsmith.catalog.models import Catalog, SectionBlueprint, SectionOverride, Template

__all__ = [
    "Catalog",
    "SectionBlueprint",
    "SectionOverride",
    "Template",
    "BASE_SECTIONS",
    "PROMPT_TEMPLATES",
    "PRESET_GUARDRAILS",
    "PRESET_SUCCESS_CRITERIA",
    "DEFAULT_CATALOG",
    "load_catalog",
    "get_catalog",
]
