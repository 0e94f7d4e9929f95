"""Shared pytest fixtures."""

import shutil
from pathlib import Path

import pytest

from promptsmith.builder import BuilderOptions, SectionState, seed_sections, update_section_value
from promptsmith.catalog import DEFAULT_CATALOG, PRESET_GUARDRAILS, PRESET_SUCCESS_CRITERIA
from promptsmith.utils.config import reset_settings

OBJECTIVE_TEXT = (
    "Prepare a launch recommendation for Northwind Analytics entering the German "
    "mid-market in 2025. The recommendation must state whether to launch in Q2 or Q3, "
    "the expected revenue in the first 12 months, the hiring plan for the Berlin office, "
    "and the three biggest risks with a mitigation for each one of them."
)

CONTEXT_TEXT = (
    "Northwind Analytics sells a self-service dashboard product to retailers with 50 to "
    "500 employees. Revenue last year was 14 million euros, mostly from the Netherlands "
    "and Belgium. Sales cycles average 45 days. A local partner, Rhein Data Partners, has "
    "offered a reseller agreement. The leadership team is split between a direct sales "
    "motion and the partner route, and finance wants a payback period below 18 months."
)

CONSTRAINTS_TEXT = (
    "The total launch budget cannot exceed 2 million euros. Do not recommend acquiring a "
    "competitor. All data handling must comply with GDPR and the recommendation must not "
    "assume more than 10 new hires in the first year. Keep pricing in euros, reference "
    "only public market data, and flag any assumption that cannot be verified from the "
    "provided context."
)


@pytest.fixture(scope="session", autouse=True)
def backup_env_file():
    """Backup .env file during test session to prevent pollution."""
    env_file = Path(".env")
    backup_file = Path(".env.test_backup")

    if env_file.exists():
        shutil.copy(env_file, backup_file)
        env_file.unlink()

    yield

    if backup_file.exists():
        shutil.move(backup_file, env_file)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop the settings singleton around every test."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def catalog():
    return DEFAULT_CATALOG


@pytest.fixture
def empty_sections(catalog) -> list[SectionState]:
    """Sections seeded from the default template, all values empty."""
    return seed_sections(catalog.blueprints, catalog.default_template)


@pytest.fixture
def filled_sections(empty_sections) -> list[SectionState]:
    """Every required section filled with 50+ words; optional sections empty."""
    sections = update_section_value(empty_sections, "objective", OBJECTIVE_TEXT)
    sections = update_section_value(sections, "context", CONTEXT_TEXT)
    return update_section_value(sections, "constraints", CONSTRAINTS_TEXT)


@pytest.fixture
def complete_options() -> BuilderOptions:
    """Options with persona, tone, 3 guardrails and 2 success criteria."""
    return BuilderOptions(
        target_audience="The Northwind executive team",
        response_format="Markdown with an executive summary and a risk table.",
        creativity_level=6,
        temperature=0.6,
        tone="Confident and concise",
        persona="a senior strategy consultant",
        guardrails=list(PRESET_GUARDRAILS[:3]),
        success_criteria=[PRESET_SUCCESS_CRITERIA[0], PRESET_SUCCESS_CRITERIA[1]],
    )
