"""Batch driver: synthesize a prompt draft stored as JSON.

Usage:
    python -m promptsmith draft.json [--template ID] [--json] [--export PATH]

Draft format::

    {
        "template": "code-review",
        "sections": {"objective": "...", "Rollout Plan": "..."},
        "options": {"creativity_level": 3, "guardrails": ["..."]}
    }

``sections`` may also be a list of ``{"id", "label", "value", "description"}``
objects. Keys that match no catalog section become custom sections.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from promptsmith.builder.actions import (
    add_custom_section,
    base_options_for_template,
    build_export_snapshot,
    slugify,
    update_section_value,
)
from promptsmith.builder.seeder import seed_sections
from promptsmith.builder.state import BuilderOptions, SectionState
from promptsmith.catalog.loader import get_catalog
from promptsmith.catalog.models import Catalog, Template
from promptsmith.cli_helpers import display_error, display_success, display_synthesis
from promptsmith.engine.scoring import get_scoring_config
from promptsmith.engine.synthesizer import PromptSynthesizer
from promptsmith.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _fill_section(
    sections: list[SectionState], key: str, value: str, description: str = ""
) -> list[SectionState]:
    if any(section.id == key for section in sections):
        return update_section_value(sections, key, value)
    slug = slugify(key)
    if not slug:
        raise ValueError(f"Section {key!r} has no usable id")
    sections = add_custom_section(sections, key, description)
    return update_section_value(sections, slug, value)


def load_draft(
    data: dict[str, Any],
    catalog: Catalog,
    template_id: str | None = None,
) -> tuple[Template, list[SectionState], BuilderOptions]:
    """Turn a draft document into template, sections and options.

    Args:
        data: Parsed draft JSON
        catalog: Catalog providing blueprints and templates
        template_id: Overrides the draft's ``template`` key

    Returns:
        Tuple of (template, sections, options)

    Raises:
        KeyError: If the template id is unknown
        ValueError: If the document, a section entry or ``options`` has the
            wrong shape, or a section key yields no usable id
        ValidationError: If ``options`` holds values of the wrong type
    """
    if not isinstance(data, dict):
        raise ValueError("Draft must be a JSON object")

    chosen = template_id or data.get("template")
    template = catalog.template(chosen) if chosen else catalog.default_template

    sections = seed_sections(catalog.blueprints, template)
    raw_sections = data.get("sections", {})
    if isinstance(raw_sections, dict):
        for key, value in raw_sections.items():
            sections = _fill_section(sections, key, str(value))
    elif isinstance(raw_sections, list):
        for index, entry in enumerate(raw_sections):
            if not isinstance(entry, dict):
                raise ValueError(f"'sections[{index}]' must be an object")
            key = str(entry.get("id") or entry.get("label") or "")
            sections = _fill_section(
                sections, key, str(entry.get("value", "")), str(entry.get("description", ""))
            )
    else:
        raise ValueError("'sections' must be an object or a list")

    raw_options = data.get("options", {})
    if not isinstance(raw_options, dict):
        raise ValueError("'options' must be an object")

    base = base_options_for_template(template, catalog=catalog)
    options = BuilderOptions.model_validate({**base.model_dump(), **raw_options})
    return template, sections, options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptsmith",
        description="Assemble and score a prompt draft.",
    )
    parser.add_argument("draft", type=Path, help="Path to the draft JSON file")
    parser.add_argument("--template", help="Template id overriding the draft's template")
    parser.add_argument("--json", action="store_true", help="Print the synthesis as JSON")
    parser.add_argument("--export", type=Path, help="Write an export snapshot to this path")
    parser.add_argument("--log-json", action="store_true", help="Emit JSON log records")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the batch driver and return a process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(use_json=args.log_json)

    try:
        data = json.loads(args.draft.read_text(encoding="utf-8"))
        catalog = get_catalog()
        template, sections, options = load_draft(data, catalog, args.template)
        synthesizer = PromptSynthesizer(catalog, get_scoring_config())
        result = synthesizer.synthesize(sections, options)
    except (OSError, ValueError, KeyError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        logger.error(f"Failed to synthesize {args.draft}: {type(e).__name__}: {e}")
        display_error(f"Could not synthesize {args.draft}: {e}")
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        display_synthesis(result)

    if args.export:
        snapshot = build_export_snapshot(template, sections, options, result)
        args.export.write_text(json.dumps(snapshot, indent=2), encoding="utf-8")
        if not args.json:
            display_success(f"Snapshot written to {args.export}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
