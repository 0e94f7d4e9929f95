"""Catalog loading from JSON configuration files."""

import json
import logging
from pathlib import Path

from promptsmith.catalog.defaults import DEFAULT_CATALOG
from promptsmith.catalog.models import Catalog
from promptsmith.utils.config import get_settings

logger = logging.getLogger(__name__)


def load_catalog(path: str | Path) -> Catalog:
    """Load and validate a catalog from a JSON file.

    The file mirrors the Catalog schema: ``blueprints``, ``templates``,
    ``preset_guardrails`` and ``preset_success_criteria``.

    Args:
        path: Path to the JSON document

    Returns:
        Validated, frozen Catalog

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON
        ValidationError: If the document does not match the schema
    """
    catalog_path = Path(path)
    if not catalog_path.is_file():
        raise FileNotFoundError(f"Catalog file not found: {catalog_path}")

    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Catalog file is not valid JSON: {catalog_path}: {e}") from e

    catalog = Catalog.model_validate(data)
    logger.info(
        f"Loaded catalog from {catalog_path}: "
        f"{len(catalog.blueprints)} blueprints, {len(catalog.templates)} templates"
    )
    return catalog


def get_catalog() -> Catalog:
    """Return the catalog named by CATALOG_FILE, or the built-in one."""
    settings = get_settings()
    if settings.CATALOG_FILE is None:
        return DEFAULT_CATALOG
    return load_catalog(settings.CATALOG_FILE)
