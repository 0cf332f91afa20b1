"""
CatalogLoader - Load authored content from a YAML catalog file.

Provides read-only access to:
- Sections grouped by track (drills, first aid, modules)
- Quiz question banks with their per-quiz configuration

All validation happens here, at load time. A malformed catalog raises
CatalogError before anything is rendered; queries never re-validate.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from suraksha.errors import CatalogError
from suraksha.schemas import Catalog, QuestionBank, Section, Track
from suraksha.utils import load_yaml_file

logger = logging.getLogger(__name__)


class CatalogLoader:
    """
    Load the content catalog from a YAML file.

    Expected layout::

        tracks:
          drills:
            earthquake:
              title: Earthquake Safety
              items:
                - {id: eq1, order: 1, title: ...}
        quizzes:
          disaster-management-quiz:
            title: ...
            config: {sample_size: 25}
            questions:
              - {id: q1, prompt: ..., options: [...], correct_answer: 1}
    """

    def __init__(self, catalog_path: str | Path):
        """
        Initialize loader with path to the catalog file.

        Args:
            catalog_path: Path to catalog.yaml
        """
        self.catalog_path = Path(catalog_path)
        if not self.catalog_path.exists():
            raise FileNotFoundError(f"Catalog file not found: {catalog_path}")

    def load(self) -> Catalog:
        """Parse and validate the catalog. Raises CatalogError on any defect."""
        try:
            raw = load_yaml_file(self.catalog_path)
        except (yaml.YAMLError, ValueError) as e:
            raise CatalogError(f"Cannot parse catalog {self.catalog_path}: {e}") from e

        catalog = build_catalog(raw)
        logger.info(
            f"Loaded catalog {self.catalog_path.name}: "
            f"{len(catalog.sections)} sections, {len(catalog.banks)} quiz banks"
        )
        return catalog


def _mapping(value: Any, where: str) -> dict:
    """Return value as a mapping, treating an empty YAML node as {}."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise CatalogError(f"{where} must be a mapping, got {type(value).__name__}")
    return value


def build_catalog(raw: dict[str, Any]) -> Catalog:
    """Build a validated Catalog from a parsed mapping."""
    sections: dict[str, Section] = {}
    banks: dict[str, QuestionBank] = {}

    raw = _mapping(raw, "Catalog")
    for track_name, track_sections in _mapping(raw.get("tracks"), "'tracks'").items():
        try:
            track = Track(track_name)
        except ValueError as e:
            raise CatalogError(f"Unknown track: {track_name}") from e

        for key, body in _mapping(track_sections, f"Track '{track_name}'").items():
            if key in sections:
                raise CatalogError(f"Duplicate section key: {key}")
            body = _mapping(body, f"Section '{key}'")
            try:
                sections[key] = Section(key=key, track=track, **body)
            except (ValidationError, TypeError) as e:
                raise CatalogError(f"Invalid section '{key}' in track '{track_name}': {e}") from e

    for quiz_id, body in _mapping(raw.get("quizzes"), "'quizzes'").items():
        body = _mapping(body, f"Quiz bank '{quiz_id}'")
        try:
            bank = QuestionBank(id=quiz_id, **body)
        except (ValidationError, TypeError) as e:
            raise CatalogError(f"Invalid quiz bank '{quiz_id}': {e}") from e
        if bank.effective_sample_size > bank.size:
            raise CatalogError(
                f"Quiz '{quiz_id}' samples {bank.effective_sample_size} "
                f"questions but the bank has only {bank.size}"
            )
        banks[quiz_id] = bank

    try:
        return Catalog(sections=sections, banks=banks)
    except ValidationError as e:
        raise CatalogError(f"Invalid catalog: {e}") from e
