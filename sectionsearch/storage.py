"""
Loading section data from disk.

The data collaborator serves sections as one JSON array, stored by default in:

    data/sections.json

This module never crashes the application if the file is missing or corrupted:
it returns whatever it could read and logs a warning for everything else.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

from sectionsearch.model import Section, section_from_dict

logger = logging.getLogger(__name__)


def default_sections_path() -> Path:
    """
    Return the default path of sections.json inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can override the path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "sections.json"


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("section data not found: %s", path)
        return []
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("could not read section data %s: %s", path, e)
        return []


def load_sections(path: str | Path | None = None) -> List[Section]:
    """
    Load all sections from a JSON file.

    Returns an empty list if the file does not exist or is invalid.
    Records that do not have the section shape are skipped.
    """
    sections_path = Path(path) if path is not None else default_sections_path()

    raw = _load_json(sections_path)
    if not isinstance(raw, list):
        logger.warning("section data %s is not a JSON array", sections_path)
        return []

    sections: List[Section] = []
    for i, item in enumerate(raw):
        try:
            sections.append(section_from_dict(item))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("skipping malformed section #%d in %s: %r", i, sections_path, e)

    logger.debug("loaded %d sections from %s", len(sections), sections_path)
    return sections
