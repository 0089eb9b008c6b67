"""
Personal eBird history for WingIt.

File format
───────────
A JSON object exported from the user's eBird account:

  meta          provenance (owner, source, generatedAt, totals …)
  speciesIndex  one row per species (preferred when present)
  sightings     raw per-observation rows (fallback)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from wingit.errors import DataLoadError
from wingit.models import PersonalChecklist

logger = logging.getLogger(__name__)


def load_personal_checklist(path: str | Path) -> PersonalChecklist:
    """Read and validate a personal checklist export.

    Args:
        path: Location of the JSON file.

    Returns:
        The decoded ``PersonalChecklist``.

    Raises:
        DataLoadError: If the file cannot be read or is not a valid checklist.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise DataLoadError(f"read personal checklist {path}: {exc}") from exc

    try:
        checklist = PersonalChecklist.model_validate_json(raw)
    except ValidationError as exc:
        raise DataLoadError(f"decode personal checklist {path}: {exc}") from exc

    logger.info(
        "Loaded personal checklist from %s (species_index=%d, sightings=%d)",
        path, len(checklist.species_index), len(checklist.sightings),
    )
    return checklist


def build_seen_set(checklist: PersonalChecklist) -> frozenset[str]:
    """Return the species codes the user has already recorded.

    A non-empty species index is authoritative; raw sightings are only
    scanned when it is empty. Blank species codes are skipped.
    """
    if checklist.species_index:
        rows = checklist.species_index
    else:
        rows = checklist.sightings
    return frozenset(row.species_code for row in rows if row.species_code)


def personal_checklist_view(checklist: PersonalChecklist) -> dict[str, Any]:
    """Read-only summary of the export, served as a resource to the host."""
    return {
        "meta": checklist.meta.model_dump(by_alias=True),
        "speciesIndex": [s.model_dump(by_alias=True) for s in checklist.species_index],
        "countSightings": len(checklist.sightings),
    }
