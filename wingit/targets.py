"""Target-species recommendation engine.

Responsibilities:
- Validate and normalise the caller's filter configuration
- Drop species the user has already recorded (counted)
- Drop heard-only reports and low-frequency species (silently)
- Rank the survivors and cap the list

Ranking order:
    1. recent frequency, highest first
    2. observation date, newest first (unparseable dates sort last)
    3. original input order

The engine is a pure function: no I/O, no retained state between calls.
The recent-frequency value comes from an injectable scorer; until a real
statistics source exists the default scorer returns a fixed placeholder.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Iterable, Set
from datetime import date, datetime
from typing import Optional

from wingit.errors import InvalidInputError
from wingit.models import RecentObservation, TargetFilters, TargetResult, TargetRow

logger = logging.getLogger(__name__)

DEFAULT_RADIUS_KM = 20.0
DEFAULT_DAYS_BACK = 7
DEFAULT_MAX_SPECIES = 40

#: Score handed out by ``placeholder_frequency``.
PLACEHOLDER_FREQUENCY = 0.20

#: Maps a species code to a recent-frequency score in [0, 1].
FrequencyScorer = Callable[[str], float]


# ── Frequency scoring ──────────────────────────────────────────────────────────


def placeholder_frequency(species_code: str) -> float:
    """Return the same recent-frequency score for every species.

    Stand-in until historical frequency data (e.g. eBird bar charts) is wired
    in. Swap it out by passing ``scorer=`` to ``build_target_checklist``.
    """
    return PLACEHOLDER_FREQUENCY


# ── Filter validation + normalisation ─────────────────────────────────────────


def validate_location(filters: TargetFilters) -> None:
    """Raise ``InvalidInputError`` if the location is blank.

    Raises:
        InvalidInputError: If ``filters.location`` is empty after trimming.
    """
    if not filters.location.strip():
        raise InvalidInputError("location is required")


def normalize_filters(filters: TargetFilters) -> TargetFilters:
    """Replace out-of-range numeric filters with safe values.

    Never fails. Non-positive radius, lookback and cap fall back to their
    defaults, as does a NaN or infinite radius; the minimum frequency is
    clamped into [0, 1] with NaN mapped to 0. The location is left
    untouched. Applying this twice gives the same result as once.

    Args:
        filters: Caller-supplied filters.

    Returns:
        A new ``TargetFilters`` safe to filter with.

    Examples:
        >>> normalize_filters(TargetFilters(location="x", radius_km=-3)).radius_km
        20.0
        >>> normalize_filters(TargetFilters(location="x", min_frequency=1.7)).min_frequency
        1.0
    """
    updates: dict[str, object] = {}

    if not (math.isfinite(filters.radius_km) and filters.radius_km > 0):
        updates["radius_km"] = DEFAULT_RADIUS_KM
    if filters.days_back <= 0:
        updates["days_back"] = DEFAULT_DAYS_BACK
    if filters.max_species <= 0:
        updates["max_species"] = DEFAULT_MAX_SPECIES
    # NaN counts as below the range
    if not filters.min_frequency >= 0:
        updates["min_frequency"] = 0.0
    elif filters.min_frequency > 1:
        updates["min_frequency"] = 1.0

    if updates:
        logger.debug("Normalised filters: %s", updates)
    return filters.model_copy(update=updates)


# ── Date parsing ───────────────────────────────────────────────────────────────

#: Leading calendar date of an eBird ``obsDt`` ("2025-10-06" or "2025-10-06 08:15").
_OBS_DATE_RE = re.compile(r"^\s*(\d{4}-\d{2}-\d{2})(?:[ T].*)?$")


def parse_obs_date(obs_dt: str) -> Optional[date]:
    """Extract the calendar date from an observation timestamp.

    Any time-of-day suffix is ignored.

    Returns:
        The parsed ``date``, or ``None`` if the string is not a valid date.

    Examples:
        >>> parse_obs_date("2017-08-23 20:05")
        datetime.date(2017, 8, 23)
        >>> parse_obs_date("yesterday") is None
        True
    """
    match = _OBS_DATE_RE.match(obs_dt or "")
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y-%m-%d").date()
    except ValueError:
        return None


# ── Ranking ────────────────────────────────────────────────────────────────────


def rank_targets(rows: list[TargetRow]) -> list[TargetRow]:
    """Sort target rows by frequency, then newest date, keeping input order on ties.

    Python's sort is stable, including with ``reverse=True``, so rows that
    compare equal keep their original relative order.
    """
    def key(row: TargetRow) -> tuple[float, date]:
        return (row.recent_frequency, parse_obs_date(row.last_seen_nearby) or date.min)

    return sorted(rows, key=key, reverse=True)


# ── Public pipeline ────────────────────────────────────────────────────────────


def build_target_checklist(
    filters: TargetFilters,
    personal_seen: Set[str],
    recent: Iterable[RecentObservation],
    scorer: FrequencyScorer = placeholder_frequency,
) -> TargetResult:
    """Compute likely lifers near a location.

    This is the single entry point used by ``wingit/tool.py``.

    Args:
        filters: Caller-supplied filters (normalised here).
        personal_seen: Species codes the user has already recorded.
        recent: Recent nearby observations, in feed order.
        scorer: Species code → recent-frequency score in [0, 1].

    Returns:
        A ``TargetResult`` with ranked, capped targets, the normalised
        filters and the number of observations dropped because the species
        was already seen.

    Raises:
        InvalidInputError: If the location is blank. Raised before any
            filtering takes place.
    """
    validate_location(filters)
    filters = normalize_filters(filters)

    rows: list[TargetRow] = []
    excluded = 0

    for obs in recent:
        if obs.species_code in personal_seen:
            excluded += 1
            continue
        if obs.heard_only and not filters.include_heard_only:
            continue

        frequency = scorer(obs.species_code)
        if frequency < filters.min_frequency:
            continue

        rows.append(TargetRow(
            species_code=obs.species_code,
            common_name=obs.common_name,
            sci_name=obs.sci_name,
            recent_frequency=frequency,
            last_seen_nearby=obs.obs_dt,
        ))

    targets = rank_targets(rows)[:filters.max_species]

    logger.info(
        "Target checklist location=%r candidates=%d returned=%d already_seen=%d",
        filters.location, len(rows), len(targets), excluded,
    )
    return TargetResult(
        targets=targets,
        filters=filters,
        excluded_because_already_seen=excluded,
    )
