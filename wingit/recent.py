"""Recent nearby observations: where the feed comes from.

Sources, in order of preference:

1. Live eBird fetch — when the location is a ``"lat,lng"`` pair and an API
   token is configured.
2. Local snapshot — the JSON file named by ``WINGIT_RECENT_JSON``.
3. Nothing — an empty feed.

A failing source degrades to an empty feed with a warning, unless
``Settings.strict_recent`` is set, in which case the error propagates.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from pydantic import ValidationError

from wingit.errors import DataLoadError, EBirdError
from wingit.models import RECENT_OBSERVATIONS, RecentObservation, TargetFilters

if TYPE_CHECKING:
    from config.settings import Settings
    from wingit.ebird import EBirdClient

logger = logging.getLogger(__name__)

#: "35.6870,-105.9378" or "35.687, -105.94"
_COORDS_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


def load_recent_nearby(path: str | Path) -> list[RecentObservation]:
    """Read a recent-observations snapshot (a JSON array of eBird records).

    Raises:
        DataLoadError: If the file cannot be read or decoded.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise DataLoadError(f"read recent nearby {path}: {exc}") from exc

    try:
        return RECENT_OBSERVATIONS.validate_json(raw)
    except ValidationError as exc:
        raise DataLoadError(f"decode recent nearby {path}: {exc}") from exc


def parse_coordinates(location: str) -> Optional[tuple[float, float]]:
    """Return ``(lat, lng)`` if *location* is a coordinate pair, else ``None``.

    Place names are not geocoded.

    Examples:
        >>> parse_coordinates("35.6870,-105.9378")
        (35.687, -105.9378)
        >>> parse_coordinates("Santa Fe, NM") is None
        True
    """
    match = _COORDS_RE.match(location or "")
    if not match:
        return None
    lat, lng = float(match.group(1)), float(match.group(2))
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        return None
    return lat, lng


def fetch_recent(
    settings: Settings,
    filters: TargetFilters,
    client: Optional[EBirdClient] = None,
) -> list[RecentObservation]:
    """Resolve the recent-observation feed for already-normalised *filters*.

    Args:
        settings: Supplies the snapshot path, token and strictness.
        filters: Normalised filters; radius and lookback drive the live fetch.
        client: eBird client to use for live fetches.

    Returns:
        Observations in feed order; possibly empty.

    Raises:
        EBirdError: Live fetch failed and ``strict_recent`` is set.
        DataLoadError: Snapshot failed and ``strict_recent`` is set.
    """
    coords = parse_coordinates(filters.location)

    try:
        if coords is not None and client is not None and client.token:
            lat, lng = coords
            return client.recent_nearby(
                lat, lng,
                dist_km=filters.radius_km,
                back_days=filters.days_back,
                max_results=settings.ebird_max_results,
            )

        if settings.recent_json:
            rows = load_recent_nearby(settings.recent_json)
            logger.info("Loaded %d recent observations from %s", len(rows), settings.recent_json)
            return rows

    except (EBirdError, DataLoadError) as exc:
        if settings.strict_recent:
            raise
        logger.warning("Recent observations unavailable: %s (continuing with empty recent)", exc)
        return []

    logger.info("No recent-observation source configured; continuing with empty recent")
    return []
