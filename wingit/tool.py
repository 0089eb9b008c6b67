"""The ``target_checklist`` tool as exposed to the host assistant.

Glues the collaborators to the engine for one call:

    validate location → normalise filters → resolve recent feed
        → build_target_checklist → one-line summary

The personal-history index is built once at startup and handed in; the tool
keeps no other state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Set
from typing import TYPE_CHECKING, Optional

from wingit.models import TargetFilters, TargetResult, ToolResponse
from wingit.recent import fetch_recent
from wingit.targets import (
    FrequencyScorer,
    build_target_checklist,
    normalize_filters,
    placeholder_frequency,
    validate_location,
)

if TYPE_CHECKING:
    from config.settings import Settings
    from wingit.ebird import EBirdClient

logger = logging.getLogger(__name__)

TOOL_NAME = "target_checklist"
TOOL_DESCRIPTION = (
    "Return likely new lifers near a location by comparing recent eBird "
    "observations with your personal history."
)


def summarize(result: TargetResult) -> str:
    """Short, human-readable line for the host UI.

    Examples:
        "3 candidate lifers; top: Lewis's Woodpecker"
        "WingIt: no candidate lifers"
    """
    if not result.targets:
        return "WingIt: no candidate lifers"
    return f"{len(result.targets)} candidate lifers; top: {result.targets[0].common_name}"


class TargetChecklistTool:
    """Callable wrapper around the engine.

    Args:
        settings: Application configuration (snapshot path, strictness, …).
        seen: Species codes from the personal checklist.
        client: Optional eBird client for live fetches.
        scorer: Recent-frequency scorer passed to the engine.
    """

    def __init__(
        self,
        settings: Settings,
        seen: Set[str],
        client: Optional[EBirdClient] = None,
        scorer: FrequencyScorer = placeholder_frequency,
    ) -> None:
        self.settings = settings
        self.seen = seen
        self.client = client
        self.scorer = scorer

    def call(self, filters: TargetFilters) -> ToolResponse:
        """Run one target-checklist request.

        Raises:
            InvalidInputError: If the location is blank; nothing is fetched.
            EBirdError, DataLoadError: Only when ``strict_recent`` is set.
        """
        # Checked here so a blank location fetches nothing; the live fetch needs
        # the normalised radius/lookback. The engine repeats both steps on the
        # already-normalised filters, which leaves them unchanged.
        validate_location(filters)
        effective = normalize_filters(filters)

        recent = fetch_recent(self.settings, effective, client=self.client)
        result = build_target_checklist(effective, self.seen, recent, scorer=self.scorer)

        return ToolResponse(summary=summarize(result), result=result)
