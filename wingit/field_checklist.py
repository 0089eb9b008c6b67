"""
Printable field checklist written by Claude.

Takes a ``TargetResult`` from the target_checklist tool, pairs it with the
``field_checklist`` prompt, and streams Claude's formatted checklist back.

Flow
────
stream_field_checklist(result, settings)
    → yields ("token", str) chunks while Claude writes
    → yields ("text", str) with the complete checklist last
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import TYPE_CHECKING

import anthropic

from wingit.models import TargetResult
from wingit.prompts import build_field_checklist_prompt, day_range_label

if TYPE_CHECKING:
    from config.settings import Settings

logger = logging.getLogger(__name__)

MAX_TOKENS = 1000


def stream_field_checklist(
    result: TargetResult,
    settings: Settings,
) -> Generator[tuple[str, str], None, None]:
    """Stream a printable field checklist for *result*.

    Yields ``(event_type, payload)`` tuples:

    * ``("token", str)`` — a text chunk from Claude's response
    * ``("text",  str)`` — the complete assembled checklist (last event)

    Raises:
        ValueError: If no Anthropic API key is configured.
        anthropic.APIError: On API errors.
    """
    if not settings.anthropic_api_key:
        raise ValueError("ANTHROPIC_API_KEY is not set; field checklists are unavailable.")

    filters = result.filters
    system = build_field_checklist_prompt(filters.location, day_range_label(filters.days_back))
    tool_output = result.model_dump_json(by_alias=True)

    client = anthropic.Anthropic(api_key=settings.anthropic_api_key)
    text_parts: list[str] = []

    logger.info("Writing field checklist for %d targets", len(result.targets))

    with client.messages.stream(
        model=settings.field_checklist_model,
        max_tokens=MAX_TOKENS,
        system=system,
        messages=[{"role": "user", "content": f"target_checklist output:\n{tool_output}"}],
    ) as stream:
        for event in stream:
            if getattr(event, "type", None) != "content_block_delta":
                continue
            delta = getattr(event, "delta", None)
            if delta and getattr(delta, "type", None) == "text_delta":
                text_parts.append(delta.text)
                yield ("token", delta.text)

    yield ("text", "".join(text_parts))
