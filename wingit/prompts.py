"""Model-facing prompt text for the ``field_checklist`` prompt."""

from __future__ import annotations

FIELD_CHECKLIST_DESCRIPTION = "Format WingIt target_checklist results as a printable field checklist."

_FIELD_CHECKLIST_TEMPLATE = """\
You are a birding assistant. The user has just called the WingIt tool "target_checklist" \
to get likely new lifers near {location} for {day_range}.

Using the tool output provided in this conversation (JSON with "targets" and "filters"), \
produce a concise, printable field checklist:

- Only list likely lifers (the "targets" array).
- Group species by approximate recent frequency (high / medium / low) using "recentFrequency".
- For each species give the common name, the scientific name and, when "lastSeenNearby" \
is present, a short note such as "reported <date>".
- Keep it compact enough to print or glance at in the field.
- Do not reprint the raw JSON; summarize it.

If there are no targets, say that no likely new lifers turned up for this query and \
suggest widening "radiusKm" or "daysBack"."""


def build_field_checklist_prompt(location: str, day_range: str) -> str:
    """Return the instructions for turning a target list into a field checklist.

    Blank arguments get friendly defaults so callers don't have to pre-validate.

    Examples:
        >>> "this area" in build_field_checklist_prompt("", "")
        True
    """
    location = location.strip() or "this area"
    day_range = day_range.strip() or "the recent period"
    return _FIELD_CHECKLIST_TEMPLATE.format(location=location, day_range=day_range)


def day_range_label(days_back: int) -> str:
    """Human label for a lookback window (``7`` → ``"last 7 days"``)."""
    if days_back == 1:
        return "last day"
    return f"last {days_back} days"
