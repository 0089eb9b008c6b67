"""
WingIt core package — likely lifers near you.

Modules
───────
models           — Pydantic data models (PersonalChecklist, RecentObservation, TargetResult …)
errors           — Exception hierarchy (InvalidInputError, DataLoadError, EBirdError …)
targets          — Recommendation engine: normalise filters, exclude, rank, cap
checklist        — Personal checklist loading + already-seen species index
recent           — Recent nearby observations: snapshot file or live eBird fetch
ebird            — eBird API client (requests)
tool             — target_checklist tool: feed resolution + engine + summary line
prompts          — field_checklist prompt text
field_checklist  — Claude-written printable field checklist (streaming)
"""
