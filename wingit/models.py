"""
Pydantic models shared across WingIt.

JSON on the wire is camelCase (matching eBird exports and the API), Python
attributes are snake_case. Every model accepts either spelling on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model: camelCase aliases, populate by field name too.

    An explicit JSON ``null`` on a field with a default decodes to that
    default, so one sparse row does not sink a whole export.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None:
            return value
        field = cls.model_fields[info.field_name]
        if field.is_required():
            return value
        return field.get_default(call_default_factory=True)


# ── Personal checklist export ─────────────────────────────────────────────────


class ChecklistMeta(CamelModel):
    """Provenance block of a personal checklist export."""

    owner: str = ""
    source: str = ""
    generated_at: str = ""
    total_observations: int = 0
    total_species: int = 0
    first_checklist_date: str = ""


class PersonalSighting(CamelModel):
    """One raw sighting row from the user's own eBird history."""

    species_code: str = ""
    common_name: str = ""
    sci_name: str = ""
    obs_dt: str = ""
    loc_name: str = ""
    loc_id: str = ""
    county_code: str = ""
    lat: float = 0.0
    lng: float = 0.0
    count: int = 0
    obs_valid: bool = False
    obs_reviewed: bool = False
    media: bool = False
    entered_as_heard_only: bool = False
    checklist_id: str = ""


class SpeciesSummary(CamelModel):
    """Precomputed per-species roll-up of the personal history."""

    species_code: str = ""
    common_name: str = ""
    sci_name: str = ""
    first_seen: str = ""
    last_seen: str = ""
    total_checklists: int = 0
    total_count: int = 0
    locations: list[str] = Field(default_factory=list)


class PersonalChecklist(CamelModel):
    """The user's exported history: raw sightings and/or a species summary."""

    meta: ChecklistMeta = Field(default_factory=ChecklistMeta)
    sightings: list[PersonalSighting] = Field(default_factory=list)
    species_index: list[SpeciesSummary] = Field(default_factory=list)


# ── Recent nearby observations ────────────────────────────────────────────────


class RecentObservation(CamelModel):
    """A recently reported sighting near the search location (eBird field names)."""

    species_code: str = Field(default="", alias="speciesCode")
    common_name: str = Field(default="", alias="comName")
    sci_name: str = Field(default="", alias="sciName")
    loc_name: str = Field(default="", alias="locName")
    loc_id: str = Field(default="", alias="locId")
    obs_dt: str = Field(default="", alias="obsDt")
    #: Reported by ear only, no visual confirmation.
    heard_only: bool = Field(default=False, alias="howr")


#: Decoder for a JSON array of eBird observations (snapshot files and API responses).
RECENT_OBSERVATIONS = TypeAdapter(list[RecentObservation])


# ── Engine input / output ─────────────────────────────────────────────────────


class TargetFilters(CamelModel):
    """Caller-supplied filter configuration for a target checklist.

    Defaults are the documented human-facing ones. Numeric fields are not
    constrained here; ``wingit.targets.normalize_filters`` repairs them.
    """

    location: str = ""
    radius_km: float = 20.0
    days_back: int = 7
    include_heard_only: bool = False
    min_frequency: float = 0.05
    max_species: int = 40


class TargetRow(CamelModel):
    """A candidate lifer."""

    species_code: str
    common_name: str = ""
    sci_name: str = ""
    recent_frequency: float
    last_seen_nearby: str = ""


class TargetResult(CamelModel):
    """Ranked, capped targets plus the effective filters and bookkeeping."""

    targets: list[TargetRow] = Field(default_factory=list)
    filters: TargetFilters
    excluded_because_already_seen: int = 0


class ToolResponse(CamelModel):
    """What the caller of the target_checklist tool gets back."""

    summary: str
    result: TargetResult
