# meeting_join/schemas/meeting.py
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from meeting_join.schemas.recurrence import RecurrenceRule

LEGACY_VERSION = "v1"


class MeetingOccurrence(BaseModel):
    """
    A single instance of a (possibly recurring) meeting.

    Non-recurring meetings have no occurrence records of their own; the
    projector synthesizes one from the meeting with `occurrence_id=None`.
    `title`/`description` override the parent meeting's when present.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    occurrence_id: str | None = Field(
        None,
        description="Provider occurrence identifier. None for a non-recurring meeting.",
        examples=["1767110400000"],
    )
    start_time: datetime | None = Field(
        None,
        description="Start instant of this occurrence.",
        examples=["2026-01-13T16:00:00Z"],
    )
    duration_minutes: int = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("duration_minutes", "duration"),
        description="Scheduled length in minutes; may differ from the parent meeting.",
        examples=[60],
    )
    title: str | None = Field(None, description="Occurrence-level title override.")
    description: str | None = Field(None, description="Occurrence-level description override.")


class ZoomConfig(BaseModel):
    """
    Nested provider settings carried by current-generation meetings.
    """

    model_config = ConfigDict(extra="ignore")

    ai_companion_enabled: bool | None = Field(
        None, description="Whether the provider's AI companion is enabled."
    )


class MeetingRecord(BaseModel):
    """
    A meeting as delivered by the upstream meeting API.

    Two record generations share this shape:
    - current (`version` != "v1"): `uid`, `title`, `description`,
      `zoom_config.ai_companion_enabled`
    - legacy  (`version` == "v1"): `id`, `topic`, `agenda`, `zoom_ai_enabled`

    Use `MeetingNormalizer.normalize` to obtain a single canonical view.
    """

    model_config = ConfigDict(extra="ignore")

    version: str | None = Field(None, description="Schema generation tag.", examples=["v1"])

    uid: str | None = Field(None, description="Current-generation meeting UID.")
    title: str | None = None
    description: str | None = None
    zoom_config: ZoomConfig | None = None

    # TODO(v1-migration): drop the legacy fields once all meetings are on the current schema
    id: str | int | None = Field(None, description="Legacy numeric meeting id.")
    topic: str | None = None
    agenda: str | None = None
    zoom_ai_enabled: bool | None = None

    start_time: datetime | None = Field(None, description="Scheduled start instant.")
    timezone: str | None = Field(None, description="IANA timezone the meeting was scheduled in.")
    duration: int | None = Field(None, ge=0, description="Scheduled length in minutes.")
    early_join_time_minutes: int | None = Field(
        None, description="Minutes before start during which joining is allowed."
    )
    recurrence: dict[str, Any] | None = Field(
        None, description="Provider recurrence payload; None for one-off meetings."
    )
    password: str | None = None
    join_url: str | None = Field(None, description="Provider join URL, when already known.")
    occurrences: list[MeetingOccurrence] = Field(
        default_factory=list,
        description="Materialized occurrences, ascending by start time.",
    )


class MeetingView(BaseModel):
    """
    Canonical, read-only projection of a `MeetingRecord`.

    Text fields are never None: missing data resolves to "" and flags to False.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., description="Join/route key: legacy id or current UID.")
    title: str = ""
    description: str = ""
    start_time: datetime | None = None
    timezone: str = ""
    duration_minutes: int = 0
    early_join_minutes: int = 10
    recurrence: RecurrenceRule | None = None
    is_recurring: bool = Field(
        False,
        description=(
            "True when the record carries any recurrence payload, even one "
            "that could not be parsed into a `RecurrenceRule`."
        ),
    )
    has_ai_companion: bool = False
    is_legacy: bool = False
    password: str | None = None
    provider_join_url: str | None = None
