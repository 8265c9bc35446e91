# meeting_join/schemas/join.py
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from meeting_join.schemas.meeting import MeetingOccurrence, MeetingRecord, MeetingView


class AuthenticatedIdentity(BaseModel):
    """
    A signed-in user joining with their own profile.

    The profile's organization is never shown in the provider display name.
    """

    kind: Literal["authenticated"] = "authenticated"
    name: str = Field("", description="Profile display name.", examples=["Ada Lovelace"])
    email: str = Field("", description="Profile email address.", examples=["ada@example.org"])


class GuestIdentity(BaseModel):
    """
    An anonymous participant who typed their details into the guest form.
    """

    kind: Literal["guest"] = "guest"
    name: str = Field("", description="Name typed by the guest.", examples=["Ada Lovelace"])
    organization: str | None = Field(
        None,
        description="Optional organization, appended to the display name.",
        examples=["ACME"],
    )


JoinIdentity = Annotated[
    Union[AuthenticatedIdentity, GuestIdentity],
    Field(discriminator="kind"),
]


class JoinEligibility(BaseModel):
    """
    Whether an occurrence can be joined right now, with the matching
    user-facing message.
    """

    eligible: bool = Field(..., description="True when joining is currently permitted.")
    message: str = Field(
        ...,
        description="Message shown next to the join button.",
        examples=["The meeting is in progress."],
    )
    earliest_join: datetime | None = Field(
        None, description="Start of the join window (UTC). None without a start time."
    )
    latest_join: datetime | None = Field(
        None, description="End of the join window (UTC), including the grace period."
    )


class JoinStatusRequest(BaseModel):
    """
    Payload for `/meetings/join-status`.

    `occurrences` defaults to the ones embedded in `meeting`; `now`
    defaults to the server clock.
    """

    meeting: MeetingRecord
    occurrences: list[MeetingOccurrence] = Field(
        default_factory=list,
        description="Occurrences ascending by start time. Overrides `meeting.occurrences`.",
    )
    identity: JoinIdentity | None = Field(
        None, description="Who is joining; used to decorate the join URL."
    )
    is_past: bool = Field(False, description="True when the meeting is shown as a past meeting.")
    now: datetime | None = Field(None, description="Evaluation instant; server time when omitted.")


class JoinStatusResponse(BaseModel):
    """
    Everything a join button needs for one render.
    """

    meeting: MeetingView
    occurrence: MeetingOccurrence | None = Field(
        None, description="Selected current-or-next occurrence, if any."
    )
    eligible: bool
    message: str
    minutes_until_joinable: int | None = Field(
        None, description="Countdown until the join window opens; 0 while open."
    )
    display_time: str = Field(..., examples=["Tuesday, January 13, 2026 @ 4:00 PM - 5:00 PM"])
    recurrence_summary: str = Field("", examples=["Weekly on Tuesday"])
    join_url: str | None = Field(
        None, description="Decorated provider URL; only set while joining is permitted."
    )
    detail_link: str = Field(..., description="Shareable link to the meeting page.")
