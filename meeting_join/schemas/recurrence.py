# meeting_join/schemas/recurrence.py
from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

MONTHLY_WEEK_LAST = -1
MONTHLY_WEEK_VALUES = frozenset({1, 2, 3, 4, MONTHLY_WEEK_LAST})


class RecurrenceKind(int, Enum):
    """
    Recurrence frequency. Values match the provider's numeric `type` codes.
    """

    NONE = 0
    DAILY = 1
    WEEKLY = 2
    MONTHLY = 3


class RecurrenceSelection(str, Enum):
    """
    The recurrence choices offered to a user when scheduling a meeting.
    """

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    WEEKDAYS = "weekdays"
    MONTHLY_NTH = "monthly_nth"
    MONTHLY_LAST = "monthly_last"


class RecurrenceRule(BaseModel):
    """
    Canonical, provider-agnostic recurrence descriptor.

    Only the fields relevant to `kind` are populated:
    - WEEKLY  -> `weekly_days`
    - MONTHLY -> `monthly_week` + `monthly_weekday`
    - DAILY / NONE -> neither

    The optional end condition (`end_times` or `end_date_time`) is
    independent of `kind`.
    """

    model_config = ConfigDict(frozen=True)

    kind: RecurrenceKind = Field(..., description="Recurrence frequency.", examples=[2])
    interval: int = Field(
        1,
        ge=1,
        description="Repeat every N units of `kind`. Always 1 for generated rules.",
    )
    weekly_days: frozenset[int] | None = Field(
        None,
        description="Weekday codes (1=Sunday ... 7=Saturday). Weekly rules only.",
        examples=[[3]],
    )
    monthly_week: int | None = Field(
        None,
        description="Occurrence of the weekday within the month: 1-4, or -1 for last.",
        examples=[2],
    )
    monthly_weekday: int | None = Field(
        None,
        description="Weekday code (1=Sunday ... 7=Saturday). Monthly rules only.",
        examples=[3],
    )
    end_times: int | None = Field(
        None,
        ge=1,
        description="Stop after this many occurrences.",
    )
    end_date_time: datetime | None = Field(
        None,
        description="Stop after this instant.",
    )

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "RecurrenceRule":
        weekly_set = self.weekly_days is not None
        monthly_set = self.monthly_week is not None or self.monthly_weekday is not None

        if self.kind == RecurrenceKind.WEEKLY:
            if not self.weekly_days:
                raise ValueError("weekly rules require at least one weekday")
            if any(code < 1 or code > 7 for code in self.weekly_days):
                raise ValueError("weekly_days must be weekday codes between 1 and 7")
            if monthly_set:
                raise ValueError("weekly rules cannot carry monthly fields")
        elif self.kind == RecurrenceKind.MONTHLY:
            if self.monthly_week not in MONTHLY_WEEK_VALUES:
                raise ValueError("monthly_week must be one of 1, 2, 3, 4 or -1")
            if self.monthly_weekday is None or not 1 <= self.monthly_weekday <= 7:
                raise ValueError("monthly_weekday must be a weekday code between 1 and 7")
            if weekly_set:
                raise ValueError("monthly rules cannot carry weekly_days")
        elif weekly_set or monthly_set:
            raise ValueError(f"{self.kind.name.lower()} rules cannot carry weekday fields")

        return self

    @classmethod
    def from_provider(cls, payload: dict[str, Any] | None) -> "RecurrenceRule | None":
        """
        Build a rule from the provider's recurrence dict.

        Provider shape::

            {"type": 2, "repeat_interval": 1, "weekly_days": "2,3,4,5,6"}
            {"type": 3, "repeat_interval": 1, "monthly_week": -1, "monthly_week_day": 6}

        Returns None for an empty or malformed payload instead of raising.
        """
        if not payload:
            return None

        try:
            kind = RecurrenceKind(int(payload.get("type")))
            weekly_raw = payload.get("weekly_days")
            weekly_days = None
            if kind == RecurrenceKind.WEEKLY and weekly_raw:
                weekly_days = frozenset(
                    int(part) for part in str(weekly_raw).split(",") if part.strip()
                )

            monthly_week = None
            monthly_weekday = None
            if kind == RecurrenceKind.MONTHLY:
                monthly_week = payload.get("monthly_week")
                monthly_weekday = payload.get("monthly_week_day")

            return cls(
                kind=kind,
                interval=payload.get("repeat_interval") or 1,
                weekly_days=weekly_days,
                monthly_week=monthly_week,
                monthly_weekday=monthly_weekday,
                end_times=payload.get("end_times") or None,
                end_date_time=payload.get("end_date_time") or None,
            )
        except (ValidationError, ValueError, TypeError) as exc:
            logger.debug("Ignoring malformed recurrence payload %r: %s", payload, exc)
            return None

    def to_provider(self) -> dict[str, Any]:
        """
        Serialize into the provider's recurrence dict (inverse of `from_provider`).
        """
        payload: dict[str, Any] = {
            "type": int(self.kind),
            "repeat_interval": self.interval,
        }
        if self.weekly_days is not None:
            payload["weekly_days"] = ",".join(str(code) for code in sorted(self.weekly_days))
        if self.monthly_week is not None:
            payload["monthly_week"] = self.monthly_week
            payload["monthly_week_day"] = self.monthly_weekday
        if self.end_times is not None:
            payload["end_times"] = self.end_times
        if self.end_date_time is not None:
            payload["end_date_time"] = self.end_date_time.isoformat()
        return payload


class RecurrenceDescription(BaseModel):
    """
    Result of inverting a rule back into the UI selection it came from.
    """

    selection: RecurrenceSelection = Field(..., examples=["monthly_last"])
    label: str = Field(..., examples=["Monthly on the last Tuesday"])


class RecurrenceOption(BaseModel):
    """
    One selectable recurrence choice for a given anchor date.
    """

    value: RecurrenceSelection = Field(..., examples=["weekly"])
    label: str = Field(..., examples=["Weekly on Tuesday"])


class RecurrenceSummary(BaseModel):
    """
    Free-form human summary of an arbitrary rule.
    """

    description: str = Field(..., examples=["Every 2 weeks on Monday, Wednesday"])
    end_description: str = Field("", examples=["for 5 occurrences"])
    full_summary: str = Field(..., examples=["Every 2 weeks on Monday, Wednesday, for 5 occurrences"])


class RecurrenceGenerateRequest(BaseModel):
    """
    Payload for `/recurrence/generate`.
    """

    selection: RecurrenceSelection = Field(..., examples=["monthly_nth"])
    anchor_date: date = Field(..., description="Meeting start date.", examples=["2026-01-13"])


class RecurrenceGenerateResponse(BaseModel):
    rule: RecurrenceRule | None = None
    description: RecurrenceDescription


class RecurrenceDescribeRequest(BaseModel):
    """
    Payload for `/recurrence/describe`.
    """

    rule: RecurrenceRule | None = None
    anchor_date: date = Field(..., description="Meeting start date.", examples=["2026-01-13"])
