# meeting_join/api/routes/recurrence.py
from datetime import date as date_type
from http import HTTPStatus

from fastapi import APIRouter, Query

from meeting_join.schemas.recurrence import (
    RecurrenceDescribeRequest,
    RecurrenceDescription,
    RecurrenceGenerateRequest,
    RecurrenceGenerateResponse,
    RecurrenceOption,
    RecurrenceRule,
    RecurrenceSummary,
)
from meeting_join.services.recurrence import RecurrenceGenerator

router = APIRouter(
    prefix="/recurrence",
    tags=["Recurrence"],
)


@router.post(
    "/generate",
    response_model=RecurrenceGenerateResponse,
    status_code=HTTPStatus.OK,
    summary="Build a recurrence rule from a user selection",
    description=(
        "Turn one of the offered recurrence choices into a rule anchored on "
        "the meeting's start date.\n\n"
        "- `none` returns a null rule\n"
        "- `monthly_nth` on the 5th occurrence of a weekday is stored as `monthly_week=-1`\n"
    ),
    responses={
        200: {
            "description": "Rule generated.",
            "content": {
                "application/json": {
                    "example": {
                        "rule": {
                            "kind": 3,
                            "interval": 1,
                            "weekly_days": None,
                            "monthly_week": 2,
                            "monthly_weekday": 3,
                            "end_times": None,
                            "end_date_time": None,
                        },
                        "description": {
                            "selection": "monthly_nth",
                            "label": "Monthly on the 2nd Tuesday",
                        },
                    }
                }
            },
        },
        422: {"description": "Unknown selection or invalid date."},
    },
)
async def generate_rule(payload: RecurrenceGenerateRequest) -> RecurrenceGenerateResponse:
    rule = RecurrenceGenerator.generate(payload.selection, payload.anchor_date)
    return RecurrenceGenerateResponse(
        rule=rule,
        description=RecurrenceGenerator.describe(rule, payload.anchor_date),
    )


@router.post(
    "/describe",
    response_model=RecurrenceDescription,
    status_code=HTTPStatus.OK,
    summary="Map a stored rule back to its selection",
    description=(
        "Used to pre-populate an edit form. A weekly rule on exactly "
        "Monday-Friday always maps to `weekdays`."
    ),
)
async def describe_rule(payload: RecurrenceDescribeRequest) -> RecurrenceDescription:
    return RecurrenceGenerator.describe(payload.rule, payload.anchor_date)


@router.post(
    "/summary",
    response_model=RecurrenceSummary,
    status_code=HTTPStatus.OK,
    summary="Summarize an arbitrary recurrence rule",
    description=(
        "Readable summary for any rule, including custom intervals and end "
        "conditions, e.g. `Every 2 weeks on Monday, Wednesday, for 5 occurrences`."
    ),
)
async def summarize_rule(rule: RecurrenceRule) -> RecurrenceSummary:
    return RecurrenceGenerator.summarize(rule)


@router.get(
    "/options",
    response_model=list[RecurrenceOption],
    status_code=HTTPStatus.OK,
    summary="List recurrence choices for a start date",
    description=(
        "`monthly_nth` is offered for the 1st-4th occurrence of a weekday and "
        "`monthly_last` when the date is the last occurrence in its month. "
        "Both may be offered together."
    ),
)
async def list_options(
    anchor_date: date_type = Query(
        ...,
        description="Meeting start date in ISO format (YYYY-MM-DD).",
        examples=["2026-01-27"],
    ),
) -> list[RecurrenceOption]:
    return RecurrenceGenerator.options(anchor_date)
