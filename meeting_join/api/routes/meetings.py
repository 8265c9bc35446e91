# meeting_join/api/routes/meetings.py
import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import APIRouter, HTTPException

from meeting_join.core.config import get_settings
from meeting_join.schemas.join import JoinStatusRequest, JoinStatusResponse
from meeting_join.services.join_evaluator import JoinEligibilityEvaluator
from meeting_join.services.join_url import JoinUrlBuilder
from meeting_join.services.meeting_normalizer import MeetingNormalizer
from meeting_join.services.occurrence_projector import OccurrenceProjector
from meeting_join.services.recurrence import RecurrenceGenerator
from meeting_join.services.time_format import format_meeting_time

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/meetings",
    tags=["Meetings"],
)


@router.post(
    "/join-status",
    response_model=JoinStatusResponse,
    status_code=HTTPStatus.OK,
    summary="Resolve the current occurrence of a meeting and whether it can be joined",
    description=(
        "Normalize a meeting record (legacy or current generation), pick the "
        "occurrence a viewer should see right now and evaluate its join window.\n\n"
        "The join window opens `early_join_time_minutes` before the start and "
        "closes 40 minutes after the scheduled end. Both bounds are inclusive.\n\n"
        "`join_url` is only returned while joining is permitted, decorated with "
        "the participant's display name when an identity is supplied."
    ),
    responses={
        200: {
            "description": "Join status computed.",
            "content": {
                "application/json": {
                    "example": {
                        "eligible": True,
                        "message": "The meeting is in progress.",
                        "minutes_until_joinable": 0,
                        "display_time": "Tuesday, January 13, 2026 @ 4:00 PM - 5:00 PM",
                        "recurrence_summary": "Weekly on Tuesday",
                        "join_url": "https://zoom.example/j/1?uname=Ada%20Lovelace%20%28ACME%29&un=QWRhIExvdmVsYWNlIChBQ01FKQ%3D%3D",
                        "detail_link": "https://app.example.org/meetings/m-1",
                    }
                }
            },
        },
        422: {
            "description": "Validation error (e.g. early-join window outside the accepted range).",
        },
    },
)
async def join_status(payload: JoinStatusRequest) -> JoinStatusResponse:
    settings = get_settings()
    record = payload.meeting

    early_join = record.early_join_time_minutes
    if early_join is not None and not (
        settings.MIN_EARLY_JOIN_MINUTES <= early_join <= settings.MAX_EARLY_JOIN_MINUTES
    ):
        raise HTTPException(
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            detail=(
                "early_join_time_minutes must be between "
                f"{settings.MIN_EARLY_JOIN_MINUTES} and {settings.MAX_EARLY_JOIN_MINUTES}"
            ),
        )
    if early_join is None:
        record = record.model_copy(
            update={"early_join_time_minutes": settings.DEFAULT_EARLY_JOIN_MINUTES}
        )

    now = payload.now or datetime.now(tz=timezone.utc)
    occurrences = payload.occurrences or record.occurrences

    meeting = MeetingNormalizer.normalize(record)
    occurrence = OccurrenceProjector.select_current_or_next(meeting, occurrences, now)
    if occurrence is not None:
        meeting = MeetingNormalizer.normalize(record, occurrence)

    eligibility = JoinEligibilityEvaluator.evaluate(
        occurrence, meeting.early_join_minutes, now, is_past=payload.is_past
    )

    join_url = None
    if eligibility.eligible and meeting.provider_join_url:
        join_url = JoinUrlBuilder.build(meeting.provider_join_url, payload.identity)

    if occurrence is not None and occurrence.start_time is not None:
        display_time = format_meeting_time(
            occurrence.start_time, occurrence.duration_minutes, tz=meeting.timezone
        )
    else:
        display_time = format_meeting_time(
            meeting.start_time, meeting.duration_minutes, tz=meeting.timezone
        )

    recurrence_summary = ""
    if meeting.recurrence is not None:
        recurrence_summary = RecurrenceGenerator.summarize(meeting.recurrence).full_summary

    logger.info(
        "Join status for meeting %s: eligible=%s occurrence=%s",
        meeting.identifier,
        eligibility.eligible,
        occurrence.occurrence_id if occurrence is not None else None,
    )

    return JoinStatusResponse(
        meeting=meeting,
        occurrence=occurrence,
        eligible=eligibility.eligible,
        message=eligibility.message,
        minutes_until_joinable=JoinEligibilityEvaluator.minutes_until_joinable(
            occurrence, meeting.early_join_minutes, now, is_past=payload.is_past
        ),
        display_time=display_time,
        recurrence_summary=recurrence_summary,
        join_url=join_url,
        detail_link=MeetingNormalizer.detail_link(record, str(settings.HOME_URL)),
    )
