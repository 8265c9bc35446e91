# meeting_join/services/join_evaluator.py
from __future__ import annotations

import math
from datetime import datetime, timedelta

from meeting_join.schemas.join import JoinEligibility
from meeting_join.schemas.meeting import MeetingOccurrence
from meeting_join.services.time_format import ensure_utc

DEFAULT_EARLY_JOIN_MINUTES = 10
JOIN_GRACE_MINUTES = 40

MESSAGE_IN_PROGRESS = "The meeting is in progress."


class JoinEligibilityEvaluator:
    """
    Decides whether an occurrence may be joined at a given instant.

    Rules
    -----
    1) Past meeting (flagged by the caller)       => not joinable
    2) No occurrence or no start time             => not joinable
    3) earliest = start - early_join_minutes
       latest   = start + duration + 40 minutes
       joinable iff earliest <= now <= latest

    Note
    ----
    - `now` is always supplied by the caller; nothing here reads the clock.
    - The 40-minute grace period is fixed and not configurable.
    - `early_join_minutes` is validated upstream (10-60) and only
      defaulted here when it is None.
    """

    @staticmethod
    def join_window(
        occurrence: MeetingOccurrence | None,
        early_join_minutes: int | None,
    ) -> tuple[datetime, datetime] | None:
        """
        Return the `(earliest, latest)` join instants in UTC, or None when
        the occurrence has no start time.
        """
        if occurrence is None or occurrence.start_time is None:
            return None

        if early_join_minutes is None:
            early_join_minutes = DEFAULT_EARLY_JOIN_MINUTES

        start = ensure_utc(occurrence.start_time)
        earliest = start - timedelta(minutes=early_join_minutes)
        latest = start + timedelta(minutes=occurrence.duration_minutes + JOIN_GRACE_MINUTES)
        return earliest, latest

    @staticmethod
    def can_join(
        occurrence: MeetingOccurrence | None,
        early_join_minutes: int | None,
        now: datetime,
        is_past: bool = False,
    ) -> bool:
        """
        True when `now` falls inside the occurrence's join window.
        """
        if is_past:
            return False

        window = JoinEligibilityEvaluator.join_window(occurrence, early_join_minutes)
        if window is None:
            return False

        earliest, latest = window
        return earliest <= ensure_utc(now) <= latest

    @staticmethod
    def alert_message(eligible: bool, early_join_minutes: int | None) -> str:
        """
        Message paired with the eligibility flag.
        """
        if eligible:
            return MESSAGE_IN_PROGRESS

        if early_join_minutes is None:
            early_join_minutes = DEFAULT_EARLY_JOIN_MINUTES
        return (
            f"You may only join the meeting up to {early_join_minutes} "
            "minutes before the start time."
        )

    @staticmethod
    def evaluate(
        occurrence: MeetingOccurrence | None,
        early_join_minutes: int | None,
        now: datetime,
        is_past: bool = False,
    ) -> JoinEligibility:
        """
        Eligibility flag, message and window computed together so that the
        flag and the wording can never disagree.
        """
        eligible = JoinEligibilityEvaluator.can_join(
            occurrence, early_join_minutes, now, is_past=is_past
        )
        window = JoinEligibilityEvaluator.join_window(occurrence, early_join_minutes)

        return JoinEligibility(
            eligible=eligible,
            message=JoinEligibilityEvaluator.alert_message(eligible, early_join_minutes),
            earliest_join=window[0] if window else None,
            latest_join=window[1] if window else None,
        )

    @staticmethod
    def minutes_until_joinable(
        occurrence: MeetingOccurrence | None,
        early_join_minutes: int | None,
        now: datetime,
        is_past: bool = False,
    ) -> int | None:
        """
        Whole minutes (rounded up) until the join window opens.

        Returns 0 inside the window and None once the window has closed,
        when the occurrence has no start time, or for a past meeting.
        """
        if is_past:
            return None

        window = JoinEligibilityEvaluator.join_window(occurrence, early_join_minutes)
        if window is None:
            return None

        earliest, latest = window
        now = ensure_utc(now)
        if now > latest:
            return None
        if now >= earliest:
            return 0
        return math.ceil((earliest - now).total_seconds() / 60)
