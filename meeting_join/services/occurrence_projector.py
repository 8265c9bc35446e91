# meeting_join/services/occurrence_projector.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from meeting_join.schemas.meeting import MeetingOccurrence, MeetingView
from meeting_join.services.join_evaluator import JOIN_GRACE_MINUTES
from meeting_join.services.time_format import ensure_utc

_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


class OccurrenceProjector:
    """
    Selects which single occurrence of a meeting is "current".

    - With occurrences: the first one (in the order given) that has not
      yet ended.
    - Without occurrences, non-recurring: a synthesized occurrence built
      from the meeting's own start time and duration.
    - Without occurrences, recurring: None ("no data yet").

    Occurrences are expected pre-sorted by start time; they are never
    re-sorted here and the recurrence rule is never expanded into dates.
    """

    @staticmethod
    def _ends_at(occurrence: MeetingOccurrence) -> Optional[datetime]:
        if occurrence.start_time is None:
            return None
        return ensure_utc(occurrence.start_time) + timedelta(minutes=occurrence.duration_minutes)

    @staticmethod
    def from_meeting(meeting: MeetingView) -> Optional[MeetingOccurrence]:
        """
        Stand-in occurrence for a non-recurring meeting.

        Returns None when the meeting has no start time.
        """
        if meeting.start_time is None:
            return None
        return MeetingOccurrence(
            occurrence_id=None,
            start_time=meeting.start_time,
            duration_minutes=meeting.duration_minutes,
        )

    @staticmethod
    def select_current_or_next(
        meeting: MeetingView,
        occurrences: Sequence[MeetingOccurrence],
        now: datetime,
    ) -> Optional[MeetingOccurrence]:
        """
        Return the occurrence a viewer should see (and possibly join) at `now`.

        Rules
        -----
        - Non-empty `occurrences`: first occurrence whose
          `start_time + duration_minutes >= now`. If all have ended, None;
          the caller may show the meeting's own start time, but a past
          meeting is never joinable.
        - Empty, non-recurring meeting: synthesized occurrence.
        - Empty, recurring meeting: None.
        """
        if occurrences:
            now = ensure_utc(now)
            for occurrence in occurrences:
                ends_at = OccurrenceProjector._ends_at(occurrence)
                if ends_at is not None and ends_at >= now:
                    return occurrence
            return None

        if meeting.is_recurring:
            return None

        return OccurrenceProjector.from_meeting(meeting)

    @staticmethod
    def sort_by_next_occurrence(
        items: Iterable[tuple[MeetingView, Sequence[MeetingOccurrence]]],
        now: datetime,
    ) -> list[tuple[MeetingView, Sequence[MeetingOccurrence]]]:
        """
        Order `(meeting, occurrences)` pairs by the start of their selected
        occurrence, earliest first.

        Pairs without a selectable occurrence keep their relative order and
        go last.
        """
        def sort_key(pair: tuple[MeetingView, Sequence[MeetingOccurrence]]) -> tuple[int, datetime]:
            selected = OccurrenceProjector.select_current_or_next(pair[0], pair[1], now)
            if selected is None or selected.start_time is None:
                return 1, _FAR_FUTURE
            return 0, ensure_utc(selected.start_time)

        return sorted(items, key=sort_key)

    @staticmethod
    def is_upcoming(meeting: MeetingView, now: datetime) -> bool:
        """
        True until the meeting's own start + duration + grace period has passed.

        Meetings without a start time are never upcoming.
        """
        if meeting.start_time is None:
            return False

        cutoff = ensure_utc(meeting.start_time) + timedelta(
            minutes=meeting.duration_minutes + JOIN_GRACE_MINUTES
        )
        return cutoff >= ensure_utc(now)
