# meeting_join/services/meeting_normalizer.py
from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from meeting_join.schemas.meeting import (
    LEGACY_VERSION,
    MeetingOccurrence,
    MeetingRecord,
    MeetingView,
)
from meeting_join.schemas.recurrence import RecurrenceRule
from meeting_join.services.join_evaluator import DEFAULT_EARLY_JOIN_MINUTES


def _legacy_fields(record: MeetingRecord) -> dict[str, object]:
    """
    Legacy-generation fallbacks, consulted only after the current fields.

    TODO(v1-migration): delete this function (and its single call site)
    once all meetings are on the current schema.
    """
    return {
        "identifier": str(record.id) if record.id is not None and record.id != "" else "",
        "title": record.topic or "",
        "description": record.agenda or "",
        "has_ai_companion": record.zoom_ai_enabled,
    }


class MeetingNormalizer:
    """
    Resolves the canonical display and join fields of a meeting across the
    legacy and current record generations.

    Priority rules
    --------------
    - identifier:       legacy id (legacy records only) > current uid
    - title:            occurrence title > current title > legacy topic
    - description:      occurrence description > current description > legacy agenda
    - has_ai_companion: current zoom_config flag > legacy flat flag > False
    - is_legacy:        version tag == "v1"

    Every field is total: missing data becomes "" or False, never None.
    """

    @staticmethod
    def is_legacy(record: MeetingRecord) -> bool:
        return record.version == LEGACY_VERSION

    @staticmethod
    def normalize(
        record: MeetingRecord,
        occurrence: Optional[MeetingOccurrence] = None,
    ) -> MeetingView:
        """
        Build the canonical `MeetingView` for `record`.

        `occurrence`, when given, contributes its title/description overrides.
        """
        legacy = _legacy_fields(record)
        is_legacy = MeetingNormalizer.is_legacy(record)

        identifier = record.uid or ""
        if is_legacy and legacy["identifier"]:
            identifier = legacy["identifier"]

        occurrence_title = occurrence.title if occurrence is not None else None
        occurrence_description = occurrence.description if occurrence is not None else None

        title = occurrence_title or record.title or legacy["title"]
        description = occurrence_description or record.description or legacy["description"]

        ai_flag = record.zoom_config.ai_companion_enabled if record.zoom_config else None
        if ai_flag is None:
            ai_flag = legacy["has_ai_companion"]

        early_join = record.early_join_time_minutes
        if not early_join:
            early_join = DEFAULT_EARLY_JOIN_MINUTES

        return MeetingView(
            identifier=identifier,
            title=title,
            description=description,
            start_time=record.start_time,
            timezone=record.timezone or "",
            duration_minutes=record.duration or 0,
            early_join_minutes=early_join,
            recurrence=RecurrenceRule.from_provider(record.recurrence),
            is_recurring=bool(record.recurrence),
            has_ai_companion=bool(ai_flag),
            is_legacy=is_legacy,
            password=record.password or None,
            provider_join_url=record.join_url or None,
        )

    @staticmethod
    def detail_link(record: MeetingRecord, home_url: str) -> str:
        """
        Shareable link to the meeting's page in the portal.

        Rules
        -----
        - Path is `{home_url}/meetings/{identifier}`.
        - `password` is appended when the meeting has one.
        - `v1=true` is appended for legacy meetings so the page queries the
          legacy backend.
        """
        view = MeetingNormalizer.normalize(record)
        link = f"{str(home_url).rstrip('/')}/meetings/{view.identifier}"

        params: dict[str, str] = {}
        if view.password:
            params["password"] = view.password
        if view.is_legacy:
            params["v1"] = "true"

        if params:
            return f"{link}?{urlencode(params)}"
        return link
