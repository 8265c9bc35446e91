# meeting_join/services/recurrence.py
from __future__ import annotations

import logging
from datetime import date as date_type

from meeting_join.schemas.recurrence import (
    MONTHLY_WEEK_LAST,
    RecurrenceDescription,
    RecurrenceKind,
    RecurrenceOption,
    RecurrenceRule,
    RecurrenceSelection,
    RecurrenceSummary,
)
from meeting_join.services.weekday_math import (
    WORKWEEK_DAYS,
    nth_weekday_position,
    week_of_month,
    weekday_name,
    weekday_of,
)

logger = logging.getLogger(__name__)

DEFAULT_REPEAT_INTERVAL = 1

ORDINALS = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th", MONTHLY_WEEK_LAST: "last"}

LABEL_NONE = "Does not repeat"
LABEL_DAILY = "Daily"
LABEL_WEEKDAYS = "Every weekday (Monday to Friday)"


def _weekly_label(days: frozenset[int]) -> str:
    names = ", ".join(weekday_name(code) for code in sorted(days))
    return f"Weekly on {names}"


def _monthly_label(monthly_week: int, weekday: int) -> str:
    return f"Monthly on the {ORDINALS.get(monthly_week, '')} {weekday_name(weekday)}"


class RecurrenceGenerator:
    """
    Converts between the recurrence choices shown to a user and the
    canonical `RecurrenceRule`.

    Every method is a pure function of its arguments. A rule produced by
    `generate(selection, anchor)` is only meaningful together with that
    same anchor date: moving the anchor invalidates the selection and the
    caller is expected to reset it.

    Note
    ----
    `generate` and `describe` are not a bijection. A weekly rule whose
    days are exactly Monday-Friday always describes as WEEKDAYS, even if
    it was entered as an arbitrary five-day weekly set.
    MONTHLY_NTH on the 5th occurrence of a weekday is stored as
    `monthly_week=-1` and describes as MONTHLY_LAST. `options` never
    offers MONTHLY_NTH on such a date.
    """

    @staticmethod
    def generate(
        selection: RecurrenceSelection | str,
        anchor: date_type,
    ) -> RecurrenceRule | None:
        """
        Build the rule for `selection`, anchored on the meeting's start date.

        Rules
        -----
        - NONE         -> None
        - DAILY        -> daily
        - WEEKLY       -> weekly on the anchor's weekday
        - WEEKDAYS     -> weekly on Monday-Friday
        - MONTHLY_NTH  -> monthly on the anchor's nth weekday
        - MONTHLY_LAST -> monthly on the last occurrence of the anchor's weekday

        A 5th occurrence of a weekday is always the last one in its month,
        so MONTHLY_NTH on such a date is encoded as `monthly_week=-1`.
        """
        try:
            selection = RecurrenceSelection(selection)
        except ValueError:
            logger.debug("Unknown recurrence selection %r, treating as none", selection)
            return None

        if selection == RecurrenceSelection.NONE:
            return None

        weekday = weekday_of(anchor)

        if selection == RecurrenceSelection.DAILY:
            return RecurrenceRule(kind=RecurrenceKind.DAILY, interval=DEFAULT_REPEAT_INTERVAL)

        if selection == RecurrenceSelection.WEEKLY:
            return RecurrenceRule(
                kind=RecurrenceKind.WEEKLY,
                interval=DEFAULT_REPEAT_INTERVAL,
                weekly_days=frozenset({weekday}),
            )

        if selection == RecurrenceSelection.WEEKDAYS:
            return RecurrenceRule(
                kind=RecurrenceKind.WEEKLY,
                interval=DEFAULT_REPEAT_INTERVAL,
                weekly_days=WORKWEEK_DAYS,
            )

        if selection == RecurrenceSelection.MONTHLY_NTH:
            position = nth_weekday_position(anchor)
            return RecurrenceRule(
                kind=RecurrenceKind.MONTHLY,
                interval=DEFAULT_REPEAT_INTERVAL,
                monthly_week=position if position <= 4 else MONTHLY_WEEK_LAST,
                monthly_weekday=weekday,
            )

        return RecurrenceRule(
            kind=RecurrenceKind.MONTHLY,
            interval=DEFAULT_REPEAT_INTERVAL,
            monthly_week=MONTHLY_WEEK_LAST,
            monthly_weekday=weekday,
        )

    @staticmethod
    def describe(rule: RecurrenceRule | None, anchor: date_type) -> RecurrenceDescription:
        """
        Map a rule back to the selection that produced it, plus its label.

        Used to pre-populate an edit form. Only valid for the
        `(rule, anchor)` pair that `generate` was called with.
        """
        if rule is None or rule.kind == RecurrenceKind.NONE:
            return RecurrenceDescription(selection=RecurrenceSelection.NONE, label=LABEL_NONE)

        if rule.kind == RecurrenceKind.DAILY:
            return RecurrenceDescription(selection=RecurrenceSelection.DAILY, label=LABEL_DAILY)

        if rule.kind == RecurrenceKind.WEEKLY:
            if rule.weekly_days == WORKWEEK_DAYS:
                return RecurrenceDescription(
                    selection=RecurrenceSelection.WEEKDAYS,
                    label=LABEL_WEEKDAYS,
                )
            if rule.weekly_days != frozenset({weekday_of(anchor)}):
                logger.debug(
                    "Weekly rule %s does not match anchor %s", sorted(rule.weekly_days), anchor
                )
            return RecurrenceDescription(
                selection=RecurrenceSelection.WEEKLY,
                label=_weekly_label(rule.weekly_days),
            )

        if rule.monthly_weekday != weekday_of(anchor):
            logger.debug("Monthly rule weekday %s does not match anchor %s", rule.monthly_weekday, anchor)

        selection = (
            RecurrenceSelection.MONTHLY_LAST
            if rule.monthly_week == MONTHLY_WEEK_LAST
            else RecurrenceSelection.MONTHLY_NTH
        )
        return RecurrenceDescription(
            selection=selection,
            label=_monthly_label(rule.monthly_week, rule.monthly_weekday),
        )

    @staticmethod
    def options(anchor: date_type) -> list[RecurrenceOption]:
        """
        Recurrence choices available for a meeting starting on `anchor`.

        MONTHLY_NTH is offered only for the 1st-4th occurrence of a weekday,
        MONTHLY_LAST only when `anchor` is the last occurrence. Both can be
        offered at once (e.g. a 4th Friday that is also the last Friday).
        """
        weekday = weekday_of(anchor)
        position, is_last = week_of_month(anchor)

        options = [
            RecurrenceOption(value=RecurrenceSelection.NONE, label=LABEL_NONE),
            RecurrenceOption(value=RecurrenceSelection.DAILY, label=LABEL_DAILY),
            RecurrenceOption(
                value=RecurrenceSelection.WEEKLY,
                label=_weekly_label(frozenset({weekday})),
            ),
            RecurrenceOption(value=RecurrenceSelection.WEEKDAYS, label=LABEL_WEEKDAYS),
        ]

        if position <= 4:
            options.append(
                RecurrenceOption(
                    value=RecurrenceSelection.MONTHLY_NTH,
                    label=_monthly_label(position, weekday),
                )
            )
        if is_last:
            options.append(
                RecurrenceOption(
                    value=RecurrenceSelection.MONTHLY_LAST,
                    label=_monthly_label(MONTHLY_WEEK_LAST, weekday),
                )
            )

        return options

    @staticmethod
    def summarize(rule: RecurrenceRule | None) -> RecurrenceSummary:
        """
        Free-form summary for any rule, including ones the generator never
        emits (custom intervals, arbitrary weekday sets, end conditions).

        Examples
        --------
        - "Daily"
        - "Every 2 weeks on Monday, Wednesday, for 5 occurrences"
        - "Monthly on the last Friday, until 3/1/2026"
        """
        if rule is None or rule.kind == RecurrenceKind.NONE:
            return RecurrenceSummary(description=LABEL_NONE, end_description="", full_summary=LABEL_NONE)

        interval = rule.interval

        if rule.kind == RecurrenceKind.DAILY:
            description = "Daily" if interval == 1 else f"Every {interval} days"
        elif rule.kind == RecurrenceKind.WEEKLY:
            week_text = "Weekly" if interval == 1 else f"Every {interval} weeks"
            names = ", ".join(weekday_name(code) for code in sorted(rule.weekly_days))
            description = f"{week_text} on {names}"
        else:
            month_text = "Monthly" if interval == 1 else f"Every {interval} months"
            ordinal = ORDINALS.get(rule.monthly_week, "")
            description = f"{month_text} on the {ordinal} {weekday_name(rule.monthly_weekday)}"

        end_description = ""
        if rule.end_date_time is not None:
            end = rule.end_date_time
            end_description = f"until {end.month}/{end.day}/{end.year}"
        elif rule.end_times is not None:
            count = rule.end_times
            end_description = f"for {count} occurrence{'' if count == 1 else 's'}"

        full_summary = f"{description}, {end_description}" if end_description else description

        return RecurrenceSummary(
            description=description,
            end_description=end_description,
            full_summary=full_summary,
        )
