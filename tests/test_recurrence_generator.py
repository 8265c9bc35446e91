# tests/test_recurrence_generator.py
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from meeting_join.schemas.recurrence import (
    MONTHLY_WEEK_LAST,
    RecurrenceKind,
    RecurrenceRule,
    RecurrenceSelection,
)
from meeting_join.services.recurrence import RecurrenceGenerator
from meeting_join.services.weekday_math import FRIDAY, MONDAY, TUESDAY, WEDNESDAY, WORKWEEK_DAYS

SECOND_TUESDAY = date(2026, 1, 13)
FOURTH_AND_LAST_TUESDAY = date(2026, 1, 27)
FIFTH_FRIDAY = date(2026, 1, 30)


def _selections(options):
    return [option.value for option in options]


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


def test_none_selection_produces_no_rule():
    assert RecurrenceGenerator.generate(RecurrenceSelection.NONE, SECOND_TUESDAY) is None


def test_unknown_selection_is_treated_as_none():
    assert RecurrenceGenerator.generate("fortnightly", SECOND_TUESDAY) is None


def test_weekly_uses_anchor_weekday():
    rule = RecurrenceGenerator.generate("weekly", SECOND_TUESDAY)

    assert rule.kind == RecurrenceKind.WEEKLY
    assert rule.interval == 1
    assert rule.weekly_days == frozenset({TUESDAY})


def test_weekdays_is_monday_to_friday():
    rule = RecurrenceGenerator.generate(RecurrenceSelection.WEEKDAYS, SECOND_TUESDAY)

    assert rule.weekly_days == WORKWEEK_DAYS
    assert rule.to_provider()["weekly_days"] == "2,3,4,5,6"


def test_monthly_nth_uses_anchor_position():
    rule = RecurrenceGenerator.generate(RecurrenceSelection.MONTHLY_NTH, SECOND_TUESDAY)

    assert rule.kind == RecurrenceKind.MONTHLY
    assert rule.monthly_week == 2
    assert rule.monthly_weekday == TUESDAY


def test_monthly_nth_on_fifth_occurrence_becomes_last():
    rule = RecurrenceGenerator.generate(RecurrenceSelection.MONTHLY_NTH, FIFTH_FRIDAY)

    assert rule.monthly_week == MONTHLY_WEEK_LAST
    assert rule.monthly_weekday == FRIDAY


def test_monthly_last():
    rule = RecurrenceGenerator.generate(RecurrenceSelection.MONTHLY_LAST, FOURTH_AND_LAST_TUESDAY)

    assert rule.monthly_week == MONTHLY_WEEK_LAST
    assert rule.monthly_weekday == TUESDAY


# ---------------------------------------------------------------------------
# describe
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "selection, anchor",
    [
        (RecurrenceSelection.DAILY, SECOND_TUESDAY),
        (RecurrenceSelection.WEEKLY, SECOND_TUESDAY),
        (RecurrenceSelection.WEEKDAYS, SECOND_TUESDAY),
        (RecurrenceSelection.MONTHLY_NTH, SECOND_TUESDAY),
        (RecurrenceSelection.MONTHLY_NTH, FOURTH_AND_LAST_TUESDAY),
        (RecurrenceSelection.MONTHLY_LAST, FOURTH_AND_LAST_TUESDAY),
    ],
)
def test_describe_inverts_generate_for_offered_choices(selection, anchor):
    assert selection in _selections(RecurrenceGenerator.options(anchor))

    rule = RecurrenceGenerator.generate(selection, anchor)

    assert RecurrenceGenerator.describe(rule, anchor).selection == selection


def test_monthly_nth_on_fifth_occurrence_describes_as_last():
    rule = RecurrenceGenerator.generate(RecurrenceSelection.MONTHLY_NTH, FIFTH_FRIDAY)

    description = RecurrenceGenerator.describe(rule, FIFTH_FRIDAY)

    assert description.selection == RecurrenceSelection.MONTHLY_LAST
    assert description.label == "Monthly on the last Friday"


def test_describe_none():
    description = RecurrenceGenerator.describe(None, SECOND_TUESDAY)

    assert description.selection == RecurrenceSelection.NONE
    assert description.label == "Does not repeat"


def test_five_day_weekly_set_always_describes_as_weekdays():
    rule = RecurrenceRule(
        kind=RecurrenceKind.WEEKLY,
        weekly_days=frozenset({MONDAY, TUESDAY, WEDNESDAY, 5, FRIDAY}),
    )

    description = RecurrenceGenerator.describe(rule, SECOND_TUESDAY)

    assert description.selection == RecurrenceSelection.WEEKDAYS
    assert description.label == "Every weekday (Monday to Friday)"


def test_describe_labels():
    weekly = RecurrenceGenerator.generate("weekly", SECOND_TUESDAY)
    nth = RecurrenceGenerator.generate("monthly_nth", SECOND_TUESDAY)
    last = RecurrenceGenerator.generate("monthly_last", FOURTH_AND_LAST_TUESDAY)

    assert RecurrenceGenerator.describe(weekly, SECOND_TUESDAY).label == "Weekly on Tuesday"
    assert RecurrenceGenerator.describe(nth, SECOND_TUESDAY).label == "Monthly on the 2nd Tuesday"
    assert (
        RecurrenceGenerator.describe(last, FOURTH_AND_LAST_TUESDAY).label
        == "Monthly on the last Tuesday"
    )


# ---------------------------------------------------------------------------
# options
# ---------------------------------------------------------------------------


def test_options_for_plain_date_omit_monthly_last():
    assert _selections(RecurrenceGenerator.options(SECOND_TUESDAY)) == [
        RecurrenceSelection.NONE,
        RecurrenceSelection.DAILY,
        RecurrenceSelection.WEEKLY,
        RecurrenceSelection.WEEKDAYS,
        RecurrenceSelection.MONTHLY_NTH,
    ]


def test_options_offer_both_monthly_choices_on_fourth_and_last():
    selections = _selections(RecurrenceGenerator.options(FOURTH_AND_LAST_TUESDAY))

    assert RecurrenceSelection.MONTHLY_NTH in selections
    assert RecurrenceSelection.MONTHLY_LAST in selections


def test_options_hide_monthly_nth_on_fifth_occurrence():
    selections = _selections(RecurrenceGenerator.options(FIFTH_FRIDAY))

    assert RecurrenceSelection.MONTHLY_NTH not in selections
    assert RecurrenceSelection.MONTHLY_LAST in selections


# ---------------------------------------------------------------------------
# summarize
# ---------------------------------------------------------------------------


def test_summarize_none_rule():
    assert RecurrenceGenerator.summarize(None).full_summary == "Does not repeat"


def test_summarize_custom_interval_with_count():
    rule = RecurrenceRule(
        kind=RecurrenceKind.WEEKLY,
        interval=2,
        weekly_days=frozenset({WEDNESDAY, MONDAY}),
        end_times=5,
    )

    summary = RecurrenceGenerator.summarize(rule)

    assert summary.description == "Every 2 weeks on Monday, Wednesday"
    assert summary.end_description == "for 5 occurrences"
    assert summary.full_summary == "Every 2 weeks on Monday, Wednesday, for 5 occurrences"


def test_summarize_single_occurrence_is_singular():
    rule = RecurrenceRule(kind=RecurrenceKind.DAILY, interval=3, end_times=1)

    assert RecurrenceGenerator.summarize(rule).full_summary == "Every 3 days, for 1 occurrence"


def test_summarize_end_date_wins_over_count():
    rule = RecurrenceRule(
        kind=RecurrenceKind.MONTHLY,
        monthly_week=MONTHLY_WEEK_LAST,
        monthly_weekday=FRIDAY,
        end_times=3,
        end_date_time=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )

    assert (
        RecurrenceGenerator.summarize(rule).full_summary
        == "Monthly on the last Friday, until 3/1/2026"
    )


# ---------------------------------------------------------------------------
# rule model
# ---------------------------------------------------------------------------


def test_from_provider_parses_weekly_days_string():
    rule = RecurrenceRule.from_provider({"type": 2, "repeat_interval": 1, "weekly_days": "2,3,4,5,6"})

    assert rule.weekly_days == WORKWEEK_DAYS


def test_from_provider_parses_monthly_payload():
    rule = RecurrenceRule.from_provider(
        {"type": 3, "repeat_interval": 1, "monthly_week": -1, "monthly_week_day": 6}
    )

    assert rule.kind == RecurrenceKind.MONTHLY
    assert rule.monthly_week == MONTHLY_WEEK_LAST
    assert rule.monthly_weekday == FRIDAY


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"type": "bogus"},
        {"type": 9},
        {"type": 2},
        {"type": 3, "monthly_week": 7, "monthly_week_day": 3},
    ],
)
def test_from_provider_returns_none_for_unusable_payloads(payload):
    assert RecurrenceRule.from_provider(payload) is None


def test_to_provider_matches_provider_shape():
    rule = RecurrenceGenerator.generate("monthly_nth", SECOND_TUESDAY)

    assert rule.to_provider() == {
        "type": 3,
        "repeat_interval": 1,
        "monthly_week": 2,
        "monthly_week_day": TUESDAY,
    }


def test_rule_rejects_fields_of_other_kinds():
    with pytest.raises(ValidationError):
        RecurrenceRule(kind=RecurrenceKind.DAILY, weekly_days=frozenset({TUESDAY}))

    with pytest.raises(ValidationError):
        RecurrenceRule(
            kind=RecurrenceKind.WEEKLY,
            weekly_days=frozenset({TUESDAY}),
            monthly_week=1,
        )

    with pytest.raises(ValidationError):
        RecurrenceRule(kind=RecurrenceKind.WEEKLY, weekly_days=frozenset({8}))


def test_rule_rejects_zero_interval():
    with pytest.raises(ValidationError):
        RecurrenceRule(kind=RecurrenceKind.DAILY, interval=0)
