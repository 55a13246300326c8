"""
Unit tests for habit recurrence parsing.
"""

import logging
from datetime import date, timedelta

import pytest

from weekplan.models.enums import RecurrenceKind
from weekplan.services.recurrence import occurs_on, parse_recurrence, warn_unsupported

MONDAY = date(2026, 10, 19)


@pytest.mark.parametrize("rule", ["", None, "FREQ=DAILY", "RRULE:FREQ=DAILY", "freq=daily;interval=1"])
def test_daily_rules(rule):
    assert parse_recurrence(rule).kind == RecurrenceKind.DAILY


def test_weekly_byday():
    recurrence = parse_recurrence("FREQ=WEEKLY;BYDAY=MO,WE,FR")
    assert recurrence.kind == RecurrenceKind.WEEKLY_BY_DAY
    assert recurrence.weekdays == frozenset({0, 2, 4})


@pytest.mark.parametrize(
    "rule",
    [
        "FREQ=WEEKLY;INTERVAL=2;BYDAY=MO",
        "FREQ=DAILY;COUNT=5",
        "FREQ=MONTHLY;BYMONTHDAY=1",
        "FREQ=WEEKLY",
        "FREQ=WEEKLY;BYDAY=XX",
        "nonsense",
    ],
)
def test_unsupported_rules(rule):
    assert parse_recurrence(rule).kind == RecurrenceKind.UNSUPPORTED


def test_occurs_on_weekly():
    recurrence = parse_recurrence("FREQ=WEEKLY;BYDAY=TU,TH")
    days = [MONDAY + timedelta(days=offset) for offset in range(7)]
    assert [occurs_on(recurrence, day) for day in days] == [
        False, True, False, True, False, False, False,
    ]


def test_unsupported_policy():
    recurrence = parse_recurrence("FREQ=MONTHLY")
    assert occurs_on(recurrence, MONDAY, "daily") is True
    assert occurs_on(recurrence, MONDAY, "skip") is False


def test_warn_unsupported_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="weekplan.services.recurrence"):
        warn_unsupported("Gym", parse_recurrence("FREQ=YEARLY"), "daily")
        warn_unsupported("Walk", parse_recurrence("FREQ=DAILY"), "daily")

    messages = [record.getMessage() for record in caplog.records]
    assert len(messages) == 1
    assert "Gym" in messages[0]
