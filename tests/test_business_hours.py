"""Tests for the BusinessHoursGate."""

from datetime import datetime, timezone

import pytest

from frontdesk_agent.services.business_hours import BusinessHoursGate, GateDecision

# 2026-10-19 is a Monday, 2026-10-24 a Saturday
MONDAY_NOON = datetime(2026, 10, 19, 12, 0)
MONDAY_NIGHT = datetime(2026, 10, 19, 20, 0)
TUESDAY_MORNING = datetime(2026, 10, 20, 10, 0)
SATURDAY_NOON = datetime(2026, 10, 24, 12, 0)


@pytest.fixture
def gate() -> BusinessHoursGate:
    return BusinessHoursGate(start_hour=9, end_hour=18, timezone="America/Sao_Paulo")


def test_open_on_weekday_within_hours(gate):
    assert gate.is_open(MONDAY_NOON)


def test_start_inclusive_end_exclusive(gate):
    assert gate.is_open(datetime(2026, 10, 19, 9, 0))
    assert not gate.is_open(datetime(2026, 10, 19, 8, 59))
    assert gate.is_open(datetime(2026, 10, 19, 17, 59))
    assert not gate.is_open(datetime(2026, 10, 19, 18, 0))


def test_closed_on_weekend(gate):
    assert not gate.is_open(SATURDAY_NOON)


def test_aware_timestamps_are_converted(gate):
    # São Paulo is UTC-3
    assert gate.is_open(datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc))
    assert not gate.is_open(datetime(2026, 10, 19, 11, 0, tzinfo=timezone.utc))


def test_notifies_once_per_closed_period(gate):
    assert gate.check("a", MONDAY_NIGHT) is GateDecision.NOTIFY
    assert gate.check("a", MONDAY_NIGHT) is GateDecision.SUPPRESS
    # Other chats are tracked independently
    assert gate.check("b", MONDAY_NIGHT) is GateDecision.NOTIFY


def test_reopening_clears_the_notice(gate):
    gate.check("a", MONDAY_NIGHT)
    assert gate.check("a", TUESDAY_MORNING) is GateDecision.OPEN
    assert not gate.was_notified("a")
    assert gate.check("a", SATURDAY_NOON) is GateDecision.NOTIFY


def test_forget_allows_a_new_notice(gate):
    gate.check("a", MONDAY_NIGHT)
    gate.forget("a")
    assert gate.check("a", MONDAY_NIGHT) is GateDecision.NOTIFY


def test_invalid_hours_rejected():
    with pytest.raises(ValueError):
        BusinessHoursGate(start_hour=18, end_hour=9)


def test_describe(gate):
    assert gate.describe() == "segunda a sexta, das 09h às 18h"
    assert (
        BusinessHoursGate(weekdays=[0, 2]).describe()
        == "segunda, quarta, das 09h às 18h"
    )
