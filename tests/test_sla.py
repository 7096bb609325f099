"""Tests for SLA deadline calculation and status checks."""

from datetime import datetime, timedelta, timezone

import pytest

from studio_desk.config import SLAState
from studio_desk.core import UnknownPriorityException, ValidationException
from studio_desk.routing.application import SLAService
from studio_desk.routing.domain import (
    DEFAULT_RULEBOOK,
    SLACalculator,
    calculate_sla_deadline,
    is_nearing_sla,
    is_sla_breached,
)


@pytest.mark.parametrize("priority,hours", [
    ("critical", 2),
    ("high", 8),
    ("medium", 24),
    ("low", 72),
])
def test_deadline_adds_resolution_hours(t0, priority, hours):
    assert calculate_sla_deadline(priority, t0) == t0 + timedelta(hours=hours)


def test_naive_timestamp_is_treated_as_utc():
    deadline = calculate_sla_deadline("low", datetime(2026, 1, 1))

    assert deadline == datetime(2026, 1, 4, tzinfo=timezone.utc)


def test_deadline_is_fixed_duration_in_utc():
    eastern = timezone(timedelta(hours=-5))
    created_at = datetime(2026, 3, 8, 1, 0, tzinfo=eastern)

    deadline = calculate_sla_deadline("critical", created_at)

    assert deadline.tzinfo == timezone.utc
    assert (deadline - created_at).total_seconds() == 2 * 3600


def test_unknown_priority_raises(t0):
    with pytest.raises(UnknownPriorityException) as exc_info:
        calculate_sla_deadline("urgent", t0)

    assert "urgent" in exc_info.value.message
    assert isinstance(exc_info.value, ValidationException)


def test_fresh_ticket_is_not_breached(t0):
    due = calculate_sla_deadline("high", t0)

    assert is_sla_breached(due, t0) is False
    assert is_sla_breached(due, due) is False
    assert is_sla_breached(due, due + timedelta(seconds=1)) is True


# ========== Nearing ==========

def test_nearing_window_boundaries(t0):
    assert is_nearing_sla(t0 + timedelta(hours=4), "high", t0) is True
    assert is_nearing_sla(t0 + timedelta(hours=4, seconds=1), "high", t0) is False


def test_due_now_or_passed_is_not_nearing(t0):
    assert is_nearing_sla(t0, "high", t0) is False
    assert is_nearing_sla(t0 - timedelta(seconds=1), "high", t0) is False


def test_nearing_unknown_priority_raises(t0):
    with pytest.raises(UnknownPriorityException):
        is_nearing_sla(t0, "urgent", t0)


# ========== State ==========

def test_state_met_when_resolved_before_deadline(t0):
    due = t0 + timedelta(hours=2)
    state = SLACalculator.calculate_state(
        DEFAULT_RULEBOOK, due, "critical", t0 + timedelta(hours=5),
        resolved_at=t0 + timedelta(hours=1)
    )

    assert state == SLAState.MET


def test_state_breached_when_resolved_late(t0):
    due = t0 + timedelta(hours=2)
    state = SLACalculator.calculate_state(
        DEFAULT_RULEBOOK, due, "critical", t0 + timedelta(hours=5),
        resolved_at=t0 + timedelta(hours=3)
    )

    assert state == SLAState.BREACHED


def test_state_at_risk_inside_warning_window(t0):
    due = t0 + timedelta(hours=12)

    assert SLACalculator.calculate_state(DEFAULT_RULEBOOK, due, "medium", t0) == SLAState.AT_RISK
    assert SLACalculator.calculate_state(DEFAULT_RULEBOOK, due, "medium", due) == SLAState.AT_RISK


def test_state_on_track_outside_warning_window(t0):
    due = t0 + timedelta(hours=24)

    assert SLACalculator.calculate_state(DEFAULT_RULEBOOK, due, "medium", t0) == SLAState.ON_TRACK


def test_remaining_seconds_is_clamped(t0):
    assert SLACalculator.remaining_seconds(t0 + timedelta(minutes=1), t0) == 60.0
    assert SLACalculator.remaining_seconds(t0 - timedelta(minutes=1), t0) == 0.0


# ========== SLAService ==========

def test_open_ticket_inside_window_is_nearing(manager, t0):
    status = SLAService(manager).evaluate("high", t0 + timedelta(hours=1), now=t0)

    assert status.state == SLAState.AT_RISK
    assert status.is_nearing is True


def test_resolved_ticket_is_met_and_not_nearing(manager, t0):
    status = SLAService(manager).evaluate(
        "high", t0 + timedelta(hours=1), now=t0, resolved_at=t0
    )

    assert status.state == SLAState.MET
    assert status.is_nearing is False
    assert status.is_breached is False
