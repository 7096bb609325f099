"""Tests for ticket analysis, title building and draft validation."""

from datetime import timedelta

import pytest

from studio_desk.config import Category, NotifyLevel, Priority
from studio_desk.core import ClassDetailsRequiredException, ValidationException
from studio_desk.routing.application import TicketAnalysisService
from studio_desk.routing.domain import TicketDraft, TicketTitleBuilder


@pytest.fixture
def service(manager) -> TicketAnalysisService:
    return TicketAnalysisService(manager)


# ========== Analysis ==========

def test_injury_is_critical_and_routed_to_operations(service, t0):
    analysis = service.analyze(
        "A member slipped and got hurt during the spin class", created_at=t0
    )

    assert analysis.priority == Priority.CRITICAL
    assert analysis.category == Category.HEALTH_SAFETY
    assert analysis.department == "Operations"
    assert analysis.needs_immediate_attention is True
    assert analysis.requires_class_details is True
    assert analysis.title == "Member Injury Report - Immediate Attention"
    assert analysis.tags == ["support", "critical"]
    assert analysis.sla_due_at == t0 + timedelta(hours=2)
    assert analysis.is_escalated is False


def test_escalation_rule_overrides_detected_values(service, t0):
    analysis = service.analyze(
        "Someone took my bag from the locker", subcategory="Theft", created_at=t0
    )

    assert analysis.detected_priority == Priority.MEDIUM
    assert analysis.priority == Priority.CRITICAL
    assert analysis.department == "Security"
    assert analysis.routing.primary == "Client Success"
    assert analysis.notify_level == NotifyLevel.MANAGEMENT
    assert analysis.needs_immediate_attention is True
    assert analysis.requires_class_details is True
    assert analysis.tags == ["support", "critical", "escalated"]
    assert analysis.sla_due_at == t0 + timedelta(hours=2)
    assert "'Theft' rule" in analysis.reasoning


def test_escalation_can_lower_priority(service, t0):
    analysis = service.analyze(
        "I am furious about the refund", subcategory="Refund Request", created_at=t0
    )

    assert analysis.detected_priority == Priority.HIGH
    assert analysis.priority == Priority.MEDIUM
    assert analysis.department == "Finance"
    assert analysis.sla_due_at == t0 + timedelta(hours=24)


def test_unknown_subcategory_is_ignored(service, t0):
    analysis = service.analyze(
        "The booking app keeps crashing", subcategory="Unknown", created_at=t0
    )

    assert analysis.priority == Priority.MEDIUM
    assert analysis.category == Category.BOOKING_TECHNOLOGY
    assert analysis.department == "IT/Tech Support"
    assert analysis.escalation_rule is None
    assert analysis.notify_level is None
    assert analysis.needs_immediate_attention is False
    assert analysis.requires_class_details is False
    assert analysis.title == "App Technical Issue - User Report"
    assert analysis.tags == ["support", "medium"]
    assert "Routed to IT/Tech Support" in analysis.reasoning


def test_member_experience_issue_needs_class_details(service, t0):
    analysis = service.analyze("The instructor played the music way too loud", created_at=t0)

    assert analysis.priority == Priority.MEDIUM
    assert analysis.category == Category.CUSTOMER_SERVICE
    assert analysis.requires_class_details is True
    assert "Class details are required" in analysis.reasoning


# ========== Titles ==========

def test_title_patterns_checked_in_order():
    # "complaint" comes before "refund"
    assert TicketTitleBuilder.build("a complaint about my refund", "Sales & Marketing") == (
        "Customer Complaint - Sales & Marketing"
    )
    assert TicketTitleBuilder.build("the trainer was late again", "Customer Service") == (
        "Trainer Delayed for Scheduled Session"
    )
    assert TicketTitleBuilder.build("Evening class was cancelled", "Customer Service") == (
        "Class Cancellation Issue"
    )


def test_fallback_title_uses_first_words():
    assert TicketTitleBuilder.build("Lights out", "Global") == "Global: Lights out"


def test_fallback_title_keeps_spacing_and_counts_empty_words():
    assert TicketTitleBuilder.build("Lights  out", "Global") == "Global: Lights  out"
    # The empty token between the double space counts toward the eight words.
    assert TicketTitleBuilder.build("a  b c d e f g h i", "Global") == "Global: a  b c d e f g"


def test_fallback_title_truncates_long_descriptions():
    description = "Where can I find the new timetable for next week at the downtown studio"

    assert TicketTitleBuilder.build(description, "Customer Service") == (
        "Customer Service: Where can I find the new timetable for..."
    )


# ========== Drafts ==========

def test_draft_requires_class_name(service, t0):
    draft = service.analyze("The instructor played the music way too loud", created_at=t0).to_draft()

    with pytest.raises(ClassDetailsRequiredException) as exc_info:
        service.validate_draft(draft)

    assert isinstance(exc_info.value, ValidationException)


def test_blank_class_name_is_rejected():
    draft = TicketDraft(
        title="Trainer Delayed for Scheduled Session",
        description="the trainer was late",
        category=Category.CUSTOMER_SERVICE,
        priority=Priority.MEDIUM,
        department="Client Success",
        requires_class_details=True,
        class_name="   ",
    )

    with pytest.raises(ClassDetailsRequiredException):
        draft.ensure_ready()


def test_draft_with_class_name_is_ready(service, t0):
    draft = service.analyze("The instructor played the music way too loud", created_at=t0).to_draft()
    draft.class_name = "Power Yoga 7am"

    assert service.validate_draft(draft) is draft


def test_draft_without_requirement_is_ready(service, t0):
    draft = service.analyze("The booking app keeps crashing", created_at=t0).to_draft()

    assert draft.requires_class_details is False
    assert service.validate_draft(draft) is draft
