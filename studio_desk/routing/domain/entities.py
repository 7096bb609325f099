"""
Routing Domain Entities
=======================

Business objects produced by ticket analysis: the analysis itself, the
editable ticket draft shown for confirmation, and SLA status snapshots.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from studio_desk.config import NotifyLevel, Priority, SLAState
from studio_desk.core import ClassDetailsRequiredException
from studio_desk.routing.domain.value_objects import (
    DepartmentRouting,
    EscalationRule,
    SLARule,
)


class TicketTitleBuilder:
    """
    Builds a short ticket title from a free-text description.

    Patterns are checked in order and the first match wins.
    """

    MAX_PREFIX_WORDS = 8
    ELLIPSIS_AFTER_CHARS = 50

    @classmethod
    def build(cls, description: str, category: str) -> str:
        text = description.lower()

        def has(*words: str) -> bool:
            return any(word in text for word in words)

        if has("complaint"):
            return f"Customer Complaint - {category}"
        if has("trainer") and has("late"):
            return "Trainer Delayed for Scheduled Session"
        if has("equipment") and has("broken", "issue"):
            return "Equipment Issue Reported by Member"
        if has("app") and has("crash", "error"):
            return "App Technical Issue - User Report"
        if has("parking"):
            return "Parking/Access Issue at Studio"
        if has("rude", "unfriendly"):
            return "Staff Conduct Feedback - Member Report"
        if has("refund"):
            return "Refund Request - Member Account"
        if has("injury", "hurt"):
            return "Member Injury Report - Immediate Attention"
        if has("class") and has("cancel"):
            return "Class Cancellation Issue"
        if has("payment", "charge"):
            return "Billing/Payment Concern"
        if has("booking"):
            return "Booking System Issue"

        words = " ".join(description.split(" ")[:cls.MAX_PREFIX_WORDS])
        suffix = "..." if len(description) > cls.ELLIPSIS_AFTER_CHARS else ""
        return f"{category}: {words}{suffix}"


@dataclass
class TicketAnalysis:
    """
    Rule-based analysis of a ticket description.

    ``detected_priority`` is what the keywords said; ``priority`` is the final
    value after any escalation rule was applied.
    """
    title: str
    description: str
    detected_priority: Priority
    priority: Priority
    category: str
    department: str
    routing: DepartmentRouting
    needs_immediate_attention: bool
    requires_class_details: bool
    sla: SLARule
    sla_due_at: datetime
    created_at: datetime
    reasoning: str
    subcategory: Optional[str] = None
    escalation_rule: Optional[EscalationRule] = None
    notify_level: Optional[NotifyLevel] = None
    tags: List[str] = field(default_factory=list)

    @property
    def is_escalated(self) -> bool:
        return self.escalation_rule is not None

    def to_draft(self) -> "TicketDraft":
        """Start an editable draft pre-filled from this analysis."""
        return TicketDraft(
            title=self.title,
            description=self.description,
            category=self.category,
            subcategory=self.subcategory,
            priority=self.priority,
            department=self.department,
            tags=list(self.tags),
            requires_class_details=self.requires_class_details,
            sla_due_at=self.sla_due_at,
        )


@dataclass
class TicketDraft:
    """
    Ticket fields awaiting human confirmation.

    The persistence layer assigns the ticket number and timestamps; this
    object only carries what analysis and the reviewer decided.
    """
    title: str
    description: str
    category: str
    priority: Priority
    department: str
    requires_class_details: bool = False
    subcategory: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    class_name: Optional[str] = None
    class_date_time: Optional[str] = None
    trainer_name: Optional[str] = None
    customer_name: Optional[str] = None
    sla_due_at: Optional[datetime] = None

    @property
    def has_class_details(self) -> bool:
        return bool(self.class_name and self.class_name.strip())

    def ensure_ready(self) -> None:
        """
        Check the draft can be turned into a ticket.

        Raises:
            ClassDetailsRequiredException: If a class name is required but blank
        """
        if self.requires_class_details and not self.has_class_details:
            raise ClassDetailsRequiredException(
                {"title": self.title, "category": self.category, "priority": self.priority.value}
            )


@dataclass(frozen=True)
class SLAStatus:
    """Point-in-time SLA evaluation of one deadline."""
    priority: Priority
    due_at: datetime
    evaluated_at: datetime
    state: SLAState
    is_nearing: bool
    is_breached: bool
    remaining_seconds: float
