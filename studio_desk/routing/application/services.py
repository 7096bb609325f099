"""
Routing Application Services
============================

Application services for ticket analysis and SLA evaluation.

Services own the clock: they fill in "now" when the caller does not supply a
timestamp and pass it explicitly into the pure domain engine.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional, Union

from studio_desk.config import Priority
from studio_desk.core import ClassDetailsRequiredException
from studio_desk.routing.domain import (
    ClassificationEngine,
    RuleBook,
    SLACalculator,
    SLAStatus,
    TicketAnalysis,
    TicketDraft,
    TicketTitleBuilder,
)
from studio_desk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Provider Interfaces ==========

class IRuleBookProvider(ABC):
    """Interface for routing rule access."""

    @abstractmethod
    def get_rulebook(self) -> RuleBook:
        """Get the active rule book."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ========== Application Services ==========

class TicketAnalysisService:
    """
    Rule-based analysis of free-text issue descriptions.

    Produces everything the ticket preview needs: title, priority, category,
    department, tags, class-detail requirement and SLA deadline.
    """

    BASE_TAGS = ("support",)
    ESCALATED_TAG = "escalated"

    def __init__(self, rule_provider: IRuleBookProvider):
        self._rule_provider = rule_provider

    def _engine(self) -> ClassificationEngine:
        return ClassificationEngine(self._rule_provider.get_rulebook())

    def analyze(
        self,
        description: str,
        subcategory: Optional[str] = None,
        created_at: Optional[datetime] = None
    ) -> TicketAnalysis:
        """
        Analyze a ticket description.

        When ``subcategory`` has an escalation rule, the rule's department and
        priority replace the detected ones.

        Args:
            description: Free-text issue description
            subcategory: Optional issue subtype chosen by the reporter
            created_at: Ticket creation time (defaults to now)

        Returns:
            TicketAnalysis
        """
        engine = self._engine()
        rulebook = engine.rulebook
        created_at = created_at or _utcnow()

        detected_priority = engine.detect_priority(description)
        category = engine.detect_category(description)
        routing = engine.get_department_routing(category)

        priority = detected_priority
        department = routing.primary
        needs_immediate_attention = priority == Priority.CRITICAL
        notify_level = None

        rule = engine.get_escalation_rule(subcategory) if subcategory else None
        if rule is not None:
            priority = rule.priority
            department = rule.escalate_to
            needs_immediate_attention = rule.immediate
            notify_level = rule.notify_level

        needs_class_details = engine.requires_class_details(description, priority, category)
        sla = rulebook.sla_rule_for(priority)
        sla_due_at = SLACalculator.calculate_deadline(rulebook, priority, created_at)

        tags = [*self.BASE_TAGS, priority.value]
        if rule is not None:
            tags.append(self.ESCALATED_TAG)

        analysis = TicketAnalysis(
            title=TicketTitleBuilder.build(description, category),
            description=description,
            detected_priority=detected_priority,
            priority=priority,
            category=category,
            subcategory=subcategory,
            department=department,
            routing=routing,
            escalation_rule=rule,
            notify_level=notify_level,
            needs_immediate_attention=needs_immediate_attention,
            requires_class_details=needs_class_details,
            tags=tags,
            sla=sla,
            sla_due_at=sla_due_at,
            created_at=created_at,
            reasoning=self._build_reasoning(
                priority, sla.description, department, subcategory if rule else None,
                needs_class_details
            ),
        )

        logger.info(
            "Ticket analyzed",
            extra={
                "priority": priority.value,
                "detected_priority": detected_priority.value,
                "category": category,
                "department": department,
                "escalated": rule is not None,
                "requires_class_details": needs_class_details,
            }
        )
        return analysis

    @staticmethod
    def _build_reasoning(
        priority: Priority,
        sla_description: str,
        department: str,
        escalated_subcategory: Optional[str],
        needs_class_details: bool
    ) -> str:
        parts = [f"Detected priority: {priority.value.upper()} ({sla_description})."]
        if escalated_subcategory:
            parts.append(
                f"Escalated to {department} by the '{escalated_subcategory}' rule."
            )
        else:
            parts.append(f"Routed to {department} based on category analysis.")
        if needs_class_details:
            parts.append("Class details are required for this issue type.")
        return " ".join(parts)

    def validate_draft(self, draft: TicketDraft) -> TicketDraft:
        """
        Confirm a reviewed draft can be created.

        Raises:
            ClassDetailsRequiredException: If class details are missing
        """
        try:
            draft.ensure_ready()
        except ClassDetailsRequiredException:
            logger.warning(
                "Ticket draft rejected",
                extra={"title": draft.title, "priority": draft.priority.value}
            )
            raise
        return draft


class SLAService:
    """Deadline and status calculations against the active rule book."""

    def __init__(self, rule_provider: IRuleBookProvider):
        self._rule_provider = rule_provider

    @property
    def rulebook(self) -> RuleBook:
        return self._rule_provider.get_rulebook()

    def calculate_deadline(
        self,
        priority: Union[Priority, str],
        created_at: Optional[datetime] = None
    ) -> datetime:
        return SLACalculator.calculate_deadline(
            self.rulebook, priority, created_at or _utcnow()
        )

    def evaluate(
        self,
        priority: Union[Priority, str],
        due_at: datetime,
        now: Optional[datetime] = None,
        resolved_at: Optional[datetime] = None
    ) -> SLAStatus:
        """
        Evaluate one SLA deadline.

        A resolved ticket is never reported as nearing its deadline.

        Raises:
            UnknownPriorityException: If priority is not a known tier
        """
        rulebook = self.rulebook
        now = now or _utcnow()
        # Validates the priority before any calculation
        rulebook.sla_rule_for(priority)
        priority = Priority(priority)

        return SLAStatus(
            priority=priority,
            due_at=due_at,
            evaluated_at=now,
            state=SLACalculator.calculate_state(rulebook, due_at, priority, now, resolved_at),
            is_nearing=(
                resolved_at is None
                and SLACalculator.is_nearing(rulebook, due_at, priority, now)
            ),
            is_breached=SLACalculator.is_breached(due_at, now),
            remaining_seconds=SLACalculator.remaining_seconds(due_at, now),
        )
