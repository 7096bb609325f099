"""
Classification & Routing Engine
===============================

Pure functions over a ``RuleBook``: keyword-based priority and category
detection, escalation and department lookups, and SLA deadline math.

Nothing here reads the clock. Callers pass ``now`` explicitly.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from studio_desk.config import VALID_PRIORITIES, Priority, SLAState
from studio_desk.routing.domain.rules import DEFAULT_RULEBOOK
from studio_desk.routing.domain.value_objects import (
    DepartmentRouting,
    EscalationRule,
    RuleBook,
)


def _as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC; aware ones are converted to it."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ClassificationEngine:
    """
    Keyword classifier and routing lookups bound to one rule book.

    All methods are total: unknown text falls back to the defaults and unknown
    lookup keys resolve to ``None`` (escalation) or the fallback routing.
    """

    def __init__(self, rulebook: RuleBook = DEFAULT_RULEBOOK):
        self._rulebook = rulebook

    @property
    def rulebook(self) -> RuleBook:
        return self._rulebook

    def detect_priority(self, text: str) -> Priority:
        """
        First tier (critical, high, medium, low) with a keyword hit wins.

        Precedence decides, not the number of hits. Defaults to medium.
        """
        lower_text = text.lower()

        for priority in VALID_PRIORITIES:
            for keyword in self._rulebook.priority_keywords.get(priority, ()):
                if keyword in lower_text:
                    return priority
        return Priority.MEDIUM

    def detect_category(self, text: str) -> str:
        """
        Category with the most keyword hits.

        Ties go to the category declared first. Defaults to the rule book's
        default category when nothing matches.
        """
        lower_text = text.lower()
        best_match = self._rulebook.default_category
        max_matches = 0

        for category, keywords in self._rulebook.category_keywords.items():
            matches = sum(1 for keyword in keywords if keyword in lower_text)
            if matches > max_matches:
                max_matches = matches
                best_match = category

        return best_match

    def requires_class_details(
        self,
        text: str,
        priority: Union[Priority, str],
        category: str
    ) -> bool:
        """Whether a class name must be captured before the ticket is created."""
        if priority == Priority.CRITICAL:
            return True

        if category in self._rulebook.class_detail_categories:
            lower_text = text.lower()
            return any(
                keyword in lower_text
                for keyword in self._rulebook.member_experience_keywords
            )

        return False

    def get_escalation_rule(self, subcategory: str) -> Optional[EscalationRule]:
        """Exact, case-sensitive lookup. None when no rule exists."""
        return self._rulebook.escalation_rule_for(subcategory)

    def get_department_routing(self, category: str) -> DepartmentRouting:
        """Exact lookup, falling back to the rule book's fallback category."""
        return self._rulebook.routing_for(category)


class SLACalculator:
    """
    Pure functions for SLA calculations.

    Deadlines use fixed-duration arithmetic (one hour is always 3600
    seconds), so they are unaffected by daylight-saving transitions.
    """

    @staticmethod
    def calculate_deadline(
        rulebook: RuleBook,
        priority: Union[Priority, str],
        created_at: datetime
    ) -> datetime:
        """
        Resolution deadline for a ticket created at ``created_at``.

        Raises:
            UnknownPriorityException: If priority is not a known tier
        """
        rule = rulebook.sla_rule_for(priority)
        return _as_utc(created_at) + rule.resolution_window

    @staticmethod
    def remaining(due_at: datetime, now: datetime) -> timedelta:
        """Time left until the deadline (negative once it has passed)."""
        return _as_utc(due_at) - _as_utc(now)

    @staticmethod
    def remaining_seconds(due_at: datetime, now: datetime) -> float:
        return max(0.0, SLACalculator.remaining(due_at, now).total_seconds())

    @staticmethod
    def is_breached(due_at: datetime, now: datetime) -> bool:
        return _as_utc(now) > _as_utc(due_at)

    @staticmethod
    def is_nearing(
        rulebook: RuleBook,
        due_at: datetime,
        priority: Union[Priority, str],
        now: datetime
    ) -> bool:
        """
        True while the deadline is still ahead but inside the priority's
        escalation-warning window. A passed deadline is never "nearing".
        """
        window = rulebook.sla_rule_for(priority).escalation_window
        remaining = SLACalculator.remaining(due_at, now)
        return timedelta(0) < remaining <= window

    @staticmethod
    def calculate_state(
        rulebook: RuleBook,
        due_at: datetime,
        priority: Union[Priority, str],
        now: datetime,
        resolved_at: Optional[datetime] = None
    ) -> SLAState:
        """
        Calculate current SLA state.

        Resolution at or before the deadline is MET. A deadline reached but not
        yet passed counts as AT_RISK.
        """
        window = rulebook.sla_rule_for(priority).escalation_window

        if resolved_at is not None and _as_utc(resolved_at) <= _as_utc(due_at):
            return SLAState.MET

        if SLACalculator.is_breached(due_at, now):
            return SLAState.BREACHED

        if SLACalculator.remaining(due_at, now) <= window:
            return SLAState.AT_RISK

        return SLAState.ON_TRACK


# ========== Default-rule-book shortcuts ==========

_default_engine = ClassificationEngine()


def detect_priority(text: str) -> Priority:
    return _default_engine.detect_priority(text)


def detect_category(text: str) -> str:
    return _default_engine.detect_category(text)


def requires_class_details(text: str, priority: Union[Priority, str], category: str) -> bool:
    return _default_engine.requires_class_details(text, priority, category)


def get_escalation_rule(subcategory: str) -> Optional[EscalationRule]:
    return _default_engine.get_escalation_rule(subcategory)


def get_department_routing(category: str) -> DepartmentRouting:
    return _default_engine.get_department_routing(category)


def calculate_sla_deadline(priority: Union[Priority, str], created_at: datetime) -> datetime:
    return SLACalculator.calculate_deadline(DEFAULT_RULEBOOK, priority, created_at)


def is_nearing_sla(due_at: datetime, priority: Union[Priority, str], now: datetime) -> bool:
    return SLACalculator.is_nearing(DEFAULT_RULEBOOK, due_at, priority, now)


def is_sla_breached(due_at: datetime, now: datetime) -> bool:
    return SLACalculator.is_breached(due_at, now)
