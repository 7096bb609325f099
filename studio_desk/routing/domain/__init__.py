"""
Routing Domain Layer
====================

Domain layer for the classification and routing module.

Contains:
- Value Objects: Immutable rule tables (SLARule, EscalationRule, DepartmentRouting, RuleBook)
- Domain Services: Stateless engine (ClassificationEngine, SLACalculator)
- Entities: Analysis results and drafts (TicketAnalysis, TicketDraft, SLAStatus)

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from studio_desk.routing.domain.value_objects import (
    SLARule,
    EscalationRule,
    DepartmentRouting,
    RuleBook,
)
from studio_desk.routing.domain.rules import DEFAULT_RULEBOOK
from studio_desk.routing.domain.engine import (
    ClassificationEngine,
    SLACalculator,
    detect_priority,
    detect_category,
    requires_class_details,
    get_escalation_rule,
    get_department_routing,
    calculate_sla_deadline,
    is_nearing_sla,
    is_sla_breached,
)
from studio_desk.routing.domain.entities import (
    TicketTitleBuilder,
    TicketAnalysis,
    TicketDraft,
    SLAStatus,
)

__all__ = [
    # Value Objects
    "SLARule",
    "EscalationRule",
    "DepartmentRouting",
    "RuleBook",
    "DEFAULT_RULEBOOK",
    # Domain Services
    "ClassificationEngine",
    "SLACalculator",
    "detect_priority",
    "detect_category",
    "requires_class_details",
    "get_escalation_rule",
    "get_department_routing",
    "calculate_sla_deadline",
    "is_nearing_sla",
    "is_sla_breached",
    # Entities
    "TicketTitleBuilder",
    "TicketAnalysis",
    "TicketDraft",
    "SLAStatus",
]
