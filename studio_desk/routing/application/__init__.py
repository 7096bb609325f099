"""
Routing Application Layer
=========================

Application layer for the classification and routing module.

Contains:
- Services: Ticket analysis and SLA evaluation
- DTOs: Data transfer objects for API serialization

This layer depends on the domain layer and the rule provider interface,
but not on concrete infrastructure implementations.
"""

from studio_desk.routing.application.dto import (
    ClassifyRequest,
    AnalyzeRequest,
    TicketDraftDTO,
    SLADeadlineRequest,
    SLAStatusRequest,
    ClassificationResponse,
    AnalysisResponse,
    SLARuleInfo,
    SLARulesResponse,
    SLADeadlineResponse,
    SLAStatusResponse,
    EscalationRuleInfo,
    DepartmentRoutingInfo,
)
from studio_desk.routing.application.services import (
    IRuleBookProvider,
    TicketAnalysisService,
    SLAService,
)

__all__ = [
    # DTOs
    "ClassifyRequest",
    "AnalyzeRequest",
    "TicketDraftDTO",
    "SLADeadlineRequest",
    "SLAStatusRequest",
    "ClassificationResponse",
    "AnalysisResponse",
    "SLARuleInfo",
    "SLARulesResponse",
    "SLADeadlineResponse",
    "SLAStatusResponse",
    "EscalationRuleInfo",
    "DepartmentRoutingInfo",
    # Services
    "IRuleBookProvider",
    "TicketAnalysisService",
    "SLAService",
]
