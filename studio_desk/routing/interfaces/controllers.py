"""
Routing Controllers (API Routes)
================================

FastAPI routes for classification, analysis, routing lookups and SLA math.

Controllers are thin - they delegate to the engine and application services.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request

from studio_desk.config import VALID_PRIORITIES
from studio_desk.core import ResourceNotFoundException
from studio_desk.routing.application import (
    AnalysisResponse,
    AnalyzeRequest,
    ClassificationResponse,
    ClassifyRequest,
    DepartmentRoutingInfo,
    EscalationRuleInfo,
    SLADeadlineRequest,
    SLADeadlineResponse,
    SLARuleInfo,
    SLARulesResponse,
    SLAService,
    SLAStatusRequest,
    SLAStatusResponse,
    TicketAnalysisService,
    TicketDraftDTO,
)
from studio_desk.routing.domain import ClassificationEngine
from studio_desk.routing.infrastructure import RuleBookManager
from studio_desk.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)
router = APIRouter(prefix="/routing", tags=["Classification & Routing"])


# ========== Example payloads for Swagger ==========

CLASSIFY_RESPONSE_EXAMPLE = {
    "priority": "critical",
    "category": "Health & Safety",
    "requires_class_details": True,
    "routing": {
        "primary": "Operations",
        "secondary": "Facilities",
        "escalation_path": ["Operations", "Facilities", "Management"]
    }
}

ESCALATION_RULE_EXAMPLE = {
    "subcategory": "Theft",
    "escalate_to": "Security",
    "priority": "critical",
    "immediate": True,
    "notify_level": "management"
}


# ========== Dependencies ==========

def get_rulebook_manager(request: Request) -> RuleBookManager:
    """Get the rule book manager loaded at startup."""
    manager = getattr(request.app.state, "rulebook_manager", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Routing rules not loaded")
    return manager


def get_engine(
    manager: RuleBookManager = Depends(get_rulebook_manager)
) -> ClassificationEngine:
    return ClassificationEngine(manager.get_rulebook())


def get_analysis_service(
    manager: RuleBookManager = Depends(get_rulebook_manager)
) -> TicketAnalysisService:
    return TicketAnalysisService(manager)


def get_sla_service(
    manager: RuleBookManager = Depends(get_rulebook_manager)
) -> SLAService:
    return SLAService(manager)


# ========== Route Handlers ==========

@router.post(
    "/classify",
    response_model=ClassificationResponse,
    summary="Classify free text by priority and category",
    responses={200: {"content": {"application/json": {"example": CLASSIFY_RESPONSE_EXAMPLE}}}}
)
async def classify_text(
    payload: ClassifyRequest,
    engine: ClassificationEngine = Depends(get_engine)
):
    """
    Keyword-based classification.

    - **priority**: first tier (critical > high > medium > low) with a keyword hit, else `medium`
    - **category**: category with the most keyword hits, else `Customer Service`
    """
    priority = engine.detect_priority(payload.text)
    category = engine.detect_category(payload.text)

    return ClassificationResponse(
        priority=priority.value,
        category=category,
        requires_class_details=engine.requires_class_details(payload.text, priority, category),
        routing=DepartmentRoutingInfo.from_domain(engine.get_department_routing(category))
    )


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    summary="Analyze a ticket description for the preview"
)
async def analyze_ticket(
    request: Request,
    payload: AnalyzeRequest,
    service: TicketAnalysisService = Depends(get_analysis_service)
):
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    with log_latency(logger, "ticket_analysis", correlation_id=correlation_id):
        analysis = service.analyze(
            payload.description,
            subcategory=payload.subcategory,
            created_at=payload.created_at
        )

    return AnalysisResponse.from_domain(analysis)


@router.post(
    "/drafts/validate",
    response_model=TicketDraftDTO,
    summary="Check a reviewed draft is ready to become a ticket",
    responses={422: {"description": "Class details are required but missing"}}
)
async def validate_draft(
    payload: TicketDraftDTO,
    service: TicketAnalysisService = Depends(get_analysis_service)
):
    draft = service.validate_draft(payload.to_domain())
    return TicketDraftDTO.from_domain(draft)


@router.get(
    "/escalation-rules/{subcategory:path}",
    response_model=EscalationRuleInfo,
    summary="Get the escalation rule for an issue subtype",
    responses={
        200: {"content": {"application/json": {"example": ESCALATION_RULE_EXAMPLE}}},
        404: {"description": "No rule for this subtype"}
    }
)
async def get_escalation_rule(
    subcategory: str,
    engine: ClassificationEngine = Depends(get_engine)
):
    """Exact, case-sensitive lookup."""
    rule = engine.get_escalation_rule(subcategory)
    if rule is None:
        raise ResourceNotFoundException("Escalation rule", subcategory)
    return EscalationRuleInfo.from_domain(subcategory, rule)


@router.get(
    "/departments/{category:path}",
    response_model=DepartmentRoutingInfo,
    summary="Get department routing for a category"
)
async def get_department_routing(
    category: str,
    engine: ClassificationEngine = Depends(get_engine)
):
    """Unknown categories get the fallback (Miscellaneous) routing."""
    return DepartmentRoutingInfo.from_domain(engine.get_department_routing(category))


@router.get(
    "/sla-rules",
    response_model=SLARulesResponse,
    summary="List SLA budgets per priority"
)
async def list_sla_rules(
    manager: RuleBookManager = Depends(get_rulebook_manager)
):
    rulebook = manager.get_rulebook()
    return SLARulesResponse(rules={
        priority.value: SLARuleInfo.from_domain(rulebook.sla_rules[priority])
        for priority in VALID_PRIORITIES
    })


@router.post(
    "/sla/deadline",
    response_model=SLADeadlineResponse,
    summary="Calculate the resolution deadline for a priority",
    responses={422: {"description": "Unknown priority"}}
)
async def calculate_deadline(
    payload: SLADeadlineRequest,
    service: SLAService = Depends(get_sla_service)
):
    created_at = payload.created_at or datetime.now(timezone.utc)
    due_at = service.calculate_deadline(payload.priority, created_at)
    return SLADeadlineResponse(
        priority=payload.priority,
        created_at=created_at,
        due_at=due_at
    )


@router.post(
    "/sla/status",
    response_model=SLAStatusResponse,
    summary="Evaluate an SLA deadline",
    responses={422: {"description": "Unknown priority"}}
)
async def evaluate_sla(
    payload: SLAStatusRequest,
    service: SLAService = Depends(get_sla_service)
):
    status = service.evaluate(
        payload.priority,
        payload.due_at,
        resolved_at=payload.resolved_at
    )
    return SLAStatusResponse.from_domain(status)
