"""
Routing Application DTOs
========================

Data Transfer Objects for the routing API layer.

Pydantic models for request/response validation.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from studio_desk.config import Priority
from studio_desk.routing.domain import (
    DepartmentRouting,
    EscalationRule,
    SLARule,
    SLAStatus,
    TicketAnalysis,
    TicketDraft,
)


# ========== Type Aliases for Literals ==========
PriorityStr = Literal["critical", "high", "medium", "low"]
NotifyLevelStr = Literal["all", "management", "department"]
SLAStateStr = Literal["on_track", "at_risk", "breached", "met"]

MAX_DESCRIPTION_LENGTH = 10000


# ========== Shared Info Models ==========

class SLARuleInfo(BaseModel):
    """SLA budgets for one priority tier."""
    label: str
    response_minutes: int
    resolution_hours: float
    escalation_hours: float
    description: str

    @classmethod
    def from_domain(cls, rule: SLARule) -> "SLARuleInfo":
        return cls(**rule.model_dump())


class EscalationRuleInfo(BaseModel):
    """Escalation rule for an issue subtype."""
    subcategory: str
    escalate_to: str
    priority: PriorityStr
    immediate: bool
    notify_level: NotifyLevelStr

    @classmethod
    def from_domain(cls, subcategory: str, rule: EscalationRule) -> "EscalationRuleInfo":
        return cls(
            subcategory=subcategory,
            escalate_to=rule.escalate_to,
            priority=rule.priority.value,
            immediate=rule.immediate,
            notify_level=rule.notify_level.value
        )


class DepartmentRoutingInfo(BaseModel):
    """Department routing for a category."""
    primary: str
    secondary: str
    escalation_path: List[str]

    @classmethod
    def from_domain(cls, routing: DepartmentRouting) -> "DepartmentRoutingInfo":
        return cls(
            primary=routing.primary,
            secondary=routing.secondary,
            escalation_path=list(routing.escalation_path)
        )


# ========== Request DTOs ==========

class ClassifyRequest(BaseModel):
    """Request model for keyword classification. Empty text is allowed."""
    text: str = Field(..., description="Free-text issue description")

    @field_validator("text")
    @classmethod
    def validate_text_length(cls, v: str) -> str:
        if len(v) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"Text too long (max {MAX_DESCRIPTION_LENGTH} characters)")
        return v


class AnalyzeRequest(BaseModel):
    """Request model for full ticket analysis."""
    description: str = Field(..., min_length=1, description="Free-text issue description")
    subcategory: Optional[str] = Field(None, description="Issue subtype, if the reporter picked one")
    created_at: Optional[datetime] = Field(None, description="Creation time (defaults to now)")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Description must not be blank")
        if len(v) > MAX_DESCRIPTION_LENGTH:
            raise ValueError(f"Description too long (max {MAX_DESCRIPTION_LENGTH} characters)")
        return v


class TicketDraftDTO(BaseModel):
    """Ticket draft as edited in the preview before creation."""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str
    subcategory: Optional[str] = None
    priority: PriorityStr
    department: str
    tags: List[str] = Field(default_factory=list)
    requires_class_details: bool = False
    class_name: Optional[str] = None
    class_date_time: Optional[str] = None
    trainer_name: Optional[str] = None
    customer_name: Optional[str] = None
    sla_due_at: Optional[datetime] = None

    def to_domain(self) -> TicketDraft:
        return TicketDraft(**{**self.model_dump(), "priority": Priority(self.priority)})

    @classmethod
    def from_domain(cls, draft: TicketDraft) -> "TicketDraftDTO":
        return cls(
            title=draft.title,
            description=draft.description,
            category=draft.category,
            subcategory=draft.subcategory,
            priority=draft.priority.value,
            department=draft.department,
            tags=list(draft.tags),
            requires_class_details=draft.requires_class_details,
            class_name=draft.class_name,
            class_date_time=draft.class_date_time,
            trainer_name=draft.trainer_name,
            customer_name=draft.customer_name,
            sla_due_at=draft.sla_due_at
        )


class SLADeadlineRequest(BaseModel):
    """Request model for SLA deadline calculation."""
    priority: str = Field(..., description="Priority tier")
    created_at: Optional[datetime] = Field(None, description="Creation time (defaults to now)")


class SLAStatusRequest(BaseModel):
    """Request model for SLA status evaluation."""
    priority: str = Field(..., description="Priority tier")
    due_at: datetime = Field(..., description="SLA deadline")
    resolved_at: Optional[datetime] = Field(None, description="Resolution time, if resolved")


# ========== Response DTOs ==========

class ClassificationResponse(BaseModel):
    """Response model for keyword classification."""
    priority: PriorityStr
    category: str
    requires_class_details: bool
    routing: DepartmentRoutingInfo


class AnalysisResponse(BaseModel):
    """Response model for full ticket analysis."""
    title: str
    description: str
    priority: PriorityStr
    detected_priority: PriorityStr
    category: str
    subcategory: Optional[str]
    department: str
    routing: DepartmentRoutingInfo
    escalation_rule: Optional[EscalationRuleInfo]
    needs_immediate_attention: bool
    notify_level: Optional[NotifyLevelStr]
    requires_class_details: bool
    tags: List[str]
    sla: SLARuleInfo
    sla_due_at: datetime
    reasoning: str
    draft: TicketDraftDTO

    @classmethod
    def from_domain(cls, analysis: TicketAnalysis) -> "AnalysisResponse":
        rule = analysis.escalation_rule
        return cls(
            title=analysis.title,
            description=analysis.description,
            priority=analysis.priority.value,
            detected_priority=analysis.detected_priority.value,
            category=analysis.category,
            subcategory=analysis.subcategory,
            department=analysis.department,
            routing=DepartmentRoutingInfo.from_domain(analysis.routing),
            escalation_rule=(
                EscalationRuleInfo.from_domain(analysis.subcategory, rule) if rule else None
            ),
            needs_immediate_attention=analysis.needs_immediate_attention,
            notify_level=analysis.notify_level.value if analysis.notify_level else None,
            requires_class_details=analysis.requires_class_details,
            tags=list(analysis.tags),
            sla=SLARuleInfo.from_domain(analysis.sla),
            sla_due_at=analysis.sla_due_at,
            reasoning=analysis.reasoning,
            draft=TicketDraftDTO.from_domain(analysis.to_draft())
        )


class SLARulesResponse(BaseModel):
    """All SLA budgets keyed by priority."""
    rules: Dict[str, SLARuleInfo]


class SLADeadlineResponse(BaseModel):
    """Response model for SLA deadline calculation."""
    priority: PriorityStr
    created_at: datetime
    due_at: datetime


class SLAStatusResponse(BaseModel):
    """Response model for SLA status evaluation."""
    priority: PriorityStr
    due_at: datetime
    evaluated_at: datetime
    state: SLAStateStr
    is_nearing: bool
    is_breached: bool
    remaining_seconds: float

    @classmethod
    def from_domain(cls, status: SLAStatus) -> "SLAStatusResponse":
        return cls(
            priority=status.priority.value,
            due_at=status.due_at,
            evaluated_at=status.evaluated_at,
            state=status.state.value,
            is_nearing=status.is_nearing,
            is_breached=status.is_breached,
            remaining_seconds=status.remaining_seconds
        )
