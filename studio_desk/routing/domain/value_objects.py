"""
Routing Value Objects
=====================

Immutable value objects for the classification and routing domain.

Every table the engine reads lives on a ``RuleBook``. A rule book is
validated once when it is built and never mutated afterwards, so it can be
shared freely between requests and threads.
"""

from datetime import timedelta
from types import MappingProxyType
from typing import Dict, FrozenSet, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from studio_desk.config import (
    DEFAULT_CATEGORY,
    FALLBACK_CATEGORY,
    VALID_PRIORITIES,
    Category,
    NotifyLevel,
    Priority,
)
from studio_desk.core import UnknownPriorityException


class SLARule(BaseModel):
    """Response/resolution/escalation budgets attached to one priority tier."""

    model_config = ConfigDict(frozen=True)

    label: str
    response_minutes: int = Field(gt=0)
    resolution_hours: float = Field(gt=0)
    escalation_hours: float = Field(gt=0)
    description: str = ""

    @property
    def resolution_window(self) -> timedelta:
        return timedelta(hours=self.resolution_hours)

    @property
    def escalation_window(self) -> timedelta:
        return timedelta(hours=self.escalation_hours)


class EscalationRule(BaseModel):
    """Overrides applied when a ticket's subcategory names a known issue type."""

    model_config = ConfigDict(frozen=True)

    escalate_to: str
    priority: Priority
    immediate: bool = False
    notify_level: NotifyLevel = NotifyLevel.DEPARTMENT


class DepartmentRouting(BaseModel):
    """Primary/secondary team for a category plus its escalation chain."""

    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str
    escalation_path: Tuple[str, ...]

    @model_validator(mode="after")
    def validate_escalation_path(self) -> "DepartmentRouting":
        if not self.escalation_path or self.escalation_path[0] != self.primary:
            raise ValueError(
                f"escalation_path must start with the primary department '{self.primary}'"
            )
        return self


def _normalize_keywords(keywords) -> Tuple[str, ...]:
    return tuple(k.strip().lower() for k in keywords if k and k.strip())


class RuleBook(BaseModel):
    """
    The complete set of classification and routing tables.

    Keyword tables keep their declared order: category ties are broken by
    declaration order, and keyword scanning within a tier follows it too.
    Mapping tables are exposed read-only.
    """

    model_config = ConfigDict(frozen=True)

    sla_rules: Dict[Priority, SLARule]
    escalation_rules: Dict[str, EscalationRule] = Field(default_factory=dict, validate_default=True)
    department_routing: Dict[str, DepartmentRouting]
    priority_keywords: Dict[Priority, Tuple[str, ...]] = Field(default_factory=dict, validate_default=True)
    category_keywords: Dict[str, Tuple[str, ...]] = Field(default_factory=dict, validate_default=True)
    member_experience_keywords: Tuple[str, ...] = ()
    class_detail_categories: FrozenSet[str] = frozenset(
        {Category.CUSTOMER_SERVICE, Category.HEALTH_SAFETY}
    )
    default_category: str = DEFAULT_CATEGORY
    fallback_category: str = FALLBACK_CATEGORY

    @field_validator("priority_keywords", "category_keywords")
    @classmethod
    def lowercase_keyword_tables(cls, v: dict) -> MappingProxyType:
        return MappingProxyType(
            {key: _normalize_keywords(words) for key, words in v.items()}
        )

    @field_validator("sla_rules", "escalation_rules", "department_routing")
    @classmethod
    def freeze_tables(cls, v: dict) -> MappingProxyType:
        return MappingProxyType(v)

    @field_validator("member_experience_keywords")
    @classmethod
    def lowercase_member_keywords(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        return _normalize_keywords(v)

    @model_validator(mode="after")
    def validate_tables(self) -> "RuleBook":
        missing = [p.value for p in VALID_PRIORITIES if p not in self.sla_rules]
        if missing:
            raise ValueError(f"sla_rules missing priorities: {missing}")
        if self.fallback_category not in self.department_routing:
            raise ValueError(
                f"department_routing must define the fallback category '{self.fallback_category}'"
            )
        return self

    def sla_rule_for(self, priority: Union[Priority, str]) -> SLARule:
        """
        Get the SLA rule for a priority.

        Raises:
            UnknownPriorityException: If the value is not a priority tier
        """
        try:
            return self.sla_rules[Priority(priority)]
        except ValueError:
            raise UnknownPriorityException(priority) from None

    def escalation_rule_for(self, subcategory: str) -> Optional[EscalationRule]:
        return self.escalation_rules.get(subcategory)

    def routing_for(self, category: str) -> DepartmentRouting:
        return self.department_routing.get(
            category,
            self.department_routing[self.fallback_category]
        )

    def with_overrides(self, overrides: dict) -> "RuleBook":
        """Build a new rule book where each table named in overrides is replaced."""
        data = {}
        for name in RuleBook.model_fields:
            value = getattr(self, name)
            data[name] = dict(value) if isinstance(value, MappingProxyType) else value
        data.update(overrides)
        return RuleBook.model_validate(data)
