"""
Default Routing Rules
=====================

Built-in SLA, escalation, department routing and keyword tables for the
studio support desk. A YAML file can replace any of these tables at startup
(see ``RuleBookManager``).
"""

from studio_desk.config import Category, Department, NotifyLevel, Priority
from studio_desk.routing.domain.value_objects import RuleBook


SLA_RULES = {
    Priority.CRITICAL: {
        "label": "Critical",
        "response_minutes": 15,
        "resolution_hours": 2,
        "escalation_hours": 1,
        "description": "Immediate response required for safety/security issues",
    },
    Priority.HIGH: {
        "label": "High",
        "response_minutes": 60,
        "resolution_hours": 8,
        "escalation_hours": 4,
        "description": "Urgent issues affecting customer experience",
    },
    Priority.MEDIUM: {
        "label": "Medium",
        "response_minutes": 240,
        "resolution_hours": 24,
        "escalation_hours": 12,
        "description": "Standard priority for general issues",
    },
    Priority.LOW: {
        "label": "Low",
        "response_minutes": 480,
        "resolution_hours": 72,
        "escalation_hours": 48,
        "description": "Non-urgent requests and feedback",
    },
}


def _rule(escalate_to: str, priority: Priority, immediate: bool, notify_level: NotifyLevel) -> dict:
    return {
        "escalate_to": escalate_to,
        "priority": priority,
        "immediate": immediate,
        "notify_level": notify_level,
    }


ESCALATION_RULES = {
    # Critical (immediate)
    "Injury During Class": _rule(Department.MANAGEMENT, Priority.CRITICAL, True, NotifyLevel.ALL),
    "Medical Emergency": _rule(Department.MANAGEMENT, Priority.CRITICAL, True, NotifyLevel.ALL),
    "Theft": _rule(Department.SECURITY, Priority.CRITICAL, True, NotifyLevel.MANAGEMENT),
    "Safety Hazard": _rule(Department.FACILITIES, Priority.CRITICAL, True, NotifyLevel.MANAGEMENT),
    "Fire/Emergency": _rule(Department.MANAGEMENT, Priority.CRITICAL, True, NotifyLevel.ALL),

    # High
    "Medical Disclosure": _rule(Department.HR, Priority.HIGH, True, NotifyLevel.DEPARTMENT),
    "Discrimination": _rule(Department.HR, Priority.HIGH, False, NotifyLevel.MANAGEMENT),
    "Staff Misconduct": _rule(Department.HR, Priority.HIGH, False, NotifyLevel.MANAGEMENT),
    "Payment Processing": _rule(Department.FINANCE, Priority.HIGH, False, NotifyLevel.DEPARTMENT),
    "Harassment": _rule(Department.HR, Priority.HIGH, True, NotifyLevel.MANAGEMENT),
    "Data Breach": _rule(Department.IT_TECH_SUPPORT, Priority.CRITICAL, True, NotifyLevel.ALL),

    # Medium
    "Refund Request": _rule(Department.FINANCE, Priority.MEDIUM, False, NotifyLevel.DEPARTMENT),
    "Equipment Damage": _rule(Department.FACILITIES, Priority.MEDIUM, False, NotifyLevel.DEPARTMENT),
    "App Outage": _rule(Department.IT_TECH_SUPPORT, Priority.HIGH, True, NotifyLevel.DEPARTMENT),
}


def _routing(*path: str) -> dict:
    return {"primary": path[0], "secondary": path[1], "escalation_path": path}


DEPARTMENT_ROUTING = {
    Category.BOOKING_TECHNOLOGY: _routing(
        Department.IT_TECH_SUPPORT, Department.OPERATIONS, Department.MANAGEMENT
    ),
    Category.CUSTOMER_SERVICE: _routing(
        Department.CLIENT_SUCCESS, Department.OPERATIONS, Department.MANAGEMENT
    ),
    Category.HEALTH_SAFETY: _routing(
        Department.OPERATIONS, Department.FACILITIES, Department.MANAGEMENT
    ),
    Category.RETAIL_MANAGEMENT: _routing(
        Department.SALES, Department.OPERATIONS, Department.FINANCE
    ),
    Category.COMMUNITY_CULTURE: _routing(
        Department.HR, Department.OPERATIONS, Department.MANAGEMENT
    ),
    Category.SALES_MARKETING: _routing(
        Department.SALES, Department.MARKETING, Department.MANAGEMENT
    ),
    Category.SPECIAL_PROGRAMS: _routing(
        Department.OPERATIONS, Department.TRAINING, Department.MANAGEMENT
    ),
    Category.MISCELLANEOUS: _routing(
        Department.OPERATIONS, Department.CLIENT_SUCCESS, Department.MANAGEMENT
    ),
    Category.GLOBAL: _routing(Department.MANAGEMENT, Department.OPERATIONS),
}


PRIORITY_KEYWORDS = {
    Priority.CRITICAL: (
        "emergency", "injury", "hurt", "bleeding", "unconscious", "theft", "stolen",
        "fire", "safety hazard", "medical emergency", "cardiac", "ambulance", "police",
        "violence", "assault", "weapon", "threat",
    ),
    Priority.HIGH: (
        "angry", "furious", "upset", "complaint", "refund", "payment failed", "overcharged",
        "rude staff", "misconduct", "discrimination", "harassment", "unacceptable",
        "demand", "legal", "lawyer", "manager", "escalate", "immediate", "urgent",
    ),
    Priority.MEDIUM: (
        "issue", "problem", "not working", "broken", "feedback", "concern", "question",
        "help", "confused", "disappointed", "trouble", "incorrect",
    ),
    Priority.LOW: (
        "suggestion", "feature request", "minor", "when possible", "no rush",
        "idea", "consider", "future", "nice to have", "optional",
    ),
}


CATEGORY_KEYWORDS = {
    Category.BOOKING_TECHNOLOGY: (
        "app", "website", "login", "password", "booking", "reservation", "payment",
        "credit card", "crashed", "error", "bug", "notification", "link", "download",
        "mobile", "browser", "account", "email verification", "sync", "loading",
    ),
    Category.CUSTOMER_SERVICE: (
        "staff", "front desk", "service", "attitude", "rude", "unhelpful", "wait time",
        "response", "communication", "receptionist", "greeting", "check-in", "professional",
    ),
    Category.HEALTH_SAFETY: (
        "injury", "hurt", "accident", "medical", "unsafe", "equipment broken", "cleaning",
        "hygiene", "covid", "sanitize", "ventilation", "temperature", "slippery", "hazard",
    ),
    Category.RETAIL_MANAGEMENT: (
        "product", "merchandise", "purchase", "price", "return", "exchange", "size",
        "stock", "sold out", "defective", "quality", "water bottle", "towel", "mat",
    ),
    Category.COMMUNITY_CULTURE: (
        "member", "clique", "exclusion", "discrimination", "inclusive", "culture",
        "behavior", "community", "atmosphere", "welcoming", "friendly",
    ),
    Category.SALES_MARKETING: (
        "promotion", "discount", "membership", "trial", "referral", "advertisement",
        "misleading", "social media", "package", "pricing", "contract", "cancellation",
    ),
    Category.SPECIAL_PROGRAMS: (
        "workshop", "event", "private session", "corporate", "challenge", "competition",
        "special class", "masterclass", "retreat", "popup",
    ),
}


# Presence of any of these in a Customer Service / Health & Safety ticket
# means the ticket is about a specific class.
MEMBER_EXPERIENCE_KEYWORDS = (
    "class", "trainer", "instructor", "teacher", "session", "workout", "exercise",
    "form", "technique", "music", "volume", "pace", "level", "difficulty",
    "crowded", "space", "equipment", "mat", "props", "late", "early",
    "substitution", "sub", "replacement", "quality", "experience", "vibe",
)


DEFAULT_RULEBOOK = RuleBook(
    sla_rules=SLA_RULES,
    escalation_rules=ESCALATION_RULES,
    department_routing=DEPARTMENT_ROUTING,
    priority_keywords=PRIORITY_KEYWORDS,
    category_keywords=CATEGORY_KEYWORDS,
    member_experience_keywords=MEMBER_EXPERIENCE_KEYWORDS,
)
