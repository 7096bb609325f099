"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="studio-desk", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root logging level")

    # ========== Server ==========
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port", ge=1, le=65535)

    # ========== Routing Rules ==========
    rules_config_path: Optional[Path] = Field(
        default=None,
        description="Optional YAML file overriding the built-in routing tables"
    )

    # ========== CORS ==========
    cors_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


# ========== Constants ==========

class Priority(str, Enum):
    """Ticket priority levels, declared from most to least severe."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def severity(self) -> int:
        """Higher is more severe (critical=4 ... low=1)."""
        return len(VALID_PRIORITIES) - VALID_PRIORITIES.index(self)


class NotifyLevel(str, Enum):
    """Who gets notified when an escalation rule fires."""
    ALL = "all"
    MANAGEMENT = "management"
    DEPARTMENT = "department"


class SLAState(str, Enum):
    """SLA status states."""
    ON_TRACK = "on_track"
    AT_RISK = "at_risk"
    BREACHED = "breached"
    MET = "met"


class Category:
    """Issue categories known to the routing tables."""
    BOOKING_TECHNOLOGY = "Booking & Technology"
    CUSTOMER_SERVICE = "Customer Service"
    HEALTH_SAFETY = "Health & Safety"
    RETAIL_MANAGEMENT = "Retail Management"
    COMMUNITY_CULTURE = "Community & Culture"
    SALES_MARKETING = "Sales & Marketing"
    SPECIAL_PROGRAMS = "Special Programs"
    MISCELLANEOUS = "Miscellaneous"
    GLOBAL = "Global"


class Department:
    """Teams tickets can be routed to."""
    IT_TECH_SUPPORT = "IT/Tech Support"
    OPERATIONS = "Operations"
    MANAGEMENT = "Management"
    CLIENT_SUCCESS = "Client Success"
    FACILITIES = "Facilities"
    SALES = "Sales"
    FINANCE = "Finance"
    HR = "HR"
    MARKETING = "Marketing"
    TRAINING = "Training"
    SECURITY = "Security"


# ========== Lists for validation ==========

VALID_PRIORITIES = [
    Priority.CRITICAL, Priority.HIGH,
    Priority.MEDIUM, Priority.LOW
]

DEFAULT_CATEGORY = Category.CUSTOMER_SERVICE
FALLBACK_CATEGORY = Category.MISCELLANEOUS
