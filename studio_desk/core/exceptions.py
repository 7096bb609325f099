"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Any, Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationException(ApplicationException):
    """Exception for validation errors."""


class ResourceNotFoundException(ApplicationException):
    """Exception when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type}"
        if resource_id:
            message += f" with id '{resource_id}'"
        message += " not found"
        super().__init__(message, details)


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class UnknownPriorityException(ValidationException):
    """Raised when a priority value has no SLA rule."""

    def __init__(self, priority: Any, details: Optional[dict] = None):
        self.priority = priority
        super().__init__(
            f"Unknown priority '{priority}'",
            details or {"priority": str(priority)}
        )


class ClassDetailsRequiredException(ValidationException):
    """Raised when a ticket draft needs a class name before it can be created."""

    def __init__(self, details: Optional[dict] = None):
        super().__init__(
            "Class details required: fill in the class name for this type of issue",
            details
        )
