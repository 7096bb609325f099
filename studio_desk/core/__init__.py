"""
Core Module
============

Shared core utilities and abstractions used across the application.

This module contains framework-agnostic code that defines the fundamental
building blocks of the system.
"""

from studio_desk.core.exceptions import (
    ApplicationException,
    ValidationException,
    ResourceNotFoundException,
    ConfigurationException,
    UnknownPriorityException,
    ClassDetailsRequiredException,
)

__all__ = [
    "ApplicationException",
    "ValidationException",
    "ResourceNotFoundException",
    "ConfigurationException",
    "UnknownPriorityException",
    "ClassDetailsRequiredException",
]
