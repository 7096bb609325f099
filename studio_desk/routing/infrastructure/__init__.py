"""
Routing Infrastructure Layer
============================

Infrastructure implementations for the routing module.

Contains:
- External: YAML-backed rule book loading (RuleBookManager)
"""

from studio_desk.routing.infrastructure.external import RuleBookManager

__all__ = ["RuleBookManager"]
