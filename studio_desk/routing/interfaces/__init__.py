"""
Routing Interfaces Layer
========================

Interface adapters (controllers) for the routing module.

Contains:
- Controllers: FastAPI route handlers
"""

from studio_desk.routing.interfaces.controllers import router as routing_router

__all__ = ["routing_router"]
