"""
Studio Desk - Main Application
==============================

Support-ticket classification and routing service for a fitness studio chain.

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Rule tables, classification engine, SLA calculator
- Infrastructure: Rule book loading
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from studio_desk.config import settings
from studio_desk.core import ApplicationException
from studio_desk.routing.infrastructure import RuleBookManager
from studio_desk.routing.interfaces import routing_router
from studio_desk.shared.api import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    application_exception_handler,
    global_exception_handler,
)
from studio_desk.shared.infrastructure.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Load routing rules (built-in tables plus optional YAML overrides)
    """
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting Studio Desk", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    rulebook_manager = RuleBookManager()
    rulebook_manager.load(settings.rules_config_path)

    app.state.settings = settings
    app.state.rulebook_manager = rulebook_manager

    logger.info("Studio Desk started successfully")

    yield

    logger.info("Studio Desk shutdown complete")


app = FastAPI(
    title="Studio Desk API",
    description="""
    ## Support Ticket Classification & Routing

    Turns a staff member's free-text issue description into ticket fields:
    priority, category, department, escalation, class-detail requirement and
    SLA deadline.

    | Priority | Response | Resolution | Warning window |
    |----------|----------|------------|----------------|
    | Critical | 15 min   | 2 h        | 1 h            |
    | High     | 60 min   | 8 h        | 4 h            |
    | Medium   | 240 min  | 24 h       | 12 h           |
    | Low      | 480 min  | 72 h       | 48 h           |
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Last added runs first: the correlation id is set before request logging.
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.include_router(routing_router)


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint for load balancers and orchestrators."""
    manager = getattr(request.app.state, "rulebook_manager", None)
    return {
        "status": "healthy" if manager is not None else "starting",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": {
            "routing_rules": "loaded" if manager is not None else "not_loaded",
            "rules_source": str(manager.path) if manager and manager.path else "built-in",
        }
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Studio Desk",
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
        "modules": {
            "routing": {
                "prefix": "/routing",
                "endpoints": [
                    "POST /routing/classify - Classify free text",
                    "POST /routing/analyze - Analyze a ticket description",
                    "POST /routing/drafts/validate - Validate a ticket draft",
                    "GET /routing/escalation-rules/{subcategory} - Escalation rule lookup",
                    "GET /routing/departments/{category} - Department routing lookup",
                    "GET /routing/sla-rules - SLA budgets",
                    "POST /routing/sla/deadline - Calculate SLA deadline",
                    "POST /routing/sla/status - Evaluate SLA status",
                ]
            }
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "studio_desk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
