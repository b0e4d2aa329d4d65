"""
Mobile Tickets API - Main Application
=====================================

Backend for the mobile ticketing app: users file support tickets,
technicians resolve them, and a completion model suggests each ticket's
priority.

Modules:
- Accounts: login and credential updates
- Tickets: creation with AI priority, listings, status changes
- Evaluations: ratings for closed tickets

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities and business rules
- Infrastructure: Database, LLM client
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

# Configuration and Core
from src.config import settings
from src.core import ApplicationException

# Infrastructure
from src.infrastructure.database import (
    init_database, close_database, create_tables, get_session, fetch_server_time
)
from src.infrastructure.llm import create_llm_client

# Services created once per process
from src.tickets.application import PriorityClassificationService

# Module Routers
from src.accounts.interfaces import accounts_router
from src.tickets.interfaces import tickets_router
from src.evaluations.interfaces import evaluations_router

# Shared API plumbing
from src.shared.api.middleware import (
    CORS_HEADERS,
    CORS_METHODS,
    CorrelationIDMiddleware,
    LoggingMiddleware,
    OriginGateMiddleware,
    application_exception_handler,
    global_exception_handler,
    origin_regex_for_suffix,
    validation_exception_handler,
)

# Logging
from src.shared.infrastructure.logging import setup_logging, get_logger
from src.shared.infrastructure.grafana import init_grafana_exporter

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Initialize the database engine (pooled, lazy connect)
    3. Initialize Grafana exporter when configured
    4. Build the priority classifier

    SHUTDOWN:
    1. Close the classifier's HTTP client
    2. Dispose of database connections
    """
    setup_logging(level=settings.log_level, environment=settings.environment)
    logger.info("Starting Mobile Tickets API", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    init_database()
    if settings.db_create_tables:
        logger.info("Creating database tables")
        await create_tables()

    if settings.grafana_host and settings.grafana_api_key and settings.grafana_instance_id:
        init_grafana_exporter(
            host=settings.grafana_host,
            api_key=settings.grafana_api_key,
            instance_id=settings.grafana_instance_id
        )

    llm_client = create_llm_client()
    if llm_client is None:
        logger.warning("Classifier API key not configured - every ticket gets the default priority")
    app.state.priority_classifier = PriorityClassificationService(llm_client)

    logger.info("Mobile Tickets API started")

    yield

    logger.info("Shutting down Mobile Tickets API")
    await app.state.priority_classifier.close()
    await close_database()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Mobile Tickets API",
    description="""
    ## Support tickets for the mobile app

    - `POST /movil/login` - Log in (returns profile, no token)
    - `GET /movil/tickets/usuario/{id}` - Tickets filed by a user
    - `GET /movil/tickets/tecnico/{id}` - Tickets assigned to a technician
    - `POST /movil/tickets` - Create a ticket (priority suggested by AI)
    - `PUT /movil/tickets/{id}/estado` - Change status
    - `PUT /movil/usuario/{id}` - Change username / password
    - `POST /movil/evaluaciones` - Rate a closed ticket
    - `GET /movil/evaluaciones/verificar/{ticket}/{user}` - Already rated?
    - `GET /movil/test-db` - Database connectivity probe

    Errors are returned as `{"error": "<message>"}`.
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === Middleware (last added runs first) ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=origin_regex_for_suffix(settings.cors_trusted_suffix),
    allow_credentials=True,
    allow_methods=CORS_METHODS,
    allow_headers=CORS_HEADERS,
)
app.add_middleware(
    OriginGateMiddleware,
    allowed_origins=settings.cors_origins,
    trusted_suffix=settings.cors_trusted_suffix,
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIDMiddleware)

# === Exception handlers ===
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(accounts_router)
app.include_router(tickets_router)
app.include_router(evaluations_router)


@app.get("/", tags=["Root"], response_class=PlainTextResponse)
async def root():
    """Plain-text liveness message."""
    return "API móvil de Tickets corriendo correctamente"


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """
    Health check for load balancers.

    Does not touch the database; use /movil/test-db for that.
    """
    classifier = getattr(request.app.state, "priority_classifier", None)
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": {
            "priority_classifier": "available" if classifier and classifier.is_configured else "default_only"
        }
    }


@app.get("/movil/test-db", tags=["Health"])
async def test_database(session: AsyncSession = Depends(get_session)):
    """
    Database connectivity probe.

    Unlike every other endpoint, the failure body echoes the driver error.
    """
    try:
        server_time = await fetch_server_time(session)
    except Exception as e:
        logger.error("Database connectivity probe failed", extra={"error": str(e)})
        return JSONResponse(
            status_code=500,
            content={
                "error": "No se pudo conectar a la base de datos",
                "detalle": str(e)
            }
        )

    return {"conexion": "exitosa", "fecha_servidor": server_time}


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
