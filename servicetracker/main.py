"""
ServiceTracker - Main Application Entry Point
Multi-tenant CRM for service businesses
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine
import structlog

from servicetracker.api import customers, dashboard, services, users
from servicetracker.core.config import Settings, get_settings
from servicetracker.core.database import build_engine, build_session_factory
from servicetracker.core.errors import register_exception_handlers
from servicetracker.core.identity import IdentityVerifier, JWTIdentityVerifier

logger = structlog.get_logger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Configure structured logging"""
    logging.basicConfig(format="%(message)s", level=logging.DEBUG if debug else logging.INFO)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Initializing ServiceTracker backend")
    # Tables are created by Alembic migrations, not auto-generated
    logger.info("Database managed by Alembic migrations")

    yield

    # Shutdown
    logger.info("Shutting down ServiceTracker backend")
    await app.state.engine.dispose()


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[AsyncEngine] = None,
    verifier: Optional[IdentityVerifier] = None,
) -> FastAPI:
    """Build the application with explicitly supplied collaborators"""
    settings = settings or get_settings()
    configure_logging(settings.DEBUG)

    engine = engine or build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    app = FastAPI(
        title="ServiceTracker API",
        description="Multi-tenant CRM for service businesses",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.identity_verifier = verifier or JWTIdentityVerifier.from_settings(settings)

    # Configure middleware stack
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Include routers
    prefix = settings.API_PREFIX
    app.include_router(users.router, prefix=f"{prefix}/user", tags=["user"])
    app.include_router(dashboard.router, prefix=f"{prefix}/dashboard", tags=["dashboard"])
    app.include_router(customers.router, prefix=f"{prefix}/customers", tags=["customers"])
    app.include_router(services.router, prefix=f"{prefix}/services", tags=["services"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "servicetracker-api"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "servicetracker.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().ENVIRONMENT == "development",
        log_level="info",
    )
