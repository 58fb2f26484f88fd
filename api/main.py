"""
Main FastAPI application for the lead qualification service.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import qualification, admin
from config.settings import get_settings
from database.session import init_db, close_db, is_initialized, session_scope
from qualification import QualificationConfigManager, QualificationTier

logger = logging.getLogger(__name__)


async def _seed_config(default_tier: str):
    async with session_scope() as session:
        await QualificationConfigManager(session).ensure_config(
            QualificationTier(default_tier)
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Lead qualification service starting up...")

    settings = get_settings()
    if settings.has_database:
        await init_db(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )
        if settings.seed_qualification_config:
            await _seed_config(settings.default_target_tier)
    else:
        logger.warning("DATABASE_URL not set: only stateless scoring endpoints will work")

    logger.info("Lead qualification service ready")
    yield
    logger.info("Lead qualification service shutting down...")

    if settings.has_database:
        await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.api_title,
        description="Lead scoring, hot/warm/cold classification and Q1-Q3 qualification tiers.",
        version=settings.api_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(qualification.router, prefix="/api/v1", tags=["Qualification"])
    app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])

    @app.get("/")
    async def root():
        return {
            "service": "Lead Qualification",
            "version": settings.api_version,
            "status": "operational",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health():
        return {
            "status": "healthy" if is_initialized() else "degraded",
            "database": is_initialized(),
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
