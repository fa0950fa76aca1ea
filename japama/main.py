"""
FastAPI application factory.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from japama import database
from japama.config import settings
from japama.core.exceptions import register_exception_handlers
from japama.core.logging import configure_logging
from japama.core.middleware import setup_middleware
from japama.api.routes import router as api_router
from japama.services.email_service import EmailSender
from japama.services.user_service import seed_admin

import japama.models  # noqa: F401  register every table on Base.metadata

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    # ── Startup ──────────────────────────────────────────
    log.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)
    async with database.async_session() as db:
        await seed_admin(db)
        await db.commit()
    if not app.state.mailer.enabled:
        log.warning("SMTP is not configured; verification emails will only be logged")
    yield
    # ── Shutdown ─────────────────────────────────────────
    log.info("Shutting down…")
    await database.engine.dispose()


def create_app(mailer: EmailSender | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Water-utility administration: staff accounts, service area, inspections and payments",
        lifespan=lifespan,
    )

    # Process-wide collaborators
    app.state.mailer = mailer or EmailSender.from_settings(settings)

    # Middleware
    setup_middleware(app)

    # Exception handlers
    register_exception_handlers(app)

    # Routers
    app.include_router(api_router, prefix="/api")

    # Health check
    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "ok", "version": settings.APP_VERSION}

    return app


app = create_app()
