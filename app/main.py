"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from app.config import Settings, get_settings
from app.context import AppContext
from app.routers import slack


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Run with: uvicorn app.main:create_app --factory
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan - startup and shutdown events."""
        # Startup
        context = AppContext.from_settings(settings)
        await context.start()
        app.state.context = context
        yield
        # Shutdown
        await context.close()

    app = FastAPI(
        title="Tickly",
        description="Slack time tracking bot",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(slack.router)

    @app.get("/")
    async def root():
        """Root endpoint - health check."""
        return {"status": "ok", "message": "Tickly"}

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
