"""
FastAPI Application Entry Point

This module builds the FastAPI application and configures:
- The URL registry and the global rate limiter (one of each per app)
- Middleware (rate limiting, logging)
- Error handlers and API routes
- Application metadata

Design Decisions:
- create_app() wires explicitly constructed components into app.state, so
  tests can build isolated apps with their own settings and clock
- The module-level ``app`` is what uvicorn serves (``shortener.main:app``)
"""

import logging
from typing import Optional

from fastapi import FastAPI

from shortener.api import endpoints
from shortener.api.errors import add_exception_handlers
from shortener.core.clock import Clock
from shortener.core.rate_limit import SlidingWindowRateLimiter
from shortener.core.setting import Settings, settings as default_settings
from shortener.core.validators import RESERVED_SHORT_CODES
from shortener.middleware.logging import add_logging_middleware
from shortener.middleware.rate_limit import add_rate_limit_middleware
from shortener.services.url_registry import UrlRegistry

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    for name in ("shortener", "url_shortener"):
        logging.getLogger(name).setLevel(level.upper())


def create_app(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> FastAPI:
    """
    Build a FastAPI application with its own registry and rate limiter.

    Args:
        settings: Application settings, defaults to the environment-loaded settings
        clock: Time source shared by the registry and the limiter

    Returns:
        Configured FastAPI application
    """
    settings = settings or default_settings
    clock = clock or Clock()
    configure_logging(settings.LOG_LEVEL)

    # Title and description are used in auto-generated API documentation
    app = FastAPI(
        title="URL Shortener Service",
        description="An in-memory URL shortening service built with FastAPI",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.registry = UrlRegistry(
        base_url=settings.BASE_URL,
        code_length=settings.SHORT_CODE_LENGTH,
        expiration_hours=settings.DEFAULT_EXPIRATION_HOURS,
        clock=clock,
        reserved_codes=RESERVED_SHORT_CODES,
    )
    app.state.rate_limiter = SlidingWindowRateLimiter(
        max_requests=settings.rate_limit.max_requests,
        window_millis=settings.rate_limit.window_millis,
        clock=clock,
    )

    # Last added middleware runs first: logging wraps the rate limit gate.
    add_rate_limit_middleware(app)
    add_logging_middleware(app)
    add_exception_handlers(app)

    # Health endpoint defined before router to match before catch-all route
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    app.include_router(endpoints.router, tags=["URL Shortener"])

    logger.info(
        f"URL shortener configured: base_url={settings.BASE_URL}, "
        f"rate_limit={settings.rate_limit.max_requests}/"
        f"{settings.rate_limit.window_millis}ms"
    )
    return app


app = create_app()
