"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI

import shortlinks
from .api import api_router
from .web import web_router
from .errors import install_error_handlers
from .middleware.logging import LoggingMiddleware


def create_app(
    config,
    store=None,
    service=None,
    resolver=None,
    logger: Optional[logging.Logger] = None,
    lifespan=None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Components may be passed in ready-made (tests) or left as None for a
    ``lifespan`` hook to create at startup (``app.py``).

    Args:
        config: Configuration instance; ``config.base_url`` renders short_url
        store: Link store instance
        service: LinkService instance
        resolver: RedirectResolver instance
        logger: Optional logger
        lifespan: Optional lifespan context manager

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Short Links",
        description="Short link service with visit counting",
        version=shortlinks.__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # Store instances in app state for access in routes
    app.state.config = config
    app.state.logger = logger or logging.getLogger("shortlinks")
    app.state.store = store
    app.state.service = service
    app.state.resolver = resolver

    install_error_handlers(app)
    app.add_middleware(LoggingMiddleware, logger=app.state.logger.getChild("web"))

    # API first: "/links" must not be taken for a visitor code
    app.include_router(api_router, tags=["API"])
    app.include_router(web_router, tags=["Web"])

    return app
