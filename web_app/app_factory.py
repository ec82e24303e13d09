"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import web_router
from .error_handlers import install_error_handlers
from .middleware.headers import ForwardedHeadersMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    repository_instance,
    service_instance,
    config,
    logger: Optional[logging.Logger] = None,
    lifespan=None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        repository_instance: Link repository (may be None until lifespan startup)
        service_instance: Link service (may be None until lifespan startup)
        config: Configuration instance
        logger: Application logger
        lifespan: Optional lifespan context manager that wires the instances

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Link Shortener",
        description="Shorten URLs, redirect short links and count clicks",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # Store instances in app state for access in routes
    app.state.repository = repository_instance
    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger or logging.getLogger("linkshort")

    install_error_handlers(app)

    origins = config.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers refuse credentialed responses with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Last added runs first: client IP is resolved before the request is logged
    app.add_middleware(LoggingMiddleware, logger=app.state.logger.getChild("web"))
    app.add_middleware(
        ForwardedHeadersMiddleware,
        trust_forwarded_for=config.trust_proxy_headers,
    )

    app.include_router(api_router, prefix="/api", tags=["API"])
    # Catch-all /{short_code} route goes last
    app.include_router(web_router, tags=["Links"])

    return app
