#!/usr/bin/env python3
"""
Main entry point for the link shortener service.

The store client is constructed explicitly at startup and handed to the
repository, then closed at shutdown; nothing connects on import.

Usage:
    python app.py

Environment variables:
    STORE_BACKEND - 'postgres' (default) or 'memory'
    DATABASE_URL - PostgreSQL connection URL (required for postgres)
    CREATE_TABLES - Set to '1' to create the short_links table on startup
    BASE_URL / LINK_SHORTENER_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from linkshort.database import InMemoryLinkRepository, LinkRepositoryBase, PostgresLinkRepository
from linkshort.service import LinkShortenerService
from linkshort.shortcode import ShortCodeGenerator
from linkshort.common.logging_config import setup_logging
from web_app import create_app


def build_repository(config: Config, logger: logging.Logger) -> LinkRepositoryBase:
    """Construct the link repository selected by configuration."""
    if config.store_backend == "memory":
        logger.warning("Using in-memory link store; links are lost on restart")
        return InMemoryLinkRepository(logger=logger.getChild("store"))

    return PostgresLinkRepository(
        db_config=config.database_url,
        pool_max_size=config.db_pool_max_size,
        create_tables=config.create_tables,
        logger=logger.getChild("store"),
    )


def build_service(
    config: Config,
    repository: LinkRepositoryBase,
    logger: logging.Logger,
) -> LinkShortenerService:
    generator = ShortCodeGenerator(
        default_length=config.short_code_length,
        secure=config.secure_short_codes,
    )
    return LinkShortenerService(
        repository=repository,
        base_url=config.base_url,
        short_code_generator=generator,
        logger=logger.getChild("service"),
        max_collision_retries=config.max_collision_retries,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting link shortener service...")

    repository = build_repository(config, logger)
    if isinstance(repository, PostgresLinkRepository):
        logger.info(f"Connecting to PostgreSQL at {repository.host}:{repository.port}/{repository.database}")
        await repository.initialize()

    service = build_service(config, repository, logger)

    app.state.repository = repository
    app.state.service = service

    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down link shortener service...")
        await service.close()
        logger.info("Service stopped")


def main():
    """Main entry point."""
    try:
        config = load_config()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Link Shortener Service")
    logger.info(f"Configuration: {config.safe_dump()}")

    app = create_app(
        repository_instance=None,  # Set in lifespan
        service_instance=None,
        config=config,
        logger=logger,
        lifespan=lifespan,
    )

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=False,  # LoggingMiddleware logs each request
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
