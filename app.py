#!/usr/bin/env python3
"""
Main entry point for the short links service.

Concurrency: requests are asyncio tasks on uvicorn's event loop (FastAPI +
asyncpg connection pool). Redirects for the same code serialize on the
database row lock; everything else runs concurrently. Set WORKERS > 1 for
multi-process scaling across CPU cores (each worker has its own DB pool).

Usage:
    python app.py

Environment variables:
    DATABASE_URL - PostgreSQL connection URL (or memory:// for local runs)
    CREATE_TABLES - Create the links table on startup (default true)
    BASE_URL - Base URL for short links
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlinks.database import create_link_store
from shortlinks.redirect import RedirectResolver
from shortlinks.service import LinkService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store, service and resolver on startup; close them on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting short links service...")

    store = create_link_store(
        config.database_url,
        pool_max_size=config.db_pool_max_size,
        connection_timeout_seconds=config.db_connection_timeout_seconds,
        lock_timeout_ms=config.lock_timeout_ms,
        create_tables=config.create_tables,
        logger=logger.getChild("store"),
    )

    generator = ShortCodeGenerator(default_length=config.short_code_length)
    service = LinkService(
        store=store,
        short_code_generator=generator,
        logger=logger.getChild("service"),
    )
    resolver = RedirectResolver(
        store=store,
        timeout_seconds=config.redirect_timeout_seconds,
        logger=logger.getChild("redirect"),
    )

    app.state.store = store
    app.state.service = service
    app.state.resolver = resolver

    if not await store.health_check():
        logger.warning("Store is not reachable yet; requests will fail until it is")

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down short links service...")
    await service.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Short Links Service")
    # database_url may carry a password
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url'})}")

    app = create_app(config=config, logger=logger, lifespan=lifespan)

    # Configure uvicorn: async handles many concurrent connections per worker;
    # workers > 1 runs multiple processes for CPU scaling (each has its own DB pool).
    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    # Setup signal handlers for graceful shutdown
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
