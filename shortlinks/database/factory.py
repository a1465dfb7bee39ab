"""Pick a link store backend from a database URL."""

import logging
from typing import Optional
from urllib.parse import urlparse

from .base import LinkStoreBase
from .memory import MemoryLinkStore
from .postgres import PostgresLinkStore


POSTGRES_SCHEMES = ("postgres", "postgresql")


def create_link_store(
    database_url: str,
    pool_max_size: int = 10,
    connection_timeout_seconds: int = 30,
    lock_timeout_ms: int = 2000,
    create_tables: bool = False,
    logger: Optional[logging.Logger] = None,
) -> LinkStoreBase:
    """Create the store for ``database_url``.

    ``memory://`` gives an in-process table; ``postgres://`` and
    ``postgresql://`` give a PostgreSQL-backed one.

    Raises:
        ValueError: For any other scheme
    """
    scheme = urlparse(database_url).scheme

    if scheme == "memory":
        return MemoryLinkStore(database_url, logger=logger)

    if scheme in POSTGRES_SCHEMES:
        return PostgresLinkStore(
            database_url,
            pool_max_size=pool_max_size,
            connection_timeout_seconds=connection_timeout_seconds,
            lock_timeout_ms=lock_timeout_ms,
            create_tables=create_tables,
            logger=logger,
        )

    raise ValueError(f"Unsupported database URL scheme: {scheme or database_url!r}")
