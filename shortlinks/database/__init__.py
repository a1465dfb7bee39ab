"""Storage layer for short links."""

from .base import LinkStoreBase, LockedRow
from .factory import create_link_store
from .memory import MemoryLinkStore
from .models import Link
from .postgres import PostgresLinkStore

__all__ = [
    "LinkStoreBase",
    "LockedRow",
    "Link",
    "MemoryLinkStore",
    "PostgresLinkStore",
    "create_link_store",
]
