"""In-process implementation of the link store.

Used by the test suite and for local development (``DATABASE_URL=memory://``).
The dict is the table; nothing outlives the process.
"""

import asyncio
import itertools
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from ..errors import ConflictError, InternalError, NotFoundError
from .base import LinkStoreBase, LockedRow
from .models import Link


class _MemoryLockedRow(LockedRow):
    """Row held under its per-code lock; changes are staged until commit."""

    def __init__(self, link: Link):
        super().__init__(link.code, link.url)
        self.original = link
        self.pending = link

    async def increment(self, at: datetime) -> None:
        # Read-modify-write with a suspension point in the middle. Without the
        # row lock concurrent visitors would overwrite each other here.
        current = self.pending
        await asyncio.sleep(0)
        self.pending = current.clicked(at)


class _RowLock:
    """Per-code lock, dropped once nobody holds or waits for it."""

    def __init__(self):
        self.lock = asyncio.Lock()
        self.users = 0


class MemoryLinkStore(LinkStoreBase):
    """Links table held in a dict, with one asyncio.Lock per code as the row lock."""

    def __init__(self, db_config: str = "memory://", logger: Optional[logging.Logger] = None):
        super().__init__(db_config)
        self.logger = logger or logging.getLogger(__name__)
        self._rows: Dict[str, Link] = {}
        self._insert_seq: Dict[str, int] = {}
        self._seq = itertools.count()
        self._row_locks: Dict[str, _RowLock] = {}

    @asynccontextmanager
    async def _hold_row(self, code: str):
        entry = self._row_locks.get(code)
        if entry is None:
            entry = self._row_locks[code] = _RowLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._row_locks[code]

    async def insert(self, code: str, url: str) -> Union[Link, ConflictError, InternalError]:
        # No await between the check and the write, so this is atomic on the loop
        if code in self._rows:
            self.logger.warning(f"Code already exists: {code}")
            return ConflictError()

        link = Link(code=code, url=url, created_at=datetime.now(timezone.utc))
        self._rows[code] = link
        self._insert_seq[code] = next(self._seq)
        self.logger.info(f"Created link: {code} -> {url}")
        return link

    async def get(self, code: str) -> Union[Link, NotFoundError, InternalError]:
        link = self._rows.get(code)
        if link is None:
            return NotFoundError()
        return link

    async def list(self) -> Union[List[Link], InternalError]:
        return sorted(
            self._rows.values(),
            key=lambda link: (link.created_at, self._insert_seq[link.code]),
            reverse=True,
        )

    async def delete(self, code: str) -> Union[bool, InternalError]:
        # Waits for an in-flight redirect on the same row, like DELETE does
        async with self._hold_row(code):
            link = self._rows.pop(code, None)
            self._insert_seq.pop(code, None)

        if link is None:
            return False
        self.logger.info(f"Deleted link: {code}")
        return True

    @asynccontextmanager
    async def lock_row(self, code: str):
        async with self._hold_row(code):
            link = self._rows.get(code)
            locked = _MemoryLockedRow(link) if link else None
            yield locked
            # Only reached on a clean exit; an exception leaves the row untouched
            if locked is not None and locked.pending is not locked.original:
                self._rows[code] = locked.pending

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        pass
