"""Abstract base class for link store implementations."""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import AsyncContextManager, List, Optional, Union

from ..errors import ConflictError, InternalError, NotFoundError
from .models import Link


class LockedRow(ABC):
    """A link row held under an exclusive lock inside an open transaction.

    Only valid inside the ``lock_row`` block that produced it.
    """

    def __init__(self, code: str, url: str):
        self.code = code
        self.url = url

    @abstractmethod
    async def increment(self, at: datetime) -> None:
        """Add one click and set ``last_clicked`` within the open transaction.

        Args:
            at: Visit timestamp
        """
        pass


class LinkStoreBase(ABC):
    """Abstract base class for the links table.

    Single-row operations return their outcome or an error value rather than
    raising. Storage failures come back as ``InternalError``.
    """

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def insert(self, code: str, url: str) -> Union[Link, ConflictError, InternalError]:
        """Create a new link with zero clicks.

        Args:
            code: The code to use (already validated)
            url: The target URL (already validated)

        Returns:
            The created Link, ConflictError if the code is taken, or InternalError
        """
        pass

    @abstractmethod
    async def get(self, code: str) -> Union[Link, NotFoundError, InternalError]:
        """Get a link by code.

        Args:
            code: The code to lookup

        Returns:
            The Link, NotFoundError, or InternalError
        """
        pass

    @abstractmethod
    async def list(self) -> Union[List[Link], InternalError]:
        """List every link, newest first.

        Ordered by ``created_at`` descending; ties go to the later insertion.

        Returns:
            Fresh list of links, or InternalError
        """
        pass

    @abstractmethod
    async def delete(self, code: str) -> Union[bool, InternalError]:
        """Delete a link.

        Args:
            code: The code to delete

        Returns:
            True if a row was removed, False if none existed, or InternalError
        """
        pass

    @abstractmethod
    def lock_row(self, code: str) -> AsyncContextManager[Optional[LockedRow]]:
        """Begin a transaction and lock the row for ``code``.

        Yields the locked row, or None if it does not exist. A clean exit with
        a row commits. A clean exit without a row rolls back. Any exception,
        cancellation included, rolls back and propagates. Lock and transport
        failures raise; they are not converted to error values here.

        Args:
            code: The code to lock
        """
        pass

    async def resolve_and_increment(self, code: str) -> Union[str, NotFoundError]:
        """Resolve a code and count one visit in a single transaction.

        Args:
            code: The code to resolve

        Returns:
            The target URL, or NotFoundError if the code does not exist

        Raises:
            Whatever the backend raises for lock or transport failures. The
            transaction has been rolled back by the time it propagates.
        """
        async with self.lock_row(code) as row:
            if row is None:
                return NotFoundError()
            await row.increment(datetime.now(timezone.utc))
            return row.url

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release connections."""
        pass
