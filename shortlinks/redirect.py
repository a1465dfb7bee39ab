"""Visitor redirects: resolve a code and count the visit atomically."""

import asyncio
import logging
from typing import Optional, Union

from .common.validators import is_valid_code
from .database.base import LinkStoreBase
from .errors import InternalError, NotFoundError


class RedirectResolver:
    """Resolve codes for visitors and count each visit exactly once.

    This path talks to the store directly instead of going through
    LinkService: it is the only read-modify-write in the system and runs
    under a row lock.

    The unit of work for one visit:

    1. Reject malformed codes as NotFoundError without touching the store.
    2. Begin a transaction and lock the row for the code.
    3. If there is no row, roll back and report NotFoundError.
    4. Otherwise add one click and set ``last_clicked`` in that transaction.
    5. Commit and hand back the URL read under the lock.

    Any failure from step 2 on (lock timeout, lost connection, constraint
    violation, the unit of work running past ``timeout_seconds``) rolls the
    transaction back and comes back as InternalError, so a count is only ever
    persisted together with a successful redirect.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        timeout_seconds: Optional[float] = 5.0,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize redirect resolver.

        Args:
            store: Link store instance
            timeout_seconds: Upper bound for one visit's transaction; None disables it
            logger: Optional logger
        """
        self.store = store
        self.timeout_seconds = timeout_seconds
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(self, code: str) -> Union[str, NotFoundError, InternalError]:
        """Resolve ``code`` to its URL and count the visit.

        Args:
            code: Untrusted code from the request path

        Returns:
            The target URL, NotFoundError, or InternalError
        """
        if not is_valid_code(code):
            return NotFoundError()

        try:
            # wait_for cancels the unit of work on expiry, which rolls it back
            result = await asyncio.wait_for(
                self.store.resolve_and_increment(code),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            self.logger.error(
                f"Redirect for {code} exceeded {self.timeout_seconds}s, rolled back"
            )
            return InternalError()
        except Exception:
            self.logger.exception(f"Redirect for {code} failed, rolled back")
            return InternalError()

        if isinstance(result, NotFoundError):
            self.logger.debug(f"Code not found: {code}")
        else:
            self.logger.debug(f"Resolved {code} -> {result}")
        return result
