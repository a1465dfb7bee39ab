"""Link management: create, read, list and delete."""

import logging
from typing import List, Optional, Union

from .common.validators import (
    INVALID_CODE_MESSAGE,
    INVALID_URL_MESSAGE,
    RESERVED_CODE_MESSAGE,
    is_reserved_code,
    is_valid_code,
    is_valid_url,
)
from .database.base import LinkStoreBase
from .database.models import Link
from .errors import ConflictError, InternalError, NotFoundError, ValidationError
from .shortcode import ShortCodeGenerator


class LinkService:
    """Service layer for link owners.

    Validation always happens before the store is touched. Store outcomes,
    conflicts included, are passed through unchanged.
    """

    def __init__(
        self,
        store: LinkStoreBase,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize link service.

        Args:
            store: Link store instance
            short_code_generator: Optional short code generator
            logger: Optional logger
        """
        self.store = store
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)

    async def create(
        self,
        url: str,
        code: Optional[str] = None,
    ) -> Union[Link, ValidationError, ConflictError, InternalError]:
        """Create a new link.

        A generated code that collides with an existing one is reported as a
        ConflictError like any other; it is not retried.

        Args:
            url: The target URL
            code: Optional code chosen by the caller

        Returns:
            The created Link or the error describing why not
        """
        if not is_valid_url(url):
            return ValidationError(INVALID_URL_MESSAGE)

        # An empty string means "no code", as in a blank form field
        if code:
            if not is_valid_code(code):
                return ValidationError(INVALID_CODE_MESSAGE)
            if is_reserved_code(code):
                return ValidationError(RESERVED_CODE_MESSAGE)
        else:
            code = self.generator.generate()
            while is_reserved_code(code):
                code = self.generator.generate()
            self.logger.debug(f"Generated code {code} for {url}")

        return await self.store.insert(code, url)

    async def read_one(self, code: str) -> Union[Link, ValidationError, NotFoundError, InternalError]:
        """Get one link; malformed codes never reach the store."""
        if not is_valid_code(code):
            return ValidationError("Invalid code format")
        return await self.store.get(code)

    async def list_all(self) -> Union[List[Link], InternalError]:
        """List every link, newest first."""
        return await self.store.list()

    async def remove(self, code: str) -> Union[bool, InternalError]:
        """Delete a link.

        Returns:
            True if removed; False if the code is malformed or unknown
        """
        if not is_valid_code(code):
            return False
        return await self.store.delete(code)

    async def health_check(self) -> bool:
        return await self.store.health_check()

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
