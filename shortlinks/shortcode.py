"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random candidate codes for links."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_uppercase + string.ascii_lowercase + string.digits  # A-Za-z0-9

    MIN_LENGTH = 6
    MAX_LENGTH = 8

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes (6 to 8)
        """
        self._check_length(default_length)
        self.default_length = default_length
        # Seeded from os.urandom, never from the clock
        self._random = random.SystemRandom()

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random code.

        Uniqueness is not guaranteed here; the store's primary key rejects
        collisions.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random code drawn uniformly from A-Za-z0-9
        """
        if length is None:
            length = self.default_length
        self._check_length(length)
        return "".join(self._random.choices(self.BASE62_CHARS, k=length))

    def _check_length(self, length: int) -> None:
        if not self.MIN_LENGTH <= length <= self.MAX_LENGTH:
            raise ValueError(
                f"Code length must be between {self.MIN_LENGTH} and {self.MAX_LENGTH}, got {length}"
            )
