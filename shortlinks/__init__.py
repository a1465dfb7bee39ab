"""Core logic for the short links service."""

from .errors import LinkError, ValidationError, ConflictError, NotFoundError, InternalError
from .redirect import RedirectResolver
from .service import LinkService
from .shortcode import ShortCodeGenerator

__version__ = "1.0"

__all__ = [
    "LinkError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
    "InternalError",
    "LinkService",
    "RedirectResolver",
    "ShortCodeGenerator",
]
