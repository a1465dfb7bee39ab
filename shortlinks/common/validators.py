"""Validation utilities for short links."""

import re

from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError


CODE_PATTERN = re.compile(r"^[A-Za-z0-9]{6,8}$")

# Codes that would be shadowed by a fixed visitor route
RESERVED_CODES = frozenset({"healthz"})

# One DNS label; IDN hosts arrive here already punycode-encoded
HOST_LABEL_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?$")

INVALID_URL_MESSAGE = "Invalid or missing URL"
INVALID_CODE_MESSAGE = "Code must match [A-Za-z0-9]{6,8}"
RESERVED_CODE_MESSAGE = "Code is reserved"

_http_url_adapter = TypeAdapter(AnyHttpUrl)


def is_valid_code(code) -> bool:
    """Check that a code is 6 to 8 ASCII letters or digits.

    Args:
        code: The candidate code (any type)

    Returns:
        True if the code is well formed
    """
    if not isinstance(code, str):
        return False
    # fullmatch so a trailing newline is not accepted the way "$" would allow
    return CODE_PATTERN.fullmatch(code) is not None


def is_reserved_code(code: str) -> bool:
    """Check whether a well-formed code collides with a fixed route."""
    return code in RESERVED_CODES


def _is_valid_host(host: str) -> bool:
    if host.startswith("["):
        # IPv6 literal, already checked by the parser
        return True
    labels = host.rstrip(".").split(".")
    return all(HOST_LABEL_PATTERN.fullmatch(label) for label in labels)


def is_valid_url(url) -> bool:
    """Check that a URL is absolute with an http or https scheme.

    Parsing follows the WHATWG URL rules (via pydantic's URL type), then every
    host label must be letters, digits and inner hyphens. Never raises;
    anything that fails to parse is invalid.

    Args:
        url: The candidate URL (any type)

    Returns:
        True if the URL is usable as a redirect target
    """
    if not url or not isinstance(url, str):
        return False

    try:
        parsed = _http_url_adapter.validate_python(url)
    except PydanticValidationError:
        return False

    if not parsed.host:
        return False

    return _is_valid_host(parsed.host)
