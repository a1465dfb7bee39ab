"""URL building utilities for short links."""


def build_short_url(code: str, base_url: str) -> str:
    """Build the public short URL for a code.

    Args:
        code: The link code
        base_url: Configured base URL (e.g., https://sho.rt)

    Returns:
        Complete short URL
    """
    return f"{base_url.rstrip('/')}/{code}"
