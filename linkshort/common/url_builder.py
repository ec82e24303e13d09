"""URL building utilities for the link shortener."""


def build_short_url(short_code: str, base_url: str) -> str:
    """Build complete short URL.

    Args:
        short_code: The short code
        base_url: Base URL (e.g., https://lnk.sh)

    Returns:
        Complete short URL, ``base_url + "/" + short_code``
    """
    return f"{base_url.rstrip('/')}/{short_code}"
