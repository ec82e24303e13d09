"""Header parsing utilities for the link shortener."""

from typing import Mapping, Optional


def get_forwarded_for(headers: Mapping[str, str]) -> Optional[str]:
    """Return the raw X-Forwarded-For header, looked up case-insensitively."""
    for key, value in headers.items():
        if key.lower() == "x-forwarded-for":
            return value
    return None


def resolve_client_ip(
    headers: Mapping[str, str],
    peer_host: Optional[str],
    trust_forwarded_for: bool = False,
) -> Optional[str]:
    """Determine the client IP address of a request.

    The first X-Forwarded-For entry is the original client when the service
    sits behind a proxy that appends to the header.

    Args:
        headers: Request headers
        peer_host: Host of the socket peer, if known
        trust_forwarded_for: Whether X-Forwarded-For may be used

    Returns:
        Client IP address, or None if it cannot be determined
    """
    if trust_forwarded_for:
        forwarded_for = get_forwarded_for(headers)
        if forwarded_for:
            first = forwarded_for.split(",")[0].strip()
            if first:
                return first

    return peer_host or None
