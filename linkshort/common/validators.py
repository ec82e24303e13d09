"""Validation utilities for the link shortener."""

import ipaddress
import re
from urllib.parse import urlparse
from typing import Tuple

SHORT_CODE_MIN_LENGTH = 3
SHORT_CODE_MAX_LENGTH = 50
SHORT_CODE_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")

MAX_URL_LENGTH = 2048

_HOST_LABEL = re.compile(r"(?!-)[a-zA-Z0-9-]{1,63}(?<!-)")
_TLD = re.compile(r"[a-zA-Z]{2,63}|xn--[a-zA-Z0-9-]{2,59}")

URL_MESSAGE = "Please provide a valid URL with http:// or https://"


def _is_valid_host(host: str) -> bool:
    """Accept IP literals and dotted hostnames with an alphabetic TLD.

    Internationalized names are checked in their punycode form.
    """
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass

    try:
        host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return False

    labels = host.rstrip(".").split(".")
    if len(labels) < 2:
        return False
    if not all(_HOST_LABEL.fullmatch(label) for label in labels):
        return False
    return bool(_TLD.fullmatch(labels[-1]))


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a long URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if any(ch.isspace() for ch in url):
        return False, URL_MESSAGE

    try:
        result = urlparse(url)
        host = result.hostname
        # Accessing .port raises ValueError for out-of-range ports
        result.port
    except ValueError:
        return False, URL_MESSAGE

    if result.scheme.lower() not in ("http", "https"):
        return False, URL_MESSAGE

    if not host or not _is_valid_host(host):
        return False, URL_MESSAGE

    return True, ""


def is_valid_short_code(
    short_code: str,
    min_length: int = SHORT_CODE_MIN_LENGTH,
    max_length: int = SHORT_CODE_MAX_LENGTH,
) -> Tuple[bool, str]:
    """Validate a custom alias or short code path segment.

    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(short_code, str):
        return False, "Custom alias must be a string"

    if len(short_code) < min_length:
        return False, f"Custom alias must be at least {min_length} characters long"

    if len(short_code) > max_length:
        return False, f"Custom alias must not exceed {max_length} characters"

    if not SHORT_CODE_PATTERN.fullmatch(short_code):
        return False, "Custom alias can only contain letters, numbers, hyphens, and underscores"

    return True, ""
