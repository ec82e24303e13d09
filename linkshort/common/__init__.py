"""Common utilities for the link shortener."""

from .validators import is_valid_url, is_valid_short_code
from .headers import get_forwarded_for, resolve_client_ip
from .url_builder import build_short_url
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "is_valid_short_code",
    "get_forwarded_for",
    "resolve_client_ip",
    "build_short_url",
    "setup_logging",
    "get_logger",
]
