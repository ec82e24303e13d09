"""Core business logic for the link shortener."""

from .errors import ConflictError, LinkShortenerError, NotFoundError, ValidationError
from .shortcode import ShortCodeGenerator
from .service import LinkShortenerService

__all__ = [
    "ShortCodeGenerator",
    "LinkShortenerService",
    "LinkShortenerError",
    "ValidationError",
    "ConflictError",
    "NotFoundError",
]
