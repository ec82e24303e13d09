"""Storage layer for the link shortener."""

from .base import LinkRepositoryBase
from .memory import InMemoryLinkRepository
from .models import ShortLink
from .postgres import PostgresLinkRepository

__all__ = [
    "LinkRepositoryBase",
    "InMemoryLinkRepository",
    "PostgresLinkRepository",
    "ShortLink",
]
