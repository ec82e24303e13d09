"""In-process link repository for development and tests."""

import asyncio
import logging
import uuid
from dataclasses import replace
from typing import Dict, Optional

from .base import LinkRepositoryBase
from .models import ShortLink


class InMemoryLinkRepository(LinkRepositoryBase):
    """Dictionary-backed repository keyed by document id.

    Like the document store it stands in for, writes do not enforce
    ``short_code`` uniqueness; callers pre-check with ``find_by_short_code``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._documents: Dict[str, ShortLink] = {}
        self._lock = asyncio.Lock()

    async def create(self, link: ShortLink) -> ShortLink:
        link_id = uuid.uuid4().hex
        stored = link.with_id(link_id)
        async with self._lock:
            self._documents[link_id] = stored
        self.logger.debug(f"Stored short link {stored.short_code} as {link_id}")
        return stored

    async def find_by_short_code(self, short_code: str) -> Optional[ShortLink]:
        # Insertion order stands in for the store's natural query order
        for link in self._documents.values():
            if link.short_code == short_code:
                return link
        return None

    async def find_by_id(self, link_id: str) -> Optional[ShortLink]:
        return self._documents.get(link_id)

    async def increment_clicks(self, short_code: str) -> None:
        link = await self.find_by_short_code(short_code)
        if link is None:
            self.logger.debug(f"Skipping click increment, no link for {short_code}")
            return

        async with self._lock:
            current = self._documents.get(link.id)
            if current is not None:
                self._documents[link.id] = replace(current, clicks=current.clicks + 1)

    async def health_check(self) -> bool:
        return True

    async def close(self) -> None:
        self.logger.debug("In-memory repository closed")

    def __len__(self) -> int:
        return len(self._documents)
