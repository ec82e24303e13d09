"""Abstract base class for link repository implementations."""

from abc import ABC, abstractmethod
from typing import Optional

from .models import ShortLink


class LinkRepositoryBase(ABC):
    """Abstract base class for operations on the short links collection.

    Records are addressed two ways: by ``short_code`` (a queried field, not
    the primary key) and by the internal document id assigned on create.
    """

    @abstractmethod
    async def create(self, link: ShortLink) -> ShortLink:
        """Persist a new short link.

        Args:
            link: The record to store (its ``id`` is ignored)

        Returns:
            The stored record with its assigned ``id``
        """

    @abstractmethod
    async def find_by_short_code(self, short_code: str) -> Optional[ShortLink]:
        """Find a short link by equality on its short code.

        Args:
            short_code: The short code to lookup

        Returns:
            The first matching record, or None
        """

    @abstractmethod
    async def find_by_id(self, link_id: str) -> Optional[ShortLink]:
        """Find a short link by its internal document id.

        Args:
            link_id: Identifier returned by ``create``

        Returns:
            The record, or None
        """

    @abstractmethod
    async def increment_clicks(self, short_code: str) -> None:
        """Atomically add one to the click counter of a short code.

        A no-op when the code no longer resolves to a record.

        Args:
            short_code: The short code that was visited
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """

    @abstractmethod
    async def close(self) -> None:
        """Release store connections."""
