"""Business logic service for the link shortener."""

import asyncio
import logging
from typing import Any, Dict, Optional, Set

from .shortcode import ShortCodeGenerator
from .errors import ConflictError, NotFoundError, ValidationError
from .database.base import LinkRepositoryBase
from .database.models import ShortLink, utcnow
from .common.url_builder import build_short_url
from .common.validators import is_valid_url, is_valid_short_code


class LinkShortenerService:
    """Service layer for link shortening business logic."""

    def __init__(
        self,
        repository: LinkRepositoryBase,
        base_url: str,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 0,
    ):
        """Initialize link shortener service.

        Args:
            repository: Link repository instance
            base_url: Public base URL used to build short URLs
            short_code_generator: Optional short code generator
            logger: Optional logger
            max_collision_retries: Re-draws allowed when a generated code is
                taken. Custom aliases are never retried.
        """
        self.repository = repository
        self.base_url = base_url
        self.generator = short_code_generator or ShortCodeGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
        self._pending_clicks: Set[asyncio.Task] = set()

    async def create_short_link(
        self,
        long_url: str,
        custom_alias: Optional[str] = None,
        creator_ip: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a new short link.

        Args:
            long_url: The redirect target
            custom_alias: Optional user-chosen short code
            creator_ip: Optional address of the creator, stored but never returned

        Returns:
            Link summary (short_code, long_url, short_url, created_at, clicks)

        Raises:
            ValidationError: If the URL or alias is malformed
            ConflictError: If the short code is already in use
        """
        is_valid, error = is_valid_url(long_url)
        if not is_valid:
            raise ValidationError(error)

        if custom_alias is not None:
            is_valid, error = is_valid_short_code(custom_alias)
            if not is_valid:
                raise ValidationError(error)
            short_code = await self._claim_custom_alias(custom_alias)
        else:
            short_code = await self._claim_generated_code()

        link = ShortLink(
            long_url=long_url,
            short_code=short_code,
            created_at=utcnow(),
            clicks=0,
            creator_ip=creator_ip,
        )
        created = await self.repository.create(link)

        self.logger.info(f"Created short link: {short_code} -> {long_url}")
        return self._build_summary(created)

    async def get_long_url(self, short_code: str) -> str:
        """Resolve a short code for redirection.

        The click counter is bumped in a detached task; the caller gets the
        URL back without waiting on it.

        Raises:
            NotFoundError: If no link exists for the code
        """
        link = await self.repository.find_by_short_code(short_code)

        if link is None:
            self.logger.warning(f"Short code not found: {short_code}")
            raise NotFoundError(
                short_code,
                f'Short link "{short_code}" not found. Please check the URL and try again.',
            )

        task = asyncio.create_task(self.repository.increment_clicks(short_code))
        task.add_done_callback(lambda t: self._on_click_recorded(short_code, t))
        self._pending_clicks.add(task)

        self.logger.debug(f"Resolved {short_code} -> {link.long_url}")
        return link.long_url

    async def get_short_link_details(self, short_code: str) -> Dict[str, Any]:
        """Get the summary of a short link.

        Raises:
            NotFoundError: If no link exists for the code
        """
        link = await self.repository.find_by_short_code(short_code)

        if link is None:
            raise NotFoundError(short_code)

        return self._build_summary(link)

    async def flush_pending_clicks(self) -> None:
        """Wait for outstanding click increments to finish."""
        while self._pending_clicks:
            await asyncio.gather(*list(self._pending_clicks), return_exceptions=True)

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.repository.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Drain pending clicks and close the repository."""
        await self.flush_pending_clicks()
        await self.repository.close()

    def _on_click_recorded(self, short_code: str, task: asyncio.Task) -> None:
        self._pending_clicks.discard(task)
        if task.cancelled():
            self.logger.warning(f"Click increment cancelled for {short_code}")
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error(f"Failed to increment clicks for {short_code}: {exc}")

    async def _claim_custom_alias(self, alias: str) -> str:
        if await self.repository.find_by_short_code(alias) is not None:
            raise ConflictError(alias)
        return alias

    async def _claim_generated_code(self) -> str:
        """Generate a short code not currently in the store.

        Raises:
            ConflictError: If every attempt hits an existing code
        """
        code = self.generator.generate_random()
        for attempt in range(self.max_collision_retries + 1):
            if attempt:
                code = self.generator.generate_random()
            if await self.repository.find_by_short_code(code) is None:
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code
            self.logger.warning(f"Generated short code collided: {code}")

        raise ConflictError(code)

    def _build_summary(self, link: ShortLink) -> Dict[str, Any]:
        return {
            "short_code": link.short_code,
            "long_url": link.long_url,
            "short_url": build_short_url(link.short_code, self.base_url),
            "created_at": link.created_at,
            "clicks": link.clicks,
        }
