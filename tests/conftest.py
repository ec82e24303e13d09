"""Pytest configuration and fixtures."""

import asyncio
from typing import AsyncGenerator, List

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from linkshort.database import InMemoryLinkRepository
from linkshort.service import LinkShortenerService
from linkshort.shortcode import ShortCodeGenerator
from linkshort.common.logging_config import setup_logging
from web_app import create_app

BASE_URL = "http://testserver"


class RecordingRepository(InMemoryLinkRepository):
    """In-memory repository that records which operations were called."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls: List[str] = []

    async def create(self, link):
        self.calls.append("create")
        return await super().create(link)

    async def find_by_short_code(self, short_code):
        self.calls.append("find_by_short_code")
        return await super().find_by_short_code(short_code)

    async def increment_clicks(self, short_code):
        self.calls.append("increment_clicks")
        await super().increment_clicks(short_code)


class FailingClicksRepository(InMemoryLinkRepository):
    """Repository whose click counter is unavailable."""

    async def increment_clicks(self, short_code):
        await asyncio.sleep(0)
        raise RuntimeError("counter store unavailable")


class SequenceGenerator(ShortCodeGenerator):
    """Generator that hands out predetermined codes."""

    def __init__(self, codes):
        super().__init__(default_length=6)
        self.codes = list(codes)

    def generate_random(self, length=None):
        return self.codes.pop(0)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def repository(logger) -> RecordingRepository:
    return RecordingRepository(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
async def service(repository, short_code_generator, logger) -> AsyncGenerator[LinkShortenerService, None]:
    """Create service instance over the in-memory store."""
    service = LinkShortenerService(
        repository=repository,
        base_url=BASE_URL,
        short_code_generator=short_code_generator,
        logger=logger,
    )

    yield service

    await service.close()


@pytest.fixture
def config():
    return Config(store_backend="memory", base_url=BASE_URL)


@pytest.fixture
def app(repository, service, config, logger):
    """Create test FastAPI app."""
    return create_app(
        repository_instance=repository,
        service_instance=service,
        config=config,
        logger=logger,
    )


@pytest.fixture
async def client(app):
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
