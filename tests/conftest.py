"""Pytest configuration and fixtures."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List

import httpx
import pytest

from config import Config
from shortlinks.database.base import LinkStoreBase
from shortlinks.database.memory import MemoryLinkStore
from shortlinks.errors import InternalError
from shortlinks.redirect import RedirectResolver
from shortlinks.service import LinkService
from shortlinks.shortcode import ShortCodeGenerator
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


class RecordingStore(LinkStoreBase):
    """Wraps a MemoryLinkStore and records every call that reaches it."""

    def __init__(self, inner: MemoryLinkStore = None):
        super().__init__("memory://")
        self.inner = inner or MemoryLinkStore()
        self.calls: List[str] = []

    async def insert(self, code, url):
        self.calls.append("insert")
        return await self.inner.insert(code, url)

    async def get(self, code):
        self.calls.append("get")
        return await self.inner.get(code)

    async def list(self):
        self.calls.append("list")
        return await self.inner.list()

    async def delete(self, code):
        self.calls.append("delete")
        return await self.inner.delete(code)

    @asynccontextmanager
    async def lock_row(self, code):
        self.calls.append("lock_row")
        async with self.inner.lock_row(code) as row:
            yield row

    async def health_check(self):
        self.calls.append("health_check")
        return await self.inner.health_check()

    async def close(self):
        await self.inner.close()


class FailingIncrementStore(MemoryLinkStore):
    """Raises after staging the increment, as a dropped connection would."""

    def __init__(self):
        super().__init__()
        self.fail = True

    @asynccontextmanager
    async def lock_row(self, code):
        async with super().lock_row(code) as row:
            if row is not None and self.fail:
                stage = row.increment

                async def increment(at):
                    await stage(at)
                    raise ConnectionResetError("connection lost mid-transaction")

                row.increment = increment
            yield row


class SlowIncrementStore(MemoryLinkStore):
    """Holds the row lock for ``delay`` seconds before incrementing."""

    def __init__(self, delay: float):
        super().__init__()
        self.delay = delay

    @asynccontextmanager
    async def lock_row(self, code):
        async with super().lock_row(code) as row:
            if row is not None and self.delay:
                await asyncio.sleep(self.delay)
            yield row


class BrokenStore(MemoryLinkStore):
    """Every operation reports a storage failure."""

    async def insert(self, code, url):
        return InternalError()

    async def get(self, code):
        return InternalError()

    async def list(self):
        return InternalError()

    async def delete(self, code):
        return InternalError()

    @asynccontextmanager
    async def lock_row(self, code):
        raise ConnectionRefusedError("database is down")
        yield

    async def health_check(self):
        return False


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def store(logger) -> MemoryLinkStore:
    """Create in-process link store."""
    return MemoryLinkStore(logger=logger)


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def service(store, short_code_generator, logger) -> LinkService:
    """Create service instance."""
    return LinkService(
        store=store,
        short_code_generator=short_code_generator,
        logger=logger,
    )


@pytest.fixture
def resolver(store, logger) -> RedirectResolver:
    """Create redirect resolver."""
    return RedirectResolver(store=store, timeout_seconds=5.0, logger=logger)


@pytest.fixture
def config() -> Config:
    """Configuration for the test app."""
    return Config(
        database_url="memory://",
        base_url="http://sho.rt",
    )


def build_app(config, store, logger):
    """Wire a test app around ``store`` the same way app.py does."""
    return create_app(
        config=config,
        store=store,
        service=LinkService(store=store, logger=logger),
        resolver=RedirectResolver(store=store, timeout_seconds=5.0, logger=logger),
        logger=logger,
    )


@pytest.fixture
def app(config, store, logger):
    """Create test FastAPI app."""
    return build_app(config, store, logger)


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create test client."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
