from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
import redis

from localshortener.dao import MemoryKeyValueStore, UrlEntryDAO
from localshortener.models import UrlEntryModel
from localshortener.service import UrlShortenerService


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def created_at() -> datetime:
    return datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_entry(created_at):
    """Build UrlEntryModel instances with sensible defaults."""

    def _make_entry(**overrides) -> UrlEntryModel:
        short_code = overrides.pop('short_code', 'abc123')
        fields = {
            'id': f'id-{short_code}',
            'long_url': 'https://example.com/page',
            'short_code': short_code,
            'short_url': f'http://localhost:3000/{short_code}',
            'created_at': created_at,
            'expires_at': created_at + timedelta(minutes=30),
        }
        fields.update(overrides)
        return UrlEntryModel(**fields)

    return _make_entry


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def dao(memory_store, app_prefix) -> UrlEntryDAO:
    return UrlEntryDAO(memory_store, prefix=app_prefix)


@pytest.fixture
def service(dao) -> UrlShortenerService:
    return UrlShortenerService(dao)


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis client."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.get.return_value = None
    client.delete.return_value = 0
    return client
