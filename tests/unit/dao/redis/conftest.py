from unittest.mock import AsyncMock, MagicMock

import pytest
import redis
import redis.asyncio


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.asyncio.Redis:
    """Mock an asyncio Redis client."""
    client = MagicMock(spec=redis.asyncio.Redis)
    client.connection_pool = MagicMock(
        spec=redis.asyncio.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.get = AsyncMock(return_value=None)
    client.exists = AsyncMock(return_value=0)
    client.set = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    client.aclose = AsyncMock(return_value=None)
    return client
