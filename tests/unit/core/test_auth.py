"""Unit tests for AuthResolver in auth.py."""

from unittest.mock import AsyncMock

import pytest

from kvshortener.core.auth import AuthResolver
from kvshortener.dao.base import KeyValueBaseDAO, Namespace
from kvshortener.dao.exceptions import DataStoreError
from kvshortener.dao.memory import KeyValueMemoryDAO
from kvshortener.exceptions import DeserializationError
from kvshortener.models import UserModel


@pytest.mark.asyncio
@pytest.mark.parametrize('header_value', [None, ''])
async def test_no_header_is_guest(header_value):
    dao = AsyncMock(spec=KeyValueBaseDAO)

    assert await AuthResolver(dao).resolve(header_value) is None
    dao.get.assert_not_awaited()


@pytest.mark.asyncio
async def test_known_api_key(memory_dao: KeyValueMemoryDAO, user: UserModel):
    assert await AuthResolver(memory_dao).resolve('key-alice') == user


@pytest.mark.asyncio
async def test_unknown_api_key_downgrades_to_guest(memory_dao: KeyValueMemoryDAO, caplog):
    with caplog.at_level('INFO', logger='kvshortener.core.auth'):
        assert await AuthResolver(memory_dao).resolve('key-nobody') is None

    assert any(getattr(record, 'event', None) == 'AUTH_UNKNOWN_KEY' for record in caplog.records)


@pytest.mark.asyncio
async def test_malformed_user_record():
    dao = KeyValueMemoryDAO({(Namespace.USERS, 'key-bob'): '{"username": "bob"}'})

    with pytest.raises(DeserializationError) as exc_info:
        await AuthResolver(dao).resolve('key-bob')
    assert exc_info.value.error_code == 100


@pytest.mark.asyncio
async def test_store_errors_propagate():
    dao = AsyncMock(spec=KeyValueBaseDAO)
    dao.get.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")

    with pytest.raises(DataStoreError):
        await AuthResolver(dao).resolve('key-alice')
    dao.get.assert_awaited_once_with(Namespace.USERS, 'key-alice')
