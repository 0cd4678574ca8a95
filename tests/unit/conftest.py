import random

import pytest

from kvshortener.dao.base import Namespace
from kvshortener.dao.memory import KeyValueMemoryDAO
from kvshortener.models import UserModel
from kvshortener.settings import ShortenerSettings


@pytest.fixture
def settings() -> ShortenerSettings:
    return ShortenerSettings()


@pytest.fixture
def user() -> UserModel:
    return UserModel(username='alice', api_key='key-alice')


@pytest.fixture
def memory_dao(user: UserModel) -> KeyValueMemoryDAO:
    """Memory store holding one user and a couple of static assets."""
    return KeyValueMemoryDAO(
        {
            (Namespace.USERS, user.api_key): user.to_json(),
            (Namespace.ASSETS, '/index.html'): '<html>home</html>',
            (Namespace.ASSETS, '/css/main.css'): 'body { margin: 0; }',
        }
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
