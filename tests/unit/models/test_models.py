"""Unit tests for ShortURLModel and UserModel in models.py.

Test coverage includes:

1. Model creation and the expiration invariant
2. JSON layout (exactly four snake_case keys)
3. Decoding errors (invalid JSON, missing keys, wrong types)
4. Immutability
"""

import json
from dataclasses import FrozenInstanceError

import pytest

from kvshortener.exceptions import DeserializationError
from kvshortener.models import ShortURLModel, UserModel


# -------------------------------------------------
# 1. Model creation and the expiration invariant
# -------------------------------------------------

def test_short_url_model_never_expires_by_default():
    record = ShortURLModel(raw_url='https://example.com', username='', insert_time=1_000)
    assert record.expire_time == 0
    assert record.expires is False


def test_short_url_model_with_expiration():
    record = ShortURLModel(raw_url='https://example.com', username='alice', insert_time=1_000, expire_time=121_000)
    assert record.expires is True


@pytest.mark.parametrize('expire_time', [1_000, 999, -5])
def test_short_url_model_rejects_expiration_before_insertion(expire_time):
    with pytest.raises(ValueError, match='must be 0 or later than insert_time'):
        ShortURLModel(raw_url='https://example.com', username='', insert_time=1_000, expire_time=expire_time)


# -------------------------------------------------
# 2. JSON layout
# -------------------------------------------------

def test_short_url_model_json_layout():
    record = ShortURLModel(raw_url='https://example.com/page', username='alice', insert_time=1_000, expire_time=121_000)
    assert json.loads(record.to_json()) == {
        'raw_url': 'https://example.com/page',
        'username': 'alice',
        'insert_time': 1_000,
        'expire_time': 121_000,
    }


def test_short_url_model_from_json():
    payload = '{"raw_url": "https://example.com", "username": "", "insert_time": 5, "expire_time": 0}'
    assert ShortURLModel.from_json(payload) == ShortURLModel(raw_url='https://example.com', username='', insert_time=5)


def test_short_url_model_from_json_ignores_unknown_keys():
    payload = '{"raw_url": "https://example.com", "username": "", "insert_time": 5, "expire_time": 0, "hits": 3}'
    assert ShortURLModel.from_json(payload).raw_url == 'https://example.com'


def test_user_model_json_layout():
    user = UserModel(username='alice', api_key='key-alice')
    assert json.loads(user.to_json()) == {'username': 'alice', 'api_key': 'key-alice'}
    assert UserModel.from_json(user.to_json()) == user


# -------------------------------------------------
# 3. Decoding errors
# -------------------------------------------------

@pytest.mark.parametrize(
    'payload',
    [
        '',
        'not json',
        '[]',
        '"https://example.com"',
        '{"raw_url": "https://example.com", "username": "", "insert_time": 5}',
        '{"raw_url": 1, "username": "", "insert_time": 5, "expire_time": 0}',
        '{"raw_url": "https://example.com", "username": null, "insert_time": 5, "expire_time": 0}',
        '{"raw_url": "https://example.com", "username": "", "insert_time": "5", "expire_time": 0}',
        '{"raw_url": "https://example.com", "username": "", "insert_time": true, "expire_time": 0}',
        '{"raw_url": "https://example.com", "username": "", "insert_time": 5.5, "expire_time": 0}',
        '{"raw_url": "https://example.com", "username": "", "insert_time": 5, "expire_time": 3}',
    ],
)
def test_short_url_model_from_malformed_json(payload):
    with pytest.raises(DeserializationError) as exc_info:
        ShortURLModel.from_json(payload)
    assert exc_info.value.status == 400
    assert exc_info.value.error_code == 100


@pytest.mark.parametrize('payload', ['{}', '{"username": "alice"}', '{"username": "alice", "api_key": 42}'])
def test_user_model_from_malformed_json(payload):
    with pytest.raises(DeserializationError):
        UserModel.from_json(payload)


# -------------------------------------------------
# 4. Immutability
# -------------------------------------------------

def test_short_url_model_is_frozen():
    record = ShortURLModel(raw_url='https://example.com', username='', insert_time=1_000)
    with pytest.raises(FrozenInstanceError):
        record.raw_url = 'https://evil.example.com'
