"""Data models persisted in (or exchanged with) the key-value store.

Classes:
    ShortURLModel:
        A short identifier -> destination URL mapping with ownership and
        expiration metadata. Stored as JSON under the `urls` namespace.

    UserModel:
        An API-key holder. Stored as JSON under the `users` namespace,
        keyed by its own API key.

Both models are frozen and (de)serialize themselves:

    >>> record = ShortURLModel(raw_url='https://example.com', username='', insert_time=1000, expire_time=0)
    >>> ShortURLModel.from_json(record.to_json()) == record
    True
"""

import json
from dataclasses import dataclass, asdict
from typing import Any, Self

from kvshortener.exceptions import DeserializationError


def _load_object(payload: str | bytes, fields: dict[str, type]) -> dict[str, Any]:
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise DeserializationError(str(e)) from e

    if not isinstance(data, dict):
        raise DeserializationError(f'expected a JSON object, got {type(data).__name__}')

    for name, kind in fields.items():
        if name not in data:
            raise DeserializationError(f'missing field `{name}`')
        value = data[name]
        # bool is an int subclass, but never a valid timestamp
        if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
            raise DeserializationError(f'invalid type for field `{name}`: expected {kind.__name__}')

    return {name: data[name] for name in fields}


# fmt: off
@dataclass(frozen=True)
class ShortURLModel:
    raw_url: str            # Destination URL
    username: str           # Owner's username, '' for guest-created links
    insert_time: int        # Creation time in epoch milliseconds
    expire_time: int = 0    # Expiration time in epoch milliseconds, 0 never expires

    def __post_init__(self):
        if self.expire_time != 0 and self.expire_time <= self.insert_time:
            raise ValueError(f'expire_time ({self.expire_time}) must be 0 or later than insert_time ({self.insert_time}).')

    @property
    def expires(self) -> bool:
        return self.expire_time != 0

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, payload: str | bytes) -> Self:
        data = _load_object(payload, {'raw_url': str, 'username': str, 'insert_time': int, 'expire_time': int})
        try:
            return cls(**data)
        except ValueError as e:
            raise DeserializationError(str(e)) from e
# fmt: on


@dataclass(frozen=True)
class UserModel:
    username: str
    api_key: str

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, payload: str | bytes) -> Self:
        return cls(**_load_object(payload, {'username': str, 'api_key': str}))
