"""Abstract base class for key-value data access objects (DAOs).

The shortener keeps three independent key families (static assets, short URL
records and API-key users). Instead of one DAO per family, a single async
capability interface is parameterized by `Namespace`, so any backend (or a
test double) serves all three with one mapping.

Responsibilities:
    - Get, put (with optional absolute expiry) and delete string values.
    - Provide an atomic create-if-absent write for short URL allocation.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from kvshortener.dao.base import Namespace
        >>> from kvshortener.dao.memory import KeyValueMemoryDAO

        >>> dao = KeyValueMemoryDAO()
        >>> await dao.put(Namespace.URLS, 'a1b2c3', '{"raw_url": "..."}', expire_at=1767225600)
        >>> await dao.get(Namespace.URLS, 'a1b2c3')
        '{"raw_url": "..."}'
        >>> await dao.put_if_absent(Namespace.URLS, 'a1b2c3', '{}')
        False

NOTE:
    - `expire_at` is always an absolute Unix timestamp in **seconds**.
      Records carry millisecond timestamps; the conversion is the caller's job.
"""

from abc import ABC, abstractmethod
from enum import StrEnum


class Namespace(StrEnum):
    """Key families held by the data store."""

    ASSETS = 'assets'
    URLS = 'urls'
    USERS = 'users'


class KeyValueBaseDAO(ABC):
    """Interface for namespaced key-value data access objects (DAOs).

    Methods:
        get(namespace, key) -> str | None:
            Return the value stored under key, None if absent (or expired).

        exists(namespace, key) -> bool:
            Return True if a value is stored under key.

        put(namespace, key, value, expire_at=None) -> None:
            Store value under key, overwriting any previous value.

        put_if_absent(namespace, key, value, expire_at=None) -> bool:
            Store value only if key is free. Return False if it was taken.

        delete(namespace, key) -> None:
            Remove key. Removing a missing key is not an error.

    All methods raise DataStoreError on connection or read/write failure.

    Subclassing:
        Datastore-specific implementations (e.g., KeyValueRedisDAO) must
        extend this class and implement all abstract methods.
    """

    @abstractmethod
    async def get(self, namespace: Namespace, key: str) -> str | None:
        pass

    @abstractmethod
    async def exists(self, namespace: Namespace, key: str) -> bool:
        pass

    @abstractmethod
    async def put(self, namespace: Namespace, key: str, value: str, expire_at: int | None = None) -> None:
        """Store a value, overwriting whatever was there.

        Args:
            namespace (Namespace):
                Key family the key belongs to.

            key (str):
                Key within the namespace.

            value (str):
                Value to store (JSON documents or raw asset content).

            expire_at (int | None):
                Absolute Unix timestamp (seconds) at which the store evicts the key.
                None keeps the key until deleted.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    async def put_if_absent(self, namespace: Namespace, key: str, value: str, expire_at: int | None = None) -> bool:
        """Atomically store a value only if the key does not exist yet.

        Returns:
            bool: True if the value was written, False if the key was already taken.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    async def delete(self, namespace: Namespace, key: str) -> None:
        pass

    async def aclose(self) -> None:
        """Release connections held by the DAO (no-op unless overridden)."""
        return None
