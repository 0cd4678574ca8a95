"""In-memory implementation of KeyValueBaseDAO.

Used by the `memory` backend (local development, demos) and as the test double
for every workflow component. Values live in a plain dict keyed by
(namespace, key); expired entries are evicted lazily when touched.

Coroutines never await between reading and writing the dict, so each method
is atomic with respect to other tasks on the same event loop.
"""

import time

from kvshortener.dao.base import KeyValueBaseDAO, Namespace


class KeyValueMemoryDAO(KeyValueBaseDAO):
    """Dict-backed DAO with Redis-like EXAT expiry semantics

    Example:
        >>> dao = KeyValueMemoryDAO({(Namespace.USERS, 'key-1'): '{"username": "alice", "api_key": "key-1"}'})
        >>> await dao.exists(Namespace.USERS, 'key-1')
        True
    """

    def __init__(self, initial: dict[tuple[Namespace, str], str] | None = None):
        self._data: dict[tuple[Namespace, str], tuple[str, int | None]] = {}
        for (namespace, key), value in (initial or {}).items():
            self._data[(Namespace(namespace), key)] = (value, None)

    def _live(self, namespace: Namespace, key: str) -> tuple[str, int | None] | None:
        entry = self._data.get((namespace, key))
        if entry is None:
            return None
        _, expire_at = entry
        if expire_at is not None and time.time() >= expire_at:
            del self._data[(namespace, key)]
            return None
        return entry

    def expire_at(self, namespace: Namespace, key: str) -> int | None:
        """Return the absolute expiry (seconds) of a live key, None if it never expires."""
        entry = self._live(namespace, key)
        return None if entry is None else entry[1]

    async def get(self, namespace: Namespace, key: str) -> str | None:
        entry = self._live(namespace, key)
        return None if entry is None else entry[0]

    async def exists(self, namespace: Namespace, key: str) -> bool:
        return self._live(namespace, key) is not None

    async def put(self, namespace: Namespace, key: str, value: str, expire_at: int | None = None) -> None:
        self._data[(namespace, key)] = (value, expire_at)

    async def put_if_absent(self, namespace: Namespace, key: str, value: str, expire_at: int | None = None) -> bool:
        if self._live(namespace, key) is not None:
            return False
        self._data[(namespace, key)] = (value, expire_at)
        return True

    async def delete(self, namespace: Namespace, key: str) -> None:
        self._data.pop((namespace, key), None)
