"""Keep encoded identicon bytes in memory, keyed by ETag.

The cache itself doesn't decide what to forget. That is left to an eviction policy,
so an unbounded cache and a bounded LRU cache share one implementation.

:created: 2026-10-19
"""

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Protocol

logger = logging.getLogger(__name__)


class IdenticonCache(Protocol):
    """What get_identicon_bytes needs from a cache."""

    def get(self, key: str) -> bytes | None:
        """Return the bytes stored under key or None."""
        ...

    def put(self, key: str, value: bytes) -> None:
        """Store value under key."""
        ...

    def remove(self, key: str) -> None:
        """Forget key if present."""
        ...

    def clear(self) -> None:
        """Forget everything."""
        ...

    def get_or_add(self, key: str, factory: Callable[[], bytes]) -> bytes:
        """Return the bytes under key, calling factory at most once on a miss."""
        ...


class EvictionPolicy(Protocol):
    """Track key use and decide which keys to drop."""

    def touch(self, key: str) -> None:
        """Record a read of a stored key."""
        ...

    def admit(self, key: str) -> list[str]:
        """Record a write and return the keys to evict to make room."""
        ...

    def discard(self, key: str) -> None:
        """Stop tracking key."""
        ...

    def clear(self) -> None:
        """Stop tracking all keys."""
        ...


class UnboundedPolicy:
    """Never evict anything."""

    def touch(self, key: str) -> None:
        del key

    def admit(self, key: str) -> list[str]:
        del key
        return []

    def discard(self, key: str) -> None:
        del key

    def clear(self) -> None:
        return


class LRUPolicy:
    """Evict the least recently used key past a fixed capacity.

    :param capacity: the most keys to keep. Must be positive.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            msg = f"LRU capacity must be positive, got {capacity}"
            raise ValueError(msg)
        self.capacity = capacity
        self._order: OrderedDict[str, None] = OrderedDict()

    def touch(self, key: str) -> None:
        if key in self._order:
            self._order.move_to_end(key)

    def admit(self, key: str) -> list[str]:
        self._order[key] = None
        self._order.move_to_end(key)
        evicted: list[str] = []
        while len(self._order) > self.capacity:
            old_key, _ = self._order.popitem(last=False)
            evicted.append(old_key)
        return evicted

    def discard(self, key: str) -> None:
        _ = self._order.pop(key, None)

    def clear(self) -> None:
        self._order.clear()


class MemoryIdenticonCache:
    """A thread-safe dict of ETag -> image bytes.

    :param policy: an EvictionPolicy. Defaults to UnboundedPolicy.

    The policy is only ever called under the cache lock, so policies don't need
    locks of their own.
    """

    def __init__(self, policy: EvictionPolicy | None = None) -> None:
        self._policy = policy or UnboundedPolicy()
        self._data: dict[str, bytes] = {}
        self._lock = threading.Lock()
        # key -> (lock, number of callers holding or waiting on it)
        self._key_locks: dict[str, tuple[threading.Lock, int]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def get(self, key: str) -> bytes | None:
        """Return the bytes stored under key or None."""
        with self._lock:
            value = self._data.get(key)
            if value is not None:
                self._policy.touch(key)
            return value

    def put(self, key: str, value: bytes) -> None:
        """Store value under key, evicting whatever the policy says to."""
        with self._lock:
            self._data[key] = value
            for old_key in self._policy.admit(key):
                _ = self._data.pop(old_key, None)
                logger.debug("Evicted identicon %s", old_key)

    def remove(self, key: str) -> None:
        """Forget key if present."""
        with self._lock:
            _ = self._data.pop(key, None)
            self._policy.discard(key)

    def clear(self) -> None:
        """Forget everything."""
        with self._lock:
            self._data.clear()
            self._policy.clear()

    @contextmanager
    def _locked_key(self, key: str) -> Iterator[None]:
        """Hold a lock for one key while leaving other keys free."""
        with self._lock:
            key_lock, users = self._key_locks.get(key, (threading.Lock(), 0))
            self._key_locks[key] = (key_lock, users + 1)
        try:
            with key_lock:
                yield
        finally:
            with self._lock:
                key_lock, users = self._key_locks[key]
                if users == 1:
                    del self._key_locks[key]
                else:
                    self._key_locks[key] = (key_lock, users - 1)

    def get_or_add(self, key: str, factory: Callable[[], bytes]) -> bytes:
        """Return the bytes under key, computing and storing them on a miss.

        :param key: the cache key
        :param factory: called with no arguments to produce the bytes
        :return: the cached or newly computed bytes

        Concurrent misses on the same key wait for the first caller, so factory
        runs at most once per key while the entry stays cached.
        """
        value = self.get(key)
        if value is not None:
            return value
        with self._locked_key(key):
            value = self.get(key)
            if value is None:
                logger.debug("Computing identicon %s", key)
                value = factory()
                self.put(key, value)
        return value
