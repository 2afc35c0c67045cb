"""Bounded in-memory store with LRU eviction and optional expiry."""

import threading
import time
from collections import OrderedDict
from collections.abc import Hashable
from typing import Any


class BoundedStore:
    """Thread-safe mapping that never holds more than ``max_size`` entries.

    Writing past capacity evicts the least recently used entry. With a
    ``ttl`` (seconds), entries older than that read as missing and are
    dropped on access. Reads and writes may come from the event loop and
    from worker threads at the same time.

    Usage::

        store = BoundedStore(max_size=1000, ttl=3600)
        store.set(42, record)
        hit = store.get(42)  # value, or None if evicted/expired/missing
    """

    def __init__(self, max_size: int = 1000, ttl: float | None = None) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._max_size = max_size
        self._ttl = ttl
        self._lock = threading.Lock()
        self._store: OrderedDict[Hashable, tuple[Any, float]] = OrderedDict()

    def _expired(self, ts: float) -> bool:
        return self._ttl is not None and time.monotonic() - ts > self._ttl

    def _purge_expired(self) -> None:
        stale = [key for key, (_, ts) in self._store.items() if self._expired(ts)]
        for key in stale:
            del self._store[key]

    def get(self, key: Hashable) -> Any | None:
        """Return the value for *key*, refreshing its LRU position."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, ts = entry
            if self._expired(ts):
                del self._store[key]
                return None
            self._store.move_to_end(key)
            return value

    def set(self, key: Hashable, value: Any) -> None:
        """Store *value*, evicting the oldest entries if over capacity."""
        with self._lock:
            if key in self._store:
                self._store.move_to_end(key)
            self._store[key] = (value, time.monotonic())
            while len(self._store) > self._max_size:
                self._store.popitem(last=False)

    def setdefault(self, key: Hashable, value: Any) -> Any:
        """Store *value* only if *key* has no live entry; return the stored value."""
        with self._lock:
            entry = self._store.get(key)
            if entry is not None and not self._expired(entry[1]):
                return entry[0]
            self._store[key] = (value, time.monotonic())
            self._store.move_to_end(key)
            while len(self._store) > self._max_size:
                self._store.popitem(last=False)
            return value

    def items(self) -> list[tuple[Hashable, Any]]:
        """Snapshot of live entries, oldest first."""
        with self._lock:
            self._purge_expired()
            return [(key, value) for key, (value, _) in self._store.items()]

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._store)
