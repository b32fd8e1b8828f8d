from __future__ import annotations

import hashlib
import threading
import time
from collections import OrderedDict
from typing import Callable, Protocol


def prompt_cache_key(prompt: str, model: str) -> str:
    return hashlib.sha256(f"{prompt}|{model}".encode("utf-8")).hexdigest()


class ResponseCache(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, ttl_s: float | None = None) -> None: ...

    def delete(self, key: str) -> None: ...

    def purge_expired(self) -> int: ...


class InMemoryResponseCache:
    """Bounded LRU cache whose entries also expire after a TTL.

    Expired entries are dropped on read and by ``purge_expired``; when the
    cache is full the least recently used entry is evicted.
    """

    def __init__(
        self,
        *,
        max_entries: int = 1024,
        default_ttl_s: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if default_ttl_s <= 0:
            raise ValueError("default_ttl_s must be positive")
        self._max_entries = max_entries
        self._default_ttl_s = default_ttl_s
        self._clock = clock
        self._entries: OrderedDict[str, tuple[str, float]] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> str | None:
        now = self._clock()
        with self._lock:
            item = self._entries.get(key)
            if item is None:
                return None
            value, expires_at = item
            if expires_at <= now:
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return value

    def set(self, key: str, value: str, ttl_s: float | None = None) -> None:
        ttl = self._default_ttl_s if ttl_s is None else ttl_s
        if ttl <= 0:
            self.delete(key)
            return
        expires_at = self._clock() + ttl
        with self._lock:
            self._entries[key] = (value, expires_at)
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
            for key in expired:
                del self._entries[key]
        return len(expired)
