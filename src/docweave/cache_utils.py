"""In-process caches and hashing helpers."""

from __future__ import annotations

import asyncio
import hashlib
import time
from collections import OrderedDict
from pathlib import Path
from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def normalize_source(text: str) -> str:
    """Normalize text the same way markdown-it does before block parsing."""
    return text.replace("\r\n", "\n").replace("\r", "\n").replace("\0", "\ufffd")


def content_key(text: str) -> str:
    """Return the SHA-1 hex digest identifying a document's full text.

    The text is newline-normalized and stripped first so the key computed by
    a caller matches the one computed from the parser's own source buffer.
    """
    normalized = normalize_source(text).strip()
    return hashlib.sha1(normalized.encode("utf-8")).hexdigest()


class TTLCache(Generic[K, V]):
    """Size-bounded LRU cache whose entries expire after a time-to-live.

    Args:
        ttl_seconds: Lifetime of each entry. If <= 0, entries never expire.
        max_size: Maximum number of entries; the least recently used entry is
            evicted when a new key would exceed it.
        clock: Monotonic time source, replaceable in tests.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float,
        max_size: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._entries: OrderedDict[K, tuple[V, float]] = OrderedDict()

    def get(self, key: K) -> V | None:
        """Return the cached value, or None when missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            return None
        self._entries.move_to_end(key)
        return value

    def put(self, key: K, value: V) -> None:
        """Store a value, evicting the least recently used entry if full."""
        if self.ttl_seconds > 0:
            expires_at = self._clock() + self.ttl_seconds
        else:
            expires_at = float("inf")
        if key in self._entries:
            self._entries.move_to_end(key)
        self._entries[key] = (value, expires_at)
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def evict(self, key: K) -> bool:
        """Remove a key. Returns True if it was present."""
        return self._entries.pop(key, None) is not None

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)
