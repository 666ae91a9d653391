"""
Time-to-live result cache used by vendor adapters.

Expiry is checked lazily on read: there is no background sweep, and a stale
entry stays in place until the next ``set`` for the same key overwrites it.
Clock and TTL are injected so expiry can be simulated deterministically.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Generic, TypeVar

from vendor_gateway.infrastructure.impls.system import SystemClock
from vendor_gateway.infrastructure.observability import get_infrastructure_logger
from vendor_gateway.infrastructure.ports.system import IClock

V = TypeVar("V")

DEFAULT_TTL_MS = 30_000

log = get_infrastructure_logger("ttl-cache")


@dataclass
class CacheEntry(Generic[V]):
    """Single cached value with its insertion time."""

    key: str
    value: V
    stored_at: datetime


class TTLCache(Generic[V]):
    """Key/value store whose entries are valid for a fixed window after insertion."""

    def __init__(self, ttl_ms: float = DEFAULT_TTL_MS, clock: IClock | None = None):
        """
        Args:
            ttl_ms: Entry lifetime in milliseconds
            clock: Time source (defaults to the system clock)
        """
        if ttl_ms <= 0:
            raise ValueError(f"ttl_ms must be positive, got {ttl_ms}")
        self._ttl = timedelta(milliseconds=ttl_ms)
        self._clock = clock or SystemClock()
        self._entries: dict[str, CacheEntry[V]] = {}

    @property
    def ttl_ms(self) -> float:
        return self._ttl / timedelta(milliseconds=1)

    def get(self, key: str) -> V | None:
        """Return the cached value if its age is strictly below the TTL."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        age = self._clock.utcnow() - entry.stored_at
        if age < self._ttl:
            return entry.value

        log.debug("cache_entry_stale", key=key, age_ms=age / timedelta(milliseconds=1))
        return None

    def set(self, key: str, value: V) -> None:
        """Store ``value`` under ``key``, resetting its insertion time."""
        self._entries[key] = CacheEntry(
            key=key, value=value, stored_at=self._clock.utcnow()
        )

    def size(self) -> int:
        """Number of stored entries, stale ones included (diagnostics only)."""
        return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None
