from vendor_gateway.infrastructure.cache.ttl_cache import (
    DEFAULT_TTL_MS,
    CacheEntry,
    TTLCache,
)

__all__ = ["TTLCache", "CacheEntry", "DEFAULT_TTL_MS"]
