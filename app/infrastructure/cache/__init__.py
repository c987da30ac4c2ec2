"""Cache: Redis service and cache key utilities.

Used by the account show route (read-through) and the cache invalidation
subscriber. Key format lives in keys.py.
"""

from app.infrastructure.cache.keys import account_key
from app.infrastructure.cache.redis_cache import CacheService

__all__ = ["CacheService", "account_key"]
