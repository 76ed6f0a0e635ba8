# shared/common/cache.py
"""
Caching Utilities

Thin wrapper over the Django cache (django-redis in deployed environments)
that never lets a cache outage fail a request.
"""

import logging
from typing import Any, Optional
from django.core.cache import cache

logger = logging.getLogger(__name__)


class SafeCache:
    """
    Cache client whose operations log and swallow backend errors.

    A failed read is treated as a miss and a failed write as a no-op, so
    callers always fall back to recomputing from the database.
    """

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        try:
            return cache.get(key)
        except Exception as e:
            logger.error(f"Cache get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, timeout: int = None) -> bool:
        """Set value in cache with optional expiration"""
        try:
            cache.set(key, value, timeout=timeout)
            return True
        except Exception as e:
            logger.error(f"Cache set error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete key from cache"""
        try:
            return bool(cache.delete(key))
        except Exception as e:
            logger.error(f"Cache delete error for {key}: {e}")
            return False


safe_cache = SafeCache()


class CacheKeyBuilder:
    """
    Helper class for building consistent cache keys.
    """

    def __init__(self, namespace: str):
        self.namespace = namespace

    def build(self, *parts: Any) -> str:
        """Build cache key from parts"""
        return f"{self.namespace}:{':'.join(str(p) for p in parts)}"
