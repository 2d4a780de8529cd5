"""
Process-local building blocks: caching and token storage.
"""

from efihub.core.cache import CacheBackend, MemoryCache
from efihub.core.token_cache import TokenCache

__all__ = ["CacheBackend", "MemoryCache", "TokenCache"]
