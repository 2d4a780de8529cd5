"""Bearer token caching on top of a CacheBackend."""

from collections.abc import Callable

import structlog

from efihub.core.cache import CacheBackend

logger = structlog.get_logger(__name__)


class TokenCache:
    """
    Holds the API access token under one well-known cache key.

    Concurrent callers racing after a miss may each fetch a token; the
    last write wins and no lock is taken.
    """

    def __init__(self, cache: CacheBackend, *, key: str, ttl: float) -> None:
        """
        Args:
            cache: Backend storing the token.
            key: Cache key for the token.
            ttl: Seconds a fetched token is reused.
        """
        self._cache = cache
        self._key = key
        self._ttl = ttl

    @property
    def key(self) -> str:
        return self._key

    def get_token(self, fetcher: Callable[[], str]) -> str:
        """
        Return the cached token, fetching and caching a fresh one on a miss.

        Args:
            fetcher: Called with no arguments to obtain a new token.

        Returns:
            Non-empty bearer token.
        """
        token = self._cache.get(self._key)
        if isinstance(token, str) and token:
            logger.debug("Access token cache hit")
            return token

        logger.debug("Access token cache miss, fetching")
        token = fetcher()
        self._cache.set(self._key, token, self._ttl)
        return token

    def invalidate(self) -> None:
        """Drop the cached token so the next call fetches a new one."""
        self._cache.delete(self._key)
