"""Cache-first gateway in front of the registry HTTP transport."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from companies_house.cache_store import ResultCache
from companies_house.request import ApiRequest

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600


class Transport(Protocol):
    def send(self, request: ApiRequest) -> Any: ...


def is_empty(value: Any) -> bool:
    """Return True for values never served from or written to the cache."""
    if value is None:
        return True
    if isinstance(value, str | bytes | list | dict):
        return len(value) == 0
    return False


class CachingGateway:
    """Read-through cache around a transport.

    Successful non-empty results are stored under the caller's key. Errors and
    empty results are never stored, and an empty cached value reads as a miss.
    """

    def __init__(
        self,
        *,
        transport: Transport,
        cache: ResultCache,
        default_ttl: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        self.transport = transport
        self.cache = cache
        self.default_ttl = default_ttl

    def fetch(self, key: str | None, request: ApiRequest, ttl: int | None = None) -> Any:
        cache_key = key or request.key()
        cached = self.cache.get(cache_key)
        if not is_empty(cached):
            logger.debug("cache hit %s", cache_key)
            return cached

        logger.debug("cache miss %s; %s %s", cache_key, request.method, request.url)
        result = self.transport.send(request)
        if not is_empty(result):
            self.cache.set(cache_key, result, self.default_ttl if ttl is None else ttl)
        return result
