"""
Per-endpoint response cache with a fixed time-to-live.

Entries live in an aiocache backend. The default `SimpleMemoryCache` is
process-local; pass a shared backend (e.g. aiocache's Redis cache) to share
entries between server instances.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from aiocache import SimpleMemoryCache
from aiocache.base import BaseCache

from cinesage.logger import logger


@dataclass(frozen=True)
class CacheEntry:
    key: str
    data: Any
    timestamp: float


class ResponseCache:
    def __init__(
        self,
        ttl: int,
        backend: Optional[BaseCache] = None,
        clock: Callable[[], float] = time.time,
        name: str = "cache",
    ):
        self.ttl = ttl
        self.name = name
        self._backend = backend if backend is not None else SimpleMemoryCache(namespace=name)
        self._clock = clock
        self._timestamps: dict[str, float] = {}
        self._lock = asyncio.Lock()

    def _is_fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.timestamp <= self.ttl

    async def get(self, key: str) -> Optional[CacheEntry]:
        async with self._lock:
            entry = await self._backend.get(key)
            if entry is None:
                return None
            if not self._is_fresh(entry, self._clock()):
                return None
            logger.debug(f"{self.name} hit for {key}")
            return entry

    async def put(self, key: str, data: Any) -> CacheEntry:
        async with self._lock:
            entry = CacheEntry(key=key, data=data, timestamp=self._clock())
            # the backend ttl is a safety net, freshness is checked against the clock
            await self._backend.set(key, entry, ttl=self.ttl)
            self._timestamps[key] = entry.timestamp
            await self._sweep()
            return entry

    async def _sweep(self) -> None:
        now = self._clock()
        expired = [key for key, ts in self._timestamps.items() if now - ts > self.ttl]
        for key in expired:
            await self._backend.delete(key)
            del self._timestamps[key]
        if expired:
            logger.debug(f"{self.name} swept {len(expired)} expired entries")

    async def clear(self) -> None:
        async with self._lock:
            await self._backend.clear()
            self._timestamps.clear()

    def __len__(self):
        return len(self._timestamps)
