"""In-process implementation of the RunRegistry interface."""

import asyncio
import time
from typing import Callable

from recording_ingest.infrastructure.interfaces import RunRegistry


class InMemoryRunRegistry(RunRegistry):
    """
    Remembers claimed recordings until their claim expires.

    Expired claims are purged on every `claim`, so the registry holds at most
    the recordings claimed within the last `ttl_seconds`.
    """

    def __init__(
        self,
        ttl_seconds: float = 86400,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._expiries: dict[str, float] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._expiries)

    async def claim(self, filename: str) -> bool:
        async with self._lock:
            now = self._clock()
            self._purge(now)
            if filename in self._expiries:
                return False
            self._expiries[filename] = now + self._ttl_seconds
            return True

    async def release(self, filename: str) -> None:
        async with self._lock:
            self._expiries.pop(filename, None)

    def _purge(self, now: float) -> None:
        expired = [name for name, expiry in self._expiries.items() if expiry <= now]
        for name in expired:
            del self._expiries[name]
