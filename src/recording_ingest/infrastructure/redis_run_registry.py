"""Redis implementation of the RunRegistry interface."""

import redis.asyncio as redis

from recording_ingest.infrastructure.interfaces import RunRegistry
from recording_ingest.logging import setup_logging

logger = setup_logging()


class RedisRunRegistry(RunRegistry):
    """Claims recordings with `SET NX` so a claim survives process restarts."""

    def __init__(self, client: redis.Redis, ttl_seconds: int):
        self._client = client
        self._ttl_seconds = ttl_seconds

    @staticmethod
    def _key(filename: str) -> str:
        return f"recording-run:{filename}"

    async def claim(self, filename: str) -> bool:
        """
        Claims `filename` until the TTL expires.

        Redis errors propagate; the pipeline treats an unclaimable run as a
        failed finalize rather than processing it twice.
        """
        claimed = await self._client.set(
            self._key(filename), "1", nx=True, ex=self._ttl_seconds
        )
        if claimed:
            logger.info(
                "Run claimed", extra={"file_name": filename, "ttl": self._ttl_seconds}
            )
        return bool(claimed)

    async def release(self, filename: str) -> None:
        await self._client.delete(self._key(filename))
        logger.info("Run claim released", extra={"file_name": filename})

    async def close(self) -> None:
        await self._client.aclose()
