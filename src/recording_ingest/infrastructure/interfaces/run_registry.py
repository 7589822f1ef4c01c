"""Abstract interface for de-duplicating processing runs."""

from abc import ABC, abstractmethod


class RunRegistry(ABC):
    """Tracks which recordings already have a processing run."""

    @abstractmethod
    async def claim(self, filename: str) -> bool:
        """
        Claims `filename` for processing.

        Returns:
            True if the caller owns the run, False if it was already claimed.
        """

    @abstractmethod
    async def release(self, filename: str) -> None:
        """Releases a claim so the recording can be processed again."""

    async def close(self) -> None:
        """Releases any underlying connections."""
