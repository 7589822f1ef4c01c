"""Abstract interface for text-generation backends."""

from abc import ABC, abstractmethod

from recording_ingest.domain.models import TitleAndSummary


class LLMService(ABC):
    """Abstract base class for LLM backends."""

    @abstractmethod
    async def summarize(self, transcript: str) -> TitleAndSummary:
        """
        Generates a title and summary for a transcript.

        Args:
            transcript: The transcript text.

        Returns:
            TitleAndSummary parsed from the model's JSON reply.

        Raises:
            SummarizationError: If the call fails or the reply is malformed.
        """
