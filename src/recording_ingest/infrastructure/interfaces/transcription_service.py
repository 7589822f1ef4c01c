"""Abstract interface for speech-to-text backends."""

from abc import ABC, abstractmethod
from pathlib import Path


class TranscriptionService(ABC):
    """Abstract base class for audio transcription backends."""

    @abstractmethod
    async def transcribe(self, file_path: Path) -> str:
        """
        Transcribes the audio track of a local media file.

        Args:
            file_path: Path of the finalized recording.

        Returns:
            The plain-text transcript.

        Raises:
            TranscriptionError: If transcription fails.
        """
