"""OpenAI Whisper implementation of the TranscriptionService interface."""

from pathlib import Path

from openai import AsyncOpenAI

from recording_ingest.exceptions import TranscriptionError
from recording_ingest.infrastructure.interfaces import TranscriptionService
from recording_ingest.logging import setup_logging

logger = setup_logging()


class WhisperTranscriber(TranscriptionService):
    """Handles recording transcription using the OpenAI audio API."""

    def __init__(self, client: AsyncOpenAI, model_name: str = "whisper-1"):
        self._client = client
        self._model_name = model_name

    async def transcribe(self, file_path: Path) -> str:
        """
        Uploads the recording to Whisper and returns the plain-text transcript.

        The SDK streams the file from disk; the container is sent as-is since
        Whisper accepts webm directly.
        """
        try:
            transcript = await self._client.audio.transcriptions.create(
                file=Path(file_path),
                model=self._model_name,
                response_format="text",
            )
        except Exception as e:
            logger.exception(
                "Whisper transcription failed", extra={"file_name": str(file_path)}
            )
            raise TranscriptionError(Path(file_path).name, e) from e

        text = transcript if isinstance(transcript, str) else transcript.text
        logger.info(
            "Audio transcription successful",
            extra={"file_name": Path(file_path).name, "characters": len(text or "")},
        )
        return text or ""
