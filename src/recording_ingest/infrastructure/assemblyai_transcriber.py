"""AssemblyAI implementation of the TranscriptionService interface."""

import asyncio
from pathlib import Path

import assemblyai as aai

from recording_ingest.exceptions import TranscriptionError
from recording_ingest.infrastructure.interfaces import TranscriptionService
from recording_ingest.logging import setup_logging

logger = setup_logging()


class AssemblyAITranscriber(TranscriptionService):
    """Handles recording transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber):
        self._transcriber = transcriber

    async def transcribe(self, file_path: Path) -> str:
        file_name = Path(file_path).name
        try:
            transcription = await asyncio.to_thread(
                self._transcriber.transcribe, str(file_path)
            )
        except Exception as e:
            logger.exception("AssemblyAI transcription failed")
            raise TranscriptionError(file_name, e) from e

        if transcription.status == aai.TranscriptStatus.error:
            raise TranscriptionError(file_name, Exception(transcription.error))

        if transcription.text is None:
            raise TranscriptionError(
                file_name, Exception("Transcription returned no text")
            )

        logger.info(
            "Audio transcription successful",
            extra={"file_name": file_name, "characters": len(transcription.text)},
        )
        return transcription.text
