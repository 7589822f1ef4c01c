"""Gemini LLM service implementation."""

from google import genai

from recording_ingest.domain.models import TitleAndSummary
from recording_ingest.domain.summary_prompt import (
    SUMMARY_REQUEST,
    build_summary_instruction,
    parse_summary,
)
from recording_ingest.exceptions import SummarizationError
from recording_ingest.infrastructure.interfaces import LLMService
from recording_ingest.logging import setup_logging

logger = setup_logging()


class GeminiLLMService(LLMService):
    """LLM service implementation using Google Gemini."""

    def __init__(self, client: genai.Client, model_name: str):
        self._client = client
        self._model_name = model_name

    async def summarize(self, transcript: str) -> TitleAndSummary:
        """
        Generates a title and summary using Gemini's JSON response mode.

        Raises:
            SummarizationError: If the Gemini API call fails or its reply
                does not match the expected schema.
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self._model_name,
                contents=SUMMARY_REQUEST,
                config={
                    "response_mime_type": "application/json",
                    "response_schema": TitleAndSummary,
                    "system_instruction": build_summary_instruction(transcript),
                },
            )
        except Exception as e:
            logger.exception("Gemini API call failed")
            raise SummarizationError(f"Gemini summary failed: {e}", cause=e) from e

        summary = parse_summary(response.text)
        logger.info("LLM summary completed", extra={"title": summary.title})
        return summary
