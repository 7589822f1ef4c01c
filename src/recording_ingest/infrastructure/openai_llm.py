"""OpenAI chat-completions implementation of the LLMService interface."""

from openai import AsyncOpenAI

from recording_ingest.domain.models import TitleAndSummary
from recording_ingest.domain.summary_prompt import (
    build_summary_instruction,
    parse_summary,
)
from recording_ingest.exceptions import SummarizationError
from recording_ingest.infrastructure.interfaces import LLMService
from recording_ingest.logging import setup_logging

logger = setup_logging()


class OpenAILLMService(LLMService):
    """LLM service implementation using OpenAI chat completions in JSON mode."""

    def __init__(self, client: AsyncOpenAI, model_name: str = "gpt-4o-mini"):
        self._client = client
        self._model_name = model_name

    async def summarize(self, transcript: str) -> TitleAndSummary:
        try:
            completion = await self._client.chat.completions.create(
                model=self._model_name,
                response_format={"type": "json_object"},
                messages=[
                    {
                        "role": "system",
                        "content": build_summary_instruction(transcript),
                    }
                ],
            )
        except Exception as e:
            logger.exception("OpenAI summary request failed")
            raise SummarizationError(f"OpenAI summary failed: {e}", cause=e) from e

        if not completion.choices:
            raise SummarizationError("OpenAI returned no completion choices")

        summary = parse_summary(completion.choices[0].message.content)
        logger.info("LLM summary completed", extra={"title": summary.title})
        return summary
