"""Prompt construction and output parsing for recording summaries."""

from pydantic import ValidationError

from recording_ingest.domain.models import TitleAndSummary
from recording_ingest.exceptions import SummarizationError

SUMMARY_INSTRUCTION = (
    "Generate a title and description from this transcription: {transcript}. "
    'Respond only with a JSON object of the form {{"title": <title>, '
    '"summary": <summary>}}.'
)

SUMMARY_REQUEST = "Summarize the transcription as instructed."


def build_summary_instruction(transcript: str) -> str:
    return SUMMARY_INSTRUCTION.format(transcript=transcript)


def parse_summary(raw: str | None) -> TitleAndSummary:
    """
    Parses the model's reply into a TitleAndSummary.

    Raises:
        SummarizationError: If the reply is empty, not JSON, or lacks the
            `title`/`summary` keys.
    """
    if not raw or not raw.strip():
        raise SummarizationError("Summary model returned an empty response")
    try:
        return TitleAndSummary.model_validate_json(raw)
    except ValidationError as e:
        raise SummarizationError(f"Malformed summary response: {e}", cause=e) from e
