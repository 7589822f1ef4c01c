"""HTTP implementation of the MetadataService interface."""

from urllib.parse import quote

import httpx
from pydantic import ValidationError

from recording_ingest.domain.models import (
    ProcessingAck,
    ProcessingOutcome,
    ProcessingStage,
)
from recording_ingest.exceptions import MetadataReportError
from recording_ingest.infrastructure.interfaces import MetadataService
from recording_ingest.logging import setup_logging

logger = setup_logging()

_STAGE_ENDPOINTS = {
    ProcessingStage.PROCESSING_STARTED: "processing",
    ProcessingStage.TRANSCRIBED: "transcribe",
    ProcessingStage.COMPLETE: "complete",
}


class HttpMetadataService(MetadataService):
    """
    Reports processing progress to the dashboard's recording API.

    Every report is a JSON POST to `recording/{user_id}/{endpoint}` relative
    to the configured base URL. A report is accepted only when the HTTP status
    is 200 and the body's own `status` field (when present) is 200 as well.
    """

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def report_processing(self, outcome: ProcessingOutcome) -> ProcessingAck:
        return await self._post(outcome, {"filename": outcome.filename})

    async def report_transcription(self, outcome: ProcessingOutcome) -> ProcessingAck:
        if outcome.title_and_summary is None:
            raise ValueError("A transcription report requires a title and summary")
        return await self._post(
            outcome,
            {
                "filename": outcome.filename,
                "content": outcome.title_and_summary.model_dump_json(),
                "transcript": outcome.transcript,
            },
        )

    async def report_complete(self, outcome: ProcessingOutcome) -> ProcessingAck:
        return await self._post(outcome, {"filename": outcome.filename})

    async def close(self) -> None:
        await self._client.aclose()

    async def _post(self, outcome: ProcessingOutcome, body: dict) -> ProcessingAck:
        stage = outcome.stage.value
        user_id = quote(outcome.owner_user_id, safe="")
        url = f"recording/{user_id}/{_STAGE_ENDPOINTS[outcome.stage]}"
        extra = {
            "file_name": outcome.filename,
            "user_id": outcome.owner_user_id,
            "stage": stage,
        }

        try:
            response = await self._client.post(url, json=body)
        except httpx.HTTPError as e:
            logger.exception("Metadata service unreachable", extra=extra)
            raise MetadataReportError(stage, outcome.filename, e) from e

        if response.status_code != 200:
            logger.error(
                "Metadata service rejected report",
                extra={**extra, "http_status": response.status_code},
            )
            raise MetadataReportError(
                stage,
                outcome.filename,
                Exception(f"HTTP {response.status_code}"),
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.exception("Metadata service returned invalid JSON", extra=extra)
            raise MetadataReportError(stage, outcome.filename, e) from e

        if not isinstance(payload, dict):
            payload = {}
        try:
            ack = ProcessingAck(
                status=payload.get("status", response.status_code),
                plan=payload.get("plan"),
            )
        except ValidationError as e:
            logger.exception(
                "Metadata service returned an unexpected body", extra=extra
            )
            raise MetadataReportError(stage, outcome.filename, e) from e

        if ack.status != 200:
            logger.error(
                "Metadata service reported failure",
                extra={**extra, "status": ack.status},
            )
            raise MetadataReportError(
                stage, outcome.filename, Exception(f"status {ack.status}")
            )

        logger.info("Processing status reported", extra={**extra, "plan": ack.plan})
        return ack
