from __future__ import annotations

import json

import httpx
import pytest
from conftest import run

from recording_ingest.domain import ProcessingOutcome, ProcessingStage, TitleAndSummary
from recording_ingest.exceptions import MetadataReportError
from recording_ingest.infrastructure import HttpMetadataService

BASE_URL = "http://dashboard.test/api/"


def _service(handler) -> tuple[HttpMetadataService, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(record))
    return HttpMetadataService(client), requests


def _outcome(stage: ProcessingStage, **kwargs) -> ProcessingOutcome:
    return ProcessingOutcome(
        filename="rec.webm", owner_user_id="user-1", stage=stage, **kwargs
    )


def test_processing_report_returns_plan() -> None:
    service, requests = _service(
        lambda request: httpx.Response(200, json={"status": 200, "plan": "PRO"})
    )

    ack = run(service.report_processing(_outcome(ProcessingStage.PROCESSING_STARTED)))

    assert ack.plan == "PRO"
    assert requests[0].method == "POST"
    assert requests[0].url == "http://dashboard.test/api/recording/user-1/processing"
    assert json.loads(requests[0].content) == {"filename": "rec.webm"}


def test_transcription_report_sends_content_and_transcript() -> None:
    service, requests = _service(lambda request: httpx.Response(200, json={"status": 200}))
    outcome = _outcome(
        ProcessingStage.TRANSCRIBED,
        transcript="hello world",
        title_and_summary=TitleAndSummary(title="Hi", summary="A greeting."),
    )

    run(service.report_transcription(outcome))

    assert requests[0].url.path == "/api/recording/user-1/transcribe"
    body = json.loads(requests[0].content)
    assert body["filename"] == "rec.webm"
    assert body["transcript"] == "hello world"
    assert json.loads(body["content"]) == {"title": "Hi", "summary": "A greeting."}


def test_complete_report_accepts_body_without_status() -> None:
    service, requests = _service(lambda request: httpx.Response(200, json={}))

    ack = run(service.report_complete(_outcome(ProcessingStage.COMPLETE)))

    assert ack.status == 200
    assert requests[0].url.path == "/api/recording/user-1/complete"


def test_user_id_is_path_escaped() -> None:
    service, requests = _service(lambda request: httpx.Response(200, json={"status": 200}))
    outcome = ProcessingOutcome(
        filename="rec.webm", owner_user_id="a/b", stage=ProcessingStage.COMPLETE
    )

    run(service.report_complete(outcome))

    assert requests[0].url.raw_path == b"/api/recording/a%2Fb/complete"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"status": 500}),
        httpx.Response(404, text="not found"),
        httpx.Response(200, json={"status": 403}),
        httpx.Response(200, text="<html>"),
        httpx.Response(200, json={"status": "nope"}),
    ],
)
def test_rejected_report_raises(response) -> None:
    service, _ = _service(lambda request: response)

    with pytest.raises(MetadataReportError) as excinfo:
        run(service.report_processing(_outcome(ProcessingStage.PROCESSING_STARTED)))

    assert excinfo.value.stage == "processing-started"
    assert excinfo.value.filename == "rec.webm"


def test_network_error_raises_report_error() -> None:
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    service, _ = _service(fail)

    with pytest.raises(MetadataReportError):
        run(service.report_complete(_outcome(ProcessingStage.COMPLETE)))
