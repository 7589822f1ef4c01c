"""Shared fakes and fixtures for the recording ingest tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from recording_ingest.domain import (
    ProcessingAck,
    ProcessingOutcome,
    ProcessingPolicy,
    ProcessingStage,
    RecordingSession,
    RecordingSessionStore,
    TitleAndSummary,
    parse_summary,
)
from recording_ingest.exceptions import MetadataReportError, StorageUploadError
from recording_ingest.handlers import RecordingPipeline
from recording_ingest.infrastructure import InMemoryRunRegistry, TempArtifactStore
from recording_ingest.infrastructure.interfaces import (
    LLMService,
    MetadataService,
    StorageClient,
    TranscriptionService,
)

SUMMARY_JSON = '{"title": "Greeting", "summary": "Someone says hello."}'


class FakeStorage(StorageClient):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.uploads: list[dict] = []

    def upload(self, object_name, data, size, content_type) -> None:
        if self.fail:
            raise StorageUploadError(object_name, Exception("HTTP 503"))
        self.uploads.append(
            {
                "object_name": object_name,
                "body": data.read(),
                "size": size,
                "content_type": content_type,
            }
        )

    def ensure_bucket_exists(self) -> None:
        pass


class FakeMetadata(MetadataService):
    def __init__(self, plan: str | None = "FREE", fail_stages=()) -> None:
        self.plan = plan
        self.fail_stages = set(fail_stages)
        self.reports: list[ProcessingOutcome] = []
        self.closed = False

    @property
    def stages(self) -> list[ProcessingStage]:
        return [outcome.stage for outcome in self.reports]

    def _record(self, outcome: ProcessingOutcome) -> ProcessingAck:
        if outcome.stage in self.fail_stages:
            raise MetadataReportError(outcome.stage.value, outcome.filename)
        self.reports.append(outcome)
        return ProcessingAck(status=200, plan=self.plan)

    async def report_processing(self, outcome):
        return self._record(outcome)

    async def report_transcription(self, outcome):
        return self._record(outcome)

    async def report_complete(self, outcome):
        return self._record(outcome)

    async def close(self) -> None:
        self.closed = True


class FakeTranscriber(TranscriptionService):
    def __init__(self, transcript: str = "hello world", error: Exception | None = None):
        self.transcript = transcript
        self.error = error
        self.calls: list[Path] = []

    async def transcribe(self, file_path: Path) -> str:
        self.calls.append(Path(file_path))
        if self.error is not None:
            raise self.error
        return self.transcript


class FakeLLM(LLMService):
    def __init__(self, reply: str = SUMMARY_JSON) -> None:
        self.reply = reply
        self.calls: list[str] = []

    async def summarize(self, transcript: str) -> TitleAndSummary:
        self.calls.append(transcript)
        return parse_summary(self.reply)


def run(coro):
    return asyncio.run(coro)


async def build_session(
    filename: str, chunks: list[bytes], store: RecordingSessionStore | None = None
) -> RecordingSession:
    store = store or RecordingSessionStore()
    for chunk in chunks:
        await store.append(filename, chunk)
    return await store.detach(filename)


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path / "temp_upload"


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def metadata() -> FakeMetadata:
    return FakeMetadata()


@pytest.fixture
def transcriber() -> FakeTranscriber:
    return FakeTranscriber()


@pytest.fixture
def llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def policy() -> ProcessingPolicy:
    return ProcessingPolicy(premium_plan="PRO", max_transcription_bytes=25_000_000)


@pytest.fixture
def pipeline(temp_dir, storage, metadata, transcriber, llm, policy) -> RecordingPipeline:
    return RecordingPipeline(
        artifacts=TempArtifactStore(temp_dir),
        storage=storage,
        metadata=metadata,
        transcription_service=transcriber,
        llm_service=llm,
        policy=policy,
        run_registry=InMemoryRunRegistry(),
    )
