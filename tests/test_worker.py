from __future__ import annotations

import asyncio
import json

import pytest
from conftest import run

from recording_ingest.domain import PipelineResult, RecordingContext, RecordingSessionStore
from recording_ingest.exceptions import InvalidEventError
from recording_ingest.worker import Connection, Worker


class RecordingPipelineStub:
    def __init__(self) -> None:
        self.runs: list[tuple[bytes, str]] = []
        self.closed = False

    async def run(self, session, user_id: str) -> PipelineResult:
        await asyncio.sleep(0)
        self.runs.append((session.to_bytes(), user_id))
        return PipelineResult(filename=session.filename, owner_user_id=user_id)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def stub() -> RecordingPipelineStub:
    return RecordingPipelineStub()


@pytest.fixture
def worker(stub) -> Worker:
    return Worker(RecordingSessionStore(), stub)


def test_process_event_runs_pipeline_with_fenced_session(worker, stub) -> None:
    context = RecordingContext.start("user-123456789")
    connection = Connection()

    async def scenario():
        await worker.handle_frame(json.dumps(context.chunk_frame(b"abc")), connection)
        await worker.handle_frame(json.dumps(context.chunk_frame(b"def")), connection)
        reply = await worker.handle_frame(json.dumps(context.process_frame()), connection)
        await worker.handle_frame(json.dumps(context.chunk_frame(b"late")), connection)
        await worker.shutdown()
        return reply

    reply = run(scenario())

    assert reply["event"] == "processing-queued"
    assert stub.runs == [(b"abcdef", "user-123456789")]
    assert stub.closed
    assert context.filename in worker.sessions


def test_disconnect_discards_unfinalized_sessions(worker) -> None:
    connection = Connection()
    finished = RecordingContext.start("u1")
    abandoned = RecordingContext.start("u1")

    async def scenario():
        await worker.handle_frame(json.dumps(finished.chunk_frame(b"x")), connection)
        await worker.handle_frame(json.dumps(abandoned.chunk_frame(b"y")), connection)
        await worker.handle_frame(json.dumps(finished.process_frame()), connection)
        discarded = await worker.on_disconnect(connection)
        await worker.shutdown()
        return discarded

    discarded = run(scenario())

    assert discarded == [abandoned.filename]
    assert len(worker.sessions) == 0


@pytest.mark.parametrize(
    "frame",
    [
        "not json",
        json.dumps({"data": {}}),
        json.dumps({"event": "pause-video", "data": {}}),
        json.dumps({"event": "video-chunks", "data": {"filename": "a.webm"}}),
        json.dumps({"event": "video-chunks", "data": {"filename": "a.webm", "chunks": "abc"}}),
        json.dumps({"event": "video-chunks", "data": {"filename": "../x.webm", "chunks": ""}}),
        json.dumps({"event": "process-video", "data": {"filename": "a.webm"}}),
        json.dumps({"event": "process-video", "data": {"filename": "a.webm", "userId": ""}}),
    ],
)
def test_invalid_frames_raise_invalid_event(worker, stub, frame) -> None:
    with pytest.raises(InvalidEventError):
        run(worker.handle_frame(frame, Connection()))

    assert stub.runs == []
    assert len(worker.sessions) == 0


class CrashingPipeline(RecordingPipelineStub):
    async def run(self, session, user_id: str) -> PipelineResult:
        raise RuntimeError("pipeline crashed")


def test_crashed_run_is_logged(caplog) -> None:
    worker = Worker(RecordingSessionStore(), CrashingPipeline())
    context = RecordingContext.start("u1")

    async def scenario():
        await worker.handle_frame(json.dumps(context.process_frame()), Connection())
        await worker.shutdown()

    run(scenario())

    crashes = [r for r in caplog.records if r.getMessage() == "Processing run crashed"]
    assert len(crashes) == 1
    assert isinstance(crashes[0].exc_info[1], RuntimeError)
    assert worker.pending_runs == 0


def test_reconnect_keeps_chunks_sent_on_new_connection(worker, stub) -> None:
    context = RecordingContext.start("user-123456789")
    first = Connection()
    second = Connection()

    async def scenario():
        await worker.handle_frame(json.dumps(context.chunk_frame(b"HEADER")), first)
        await worker.handle_frame(json.dumps(context.chunk_frame(b"c1")), second)
        discarded = await worker.on_disconnect(first)
        await worker.handle_frame(json.dumps(context.chunk_frame(b"c2")), second)
        await worker.handle_frame(json.dumps(context.process_frame()), second)
        await worker.shutdown()
        return discarded

    discarded = run(scenario())

    assert discarded == []
    assert stub.runs == [(b"HEADERc1c2", "user-123456789")]
