from __future__ import annotations

import re

import pytest
from pydantic import ValidationError

from recording_ingest.domain import (
    ChunkMessage,
    PipelineResult,
    PipelineStage,
    ProcessMessage,
    RecordingContext,
    StageStatus,
)


def test_context_filename_embeds_user_prefix() -> None:
    context = RecordingContext.start("user_2abcdefghijk")

    assert re.fullmatch(r"[0-9a-f-]{36}-user_2ab\.webm", context.filename)


def test_contexts_get_distinct_filenames() -> None:
    assert RecordingContext.start("u1").filename != RecordingContext.start("u1").filename


def test_chunk_frame_decodes_back_to_bytes() -> None:
    context = RecordingContext.start("u1")

    message = ChunkMessage.model_validate(context.chunk_frame(b"\x1aE\xdf\xa3")["data"])

    assert message.chunks == b"\x1aE\xdf\xa3"
    assert message.filename == context.filename


def test_process_message_reads_user_id_alias() -> None:
    message = ProcessMessage.model_validate({"filename": "a.webm", "userId": "u1"})

    assert message.user_id == "u1"


@pytest.mark.parametrize("filename", ["", ".", "..", "a/b.webm", "..\\b.webm", "/abs.webm"])
def test_filenames_with_directories_are_rejected(filename: str) -> None:
    with pytest.raises(ValidationError):
        ProcessMessage.model_validate({"filename": filename, "userId": "u1"})


def test_pipeline_result_reports_first_status_of_stage() -> None:
    result = PipelineResult(filename="a.webm", owner_user_id="u1")
    result.record(PipelineStage.UPLOAD, StageStatus.SUCCEEDED)

    assert result.status_of(PipelineStage.UPLOAD) == StageStatus.SUCCEEDED
    assert result.status_of(PipelineStage.TRANSCRIBE) is None
