"""Domain models for the recording ingest service."""

import base64
import uuid
from enum import Enum
from pathlib import Path, PurePosixPath, PureWindowsPath

from pydantic import Base64Bytes, BaseModel, Field, field_validator

RECORDING_CONTENT_TYPE = "video/webm"


def _validate_filename(value: str) -> str:
    """Rejects anything that is not a plain file name (no directories)."""
    if not value or value in (".", ".."):
        raise ValueError("filename must not be empty")
    if PurePosixPath(value).name != value or PureWindowsPath(value).name != value:
        raise ValueError("filename must not contain path separators")
    return value


class SocketEvent(BaseModel, frozen=True):
    """Envelope of every frame received on the recording socket."""

    event: str
    data: dict = Field(default_factory=dict)


class ChunkMessage(BaseModel, frozen=True):
    """A `video-chunks` event: one media fragment of an in-flight recording."""

    filename: str
    chunks: Base64Bytes

    @field_validator("filename")
    @classmethod
    def check_filename(cls, value: str) -> str:
        return _validate_filename(value)


class ProcessMessage(BaseModel, frozen=True, populate_by_name=True):
    """A `process-video` event: the client finished recording `filename`."""

    filename: str
    user_id: str = Field(alias="userId", min_length=1)

    @field_validator("filename")
    @classmethod
    def check_filename(cls, value: str) -> str:
        return _validate_filename(value)


class RecordingContext(BaseModel, frozen=True):
    """
    Explicit session context a capture client carries from start to upload.

    The filename embeds the first eight characters of the user id so that an
    artifact can be traced back to its owner from the object key alone.
    """

    user_id: str
    filename: str

    @classmethod
    def start(cls, user_id: str) -> "RecordingContext":
        """Creates a context with a fresh, unique recording filename."""
        return cls(user_id=user_id, filename=f"{uuid.uuid4()}-{user_id[:8]}.webm")

    def chunk_frame(self, chunk: bytes) -> dict:
        """Builds the `video-chunks` frame for one captured fragment."""
        return {
            "event": "video-chunks",
            "data": {
                "filename": self.filename,
                "chunks": base64.b64encode(chunk).decode("ascii"),
            },
        }

    def process_frame(self) -> dict:
        """Builds the `process-video` frame sent when capture stops."""
        return {
            "event": "process-video",
            "data": {"filename": self.filename, "userId": self.user_id},
        }


class MediaArtifact(BaseModel, frozen=True):
    """A finalized recording materialized in local temp storage."""

    filename: str
    path: Path
    byte_size: int
    content_type: str = RECORDING_CONTENT_TYPE


class ProcessingStage(str, Enum):
    """
    Progress milestones of a recording.

    All but `UPLOAD_COMPLETE` are reported to the metadata service. The
    dashboard API has no upload endpoint, so the upload milestone is only
    recorded in the run result through the `upload` stage report.
    """

    PROCESSING_STARTED = "processing-started"
    UPLOAD_COMPLETE = "upload-complete"
    TRANSCRIBED = "transcribed"
    COMPLETE = "complete"


class TitleAndSummary(BaseModel, frozen=True):
    """Generated title and summary of a recording."""

    title: str
    summary: str


class ProcessingOutcome(BaseModel, frozen=True):
    """Incremental processing status pushed to the metadata service."""

    filename: str
    owner_user_id: str
    stage: ProcessingStage
    transcript: str | None = None
    title_and_summary: TitleAndSummary | None = None


class ProcessingAck(BaseModel, frozen=True):
    """Metadata service response to a status report."""

    status: int
    plan: str | None = None


class PipelineStage(str, Enum):
    """Discrete steps of one processing run, in execution order."""

    FINALIZE = "finalize"
    REPORT_PROCESSING = "report-processing"
    UPLOAD = "upload"
    TRANSCRIBE = "transcribe"
    SUMMARIZE = "summarize"
    REPORT_TRANSCRIPTION = "report-transcription"
    REPORT_COMPLETE = "report-complete"
    CLEANUP = "cleanup"


class StageStatus(str, Enum):
    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


class StageReport(BaseModel, frozen=True):
    """Tagged outcome of a single pipeline stage."""

    stage: PipelineStage
    status: StageStatus
    reason: str | None = None


class RunState(str, Enum):
    """Terminal state of a processing run."""

    COMPLETE = "complete"
    ABORTED = "aborted"
    DUPLICATE = "duplicate"


class PipelineResult(BaseModel):
    """Result of one processing run, including every stage it went through."""

    filename: str
    owner_user_id: str
    state: RunState = RunState.COMPLETE
    stages: list[StageReport] = Field(default_factory=list)
    last_reported_stage: ProcessingStage | None = None
    transcript: str | None = None
    title_and_summary: TitleAndSummary | None = None

    def record(
        self, stage: PipelineStage, status: StageStatus, reason: str | None = None
    ) -> None:
        self.stages.append(StageReport(stage=stage, status=status, reason=reason))

    def status_of(self, stage: PipelineStage) -> StageStatus | None:
        """Returns the recorded status of `stage`, or None if it never ran."""
        for report in self.stages:
            if report.stage == stage:
                return report.status
        return None
