"""Domain layer exports."""

from recording_ingest.domain.models import (
    RECORDING_CONTENT_TYPE,
    ChunkMessage,
    MediaArtifact,
    PipelineResult,
    PipelineStage,
    ProcessingAck,
    ProcessingOutcome,
    ProcessingStage,
    ProcessMessage,
    RecordingContext,
    RunState,
    SocketEvent,
    StageReport,
    StageStatus,
    TitleAndSummary,
)
from recording_ingest.domain.processing_policy import ProcessingPolicy
from recording_ingest.domain.session_store import (
    RecordingSession,
    RecordingSessionStore,
)
from recording_ingest.domain.summary_prompt import (
    build_summary_instruction,
    parse_summary,
)

__all__ = [
    "RECORDING_CONTENT_TYPE",
    "ChunkMessage",
    "MediaArtifact",
    "PipelineResult",
    "PipelineStage",
    "ProcessingAck",
    "ProcessingOutcome",
    "ProcessingStage",
    "ProcessMessage",
    "RecordingContext",
    "RunState",
    "SocketEvent",
    "StageReport",
    "StageStatus",
    "TitleAndSummary",
    "ProcessingPolicy",
    "RecordingSession",
    "RecordingSessionStore",
    "build_summary_instruction",
    "parse_summary",
]
