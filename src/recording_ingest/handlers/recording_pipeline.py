"""Post-recording processing pipeline."""

import asyncio

from recording_ingest.domain import (
    MediaArtifact,
    PipelineResult,
    PipelineStage,
    ProcessingOutcome,
    ProcessingPolicy,
    ProcessingStage,
    RecordingSession,
    RunState,
    StageStatus,
    TitleAndSummary,
)
from recording_ingest.exceptions import (
    ArtifactWriteError,
    StorageUploadError,
    SummarizationError,
    TranscriptionError,
)
from recording_ingest.infrastructure import TempArtifactStore
from recording_ingest.infrastructure.interfaces import (
    LLMService,
    MetadataService,
    RunRegistry,
    StorageClient,
    TranscriptionService,
)
from recording_ingest.logging import setup_logging

logger = setup_logging()


class _Abort(Exception):
    """Ends a run after a fatal stage failure."""


class RecordingPipeline:
    """
    Runs the processing chain for one finalized recording.

    Stages run strictly in sequence: finalize, report processing, upload,
    transcribe, summarize, report transcription, report completion. Finalize,
    the processing report and the upload are fatal; every later stage is
    optional and only logged on failure. The temp file is deleted whatever
    happens. `run` never raises; the outcome of every stage is recorded in the
    returned PipelineResult.
    """

    def __init__(
        self,
        artifacts: TempArtifactStore,
        storage: StorageClient,
        metadata: MetadataService,
        transcription_service: TranscriptionService,
        llm_service: LLMService,
        policy: ProcessingPolicy,
        run_registry: RunRegistry,
    ):
        self._artifacts = artifacts
        self._storage = storage
        self._metadata = metadata
        self._transcription_service = transcription_service
        self._llm = llm_service
        self._policy = policy
        self._run_registry = run_registry

    async def run(self, session: RecordingSession, user_id: str) -> PipelineResult:
        """
        Processes a fenced recording session owned by `user_id`.

        Args:
            session: The session detached from the store by the finalize
                trigger. Its chunks are no longer mutated.
            user_id: Owner of the resulting artifact.

        Returns:
            PipelineResult describing every stage that ran. A failure outside
            the stages yields an aborted result instead of an exception.
        """
        try:
            return await self._run(session, user_id)
        except Exception:
            logger.exception(
                "Recording run failed outside its stages",
                extra={"file_name": session.filename, "user_id": user_id},
            )
            return PipelineResult.model_construct(
                filename=session.filename,
                owner_user_id=user_id,
                state=RunState.ABORTED,
                stages=[],
            )

    async def _run(self, session: RecordingSession, user_id: str) -> PipelineResult:
        result = PipelineResult(filename=session.filename, owner_user_id=user_id)
        extra = {"file_name": session.filename, "user_id": user_id}
        logger.info("Processing recording", extra=extra)

        try:
            claimed = await self._run_registry.claim(session.filename)
        except Exception as e:
            logger.exception("Could not claim processing run", extra=extra)
            result.record(PipelineStage.FINALIZE, StageStatus.FAILED, str(e))
            result.state = RunState.ABORTED
            return result

        if not claimed:
            logger.warning("Recording already processed, skipping", extra=extra)
            result.state = RunState.DUPLICATE
            return result

        try:
            await self._process(session, user_id, result)
        except _Abort:
            result.state = RunState.ABORTED
            await self._release(session.filename)
        except Exception:
            logger.exception("Unexpected pipeline failure", extra=extra)
            result.state = RunState.ABORTED
            await self._release(session.filename)
        finally:
            await self._cleanup(session.filename, result)

        logger.info(
            "Recording processing finished",
            extra={
                **extra,
                "state": result.state.value,
                "last_reported_stage": (
                    result.last_reported_stage.value
                    if result.last_reported_stage
                    else None
                ),
            },
        )
        return result

    async def _process(
        self, session: RecordingSession, user_id: str, result: PipelineResult
    ) -> None:
        artifact = await self._finalize(session, result)
        plan = await self._report_processing(artifact, user_id, result)
        await self._upload(artifact, result)

        transcript = await self._transcribe(artifact, plan, result)
        if transcript:
            summary = await self._summarize(artifact, transcript, result)
            if summary:
                await self._report_transcription(
                    artifact, user_id, transcript, summary, result
                )
        else:
            result.record(PipelineStage.SUMMARIZE, StageStatus.SKIPPED, "no transcript")

        await self._report_complete(artifact, user_id, result)

    async def _finalize(
        self, session: RecordingSession, result: PipelineResult
    ) -> MediaArtifact:
        try:
            artifact = await self._artifacts.write(session)
        except ArtifactWriteError as e:
            result.record(PipelineStage.FINALIZE, StageStatus.FAILED, str(e))
            raise _Abort() from e
        result.record(PipelineStage.FINALIZE, StageStatus.SUCCEEDED)
        return artifact

    async def _report_processing(
        self, artifact: MediaArtifact, user_id: str, result: PipelineResult
    ) -> str | None:
        """Reports that processing started; returns the owner's plan tier."""
        outcome = ProcessingOutcome(
            filename=artifact.filename,
            owner_user_id=user_id,
            stage=ProcessingStage.PROCESSING_STARTED,
        )
        try:
            ack = await self._metadata.report_processing(outcome)
        except Exception as e:
            logger.error(
                "Processing report failed, aborting run",
                extra={"file_name": artifact.filename, "error": str(e)},
            )
            result.record(PipelineStage.REPORT_PROCESSING, StageStatus.FAILED, str(e))
            raise _Abort() from e
        result.record(PipelineStage.REPORT_PROCESSING, StageStatus.SUCCEEDED)
        result.last_reported_stage = ProcessingStage.PROCESSING_STARTED
        return ack.plan

    async def _upload(self, artifact: MediaArtifact, result: PipelineResult) -> None:
        try:
            await asyncio.to_thread(self._upload_file, artifact)
        except StorageUploadError as e:
            logger.error(
                "Upload failed, aborting run",
                extra={"file_name": artifact.filename, "error": str(e)},
            )
            result.record(PipelineStage.UPLOAD, StageStatus.FAILED, str(e))
            raise _Abort() from e
        except OSError as e:
            logger.exception(
                "Could not read recording for upload",
                extra={"file_name": artifact.filename},
            )
            result.record(PipelineStage.UPLOAD, StageStatus.FAILED, str(e))
            raise _Abort() from e
        result.record(PipelineStage.UPLOAD, StageStatus.SUCCEEDED)
        logger.info(
            "Recording uploaded",
            extra={"file_name": artifact.filename, "size": artifact.byte_size},
        )

    def _upload_file(self, artifact: MediaArtifact) -> None:
        with open(artifact.path, "rb") as f:
            self._storage.upload(
                object_name=artifact.filename,
                data=f,
                size=artifact.byte_size,
                content_type=artifact.content_type,
            )

    async def _transcribe(
        self, artifact: MediaArtifact, plan: str | None, result: PipelineResult
    ) -> str | None:
        skip_reason = self._policy.transcription_skip_reason(plan, artifact)
        if skip_reason:
            logger.info(
                "Transcription skipped",
                extra={"file_name": artifact.filename, "reason": skip_reason},
            )
            result.record(PipelineStage.TRANSCRIBE, StageStatus.SKIPPED, skip_reason)
            return None

        try:
            transcript = await self._transcription_service.transcribe(artifact.path)
        except TranscriptionError as e:
            logger.warning(
                "Transcription failed, continuing without transcript",
                extra={"file_name": artifact.filename, "error": str(e)},
            )
            result.record(PipelineStage.TRANSCRIBE, StageStatus.FAILED, str(e))
            return None
        except Exception as e:
            logger.exception(
                "Transcription backend raised unexpectedly",
                extra={"file_name": artifact.filename},
            )
            result.record(PipelineStage.TRANSCRIBE, StageStatus.FAILED, str(e))
            return None

        if not transcript or not transcript.strip():
            result.record(
                PipelineStage.TRANSCRIBE, StageStatus.SKIPPED, "empty transcript"
            )
            return None

        result.record(PipelineStage.TRANSCRIBE, StageStatus.SUCCEEDED)
        result.transcript = transcript
        return transcript

    async def _summarize(
        self, artifact: MediaArtifact, transcript: str, result: PipelineResult
    ) -> TitleAndSummary | None:
        try:
            summary = await self._llm.summarize(transcript)
        except SummarizationError as e:
            logger.warning(
                "Summarization failed, continuing without summary",
                extra={"file_name": artifact.filename, "error": str(e)},
            )
            result.record(PipelineStage.SUMMARIZE, StageStatus.FAILED, str(e))
            return None
        except Exception as e:
            logger.exception(
                "Summary backend raised unexpectedly",
                extra={"file_name": artifact.filename},
            )
            result.record(PipelineStage.SUMMARIZE, StageStatus.FAILED, str(e))
            return None

        result.record(PipelineStage.SUMMARIZE, StageStatus.SUCCEEDED)
        result.title_and_summary = summary
        return summary

    async def _report_transcription(
        self,
        artifact: MediaArtifact,
        user_id: str,
        transcript: str,
        summary: TitleAndSummary,
        result: PipelineResult,
    ) -> None:
        outcome = ProcessingOutcome(
            filename=artifact.filename,
            owner_user_id=user_id,
            stage=ProcessingStage.TRANSCRIBED,
            transcript=transcript,
            title_and_summary=summary,
        )
        try:
            await self._metadata.report_transcription(outcome)
        except Exception as e:
            logger.warning(
                "Transcription report failed, continuing",
                extra={"file_name": artifact.filename, "error": str(e)},
            )
            result.record(
                PipelineStage.REPORT_TRANSCRIPTION, StageStatus.FAILED, str(e)
            )
            return
        result.record(PipelineStage.REPORT_TRANSCRIPTION, StageStatus.SUCCEEDED)
        result.last_reported_stage = ProcessingStage.TRANSCRIBED

    async def _report_complete(
        self, artifact: MediaArtifact, user_id: str, result: PipelineResult
    ) -> None:
        outcome = ProcessingOutcome(
            filename=artifact.filename,
            owner_user_id=user_id,
            stage=ProcessingStage.COMPLETE,
        )
        try:
            await self._metadata.report_complete(outcome)
        except Exception as e:
            logger.warning(
                "Completion report failed",
                extra={"file_name": artifact.filename, "error": str(e)},
            )
            result.record(PipelineStage.REPORT_COMPLETE, StageStatus.FAILED, str(e))
            return
        result.record(PipelineStage.REPORT_COMPLETE, StageStatus.SUCCEEDED)
        result.last_reported_stage = ProcessingStage.COMPLETE

    async def _cleanup(self, filename: str, result: PipelineResult) -> None:
        try:
            deleted = await self._artifacts.delete(filename)
        except OSError as e:
            logger.exception(
                "Failed to delete temp file", extra={"file_name": filename}
            )
            result.record(PipelineStage.CLEANUP, StageStatus.FAILED, str(e))
            return
        result.record(
            PipelineStage.CLEANUP,
            StageStatus.SUCCEEDED if deleted else StageStatus.SKIPPED,
        )

    async def _release(self, filename: str) -> None:
        try:
            await self._run_registry.release(filename)
        except Exception:
            logger.exception(
                "Failed to release run claim", extra={"file_name": filename}
            )

    async def close(self) -> None:
        """Closes the clients owned by the pipeline."""
        await self._metadata.close()
        await self._run_registry.close()
