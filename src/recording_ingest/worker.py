"""Worker that dispatches socket events and schedules pipeline runs."""

import asyncio
import json
import uuid

from pydantic import ValidationError

from recording_ingest.domain import (
    ChunkMessage,
    ProcessMessage,
    RecordingSessionStore,
    SocketEvent,
)
from recording_ingest.exceptions import InvalidEventError
from recording_ingest.handlers import RecordingPipeline
from recording_ingest.logging import setup_logging

logger = setup_logging()

CHUNK_EVENT = "video-chunks"
PROCESS_EVENT = "process-video"


class Connection:
    """Tracks the recordings a single socket connection has open."""

    def __init__(self, connection_id: str | None = None):
        self.connection_id = connection_id or uuid.uuid4().hex
        self.open_filenames: set[str] = set()


class Worker:
    """
    Receives recording events and orchestrates processing.

    Chunk events are appended to the session store in receipt order. A
    process event fences its session immediately, so the run never sees
    later chunks, then schedules the pipeline as a background task and
    returns to the receive loop.
    """

    def __init__(self, sessions: RecordingSessionStore, pipeline: RecordingPipeline):
        self._sessions = sessions
        self._pipeline = pipeline
        self._tasks: set[asyncio.Task] = set()

    @property
    def sessions(self) -> RecordingSessionStore:
        return self._sessions

    @property
    def pending_runs(self) -> int:
        return len(self._tasks)

    async def handle_frame(self, frame: str, connection: Connection) -> dict | None:
        """
        Parses and dispatches one text frame.

        Returns:
            A reply frame for the client, or None when no reply is due.

        Raises:
            InvalidEventError: If the frame is not a known, well-formed event.
        """
        try:
            event = SocketEvent.model_validate_json(frame)
        except ValidationError as e:
            raise InvalidEventError(None, "frame is not a JSON event envelope") from e

        try:
            if event.event == CHUNK_EVENT:
                message = ChunkMessage.model_validate(event.data)
                await self.on_chunks(message, connection)
                return None
            if event.event == PROCESS_EVENT:
                message = ProcessMessage.model_validate(event.data)
                await self.on_process(message, connection)
                return {
                    "event": "processing-queued",
                    "data": {"filename": message.filename},
                }
        except ValidationError as e:
            logger.warning(
                "Invalid event payload",
                extra={"event": event.event, "errors": json.loads(e.json())},
            )
            raise InvalidEventError(event.event, "payload failed validation") from e

        raise InvalidEventError(event.event, "unknown event")

    async def on_chunks(self, message: ChunkMessage, connection: Connection) -> None:
        await self._sessions.append(
            message.filename, message.chunks, owner=connection.connection_id
        )
        connection.open_filenames.add(message.filename)

    async def on_process(
        self, message: ProcessMessage, connection: Connection
    ) -> asyncio.Task:
        """Fences the session for `message.filename` and schedules its run."""
        logger.info(
            "Processing requested",
            extra={
                "file_name": message.filename,
                "user_id": message.user_id,
                "connection_id": connection.connection_id,
            },
        )
        session = await self._sessions.detach(message.filename)
        connection.open_filenames.discard(message.filename)

        task = asyncio.create_task(
            self._pipeline.run(session, message.user_id),
            name=f"process-{message.filename}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_run_done)
        return task

    def _on_run_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Processing run cancelled", extra={"task": task.get_name()})
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Processing run crashed",
                exc_info=error,
                extra={"task": task.get_name()},
            )

    async def on_disconnect(self, connection: Connection) -> list[str]:
        """Discards sessions the connection opened but never finalized."""
        discarded = []
        for filename in sorted(connection.open_filenames):
            if await self._sessions.discard(
                filename, owner=connection.connection_id
            ):
                discarded.append(filename)
        connection.open_filenames.clear()
        logger.info(
            "Connection closed",
            extra={"connection_id": connection.connection_id, "discarded": discarded},
        )
        return discarded

    async def shutdown(self) -> None:
        """Waits for every scheduled run to finish, then closes the pipeline."""
        if self._tasks:
            logger.info("Waiting for pending runs", extra={"pending": len(self._tasks)})
            await asyncio.gather(*self._tasks, return_exceptions=True)
        await self._pipeline.close()
