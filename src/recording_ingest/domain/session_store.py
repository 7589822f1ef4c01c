"""In-memory accumulation of recording chunks, keyed by filename."""

import asyncio

from recording_ingest.domain.models import RECORDING_CONTENT_TYPE
from recording_ingest.logging import setup_logging

logger = setup_logging()


class RecordingSession:
    """Chunks of one in-flight recording, in arrival order."""

    def __init__(self, filename: str):
        self.filename = filename
        self.content_type = RECORDING_CONTENT_TYPE
        self.lock = asyncio.Lock()
        self.closed = False
        # Connection that appended most recently; a reconnecting client takes over.
        self.owner: str | None = None
        self._chunks: list[bytes] = []

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    @property
    def byte_size(self) -> int:
        return sum(len(chunk) for chunk in self._chunks)

    def append(self, chunk: bytes) -> None:
        self._chunks.append(chunk)

    def to_bytes(self) -> bytes:
        """Concatenates the accumulated chunks into a single media blob."""
        return b"".join(self._chunks)


class RecordingSessionStore:
    """
    Holds one RecordingSession per in-flight filename.

    Sessions are created on their first chunk and removed exactly once, by
    `detach` (finalize trigger) or `discard` (client went away). A store-wide
    lock guards the mapping; each session's own lock serializes appends
    against the detach fence, so concurrent recordings never share a buffer.
    """

    def __init__(self):
        self._sessions: dict[str, RecordingSession] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, filename: str) -> bool:
        return filename in self._sessions

    async def append(
        self, filename: str, chunk: bytes, owner: str | None = None
    ) -> RecordingSession:
        """
        Appends a fragment to the session for `filename`, creating it if needed.

        Fragments are stored as opaque bytes in receipt order. A session that
        was fenced while this call waited for its lock is never written to;
        the chunk starts a fresh session instead. `owner` identifies the
        connection the chunk came from and becomes the session's owner.
        """
        while True:
            async with self._lock:
                session = self._sessions.get(filename)
                if session is None:
                    session = RecordingSession(filename)
                    self._sessions[filename] = session
                    logger.info(
                        "Recording session opened", extra={"file_name": filename}
                    )

            async with session.lock:
                if session.closed:
                    continue
                session.append(chunk)
                if owner is not None:
                    session.owner = owner

            logger.debug(
                "Chunk appended",
                extra={
                    "file_name": filename,
                    "chunk_size": len(chunk),
                    "chunk_count": session.chunk_count,
                },
            )
            return session

    async def detach(self, filename: str) -> RecordingSession:
        """
        Fences and removes the session for `filename`.

        Chunks that arrive after this call belong to a new session. Detaching
        a filename that never received a chunk returns an empty session.
        """
        async with self._lock:
            session = self._sessions.pop(filename, None)

        if session is None:
            logger.warning(
                "Finalizing recording with no chunks", extra={"file_name": filename}
            )
            session = RecordingSession(filename)

        async with session.lock:
            session.closed = True

        logger.info(
            "Recording session fenced",
            extra={
                "file_name": filename,
                "chunk_count": session.chunk_count,
                "size": session.byte_size,
            },
        )
        return session

    async def discard(self, filename: str, owner: str | None = None) -> bool:
        """
        Drops an unfinalized session. Returns False if none was dropped.

        When `owner` is given, the session is only dropped if that connection
        still owns it; a session another connection has taken over is kept.
        """
        async with self._lock:
            session = self._sessions.get(filename)
            if session is None:
                return False
            if owner is not None and session.owner != owner:
                logger.info(
                    "Kept session owned by another connection",
                    extra={"file_name": filename, "owner": session.owner},
                )
                return False
            del self._sessions[filename]

        async with session.lock:
            session.closed = True

        logger.warning(
            "Discarded unfinalized recording session",
            extra={
                "file_name": filename,
                "chunk_count": session.chunk_count,
                "size": session.byte_size,
            },
        )
        return True
