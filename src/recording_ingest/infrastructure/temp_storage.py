"""Local temp storage for finalized recordings."""

import asyncio
import os
from pathlib import Path

import aiofiles
import aiofiles.os

from recording_ingest.domain.models import MediaArtifact
from recording_ingest.domain.session_store import RecordingSession
from recording_ingest.exceptions import ArtifactWriteError
from recording_ingest.logging import setup_logging

logger = setup_logging()


class TempArtifactStore:
    """Materializes recording sessions as files under one temp directory."""

    def __init__(self, temp_dir: Path):
        self._temp_dir = Path(temp_dir)

    def path_for(self, filename: str) -> Path:
        return self._temp_dir / filename

    async def write(self, session: RecordingSession) -> MediaArtifact:
        """
        Writes the session's chunks to `<temp_dir>/<filename>`.

        The file is flushed and fsynced before the artifact is returned.
        A session without chunks produces an empty file.

        Raises:
            ArtifactWriteError: If the directory or file cannot be written.
        """
        path = self.path_for(session.filename)
        blob = session.to_bytes()

        try:
            await aiofiles.os.makedirs(self._temp_dir, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                await f.write(blob)
                await f.flush()
                await asyncio.to_thread(os.fsync, f.fileno())
        except OSError as e:
            logger.exception(
                "Failed to write recording to temp storage",
                extra={"file_name": session.filename, "path": str(path)},
            )
            raise ArtifactWriteError(session.filename, e) from e

        logger.info(
            "Recording written to temp storage",
            extra={
                "file_name": session.filename,
                "path": str(path),
                "size": len(blob),
                "chunk_count": session.chunk_count,
            },
        )
        return MediaArtifact(
            filename=session.filename,
            path=path,
            byte_size=len(blob),
            content_type=session.content_type,
        )

    async def delete(self, filename: str) -> bool:
        """Deletes the temp file for `filename`. Returns False if it was absent."""
        path = self.path_for(filename)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            return False
        logger.info(
            "Temp file deleted", extra={"file_name": filename, "path": str(path)}
        )
        return True
