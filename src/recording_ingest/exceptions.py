"""Custom exceptions for the recording ingest service."""


class InvalidEventError(Exception):
    """Raised when a socket event cannot be parsed or has an unknown name."""

    def __init__(self, event: str | None, reason: str):
        self.event = event
        self.reason = reason
        super().__init__(f"Invalid event '{event}': {reason}")


class ArtifactWriteError(Exception):
    """Raised when a finalized recording cannot be written to temp storage."""

    def __init__(self, filename: str, cause: Exception | None = None):
        self.filename = filename
        self.cause = cause
        super().__init__(f"Failed to write recording '{filename}' to temp storage")


class StorageUploadError(Exception):
    """Raised when uploading a recording to object storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class MetadataReportError(Exception):
    """Raised when the metadata service rejects or fails a status report."""

    def __init__(self, stage: str, filename: str, cause: Exception | None = None):
        self.stage = stage
        self.filename = filename
        self.cause = cause
        super().__init__(f"Failed to report '{stage}' for recording '{filename}'")


class TranscriptionError(Exception):
    """Raised when audio transcription fails."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Failed to transcribe recording '{file_name}'")


class SummarizationError(Exception):
    """Raised when title/summary generation fails or returns malformed output."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)
