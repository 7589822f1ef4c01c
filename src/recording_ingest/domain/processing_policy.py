"""Plan and size gates for the optional processing stages."""

from recording_ingest.domain.models import MediaArtifact


class ProcessingPolicy:
    """Decides which optional stages a recording is eligible for."""

    def __init__(self, premium_plan: str, max_transcription_bytes: int):
        self._premium_plan = premium_plan
        self._max_transcription_bytes = max_transcription_bytes

    def transcription_skip_reason(
        self, plan: str | None, artifact: MediaArtifact
    ) -> str | None:
        """
        Returns why `artifact` must not be transcribed, or None if it may be.

        Transcription requires the premium plan and a file strictly smaller
        than the backend's upload ceiling.
        """
        if plan != self._premium_plan:
            return f"plan '{plan}' is not {self._premium_plan}"
        if artifact.byte_size >= self._max_transcription_bytes:
            return (
                f"size {artifact.byte_size} exceeds transcription limit "
                f"of {self._max_transcription_bytes - 1} bytes"
            )
        return None

    def is_transcription_eligible(
        self, plan: str | None, artifact: MediaArtifact
    ) -> bool:
        return self.transcription_skip_reason(plan, artifact) is None
