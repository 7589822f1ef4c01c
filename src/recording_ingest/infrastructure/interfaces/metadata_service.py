"""Abstract interface for the external metadata (status) service."""

from abc import ABC, abstractmethod

from recording_ingest.domain.models import ProcessingAck, ProcessingOutcome


class MetadataService(ABC):
    """Receives processing progress for each recording."""

    @abstractmethod
    async def report_processing(self, outcome: ProcessingOutcome) -> ProcessingAck:
        """
        Reports that processing of a recording has started.

        Returns:
            The acknowledgement, including the owner's plan tier.

        Raises:
            MetadataReportError: If the service does not accept the report.
        """

    @abstractmethod
    async def report_transcription(self, outcome: ProcessingOutcome) -> ProcessingAck:
        """
        Reports the transcript and generated title/summary.

        Raises:
            MetadataReportError: If the service does not accept the report.
        """

    @abstractmethod
    async def report_complete(self, outcome: ProcessingOutcome) -> ProcessingAck:
        """
        Reports that processing of a recording has finished.

        Raises:
            MetadataReportError: If the service does not accept the report.
        """

    async def close(self) -> None:
        """Releases any underlying connections."""
