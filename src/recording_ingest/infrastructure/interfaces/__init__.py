"""Infrastructure interface exports."""

from .llm_service import LLMService
from .metadata_service import MetadataService
from .run_registry import RunRegistry
from .storage import StorageClient
from .transcription_service import TranscriptionService

__all__ = [
    "LLMService",
    "MetadataService",
    "RunRegistry",
    "StorageClient",
    "TranscriptionService",
]
