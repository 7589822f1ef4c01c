"""Concrete implementations of infrastructure interfaces."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .gemini_llm import GeminiLLMService
from .http_metadata_service import HttpMetadataService
from .memory_run_registry import InMemoryRunRegistry
from .minio_storage import MinioStorageClient
from .openai_llm import OpenAILLMService
from .openai_transcriber import WhisperTranscriber
from .redis_run_registry import RedisRunRegistry
from .temp_storage import TempArtifactStore

__all__ = [
    "AssemblyAITranscriber",
    "GeminiLLMService",
    "HttpMetadataService",
    "InMemoryRunRegistry",
    "MinioStorageClient",
    "OpenAILLMService",
    "RedisRunRegistry",
    "TempArtifactStore",
    "WhisperTranscriber",
]
