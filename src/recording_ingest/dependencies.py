"""Dependency injection configuration for the recording ingest service."""

import assemblyai as aai
import httpx
import redis.asyncio as redis
from google import genai
from minio import Minio
from openai import AsyncOpenAI

from recording_ingest.config import AppConfig
from recording_ingest.domain import ProcessingPolicy, RecordingSessionStore
from recording_ingest.handlers import RecordingPipeline
from recording_ingest.infrastructure import (
    AssemblyAITranscriber,
    GeminiLLMService,
    HttpMetadataService,
    InMemoryRunRegistry,
    MinioStorageClient,
    OpenAILLMService,
    RedisRunRegistry,
    TempArtifactStore,
    WhisperTranscriber,
)
from recording_ingest.infrastructure.interfaces import (
    LLMService,
    MetadataService,
    RunRegistry,
    StorageClient,
    TranscriptionService,
)
from recording_ingest.logging import setup_logging
from recording_ingest.worker import Worker

logger = setup_logging()


def build_storage(config: AppConfig) -> StorageClient:
    """Returns a MinIO storage client whose bucket is known to exist."""
    minio_client = Minio(
        endpoint=config.minio.endpoint,
        access_key=config.minio.user,
        secret_key=config.minio.password,
        secure=config.minio.secure,
    )
    storage = MinioStorageClient(minio_client, config.minio.bucket_name)
    storage.ensure_bucket_exists()
    return storage


def build_metadata_service(config: AppConfig) -> MetadataService:
    client = httpx.AsyncClient(
        base_url=config.metadata_api.base_url,
        timeout=config.metadata_api.timeout_seconds,
    )
    return HttpMetadataService(client)


def build_transcription_service(config: AppConfig) -> TranscriptionService:
    """Returns the speech-to-text backend named by the processing config."""
    provider = config.processing.transcription_provider
    logger.info("Transcription backend selected", extra={"provider": provider})

    if provider == "assemblyai":
        aai.settings.api_key = config.assemblyai.api_key
        transcriber = aai.Transcriber(config=aai.TranscriptionConfig())
        return AssemblyAITranscriber(transcriber)

    openai_client = AsyncOpenAI(api_key=config.openai.api_key)
    return WhisperTranscriber(openai_client, config.openai.transcription_model)


def build_llm_service(config: AppConfig) -> LLMService:
    """Returns the summary backend named by the processing config."""
    provider = config.processing.summary_provider
    logger.info("Summary backend selected", extra={"provider": provider})

    if provider == "gemini":
        gemini_client = genai.Client(api_key=config.gemini.api_key)
        return GeminiLLMService(gemini_client, config.gemini.model_name)

    openai_client = AsyncOpenAI(api_key=config.openai.api_key)
    return OpenAILLMService(openai_client, config.openai.summary_model)


def build_run_registry(config: AppConfig) -> RunRegistry:
    """Returns a Redis-backed registry when Redis is configured."""
    if config.redis is None:
        logger.info("Using in-memory run registry")
        return InMemoryRunRegistry(config.processing.run_claim_ttl_seconds)

    redis_client = redis.Redis(host=config.redis.host, port=config.redis.port)
    logger.info(
        "Using Redis run registry",
        extra={"host": config.redis.host, "port": config.redis.port},
    )
    return RedisRunRegistry(redis_client, config.processing.run_claim_ttl_seconds)


def build_pipeline(config: AppConfig) -> RecordingPipeline:
    return RecordingPipeline(
        artifacts=TempArtifactStore(config.processing.temp_dir),
        storage=build_storage(config),
        metadata=build_metadata_service(config),
        transcription_service=build_transcription_service(config),
        llm_service=build_llm_service(config),
        policy=ProcessingPolicy(
            premium_plan=config.processing.premium_plan,
            max_transcription_bytes=config.processing.max_transcription_bytes,
        ),
        run_registry=build_run_registry(config),
    )


def build_worker(config: AppConfig) -> Worker:
    """Returns a worker wired to the configured backends."""
    return Worker(RecordingSessionStore(), build_pipeline(config))
