"""Application configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class ServerConfig(BaseModel, frozen=True):
    """HTTP/WebSocket server configuration."""

    host: str = "0.0.0.0"
    port: int = 5001
    cors_origin: str = "http://localhost:5173"


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "recordings"
    secure: bool = False


class MetadataApiConfig(BaseModel, frozen=True):
    """Metadata service (dashboard API) configuration."""

    base_url: str
    timeout_seconds: float = 30.0


class ProcessingConfig(BaseModel, frozen=True):
    """Pipeline behaviour: temp storage, eligibility gate and backend selection."""

    temp_dir: Path = Path("temp_upload")
    premium_plan: str = "PRO"
    # Upper bound of the transcription backend's accepted upload size.
    max_transcription_bytes: int = 25_000_000
    transcription_provider: Literal["openai", "assemblyai"] = "openai"
    summary_provider: Literal["openai", "gemini"] = "openai"
    # How long a recording stays claimed against reprocessing.
    run_claim_ttl_seconds: int = 86400


class OpenAIConfig(BaseModel, frozen=True):
    """OpenAI API configuration."""

    api_key: str
    transcription_model: str = "whisper-1"
    summary_model: str = "gpt-4o-mini"


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str


class GeminiConfig(BaseModel, frozen=True):
    """Gemini LLM configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash-lite"


class RedisConfig(BaseModel, frozen=True):
    """Redis connection configuration for the run registry."""

    host: str
    port: int = 6379


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    server: ServerConfig
    minio: MinioConfig
    metadata_api: MetadataApiConfig
    processing: ProcessingConfig
    openai: OpenAIConfig
    assemblyai: AssemblyAIConfig
    gemini: GeminiConfig
    redis: RedisConfig | None = None


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    redis_host = os.getenv("REDIS_HOST", "")
    return AppConfig(
        server=ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5001")),
            cors_origin=os.getenv("ELECTRON_HOST", "http://localhost:5173"),
        ),
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "recordings"),
            secure=os.getenv("MINIO_SECURE", "false").lower() == "true",
        ),
        metadata_api=MetadataApiConfig(
            base_url=os.getenv("NEXT_API_HOST", "http://localhost:3000/api/"),
            timeout_seconds=float(os.getenv("METADATA_TIMEOUT_SECONDS", "30")),
        ),
        processing=ProcessingConfig(
            temp_dir=Path(os.getenv("TEMP_UPLOAD_DIR", "temp_upload")),
            premium_plan=os.getenv("PREMIUM_PLAN", "PRO"),
            max_transcription_bytes=int(
                os.getenv("TRANSCRIPTION_MAX_BYTES", "25000000")
            ),
            transcription_provider=os.getenv("TRANSCRIPTION_PROVIDER", "openai"),
            summary_provider=os.getenv("SUMMARY_PROVIDER", "openai"),
            run_claim_ttl_seconds=int(os.getenv("RUN_CLAIM_TTL_SECONDS", "86400")),
        ),
        openai=OpenAIConfig(
            api_key=os.getenv("OPENAI_API_KEY", ""),
            transcription_model=os.getenv("WHISPER_MODEL", "whisper-1"),
            summary_model=os.getenv("SUMMARY_MODEL", "gpt-4o-mini"),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash-lite"),
        ),
        redis=(
            RedisConfig(
                host=redis_host,
                port=int(os.getenv("REDIS_PORT", "6379")),
            )
            if redis_host
            else None
        ),
    )
