from __future__ import annotations

from pathlib import Path

import pytest

from recording_ingest.config import load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in (
        "REDIS_HOST",
        "PORT",
        "TEMP_UPLOAD_DIR",
        "SUMMARY_PROVIDER",
        "MINIO_SECURE",
        "PREMIUM_PLAN",
        "TRANSCRIPTION_MAX_BYTES",
        "RUN_CLAIM_TTL_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment() -> None:
    config = load_config()

    assert config.server.port == 5001
    assert config.processing.temp_dir == Path("temp_upload")
    assert config.processing.premium_plan == "PRO"
    assert config.processing.max_transcription_bytes == 25_000_000
    assert config.minio.secure is False
    assert config.processing.run_claim_ttl_seconds == 86400
    assert config.redis is None


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("SUMMARY_PROVIDER", "gemini")
    monkeypatch.setenv("MINIO_SECURE", "TRUE")
    monkeypatch.setenv("REDIS_HOST", "redis")
    monkeypatch.setenv("RUN_CLAIM_TTL_SECONDS", "600")

    config = load_config()

    assert config.server.port == 8080
    assert config.processing.summary_provider == "gemini"
    assert config.minio.secure is True
    assert config.redis.host == "redis"
    assert config.redis.port == 6379
    assert config.processing.run_claim_ttl_seconds == 600


def test_unknown_provider_is_rejected(monkeypatch) -> None:
    monkeypatch.setenv("SUMMARY_PROVIDER", "llama")

    with pytest.raises(ValueError):
        load_config()
