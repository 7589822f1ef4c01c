"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recording_ingest.config import AppConfig, load_config
from recording_ingest.dependencies import build_worker
from recording_ingest.logging import setup_logging
from recording_ingest.routes import recording_router
from recording_ingest.worker import Worker

logger = setup_logging()


def create_app(
    config: AppConfig | None = None, worker: Worker | None = None
) -> FastAPI:
    """
    Builds the recording ingest application.

    Args:
        config: Application configuration; loaded from the environment when
            omitted.
        worker: Pre-built worker. When omitted, one is wired to the
            configured backends at startup.
    """
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.worker = worker or build_worker(config)
        logger.info(
            "Recording ingest service started",
            extra={"host": config.server.host, "port": config.server.port},
        )
        yield
        await app.state.worker.shutdown()
        logger.info("Recording ingest service stopped")

    app = FastAPI(title="Recording Ingest Service", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.server.cors_origin],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(recording_router)
    return app
