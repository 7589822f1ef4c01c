"""API routes."""

from .recording import router as recording_router

__all__ = ["recording_router"]
