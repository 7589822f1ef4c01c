"""Handlers orchestrating socket events and pipeline runs."""

from .recording_pipeline import RecordingPipeline

__all__ = ["RecordingPipeline"]
