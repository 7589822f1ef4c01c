from recording_ingest.config import AppConfig, load_config
from recording_ingest.logging import setup_logging

__all__ = ["AppConfig", "load_config", "setup_logging"]
