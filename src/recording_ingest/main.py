"""
Recording Ingest Service.

Entry point for the recording ingest service. It handles:
- Receiving recording chunks from desktop clients over a WebSocket.
- Storing finalized recordings in MinIO object storage.
- Transcribing and summarizing eligible recordings.
- Reporting processing status to the dashboard API.
- Distributed tracing with Datadog.
- Structured JSON logging.
"""

import uvicorn
from ddtrace import patch_all

from recording_ingest.app_factory import create_app
from recording_ingest.config import load_config

patch_all()

app = create_app()


def main():
    """Starts the HTTP/WebSocket server."""
    config = load_config()
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)


if __name__ == "__main__":
    main()
