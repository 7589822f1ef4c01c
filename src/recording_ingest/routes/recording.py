"""Recording socket and service status endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket
from starlette.requests import HTTPConnection

from recording_ingest.exceptions import InvalidEventError
from recording_ingest.logging import setup_logging
from recording_ingest.worker import Connection, Worker

logger = setup_logging()

router = APIRouter(tags=["recording"])


def get_worker(connection: HTTPConnection) -> Worker:
    """Returns the worker created by the application lifespan."""
    return connection.app.state.worker


WorkerDep = Annotated[Worker, Depends(get_worker)]


@router.get("/health")
def health(worker: WorkerDep) -> dict:
    """Reports liveness and how much work is in flight."""
    return {
        "status": "ok",
        "active_sessions": len(worker.sessions),
        "pending_runs": worker.pending_runs,
    }


@router.websocket("/ws/recording")
async def recording_socket(websocket: WebSocket, worker: WorkerDep):
    """
    Streams recording events from a desktop client.

    Every text frame is a JSON envelope `{"event": ..., "data": {...}}`.
    Invalid frames are answered with an `error` event and the connection
    stays open. On close, recordings left unfinalized are discarded.
    """
    await websocket.accept()
    connection = Connection()
    logger.info(
        "Socket connected",
        extra={
            "connection_id": connection.connection_id,
            "client": str(websocket.client),
        },
    )

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            frame = message.get("text")
            if frame is None:
                await websocket.send_json(
                    {"event": "error", "data": {"detail": "Expected a text frame"}}
                )
                continue

            try:
                reply = await worker.handle_frame(frame, connection)
            except InvalidEventError as e:
                await websocket.send_json(
                    {"event": "error", "data": {"detail": str(e)}}
                )
                continue

            if reply is not None:
                await websocket.send_json(reply)
    finally:
        await worker.on_disconnect(connection)
