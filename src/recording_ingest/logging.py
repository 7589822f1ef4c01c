import logging
import sys

from pythonjsonlogger.json import JsonFormatter

_UVICORN_LOGGERS = ["uvicorn", "uvicorn.access", "uvicorn.error"]


def setup_logging(level: int = logging.INFO):
    """
    Configures structured JSON logging for the recording service.

    Installs a single stdout handler with a JSON formatter on the root logger
    and on the Uvicorn loggers, so socket events, pipeline stages and access
    logs share one format. The formatter carries timestamp, level, logger
    name, message, trace_id and span_id (the last two are filled in by
    ddtrace log injection when tracing is enabled).

    Calling it more than once is safe; handlers are replaced, not stacked.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in _UVICORN_LOGGERS:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(level)
        u_logger.handlers = []
        u_logger.addHandler(stream_handler)
        u_logger.propagate = False

    return root_logger
