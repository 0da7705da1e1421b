"""
Logging configuration for the application.

``setup_logging`` applies the configured level to the application's
own ``body_binding_api`` logger and, when nothing has configured the
root logger yet, attaches a console handler and an optional file
handler to it.  Records carry the timestamp, level, logger name and
message, e.g.::

    2024-05-01 12:00:00 [INFO] body_binding_api.app.api.v1.endpoints.request_body_json: username=hello, age=20
"""

import logging
from pathlib import Path
from typing import Optional

APP_LOGGER = "body_binding_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure application and root logging.

    Parameters
    ----------
    level : str
        Level name for the application loggers (e.g. ``"DEBUG"``).
        Case insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Optional path of a file receiving the same records as the
        console.  Only used when the root logger is configured here.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.getLogger(APP_LOGGER).setLevel(numeric_level)

    root = logging.getLogger()
    if root.handlers:
        # Someone else (uvicorn, pytest, an embedding app) owns the handlers.
        return
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
