"""
Main entrypoint for the Body Binding API.

This module assembles the FastAPI application, sets up logging,
builds the shared body reader, writer and schema codec, registers the
error handlers that translate body binding failures into HTTP
responses, and includes the versioned router.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn body_binding_api.app.main:app --reload
"""

import logging
from typing import Dict, Optional, Type

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.exceptions import (
    BodyBindingError,
    EncodingError,
    PayloadTooLarge,
    SchemaDecodeError,
    SchemaEncodeError,
)
from .core.logging_config import setup_logging
from .services.body_reader import BodyReader
from .services.body_writer import BodyWriter
from .services.schema_codec import SchemaCodec

logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[Type[BodyBindingError], int] = {
    PayloadTooLarge: 413,
    EncodingError: 400,
    SchemaDecodeError: 400,
    SchemaEncodeError: 500,
}


def status_for(exc: BodyBindingError) -> int:
    """HTTP status for a body binding error, resolved along its MRO."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 400


async def body_binding_exception_handler(request: Request, exc: BodyBindingError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, status_code, exc.message)
    return JSONResponse(status_code=status_code, content={"detail": exc.message, **exc.details})


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to build the app with.  Defaults to the module level
        ``settings`` read from the environment.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
    )

    # One codec, reader and writer per process; they keep no request state.
    codec = SchemaCodec(strict_fields=app_settings.strict_fields)
    app.state.settings = app_settings
    app.state.body_reader = BodyReader(
        codec,
        max_body_size=app_settings.max_body_size,
        default_charset=app_settings.default_charset,
    )
    app.state.body_writer = BodyWriter(codec)

    app.add_exception_handler(BodyBindingError, body_binding_exception_handler)

    app.include_router(v1_router, prefix=app_settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
