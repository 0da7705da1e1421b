"""
FastAPI dependencies binding request bodies to handler parameters.

The reader, writer and codec are built once in ``create_app`` and
stored on ``app.state``; the dependencies below fetch them from there
for each request.  The request body is drained at most once per
request: ``read_request_body`` stores the resulting ``RequestBody`` on
``request.state`` and every later binding (text, record or entity)
decodes from that copy.
"""

from typing import AsyncIterator, Optional, Type

from fastapi import Depends, Request

from body_binding_api.app.core.exceptions import PayloadTooLarge
from body_binding_api.app.schemas.entity import BodyEntity
from body_binding_api.app.services.body_reader import BodyReader, RequestBody, charset_from_content_type
from body_binding_api.app.services.body_writer import BodyWriter, ResponseSink


def get_body_reader(request: Request) -> BodyReader:
    return request.app.state.body_reader


def get_body_writer(request: Request) -> BodyWriter:
    return request.app.state.body_writer


def declared_charset(request: Request) -> Optional[str]:
    """Charset declared by the request's Content-Type header, if any."""
    return charset_from_content_type(request.headers.get("content-type"))


def body_stream(request: Request) -> AsyncIterator[bytes]:
    """The raw transport stream of the request body."""
    return request.stream()


def response_sink(writer: BodyWriter = Depends(get_body_writer)) -> ResponseSink:
    return ResponseSink(writer)


async def read_request_body(request: Request) -> RequestBody:
    """Drain the request body once and cache it for the request.

    A Content-Length above the reader's limit is rejected before any
    byte is read; otherwise the limit is enforced while streaming.
    """
    cached = getattr(request.state, "request_body", None)
    if cached is not None:
        return cached
    reader = get_body_reader(request)
    declared_length = request.headers.get("content-length", "")
    if declared_length.isdigit() and int(declared_length) > reader.max_body_size:
        raise PayloadTooLarge(reader.max_body_size)
    body = await reader.read_body_async(request.stream(), declared_charset(request))
    request.state.request_body = body
    return body


async def text_body(
    body: RequestBody = Depends(read_request_body),
    reader: BodyReader = Depends(get_body_reader),
) -> str:
    """The request body decoded as text."""
    return reader.text(body)


def structured_body(schema: Type):
    """Build a dependency decoding the request body into ``schema``."""

    async def dependency(
        body: RequestBody = Depends(read_request_body),
        reader: BodyReader = Depends(get_body_reader),
    ):
        return reader.record(body, schema)

    dependency.__name__ = f"{schema.__name__.lower()}_body"
    return dependency


def body_entity(schema: Optional[Type] = None):
    """Build a dependency returning the request headers plus decoded body.

    Without a ``schema`` the body is decoded as text.
    """

    async def dependency(
        request: Request,
        body: RequestBody = Depends(read_request_body),
        reader: BodyReader = Depends(get_body_reader),
    ) -> BodyEntity:
        value = reader.record(body, schema) if schema is not None else reader.text(body)
        return BodyEntity(body=value, headers=request.headers)

    dependency.__name__ = f"{schema.__name__.lower()}_entity" if schema is not None else "text_entity"
    return dependency
