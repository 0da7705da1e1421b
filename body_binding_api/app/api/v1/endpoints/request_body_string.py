"""
String request body controller.

Four handlers read a plain text body:

* v1 takes the request and a response sink;
* v2 takes only the body stream, the declared charset and a response
  sink, without touching the request object;
* v3 takes a headers‑plus‑body entity and answers with one;
* v4 takes the decoded text directly.

Every variant logs the same ``messageBody`` and answers ``ok``.
"""

import logging
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, Request, Response

from body_binding_api.app.api.v1.deps import (
    body_entity,
    body_stream,
    declared_charset,
    get_body_reader,
    get_body_writer,
    read_request_body,
    response_sink,
    text_body,
)
from body_binding_api.app.schemas.entity import BodyEntity
from body_binding_api.app.services.body_reader import BodyReader
from body_binding_api.app.services.body_writer import BodyWriter, ResponseSink

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/request-body-string-v1")
async def request_body_string_v1(
    request: Request,
    sink: ResponseSink = Depends(response_sink),
) -> Response:
    reader: BodyReader = get_body_reader(request)
    body = await read_request_body(request)
    message_body = reader.decode_text(body.raw, body.encoding)

    logger.info("messageBody=%s", message_body)

    sink.write("ok")
    return sink.commit()


@router.post("/request-body-string-v2")
async def request_body_string_v2(
    stream: AsyncIterator[bytes] = Depends(body_stream),
    charset: Optional[str] = Depends(declared_charset),
    reader: BodyReader = Depends(get_body_reader),
    sink: ResponseSink = Depends(response_sink),
) -> Response:
    """Drain the stream directly; the size limit applies while reading."""
    body = await reader.read_body_async(stream, charset)
    message_body = reader.decode_text(body.raw, body.encoding)

    logger.info("messageBody=%s", message_body)

    sink.write("ok")
    return sink.commit()


@router.post("/request-body-string-v3")
async def request_body_string_v3(
    entity: BodyEntity = Depends(body_entity()),
    writer: BodyWriter = Depends(get_body_writer),
) -> Response:
    """Entity in, entity out."""
    message_body = entity.body
    # entity.headers holds the request headers as well.
    logger.info("messageBody=%s", message_body)

    return writer.write_entity(BodyEntity(body="ok"))


@router.post("/request-body-string-v4")
async def request_body_string_v4(
    message_body: str = Depends(text_body),
    writer: BodyWriter = Depends(get_body_writer),
) -> Response:
    logger.info("messageBody=%s", message_body)

    return writer.write_text("ok").to_response()
