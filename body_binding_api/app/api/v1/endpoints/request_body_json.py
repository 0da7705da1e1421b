"""
JSON request body controller.

Five handlers read the same ``{"username": "hello", "age": 20}`` body
through progressively more convenient bindings:

* v1 drains the raw request stream and decodes it by hand, writing
  the reply through a response sink;
* v2 receives the body as text and parses it with the shared codec;
* v3 receives the decoded ``HelloData`` record;
* v4 receives a headers‑plus‑body entity wrapping the record;
* v5 receives the record and writes it back as JSON.

For valid input all of them log the same values and v1‑v4 answer
``ok``.  Expected content type: ``application/json``.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response

from body_binding_api.app.api.v1.deps import (
    body_entity,
    get_body_reader,
    get_body_writer,
    read_request_body,
    response_sink,
    structured_body,
    text_body,
)
from body_binding_api.app.schemas.entity import BodyEntity
from body_binding_api.app.schemas.hello import HelloData
from body_binding_api.app.services.body_reader import BodyReader
from body_binding_api.app.services.body_writer import BodyWriter, ResponseSink

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/request-body-json-v1")
async def request_body_json_v1(
    request: Request,
    sink: ResponseSink = Depends(response_sink),
) -> Response:
    """Read the raw stream, decode text and record manually."""
    reader: BodyReader = get_body_reader(request)
    body = await read_request_body(request)
    message_body = reader.decode_text(body.raw, body.encoding)

    logger.info("messageBody=%s", message_body)
    hello_data = reader.codec.decode(message_body, HelloData)
    logger.info("username=%s, age=%s", hello_data.username, hello_data.age)

    sink.write("ok")
    return sink.commit()


@router.post("/request-body-json-v2")
async def request_body_json_v2(
    message_body: str = Depends(text_body),
    reader: BodyReader = Depends(get_body_reader),
    writer: BodyWriter = Depends(get_body_writer),
) -> Response:
    """Receive the body as text and parse it with the shared codec."""
    logger.info("messageBody=%s", message_body)
    hello_data = reader.codec.decode(message_body, HelloData)
    logger.info("username=%s, age=%s", hello_data.username, hello_data.age)

    return writer.write_text("ok").to_response()


@router.post("/request-body-json-v3")
async def request_body_json_v3(
    hello_data: HelloData = Depends(structured_body(HelloData)),
    writer: BodyWriter = Depends(get_body_writer),
) -> Response:
    logger.info("username=%s, age=%s", hello_data.username, hello_data.age)

    return writer.write_text("ok").to_response()


@router.post("/request-body-json-v4")
async def request_body_json_v4(
    entity: BodyEntity = Depends(body_entity(HelloData)),
    writer: BodyWriter = Depends(get_body_writer),
) -> Response:
    """Receive headers and record together; only the body is used."""
    data: HelloData = entity.body
    logger.info("username=%s, age=%s", data.username, data.age)

    return writer.write_text("ok").to_response()


@router.post("/request-body-json-v5")
async def request_body_json_v5(
    data: HelloData = Depends(structured_body(HelloData)),
    writer: BodyWriter = Depends(get_body_writer),
) -> Response:
    """Echo the decoded record back as JSON."""
    logger.info("username=%s, age=%s", data.username, data.age)

    return writer.write_structured(data, HelloData).to_response()
