"""
Response body writer.

``BodyWriter`` turns text or a structured record into a
``ResponseBody``: the complete UTF‑8 encoded bytes plus their content
type.  The bytes are always produced in full before a transport
response object is created, so a serialization failure surfaces as an
exception and nothing is sent.

``ResponseSink`` is a small writer object for handlers that prefer to
write their output instead of returning it.  Writes are buffered and
committed once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Type

from pydantic import BaseModel
from starlette.responses import Response

from body_binding_api.app.schemas.entity import BodyEntity
from body_binding_api.app.services.schema_codec import SchemaCodec

TEXT_PLAIN_UTF8 = "text/plain; charset=UTF-8"
APPLICATION_JSON = "application/json"


@dataclass(frozen=True)
class ResponseBody:
    """Encoded response payload and its content type."""

    content: bytes
    media_type: str

    def to_response(self, status_code: int = 200, headers: Optional[Mapping[str, str]] = None) -> Response:
        """Wrap the payload in a Starlette response."""
        return Response(
            content=self.content,
            status_code=status_code,
            headers=dict(headers) if headers else None,
            media_type=self.media_type,
        )


class BodyWriter:
    """Encode text and records as response bodies."""

    def __init__(self, codec: SchemaCodec) -> None:
        self.codec = codec

    @staticmethod
    def _encode(text: str) -> bytes:
        return text.encode("utf-8")

    def write_text(self, text: str) -> ResponseBody:
        return ResponseBody(self._encode(text), TEXT_PLAIN_UTF8)

    def write_structured(self, record: Any, schema: Type[BaseModel]) -> ResponseBody:
        """Serialize ``record`` as JSON in declaration order.

        Raises ``SchemaEncodeError`` if the record cannot be serialized.
        """
        return ResponseBody(self._encode(self.codec.encode(record, schema)), APPLICATION_JSON)

    def write_entity(self, entity: BodyEntity[str]) -> Response:
        """Write a text entity, carrying its headers onto the response.

        The content type is owned by the writer, so a ``Content-Type``
        header on the entity is ignored.
        """
        response = self.write_text(entity.body or "").to_response()
        for key, value in entity.headers:
            if key.lower() != "content-type":
                response.headers.append(key, value)
        return response


class ResponseSink:
    """Buffered text writer committed once as a response."""

    def __init__(self, writer: BodyWriter) -> None:
        self._writer = writer
        self._parts: List[str] = []
        self._committed = False

    def write(self, text: str) -> None:
        if self._committed:
            raise RuntimeError("Response has already been committed")
        self._parts.append(text)

    def commit(self, status_code: int = 200) -> Response:
        if self._committed:
            raise RuntimeError("Response has already been committed")
        self._committed = True
        return self._writer.write_text("".join(self._parts)).to_response(status_code=status_code)
