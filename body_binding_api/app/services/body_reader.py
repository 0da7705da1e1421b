"""
Request body reader.

The reader drains a request body from its transport stream into
memory, bounded by ``max_body_size``, and decodes the bytes either as
text or as a structured record.  Decoding is strict: bytes that are
invalid for the declared character encoding raise ``EncodingError``
and are never replaced.  Structured decoding always decodes text
first, so an encoding problem is reported before any JSON parsing is
attempted.

A transport stream can only be consumed once.  ``read_body`` and
``read_body_async`` therefore return a ``RequestBody`` which keeps the
bytes and caches what has been decoded from them for the rest of the
request.  The reader itself holds configuration only and may be used
concurrently by independent requests.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel

from body_binding_api.app.core.exceptions import EncodingError, PayloadTooLarge
from body_binding_api.app.services.schema_codec import SchemaCodec

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_CHUNK_SIZE = 64 * 1024


def charset_from_content_type(content_type: Optional[str]) -> Optional[str]:
    """Return the ``charset`` parameter of a Content-Type value, if any.

    >>> charset_from_content_type("text/plain; charset=ISO-8859-1")
    'ISO-8859-1'
    >>> charset_from_content_type("application/json") is None
    True
    """
    if not content_type:
        return None
    for param in content_type.split(";")[1:]:
        key, _, value = param.partition("=")
        if key.strip().lower() == "charset":
            value = value.strip().strip('"').strip("'")
            return value or None
    return None


class RequestBody:
    """Bytes of a single request body plus their declared encoding.

    ``encoding`` is ``None`` when the request did not declare one; the
    reader then applies its default charset.
    """

    __slots__ = ("_raw", "_encoding", "_text", "_records")

    def __init__(self, raw: bytes, encoding: Optional[str] = None) -> None:
        self._raw = bytes(raw)
        self._encoding = encoding
        self._text: Optional[str] = None
        self._records: Dict[type, Any] = {}

    @property
    def raw(self) -> bytes:
        return self._raw

    @property
    def encoding(self) -> Optional[str]:
        return self._encoding

    def __len__(self) -> int:
        return len(self._raw)

    def __repr__(self) -> str:
        return f"RequestBody(size={len(self._raw)}, encoding={self._encoding!r})"


class BodyReader:
    """Drain and decode request bodies."""

    def __init__(
        self,
        codec: SchemaCodec,
        max_body_size: int = 1024 * 1024,
        default_charset: str = "utf-8",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.codec = codec
        self.max_body_size = max_body_size
        self.default_charset = default_charset
        self.chunk_size = chunk_size

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------
    def _append(self, buffer: bytearray, chunk: bytes) -> None:
        if len(buffer) + len(chunk) > self.max_body_size:
            logger.warning(
                "Request body exceeds %s bytes, rejecting after %s bytes",
                self.max_body_size,
                len(buffer) + len(chunk),
            )
            raise PayloadTooLarge(self.max_body_size)
        buffer.extend(chunk)

    def read_body(self, stream: Any, declared_encoding: Optional[str] = None) -> RequestBody:
        """Drain a blocking file‑like ``stream`` into a ``RequestBody``.

        A ``None`` or already closed stream reads as an empty body.

        Raises
        ------
        PayloadTooLarge
            If more than ``max_body_size`` bytes are available.
        """
        buffer = bytearray()
        if stream is not None and not getattr(stream, "closed", False):
            while True:
                # Ask for one byte past the limit so an exact-size body is accepted.
                want = min(self.chunk_size, self.max_body_size - len(buffer) + 1)
                chunk = stream.read(want)
                if not chunk:
                    break
                self._append(buffer, chunk)
        logger.debug("Read request body of %s bytes", len(buffer))
        return RequestBody(bytes(buffer), declared_encoding)

    async def read_body_async(
        self, chunks: AsyncIterable[bytes], declared_encoding: Optional[str] = None
    ) -> RequestBody:
        """Drain an asynchronous chunk iterator, e.g. ``Request.stream()``."""
        buffer = bytearray()
        async for chunk in chunks:
            if chunk:
                self._append(buffer, chunk)
        logger.debug("Read request body of %s bytes", len(buffer))
        return RequestBody(bytes(buffer), declared_encoding)

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------
    def decode_text(self, raw: bytes, encoding: Optional[str] = None) -> str:
        """Strictly decode ``raw`` with ``encoding`` (default charset if omitted).

        Raises
        ------
        EncodingError
            If the encoding is unknown or the bytes are invalid for it.
        """
        encoding = encoding or self.default_charset
        try:
            return bytes(raw).decode(encoding, errors="strict")
        except LookupError as exc:
            raise EncodingError(encoding, f"Unknown character encoding: {encoding}") from exc
        except UnicodeDecodeError as exc:
            raise EncodingError(
                encoding,
                f"Request body is not valid {encoding}: {exc.reason} at byte {exc.start}",
            ) from exc

    def decode_structured(self, raw: bytes, encoding: Optional[str], schema: Type[ModelT]) -> ModelT:
        """Decode ``raw`` as text, then parse it into ``schema``."""
        text = self.decode_text(raw, encoding)
        return self.codec.decode(text, schema)

    def text(self, body: RequestBody) -> str:
        """Decoded text of ``body``, cached on the body."""
        if body._text is None:
            body._text = self.decode_text(body.raw, body.encoding)
        return body._text

    def record(self, body: RequestBody, schema: Type[ModelT]) -> ModelT:
        """Decoded ``schema`` record of ``body``, cached on the body per schema."""
        if schema not in body._records:
            body._records[schema] = self.codec.decode(self.text(body), schema)
        return body._records[schema]
