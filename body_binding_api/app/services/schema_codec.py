"""
JSON codec for Pydantic schemas.

``SchemaCodec`` parses JSON text into a Pydantic model and serializes
a model back to JSON text.  Decoding is lenient by default: keys the
schema does not declare are ignored and missing keys fall back to the
field default (``None`` for the tutorial payload).  An empty or
whitespace‑only document is treated as an empty object.  Setting
``strict_fields`` rejects unknown keys instead.

The codec holds only its configuration, so one instance can be shared
by every request.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional, Set, Type, TypeVar

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError

from body_binding_api.app.core.exceptions import SchemaDecodeError, SchemaEncodeError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _format_loc(loc: Iterable[Any]) -> Optional[str]:
    """Join a Pydantic error location into a dotted field path."""
    path = ".".join(str(part) for part in loc)
    return path or None


def _known_fields(schema: Type[BaseModel]) -> Set[str]:
    names = set(schema.model_fields)
    names.update(info.alias for info in schema.model_fields.values() if info.alias)
    return names


class SchemaCodec:
    """Convert between JSON text and Pydantic models."""

    def __init__(self, strict_fields: bool = False) -> None:
        self.strict_fields = strict_fields

    def decode(self, text: str, schema: Type[ModelT]) -> ModelT:
        """Parse ``text`` as a JSON object and validate it against ``schema``.

        Raises
        ------
        SchemaDecodeError
            If the text is not valid JSON, is not an object, carries an
            unknown key while ``strict_fields`` is set, or a value does
            not fit its field.  ``field_path`` names the offending field
            when one can be determined.
        """
        if not text.strip():
            data: Any = {}
        else:
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                raise SchemaDecodeError(
                    f"Malformed JSON body: {exc.msg} (line {exc.lineno}, column {exc.colno})"
                ) from exc
            except RecursionError as exc:
                raise SchemaDecodeError("JSON body is nested too deeply") from exc
            except ValueError as exc:
                # Valid syntax the parser still refuses, e.g. integers past the digit limit.
                raise SchemaDecodeError(f"Unsupported JSON value: {exc}") from exc

        if not isinstance(data, dict):
            raise SchemaDecodeError(
                f"Expected a JSON object for {schema.__name__}, got {type(data).__name__}"
            )

        if self.strict_fields:
            known = _known_fields(schema)
            for key in data:
                if key not in known:
                    raise SchemaDecodeError(f"Unknown field '{key}' for {schema.__name__}", field_path=key)

        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            error = exc.errors()[0]
            field_path = _format_loc(error.get("loc", ()))
            logger.debug("Validation of %s failed: %s", schema.__name__, exc.errors())
            raise SchemaDecodeError(
                f"Invalid value for field '{field_path}': {error['msg']}", field_path=field_path
            ) from exc

    def encode(self, record: Any, schema: Type[BaseModel]) -> str:
        """Serialize ``record`` to compact JSON in field declaration order.

        ``record`` may be an instance of ``schema`` or a mapping that
        validates against it.

        Raises
        ------
        SchemaEncodeError
            If the record does not fit the schema or holds a value that
            cannot be represented in JSON.
        """
        if not isinstance(record, schema):
            try:
                record = schema.model_validate(record)
            except ValidationError as exc:
                error = exc.errors()[0]
                field_path = _format_loc(error.get("loc", ()))
                raise SchemaEncodeError(
                    f"Cannot serialize {schema.__name__}: field '{field_path}' {error['msg']}",
                    field_path=field_path,
                ) from exc
        try:
            return record.model_dump_json(warnings=False)
        except PydanticSerializationError as exc:
            raise SchemaEncodeError(f"Cannot serialize {schema.__name__}: {exc}") from exc
