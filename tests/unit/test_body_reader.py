"""
Unit tests for the request body reader.
"""

import asyncio
import io

import pytest

from body_binding_api.app.core.exceptions import EncodingError, PayloadTooLarge, SchemaDecodeError
from body_binding_api.app.schemas.hello import HelloData
from body_binding_api.app.services.body_reader import BodyReader, RequestBody, charset_from_content_type


async def _chunks(*parts):
    for part in parts:
        yield part


class TestReadBody:
    """Tests for draining streams."""

    @pytest.mark.p0
    @pytest.mark.parametrize(
        "text",
        ["", "hello", "héllo wörld ✓", "😀 𝄞 non-BMP", "line one\r\nline two\n", "\u0000 nul and tab\t", "x" * 1024],
    )
    def test_text_round_trip(self, reader, text):
        body = reader.read_body(io.BytesIO(text.encode("utf-8")))

        assert reader.decode_text(body.raw) == text

    @pytest.mark.p0
    def test_empty_stream_reads_empty_body(self, reader):
        body = reader.read_body(io.BytesIO(b""))

        assert body.raw == b""
        assert len(body) == 0

    @pytest.mark.p1
    def test_closed_or_missing_stream_reads_empty_body(self, reader):
        stream = io.BytesIO(b"ignored")
        stream.close()

        assert reader.read_body(stream).raw == b""
        assert reader.read_body(None).raw == b""

    @pytest.mark.p0
    def test_oversized_stream_raises(self, codec):
        small = BodyReader(codec, max_body_size=8, chunk_size=3)

        with pytest.raises(PayloadTooLarge) as exc_info:
            small.read_body(io.BytesIO(b"0123456789"))

        assert exc_info.value.limit == 8

    @pytest.mark.p1
    def test_body_of_exactly_max_size_is_accepted(self, codec):
        small = BodyReader(codec, max_body_size=8, chunk_size=3)

        body = small.read_body(io.BytesIO(b"01234567"))

        assert body.raw == b"01234567"

    @pytest.mark.p1
    def test_declared_encoding_is_kept(self, reader):
        body = reader.read_body(io.BytesIO(b"x"), "ISO-8859-1")

        assert body.encoding == "ISO-8859-1"

    @pytest.mark.p0
    def test_async_stream(self, reader):
        body = asyncio.run(reader.read_body_async(_chunks(b"hel", b"", b"lo")))

        assert body.raw == b"hello"

    @pytest.mark.p0
    def test_async_stream_over_limit(self, codec):
        small = BodyReader(codec, max_body_size=4)

        with pytest.raises(PayloadTooLarge):
            asyncio.run(small.read_body_async(_chunks(b"abc", b"def")))


class TestDecodeText:
    """Tests for strict text decoding."""

    @pytest.mark.p0
    def test_invalid_utf8_raises(self, reader):
        with pytest.raises(EncodingError) as exc_info:
            reader.decode_text(b"\xff\xfeabc")

        assert exc_info.value.encoding == "utf-8"

    @pytest.mark.p1
    def test_declared_encoding_is_applied(self, reader):
        assert reader.decode_text("café".encode("latin-1"), "ISO-8859-1") == "café"

    @pytest.mark.p1
    def test_unknown_encoding_raises(self, reader):
        with pytest.raises(EncodingError):
            reader.decode_text(b"abc", "no-such-charset")

    @pytest.mark.p1
    def test_default_charset_is_configurable(self, codec):
        latin = BodyReader(codec, default_charset="latin-1")

        assert latin.decode_text(b"caf\xe9") == "café"


class TestDecodeStructured:
    """Tests for decoding records."""

    @pytest.mark.p0
    def test_decodes_record(self, reader, hello_json):
        data = reader.decode_structured(hello_json.encode("utf-8"), None, HelloData)

        assert data.username == "hello"
        assert data.age == 20

    @pytest.mark.p0
    def test_empty_body_yields_absent_fields(self, reader):
        data = reader.decode_structured(b"", None, HelloData)

        assert data.username is None
        assert data.age is None

    @pytest.mark.p0
    def test_encoding_error_precedes_parsing(self, reader):
        # Also malformed JSON, but the encoding problem must win.
        with pytest.raises(EncodingError):
            reader.decode_structured(b'{"username": "\xff', None, HelloData)

    @pytest.mark.p0
    def test_type_mismatch_reports_field(self, reader):
        raw = b'{"username":"hello","age":"not-a-number"}'

        with pytest.raises(SchemaDecodeError) as exc_info:
            reader.decode_structured(raw, "utf-8", HelloData)

        assert exc_info.value.field_path == "age"


class TestRequestBodyCache:
    """Decoded values are cached on the request body."""

    @pytest.mark.p1
    def test_text_is_decoded_once(self, reader, monkeypatch):
        body = RequestBody(b"hello")
        calls = []
        original = reader.decode_text

        def counting(raw, encoding=None):
            calls.append(raw)
            return original(raw, encoding)

        monkeypatch.setattr(reader, "decode_text", counting)

        assert reader.text(body) == "hello"
        assert reader.text(body) == "hello"
        assert len(calls) == 1

    @pytest.mark.p1
    def test_record_is_cached_per_schema(self, reader, hello_json):
        body = RequestBody(hello_json.encode("utf-8"))

        first = reader.record(body, HelloData)

        assert reader.record(body, HelloData) is first


class TestCharsetFromContentType:

    @pytest.mark.p1
    @pytest.mark.parametrize(
        "content_type, expected",
        [
            ("text/plain; charset=ISO-8859-1", "ISO-8859-1"),
            ('application/json; Charset="utf-8"', "utf-8"),
            ("application/json", None),
            ("text/plain; charset=", None),
            (None, None),
        ],
    )
    def test_charset_parameter(self, content_type, expected):
        assert charset_from_content_type(content_type) == expected
