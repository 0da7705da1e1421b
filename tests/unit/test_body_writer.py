"""
Unit tests for the response body writer.
"""

import asyncio

import pytest
from starlette.requests import Request

from body_binding_api.app.api.v1.deps import body_entity
from body_binding_api.app.core.exceptions import SchemaEncodeError
from body_binding_api.app.schemas.entity import BodyEntity
from body_binding_api.app.schemas.hello import HelloData
from body_binding_api.app.services.body_reader import RequestBody
from body_binding_api.app.services.body_writer import (
    APPLICATION_JSON,
    TEXT_PLAIN_UTF8,
    ResponseBody,
    ResponseSink,
)


class TestWriteText:

    @pytest.mark.p0
    def test_utf8_text_plain(self, writer):
        body = writer.write_text("ok ✓")

        assert body == ResponseBody("ok ✓".encode("utf-8"), TEXT_PLAIN_UTF8)

    @pytest.mark.p1
    def test_response_content_type(self, writer):
        response = writer.write_text("ok").to_response()

        assert response.status_code == 200
        assert response.body == b"ok"
        assert response.headers["content-type"] == "text/plain; charset=UTF-8"


class TestWriteStructured:

    @pytest.mark.p0
    def test_json_body(self, writer):
        body = writer.write_structured(HelloData(username="hello", age=20), HelloData)

        assert body.media_type == APPLICATION_JSON
        assert body.content == b'{"username":"hello","age":20}'

    @pytest.mark.p0
    def test_encode_failure_produces_no_body(self, writer):
        with pytest.raises(SchemaEncodeError):
            writer.write_structured({"username": object()}, HelloData)


class TestWriteEntity:

    @pytest.mark.p1
    def test_entity_headers_are_carried(self, writer):
        response = writer.write_entity(
            BodyEntity(body="ok", headers={"X-Trace": "abc", "Content-Type": "text/html"})
        )

        assert response.body == b"ok"
        assert response.headers["x-trace"] == "abc"
        assert response.headers["content-type"] == TEXT_PLAIN_UTF8

    @pytest.mark.p1
    def test_entity_header_lookup_is_case_insensitive(self):
        entity = BodyEntity(body="x", headers={"Content-Type": "text/plain"})

        assert entity.header("content-type") == "text/plain"
        assert entity.header("x-missing", "none") == "none"


class TestResponseSink:

    @pytest.mark.p0
    def test_writes_are_committed_once(self, writer):
        sink = ResponseSink(writer)
        sink.write("o")
        sink.write("k")

        response = sink.commit()

        assert response.body == b"ok"
        with pytest.raises(RuntimeError):
            sink.write("more")
        with pytest.raises(RuntimeError):
            sink.commit()


class TestWriterReaderRoundTrip:

    @pytest.mark.p0
    @pytest.mark.parametrize(
        "record",
        [
            HelloData(username="hello", age=20),
            HelloData(username="😀 𝄞", age=-5),
            HelloData(username="", age=0),
            HelloData(),
        ],
    )
    def test_written_record_reads_back(self, reader, writer, record):
        content = writer.write_structured(record, HelloData).content

        assert reader.decode_structured(content, None, HelloData) == record

    @pytest.mark.p0
    @pytest.mark.parametrize("text", ["", "ok", "héllo ✓", "😀 non-BMP"])
    def test_written_text_reads_back(self, reader, writer, text):
        assert reader.decode_text(writer.write_text(text).content) == text


class TestRepeatedHeaders:

    @pytest.mark.p1
    def test_request_headers_keep_repeated_values(self, reader):
        scope = {
            "type": "http",
            "method": "POST",
            "path": "/",
            "headers": [(b"x-tag", b"a"), (b"x-tag", b"b"), (b"content-type", b"text/plain")],
        }
        dependency = body_entity()

        entity = asyncio.run(dependency(Request(scope), body=RequestBody(b"hi"), reader=reader))

        assert entity.body == "hi"
        assert entity.header_values("X-Tag") == ["a", "b"]
        assert entity.header("x-tag") == "a"

    @pytest.mark.p1
    def test_response_keeps_repeated_values(self, writer):
        response = writer.write_entity(BodyEntity(body="ok", headers=[("X-Tag", "a"), ("X-Tag", "b")]))

        assert response.headers.getlist("x-tag") == ["a", "b"]
