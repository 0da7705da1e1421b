"""
Pytest configuration and fixtures for the Body Binding API tests.
"""

import pytest
from fastapi.testclient import TestClient

from body_binding_api.app.core.config import Settings
from body_binding_api.app.main import create_app
from body_binding_api.app.services.body_reader import BodyReader
from body_binding_api.app.services.body_writer import BodyWriter
from body_binding_api.app.services.schema_codec import SchemaCodec


@pytest.fixture
def codec():
    return SchemaCodec()


@pytest.fixture
def reader(codec):
    return BodyReader(codec, max_body_size=1024)


@pytest.fixture
def writer(codec):
    return BodyWriter(codec)


@pytest.fixture
def app_settings():
    """Settings independent of the environment the tests run in."""
    return Settings(
        project_name="Body Binding API (test)",
        log_level="INFO",
        log_file="",
        max_body_size=1024,
        default_charset="utf-8",
        strict_fields=False,
        api_prefix="",
    )


@pytest.fixture
def client(app_settings):
    """Create a test client for a freshly built app."""
    return TestClient(create_app(app_settings))


@pytest.fixture
def hello_json():
    return '{"username":"hello","age":20}'


# Pytest markers
def pytest_configure(config):
    config.addinivalue_line("markers", "p0: Priority 0 (critical) tests")
    config.addinivalue_line("markers", "p1: Priority 1 (high) tests")
