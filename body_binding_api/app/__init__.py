"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  The body handling core lives in ``services`` (reader,
writer and schema codec), payload models live in ``schemas`` and the
tutorial controllers are exposed as routers under ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
