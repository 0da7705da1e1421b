"""
Top‑level router for version 1 of the API.

This router aggregates the controller routers.  Their paths are
absolute (``/request-body-json-v1`` and so on), so they are included
without a prefix here; ``create_app`` decides where the whole router is
mounted.
"""

from fastapi import APIRouter

from .endpoints import request_body_json, request_body_string

router = APIRouter()

router.include_router(request_body_json.router, tags=["request-body-json"])
router.include_router(request_body_string.router, tags=["request-body-string"])
