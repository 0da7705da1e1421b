"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
application starts without any configuration at all.  Tests and
embedding applications may construct their own ``Settings`` instance
and pass it to ``create_app`` instead of relying on the environment.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Body Binding API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Upper bound, in bytes, for a request body drained by the body
    # reader.  Larger bodies are rejected with HTTP 413.
    max_body_size: int = int(os.getenv("MAX_BODY_SIZE", str(1024 * 1024)))

    # Charset assumed when the request's Content-Type carries none.
    default_charset: str = os.getenv("DEFAULT_CHARSET", "utf-8")

    # When enabled, JSON bodies carrying fields unknown to the target
    # schema are rejected instead of silently ignored.
    strict_fields: bool = _env_flag("STRICT_FIELDS")

    # Prefix under which the tutorial routes are mounted.  Empty by
    # default so the paths read ``/request-body-json-v1`` and so on.
    api_prefix: str = os.getenv("API_PREFIX", "")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
