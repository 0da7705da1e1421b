"""
Exception classes for the body handling layer.

The reader and writer raise these as terminal failures of the current
exchange.  Mapping them to HTTP status codes is the job of the
handlers registered in ``main.create_app``, not of the services
themselves.
"""

from typing import Optional


class BodyBindingError(Exception):
    """Base exception for all body binding errors"""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class PayloadTooLarge(BodyBindingError):
    """Raised when a request body exceeds the configured maximum size"""

    def __init__(self, limit: int, message: Optional[str] = None):
        self.limit = limit
        msg = message or f"Request body exceeds the maximum of {limit} bytes"
        super().__init__(msg, {"limit": limit})


class EncodingError(BodyBindingError):
    """Raised when body bytes are invalid for the declared encoding"""

    def __init__(self, encoding: str, message: Optional[str] = None):
        self.encoding = encoding
        msg = message or f"Request body is not valid {encoding}"
        super().__init__(msg, {"encoding": encoding})


class SchemaDecodeError(BodyBindingError):
    """Raised when text cannot be parsed into the target schema"""

    def __init__(self, message: str, field_path: Optional[str] = None):
        self.field_path = field_path
        details = {"field": field_path} if field_path else {}
        super().__init__(message, details)


class SchemaEncodeError(BodyBindingError):
    """Raised when a record cannot be serialized"""

    def __init__(self, message: str, field_path: Optional[str] = None):
        self.field_path = field_path
        details = {"field": field_path} if field_path else {}
        super().__init__(message, details)
