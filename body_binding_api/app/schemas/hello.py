"""
Pydantic model for the tutorial payload.

``HelloData`` is the structured body exchanged by the JSON
controller, e.g. ``{"username": "hello", "age": 20}``.  Both fields
are optional: a body that omits one of them decodes with that
attribute set to ``None``, and unknown keys are ignored.  Field
declaration order is the order used when the record is written back
as JSON.
"""

from typing import Optional

from pydantic import BaseModel, Field


class HelloData(BaseModel):
    """Schema for the username/age record."""

    username: Optional[str] = Field(None, examples=["hello"])
    age: Optional[int] = Field(None, examples=[20])
