"""
Pydantic schema definitions for API payloads.

Schemas describe the structured records the body reader decodes and
the body writer serializes.  ``entity`` holds the headers‑plus‑body
wrapper used by the entity style handlers.
"""
