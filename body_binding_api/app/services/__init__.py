"""
Service layer for body handling.

``body_reader`` drains and decodes request bodies, ``body_writer``
produces response bodies and ``schema_codec`` converts between JSON
text and Pydantic models.  None of them keeps per‑request state, so a
single instance of each is built at start‑up and shared by all
requests.
"""
