"""
Version 1 of the API.

This subpackage bundles the request body tutorial controllers together
with the FastAPI dependencies that bind request bodies to handler
parameters.
"""
