"""
Top‑level package for the Body Binding API.

This file makes ``body_binding_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``body_binding_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
