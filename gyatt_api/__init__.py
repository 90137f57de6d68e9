"""
Top-level package for the GYATT PPL API.

All functionality lives in submodules under ``app``; see
``gyatt_api.app.main`` for the application factory.
"""

__all__ = []
