"""HTTP surface for the browser UI."""

from .app import CORS_HEADERS, create_app

__all__ = ["create_app", "CORS_HEADERS"]
