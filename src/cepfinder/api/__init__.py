"""
cepfinder REST API package.

Serves address lookups over HTTP with FastAPI.
"""

from .server import app  # noqa: F401
