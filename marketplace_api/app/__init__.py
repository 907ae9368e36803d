"""
Application package initializer.

The service is split into a few small pieces: ``core`` holds settings,
logging and database helpers, ``schemas`` the pydantic models,
``services`` the product store and the handlers, and ``api`` the
routing layer and the HTTP surface built on FastAPI.
"""

from .main import app  # noqa: F401
