"""
Application package initializer.

The API is organised in layers: ``core`` (configuration, logging,
errors and the record store), ``schemas`` (request and response
models), ``services`` (validation and integrity rules over a loaded
dataset) and ``api`` (FastAPI routers, grouped by version under
``api/<version>/``).
"""

from .main import app  # noqa: F401
