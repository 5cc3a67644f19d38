"""
Top-level package for the School Schedule API.

All functionality lives in submodules under ``app``; run the server
with ``python run.py`` or point uvicorn at
``school_schedule_api.app.main:app``.
"""

__all__ = []
