"""
FastAPI dependencies shared by the endpoints.

The record store is created once by ``create_app`` and kept on
``app.state``; handlers receive it through ``get_store`` and load a
fresh dataset from it on every request.
"""

from fastapi import Request

from school_schedule_api.app.core.store import RecordStore


def get_store(request: Request) -> RecordStore:
    """Return the record store of the running application."""
    return request.app.state.store
