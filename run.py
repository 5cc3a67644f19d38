"""Entry point for the School Schedule API.

Starts the FastAPI application with Uvicorn.  Host, port and log level
come from the environment (``HOST``, ``PORT``, ``LOG_LEVEL``); see
``school_schedule_api/app/core/config.py`` for every supported
variable.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from school_schedule_api.app.core.config import settings
from school_schedule_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        logging.getLogger(__name__).info("Server stopped")
