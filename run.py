"""Entry point for serving the Quote API.

Starts the FastAPI application with Uvicorn.  Host, port and log level
come from ``quote_api.app.core.config.settings`` and can therefore be
set with the ``API_HOST``, ``API_PORT`` and ``LOG_LEVEL`` environment
variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from quote_api.app.core.config import settings
from quote_api.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


def main() -> None:
    logging.getLogger(__name__).info(
        "Serving %s on %s:%s", settings.project_name, settings.api_host, settings.api_port
    )
    try:
        asyncio.run(run_api())
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
