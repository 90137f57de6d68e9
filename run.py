"""Entry point for serving the API.

Loads a ``.env`` file from the working directory (if present), then
serves the application with Uvicorn.  Host and port are read from the
``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0`` and
``3000``); see ``gyatt_api.app.core.config`` for every supported
variable.

Usage:
    python run.py
"""
import asyncio
import logging

from dotenv import load_dotenv
from uvicorn import Config, Server


async def main() -> None:
    """Build the application from the environment and serve it."""
    # Import after load_dotenv so Settings sees the .env values.
    from gyatt_api.app.main import app

    settings = app.state.settings
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        proxy_headers=True,
    )
    server = Server(config)
    logging.getLogger(__name__).info("API available at http://%s:%s/api", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    load_dotenv()
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
