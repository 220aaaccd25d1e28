"""Entry point for the form relay.

Loads configuration from a ``.env`` file in the working directory (if
present) and from the environment, checks that the required values
are set and serves the FastAPI application with Uvicorn.

Required variables are ``BOT_TOKEN``, ``CHAT_ID`` and ``PORT``.  The
server binds to ``HOST`` (``127.0.0.1`` by default); put a reverse
proxy in front of it to expose the form publicly.

Usage:
    python run.py
"""
import asyncio
import logging

from dotenv import load_dotenv
from uvicorn import Config, Server

# Environment must be populated before the settings module is imported.
load_dotenv()

from form_relay.app.core.config import settings  # noqa: E402
from form_relay.app.core.logging_config import setup_logging  # noqa: E402
from form_relay.app.main import create_app  # noqa: E402


logger = logging.getLogger("form_relay")


async def main() -> None:
    """Validate the configuration and run the server until stopped."""
    setup_logging(settings.log_level, settings.log_file or None)
    missing = settings.missing_required()
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

    app = create_app(settings)
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logger.info("Starting server on http://%s:%d", settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
