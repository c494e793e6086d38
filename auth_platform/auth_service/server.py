"""
Entry point for the authentication service.
"""
import asyncio
import logging

import uvicorn

from .config import settings
from .main import create_app
from .utils.event_logger import setup_logging

logger = logging.getLogger(__name__)


async def serve() -> None:
    setup_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    logger.info("Starting Auth Service on %s:%s", settings.AUTH_HOST, settings.AUTH_PORT)

    config = uvicorn.Config(
        create_app(settings),
        host=settings.AUTH_HOST,
        port=settings.AUTH_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    main()
