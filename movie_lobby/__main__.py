"""
Entry point for running the API server.

Usage:
    python -m movie_lobby

Exits with status 1 when the configuration is incomplete or the
database cannot be reached at startup.
"""

import logging
import sys

import uvicorn

from .config import Config
from .exceptions import ConfigError
from .logging_config import setup_logger


def main() -> None:
    try:
        config = Config.from_env()
    except ConfigError as e:
        setup_logger("movie_lobby.server").error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger = setup_logger("movie_lobby.server", config.log_dir)

    from api.main import create_app

    logger.info(f"Starting Movie Lobby API on {config.host}:{config.port}")
    server = uvicorn.Server(
        uvicorn.Config(create_app(config), host=config.host, port=config.port, log_level=logging.INFO)
    )
    server.run()
    if not server.started:
        logger.error("Server did not start; exiting")
        sys.exit(1)


if __name__ == "__main__":
    main()
