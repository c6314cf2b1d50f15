#!/usr/bin/env python3
"""
Check that the configured MongoDB is reachable.

Usage:
    python scripts/check_db_connection.py
    python scripts/check_db_connection.py --env-file path/to/.env
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from movie_lobby.config import Config
from movie_lobby.database import MovieStore
from movie_lobby.exceptions import ConfigError, StoreError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def check_connection(config: Config) -> int:
    """Ping the database and report how many movies it holds."""
    store = MovieStore.from_config(config)
    try:
        logger.info(f"Attempting to connect to {config.redacted_uri()}")
        await store.ping()
        movies = await store.list_all()
        logger.info(f"Connected; {config.db_name}.{config.collection_name} holds {len(movies)} movies")
        return 0
    except StoreError as e:
        logger.error(f"Connection failed: {e.__cause__ or e}")
        return 1
    finally:
        store.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Check the Movie Lobby database connection")
    parser.add_argument("--env-file", help="Path to a .env file")
    args = parser.parse_args()

    try:
        config = Config.from_env(args.env_file)
    except ConfigError as e:
        logger.error(str(e))
        sys.exit(1)

    sys.exit(asyncio.run(check_connection(config)))


if __name__ == "__main__":
    main()
