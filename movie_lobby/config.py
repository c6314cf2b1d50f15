"""
Configuration management for Movie Lobby.

Loads configuration from environment variables and provides
a centralized Config dataclass for all settings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

REQUIRED_KEYS = ("MONGO_URI", "JWT_SECRET", "PORT")


def _int_env(name: str, default: Optional[str] = None) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


@dataclass
class Config:
    """Centralized configuration from environment variables."""

    # Database
    mongo_uri: str
    db_name: str = "movie_lobby"
    collection_name: str = "movies"
    store_timeout_ms: int = 5000

    # JWT settings
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 5000

    # Paths
    log_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    # CORS settings
    allowed_origins: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            env_path: Optional path to .env file. If not provided,
                     python-dotenv searches from the current directory.

        Returns:
            Config instance with loaded values.

        Raises:
            ConfigError: If required environment variables are missing
                or malformed.
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        missing = [key for key in REQUIRED_KEYS if not os.getenv(key)]
        if missing:
            raise ConfigError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        mongo_uri = os.environ["MONGO_URI"]
        jwt_secret = os.environ["JWT_SECRET"]
        port = _int_env("PORT")

        # Database config
        db_name = os.getenv("MONGO_DB_NAME") or _db_name_from_uri(mongo_uri) or "movie_lobby"
        collection_name = os.getenv("MONGO_COLLECTION", "movies")
        store_timeout_ms = _int_env("STORE_TIMEOUT_MS", "5000")

        jwt_algorithm = os.getenv("JWT_ALGORITHM", "HS256")
        host = os.getenv("HOST", "0.0.0.0")
        log_dir = Path(os.getenv("LOG_DIR", Path.cwd() / "logs"))

        # CORS settings
        origins_str = os.getenv("ALLOWED_ORIGINS", "")
        allowed_origins = [o.strip() for o in origins_str.split(",") if o.strip()]

        return cls(
            mongo_uri=mongo_uri,
            db_name=db_name,
            collection_name=collection_name,
            store_timeout_ms=store_timeout_ms,
            jwt_secret=jwt_secret,
            jwt_algorithm=jwt_algorithm,
            host=host,
            port=port,
            log_dir=log_dir,
            allowed_origins=allowed_origins,
        )

    def redacted_uri(self) -> str:
        """Mongo URI with the password part masked, safe for logs."""
        scheme, sep, rest = self.mongo_uri.partition("://")
        if not sep or "@" not in rest:
            return self.mongo_uri
        credentials, _, host_part = rest.rpartition("@")
        user = credentials.split(":", 1)[0]
        return f"{scheme}://{user}:***@{host_part}"


def _db_name_from_uri(uri: str) -> Optional[str]:
    """Extract the default database from a mongodb:// URI path, if any."""
    _, sep, rest = uri.partition("://")
    if not sep:
        return None
    rest = rest.rpartition("@")[2]
    _, slash, path = rest.partition("/")
    if not slash:
        return None
    name = path.split("?", 1)[0]
    return name or None
