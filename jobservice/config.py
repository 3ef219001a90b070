"""
Service configuration.

Built once per process from environment variables and passed explicitly
into the request handler.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from sqlalchemy.engine import URL

DB_PORT = 5432
DEFAULT_RECRUITER_GROUP = "Recruiters"

REQUIRED_DB_VARS = ["DB_HOST", "DB_USER", "DB_PASSWORD", "DB_NAME"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(ValueError):
    """Raised when configuration is missing or invalid."""


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection parameters for the jobs database."""

    host: str
    user: str
    password: str = field(repr=False)
    database: str
    port: int = DB_PORT
    # TLS on, server certificate not verified
    sslmode: str = "require"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DatabaseConfig":
        """
        Build database config from DB_* variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            DatabaseConfig instance

        Raises:
            ConfigError: If any required variable is missing or empty
        """
        env = os.environ if environ is None else environ
        missing = [name for name in REQUIRED_DB_VARS if not env.get(name)]
        if missing:
            raise ConfigError(f"Missing database settings: {', '.join(missing)}")

        return cls(
            host=env["DB_HOST"],
            user=env["DB_USER"],
            password=env["DB_PASSWORD"],
            database=env["DB_NAME"],
        )

    def url(self) -> URL:
        """SQLAlchemy URL for the PostgreSQL driver."""
        return URL.create(
            "postgresql+psycopg2",
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    def connect_args(self) -> Dict[str, str]:
        return {"sslmode": self.sslmode}


@dataclass(frozen=True)
class ServiceConfig:
    """Everything the handler needs for one invocation."""

    database: Optional[DatabaseConfig]
    recruiter_group: str = DEFAULT_RECRUITER_GROUP
    log_level: str = "INFO"
    # Overrides `database`; used for local development against SQLite
    database_url: Optional[str] = None

    def __post_init__(self):
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid LOG_LEVEL {self.log_level!r}; expected one of {', '.join(LOG_LEVELS)}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceConfig":
        env = os.environ if environ is None else environ
        database_url = env.get("DATABASE_URL") or None
        database = None if database_url else DatabaseConfig.from_env(env)

        return cls(
            database=database,
            log_level=env.get("LOG_LEVEL", "INFO"),
            database_url=database_url,
        )

    def engine_options(self) -> Dict[str, object]:
        """
        Arguments for sqlalchemy.create_engine().

        Returns:
            Dict with "url" and "connect_args" keys
        """
        if self.database_url:
            return {"url": self.database_url, "connect_args": {}}
        if self.database is None:
            raise ConfigError("No database configured")
        return {"url": self.database.url(), "connect_args": self.database.connect_args()}
