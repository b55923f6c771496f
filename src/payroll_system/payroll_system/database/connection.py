from __future__ import annotations

import logging
from dataclasses import dataclass

import mysql.connector

from ..core.constants import DEFAULT_CONNECTION_TIMEOUT
from ..core.exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    connection_timeout: int = DEFAULT_CONNECTION_TIMEOUT

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config["user"]),
            password=str(db_config["password"]),
            database=str(db_config["database"]),
            connection_timeout=int(db_config.get("connection_timeout", DEFAULT_CONNECTION_TIMEOUT)),
        )


class DatabaseConnection:
    """DB connection factory, constructed once and passed to every repository.

    Note: We create short-lived connections per operation (safe for simple Flask apps
    and for worker threads, which never share a connection).
    """

    def __init__(self, config: DBConfig):
        self._config = config

    @property
    def config(self) -> DBConfig:
        return self._config

    def connect(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
                connection_timeout=int(self._config.connection_timeout),
            )
        except mysql.connector.Error as exc:
            logger.error(
                "Cannot connect to %s:%s/%s: %s",
                self._config.host,
                self._config.port,
                self._config.database,
                exc,
                extra={"action": "db_connect_failed"},
            )
            raise UpstreamUnavailable(f"Database unavailable: {exc}") from exc
