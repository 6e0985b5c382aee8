from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "geo_attendance"

    @classmethod
    def from_mapping(cls, db_config: Mapping[str, Any]) -> "DBConfig":
        defaults = cls()
        return cls(
            host=str(db_config.get("host") or defaults.host),
            port=int(db_config.get("port") or defaults.port),
            user=str(db_config.get("user") or defaults.user),
            password=str(db_config.get("password") or ""),
            database=str(db_config.get("database") or defaults.database),
        )

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = asdict(self)
        if not with_database:
            kwargs.pop("database")
        return kwargs


class ConnectionFactory:
    """Opens one short-lived connection per unit of work.

    Sessions are pinned to UTC so DATETIME columns always hold UTC instants.
    """

    _shared: Optional["ConnectionFactory"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def shared(cls, config: DBConfig) -> "ConnectionFactory":
        if cls._shared is None or cls._shared.config != config:
            cls._shared = cls(config)
        return cls._shared

    def connect(self):
        return mysql.connector.connect(time_zone="+00:00", **self.config.connect_kwargs())
