from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import as_utc
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor
from .repository import ActorProfileRepository


class MySQLActorProfileRepository(ActorProfileRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def bind_tenant(self, *, actor_id: str, tenant_id: str, display_name: str, seen_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO actor_profiles(actor_id, display_name, tenant_id, last_active)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    display_name=COALESCE(VALUES(display_name), display_name),
                    tenant_id=COALESCE(tenant_id, VALUES(tenant_id)),
                    last_active=VALUES(last_active)
                """,
                (actor_id, display_name or None, tenant_id, as_utc(seen_at).replace(tzinfo=None)),
            )
