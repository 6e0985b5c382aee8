from __future__ import annotations

from ..core.enums import PatternType
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetch_all, fetch_one
from .model import DismissalRecord
from .repository import DismissalRepository


class MySQLDismissalRepository(DismissalRepository):
    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    def upsert(self, record: DismissalRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO alert_dismissals(tenant_id, actor_key, pattern_type)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE dismissed_at=CURRENT_TIMESTAMP(6)
                """,
                (record.tenant_id, record.actor_key, record.pattern_type.value),
            )

    def exists(self, record: DismissalRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT 1 AS found FROM alert_dismissals
                WHERE tenant_id=%s AND actor_key=%s AND pattern_type=%s
                """,
                (record.tenant_id, record.actor_key, record.pattern_type.value),
            )
            return fetch_one(cur) is not None

    def list_for_tenant(self, tenant_id: str) -> set[DismissalRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT tenant_id, actor_key, pattern_type FROM alert_dismissals WHERE tenant_id=%s",
                (tenant_id,),
            )
            return {
                DismissalRecord(
                    tenant_id=r["tenant_id"],
                    actor_key=r["actor_key"],
                    pattern_type=PatternType(r["pattern_type"]),
                )
                for r in fetch_all(cur)
            }

    def delete_all_for_tenant(self, tenant_id: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM alert_dismissals WHERE tenant_id=%s", (tenant_id,))
            return int(cur.rowcount)
