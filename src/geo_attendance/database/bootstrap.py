from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterable

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

# Quoted literals and comments are matched whole so a ';' inside them never splits.
_SQL_TOKEN = re.compile(
    r"""'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"|--[^\n]*|;|[^'";-]+|.""",
    re.DOTALL,
)
_DATABASE_LEVEL = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema script into statements, dropping -- comments."""
    parts: list[str] = []
    for match in _SQL_TOKEN.finditer(sql):
        token = match.group()
        if token.startswith("--"):
            continue
        if token == ";":
            statement = "".join(parts).strip()
            parts.clear()
            if statement:
                yield statement
            continue
        parts.append(token)

    statement = "".join(parts).strip()
    if statement:
        yield statement


def _open(target: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(use_pure=True, **target.connect_kwargs(with_database=with_database))


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    with closing(_open(target, with_database=False)) as conn, closing(conn.cursor()) as cur:
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    """Create the configured database if needed, then run every table statement in schema_path.

    CREATE DATABASE / USE lines in the script are skipped; the target comes from db_config.
    """
    ensure_database_exists(db_config)

    statements = [
        s for s in iter_sql_statements(Path(schema_path).read_text(encoding="utf-8"))
        if not _DATABASE_LEVEL.match(s)
    ]
    with closing(_open(DBConfig.from_mapping(db_config))) as conn, closing(conn.cursor()) as cur:
        for statement in statements:
            cur.execute(statement)
        conn.commit()
    logger.info("Applied %d schema statements from %s", len(statements), schema_path)


def list_tables(db_config: dict) -> list[str]:
    with closing(_open(DBConfig.from_mapping(db_config))) as conn, closing(conn.cursor()) as cur:
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
