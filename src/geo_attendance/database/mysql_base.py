from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional, Tuple

import mysql.connector

from ..core.exceptions import PersistenceError
from .connection import ConnectionFactory


@contextmanager
def db_cursor(factory: ConnectionFactory, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """Yield (connection, cursor) inside one transaction.

    Driver errors surface as PersistenceError; the transaction is rolled back
    on any failure.
    """
    try:
        conn = factory.connect()
    except mysql.connector.Error as exc:
        raise PersistenceError(f"Database unavailable: {exc}") from exc

    cur = conn.cursor(dictionary=dictionary)
    try:
        yield conn, cur
        conn.commit()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise PersistenceError(str(exc)) from exc
    except BaseException:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def fetch_one(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetch_all(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or ())


def to_time_of_day(value: Any) -> Optional[time]:
    # TIME columns come back as timedelta from the C extension and as str or time elsewhere.
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        minutes, second = divmod(int(value.total_seconds()) % 86400, 60)
        hour, minute = divmod(minutes, 60)
        return time(hour, minute, second)
    if isinstance(value, str):
        return time.fromisoformat(value.strip())
    raise TypeError(f"Unsupported TIME value {value!r}")
