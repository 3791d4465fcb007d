from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import Unavailable
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, with_database: bool = True):
    """Yield ``(conn, cursor)``; commit on success, rollback on error.

    Driver-level failures other than integrity errors surface as ``Unavailable``.
    Integrity errors propagate so repositories can map them to domain errors.
    """
    try:
        conn = conn_factory.connect(with_database=with_database)
    except mysql.connector.Error as e:
        logger.error("database connection failed: %s", e)
        raise Unavailable() from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError:
        conn.rollback()
        raise
    except mysql.connector.Error as e:
        conn.rollback()
        logger.error("database operation failed: %s", e)
        raise Unavailable() from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
