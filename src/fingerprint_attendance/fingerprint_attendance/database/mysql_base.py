from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import TransientError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Lock wait timeout, deadlock, server gone away, lost connection during query.
TRANSIENT_ERRNOS = frozenset({1205, 1213, 2006, 2013})


@contextmanager
def transaction(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on clean exit, rollback otherwise.

    Store-level aborts (unique key lost to a concurrent writer, deadlock, lock
    timeout) are re-raised as TransientError so callers can retry; business
    errors raised inside the block pass through unchanged.
    """

    conn = conn_factory.connect()
    try:
        conn.start_transaction()
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        logger.warning("Transaction aborted by integrity constraint: %s", e)
        raise TransientError(f"Concurrent write rejected by the store: {e}") from e
    except mysql.connector.DatabaseError as e:
        conn.rollback()
        if e.errno in TRANSIENT_ERRNOS:
            logger.warning("Transaction aborted (errno=%s): %s", e.errno, e)
            raise TransientError(f"Storage temporarily unavailable: {e}") from e
        raise
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


def fetch_count(cur) -> int:
    row = cur.fetchone()
    if not row:
        return 0
    return int(row["n"])
