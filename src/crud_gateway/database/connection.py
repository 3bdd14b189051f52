"""
Database connection contract and PEP 249 adapter
"""

import logging
import sqlite3
from typing import Any, Protocol, Sequence

from crud_gateway.models.result import RawResult

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """Executor the transaction coordinator runs statements against"""

    def execute(self, sql: str, parameters: Sequence[Any]) -> RawResult:
        ...

    def raw_control(self, sql: str) -> None:
        ...

    def close(self) -> None:
        ...


class DBAPIConnection:
    """
    Adapts a DB-API connection using the qmark paramstyle (e.g. sqlite3).

    Driver errors are raised unchanged.
    """

    def __init__(self, connection: Any):
        self.connection = connection

    def execute(self, sql: str, parameters: Sequence[Any]) -> RawResult:
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, tuple(parameters))

            rows = []
            if cursor.description:
                columns = [column[0] for column in cursor.description]
                rows = [dict(zip(columns, row)) for row in cursor.fetchall()]

            return RawResult(
                rows=rows,
                row_count=cursor.rowcount if cursor.rowcount is not None and cursor.rowcount >= 0 else len(rows),
                last_row_id=getattr(cursor, "lastrowid", None)
            )
        finally:
            cursor.close()

    def raw_control(self, sql: str) -> None:
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql)
        finally:
            cursor.close()

    def close(self) -> None:
        self.connection.close()


def open_sqlite_connection(path: str = ":memory:") -> DBAPIConnection:
    """
    Open a sqlite3 connection in autocommit mode.

    Transactions are then driven only by explicit BEGIN/COMMIT/ROLLBACK
    control statements.
    """
    conn = sqlite3.connect(path, isolation_level=None)
    # Enable foreign keys
    conn.execute("PRAGMA foreign_keys = ON")
    logger.info(f"Opened sqlite connection: {path}")
    return DBAPIConnection(conn)
