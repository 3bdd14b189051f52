"""
Backend dialects: transaction control statements and escape-hatch queries
"""

from enum import Enum


class Dialect(str, Enum):
    MYSQL = "mysql"
    SQLITE = "sqlite"

    @property
    def begin_sql(self) -> str:
        return "BEGIN" if self is Dialect.SQLITE else "START TRANSACTION"

    @property
    def commit_sql(self) -> str:
        return "COMMIT"

    @property
    def rollback_sql(self) -> str:
        return "ROLLBACK"

    @property
    def last_insert_id_sql(self) -> str:
        return "SELECT last_insert_rowid()" if self is Dialect.SQLITE else "SELECT LAST_INSERT_ID()"

    @property
    def row_count_sql(self) -> str:
        return "SELECT changes()" if self is Dialect.SQLITE else "SELECT ROW_COUNT()"
