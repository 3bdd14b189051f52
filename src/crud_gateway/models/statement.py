"""
Rendered SQL statements with their ordered bind parameters
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from crud_gateway.dialects import Dialect

PLACEHOLDER = "?"


class QueryStatement(BaseModel):
    """SQL text plus the bind parameters for its placeholders, left to right"""
    model_config = ConfigDict(frozen=True)

    sql: str
    parameters: List[Any] = []

    @property
    def placeholder_count(self) -> int:
        return self.sql.count(PLACEHOLDER)

    @model_validator(mode="after")
    def check_parameter_count(self) -> "QueryStatement":
        if self.placeholder_count != len(self.parameters):
            raise ValueError(
                f"Statement has {self.placeholder_count} placeholders "
                f"but {len(self.parameters)} parameters"
            )
        return self


def custom_query(sql: str, parameters: Optional[List[Any]] = None) -> QueryStatement:
    """Wrap hand-written SQL for the custom execution entry point"""
    return QueryStatement(sql=sql, parameters=list(parameters or []))


def last_insert_id_query(dialect: Dialect = Dialect.MYSQL) -> QueryStatement:
    """Fetch the identifier generated by the last INSERT on the connection"""
    return QueryStatement(sql=dialect.last_insert_id_sql)


def row_count_query(dialect: Dialect = Dialect.MYSQL) -> QueryStatement:
    """Fetch the number of rows changed by the last statement on the connection"""
    return QueryStatement(sql=dialect.row_count_sql)
