"""
Query synthesizer - renders validated attribute data into parameterized CRUD statements
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from crud_gateway.errors import NoCreationData, NoUpdateData
from crud_gateway.models.statement import PLACEHOLDER, QueryStatement


def build_create_query(data: Dict[str, Any], table_name: str) -> QueryStatement:
    """Build INSERT statement; one placeholder per column, in column order"""
    if not data:
        raise NoCreationData(table_name)

    field_names = list(data.keys())
    field_placeholders = [PLACEHOLDER] * len(field_names)
    params = [data[name] for name in field_names]

    query = f"INSERT INTO {table_name} ({', '.join(field_names)}) VALUES ({', '.join(field_placeholders)})"
    return QueryStatement(sql=query, parameters=params)


def build_read_query(
    table_name: str,
    filters: Optional[Dict[str, Any]] = None,
    projection: Optional[Sequence[str]] = None
) -> QueryStatement:
    """Build SELECT statement with optional column projection and equality filters"""
    select_fields = ", ".join(projection) if projection else "*"
    query = f"SELECT {select_fields} FROM {table_name}"
    params: List[Any] = []

    if filters:
        where_sql, params = _build_where_clause(filters)
        query += f" WHERE {where_sql}"

    return QueryStatement(sql=query, parameters=params)


def build_update_query(
    data: Dict[str, Any],
    table_name: str,
    filters: Optional[Dict[str, Any]] = None
) -> QueryStatement:
    """Build UPDATE statement; SET values bind before WHERE values"""
    if not data:
        raise NoUpdateData(table_name)

    set_parts = []
    params: List[Any] = []
    for field_name, value in data.items():
        set_parts.append(f"{field_name} = {PLACEHOLDER}")
        params.append(value)

    query = f"UPDATE {table_name} SET {', '.join(set_parts)}"

    if filters:
        where_sql, where_params = _build_where_clause(filters)
        query += f" WHERE {where_sql}"
        params.extend(where_params)

    return QueryStatement(sql=query, parameters=params)


def build_delete_query(table_name: str, filters: Optional[Dict[str, Any]] = None) -> QueryStatement:
    """Build DELETE statement; without filters every row is deleted"""
    query = f"DELETE FROM {table_name}"
    params: List[Any] = []

    if filters:
        where_sql, params = _build_where_clause(filters)
        query += f" WHERE {where_sql}"

    return QueryStatement(sql=query, parameters=params)


def _build_where_clause(filters: Dict[str, Any]) -> Tuple[str, List[Any]]:
    """Equality conditions joined with AND, with their values in the same order"""
    where_parts = []
    params = []
    for field_name, value in filters.items():
        where_parts.append(f"{field_name} = {PLACEHOLDER}")
        params.append(value)

    return " AND ".join(where_parts), params
