"""
Shared test infrastructure: a sample entity and a recording connection
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from crud_gateway.contracts.base import AttributeRequirement, QueryData, attribute_rules
from crud_gateway.models.result import RawResult
from crud_gateway.tables.base import ResourceTable

REQUIRED = AttributeRequirement.REQUIRED
ABSENT = AttributeRequirement.ABSENT

USER_RULES = {
    "id": attribute_rules(create=ABSENT, update=ABSENT),
    "name": attribute_rules(create=REQUIRED),
    "email": attribute_rules(create=REQUIRED),
    "age": attribute_rules(),
}

# Filters may match on any column, including the generated id
USER_FILTER_RULES = {name: attribute_rules() for name in USER_RULES}

USERS_SCHEMA = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    age INTEGER
)
"""


def user_data(**values: Any) -> QueryData:
    return QueryData(rules=USER_RULES, values=values)


def user_filter(**values: Any) -> QueryData:
    return QueryData(rules=USER_FILTER_RULES, values=values)


class UsersTable(ResourceTable):
    """Table binding for the users entity"""

    def __init__(
        self,
        creation: Optional[Dict[str, Any]] = None,
        filters: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            "users",
            creation_data=user_data(**creation) if creation is not None else None,
            filter_data=user_filter(**filters) if filters is not None else None,
            projection_data=user_data(**projection) if projection is not None else None
        )


class ReadOnlyTable(UsersTable):
    """Binding that declines every write"""

    def create(self):
        return None

    def update(self):
        return None

    def delete(self):
        return None


class BackendError(Exception):
    """Stand-in for a driver error"""


class RecordingConnection:
    """Connection fake recording every statement it receives"""

    def __init__(
        self,
        results: Optional[List[RawResult]] = None,
        fail_on: Optional[str] = None,
        reject_control: Sequence[str] = ()
    ):
        self.calls: List[Tuple[str, str, List[Any]]] = []
        self.results = list(results or [])
        self.fail_on = fail_on
        self.reject_control = set(reject_control)
        self.close_count = 0

    def execute(self, sql: str, parameters: Sequence[Any]) -> RawResult:
        self.calls.append(("execute", sql, list(parameters)))
        if self.fail_on and self.fail_on in sql:
            raise BackendError(f"backend failed on: {sql}")
        if self.results:
            return self.results.pop(0)
        return RawResult(row_count=1)

    def raw_control(self, sql: str) -> None:
        self.calls.append(("control", sql, []))
        if sql in self.reject_control:
            raise BackendError(f"backend rejected: {sql}")

    def close(self) -> None:
        self.close_count += 1

    @property
    def executed(self) -> List[str]:
        return [sql for kind, sql, _ in self.calls if kind == "execute"]

    @property
    def controls(self) -> List[str]:
        return [sql for kind, sql, _ in self.calls if kind == "control"]


class MisconfiguredTable(UsersTable):
    """Binding whose table name cannot be resolved"""

    @property
    def table_name(self) -> str:
        raise LookupError("no table configured")
