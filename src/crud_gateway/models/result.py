"""
Result containers for executed statements and coordinated operations
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RawResult:
    """Generic value container returned by a connection for one statement"""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    last_row_id: Optional[int] = None

    def first_value(self) -> Optional[Any]:
        """First column of the first row, None when no rows were returned"""
        if not self.rows:
            return None
        return next(iter(self.rows[0].values()), None)


@dataclass
class OperationResult:
    """Result from a coordinated operation"""
    success: bool
    data: Any = None
    error: Optional[BaseException] = None
    error_type: Optional[str] = None
    operation: Optional[str] = None
    table: Optional[str] = None

    def unwrap(self) -> Any:
        """Return the operation output, re-raising the original error on failure"""
        if not self.success:
            raise self.error
        return self.data
