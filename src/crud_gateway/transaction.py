"""
Transaction coordinator - sequences table operations on one connection with rollback on failure
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

from crud_gateway.config.settings import GatewaySettings, configure_logging, get_settings
from crud_gateway.contracts.base import Operation
from crud_gateway.database.connection import Connection, open_sqlite_connection
from crud_gateway.dialects import Dialect
from crud_gateway.errors import (
    GatewayConnectionError,
    GatewayError,
    TransactionClosedError,
    TransactionStateError,
    UnsupportedOperation,
)
from crud_gateway.models.result import OperationResult, RawResult
from crud_gateway.models.statement import QueryStatement
from crud_gateway.tables.base import DBTable

logger = logging.getLogger(__name__)

QueryResultHandler = Callable[[RawResult], Any]


@dataclass(frozen=True)
class TableOperation:
    """A single CRUD operation on a table, with the handler for its raw result"""
    operation: Operation
    table: DBTable
    handler: Optional[QueryResultHandler] = None


class TransactionState(str, Enum):
    IDLE = "IDLE"
    IN_TRANSACTION = "IN_TRANSACTION"
    COMMITTED = "COMMITTED"
    ROLLED_BACK = "ROLLED_BACK"


class Transaction:
    """
    Sequence of operations on one database connection.

    Operations may run inside an explicit start/commit (or rollback) cycle or
    on their own. Any failing operation triggers a rollback before its error
    is reported. The connection is not safe for concurrent use; callers
    sharing an instance across threads must serialize access themselves.
    """

    def __init__(
        self,
        connection_factory: Callable[[], Connection],
        dialect: Dialect = Dialect.MYSQL,
        log_parameters: bool = False
    ):
        self.connection: Optional[Connection] = connection_factory()
        self.dialect = dialect
        self.log_parameters = log_parameters
        self.state = TransactionState.IDLE

    @classmethod
    def from_settings(
        cls,
        settings: Optional[GatewaySettings] = None,
        connection_factory: Optional[Callable[[], Connection]] = None
    ) -> "Transaction":
        """Create a transaction configured from environment settings"""
        settings = settings or get_settings()

        if connection_factory is None:
            if settings.sql_dialect is not Dialect.SQLITE:
                raise ValueError(f"A connection factory is required for dialect: {settings.dialect}")
            connection_factory = lambda: open_sqlite_connection(settings.database)

        configure_logging(settings)
        return cls(connection_factory, dialect=settings.sql_dialect, log_parameters=settings.log_parameters)

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self.connection is None

    def close(self) -> None:
        """Release the connection; later calls are no-ops"""
        if self.connection is None:
            return

        connection, self.connection = self.connection, None
        connection.close()
        logger.info("Transaction connection released")

    def start(self) -> None:
        """
        Start a new transaction

        Raises:
            TransactionStateError: If a transaction is already open
            GatewayConnectionError: If the backend rejects the statement
        """
        if self.state == TransactionState.IN_TRANSACTION:
            raise TransactionStateError("Transaction already started")

        self._control(self.dialect.begin_sql)
        self.state = TransactionState.IN_TRANSACTION

    def commit(self) -> None:
        """
        Commit the open transaction

        Raises:
            TransactionStateError: If no transaction is open
            GatewayConnectionError: If the backend rejects the statement
        """
        if self.state != TransactionState.IN_TRANSACTION:
            raise TransactionStateError(f"Cannot commit from state {self.state.value}")

        self._control(self.dialect.commit_sql)
        self.state = TransactionState.COMMITTED

    def rollback(self) -> None:
        """Roll back the current transaction; callable from any state"""
        self._control(self.dialect.rollback_sql)
        if self.state == TransactionState.IN_TRANSACTION:
            self.state = TransactionState.ROLLED_BACK

    def execute_operation(self, operation: TableOperation) -> OperationResult:
        """
        Execute one table operation, with or without an open transaction

        Args:
            operation: The operation to execute

        Returns:
            OperationResult holding the handler output, or the original error
            after a rollback was issued
        """
        table_name: Optional[str] = None

        try:
            table_name = operation.table.table_name
            statement = self._dispatch(operation)
            raw_result = self._run_statement(statement)
            output = operation.handler(raw_result) if operation.handler else None

        except Exception as e:
            logger.error(
                f"{operation.operation.value} operation failed for {table_name}: {e}",
                exc_info=not isinstance(e, GatewayError)
            )
            self._rollback_after_failure()
            return OperationResult(
                success=False,
                error=e,
                error_type=getattr(e, "error_type", type(e).__name__),
                operation=operation.operation.value,
                table=table_name
            )

        return OperationResult(
            success=True,
            data=output,
            operation=operation.operation.value,
            table=table_name
        )

    def execute_operations(self, operations: Iterable[TableOperation]) -> OperationResult:
        """
        Execute operations in order, stopping at the first failure

        Returns:
            The failing operation's result, or a successful result whose data
            is the list of handler outputs
        """
        outputs: List[Any] = []

        for operation in operations:
            result = self.execute_operation(operation)
            if not result.success:
                return result
            outputs.append(result.data)

        return OperationResult(success=True, data=outputs)

    @staticmethod
    def execute_custom_query(statement: QueryStatement, connection: Connection) -> RawResult:
        """
        Run a pre-built statement directly against a connection

        Raises:
            Any backend error, unchanged; no rollback is issued
        """
        logger.info(f"Executing custom query: {statement.sql}")
        return connection.execute(statement.sql, statement.parameters)

    # Private interface

    def _dispatch(self, operation: TableOperation) -> QueryStatement:
        table = operation.table

        if operation.operation == Operation.CREATE:
            statement = table.create()
        elif operation.operation == Operation.READ:
            statement = table.read()
        elif operation.operation == Operation.UPDATE:
            statement = table.update()
        elif operation.operation == Operation.DELETE:
            statement = table.delete()
        else:
            statement = None

        if statement is None:
            raise UnsupportedOperation(table.table_name, getattr(operation.operation, "value", str(operation.operation)))

        return statement

    def _run_statement(self, statement: QueryStatement) -> RawResult:
        connection = self._require_connection()

        logger.info(f"Executing: {statement.sql}")
        if self.log_parameters:
            logger.debug(f"Parameters: {statement.parameters}")

        return connection.execute(statement.sql, statement.parameters)

    def _rollback_after_failure(self) -> None:
        try:
            self.rollback()
        except GatewayError as e:
            logger.warning(f"Automatic rollback failed: {e}")

    def _control(self, sql: str) -> None:
        connection = self._require_connection()

        logger.info(f"Transaction control: {sql}")
        try:
            connection.raw_control(sql)
        except Exception as e:
            raise GatewayConnectionError(f"Backend rejected '{sql}': {e}") from e

    def _require_connection(self) -> Connection:
        if self.connection is None:
            raise TransactionClosedError()
        return self.connection
