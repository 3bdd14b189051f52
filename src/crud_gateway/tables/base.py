"""
Table bindings - associate a table with its query data sources and CRUD dispatch
"""

from typing import Optional, Protocol, runtime_checkable

from crud_gateway.contracts.base import Operation, QueryData
from crud_gateway.errors import MissingCreationSource
from crud_gateway.models.statement import QueryStatement
from crud_gateway.synthesizer import (
    build_create_query,
    build_delete_query,
    build_read_query,
    build_update_query,
)
from crud_gateway.validator import get_validator


@runtime_checkable
class DBTable(Protocol):
    """
    Behaviour required from every table a transaction can operate on.

    Each method returns the statement for its operation, or None when the
    table does not support it.
    """

    @property
    def table_name(self) -> str:
        ...

    def create(self) -> Optional[QueryStatement]:
        ...

    def read(self) -> Optional[QueryStatement]:
        ...

    def update(self) -> Optional[QueryStatement]:
        ...

    def delete(self) -> Optional[QueryStatement]:
        ...


class ResourceTable:
    """Table binding supporting all four CRUD operations"""

    def __init__(
        self,
        table_name: str,
        creation_data: Optional[QueryData] = None,
        filter_data: Optional[QueryData] = None,
        projection_data: Optional[QueryData] = None
    ):
        if not table_name:
            raise ValueError("Table binding requires a table name")

        self._table_name = table_name
        self.creation_data = creation_data
        self.filter_data = filter_data
        self.projection_data = projection_data
        self.validator = get_validator()

    @property
    def table_name(self) -> str:
        return self._table_name

    def create(self) -> Optional[QueryStatement]:
        """
        Build the INSERT statement from the creation data

        Raises:
            MissingCreationSource: If no creation data object was supplied
            NoCreationData: If no creation attribute carries a value
        """
        if self.creation_data is None:
            raise MissingCreationSource(self.table_name, Operation.CREATE.value)

        data = self.validator.validate(self.creation_data, Operation.CREATE)
        return build_create_query(data, self.table_name)

    def read(self) -> Optional[QueryStatement]:
        filters = None
        projection = None

        if self.filter_data is not None:
            filters = self.validator.validate(self.filter_data, Operation.READ)
        if self.projection_data is not None:
            projection = self.validator.projection(self.projection_data, Operation.READ)

        return build_read_query(self.table_name, filters=filters, projection=projection)

    def update(self) -> Optional[QueryStatement]:
        """Build the UPDATE statement; creation data supplies the new values"""
        if self.creation_data is None:
            raise MissingCreationSource(self.table_name, Operation.UPDATE.value)

        data = self.validator.validate(self.creation_data, Operation.UPDATE)
        filters = None
        if self.filter_data is not None:
            filters = self.validator.validate(self.filter_data, Operation.UPDATE)

        return build_update_query(data, self.table_name, filters=filters)

    def delete(self) -> Optional[QueryStatement]:
        filters = None
        if self.filter_data is not None:
            filters = self.validator.validate(self.filter_data, Operation.DELETE)

        return build_delete_query(self.table_name, filters=filters)
