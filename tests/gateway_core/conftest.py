"""
pytest fixtures for the gateway core test suite
"""

import pytest

from crud_gateway.database.connection import open_sqlite_connection
from crud_gateway.dialects import Dialect
from crud_gateway.transaction import Transaction

from gateway_core.infrastructure import USERS_SCHEMA, RecordingConnection


@pytest.fixture
def recording_connection():
    """Connection fake that records statements and never fails"""
    return RecordingConnection()


@pytest.fixture
def transaction(recording_connection):
    """MySQL-dialect transaction over the recording connection"""
    with Transaction(lambda: recording_connection) as tx:
        yield tx


@pytest.fixture
def sqlite_transaction():
    """Transaction over an in-memory sqlite database holding an empty users table"""
    connection = open_sqlite_connection(":memory:")
    connection.connection.execute(USERS_SCHEMA)

    with Transaction(lambda: connection, dialect=Dialect.SQLITE) as tx:
        yield tx
