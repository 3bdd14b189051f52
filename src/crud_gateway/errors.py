"""
Error taxonomy for rule validation, query synthesis, dispatch and transaction control
"""

from typing import Optional


class GatewayError(Exception):
    """Base error for every failure raised by the gateway itself"""

    error_type = "GATEWAY_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, resource: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.resource = resource


# Validation errors (rule engine)

class AttributeValidationError(GatewayError):
    error_type = "VALIDATION_ERROR"


class MissingRequiredAttribute(AttributeValidationError):
    """A REQUIRED attribute has no value for the requested operation"""

    error_type = "MISSING_REQUIRED_ATTRIBUTE"

    def __init__(self, field: str, operation: Optional[str] = None):
        message = f"Missing required attribute: {field}"
        if operation:
            message += f" (operation {operation})"
        super().__init__(message, field=field)
        self.operation = operation


class AttributeConflictsWithAbsenceRule(AttributeValidationError):
    """An ABSENT attribute carries a value for the requested operation"""

    error_type = "ATTRIBUTE_CONFLICTS_WITH_ABSENCE_RULE"

    def __init__(self, field: str, operation: Optional[str] = None):
        message = f"Attribute must be absent: {field}"
        if operation:
            message += f" (operation {operation})"
        super().__init__(message, field=field)
        self.operation = operation


# Synthesis errors (query synthesizer)

class SynthesisError(GatewayError):
    error_type = "SYNTHESIS_ERROR"


class NoCreationData(SynthesisError):
    error_type = "NO_CREATION_DATA"

    def __init__(self, table_name: str):
        super().__init__(f"No attribute values to insert into {table_name}", resource=table_name)


class NoUpdateData(SynthesisError):
    error_type = "NO_UPDATE_DATA"

    def __init__(self, table_name: str):
        super().__init__(f"No attribute values to update in {table_name}", resource=table_name)


# Dispatch errors (table binding / coordinator)

class DispatchError(GatewayError):
    error_type = "DISPATCH_ERROR"


class MissingCreationSource(DispatchError):
    error_type = "MISSING_CREATION_SOURCE"

    def __init__(self, table_name: str, operation: str):
        super().__init__(
            f"{operation} on {table_name} requires a creation data object",
            resource=table_name
        )
        self.operation = operation


class UnsupportedOperation(DispatchError):
    error_type = "UNSUPPORTED_OPERATION"

    def __init__(self, table_name: str, operation: str):
        super().__init__(f"Operation {operation} not supported on {table_name}", resource=table_name)
        self.operation = operation


# Transaction control errors

class GatewayConnectionError(GatewayError):
    """The backend rejected a transaction control statement"""

    error_type = "CONNECTION_ERROR"


class TransactionStateError(GatewayError):
    error_type = "INVALID_TRANSACTION_STATE"


class TransactionClosedError(GatewayError):
    error_type = "TRANSACTION_CLOSED"

    def __init__(self):
        super().__init__("Transaction connection has already been released")
