"""
Attribute rule contracts: per-attribute, per-operation requirements and their values
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    """CRUD operations a table binding can synthesize"""
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class AttributeRequirement(str, Enum):
    """
    Requirement placed on an attribute for one operation.

    - REQUIRED: attribute must carry a value to complete the operation
    - ABSENT: attribute must not carry a value to complete the operation
    - UNCONSTRAINED: attribute may be either present or absent
    """
    REQUIRED = "REQUIRED"
    ABSENT = "ABSENT"
    UNCONSTRAINED = "UNCONSTRAINED"


AttributeRules = Dict[Operation, AttributeRequirement]


def attribute_rules(
    create: AttributeRequirement = AttributeRequirement.UNCONSTRAINED,
    read: AttributeRequirement = AttributeRequirement.UNCONSTRAINED,
    update: AttributeRequirement = AttributeRequirement.UNCONSTRAINED,
    delete: AttributeRequirement = AttributeRequirement.UNCONSTRAINED
) -> AttributeRules:
    """Build the requirement map of a single attribute"""
    return {
        Operation.CREATE: create,
        Operation.READ: read,
        Operation.UPDATE: update,
        Operation.DELETE: delete
    }


class QueryData(BaseModel):
    """
    Pairs an attribute ruleset with the values supplied for one query.
    Both mappings are read-only once constructed.

    The ruleset drives every lookup: values whose name has no rules are kept
    but never reach a statement. A value of None means the attribute is unset.
    """
    model_config = ConfigDict(frozen=True)

    rules: Dict[str, AttributeRules]
    values: Dict[str, Any] = Field(default={}, validate_default=True)

    @field_validator("rules", mode="after")
    @classmethod
    def freeze_rules(cls, rules: Dict[str, AttributeRules]) -> Mapping[str, Mapping[Operation, AttributeRequirement]]:
        return MappingProxyType({name: MappingProxyType(dict(rules[name])) for name in rules})

    @field_validator("values", mode="after")
    @classmethod
    def freeze_values(cls, values: Dict[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(values))

    @model_validator(mode="after")
    def log_unlisted_values(self) -> "QueryData":
        unlisted = sorted(set(self.values) - set(self.rules))
        if unlisted:
            logger.debug(f"Ignoring values without attribute rules: {unlisted}")
        return self

    def requirement(self, name: str, operation: Operation) -> AttributeRequirement:
        """Requirement of an attribute for an operation (UNCONSTRAINED when unspecified)"""
        return self.rules[name].get(operation, AttributeRequirement.UNCONSTRAINED)

    def get_value(self, name: str) -> Optional[Any]:
        """Value of an attribute, None when unset"""
        return self.values.get(name)

    def is_set(self, name: str) -> bool:
        return self.values.get(name) is not None
