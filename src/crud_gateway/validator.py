"""
Validator component - deterministic validation of attribute values against their rules
"""

import logging
from typing import Any, Dict, List, Optional

from crud_gateway.contracts.base import AttributeRequirement, Operation, QueryData
from crud_gateway.errors import AttributeConflictsWithAbsenceRule, MissingRequiredAttribute

logger = logging.getLogger(__name__)


class RuleValidator:
    """Checks a QueryData instance against its ruleset for one CRUD operation"""

    def validate(self, query_data: QueryData, operation: Operation) -> Dict[str, Any]:
        """
        Validate attribute values for an operation

        Args:
            query_data: Ruleset and values to check
            operation: CRUD operation the values are used for

        Returns:
            Mapping of attribute name to value, holding only attributes that
            carry a value, ordered by attribute name

        Raises:
            MissingRequiredAttribute: If a REQUIRED attribute has no value
            AttributeConflictsWithAbsenceRule: If an ABSENT attribute has a value
        """
        data: Dict[str, Any] = {}

        for name in sorted(query_data.rules):
            self._verify_requirement(query_data, name, operation)

            if query_data.is_set(name):
                data[name] = query_data.get_value(name)

        logger.debug(f"{operation.value} validation passed with attributes: {list(data)}")
        return data

    def projection(self, query_data: QueryData, operation: Operation) -> List[str]:
        """Validate a projection source and return the names of its present attributes"""
        return list(self.validate(query_data, operation))

    def _verify_requirement(self, query_data: QueryData, name: str, operation: Operation) -> None:
        requirement = query_data.requirement(name, operation)

        if requirement == AttributeRequirement.REQUIRED and not query_data.is_set(name):
            raise MissingRequiredAttribute(name, operation.value)
        if requirement == AttributeRequirement.ABSENT and query_data.is_set(name):
            raise AttributeConflictsWithAbsenceRule(name, operation.value)


# Global validator instance
_validator: Optional[RuleValidator] = None

def get_validator() -> RuleValidator:
    """Get the global validator instance"""
    global _validator
    if _validator is None:
        _validator = RuleValidator()
    return _validator
