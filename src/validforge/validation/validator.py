"""Validation orchestrator for ValidForge.

Resolves the instance's type, asks the MetadataRegistry for its constraint
table and evaluates every constraint in declared order. Failed constraints
are collected as violations; nothing short-circuits.

Usage:
    from validforge import validate

    result = validate(device)
    if not result.is_valid:
        for message in result.errors:
            print(message)
"""

import logging
from collections.abc import Mapping
from typing import Any

from validforge.errors import ValidationEngineError
from validforge.metadata.registry import MetadataRegistry, type_name
from validforge.validation.evaluator import evaluate
from validforge.validation.types import ConstraintViolation, ValidationResult

logger = logging.getLogger(__name__)


class Validator:
    """Validates instances against the constraints declared on their type.

    Stateless apart from the registry it reads; one Validator can serve
    any number of concurrent calls.
    """

    def __init__(self, registry: type[MetadataRegistry] = MetadataRegistry):
        self.registry = registry

    def validate(self, instance: Any, entity_type: Any = None) -> ValidationResult:
        """Validate an instance.

        Args:
            instance: An object (fields read as attributes) or a mapping of
                field name to value. The instance is never modified.
            entity_type: Type key to validate against. Defaults to the
                instance's class; a mapping without one has no constraints.

        Returns:
            A fresh ValidationResult

        Raises:
            MetadataError: If the type's constraint declarations are malformed
            TypeMismatchError: If a value cannot be checked by its constraint
        """
        if entity_type is None:
            entity_type = type(instance)

        violations: list[ConstraintViolation] = []
        try:
            for field in self.registry.fields(entity_type):
                if not field.constraints:
                    continue
                value = _read_value(instance, field.name)
                for descriptor in field.constraints:
                    outcome = evaluate(value, descriptor, field)
                    if not outcome.passed:
                        violations.append(
                            ConstraintViolation(
                                field=field.name,
                                code=descriptor.kind.code,
                                message=outcome.message,
                            )
                        )
        except ValidationEngineError as e:
            logger.error("Validation of %s aborted: %s", type_name(entity_type), e)
            raise

        logger.debug(
            "Validated %s: %d violation(s)", type_name(entity_type), len(violations)
        )
        return ValidationResult(violations=violations)


def _read_value(instance: Any, name: str) -> Any:
    """Read a field's current value; absent fields read as None."""
    if isinstance(instance, Mapping):
        return instance.get(name)
    return getattr(instance, name, None)


_default_validator = Validator()


def validate(instance: Any, entity_type: Any = None) -> ValidationResult:
    """Validate an instance with the default registry. See Validator.validate."""
    return _default_validator.validate(instance, entity_type)
