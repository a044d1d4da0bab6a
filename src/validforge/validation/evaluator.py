"""Constraint evaluation for ValidForge.

One predicate per ConstraintKind, selected by a single dispatch in
evaluate(). Only REQUIRED detects absence: every other kind passes when
the value is None.
"""

import re
from decimal import Decimal
from typing import Any

from validforge.errors import MetadataError, TypeMismatchError
from validforge.metadata.registry import DEFAULT_MESSAGES
from validforge.metadata.types import (
    ConstraintDescriptor,
    ConstraintKind,
    FieldDescriptor,
    FieldType,
)
from validforge.validation.types import PASS, Outcome


def evaluate(
    value: Any,
    descriptor: ConstraintDescriptor,
    field: FieldDescriptor | None = None,
) -> Outcome:
    """Evaluate one constraint against a field value.

    Args:
        value: The field's current value (None when absent)
        descriptor: The constraint to evaluate
        field: The field the constraint is declared on; supplies the label
            for messages and the declared type for numeric checks

    Returns:
        PASS, or a failed Outcome carrying the formatted message

    Raises:
        TypeMismatchError: If the value has a type the constraint cannot check
        MetadataError: If the constraint kind is not supported
    """
    kind = descriptor.kind

    if kind == ConstraintKind.REQUIRED:
        return _evaluate_required(value, descriptor, field)
    if kind == ConstraintKind.RANGE:
        return _evaluate_range(value, descriptor, field)
    if kind == ConstraintKind.MAX_LENGTH:
        return _evaluate_max_length(value, descriptor, field)
    if kind == ConstraintKind.MIN_LENGTH:
        return _evaluate_min_length(value, descriptor, field)
    if kind == ConstraintKind.PATTERN:
        return _evaluate_pattern(value, descriptor, field)

    raise MetadataError(f"Unsupported constraint kind {kind!r}")


def is_empty(value: Any) -> bool:
    """Check if a value counts as missing for REQUIRED."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    if isinstance(value, (list, tuple, dict)) and len(value) == 0:
        return True
    return False


# =============================================================================
# Per-kind predicates
# =============================================================================


def _evaluate_required(
    value: Any, descriptor: ConstraintDescriptor, field: FieldDescriptor | None
) -> Outcome:
    if not is_empty(value):
        return PASS
    if descriptor.message is not None:
        return Outcome.fail(descriptor.message)
    return Outcome.fail(f"{_label(field)} is required")


def _evaluate_range(
    value: Any, descriptor: ConstraintDescriptor, field: FieldDescriptor | None
) -> Outcome:
    if value is None:
        return PASS

    # No coercion: "42" and True are not numbers here
    if not isinstance(value, (int, float, Decimal)) or isinstance(value, bool):
        raise _mismatch(value, descriptor, field, "a number")
    if field is not None and field.type == FieldType.INTEGER and not isinstance(value, int):
        raise _mismatch(value, descriptor, field, "an integer")

    if descriptor.minimum <= value <= descriptor.maximum:
        return PASS
    return Outcome.fail(_format(descriptor, field))


def _evaluate_max_length(
    value: Any, descriptor: ConstraintDescriptor, field: FieldDescriptor | None
) -> Outcome:
    if value is None:
        return PASS
    if not isinstance(value, (str, list, tuple)):
        raise _mismatch(value, descriptor, field, "a string or list")

    if len(value) <= descriptor.length:
        return PASS
    return Outcome.fail(_format(descriptor, field))


def _evaluate_min_length(
    value: Any, descriptor: ConstraintDescriptor, field: FieldDescriptor | None
) -> Outcome:
    if value is None:
        return PASS
    if not isinstance(value, (str, list, tuple)):
        raise _mismatch(value, descriptor, field, "a string or list")

    if len(value) >= descriptor.length:
        return PASS
    return Outcome.fail(_format(descriptor, field))


def _evaluate_pattern(
    value: Any, descriptor: ConstraintDescriptor, field: FieldDescriptor | None
) -> Outcome:
    if value is None:
        return PASS
    if not isinstance(value, str):
        raise _mismatch(value, descriptor, field, "a string")

    if re.fullmatch(descriptor.pattern, value):
        return PASS
    return Outcome.fail(_format(descriptor, field))


# =============================================================================
# Helpers
# =============================================================================


def _label(field: FieldDescriptor | None) -> str:
    return field.label if field is not None else "Value"


def _format(descriptor: ConstraintDescriptor, field: FieldDescriptor | None) -> str:
    """Fill the descriptor's message template with its parameters."""
    template = descriptor.message
    if template is None:
        template = DEFAULT_MESSAGES[descriptor.kind]
    try:
        return template.format(field=_label(field), **descriptor.params)
    except (KeyError, IndexError, ValueError, AttributeError, TypeError) as e:
        raise MetadataError(f"Cannot fill message template {template!r}: {e}") from e


def _mismatch(
    value: Any,
    descriptor: ConstraintDescriptor,
    field: FieldDescriptor | None,
    expected: str,
) -> TypeMismatchError:
    name = field.name if field is not None else None
    where = f"Field '{name}'" if name else "Value"
    return TypeMismatchError(
        f"{where}: {descriptor.kind.value} constraint expects {expected}, "
        f"got {type(value).__name__}",
        field=name,
        kind=descriptor.kind.value,
        value=value,
    )
