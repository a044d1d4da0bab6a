"""Core metadata types for ValidForge.

Constraints are declared next to the fields they apply to, using
``typing.Annotated``:

    @constrained
    @dataclass
    class Device:
        id: Annotated[str, Required("ID Property Requires Value")] = ""
        code: Annotated[int, Range(10, 100, "Code Value Must Be Within 10-100")] = 0

The helpers below only build inert descriptors. Checking that a descriptor
is well formed happens later, when MetadataRegistry discovers the type.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ConstraintKind(Enum):
    """The closed set of constraint kinds understood by the evaluator."""

    REQUIRED = "required"
    RANGE = "range"
    MAX_LENGTH = "maxLength"
    MIN_LENGTH = "minLength"
    PATTERN = "pattern"

    @property
    def code(self) -> str:
        """Machine-readable error code, e.g. "MAX_LENGTH"."""
        return self.name


class FieldType(Enum):
    """Declared semantic type of a field."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SEQUENCE = "sequence"
    ANY = "any"

    @property
    def is_numeric(self) -> bool:
        return self in (FieldType.INTEGER, FieldType.NUMBER)


@dataclass(frozen=True)
class ConstraintDescriptor:
    """One constraint attached to one field.

    Only the parameters relevant to ``kind`` are set:
    - RANGE: minimum, maximum
    - MAX_LENGTH / MIN_LENGTH: length
    - PATTERN: pattern

    Attributes:
        kind: The constraint kind
        message: Failure message (template for everything except REQUIRED).
            None means "use the kind's default", resolved at discovery.
    """

    kind: ConstraintKind
    minimum: Any = None
    maximum: Any = None
    length: Any = None
    pattern: Any = None
    message: str | None = None

    @property
    def params(self) -> dict[str, Any]:
        """Kind parameters keyed by their message placeholder names."""
        if self.kind == ConstraintKind.RANGE:
            return {"min": self.minimum, "max": self.maximum}
        if self.kind == ConstraintKind.MAX_LENGTH:
            return {"max_length": self.length}
        if self.kind == ConstraintKind.MIN_LENGTH:
            return {"min_length": self.length}
        if self.kind == ConstraintKind.PATTERN:
            return {"pattern": self.pattern}
        return {}


@dataclass(frozen=True)
class FieldDescriptor:
    """A field of a constrained type and its constraints in declared order."""

    name: str
    type: FieldType = FieldType.ANY
    constraints: tuple[ConstraintDescriptor, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        """Human-readable label: "serialNumber" / "serial_number" -> "Serial Number"."""
        words = re.sub(r"(?<=[a-z0-9])([A-Z])", r" \1", self.name).replace("_", " ").split()
        return " ".join(w[:1].upper() + w[1:] for w in words)


# =============================================================================
# Declaration helpers
# =============================================================================


def Required(message: str | None = None) -> ConstraintDescriptor:
    """The field must hold a non-empty value."""
    return ConstraintDescriptor(ConstraintKind.REQUIRED, message=message)


def Range(minimum: Any, maximum: Any, message: str | None = None) -> ConstraintDescriptor:
    """A numeric field must lie within [minimum, maximum] (inclusive)."""
    return ConstraintDescriptor(
        ConstraintKind.RANGE, minimum=minimum, maximum=maximum, message=message
    )


def MaxLength(length: int, message: str | None = None) -> ConstraintDescriptor:
    """A string (or list) field must be at most ``length`` long."""
    return ConstraintDescriptor(ConstraintKind.MAX_LENGTH, length=length, message=message)


def MinLength(length: int, message: str | None = None) -> ConstraintDescriptor:
    """A string (or list) field must be at least ``length`` long."""
    return ConstraintDescriptor(ConstraintKind.MIN_LENGTH, length=length, message=message)


def Pattern(pattern: str, message: str | None = None) -> ConstraintDescriptor:
    """A string field must match ``pattern`` in full."""
    return ConstraintDescriptor(ConstraintKind.PATTERN, pattern=pattern, message=message)
