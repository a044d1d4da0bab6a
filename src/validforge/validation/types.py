"""Result types for the ValidForge validation engine."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Outcome:
    """Outcome of evaluating one constraint against one value.

    Attributes:
        passed: True if the value satisfies the constraint
        message: Failure message, None when passed
    """

    passed: bool
    message: str | None = None

    @classmethod
    def ok(cls) -> "Outcome":
        return PASS

    @classmethod
    def fail(cls, message: str) -> "Outcome":
        return cls(passed=False, message=message)


PASS = Outcome(passed=True)


@dataclass(frozen=True)
class ConstraintViolation:
    """A single failed constraint.

    Attributes:
        field: Name of the field that failed
        code: Machine-readable code of the constraint kind (e.g. "RANGE")
        message: Human-readable failure message
    """

    field: str
    code: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "code": self.code,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    """Result of validating one instance.

    ``errors`` and ``is_valid`` are derived from ``violations`` so the two
    can never disagree.

    Attributes:
        violations: Failed constraints in declaration order
    """

    violations: list[ConstraintViolation] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        """Failure messages in declaration order."""
        return [v.message for v in self.violations]

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.is_valid,
            "errors": self.errors,
            "violations": [v.to_dict() for v in self.violations],
        }
