"""Exceptions raised by the ValidForge validation engine.

Data that fails its constraints is not an exception: it is reported as
violations on the ValidationResult. The errors below mean the rules
themselves are broken and abort the validation call.
"""

from typing import Any


class ValidationEngineError(Exception):
    """Base class for configuration errors in the validation engine."""
    pass


class MetadataError(ValidationEngineError):
    """A constraint declaration is malformed.

    Raised at discovery time (MetadataRegistry.describe), independent of
    which instance is later validated.
    """
    pass


class TypeMismatchError(ValidationEngineError):
    """A constraint was evaluated against a value of an incompatible type.

    Attributes:
        field: Name of the field being evaluated, or None if unknown
        kind: Constraint kind value (e.g. "range")
        value_type: Name of the offending value's type
    """

    def __init__(self, message: str, *, field: str | None, kind: str, value: Any):
        super().__init__(message)
        self.field = field
        self.kind = kind
        self.value_type = type(value).__name__
