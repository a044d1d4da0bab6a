"""ValidForge: declarative object validation.

Usage:
    from dataclasses import dataclass
    from typing import Annotated

    from validforge import MaxLength, Range, Required, constrained, validate

    @constrained
    @dataclass
    class Device:
        id: Annotated[str, Required("ID Property Requires Value")] = ""
        code: Annotated[int, Range(10, 100, "Code Value Must Be Within 10-100")] = 0
        description: Annotated[str, MaxLength(100)] = ""

    result = validate(Device(id="", code=5))
    result.is_valid  # False
    result.errors    # ["ID Property Requires Value", "Code Value Must Be Within 10-100"]
"""

from validforge.errors import MetadataError, TypeMismatchError, ValidationEngineError
from validforge.metadata import (
    ConstraintDescriptor,
    ConstraintKind,
    FieldDescriptor,
    FieldType,
    MaxLength,
    MetadataRegistry,
    MinLength,
    Pattern,
    Range,
    Required,
    constrained,
)
from validforge.validation import (
    ConstraintViolation,
    Outcome,
    ValidationResult,
    Validator,
    evaluate,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    # Errors
    "MetadataError",
    "TypeMismatchError",
    "ValidationEngineError",
    # Metadata
    "ConstraintDescriptor",
    "ConstraintKind",
    "FieldDescriptor",
    "FieldType",
    "MaxLength",
    "MetadataRegistry",
    "MinLength",
    "Pattern",
    "Range",
    "Required",
    "constrained",
    # Validation
    "ConstraintViolation",
    "Outcome",
    "ValidationResult",
    "Validator",
    "evaluate",
    "validate",
]
