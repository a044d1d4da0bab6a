"""Constraint declarations and the registry that discovers them."""

from validforge.metadata.registry import (
    DEFAULT_MESSAGES,
    MetadataRegistry,
    constrained,
    declared_fields,
    field_type_of,
)
from validforge.metadata.types import (
    ConstraintDescriptor,
    ConstraintKind,
    FieldDescriptor,
    FieldType,
    MaxLength,
    MinLength,
    Pattern,
    Range,
    Required,
)

__all__ = [
    # Types
    "ConstraintDescriptor",
    "ConstraintKind",
    "FieldDescriptor",
    "FieldType",
    # Declarations
    "MaxLength",
    "MinLength",
    "Pattern",
    "Range",
    "Required",
    # Registry
    "DEFAULT_MESSAGES",
    "MetadataRegistry",
    "constrained",
    "declared_fields",
    "field_type_of",
]
