"""Metadata registry for ValidForge.

Maps a type to the ordered table of its constrained fields. Tables come
from one of two places:
- The @constrained decorator, which reads ``Annotated`` hints once at
  class-definition time
- MetadataRegistry.register(), an explicit table for types that have no
  Python class (e.g. records keyed by a string name)

A class that was never registered is read the same way the decorator reads
it, on first use.

Descriptors are checked and resolved on discovery; malformed declarations
raise MetadataError there, never during evaluation.
"""

import logging
import re
import types
from dataclasses import replace
from decimal import Decimal
from typing import (
    Annotated,
    Any,
    ClassVar,
    Iterable,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from validforge.errors import MetadataError
from validforge.metadata.types import (
    ConstraintDescriptor,
    ConstraintKind,
    FieldDescriptor,
    FieldType,
)

logger = logging.getLogger(__name__)


DEFAULT_MESSAGES: dict[ConstraintKind, str] = {
    ConstraintKind.RANGE: "{field} must be between {min} and {max}",
    ConstraintKind.MAX_LENGTH: "{field} must be at most {max_length} characters",
    ConstraintKind.MIN_LENGTH: "{field} must be at least {min_length} characters",
    ConstraintKind.PATTERN: "{field} format is invalid",
}

_LENGTH_FIELD_TYPES = (FieldType.STRING, FieldType.SEQUENCE, FieldType.ANY)
_PATTERN_FIELD_TYPES = (FieldType.STRING, FieldType.ANY)


class MetadataRegistry:
    """Registry of constrained field tables, keyed by type.

    Registration stores the declared table; discovery (fields/describe)
    checks it, fills in default messages and caches the result. The cache
    is filled with setdefault, so two threads discovering the same type
    at once both compute equal tables and keep whichever landed first.

    Example:
        MetadataRegistry.register("Device", [
            FieldDescriptor("id", FieldType.STRING, (Required("ID is required"),)),
        ])
        MetadataRegistry.describe("Device")
        # (("id", ConstraintDescriptor(kind=ConstraintKind.REQUIRED, ...)),)
    """

    _tables: dict[Any, tuple[FieldDescriptor, ...]] = {}
    _resolved: dict[Any, tuple[FieldDescriptor, ...]] = {}

    @classmethod
    def register(cls, entity_type: Any, fields: Iterable[FieldDescriptor]) -> None:
        """Register the field table for a type.

        Re-registering an identical table is a no-op. Any table discovered
        for the type before registration is dropped.

        Args:
            entity_type: A class, or any hashable type name
            fields: Field descriptors in declaration order

        Raises:
            MetadataError: If a different table is already registered
        """
        table = tuple(fields)
        existing = cls._tables.setdefault(entity_type, table)
        if existing is not table:
            if existing == table:
                return
            raise MetadataError(
                f"Type '{type_name(entity_type)}' is already registered "
                "with a different field table"
            )
        cls._resolved.pop(entity_type, None)

    @classmethod
    def fields(cls, entity_type: Any) -> tuple[FieldDescriptor, ...]:
        """Get the resolved field descriptors for a type.

        Raises:
            MetadataError: If any declared constraint is malformed
        """
        cached = cls._resolved.get(entity_type)
        if cached is not None:
            return cached

        table = cls._tables.get(entity_type)
        if table is None:
            if not isinstance(entity_type, type):
                # Unknown name: not cached, it may be registered later
                return ()
            table = declared_fields(entity_type)

        resolved = _resolve_table(entity_type, table)
        logger.debug(
            "Discovered %d constraint(s) on %d field(s) of %s",
            sum(len(f.constraints) for f in resolved),
            len(resolved),
            type_name(entity_type),
        )
        return cls._resolved.setdefault(entity_type, resolved)

    @classmethod
    def describe(cls, entity_type: Any) -> tuple[tuple[str, ConstraintDescriptor], ...]:
        """List every (field name, constraint) pair declared on a type.

        Fields come in declaration order, and constraints on one field in
        the order they were declared. A type with no constraints yields an
        empty tuple.

        Raises:
            MetadataError: If any declared constraint is malformed
        """
        return tuple(
            (f.name, constraint)
            for f in cls.fields(entity_type)
            for constraint in f.constraints
        )

    @classmethod
    def is_registered(cls, entity_type: Any) -> bool:
        """Check if a type has an explicitly registered table."""
        return entity_type in cls._tables

    @classmethod
    def list_registered(cls) -> list[str]:
        """List the names of all explicitly registered types."""
        return sorted(type_name(t) for t in cls._tables)

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations and cached tables. Primarily for testing."""
        cls._tables.clear()
        cls._resolved.clear()


def constrained(cls: type) -> type:
    """Class decorator registering the constraints declared on ``cls``.

    Usage:
        @constrained
        @dataclass
        class Device:
            id: Annotated[str, Required("ID Property Requires Value")] = ""
    """
    MetadataRegistry.register(cls, declared_fields(cls))
    return cls


def declared_fields(cls: type) -> tuple[FieldDescriptor, ...]:
    """Read the field table of a class from its ``Annotated`` type hints.

    Fields without constraints are kept so that the table mirrors the
    class; they simply contribute nothing when validated.
    """
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise MetadataError(f"Cannot read type hints of '{cls.__qualname__}': {e}") from e

    result = []
    for name, hint in hints.items():
        if get_origin(hint) is ClassVar:
            continue
        hint = _unwrap_optional(name, hint)
        if get_origin(hint) is Annotated:
            base = get_args(hint)[0]
            constraints = tuple(
                m for m in hint.__metadata__ if isinstance(m, ConstraintDescriptor)
            )
        else:
            base = hint
            constraints = ()
        result.append(FieldDescriptor(name, field_type_of(base), constraints))
    return tuple(result)


def _unwrap_optional(name: str, hint: Any) -> Any:
    """Turn ``Optional[Annotated[X, ...]]`` into ``Annotated[X | None, ...]``.

    Constraints on a member of a wider union are ambiguous and rejected.
    """
    origin = get_origin(hint)
    if origin is not Union and origin is not types.UnionType:
        return hint

    members = [a for a in get_args(hint) if a is not type(None)]
    annotated = [m for m in members if get_origin(m) is Annotated]
    if not annotated:
        return hint
    if len(members) == 1:
        inner = members[0]
        return Annotated[(Optional[get_args(inner)[0]], *inner.__metadata__)]
    if any(isinstance(m, ConstraintDescriptor) for a in annotated for m in a.__metadata__):
        raise MetadataError(
            f"Field '{name}': constraints must annotate the whole field, "
            "not one member of a union"
        )
    return hint


def field_type_of(annotation: Any) -> FieldType:
    """Map a Python annotation to a FieldType. ``Optional[X]`` maps like X."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        return field_type_of(args[0]) if len(args) == 1 else FieldType.ANY
    if origin in (list, tuple) or annotation in (list, tuple):
        return FieldType.SEQUENCE
    # bool before int: bool is an int subclass
    if annotation is bool:
        return FieldType.BOOLEAN
    if annotation is int:
        return FieldType.INTEGER
    if annotation in (float, Decimal):
        return FieldType.NUMBER
    if annotation is str:
        return FieldType.STRING
    return FieldType.ANY


# =============================================================================
# Discovery checks
# =============================================================================


def _resolve_table(
    entity_type: Any, table: tuple[FieldDescriptor, ...]
) -> tuple[FieldDescriptor, ...]:
    seen: set[str] = set()
    resolved = []
    for field in table:
        if field.name in seen:
            raise MetadataError(
                f"Field '{field.name}' is declared twice on '{type_name(entity_type)}'"
            )
        seen.add(field.name)
        constraints = tuple(
            _resolve_constraint(entity_type, field, c) for c in field.constraints
        )
        resolved.append(replace(field, constraints=constraints))
    return tuple(resolved)


def _resolve_constraint(
    entity_type: Any, field: FieldDescriptor, descriptor: Any
) -> ConstraintDescriptor:
    """Check one descriptor and fill in its default message."""
    where = f"{type_name(entity_type)}.{field.name}"

    if not isinstance(descriptor, ConstraintDescriptor):
        raise MetadataError(f"{where}: {descriptor!r} is not a constraint descriptor")
    kind = descriptor.kind
    if not isinstance(kind, ConstraintKind):
        raise MetadataError(f"{where}: unsupported constraint kind {kind!r}")
    if descriptor.message is not None and not isinstance(descriptor.message, str):
        raise MetadataError(f"{where}: {kind.value} message must be a string")

    # Required messages are used verbatim, never formatted
    if kind == ConstraintKind.REQUIRED:
        if descriptor.message is None:
            return replace(descriptor, message=f"{field.label} is required")
        return descriptor

    if kind == ConstraintKind.RANGE:
        if not (_is_number(descriptor.minimum) and _is_number(descriptor.maximum)):
            raise MetadataError(f"{where}: range bounds must be numbers")
        if descriptor.minimum > descriptor.maximum:
            raise MetadataError(
                f"{where}: range minimum {descriptor.minimum} "
                f"is greater than maximum {descriptor.maximum}"
            )
        if not (field.type.is_numeric or field.type == FieldType.ANY):
            raise MetadataError(f"{where}: range requires a numeric field, not {field.type.value}")

    elif kind in (ConstraintKind.MAX_LENGTH, ConstraintKind.MIN_LENGTH):
        length = descriptor.length
        if not isinstance(length, int) or isinstance(length, bool) or length < 0:
            raise MetadataError(f"{where}: {kind.value} must be a non-negative integer")
        if field.type not in _LENGTH_FIELD_TYPES:
            raise MetadataError(
                f"{where}: {kind.value} requires a string or sequence field, "
                f"not {field.type.value}"
            )

    elif kind == ConstraintKind.PATTERN:
        if not isinstance(descriptor.pattern, str):
            raise MetadataError(f"{where}: pattern must be a string")
        try:
            re.compile(descriptor.pattern)
        except re.error as e:
            raise MetadataError(f"{where}: invalid pattern {descriptor.pattern!r}: {e}") from e
        if field.type not in _PATTERN_FIELD_TYPES:
            raise MetadataError(f"{where}: pattern requires a string field, not {field.type.value}")

    template = descriptor.message if descriptor.message is not None else DEFAULT_MESSAGES[kind]
    try:
        template.format(field=field.label, **descriptor.params)
    except (KeyError, IndexError, ValueError, AttributeError, TypeError) as e:
        raise MetadataError(f"{where}: cannot fill message template {template!r}: {e}") from e

    if descriptor.message is None:
        return replace(descriptor, message=template)
    return descriptor


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def type_name(entity_type: Any) -> str:
    if isinstance(entity_type, type):
        return entity_type.__qualname__
    return str(entity_type)
