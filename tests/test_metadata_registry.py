"""Tests for constraint declarations and metadata discovery."""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from typing import Annotated, ClassVar, Optional

import pytest

from validforge.errors import MetadataError
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
    declared_fields,
    field_type_of,
)
from validforge.samples import Device


# =============================================================================
# Declaration helpers
# =============================================================================


class TestDeclarations:
    def test_required(self):
        c = Required("ID Property Requires Value")
        assert c.kind == ConstraintKind.REQUIRED
        assert c.message == "ID Property Requires Value"
        assert c.params == {}

    def test_range(self):
        c = Range(10, 100, "Code Value Must Be Within 10-100")
        assert c.kind == ConstraintKind.RANGE
        assert c.params == {"min": 10, "max": 100}

    def test_length_and_pattern_params(self):
        assert MaxLength(100).params == {"max_length": 100}
        assert MinLength(2).params == {"min_length": 2}
        assert Pattern(r"\d+").params == {"pattern": r"\d+"}

    def test_descriptors_are_immutable_and_hashable(self):
        c = Range(1, 2)
        with pytest.raises(AttributeError):
            c.minimum = 5  # type: ignore[misc]
        assert hash(c) == hash(Range(1, 2))

    def test_kind_code(self):
        assert ConstraintKind.MAX_LENGTH.code == "MAX_LENGTH"
        assert ConstraintKind.REQUIRED.code == "REQUIRED"


class TestFieldLabel:
    @pytest.mark.parametrize(
        "name,label",
        [
            ("id", "Id"),
            ("description", "Description"),
            ("serialNumber", "Serial Number"),
            ("serial_number", "Serial Number"),
            ("ID", "ID"),
        ],
    )
    def test_label(self, name, label):
        assert FieldDescriptor(name).label == label


# =============================================================================
# Field type mapping
# =============================================================================


class TestFieldTypeOf:
    def test_scalars(self):
        assert field_type_of(str) == FieldType.STRING
        assert field_type_of(int) == FieldType.INTEGER
        assert field_type_of(float) == FieldType.NUMBER
        assert field_type_of(Decimal) == FieldType.NUMBER
        assert field_type_of(bool) == FieldType.BOOLEAN

    def test_optional_maps_like_inner_type(self):
        assert field_type_of(Optional[int]) == FieldType.INTEGER
        assert field_type_of(str | None) == FieldType.STRING

    def test_sequences(self):
        assert field_type_of(list) == FieldType.SEQUENCE
        assert field_type_of(list[str]) == FieldType.SEQUENCE
        assert field_type_of(tuple[int, ...]) == FieldType.SEQUENCE

    def test_everything_else_is_any(self):
        assert field_type_of(dict) == FieldType.ANY
        assert field_type_of(str | int) == FieldType.ANY


# =============================================================================
# Discovery
# =============================================================================


class TestDeclaredFields:
    def test_reads_annotated_hints_in_order(self):
        fields = declared_fields(Device)
        assert [f.name for f in fields] == ["id", "code", "description"]
        assert [f.type for f in fields] == [
            FieldType.STRING,
            FieldType.INTEGER,
            FieldType.STRING,
        ]
        assert fields[1].constraints == (Range(10, 100, "Code Value Must Be Within 10-100"),)

    def test_optional_wrapped_annotation_keeps_constraints(self):
        class Reading:
            level: Optional[Annotated[int, Range(0, 10)]] = None
            note: Annotated[str, MaxLength(5)] | None = None

        fields = declared_fields(Reading)
        assert fields[0].type == FieldType.INTEGER
        assert fields[0].constraints == (Range(0, 10),)
        assert fields[1].type == FieldType.STRING
        assert fields[1].constraints == (MaxLength(5),)

    def test_constraint_on_one_union_member_is_rejected(self):
        class Mixed:
            value: Annotated[int, Range(0, 10)] | str = 0

        with pytest.raises(MetadataError, match="member of a union"):
            declared_fields(Mixed)

    def test_keeps_unconstrained_fields(self):
        @dataclass
        class Note:
            title: Annotated[str, Required()] = ""
            body: str = ""

        fields = declared_fields(Note)
        assert [f.name for f in fields] == ["title", "body"]
        assert fields[1].constraints == ()

    def test_ignores_foreign_metadata_and_classvars(self):
        class Tagged:
            limit: ClassVar[int] = 3
            name: Annotated[str, "not a constraint", MaxLength(5)]

        fields = declared_fields(Tagged)
        assert [f.name for f in fields] == ["name"]
        assert fields[0].constraints == (MaxLength(5),)

    def test_inherited_fields_come_first(self):
        class Base:
            id: Annotated[str, Required()]

        class Child(Base):
            name: Annotated[str, Required()]

        assert [f.name for f in declared_fields(Child)] == ["id", "name"]


class TestDescribe:
    def test_describe_device(self):
        described = MetadataRegistry.describe(Device)
        assert [name for name, _ in described] == ["id", "code", "description"]
        assert [c.kind for _, c in described] == [
            ConstraintKind.REQUIRED,
            ConstraintKind.RANGE,
            ConstraintKind.MAX_LENGTH,
        ]

    def test_type_without_constraints_is_empty(self):
        @dataclass
        class Plain:
            name: str = ""
            count: int = 0

        assert MetadataRegistry.describe(Plain) == ()

    def test_unknown_type_name_is_empty(self):
        assert MetadataRegistry.describe("NoSuchType") == ()

    def test_multiple_constraints_keep_declaration_order(self):
        class Code:
            value: Annotated[str, Required(), MinLength(2), MaxLength(4), Pattern(r"[A-Z]+")]

        kinds = [c.kind for _, c in MetadataRegistry.describe(Code)]
        assert kinds == [
            ConstraintKind.REQUIRED,
            ConstraintKind.MIN_LENGTH,
            ConstraintKind.MAX_LENGTH,
            ConstraintKind.PATTERN,
        ]

    def test_describe_is_pure(self):
        first = MetadataRegistry.describe(Device)
        MetadataRegistry.clear()
        second = MetadataRegistry.describe(Device)
        assert first == second

    def test_result_is_cached(self):
        assert MetadataRegistry.fields(Device) is MetadataRegistry.fields(Device)

    def test_concurrent_discovery_converges(self):
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: MetadataRegistry.describe(Device), range(64)))
        assert all(r == results[0] for r in results)


class TestDefaultMessages:
    def test_required_default_uses_label(self):
        class Thing:
            serialNumber: Annotated[str, Required()]

        (_, c), = MetadataRegistry.describe(Thing)
        assert c.message == "Serial Number is required"

    def test_templated_defaults(self):
        class Thing:
            code: Annotated[int, Range(10, 100)]
            description: Annotated[str, MaxLength(100), MinLength(3)]
            sku: Annotated[str, Pattern(r"\d+")]

        messages = [c.message for _, c in MetadataRegistry.describe(Thing)]
        assert messages == [
            "{field} must be between {min} and {max}",
            "{field} must be at most {max_length} characters",
            "{field} must be at least {min_length} characters",
            "{field} format is invalid",
        ]

    def test_explicit_messages_are_kept(self):
        described = MetadataRegistry.describe(Device)
        assert [c.message for _, c in described] == [
            "ID Property Requires Value",
            "Code Value Must Be Within 10-100",
            "Max of 100 Charcters are allowed",
        ]

    def test_required_message_is_not_a_template(self):
        class Thing:
            name: Annotated[str, Required("{name} is {missing}")]

        (_, c), = MetadataRegistry.describe(Thing)
        assert c.message == "{name} is {missing}"


# =============================================================================
# Malformed metadata
# =============================================================================


class TestMetadataErrors:
    def test_range_min_greater_than_max(self):
        @constrained
        class Broken:
            code: Annotated[int, Range(100, 10)]

        # Detected on discovery, not at declaration
        with pytest.raises(MetadataError, match="greater than maximum"):
            MetadataRegistry.describe(Broken)

    def test_error_is_raised_on_every_discovery(self):
        class Broken:
            code: Annotated[int, Range(100, 10)]

        for _ in range(2):
            with pytest.raises(MetadataError):
                MetadataRegistry.describe(Broken)

    @pytest.mark.parametrize("minimum,maximum", [("a", 5), (1, None), (True, 5)])
    def test_range_bounds_must_be_numbers(self, minimum, maximum):
        class Broken:
            code: Annotated[int, Range(minimum, maximum)]

        with pytest.raises(MetadataError, match="must be numbers"):
            MetadataRegistry.describe(Broken)

    def test_range_on_string_field(self):
        class Broken:
            name: Annotated[str, Range(1, 5)]

        with pytest.raises(MetadataError, match="numeric field"):
            MetadataRegistry.describe(Broken)

    @pytest.mark.parametrize("length", [-1, 2.5, "10", None, True])
    def test_invalid_lengths(self, length):
        class Broken:
            name: Annotated[str, MaxLength(length)]

        with pytest.raises(MetadataError, match="non-negative integer"):
            MetadataRegistry.describe(Broken)

    def test_length_on_integer_field(self):
        class Broken:
            count: Annotated[int, MinLength(1)]

        with pytest.raises(MetadataError, match="string or sequence"):
            MetadataRegistry.describe(Broken)

    def test_invalid_pattern(self):
        class Broken:
            name: Annotated[str, Pattern("(unclosed")]

        with pytest.raises(MetadataError, match="invalid pattern"):
            MetadataRegistry.describe(Broken)

    def test_unfillable_message_template(self):
        class Broken:
            code: Annotated[int, Range(1, 5, "must be within {minimum}")]

        with pytest.raises(MetadataError, match="message template"):
            MetadataRegistry.describe(Broken)

    def test_message_template_indexing_a_number(self):
        class Broken:
            code: Annotated[int, Range(1, 5, "must be at least {min[0]}")]

        with pytest.raises(MetadataError, match="message template"):
            MetadataRegistry.describe(Broken)

    def test_non_string_message(self):
        class Broken:
            code: Annotated[int, Range(1, 5, 42)]  # type: ignore[arg-type]

        with pytest.raises(MetadataError, match="message must be a string"):
            MetadataRegistry.describe(Broken)

    def test_non_descriptor_in_explicit_table(self):
        MetadataRegistry.register("Broken", [FieldDescriptor("x", constraints=("nope",))])
        with pytest.raises(MetadataError, match="not a constraint descriptor"):
            MetadataRegistry.describe("Broken")

    def test_unknown_kind(self):
        bogus = ConstraintDescriptor(kind="between")  # type: ignore[arg-type]
        MetadataRegistry.register("Broken", [FieldDescriptor("x", constraints=(bogus,))])
        with pytest.raises(MetadataError, match="unsupported constraint kind"):
            MetadataRegistry.describe("Broken")

    def test_duplicate_field_names(self):
        MetadataRegistry.register(
            "Broken",
            [
                FieldDescriptor("x", FieldType.STRING, (Required(),)),
                FieldDescriptor("x", FieldType.STRING, (MaxLength(3),)),
            ],
        )
        with pytest.raises(MetadataError, match="declared twice"):
            MetadataRegistry.describe("Broken")


# =============================================================================
# Registration
# =============================================================================


class TestRegistration:
    def test_constrained_registers_class(self):
        @constrained
        class Widget:
            name: Annotated[str, Required()]

        assert MetadataRegistry.is_registered(Widget)
        assert "TestRegistration.test_constrained_registers_class.<locals>.Widget" in (
            MetadataRegistry.list_registered()
        )

    def test_explicit_table_for_named_type(self):
        MetadataRegistry.register(
            "Device",
            [
                FieldDescriptor("id", FieldType.STRING, (Required("ID is required"),)),
                FieldDescriptor("code", FieldType.INTEGER, (Range(10, 100),)),
            ],
        )
        assert [name for name, _ in MetadataRegistry.describe("Device")] == ["id", "code"]
        assert MetadataRegistry.list_registered() == ["Device"]

    def test_identical_reregistration_is_noop(self):
        table = [FieldDescriptor("id", FieldType.STRING, (Required(),))]
        MetadataRegistry.register("Thing", table)
        MetadataRegistry.register("Thing", list(table))
        assert len(MetadataRegistry.describe("Thing")) == 1

    def test_conflicting_reregistration_raises(self):
        MetadataRegistry.register("Thing", [FieldDescriptor("id", constraints=(Required(),))])
        with pytest.raises(MetadataError, match="already registered"):
            MetadataRegistry.register("Thing", [FieldDescriptor("name", constraints=(Required(),))])

    def test_clear(self):
        MetadataRegistry.register("Thing", [])
        MetadataRegistry.clear()
        assert not MetadataRegistry.is_registered("Thing")

    def test_register_after_unknown_name_was_described(self):
        assert MetadataRegistry.describe("Gadget") == ()
        MetadataRegistry.register("Gadget", [FieldDescriptor("id", constraints=(Required(),))])
        assert [name for name, _ in MetadataRegistry.describe("Gadget")] == ["id"]

    def test_register_after_class_was_discovered(self):
        class Gadget:
            id: Annotated[str, Required()]

        assert len(MetadataRegistry.describe(Gadget)) == 1
        MetadataRegistry.register(
            Gadget,
            [
                FieldDescriptor("id", FieldType.STRING, (Required(),)),
                FieldDescriptor("name", FieldType.STRING, (MaxLength(10),)),
            ],
        )
        assert [name for name, _ in MetadataRegistry.describe(Gadget)] == ["id", "name"]

    def test_concurrent_conflicting_registration_keeps_one_table(self):
        tables = [
            [FieldDescriptor(f"field{i}", constraints=(Required(),))] for i in range(8)
        ]

        def register(table):
            try:
                MetadataRegistry.register("Gadget", table)
            except MetadataError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=8) as pool:
            outcomes = list(pool.map(register, tables))
        assert outcomes.count(True) == 1
        winner = tables[outcomes.index(True)]
        assert [name for name, _ in MetadataRegistry.describe("Gadget")] == [winner[0].name]
