"""Tests for field metadata discovery."""

import pytest
from collections import OrderedDict, deque
from typing import Any, ClassVar, Dict, Final, FrozenSet, List, Mapping, Optional, Sequence, Set, Tuple

from json_processor import json_field
from json_processor.engines import MetadataResolver
from json_processor.mappers import DefaultMapper, JSONValueMapper, UUIDMapper
from json_processor.models import FieldDescriptor, has_processable_fields
from json_processor.types import EnumFormat, FieldKind, InstantiationError, ValidationError

from sample_models import Address, Role, Unmarked, User


class NeedsArgumentMapper(JSONValueMapper):
    def __init__(self, factor):
        self.factor = factor

    def to_json_value(self, value):
        return value * self.factor

    def from_json_value(self, value):
        return value / self.factor


class StaticField:
    count: ClassVar[int] = json_field()


class FinalField:
    limit: Final[int] = json_field()


class Containers:
    plain: List[str] = json_field(collection_impl=deque)
    abstract: Sequence[int] = json_field(collection_impl=deque)
    unique: Set[str] = json_field()
    frozen: FrozenSet[str] = json_field()
    fixed: Tuple[int, ...] = json_field()
    table: Dict[str, int] = json_field(map_impl=OrderedDict)
    ordered: Mapping[str, Role] = json_field(map_impl=OrderedDict)
    bare: list = json_field()
    maybe: Optional[List[str]] = json_field(nullable=True)


class Base:
    base_value: str = json_field()


class Derived(Base):
    own_value: str = json_field()


class Untyped:
    anything = json_field()
    loose: Any = json_field()


class Forward:
    tags: "List[str]" = json_field()
    home: "Address" = json_field()


class Unresolvable:
    age: "int" = json_field()
    tags: "Sequence[str]" = json_field(collection_impl=deque)
    other: "NotDefinedAnywhere" = json_field(nullable=True)


class UnresolvedPlainAttribute:
    age: "int" = json_field()
    tags: "Sequence[str]" = json_field(collection_impl=deque)
    note: "NotDefinedAnywhere" = None


class TestDiscover:
    """Tests for MetadataResolver.discover."""

    def setup_method(self):
        """Set up test fixtures."""
        self.resolver = MetadataResolver()

    def test_definition_order(self):
        """Test that fields come back in definition order."""
        names = [field.name for field in self.resolver.discover(User)]
        assert names == ["name", "age", "active", "score", "role", "level", "address",
                         "tags", "aliases", "scores", "id", "nickname"]

    def test_descriptor_attributes(self):
        """Test descriptor contents for a configured field."""
        fields = {field.name: field for field in self.resolver.discover(User)}

        assert isinstance(fields["level"], FieldDescriptor)
        assert fields["level"].enum_format == EnumFormat.ORDINAL
        assert fields["role"].enum_format == EnumFormat.STRING
        assert fields["nickname"].nullable
        assert not fields["name"].nullable
        assert isinstance(fields["id"].mapper, UUIDMapper)
        assert isinstance(fields["name"].mapper, DefaultMapper)
        assert fields["address"].kind == FieldKind.OBJECT
        assert fields["address"].field_type is Address

    def test_inherited_fields_are_not_discovered(self):
        """Test that only fields declared on the class itself count."""
        names = [field.name for field in self.resolver.discover(Derived)]
        assert names == ["own_value"]

    def test_class_without_fields(self):
        """Test a class with no markers."""
        assert self.resolver.discover(Unmarked) == []

    def test_non_class_rejected(self):
        """Test that instances are not accepted."""
        with pytest.raises(ValidationError):
            self.resolver.discover(Unmarked())

    def test_static_field_rejected(self):
        """Test that ClassVar fields abort discovery."""
        with pytest.raises(ValidationError, match="count .* is static") as exc_info:
            self.resolver.discover(StaticField)
        assert exc_info.value.target is StaticField

    def test_final_field_rejected(self):
        """Test that Final fields abort discovery."""
        with pytest.raises(ValidationError, match="limit .* is final") as exc_info:
            self.resolver.discover(FinalField)
        assert exc_info.value.target is FinalField

    def test_mapper_instantiation_failure(self):
        """Test mappers that need constructor arguments."""
        class Scaled:
            value: int = json_field(mapper=NeedsArgumentMapper)

        with pytest.raises(InstantiationError, match="NeedsArgumentMapper") as exc_info:
            self.resolver.discover(Scaled)
        assert exc_info.value.target is Scaled
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_fresh_mappers_per_call(self):
        """Test that nothing is cached between calls."""
        first = {field.name: field for field in self.resolver.discover(User)}
        second = {field.name: field for field in self.resolver.discover(User)}
        assert first["id"].mapper is not second["id"].mapper

    def test_untyped_fields_are_opaque(self):
        """Test fields without a usable annotation."""
        fields = self.resolver.discover(Untyped)
        assert [field.field_type for field in fields] == [object, object]
        assert all(field.kind == FieldKind.OBJECT for field in fields)

    def test_string_annotations_are_evaluated(self):
        """Test forward references."""
        fields = {field.name: field for field in self.resolver.discover(Forward)}
        assert fields["tags"].kind == FieldKind.COLLECTION
        assert fields["tags"].element_type is str
        assert fields["home"].field_type is Address

    def test_unresolvable_annotation_rejected(self):
        """Test that a field with an unknown type aborts discovery."""
        with pytest.raises(ValidationError, match="NotDefinedAnywhere") as exc_info:
            self.resolver.discover(Unresolvable)
        assert exc_info.value.target is Unresolvable
        assert isinstance(exc_info.value.__cause__, NameError)

    def test_unresolved_plain_attribute_keeps_fields_typed(self):
        """Test that other annotations resolve when a plain attribute cannot."""
        fields = {field.name: field for field in self.resolver.discover(UnresolvedPlainAttribute)}

        assert list(fields) == ["age", "tags"]
        assert fields["age"].field_type is int
        assert fields["tags"].kind == FieldKind.COLLECTION
        assert fields["tags"].container_type is deque


class TestContainerSelection:
    """Tests for container implementation selection."""

    def setup_method(self):
        """Set up test fixtures."""
        resolver = MetadataResolver()
        self.fields = {field.name: field for field in resolver.discover(Containers)}

    def test_declared_concrete_type_wins(self):
        """Test that a concrete declared type ignores the configured implementation."""
        assert self.fields["plain"].container_type is list
        assert self.fields["table"].container_type is dict

    def test_abstract_type_uses_configured_implementation(self):
        """Test abstract declared types."""
        assert self.fields["abstract"].container_type is deque
        assert self.fields["ordered"].container_type is OrderedDict

    def test_other_concrete_collections(self):
        """Test sets, frozensets and tuples."""
        assert self.fields["unique"].container_type is set
        assert self.fields["frozen"].container_type is frozenset
        assert self.fields["fixed"].container_type is tuple

    def test_element_and_value_types(self):
        """Test generic arguments on descriptors."""
        assert self.fields["abstract"].element_type is int
        assert self.fields["ordered"].key_type is str
        assert self.fields["ordered"].value_type is Role
        assert self.fields["bare"].element_type is object

    def test_optional_container(self):
        """Test Optional around a container type."""
        field = self.fields["maybe"]
        assert field.kind == FieldKind.COLLECTION
        assert field.element_type is str
        assert field.container_type is list

    def test_to_dict(self):
        """Test descriptor description."""
        description = self.fields["abstract"].to_dict()
        assert description["name"] == "abstract"
        assert description["kind"] == "collection"
        assert description["container_type"] == "deque"
        assert description["element_type"] == "int"
        assert description["mapper"] == "DefaultMapper"


class TestHasProcessableFields:
    """Tests for the processable-fields predicate."""

    def test_predicate(self):
        """Test classes, plain classes and non-classes."""
        assert has_processable_fields(User)
        assert not has_processable_fields(Unmarked)
        assert not has_processable_fields(User())
        assert not has_processable_fields(int)

    def test_predicate_does_not_validate(self):
        """Test that invalid declarations still count as processable."""
        assert has_processable_fields(StaticField)
        assert MetadataResolver().has_processable_fields(FinalField)
