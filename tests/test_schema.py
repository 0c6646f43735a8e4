"""Unit tests for the schema model.

Tests cover:
- required filtering against properties
- Contract errors for additionalProperties and negative bounds
- Typed default/example/enum storage through the kind's caster
- Type and best-type resolution with explicit options
- Discriminator mapping helpers
- Extension filtering and $ref normalization
- from_dict / to_dict, including cyclic graphs
- from_dict on malformed content (skipped entries, dropped bounds)
"""

from decimal import Decimal

import pytest

from oaspec.casting import CastOptions, Int32
from oaspec.diagnostics import DiagnosticEmitter
from oaspec.document import Document
from oaspec.errors import SchemaContractError
from oaspec.schema import (
    Discriminator,
    SchemaNode,
    array_schema,
    boolean_schema,
    composed_schema,
    infer_kind,
    integer_schema,
    json_schema,
    map_schema,
    number_schema,
    object_schema,
    string_schema,
    uuid_schema,
)
from oaspec.types import DiagnosticKind, SchemaKind


@pytest.fixture
def emitter():
    return DiagnosticEmitter()


class TestRequiredFiltering:
    """Test that required only ever names declared properties."""

    def test_unknown_names_are_dropped(self):
        """Should keep only names present in properties."""
        pet = object_schema(properties={"name": string_schema(), "age": integer_schema()})
        pet.required = ["name", "nickname", "age"]
        assert pet.required == ["name", "age"]

    def test_without_properties_required_is_empty(self):
        """Should yield an empty list when properties are absent."""
        pet = object_schema()
        pet.required = ["name"]
        assert pet.required == []

    def test_empty_properties_required_is_empty(self):
        """Should yield an empty list when properties are empty."""
        pet = object_schema(properties={})
        pet.required = ["name"]
        assert pet.required == []

    def test_duplicates_are_removed(self):
        """Should keep the first occurrence of each name."""
        pet = object_schema(properties={"a": string_schema(), "b": string_schema()})
        pet.required = ["b", "a", "b"]
        assert pet.required == ["b", "a"]

    def test_every_required_name_is_a_property(self):
        """Should hold the filtering invariant for arbitrary input."""
        properties = {name: string_schema() for name in ("id", "name", "tag")}
        pet = object_schema(properties=properties)
        pet.required = ["tag", "missing", "id", "", "other"]
        assert all(name in pet.properties for name in pet.required)

    def test_constructor_applies_properties_first(self):
        """Should filter required against properties given in the same call."""
        pet = object_schema(required=["id", "ghost"], properties={"id": integer_schema()})
        assert pet.required == ["id"]

    def test_declare_required_keeps_names_verbatim(self):
        """Should bypass filtering for documents read as written."""
        pet = object_schema()
        pet.declare_required(["name"])
        assert pet.required == ["name"]


class TestContractErrors:
    """Test fail-fast programming errors."""

    def test_additional_properties_accepts_bool_and_schema(self):
        """Should accept booleans and nested schemas."""
        node = object_schema()
        node.additional_properties = False
        assert node.additional_properties is False
        nested = string_schema()
        node.additional_properties = nested
        assert node.additional_properties is nested
        node.additional_properties = None
        assert node.additional_properties is None

    def test_additional_properties_rejects_other_values(self):
        """Should raise SchemaContractError for anything else."""
        node = object_schema()
        with pytest.raises(SchemaContractError) as excinfo:
            node.additional_properties = "yes"
        assert excinfo.value.field == "additional_properties"
        assert excinfo.value.value == "yes"

    @pytest.mark.parametrize(
        "attribute",
        ["max_length", "min_length", "max_items", "min_items", "max_properties", "min_properties"],
    )
    def test_negative_bounds_raise(self, attribute):
        """Should raise for negative length and count bounds."""
        node = SchemaNode()
        with pytest.raises(SchemaContractError):
            setattr(node, attribute, -1)

    def test_zero_bound_is_allowed(self):
        """Should accept zero."""
        node = string_schema(min_length=0, max_length=10)
        assert node.min_length == 0
        assert node.max_length == 10

    @pytest.mark.parametrize("value", ["5", 2.5, True])
    def test_non_integer_bounds_raise(self, value):
        """Should raise SchemaContractError rather than TypeError for non-integers."""
        with pytest.raises(SchemaContractError):
            string_schema(max_length=value)

    def test_negative_bound_in_constructor_raises(self):
        """Should raise when a bad bound is passed as a keyword."""
        with pytest.raises(SchemaContractError):
            array_schema(min_items=-3)

    def test_unknown_keyword_raises_type_error(self):
        """Should reject keywords that are not schema attributes."""
        with pytest.raises(TypeError):
            string_schema(colour="red")


class TestTypedValues:
    """Test casting of default, example and enum values."""

    def test_integer_default_is_cast(self):
        """Should store integer defaults as Int32."""
        age = integer_schema()
        age.default = "7"
        assert age.default == 7
        assert isinstance(age.default, Int32)

    def test_failed_cast_stores_none_and_reports(self, emitter):
        """Should store None and emit CAST_FAILED instead of raising."""
        price = number_schema(emitter=emitter)
        price.example = "cheap"
        assert price.example is None
        assert len(emitter.of_kind(DiagnosticKind.CAST_FAILED)) == 1

    def test_enum_items_are_cast(self):
        """Should cast every enum item, including appended ones."""
        flag = boolean_schema(enum=["true", "false"])
        flag.add_enum_item("TRUE")
        assert flag.enum == [True, False, True]

    def test_examples_are_cast(self):
        """Should cast the example list and appended examples."""
        price = number_schema(examples=["1.5"])
        price.add_example(2)
        assert price.examples == [Decimal("1.5"), Decimal(2)]

    def test_uuid_default_setter_never_raises(self, emitter):
        """Should treat a malformed UUID string like any failed cast."""
        ident = uuid_schema(emitter=emitter)
        ident.set_default_uuid("not-a-uuid")
        assert ident.default is None
        assert emitter.diagnostics[0].kind is DiagnosticKind.CAST_FAILED

        ident.set_default_uuid("123e4567-e89b-12d3-a456-426614174000")
        assert str(ident.default) == "123e4567-e89b-12d3-a456-426614174000"


class TestTypeResolution:
    """Test single-type, type-set and best-type resolution."""

    def test_kind_defaults(self):
        """Should apply the kind's default type and format."""
        node = integer_schema()
        assert node.type == "integer"
        assert node.format == "int32"
        assert node.types == ["integer"]
        assert uuid_schema().format == "uuid"
        assert composed_schema().type is None

    def test_add_type_is_duplicate_free(self):
        """Should keep the type set ordered and unique."""
        node = json_schema()
        assert node.add_type("string") is True
        assert node.add_type("null") is True
        assert node.add_type("string") is False
        assert node.types == ["string", "null"]

    def test_bind_type_and_types_option(self):
        """Should report the single set entry only when the option is on."""
        plain = json_schema(types=["string"])
        assert plain.type is None

        bound = json_schema(options=CastOptions(bind_type_and_types=True), types=["string"])
        assert bound.type == "string"

    def test_declared_type_wins(self):
        """Should prefer the declared type over the set."""
        node = json_schema(options=CastOptions(bind_type_and_types=True), types=["string"])
        node.type = "integer"
        assert node.type == "integer"

    def test_best_type(self):
        """Should pick the representative type of a multi-type set."""
        assert json_schema(types=["null", "integer", "string"]).best_type() == "string"
        assert string_schema().best_type() == "string"


class TestDiscriminator:
    """Test discriminator mapping helpers."""

    def test_mapping_ref(self):
        """Should map a value to the canonical schema reference."""
        discriminator = Discriminator(property_name="petType").mapping_ref("dog", "Dog")
        assert list(discriminator.mapping.items()) == [("dog", "#/components/schemas/Dog")]

    def test_mapping_is_a_copy(self):
        """Should not expose the internal mapping for mutation."""
        source = {"cat": "#/components/schemas/Cat"}
        discriminator = Discriminator(property_name="petType", mapping=source)
        source["dog"] = "#/components/schemas/Dog"
        view = discriminator.mapping
        view["bird"] = "#/components/schemas/Bird"
        assert discriminator.mapping == {"cat": "#/components/schemas/Cat"}

    def test_mapping_order_is_preserved(self):
        """Should keep insertion order."""
        discriminator = Discriminator(property_name="kind")
        discriminator.add_mapping("b", "B").add_mapping("a", "A")
        assert list(discriminator.mapping) == ["b", "a"]

    def test_round_trip(self):
        """Should rebuild an equal discriminator from its dict."""
        original = Discriminator(property_name="kind", extensions={"x-note": 1}).mapping_ref("a", "A")
        assert Discriminator.from_dict(original.to_dict()) == original


class TestExtensionsAndRefs:
    """Test extension filtering and $ref normalization on schemas."""

    def test_invalid_extension_is_rejected(self, emitter):
        """Should drop keys without 'x-' and report them."""
        node = string_schema(emitter=emitter)
        assert node.add_extension("vendor", 1) is False
        assert node.add_extension("x-vendor", 1) is True
        assert node.extensions == {"x-vendor": 1}
        assert emitter.of_kind(DiagnosticKind.INVALID_EXTENSION)[0].subject == "vendor"

    def test_extension_mapping_is_filtered(self, emitter):
        """Should filter a whole extensions mapping on assignment."""
        node = string_schema(emitter=emitter)
        node.extensions = {"x-a": 1, "b": 2, "x-c": 3}
        assert node.extensions == {"x-a": 1, "x-c": 3}
        assert len(emitter.diagnostics) == 1

    def test_bare_ref_is_normalized(self):
        """Should expand bare names and keep canonical pointers."""
        node = SchemaNode(ref="Pet")
        assert node.ref == "#/components/schemas/Pet"
        node.ref = "#/components/schemas/Owner"
        assert node.ref == "#/components/schemas/Owner"


class TestSerialization:
    """Test from_dict and to_dict."""

    def test_from_dict_infers_kind_and_casts(self):
        """Should pick the kind from type/format and cast values."""
        node = SchemaNode.from_dict({"type": "integer", "default": "7", "enum": ["1", "2"]})
        assert node.kind is SchemaKind.INTEGER
        assert node.default == 7
        assert node.enum == [1, 2]

    def test_from_dict_keeps_required_verbatim(self):
        """Should not filter required names when reading a document."""
        node = SchemaNode.from_dict({"type": "object", "required": ["ghost"]})
        assert node.required == ["ghost"]

    def test_from_dict_multi_type(self):
        """Should read a type list as a json-schema type set."""
        node = SchemaNode.from_dict({"type": ["string", "null"]})
        assert node.kind is SchemaKind.JSON_SCHEMA
        assert node.type is None
        assert node.types == ["string", "null"]

    def test_from_dict_exclusive_bounds(self):
        """Should read boolean (3.0) and numeric (3.1) exclusive bounds."""
        legacy = SchemaNode.from_dict({"type": "number", "maximum": 10, "exclusiveMaximum": True})
        assert legacy.exclusive_maximum is True
        assert legacy.maximum == Decimal(10)

        modern = SchemaNode.from_dict({"type": "number", "exclusiveMinimum": 0})
        assert modern.exclusive_minimum is None
        assert modern.exclusive_minimum_value == Decimal(0)

    def test_from_dict_nested(self):
        """Should build nested schemas and a discriminator."""
        node = SchemaNode.from_dict({
            "type": "object",
            "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
            "additionalProperties": False,
            "discriminator": {"propertyName": "kind"},
        })
        assert node.properties["tags"].items.type == "string"
        assert node.properties["tags"].name == "tags"
        assert node.additional_properties is False
        assert node.discriminator.property_name == "kind"

    def test_to_dict_projects_values(self):
        """Should write typed values back as JSON-compatible values."""
        node = object_schema(
            properties={"id": uuid_schema(), "count": integer_schema(default="3")},
            required=["id"],
            extensions={"x-internal": True},
        )
        data = node.to_dict()
        assert data["type"] == "object"
        assert data["required"] == ["id"]
        assert data["properties"]["count"] == {"type": "integer", "format": "int32", "default": 3}
        assert data["properties"]["id"] == {"type": "string", "format": "uuid"}
        assert data["x-internal"] is True

    def test_to_dict_ref_only(self):
        """Should write only $ref for reference schemas."""
        assert SchemaNode(ref="Pet", description="ignored").to_dict() == {
            "$ref": "#/components/schemas/Pet"
        }

    def test_to_dict_survives_cycles(self):
        """Should write a re-entered node as a reference to its name."""
        node = object_schema(name="Node")
        node.add_property("next", node)
        assert node.to_dict()["properties"]["next"] == {"$ref": "#/components/schemas/Node"}

    def test_map_schema_children(self):
        """Should yield additionalProperties among the children."""
        values = string_schema()
        node = map_schema(additional_properties=values)
        assert list(node.children()) == [values]


class TestMalformedContent:
    """Test that from_dict reports bad content instead of raising."""

    def test_boolean_property_schema_is_skipped(self, emitter):
        """Should skip non-mapping property values and report them."""
        node = SchemaNode.from_dict(
            {"type": "object", "properties": {"a": True, "b": {"type": "string"}}},
            emitter=emitter,
        )
        assert list(node.properties) == ["b"]
        skipped = emitter.of_kind(DiagnosticKind.INVALID_PROPERTY)
        assert [d.subject for d in skipped] == ["properties[a]"]
        assert skipped[0].value is True

    def test_non_mapping_composition_entries_are_skipped(self, emitter):
        """Should keep only mapping entries of allOf/oneOf/anyOf."""
        node = SchemaNode.from_dict(
            {"allOf": [{"type": "object"}, False], "oneOf": "Pet", "patternProperties": {"^x": 1}},
            emitter=emitter,
        )
        assert len(node.all_of) == 1
        assert node.one_of is None
        assert node.pattern_properties == {}
        subjects = [d.subject for d in emitter.of_kind(DiagnosticKind.INVALID_PROPERTY)]
        assert subjects == ["patternProperties[^x]", "allOf[1]", "oneOf"]

    def test_invalid_additional_properties_is_skipped(self, emitter):
        """Should not raise for an additionalProperties that is neither bool nor schema."""
        node = SchemaNode.from_dict({"type": "object", "additionalProperties": "yes"}, emitter=emitter)
        assert node.additional_properties is None
        assert len(emitter.of_kind(DiagnosticKind.INVALID_PROPERTY)) == 1

    @pytest.mark.parametrize("keyword", ["maximum", "minimum", "multipleOf"])
    def test_non_numeric_bound_is_dropped(self, emitter, keyword):
        """Should drop non-numeric numeric bounds with a cast failure."""
        node = SchemaNode.from_dict({"type": "number", keyword: "ten"}, emitter=emitter)
        assert node.maximum is None and node.minimum is None and node.multiple_of is None
        failures = emitter.of_kind(DiagnosticKind.CAST_FAILED)
        assert [d.subject for d in failures] == [keyword]

    def test_numeric_string_bound_is_read(self):
        """Should read numeric strings as decimals."""
        assert SchemaNode.from_dict({"type": "number", "maximum": "10.5"}).maximum == Decimal("10.5")

    def test_non_numeric_exclusive_bound_is_dropped(self, emitter):
        """Should drop a non-numeric 3.1 exclusive bound."""
        node = SchemaNode.from_dict({"type": "number", "exclusiveMinimum": "low"}, emitter=emitter)
        assert node.exclusive_minimum_value is None
        assert emitter.of_kind(DiagnosticKind.CAST_FAILED)[0].subject == "exclusiveMinimum"

    @pytest.mark.parametrize("value", ["five", -1, 2.5, True])
    def test_bad_count_is_dropped(self, emitter, value):
        """Should drop count keywords that are not non-negative integers."""
        node = SchemaNode.from_dict({"type": "string", "maxLength": value}, emitter=emitter)
        assert node.max_length is None
        assert emitter.of_kind(DiagnosticKind.CAST_FAILED)[0].subject == "maxLength"

    def test_integer_string_count_is_read(self):
        """Should read integer strings as counts."""
        assert SchemaNode.from_dict({"type": "array", "minItems": "5"}).min_items == 5

    def test_document_load_does_not_raise(self):
        """Should load a document carrying malformed schema content."""
        document = Document.from_dict({"components": {"schemas": {
            "S": {"type": "object", "properties": {"a": True}, "maximum": "ten", "maxLength": "5"},
        }}})
        schema = document.components.schemas["S"]
        assert schema.properties == {}
        assert schema.maximum is None
        assert schema.max_length == 5


class TestInferKind:
    """Test kind inference from raw mappings."""

    @pytest.mark.parametrize(
        "data,kind",
        [
            ({"type": "string", "format": "uuid"}, SchemaKind.UUID),
            ({"type": "string", "format": "date"}, SchemaKind.DATE),
            ({"type": "string", "format": "carrot"}, SchemaKind.STRING),
            ({"type": "object", "additionalProperties": {"type": "string"}}, SchemaKind.MAP),
            ({"type": "object", "additionalProperties": True}, SchemaKind.OBJECT),
            ({"allOf": [{"type": "object"}]}, SchemaKind.COMPOSED),
            ({"type": ["integer", "null"]}, SchemaKind.JSON_SCHEMA),
            ({}, SchemaKind.ARBITRARY),
        ],
    )
    def test_infer(self, data, kind):
        """Should map type/format combinations to kinds."""
        assert infer_kind(data) is kind
