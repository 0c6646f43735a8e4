"""Schema node model for oaspec.

SchemaNode describes the shape of one value: its declared type (a single
``type`` and/or an ordered ``types`` set), constraints, nested schemas,
composition keywords, a discriminator, typed default/example/enum values and
"x-" extensions.

A node's ``kind`` (a SchemaKind) decides how defaults, examples and enum
items are cast before they are stored, so those fields always hold values of
the kind's native Python type. Casting failures store None and emit a
CAST_FAILED diagnostic; they never raise.

Two assignments do raise SchemaContractError because they can only come from
a programming error: a negative or non-integer length/count bound, and an
``additional_properties`` value that is neither a bool nor a SchemaNode.

Usage:
    >>> pet = object_schema(name="Pet")
    >>> pet.properties = {"name": string_schema(), "age": integer_schema()}
    >>> pet.required = ["name", "nickname"]
    >>> pet.required
    ['name']
    >>> age = pet.properties["age"]
    >>> age.default = "7"
    >>> age.default
    Int32(7)
"""

import datetime
import uuid
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from oaspec.base import ModelObject, filter_extensions
from oaspec.casting import CastOptions, DEFAULT_OPTIONS, cast_value, resolve_best_type
from oaspec.diagnostics import DiagnosticEmitter, report
from oaspec.errors import SchemaContractError
from oaspec.references import schema_ref
from oaspec.types import ComponentSection, DiagnosticKind, SchemaKind

AdditionalProperties = Union[bool, "SchemaNode", None]


class _NonNegativeBound:
    """Descriptor for length/count constraints that must not be negative."""

    def __set_name__(self, owner, name):
        self.name = name
        self.attr = f"_{name}"

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.__dict__.get(self.attr)

    def __set__(self, obj, value):
        if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
            raise SchemaContractError(
                field=self.name,
                value=value,
                message=f"{self.name} must be a non-negative integer.",
            )
        obj.__dict__[self.attr] = value


class Discriminator(ModelObject):
    """Polymorphism hint for composed schemas.

    Attributes:
        property_name: Name of the property whose value selects the schema
        mapping: Ordered mapping from discriminator value to schema reference

    Examples:
        >>> d = Discriminator(property_name="petType").mapping_ref("dog", "Dog")
        >>> dict(d.mapping)
        {'dog': '#/components/schemas/Dog'}
    """

    def __init__(
        self,
        property_name: Optional[str] = None,
        mapping: Optional[Mapping[str, str]] = None,
        extensions: Optional[Mapping[str, Any]] = None,
        emitter: Optional[DiagnosticEmitter] = None,
    ):
        self.emitter = emitter
        self.property_name = property_name
        self._mapping: Optional[Dict[str, str]] = None
        self.set_mapping(mapping)
        self.extensions = extensions

    @property
    def mapping(self) -> Optional[Mapping[str, str]]:
        """Read-only view of the value -> reference mapping."""
        if self._mapping is None:
            return None
        return dict(self._mapping)

    def set_mapping(self, mapping: Optional[Mapping[str, str]]) -> "Discriminator":
        """Replace the mapping with a copy of ``mapping`` (None clears it)."""
        self._mapping = dict(mapping) if mapping is not None else None
        return self

    def add_mapping(self, name: str, value: str) -> "Discriminator":
        """Map discriminator value ``name`` to reference ``value``."""
        if self._mapping is None:
            self._mapping = {}
        self._mapping[name] = value
        return self

    def mapping_ref(self, value: str, schema_name: str) -> "Discriminator":
        """Map ``value`` to the canonical reference of component ``schema_name``."""
        return self.add_mapping(value, schema_ref(schema_name))

    def __eq__(self, other):
        if not isinstance(other, Discriminator):
            return NotImplemented
        return (
            self.property_name == other.property_name
            and self._mapping == other._mapping
            and self.extensions == other.extensions
        )

    def __repr__(self) -> str:
        return f"Discriminator(property_name={self.property_name!r}, mapping={self._mapping!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {}
        if self.property_name is not None:
            result["propertyName"] = self.property_name
        if self._mapping is not None:
            result["mapping"] = dict(self._mapping)
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], emitter: Optional[DiagnosticEmitter] = None) -> "Discriminator":
        """Create Discriminator from dict."""
        return cls(
            property_name=data.get("propertyName"),
            mapping=data.get("mapping"),
            extensions={k: v for k, v in data.items() if k.startswith("x-")},
            emitter=emitter,
        )


class SchemaNode(ModelObject):
    """One schema definition.

    Attributes:
        kind: Concrete value kind, fixes the casting rules
        options: Explicit type-resolution and casting switches
        emitter: Optional diagnostics channel for cast failures and
            rejected extension keys
        name, title, description: Documentation
        format, pattern: String constraints
        multiple_of, maximum, minimum, exclusive_maximum_value,
        exclusive_minimum_value: Numeric bounds (Decimal)
        exclusive_maximum, exclusive_minimum: OpenAPI 3.0 boolean flags
        unique_items, nullable, read_only, write_only, deprecated: Flags
        items, not_, if_, then, else_, contains, property_names,
        unevaluated_properties, unevaluated_items, additional_items,
        content_schema: Nested schemas
        properties, pattern_properties, dependent_schemas: Named nested schemas
        all_of, one_of, any_of: Composition lists
        dependent_required: Property name -> names it requires
        discriminator: Discriminator for composed schemas

    Validated attributes (see the properties below): ``type``, ``types``,
    ``ref``, ``required``, ``additional_properties``, the length/count bounds,
    ``default``, ``example``, ``examples``, ``enum`` and ``extensions``.
    """

    ref_section = ComponentSection.SCHEMAS

    max_length = _NonNegativeBound()
    min_length = _NonNegativeBound()
    max_items = _NonNegativeBound()
    min_items = _NonNegativeBound()
    max_properties = _NonNegativeBound()
    min_properties = _NonNegativeBound()
    max_contains = _NonNegativeBound()
    min_contains = _NonNegativeBound()

    def __init__(
        self,
        kind: SchemaKind = SchemaKind.ARBITRARY,
        options: Optional[CastOptions] = None,
        emitter: Optional[DiagnosticEmitter] = None,
        **keywords: Any,
    ):
        self.kind = SchemaKind(kind)
        self.options = options or DEFAULT_OPTIONS
        self.emitter = emitter

        default_type, default_format = self.kind.defaults
        self._type: Optional[str] = default_type
        self._types: Dict[str, None] = {}
        if default_type is not None:
            self.add_type(default_type)
        self.format: Optional[str] = default_format

        self.name: Optional[str] = None
        self.title: Optional[str] = None
        self.description: Optional[str] = None
        self.pattern: Optional[str] = None
        self.multiple_of: Optional[Decimal] = None
        self.maximum: Optional[Decimal] = None
        self.minimum: Optional[Decimal] = None
        self.exclusive_maximum: Optional[bool] = None
        self.exclusive_minimum: Optional[bool] = None
        self.exclusive_maximum_value: Optional[Decimal] = None
        self.exclusive_minimum_value: Optional[Decimal] = None
        self.unique_items: Optional[bool] = None
        self.nullable: Optional[bool] = None
        self.read_only: Optional[bool] = None
        self.write_only: Optional[bool] = None
        self.deprecated: Optional[bool] = None
        self.content_encoding: Optional[str] = None
        self.content_media_type: Optional[str] = None
        self.comment: Optional[str] = None

        self.items: Optional[SchemaNode] = None
        self.not_: Optional[SchemaNode] = None
        self.if_: Optional[SchemaNode] = None
        self.then: Optional[SchemaNode] = None
        self.else_: Optional[SchemaNode] = None
        self.contains: Optional[SchemaNode] = None
        self.property_names: Optional[SchemaNode] = None
        self.unevaluated_properties: Optional[SchemaNode] = None
        self.unevaluated_items: Optional[SchemaNode] = None
        self.additional_items: Optional[SchemaNode] = None
        self.content_schema: Optional[SchemaNode] = None
        self.properties: Optional[Dict[str, SchemaNode]] = None
        self.pattern_properties: Optional[Dict[str, SchemaNode]] = None
        self.dependent_schemas: Optional[Dict[str, SchemaNode]] = None
        self.dependent_required: Optional[Dict[str, List[str]]] = None
        self.all_of: Optional[List[SchemaNode]] = None
        self.one_of: Optional[List[SchemaNode]] = None
        self.any_of: Optional[List[SchemaNode]] = None
        self.discriminator: Optional[Discriminator] = None

        self.ref: Optional[str] = None
        self._required: Optional[List[str]] = None
        self._additional_properties: AdditionalProperties = None
        self._default: Any = None
        self._example: Any = None
        self._raw_example: Any = None
        self._examples: Optional[List[Any]] = None
        self._enum: Optional[List[Any]] = None
        self.extensions: Dict[str, Any] = {}

        # required is filtered against properties, so it goes last
        for key in sorted(keywords, key=lambda k: k == "required"):
            if key.startswith("_") or not hasattr(self, key):
                raise TypeError(f"SchemaNode() got an unexpected keyword argument '{key}'")
            setattr(self, key, keywords[key])

    def __repr__(self) -> str:
        return f"SchemaNode(kind={self.kind.value!r}, type={self._type!r}, name={self.name!r})"

    # -- type resolution -------------------------------------------------

    @property
    def type(self) -> Optional[str]:
        """Declared single type, resolved with this node's options."""
        return self.resolved_type(self.options)

    @type.setter
    def type(self, value: Optional[str]) -> None:
        self._type = value

    @property
    def declared_type(self) -> Optional[str]:
        """The single ``type`` exactly as declared, without resolution."""
        return self._type

    def resolved_type(self, options: Optional[CastOptions] = None) -> Optional[str]:
        """Resolve the single type.

        When ``options.bind_type_and_types`` is set, ``type`` is absent and
        ``types`` holds exactly one entry, that entry is returned. Otherwise
        the declared ``type`` wins.
        """
        options = options or DEFAULT_OPTIONS
        if options.bind_type_and_types and self._type is None and len(self._types) == 1:
            return next(iter(self._types))
        return self._type

    def best_type(self) -> Optional[str]:
        """Representative type of a multi-type declaration (see resolve_best_type)."""
        if self._types:
            return resolve_best_type(self._types)
        return self._type

    @property
    def types(self) -> List[str]:
        """Ordered, duplicate-free type set."""
        return list(self._types)

    @types.setter
    def types(self, values: Optional[Iterable[str]]) -> None:
        self._types = dict.fromkeys(values or ())

    def add_type(self, value: str) -> bool:
        """Add ``value`` to the type set; False if it was already present."""
        if value in self._types:
            return False
        self._types[value] = None
        return True

    # -- structural invariants -------------------------------------------

    @property
    def required(self) -> List[str]:
        return list(self._required or [])

    @required.setter
    def required(self, names: Optional[Iterable[str]]) -> None:
        """Keep only names declared in ``properties``, in the given order."""
        if not names or not self.properties:
            self._required = None
            return
        kept = [n for n in dict.fromkeys(names) if n in self.properties]
        self._required = kept or None

    def declare_required(self, names: Optional[Iterable[str]]) -> None:
        """Store ``required`` verbatim, bypassing the properties filter.

        Used when materializing a document as written, so the schema
        validator can report names that are missing from ``properties``.
        """
        self._required = list(names) if names else None

    @property
    def additional_properties(self) -> AdditionalProperties:
        return self._additional_properties

    @additional_properties.setter
    def additional_properties(self, value: AdditionalProperties) -> None:
        if value is not None and not isinstance(value, (bool, SchemaNode)):
            raise SchemaContractError(
                field="additional_properties",
                value=value,
                message="additionalProperties must be either a bool or a SchemaNode instance",
            )
        self._additional_properties = value

    # -- typed values -----------------------------------------------------

    def cast(self, value: Any) -> Any:
        """Convert ``value`` to this node's native value type (None on failure)."""
        return cast_value(self.kind, value, self.options, self.emitter, self._types)

    @property
    def default(self) -> Any:
        return self._default

    @default.setter
    def default(self, value: Any) -> None:
        self._default = self.cast(value)

    def set_default_uuid(self, value: Optional[str]) -> None:
        """Set the default from a UUID string.

        A malformed string leaves the default absent and emits CAST_FAILED,
        exactly like any other cast.
        """
        self._default = cast_value(SchemaKind.UUID, value, self.options, self.emitter)

    @property
    def example(self) -> Any:
        return self._example

    @example.setter
    def example(self, value: Any) -> None:
        self._raw_example = value
        self._example = self.cast(value)

    @property
    def raw_example(self) -> Any:
        """The example exactly as it was assigned, before casting.

        Format rules check this value, since a cast can drop or reshape a
        malformed example (an invalid UUID becomes None, a timestamp on a
        date schema is cut down to its date).
        """
        return self._raw_example

    @property
    def examples(self) -> Optional[List[Any]]:
        return self._examples

    @examples.setter
    def examples(self, values: Optional[Iterable[Any]]) -> None:
        self._examples = None if values is None else [self.cast(v) for v in values]

    def add_example(self, value: Any) -> "SchemaNode":
        if self._examples is None:
            self._examples = []
        self._examples.append(self.cast(value))
        return self

    @property
    def enum(self) -> Optional[List[Any]]:
        return self._enum

    @enum.setter
    def enum(self, values: Optional[Iterable[Any]]) -> None:
        self._enum = None if values is None else [self.cast(v) for v in values]

    def add_enum_item(self, value: Any) -> "SchemaNode":
        if self._enum is None:
            self._enum = []
        self._enum.append(self.cast(value))
        return self

    # -- children ---------------------------------------------------------

    def add_property(self, name: str, schema: "SchemaNode") -> "SchemaNode":
        if self.properties is None:
            self.properties = {}
        self.properties[name] = schema
        return self

    def children(self) -> Iterable["SchemaNode"]:
        """Every directly nested SchemaNode, in keyword order."""
        singles = (
            self.items, self.not_, self.if_, self.then, self.else_, self.contains,
            self.property_names, self.unevaluated_properties, self.unevaluated_items,
            self.additional_items, self.content_schema,
        )
        for child in singles:
            if isinstance(child, SchemaNode):
                yield child
        if isinstance(self._additional_properties, SchemaNode):
            yield self._additional_properties
        for mapping in (self.properties, self.pattern_properties, self.dependent_schemas):
            for child in (mapping or {}).values():
                if isinstance(child, SchemaNode):
                    yield child
        for group in (self.all_of, self.one_of, self.any_of):
            for child in group or ():
                if isinstance(child, SchemaNode):
                    yield child

    # -- serialization ----------------------------------------------------

    def to_dict(self, _active: Optional[set] = None) -> Dict[str, Any]:
        """Convert to dict for serialization.

        A node that is re-entered while it is being serialized (a cyclic
        graph) is written as a reference to its component name, or as an
        empty schema if it has no name.
        """
        active = _active if _active is not None else set()
        if id(self) in active:
            return {"$ref": schema_ref(self.name)} if self.name else {}
        active.add(id(self))
        try:
            return self._to_dict(active)
        finally:
            active.discard(id(self))

    def _to_dict(self, active: set) -> Dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}

        result: Dict[str, Any] = {}
        if self._type is not None:
            result["type"] = self._type
        if len(self._types) > 1 or (self._types and self._type is None):
            result["types"] = list(self._types)

        scalars = (
            ("title", self.title),
            ("description", self.description),
            ("format", self.format),
            ("pattern", self.pattern),
            ("multipleOf", self.multiple_of),
            ("maximum", self.maximum),
            ("exclusiveMaximum", self.exclusive_maximum),
            ("minimum", self.minimum),
            ("exclusiveMinimum", self.exclusive_minimum),
            ("exclusiveMaximumValue", self.exclusive_maximum_value),
            ("exclusiveMinimumValue", self.exclusive_minimum_value),
            ("maxLength", self.max_length),
            ("minLength", self.min_length),
            ("maxItems", self.max_items),
            ("minItems", self.min_items),
            ("uniqueItems", self.unique_items),
            ("maxProperties", self.max_properties),
            ("minProperties", self.min_properties),
            ("maxContains", self.max_contains),
            ("minContains", self.min_contains),
            ("nullable", self.nullable),
            ("readOnly", self.read_only),
            ("writeOnly", self.write_only),
            ("deprecated", self.deprecated),
            ("contentEncoding", self.content_encoding),
            ("contentMediaType", self.content_media_type),
            ("$comment", self.comment),
            ("default", plain_value(self._default)),
            ("example", plain_value(self._example)),
        )
        for key, value in scalars:
            if value is not None:
                result[key] = value

        if self._required:
            result["required"] = list(self._required)
        if self._enum is not None:
            result["enum"] = [plain_value(v) for v in self._enum]
        if self._examples is not None:
            result["examples"] = [plain_value(v) for v in self._examples]
        if self.dependent_required is not None:
            result["dependentRequired"] = {k: list(v) for k, v in self.dependent_required.items()}

        singles = (
            ("items", self.items),
            ("not", self.not_),
            ("if", self.if_),
            ("then", self.then),
            ("else", self.else_),
            ("contains", self.contains),
            ("propertyNames", self.property_names),
            ("unevaluatedProperties", self.unevaluated_properties),
            ("unevaluatedItems", self.unevaluated_items),
            ("additionalItems", self.additional_items),
            ("contentSchema", self.content_schema),
        )
        for key, child in singles:
            if child is not None:
                result[key] = child.to_dict(active)

        if isinstance(self._additional_properties, SchemaNode):
            result["additionalProperties"] = self._additional_properties.to_dict(active)
        elif self._additional_properties is not None:
            result["additionalProperties"] = self._additional_properties

        for key, mapping in (
            ("properties", self.properties),
            ("patternProperties", self.pattern_properties),
            ("dependentSchemas", self.dependent_schemas),
        ):
            if mapping is not None:
                result[key] = {k: v.to_dict(active) for k, v in mapping.items()}

        for key, group in (("allOf", self.all_of), ("oneOf", self.one_of), ("anyOf", self.any_of)):
            if group is not None:
                result[key] = [s.to_dict(active) for s in group]

        if self.discriminator is not None:
            result["discriminator"] = self.discriminator.to_dict()
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        options: Optional[CastOptions] = None,
        emitter: Optional[DiagnosticEmitter] = None,
        name: Optional[str] = None,
    ) -> "SchemaNode":
        """Create a SchemaNode from an already-parsed mapping.

        The kind is inferred from ``type``/``format`` (see infer_kind).
        ``required`` is kept exactly as written. Content that cannot be
        modelled never raises: non-schema entries in schema maps and lists
        are skipped with an INVALID_PROPERTY diagnostic, and malformed
        numeric or count keywords are dropped with CAST_FAILED.
        """
        raw_type = data.get("type")
        types = data.get("types")
        if isinstance(raw_type, list):
            types, raw_type = raw_type, None

        node = cls(infer_kind(data), options=options, emitter=emitter)
        node.name = name
        node.type = raw_type
        node.types = types if types is not None else ([raw_type] if raw_type else [])
        node.format = data.get("format")

        def skip(keyword, value):
            report(
                emitter,
                DiagnosticKind.INVALID_PROPERTY,
                f"Skipping {keyword}: {value!r} is not a schema",
                subject=keyword,
                value=value,
            )

        def child(value):
            return cls.from_dict(value, options, emitter) if isinstance(value, Mapping) else None

        def children(keyword):
            mapping = data.get(keyword)
            if mapping is None:
                return None
            if not isinstance(mapping, Mapping):
                skip(keyword, mapping)
                return None
            result = {}
            for key, value in mapping.items():
                if isinstance(value, Mapping):
                    result[key] = cls.from_dict(value, options, emitter, name=key)
                else:
                    skip(f"{keyword}[{key}]", value)
            return result

        def group(keyword):
            values = data.get(keyword)
            if values is None:
                return None
            if not isinstance(values, list):
                skip(keyword, values)
                return None
            result = []
            for index, value in enumerate(values):
                if isinstance(value, Mapping):
                    result.append(cls.from_dict(value, options, emitter))
                else:
                    skip(f"{keyword}[{index}]", value)
            return result

        node.title = data.get("title")
        node.description = data.get("description")
        node.pattern = data.get("pattern")
        node.multiple_of = _decimal(data, "multipleOf", emitter)
        node.maximum = _decimal(data, "maximum", emitter)
        node.minimum = _decimal(data, "minimum", emitter)
        _apply_exclusive_bound(node, data, "maximum", emitter)
        _apply_exclusive_bound(node, data, "minimum", emitter)
        node.max_length = _count(data, "maxLength", emitter)
        node.min_length = _count(data, "minLength", emitter)
        node.max_items = _count(data, "maxItems", emitter)
        node.min_items = _count(data, "minItems", emitter)
        node.unique_items = data.get("uniqueItems")
        node.max_properties = _count(data, "maxProperties", emitter)
        node.min_properties = _count(data, "minProperties", emitter)
        node.max_contains = _count(data, "maxContains", emitter)
        node.min_contains = _count(data, "minContains", emitter)
        node.nullable = data.get("nullable")
        node.read_only = data.get("readOnly")
        node.write_only = data.get("writeOnly")
        node.deprecated = data.get("deprecated")
        node.content_encoding = data.get("contentEncoding")
        node.content_media_type = data.get("contentMediaType")
        node.comment = data.get("$comment")

        node.items = child(data.get("items"))
        node.not_ = child(data.get("not"))
        node.if_ = child(data.get("if"))
        node.then = child(data.get("then"))
        node.else_ = child(data.get("else"))
        node.contains = child(data.get("contains"))
        node.property_names = child(data.get("propertyNames"))
        node.unevaluated_properties = child(data.get("unevaluatedProperties"))
        node.unevaluated_items = child(data.get("unevaluatedItems"))
        node.additional_items = child(data.get("additionalItems"))
        node.content_schema = child(data.get("contentSchema"))
        node.properties = children("properties")
        node.pattern_properties = children("patternProperties")
        node.dependent_schemas = children("dependentSchemas")
        node.dependent_required = data.get("dependentRequired")
        node.all_of = group("allOf")
        node.one_of = group("oneOf")
        node.any_of = group("anyOf")

        additional = data.get("additionalProperties")
        if isinstance(additional, Mapping):
            node.additional_properties = child(additional)
        elif additional is None or isinstance(additional, bool):
            node.additional_properties = additional
        else:
            skip("additionalProperties", additional)
        if isinstance(data.get("discriminator"), Mapping):
            node.discriminator = Discriminator.from_dict(data["discriminator"], emitter)

        node.declare_required(data.get("required"))
        node.ref = data.get("$ref")
        node.default = data.get("default")
        node.example = data.get("example")
        node.examples = data.get("examples")
        node.enum = data.get("enum")
        node.extensions = filter_extensions(
            {k: v for k, v in data.items() if k.startswith("x-")}, emitter
        )
        return node


_FORMAT_KINDS = {
    "email": SchemaKind.EMAIL,
    "password": SchemaKind.PASSWORD,
    "byte": SchemaKind.BYTE,
    "date": SchemaKind.DATE,
    "date-time": SchemaKind.DATE_TIME,
    "uuid": SchemaKind.UUID,
    "binary": SchemaKind.BINARY,
}

_TYPE_KINDS = {
    "string": SchemaKind.STRING,
    "integer": SchemaKind.INTEGER,
    "number": SchemaKind.NUMBER,
    "boolean": SchemaKind.BOOLEAN,
    "array": SchemaKind.ARRAY,
    "object": SchemaKind.OBJECT,
}


def infer_kind(data: Mapping[str, Any]) -> SchemaKind:
    """Infer the SchemaKind of a raw schema mapping.

    Multi-type declarations are json-schema; composition keywords without a
    type are composed; string formats pick the matching string kind; an
    object whose additionalProperties is a schema is a map.

    >>> infer_kind({"type": "string", "format": "uuid"})
    <SchemaKind.UUID: 'uuid'>
    >>> infer_kind({"type": ["string", "null"]})
    <SchemaKind.JSON_SCHEMA: 'json-schema'>
    """
    raw_type = data.get("type")
    types = data.get("types")
    if isinstance(raw_type, list) or (raw_type is None and types):
        return SchemaKind.JSON_SCHEMA
    if raw_type is None:
        if any(k in data for k in ("allOf", "oneOf", "anyOf")):
            return SchemaKind.COMPOSED
        return SchemaKind.ARBITRARY
    if raw_type == "string" and data.get("format") in _FORMAT_KINDS:
        return _FORMAT_KINDS[data["format"]]
    if raw_type == "object" and isinstance(data.get("additionalProperties"), Mapping):
        return SchemaKind.MAP
    return _TYPE_KINDS.get(raw_type, SchemaKind.ARBITRARY)


def _ignored(emitter: Optional[DiagnosticEmitter], keyword: str, value: Any, expected: str) -> None:
    report(
        emitter,
        DiagnosticKind.CAST_FAILED,
        f"Ignoring {keyword}={value!r}: not {expected}",
        subject=keyword,
        value=value,
    )


def _decimal(data: Mapping[str, Any], keyword: str, emitter: Optional[DiagnosticEmitter]) -> Optional[Decimal]:
    value = data.get(keyword)
    if value is None:
        return None
    if not isinstance(value, bool):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            number = None
        if number is not None and number.is_finite():
            return number
    _ignored(emitter, keyword, value, "a finite number")
    return None


def _count(data: Mapping[str, Any], keyword: str, emitter: Optional[DiagnosticEmitter]) -> Optional[int]:
    value = data.get(keyword)
    if value is None:
        return None
    if not isinstance(value, bool):
        try:
            number = int(str(value).strip())
        except ValueError:
            number = None
        if number is not None and number >= 0:
            return number
    _ignored(emitter, keyword, value, "a non-negative integer")
    return None


def _apply_exclusive_bound(
    node: SchemaNode,
    data: Mapping[str, Any],
    bound: str,
    emitter: Optional[DiagnosticEmitter],
) -> None:
    # 3.0 uses a boolean flag, 3.1 a numeric bound
    keyword = "exclusiveMaximum" if bound == "maximum" else "exclusiveMinimum"
    value = data.get(keyword)
    if isinstance(value, bool):
        setattr(node, f"exclusive_{bound}", value)
    elif value is not None:
        setattr(node, f"exclusive_{bound}_value", _decimal(data, keyword, emitter))


def plain_value(value: Any) -> Any:
    """Project a cast value back to a JSON-compatible one."""
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _factory(kind: SchemaKind):
    def build(**keywords: Any) -> SchemaNode:
        return SchemaNode(kind, **keywords)

    build.__name__ = f"{kind.name.lower()}_schema"
    build.__doc__ = f"Build a {kind.value} SchemaNode; keywords are set as attributes."
    return build


string_schema = _factory(SchemaKind.STRING)
email_schema = _factory(SchemaKind.EMAIL)
password_schema = _factory(SchemaKind.PASSWORD)
byte_schema = _factory(SchemaKind.BYTE)
date_schema = _factory(SchemaKind.DATE)
date_time_schema = _factory(SchemaKind.DATE_TIME)
uuid_schema = _factory(SchemaKind.UUID)
binary_schema = _factory(SchemaKind.BINARY)
file_schema = _factory(SchemaKind.FILE)
integer_schema = _factory(SchemaKind.INTEGER)
number_schema = _factory(SchemaKind.NUMBER)
boolean_schema = _factory(SchemaKind.BOOLEAN)
array_schema = _factory(SchemaKind.ARRAY)
object_schema = _factory(SchemaKind.OBJECT)
map_schema = _factory(SchemaKind.MAP)
composed_schema = _factory(SchemaKind.COMPOSED)
arbitrary_schema = _factory(SchemaKind.ARBITRARY)
json_schema = _factory(SchemaKind.JSON_SCHEMA)


__all__ = [
    "Discriminator",
    "SchemaNode",
    "infer_kind",
    "plain_value",
    "string_schema",
    "email_schema",
    "password_schema",
    "byte_schema",
    "date_schema",
    "date_time_schema",
    "uuid_schema",
    "binary_schema",
    "file_schema",
    "integer_schema",
    "number_schema",
    "boolean_schema",
    "array_schema",
    "object_schema",
    "map_schema",
    "composed_schema",
    "arbitrary_schema",
    "json_schema",
]
