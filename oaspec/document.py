"""Document model for oaspec.

The Document is the root aggregate of an API description: paths (each path
item holding up to eight verb-keyed operations), reusable components,
servers, top-level security requirements and tags.

A Document is built once by an external loader or builder, treated as
read-only while it is validated, and then discarded. ``Document.from_dict``
materializes one from an already-parsed JSON/YAML mapping; no file or
network I/O happens here. All mappings preserve insertion order, which the
resolver relies on.

Every referencable entity normalizes a bare ``ref`` into the canonical
pointer of its component section, and every entity drops extension keys
that do not start with "x-".
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from oaspec.base import ModelObject
from oaspec.casting import CastOptions
from oaspec.diagnostics import DiagnosticEmitter, report
from oaspec.schema import SchemaNode
from oaspec.types import ComponentSection, DiagnosticKind, HttpMethod, ParameterLocation

T = TypeVar("T")


def _extensions_of(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if isinstance(k, str) and k.startswith("x-")}


def _map_of(data: Optional[Mapping[str, Any]], build: Callable[[Any], T]) -> Optional[Dict[str, T]]:
    if data is None:
        return None
    return {key: build(value) for key, value in data.items()}


def _list_of(data: Optional[List[Any]], build: Callable[[Any], T]) -> Optional[List[T]]:
    if data is None:
        return None
    return [build(value) for value in data]


def _put(result: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        result[key] = value


def _dict_map(mapping: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    if mapping is None:
        return None
    return {k: v.to_dict() for k, v in mapping.items()}


@dataclass
class _Reader:
    """Carries casting options and the diagnostics channel through from_dict."""
    options: Optional[CastOptions] = None
    emitter: Optional[DiagnosticEmitter] = None

    def schema(self, data: Optional[Mapping[str, Any]], name: Optional[str] = None) -> Optional[SchemaNode]:
        if data is None:
            return None
        if not isinstance(data, Mapping):
            report(
                self.emitter,
                DiagnosticKind.INVALID_PROPERTY,
                f"Skipping schema {name or ''}: {data!r} is not a schema",
                subject=name or "schema",
                value=data,
            )
            return None
        return SchemaNode.from_dict(data, options=self.options, emitter=self.emitter, name=name)

    def content(self, data: Optional[Mapping[str, Any]]) -> Optional[Dict[str, "MediaType"]]:
        return _map_of(data, lambda v: MediaType.from_dict(v, self))


@dataclass
class Tag(ModelObject):
    """Grouping label for operations."""
    name: Optional[str] = None
    description: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        _put(result, "name", self.name)
        _put(result, "description", self.description)
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Tag":
        return cls(
            name=data.get("name"),
            description=data.get("description"),
            extensions=_extensions_of(data),
        )


@dataclass
class Info(ModelObject):
    """Document metadata."""
    title: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        _put(result, "title", self.title)
        _put(result, "version", self.version)
        _put(result, "description", self.description)
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Info":
        return cls(
            title=data.get("title"),
            version=data.get("version"),
            description=data.get("description"),
            extensions=_extensions_of(data),
        )


@dataclass
class Server(ModelObject):
    """A target host for the API.

    Attributes:
        url: Server URL, may contain ``{variable}`` placeholders
        description: Optional description
        variables: Raw server variable objects keyed by variable name
    """
    url: Optional[str] = None
    description: Optional[str] = None
    variables: Optional[Dict[str, Dict[str, Any]]] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        _put(result, "url", self.url)
        _put(result, "description", self.description)
        _put(result, "variables", self.variables)
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Server":
        return cls(
            url=data.get("url"),
            description=data.get("description"),
            variables=data.get("variables"),
            extensions=_extensions_of(data),
        )


@dataclass
class Example(ModelObject):
    """A named example value."""
    ref_section = ComponentSection.EXAMPLES

    summary: Optional[str] = None
    description: Optional[str] = None
    value: Any = None
    external_value: Optional[str] = None
    ref: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result: Dict[str, Any] = {}
        _put(result, "summary", self.summary)
        _put(result, "description", self.description)
        _put(result, "value", self.value)
        _put(result, "externalValue", self.external_value)
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Example":
        return cls(
            summary=data.get("summary"),
            description=data.get("description"),
            value=data.get("value"),
            external_value=data.get("externalValue"),
            ref=data.get("$ref"),
            extensions=_extensions_of(data),
        )


@dataclass
class MediaType(ModelObject):
    """Schema and examples for one content type."""
    schema: Optional[SchemaNode] = None
    example: Any = None
    examples: Optional[Dict[str, Example]] = None
    encoding: Optional[Dict[str, Dict[str, Any]]] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.schema is not None:
            result["schema"] = self.schema.to_dict()
        _put(result, "example", self.example)
        _put(result, "examples", _dict_map(self.examples))
        _put(result, "encoding", self.encoding)
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], reader: Optional[_Reader] = None) -> "MediaType":
        reader = reader or _Reader()
        return cls(
            schema=reader.schema(data.get("schema")),
            example=data.get("example"),
            examples=_map_of(data.get("examples"), Example.from_dict),
            encoding=data.get("encoding"),
            extensions=_extensions_of(data),
        )


Content = Dict[str, MediaType]


@dataclass
class Header(ModelObject):
    """A response header definition."""
    ref_section = ComponentSection.HEADERS

    description: Optional[str] = None
    ref: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    schema: Optional[SchemaNode] = None
    example: Any = None
    examples: Optional[Dict[str, Example]] = None
    content: Optional[Content] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result: Dict[str, Any] = {}
        _put(result, "description", self.description)
        _put(result, "required", self.required)
        _put(result, "deprecated", self.deprecated)
        _put(result, "style", self.style)
        _put(result, "explode", self.explode)
        if self.schema is not None:
            result["schema"] = self.schema.to_dict()
        _put(result, "example", self.example)
        _put(result, "examples", _dict_map(self.examples))
        _put(result, "content", _dict_map(self.content))
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], reader: Optional[_Reader] = None) -> "Header":
        reader = reader or _Reader()
        return cls(
            description=data.get("description"),
            ref=data.get("$ref"),
            required=data.get("required"),
            deprecated=data.get("deprecated"),
            style=data.get("style"),
            explode=data.get("explode"),
            schema=reader.schema(data.get("schema")),
            example=data.get("example"),
            examples=_map_of(data.get("examples"), Example.from_dict),
            content=reader.content(data.get("content")),
            extensions=_extensions_of(data),
        )


@dataclass
class Link(ModelObject):
    """A design-time link from a response to another operation."""
    ref_section = ComponentSection.LINKS

    operation_ref: Optional[str] = None
    operation_id: Optional[str] = None
    parameters: Optional[Dict[str, str]] = None
    request_body: Any = None
    description: Optional[str] = None
    ref: Optional[str] = None
    server: Optional[Server] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result: Dict[str, Any] = {}
        _put(result, "operationRef", self.operation_ref)
        _put(result, "operationId", self.operation_id)
        _put(result, "parameters", self.parameters)
        _put(result, "requestBody", self.request_body)
        _put(result, "description", self.description)
        if self.server is not None:
            result["server"] = self.server.to_dict()
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Link":
        server = data.get("server")
        return cls(
            operation_ref=data.get("operationRef"),
            operation_id=data.get("operationId"),
            parameters=data.get("parameters"),
            request_body=data.get("requestBody"),
            description=data.get("description"),
            ref=data.get("$ref"),
            server=Server.from_dict(server) if server is not None else None,
            extensions=_extensions_of(data),
        )


@dataclass
class Parameter(ModelObject):
    """An operation or path-level parameter.

    ``in_`` holds the location ("path", "query", "header" or "cookie"); it is
    kept as a plain string so documents with a missing or unknown location can
    still be represented and reported by the validators.
    """
    ref_section = ComponentSection.PARAMETERS

    name: Optional[str] = None
    in_: Optional[str] = None
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allow_empty_value: Optional[bool] = None
    ref: Optional[str] = None
    style: Optional[str] = None
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = None
    schema: Optional[SchemaNode] = None
    example: Any = None
    examples: Optional[Dict[str, Example]] = None
    content: Optional[Content] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result: Dict[str, Any] = {}
        _put(result, "name", self.name)
        _put(result, "in", self.in_)
        _put(result, "description", self.description)
        _put(result, "required", self.required)
        _put(result, "deprecated", self.deprecated)
        _put(result, "allowEmptyValue", self.allow_empty_value)
        _put(result, "style", self.style)
        _put(result, "explode", self.explode)
        _put(result, "allowReserved", self.allow_reserved)
        if self.schema is not None:
            result["schema"] = self.schema.to_dict()
        _put(result, "example", self.example)
        _put(result, "examples", _dict_map(self.examples))
        _put(result, "content", _dict_map(self.content))
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], reader: Optional[_Reader] = None) -> "Parameter":
        reader = reader or _Reader()
        return cls(
            name=data.get("name"),
            in_=data.get("in"),
            description=data.get("description"),
            required=data.get("required"),
            deprecated=data.get("deprecated"),
            allow_empty_value=data.get("allowEmptyValue"),
            ref=data.get("$ref"),
            style=data.get("style"),
            explode=data.get("explode"),
            allow_reserved=data.get("allowReserved"),
            schema=reader.schema(data.get("schema")),
            example=data.get("example"),
            examples=_map_of(data.get("examples"), Example.from_dict),
            content=reader.content(data.get("content")),
            extensions=_extensions_of(data),
        )


def path_parameter(name: str, **fields: Any) -> Parameter:
    """Path parameters are always required."""
    fields.setdefault("required", True)
    return Parameter(name=name, in_=ParameterLocation.PATH.value, **fields)


def query_parameter(name: str, **fields: Any) -> Parameter:
    return Parameter(name=name, in_=ParameterLocation.QUERY.value, **fields)


def header_parameter(name: str, **fields: Any) -> Parameter:
    return Parameter(name=name, in_=ParameterLocation.HEADER.value, **fields)


def cookie_parameter(name: str, **fields: Any) -> Parameter:
    return Parameter(name=name, in_=ParameterLocation.COOKIE.value, **fields)


@dataclass
class RequestBody(ModelObject):
    """Request payload description."""
    ref_section = ComponentSection.REQUEST_BODIES

    description: Optional[str] = None
    content: Optional[Content] = None
    required: Optional[bool] = None
    ref: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result: Dict[str, Any] = {}
        _put(result, "description", self.description)
        _put(result, "content", _dict_map(self.content))
        _put(result, "required", self.required)
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], reader: Optional[_Reader] = None) -> "RequestBody":
        reader = reader or _Reader()
        return cls(
            description=data.get("description"),
            content=reader.content(data.get("content")),
            required=data.get("required"),
            ref=data.get("$ref"),
            extensions=_extensions_of(data),
        )


@dataclass
class ApiResponse(ModelObject):
    """One response of an operation, or a reusable component response."""
    ref_section = ComponentSection.RESPONSES

    description: Optional[str] = None
    headers: Optional[Dict[str, Header]] = None
    content: Optional[Content] = None
    links: Optional[Dict[str, Link]] = None
    ref: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result: Dict[str, Any] = {}
        _put(result, "description", self.description)
        _put(result, "headers", _dict_map(self.headers))
        _put(result, "content", _dict_map(self.content))
        _put(result, "links", _dict_map(self.links))
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], reader: Optional[_Reader] = None) -> "ApiResponse":
        reader = reader or _Reader()
        return cls(
            description=data.get("description"),
            headers=_map_of(data.get("headers"), lambda v: Header.from_dict(v, reader)),
            content=reader.content(data.get("content")),
            links=_map_of(data.get("links"), Link.from_dict),
            ref=data.get("$ref"),
            extensions=_extensions_of(data),
        )


@dataclass
class SecurityScheme(ModelObject):
    """An authentication scheme definition."""
    ref_section = ComponentSection.SECURITY_SCHEMES

    type: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    ref: Optional[str] = None
    in_: Optional[str] = None
    scheme: Optional[str] = None
    bearer_format: Optional[str] = None
    flows: Optional[Dict[str, Any]] = None
    open_id_connect_url: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result: Dict[str, Any] = {}
        _put(result, "type", self.type)
        _put(result, "description", self.description)
        _put(result, "name", self.name)
        _put(result, "in", self.in_)
        _put(result, "scheme", self.scheme)
        _put(result, "bearerFormat", self.bearer_format)
        _put(result, "flows", self.flows)
        _put(result, "openIdConnectUrl", self.open_id_connect_url)
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SecurityScheme":
        return cls(
            type=data.get("type"),
            description=data.get("description"),
            name=data.get("name"),
            ref=data.get("$ref"),
            in_=data.get("in"),
            scheme=data.get("scheme"),
            bearer_format=data.get("bearerFormat"),
            flows=data.get("flows"),
            open_id_connect_url=data.get("openIdConnectUrl"),
            extensions=_extensions_of(data),
        )


SecurityRequirement = Dict[str, List[str]]


@dataclass
class Operation(ModelObject):
    """A single API operation on a path."""
    tags: Optional[List[str]] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    operation_id: Optional[str] = None
    parameters: Optional[List[Parameter]] = None
    request_body: Optional[RequestBody] = None
    responses: Optional[Dict[str, ApiResponse]] = None
    callbacks: Optional[Dict[str, "Callback"]] = None
    deprecated: Optional[bool] = None
    security: Optional[List[SecurityRequirement]] = None
    servers: Optional[List[Server]] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def add_response(self, status: str, response: ApiResponse) -> "Operation":
        if self.responses is None:
            self.responses = {}
        self.responses[status] = response
        return self

    def add_parameter(self, parameter: Parameter) -> "Operation":
        if self.parameters is None:
            self.parameters = []
        self.parameters.append(parameter)
        return self

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        _put(result, "tags", self.tags)
        _put(result, "summary", self.summary)
        _put(result, "description", self.description)
        _put(result, "operationId", self.operation_id)
        if self.parameters is not None:
            result["parameters"] = [p.to_dict() for p in self.parameters]
        if self.request_body is not None:
            result["requestBody"] = self.request_body.to_dict()
        _put(result, "responses", _dict_map(self.responses))
        _put(result, "callbacks", _dict_map(self.callbacks))
        _put(result, "deprecated", self.deprecated)
        _put(result, "security", self.security)
        if self.servers is not None:
            result["servers"] = [s.to_dict() for s in self.servers]
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], reader: Optional[_Reader] = None) -> "Operation":
        reader = reader or _Reader()
        body = data.get("requestBody")
        return cls(
            tags=data.get("tags"),
            summary=data.get("summary"),
            description=data.get("description"),
            operation_id=data.get("operationId"),
            parameters=_list_of(data.get("parameters"), lambda v: Parameter.from_dict(v, reader)),
            request_body=RequestBody.from_dict(body, reader) if body is not None else None,
            responses=_map_of(data.get("responses"), lambda v: ApiResponse.from_dict(v, reader)),
            callbacks=_map_of(data.get("callbacks"), lambda v: Callback.from_dict(v, reader)),
            deprecated=data.get("deprecated"),
            security=data.get("security"),
            servers=_list_of(data.get("servers"), Server.from_dict),
            extensions=_extensions_of(data),
        )


@dataclass
class PathItem(ModelObject):
    """Operations available on a single path."""
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: Optional[List[Server]] = None
    parameters: Optional[List[Parameter]] = None
    ref: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def operation(self, method: HttpMethod) -> Optional[Operation]:
        """Operation declared for ``method`` (a HttpMethod or its lowercase name)."""
        return getattr(self, HttpMethod(method).value)

    def set_operation(self, method: HttpMethod, operation: Optional[Operation]) -> "PathItem":
        setattr(self, HttpMethod(method).value, operation)
        return self

    def read_operations(self) -> Dict[HttpMethod, Operation]:
        """Declared operations keyed by verb, in GET, PUT, POST, DELETE, PATCH,
        HEAD, OPTIONS, TRACE order."""
        operations: Dict[HttpMethod, Operation] = {}
        for method in HttpMethod:
            operation = self.operation(method)
            if operation is not None:
                operations[method] = operation
        return operations

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        _put(result, "$ref", self.ref)
        _put(result, "summary", self.summary)
        _put(result, "description", self.description)
        for method, operation in self.read_operations().items():
            result[method.value] = operation.to_dict()
        if self.servers is not None:
            result["servers"] = [s.to_dict() for s in self.servers]
        if self.parameters is not None:
            result["parameters"] = [p.to_dict() for p in self.parameters]
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], reader: Optional[_Reader] = None) -> "PathItem":
        reader = reader or _Reader()
        item = cls(
            summary=data.get("summary"),
            description=data.get("description"),
            servers=_list_of(data.get("servers"), Server.from_dict),
            parameters=_list_of(data.get("parameters"), lambda v: Parameter.from_dict(v, reader)),
            ref=data.get("$ref"),
            extensions=_extensions_of(data),
        )
        for method in HttpMethod:
            raw = data.get(method.value)
            if raw is not None:
                item.set_operation(method, Operation.from_dict(raw, reader))
        return item


@dataclass
class Callback(ModelObject):
    """Out-of-band requests keyed by runtime expression."""
    ref_section = ComponentSection.CALLBACKS

    expressions: Dict[str, PathItem] = field(default_factory=dict)
    ref: Optional[str] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        if self.ref is not None:
            return {"$ref": self.ref}
        result: Dict[str, Any] = {k: v.to_dict() for k, v in self.expressions.items()}
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], reader: Optional[_Reader] = None) -> "Callback":
        reader = reader or _Reader()
        return cls(
            expressions={
                k: PathItem.from_dict(v, reader)
                for k, v in data.items()
                if k != "$ref" and not k.startswith("x-")
            },
            ref=data.get("$ref"),
            extensions=_extensions_of(data),
        )


@dataclass
class Components(ModelObject):
    """Reusable objects referenced from the rest of the document."""
    schemas: Optional[Dict[str, SchemaNode]] = None
    responses: Optional[Dict[str, ApiResponse]] = None
    parameters: Optional[Dict[str, Parameter]] = None
    examples: Optional[Dict[str, Example]] = None
    request_bodies: Optional[Dict[str, RequestBody]] = None
    headers: Optional[Dict[str, Header]] = None
    security_schemes: Optional[Dict[str, SecurityScheme]] = None
    links: Optional[Dict[str, Link]] = None
    callbacks: Optional[Dict[str, Callback]] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def add_schema(self, name: str, schema: SchemaNode) -> "Components":
        if self.schemas is None:
            self.schemas = {}
        if schema.name is None:
            schema.name = name
        self.schemas[name] = schema
        return self

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        _put(result, "schemas", _dict_map(self.schemas))
        _put(result, "responses", _dict_map(self.responses))
        _put(result, "parameters", _dict_map(self.parameters))
        _put(result, "examples", _dict_map(self.examples))
        _put(result, "requestBodies", _dict_map(self.request_bodies))
        _put(result, "headers", _dict_map(self.headers))
        _put(result, "securitySchemes", _dict_map(self.security_schemes))
        _put(result, "links", _dict_map(self.links))
        _put(result, "callbacks", _dict_map(self.callbacks))
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], reader: Optional[_Reader] = None) -> "Components":
        reader = reader or _Reader()
        schemas = None
        if data.get("schemas") is not None:
            schemas = {}
            for key, value in data["schemas"].items():
                schema = reader.schema(value, name=key)
                if schema is not None:
                    schemas[key] = schema
        return cls(
            schemas=schemas,
            responses=_map_of(data.get("responses"), lambda v: ApiResponse.from_dict(v, reader)),
            parameters=_map_of(data.get("parameters"), lambda v: Parameter.from_dict(v, reader)),
            examples=_map_of(data.get("examples"), Example.from_dict),
            request_bodies=_map_of(data.get("requestBodies"), lambda v: RequestBody.from_dict(v, reader)),
            headers=_map_of(data.get("headers"), lambda v: Header.from_dict(v, reader)),
            security_schemes=_map_of(data.get("securitySchemes"), SecurityScheme.from_dict),
            links=_map_of(data.get("links"), Link.from_dict),
            callbacks=_map_of(data.get("callbacks"), lambda v: Callback.from_dict(v, reader)),
            extensions=_extensions_of(data),
        )


@dataclass
class Document(ModelObject):
    """Root aggregate of an API description.

    Examples:
        >>> doc = Document.from_dict({
        ...     "openapi": "3.0.1",
        ...     "paths": {"/pets": {"get": {"operationId": "listPets"}}},
        ... })
        >>> doc.paths["/pets"].get.operation_id
        'listPets'
    """
    openapi: str = "3.0.1"
    info: Optional[Info] = None
    servers: Optional[List[Server]] = None
    security: Optional[List[SecurityRequirement]] = None
    tags: Optional[List[Tag]] = None
    paths: Optional[Dict[str, PathItem]] = None
    components: Optional[Components] = None
    extensions: Dict[str, Any] = field(default_factory=dict)

    def add_path(self, path: str, item: PathItem) -> "Document":
        if self.paths is None:
            self.paths = {}
        self.paths[path] = item
        return self

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"openapi": self.openapi}
        if self.info is not None:
            result["info"] = self.info.to_dict()
        if self.servers is not None:
            result["servers"] = [s.to_dict() for s in self.servers]
        _put(result, "security", self.security)
        if self.tags is not None:
            result["tags"] = [t.to_dict() for t in self.tags]
        _put(result, "paths", _dict_map(self.paths))
        if self.components is not None:
            result["components"] = self.components.to_dict()
        result.update(self.extensions)
        return result

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        options: Optional[CastOptions] = None,
        emitter: Optional[DiagnosticEmitter] = None,
    ) -> "Document":
        """Materialize a Document from an already-parsed mapping.

        Args:
            data: Parsed JSON/YAML document
            options: Casting switches applied to every schema
            emitter: Diagnostics channel for cast failures and rejected keys
        """
        reader = _Reader(options=options, emitter=emitter)
        info = data.get("info")
        components = data.get("components")
        return cls(
            openapi=data.get("openapi", "3.0.1"),
            info=Info.from_dict(info) if info is not None else None,
            servers=_list_of(data.get("servers"), Server.from_dict),
            security=data.get("security"),
            tags=_list_of(data.get("tags"), Tag.from_dict),
            paths=_map_of(data.get("paths"), lambda v: PathItem.from_dict(v, reader)),
            components=Components.from_dict(components, reader) if components is not None else None,
            extensions=_extensions_of(data),
        )


__all__ = [
    "Tag",
    "Info",
    "Server",
    "Example",
    "MediaType",
    "Content",
    "Header",
    "Link",
    "Parameter",
    "path_parameter",
    "query_parameter",
    "header_parameter",
    "cookie_parameter",
    "RequestBody",
    "ApiResponse",
    "SecurityScheme",
    "SecurityRequirement",
    "Operation",
    "PathItem",
    "Callback",
    "Components",
    "Document",
]
