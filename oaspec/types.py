"""Core type definitions for the oaspec document model.

This module defines the closed enumerations shared by the schema type system,
the document model and the validation pipeline:
- SchemaKind: the concrete value kinds a SchemaNode can describe
- HttpMethod: the eight canonical path item verbs
- ComponentSection: reusable component sections and their canonical ref prefixes
- Severity: the two-tier issue taxonomy (error / warning)
- BinaryStringConversion: how string input is turned into bytes for binary schemas
- DiagnosticKind: categories of silent side effects surfaced as diagnostics
- ParameterLocation: where a parameter is carried in a request
"""

from enum import Enum
from typing import Optional, Tuple


class SchemaKind(str, Enum):
    """Concrete schema kinds.

    Each kind carries a default ``(type, format)`` pair and maps to exactly one
    casting function in ``oaspec.casting.CASTERS``.
    """
    STRING = "string"
    EMAIL = "email"
    PASSWORD = "password"
    BYTE = "byte"
    DATE = "date"
    DATE_TIME = "date-time"
    UUID = "uuid"
    BINARY = "binary"
    FILE = "file"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    MAP = "map"
    COMPOSED = "composed"
    ARBITRARY = "arbitrary"
    JSON_SCHEMA = "json-schema"

    @property
    def defaults(self) -> Tuple[Optional[str], Optional[str]]:
        """Default ``(type, format)`` declared by a freshly built schema of this kind."""
        return KIND_DEFAULTS[self]


KIND_DEFAULTS = {
    SchemaKind.STRING: ("string", None),
    SchemaKind.EMAIL: ("string", "email"),
    SchemaKind.PASSWORD: ("string", "password"),
    SchemaKind.BYTE: ("string", "byte"),
    SchemaKind.DATE: ("string", "date"),
    SchemaKind.DATE_TIME: ("string", "date-time"),
    SchemaKind.UUID: ("string", "uuid"),
    SchemaKind.BINARY: ("string", "binary"),
    SchemaKind.FILE: ("string", "binary"),
    SchemaKind.INTEGER: ("integer", "int32"),
    SchemaKind.NUMBER: ("number", None),
    SchemaKind.BOOLEAN: ("boolean", None),
    SchemaKind.ARRAY: ("array", None),
    SchemaKind.OBJECT: ("object", None),
    SchemaKind.MAP: ("object", None),
    SchemaKind.COMPOSED: (None, None),
    SchemaKind.ARBITRARY: (None, None),
    SchemaKind.JSON_SCHEMA: (None, None),
}


class HttpMethod(str, Enum):
    """The eight path item verbs, in path item declaration order."""
    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    PATCH = "patch"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"


class ComponentSection(str, Enum):
    """Reusable component sections of a document.

    The value is the key under ``components``; ``prefix`` is the canonical
    reference prefix bare names are expanded with.
    """
    SCHEMAS = "schemas"
    RESPONSES = "responses"
    PARAMETERS = "parameters"
    EXAMPLES = "examples"
    REQUEST_BODIES = "requestBodies"
    HEADERS = "headers"
    SECURITY_SCHEMES = "securitySchemes"
    LINKS = "links"
    CALLBACKS = "callbacks"

    @property
    def prefix(self) -> str:
        return f"#/components/{self.value}/"


class Severity(str, Enum):
    """Issue severity.

    Errors invalidate a document, warnings are advisory.
    """
    ERROR = "error"
    WARNING = "warning"


class BinaryStringConversion(str, Enum):
    """How binary schemas turn string input into bytes."""
    BASE64 = "base64"
    DEFAULT = "default"
    STRING_SCHEMA = "string-schema"


class DiagnosticKind(str, Enum):
    """Categories of non-fatal side effects reported through diagnostics."""
    CAST_FAILED = "cast.failed"
    INVALID_EXTENSION = "extension.invalid"
    INVALID_PROPERTY = "property.invalid"
    PATH_NOT_FOUND = "resolver.path_not_found"
    UNSUPPORTED_METHOD = "resolver.unsupported_method"
    CYCLE_DETECTED = "resolver.cycle_detected"


class ParameterLocation(str, Enum):
    """Parameter ``in`` values."""
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


__all__ = [
    "SchemaKind",
    "KIND_DEFAULTS",
    "HttpMethod",
    "ComponentSection",
    "Severity",
    "BinaryStringConversion",
    "DiagnosticKind",
    "ParameterLocation",
]
