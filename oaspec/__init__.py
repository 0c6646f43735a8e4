"""oaspec: API-description schema model and validation pipeline.

oaspec models an already-parsed OpenAPI-style document in memory and checks
it against a fixed rule set before it is published or handed to
documentation and code-generation tooling. It provides:
- A recursive, typed schema model whose defaults, examples and enum items are
  cast to the schema kind's native value type
- Canonical reference normalization for bare component names
- Schema lookup and projection to plain dict trees
- Seven independent rule validators merged into one severity-tagged report
- A structured diagnostics channel for non-fatal side effects

Basic usage:
    >>> from oaspec import Document, validate
    >>> document = Document.from_dict({
    ...     "openapi": "3.0.1",
    ...     "servers": [{"url": "https://api.example.com"}],
    ...     "paths": {"/pets": {"get": {"operationId": "listPets"}}},
    ... })
    >>> report = validate(document)
    >>> report.is_valid
    False
    >>> [issue.code for issue in report.errors]
    ['OPERATION-005']
"""

__version__ = "0.1.0"
__author__ = "oaspec developers"

# Version info
VERSION = (0, 1, 0)

# Core exports
from oaspec.casting import CastOptions, cast_value
from oaspec.diagnostics import Diagnostic, DiagnosticEmitter
from oaspec.document import Components, Document, Operation, PathItem
from oaspec.errors import SchemaContractError, ValidationIssue
from oaspec.pipeline import ValidationPipeline, validate
from oaspec.resolver import SchemaResolver
from oaspec.schema import Discriminator, SchemaNode
from oaspec.types import BinaryStringConversion, HttpMethod, SchemaKind, Severity
from oaspec.validation import ValidationResult

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "BinaryStringConversion",
    "CastOptions",
    "cast_value",
    "Components",
    "Diagnostic",
    "DiagnosticEmitter",
    "Discriminator",
    "Document",
    "HttpMethod",
    "Operation",
    "PathItem",
    "SchemaContractError",
    "SchemaKind",
    "SchemaNode",
    "SchemaResolver",
    "Severity",
    "ValidationIssue",
    "ValidationPipeline",
    "ValidationResult",
    "validate",
]
