"""Schema lookup and projection for documentation and codegen tooling.

SchemaResolver answers two questions about a Document: "which schema is
registered under this component name?" and "which schema does this operation
respond with?". It also projects a SchemaNode into a plain, JSON-compatible
dict tree that downstream tools can consume without knowing the model.

Lookups never raise for misses; they return None. Misses on the path/verb
query are reported as diagnostics.
"""

import logging
from typing import Any, Dict, Optional, Set, Union

from oaspec.diagnostics import DiagnosticEmitter, report
from oaspec.document import Document, Operation
from oaspec.references import schema_ref
from oaspec.schema import SchemaNode, plain_value
from oaspec.types import DiagnosticKind, HttpMethod

logger = logging.getLogger(__name__)

JsonNode = Dict[str, Any]


class SchemaResolver:
    """Read-only queries over one Document.

    Attributes:
        document: Document to query (may be None; every lookup then misses)
        emitter: Optional diagnostics channel for misses and skipped entries

    Examples:
        >>> doc = Document.from_dict({"components": {"schemas": {"Pet": {"type": "object"}}}})
        >>> SchemaResolver(doc).resolve_schema("Pet").type
        'object'
        >>> SchemaResolver(doc).resolve_schema("Owner") is None
        True
    """

    def __init__(self, document: Optional[Document], emitter: Optional[DiagnosticEmitter] = None):
        self.document = document
        self.emitter = emitter

    def resolve_schema(self, name: str) -> Optional[SchemaNode]:
        """Look up a component schema by name."""
        if self.document is None or self.document.components is None:
            return None
        schemas = self.document.components.schemas
        if schemas is None:
            return None
        return schemas.get(name)

    def resolve_schema_from_path(self, path: str, verb: Union[str, HttpMethod]) -> Optional[JsonNode]:
        """Projected schema of the first response content that declares one.

        Responses are scanned in declaration order and, within each response,
        content entries in declaration order. The first schema found wins, so a
        response without content is simply skipped.

        Args:
            path: Path key, e.g. "/pets"
            verb: One of the eight HTTP methods (case-insensitive)

        Returns:
            The projected schema, or None if the path, verb, operation,
            responses or schema is missing
        """
        paths = self.document.paths if self.document is not None else None
        item = paths.get(path) if paths is not None else None
        if item is None:
            report(
                self.emitter,
                DiagnosticKind.PATH_NOT_FOUND,
                f"Path not found: {path}",
                subject=path,
            )
            return None

        try:
            method = HttpMethod(str(getattr(verb, "value", verb)).lower())
        except ValueError:
            report(
                self.emitter,
                DiagnosticKind.UNSUPPORTED_METHOD,
                f"Unsupported HTTP operation: {verb}",
                subject=str(verb),
            )
            return None

        logger.debug("Resolving response schema for %s %s", method.value.upper(), path)
        schema = self._first_response_schema(item.operation(method))
        return self.convert_to_json_node(schema) if schema is not None else None

    @staticmethod
    def _first_response_schema(operation: Optional[Operation]) -> Optional[SchemaNode]:
        if operation is None or operation.responses is None:
            return None
        for response in operation.responses.values():
            if response is None or response.content is None:
                continue
            for media_type in response.content.values():
                if media_type is not None and media_type.schema is not None:
                    return media_type.schema
        return None

    def convert_to_json_node(self, schema: Optional[SchemaNode]) -> Optional[JsonNode]:
        """Project ``schema`` into a plain dict tree.

        Emits ``$ref`` alone for references; otherwise type, format,
        description, properties, items, additionalProperties and enum.
        A schema reached again while it is still being projected is written
        as a reference to its component name (or an empty node when it has
        none) and reported as CYCLE_DETECTED.
        """
        if schema is None:
            return None
        return self._project(schema, set())

    def _project(self, schema: SchemaNode, active: Set[int]) -> JsonNode:
        if schema.ref is not None:
            return {"$ref": schema.ref}
        if id(schema) in active:
            report(
                self.emitter,
                DiagnosticKind.CYCLE_DETECTED,
                f"Cyclic schema graph at {schema.name or '<anonymous>'}",
                subject=schema.name or "",
            )
            return {"$ref": schema_ref(schema.name)} if schema.name else {}

        active.add(id(schema))
        try:
            node: JsonNode = {}
            if schema.type is not None:
                node["type"] = schema.type
            if schema.format is not None:
                node["format"] = schema.format
            if schema.description is not None:
                node["description"] = schema.description

            if schema.properties is not None:
                properties: JsonNode = {}
                for key, value in schema.properties.items():
                    if isinstance(key, str) and isinstance(value, SchemaNode):
                        properties[key] = self._project(value, active)
                    else:
                        report(
                            self.emitter,
                            DiagnosticKind.INVALID_PROPERTY,
                            f"Invalid property type: key={key!r}, value={value!r}",
                            subject=str(key),
                            value=value,
                        )
                node["properties"] = properties

            if schema.items is not None:
                node["items"] = self._project(schema.items, active)

            additional = schema.additional_properties
            if isinstance(additional, SchemaNode):
                node["additionalProperties"] = self._project(additional, active)
            elif isinstance(additional, bool):
                node["additionalProperties"] = additional

            if schema.enum:
                node["enum"] = [plain_value(v) for v in schema.enum]
            return node
        finally:
            active.discard(id(schema))


__all__ = [
    "JsonNode",
    "SchemaResolver",
]
