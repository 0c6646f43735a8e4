"""Rule validators for oaspec documents.

Each validator owns one rule domain and turns a Document into a fresh
ValidationResult. Validators only read the document; content problems are
recorded as issues and never raised. A None document is reported by every
validator on its own as ``<DOMAIN>-000``.

Issue codes:

    PATH-001          no paths declared                          error
    PATH-002          blank path key                             error
    PATH-003          path key does not start with "/"           error
    PATH-004          path declares none of the eight verbs      error
    OPERATION-001     no paths declared                          error
    OPERATION-002     blank operationId                          error
    OPERATION-003     blank summary                              warning
    OPERATION-004     no tags                                    warning
    OPERATION-005     no responses                               error
    OPERATION-006     parameter without name                     error
    OPERATION-007     parameter without location                 error
    OPERATION-008     POST/PUT without request body              warning
    PARAMETER-001     no paths declared                          warning
    PARAMETER-002     parameter without name                     error
    PARAMETER-003     parameter without location                 error
    PARAMETER-004     parameter without schema                   error
    PARAMETER-005     parameter without description              warning
    PARAMETER-006     $ref outside #/components/parameters/      warning
    SCHEMA-001        schema without type                        error
    SCHEMA-002        required name missing from properties      error
    SCHEMA-003        $ref outside #/components/schemas/         error
    SCHEMA-004        example does not match format              error
    SCHEMA-005        parameter without typed schema or content  error
    SCHEMA-006        parameter schema without type              error
    RESPONSE-001      no component responses declared            warning
    RESPONSE-002      blank response description                 error
    RESPONSE-003      response without content                   error
    REQUEST-BODY-001  no component request bodies declared       warning
    REQUEST-BODY-002  blank request body description             error
    REQUEST-BODY-003  request body without content               error
    REQUEST-BODY-004  request body without required flag         warning
    SERVER-001        no servers declared                        warning
    SERVER-002        blank server URL                           error
"""

import logging
from typing import Any, ClassVar, List, Optional, Set

from oaspec.document import Document, Parameter
from oaspec.formats import example_format_error
from oaspec.schema import SchemaNode
from oaspec.types import ComponentSection, HttpMethod
from oaspec.validation import ValidationResult

logger = logging.getLogger(__name__)

_BODY_METHODS = frozenset({HttpMethod.POST, HttpMethod.PUT})


def _blank(value: Any) -> bool:
    return value is None or not str(value).strip()


class SpecValidator:
    """Base class for rule validators.

    Subclasses set ``domain`` and implement ``check``; ``validate`` handles
    the None document and hands a fresh result to ``check``.
    """

    domain: ClassVar[str] = ""

    def code(self, number: int) -> str:
        return f"{self.domain}-{number:03d}"

    def validate(self, document: Optional[Document]) -> ValidationResult:
        """Validate ``document`` and return this validator's issues."""
        result = ValidationResult()
        if document is None:
            result.add_error(self.code(0), "Document is null", "document")
            return result
        logger.debug("Running %s", type(self).__name__)
        self.check(document, result)
        return result

    def check(self, document: Document, result: ValidationResult) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PathValidator(SpecValidator):
    """Path keys and their verb coverage."""

    domain = "PATH"

    def check(self, document: Document, result: ValidationResult) -> None:
        if not document.paths:
            result.add_error(self.code(1), "No paths defined in the document", "paths")
            return

        for path, item in document.paths.items():
            context = f"paths[{path}]"
            if _blank(path):
                result.add_error(self.code(2), "Path is null or empty", context)
                continue
            if not path.startswith("/"):
                result.add_error(self.code(3), "Path must start with '/'", context)
            if item is None or not item.read_operations():
                result.add_error(self.code(4), "No operations defined for path", context)


class OperationValidator(SpecValidator):
    """Per-operation documentation and structure rules."""

    domain = "OPERATION"

    def check(self, document: Document, result: ValidationResult) -> None:
        if not document.paths:
            result.add_error(self.code(1), "No paths defined in the document", "paths")
            return

        for path, item in document.paths.items():
            if item is None:
                continue
            for method, operation in item.read_operations().items():
                context = f"paths[{path}].{method.value}"

                if _blank(operation.operation_id):
                    result.add_error(self.code(2), "Missing or empty operationId", f"{context}.operationId")
                if _blank(operation.summary):
                    result.add_warning(
                        self.code(3),
                        "Missing or empty summary (recommended for documentation)",
                        f"{context}.summary",
                    )
                if not operation.tags:
                    result.add_warning(
                        self.code(4),
                        "Operation should define at least one tag for grouping",
                        f"{context}.tags",
                    )
                if not operation.responses:
                    result.add_error(
                        self.code(5),
                        "Operation must define at least one response",
                        f"{context}.responses",
                    )

                for index, parameter in enumerate(operation.parameters or []):
                    if parameter is None or parameter.ref is not None:
                        continue
                    param_context = f"{context}.parameters[{index}]"
                    if _blank(parameter.name):
                        result.add_error(self.code(6), "Parameter is missing a name", f"{param_context}.name")
                    if _blank(parameter.in_):
                        result.add_error(
                            self.code(7),
                            "Parameter is missing 'in' field (path, query, header or cookie)",
                            f"{param_context}.in",
                        )

                if method in _BODY_METHODS and operation.request_body is None:
                    result.add_warning(
                        self.code(8),
                        "POST/PUT operations should define a requestBody",
                        f"{context}.requestBody",
                    )


class ParameterValidator(SpecValidator):
    """Operation parameter completeness.

    A parameter given as ``$ref`` is only checked for its pointer prefix;
    the referenced component carries the other fields.
    """

    domain = "PARAMETER"

    def check(self, document: Document, result: ValidationResult) -> None:
        if not document.paths:
            result.add_warning(self.code(1), "No paths defined in the document", "paths")
            return

        for path, item in document.paths.items():
            if item is None:
                continue
            for method, operation in item.read_operations().items():
                for index, parameter in enumerate(operation.parameters or []):
                    if parameter is not None:
                        context = f"paths[{path}].{method.value}.parameters[{index}]"
                        self._check_parameter(parameter, context, result)

    def _check_parameter(self, parameter: Parameter, context: str, result: ValidationResult) -> None:
        if parameter.ref is not None:
            if not parameter.ref.startswith(ComponentSection.PARAMETERS.prefix):
                result.add_warning(self.code(6), "Parameter $ref is incorrectly formatted", context)
            return

        if _blank(parameter.name):
            result.add_error(self.code(2), "Parameter name is missing or empty", context)
        if _blank(parameter.in_):
            result.add_error(self.code(3), "Parameter location (in) is missing or invalid", context)
        if parameter.schema is None:
            result.add_error(self.code(4), "Parameter schema is missing or improperly defined", context)
        if _blank(parameter.description):
            result.add_warning(self.code(5), "Parameter description is missing", context)


class SchemaValidator(SpecValidator):
    """Component schemas (recursively) and parameter schemas."""

    domain = "SCHEMA"

    def check(self, document: Document, result: ValidationResult) -> None:
        logger.info("Starting schema validation")
        schemas = document.components.schemas if document.components is not None else None
        visited: Set[int] = set()
        for name, schema in (schemas or {}).items():
            if schema is not None:
                self._check_schema(name, schema, f"components.schemas[{name}]", result, visited)

        for path, item in (document.paths or {}).items():
            if item is None:
                continue
            self._check_parameters(item.parameters, f"paths[{path}]", result)
            for method, operation in item.read_operations().items():
                self._check_parameters(operation.parameters, f"paths[{path}].{method.value}", result)

    def _check_schema(
        self,
        name: str,
        schema: SchemaNode,
        context: str,
        result: ValidationResult,
        visited: Set[int],
    ) -> None:
        if id(schema) in visited:
            return
        visited.add(id(schema))

        if schema.ref is not None:
            if not schema.ref.startswith(ComponentSection.SCHEMAS.prefix):
                result.add_error(
                    self.code(3),
                    f"The reference in schema '{name}' is invalid. "
                    f"It must start with '{ComponentSection.SCHEMAS.prefix}'.",
                    context,
                )
            return

        if _blank(schema.type) and not schema.types:
            result.add_error(self.code(1), f"The schema '{name}' does not define a type.", context)

        properties = schema.properties or {}
        for required in schema.required:
            if required not in properties:
                result.add_error(
                    self.code(2),
                    f"The required property '{required}' is missing in schema '{name}'.",
                    context,
                )

        mismatch = example_format_error(schema.format, schema.raw_example)
        if mismatch is not None:
            result.add_error(
                self.code(4),
                f"The example for schema '{name}' does not match format '{schema.format}': {mismatch}",
                context,
            )

        for key, child in properties.items():
            if isinstance(child, SchemaNode):
                self._check_schema(key, child, f"{context}.properties[{key}]", result, visited)
        if isinstance(schema.items, SchemaNode):
            self._check_schema(f"{name}.items", schema.items, f"{context}.items", result, visited)

    def _check_parameters(
        self,
        parameters: Optional[List[Parameter]],
        context: str,
        result: ValidationResult,
    ) -> None:
        for index, parameter in enumerate(parameters or []):
            if parameter is None or parameter.ref is not None:
                continue
            name = parameter.name if parameter.name is not None else "<no name>"
            param_context = f"{context}.parameters[{index}]"
            has_schema = parameter.schema is not None and parameter.schema.type is not None
            has_content = bool(parameter.content)
            if not has_schema and not has_content:
                result.add_error(
                    self.code(5),
                    f"The parameter '{name}' must contain a valid 'schema' or 'content'.",
                    param_context,
                )
            if parameter.schema is not None and parameter.schema.type is None:
                result.add_error(
                    self.code(6),
                    f"The schema for the parameter '{name}' is present but does not define a type.",
                    param_context,
                )


class ResponseValidator(SpecValidator):
    """Reusable responses declared under components."""

    domain = "RESPONSE"

    def check(self, document: Document, result: ValidationResult) -> None:
        responses = document.components.responses if document.components is not None else None
        if not responses:
            result.add_warning(self.code(1), "No responses defined in the document", "components.responses")
            return

        for status, response in responses.items():
            context = f"components.responses[{status}]"
            if response is None or response.ref is not None:
                continue
            if _blank(response.description):
                result.add_error(self.code(2), "Response description is missing or empty", context)
            if response.content is None:
                result.add_error(self.code(3), "Response content is missing or not properly defined", context)


class RequestBodyValidator(SpecValidator):
    """Reusable request bodies declared under components."""

    domain = "REQUEST-BODY"

    def check(self, document: Document, result: ValidationResult) -> None:
        bodies = document.components.request_bodies if document.components is not None else None
        if not bodies:
            result.add_warning(
                self.code(1),
                "No request bodies defined in the document",
                "components.requestBodies",
            )
            return

        for name, body in bodies.items():
            context = f"components.requestBodies[{name}]"
            if body is None or body.ref is not None:
                continue
            if _blank(body.description):
                result.add_error(self.code(2), "Request body description is missing or empty", context)
            if body.content is None:
                result.add_error(
                    self.code(3),
                    "Request body content is missing or not properly defined",
                    context,
                )
            if body.required is None:
                result.add_warning(self.code(4), "Request body requirement flag is missing", context)


class ServerValidator(SpecValidator):
    """Top-level server list."""

    domain = "SERVER"

    def check(self, document: Document, result: ValidationResult) -> None:
        if not document.servers:
            result.add_warning(self.code(1), "No servers defined in the document", "servers")
            return

        for index, server in enumerate(document.servers):
            if server is None or _blank(server.url):
                result.add_error(self.code(2), "Server URL is missing or empty", f"servers[{index}]")


__all__ = [
    "SpecValidator",
    "PathValidator",
    "OperationValidator",
    "ParameterValidator",
    "SchemaValidator",
    "ResponseValidator",
    "RequestBodyValidator",
    "ServerValidator",
]
