"""Structured issue records and contract exceptions for oaspec.

Document content problems are never raised: validators record them as
ValidationIssue entries on a ValidationResult. Only caller misuse of the
schema model (an impossible ``additionalProperties`` value, a negative
length or count bound) raises, as SchemaContractError.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ValidationIssue:
    """A single diagnostic emitted by a validator.

    Attributes:
        code: Stable, validator-namespaced identifier (e.g. "OPERATION-002")
        message: Human-readable description
        context: Path-like pointer locating the offending node
            (e.g. "paths[/pets].get.parameters[0].name")

    Examples:
        >>> issue = ValidationIssue(
        ...     code="SERVER-002",
        ...     message="Server URL is missing or empty",
        ...     context="servers[0]",
        ... )
        >>> str(issue)
        '[SERVER-002] Server URL is missing or empty (servers[0])'
    """
    code: str
    message: str
    context: str

    def __str__(self) -> str:
        return f"[{self.code}] {self.message} ({self.context})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidationIssue":
        """Create ValidationIssue from dict."""
        return cls(
            code=data["code"],
            message=data["message"],
            context=data["context"],
        )


class SchemaContractError(ValueError):
    """Raised when a schema is configured with a value no document can carry.

    Attributes:
        field: Name of the schema keyword that was misused
        value: The rejected value
    """

    def __init__(self, field: str, value: Optional[Any], message: str):
        self.field = field
        self.value = value
        super().__init__(message)


__all__ = [
    "ValidationIssue",
    "SchemaContractError",
]
