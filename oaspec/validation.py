"""Aggregate validation result for oaspec.

A ValidationResult collects ValidationIssue records in two ordered lists,
errors and warnings. Validators append to a fresh result; the pipeline merges
the per-validator results into one report, keeping every issue verbatim and
in order (no deduplication).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from oaspec.errors import ValidationIssue
from oaspec.types import Severity


@dataclass
class ValidationResult:
    """Errors and warnings produced by one or more validators.

    Attributes:
        errors: Issues that invalidate the document
        warnings: Advisory issues

    Examples:
        >>> result = ValidationResult()
        >>> result.add_warning("SERVER-001", "No servers defined in the document", "servers")
        >>> result.is_valid
        True
        >>> result.add_error("SERVER-002", "Server URL is missing or empty", "servers[0]")
        >>> result.is_valid, result.error_count, result.warning_count
        (False, 1, 1)
    """
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True iff no error has been recorded."""
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def add_error(self, code: str, message: str, context: str) -> None:
        self.errors.append(ValidationIssue(code=code, message=message, context=context))

    def add_warning(self, code: str, message: str, context: str) -> None:
        self.warnings.append(ValidationIssue(code=code, message=message, context=context))

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Append every issue of ``other`` to this result, preserving order."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self

    def clear(self) -> None:
        self.errors.clear()
        self.warnings.clear()

    def issues(self, severity: Optional[Severity] = None) -> List[ValidationIssue]:
        """Issues of one severity, or errors followed by warnings."""
        if severity is None:
            return [*self.errors, *self.warnings]
        if Severity(severity) is Severity.ERROR:
            return list(self.errors)
        return list(self.warnings)

    def codes(self, severity: Optional[Severity] = None) -> List[str]:
        """Issue codes in order, handy for assertions and summaries."""
        return [issue.code for issue in self.issues(severity)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }

    def __str__(self) -> str:
        lines = [f"Validation {'passed' if self.is_valid else 'failed'}: "
                 f"{self.error_count} error(s), {self.warning_count} warning(s)"]
        lines.extend(f"  ERROR   {issue}" for issue in self.errors)
        lines.extend(f"  WARNING {issue}" for issue in self.warnings)
        return "\n".join(lines)


__all__ = [
    "ValidationResult",
]
