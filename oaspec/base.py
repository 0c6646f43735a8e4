"""Shared behaviour for document model objects.

Two invariants hold for every entity in the model:
- ``ref`` is always stored in canonical form for the entity's section
- ``extensions`` only ever holds keys prefixed with "x-"

Both are enforced on attribute assignment, so they also hold for values
passed to a dataclass constructor.
"""

from typing import Any, ClassVar, Dict, Mapping, Optional

from oaspec.diagnostics import DiagnosticEmitter, report
from oaspec.references import is_valid_extension_name, normalize_reference
from oaspec.types import ComponentSection, DiagnosticKind


def filter_extensions(
    extensions: Optional[Mapping[str, Any]],
    emitter: Optional[DiagnosticEmitter] = None,
) -> Dict[str, Any]:
    """Copy ``extensions`` keeping only valid "x-" keys.

    Each rejected key is reported as an INVALID_EXTENSION diagnostic.
    """
    kept: Dict[str, Any] = {}
    for name, value in (extensions or {}).items():
        if is_valid_extension_name(name):
            kept[name] = value
        else:
            _reject_extension(name, emitter)
    return kept


def _reject_extension(name: Any, emitter: Optional[DiagnosticEmitter]) -> None:
    report(
        emitter,
        DiagnosticKind.INVALID_EXTENSION,
        f"Ignored invalid extension key: '{name}'. Keys must start with 'x-'.",
        subject=str(name),
    )


class ModelObject:
    """Mixin normalizing ``ref`` and filtering ``extensions`` on assignment.

    Subclasses that can be referenced set ``ref_section``. An ``emitter``
    attribute, when present, receives rejected-extension diagnostics.
    """

    ref_section: ClassVar[Optional[ComponentSection]] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "ref" and self.ref_section is not None:
            value = normalize_reference(value, self.ref_section)
        elif name == "extensions":
            value = filter_extensions(value, getattr(self, "emitter", None))
        super().__setattr__(name, value)

    def add_extension(self, name: str, value: Any) -> bool:
        """Store one extension value.

        Returns:
            True if stored, False if the key was rejected
        """
        if not is_valid_extension_name(name):
            _reject_extension(name, getattr(self, "emitter", None))
            return False
        if getattr(self, "extensions", None) is None:
            self.extensions = {}
        self.extensions[name] = value
        return True


__all__ = [
    "filter_extensions",
    "ModelObject",
]
