"""Structured diagnostics channel for oaspec.

Casting failures, rejected extension keys and resolver misses are not errors
in the document and never raise. Instead of disappearing into a log, each one
is recorded as a typed Diagnostic that callers can subscribe to or inspect
after the fact. Every emitted diagnostic is also written to the module logger.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from oaspec.types import DiagnosticKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A single non-fatal side effect.

    Attributes:
        kind: Category from DiagnosticKind
        message: Human-readable description
        subject: What the diagnostic is about (a schema kind, an extension key,
            a path, a reference pointer)
        value: Optional offending raw value

    Examples:
        >>> d = Diagnostic(
        ...     kind=DiagnosticKind.INVALID_EXTENSION,
        ...     message="Ignored invalid extension key: 'vendor'. Keys must start with 'x-'.",
        ...     subject="vendor",
        ... )
        >>> d.to_dict()["kind"]
        'extension.invalid'
    """
    kind: DiagnosticKind
    message: str
    subject: str
    value: Optional[Any] = None

    def __post_init__(self):
        if isinstance(self.kind, str):
            object.__setattr__(self, "kind", DiagnosticKind(self.kind))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        result: Dict[str, Any] = {
            "kind": self.kind.value,
            "message": self.message,
            "subject": self.subject,
        }
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


DiagnosticListener = Callable[[Diagnostic], None]
"""Type alias for diagnostic listener callbacks.

Listeners are called synchronously when a diagnostic is emitted.
"""

_LOG_LEVELS = {
    DiagnosticKind.CAST_FAILED: logging.ERROR,
    DiagnosticKind.CYCLE_DETECTED: logging.INFO,
}


class DiagnosticEmitter:
    """Collects diagnostics and dispatches them to listeners.

    Features:
    - Kind-specific subscriptions and wildcard subscriptions
    - Synchronous dispatch in registration order
    - Listener isolation (a failing listener is logged and skipped)
    - Recorded history in ``diagnostics`` for post-hoc inspection

    Examples:
        >>> emitter = DiagnosticEmitter()
        >>> seen = []
        >>> emitter.on(DiagnosticKind.CAST_FAILED, seen.append)
        >>> emitter.report(DiagnosticKind.CAST_FAILED, "bad number", subject="number", value="abc")
        >>> len(seen), len(emitter.diagnostics)
        (1, 1)
    """

    def __init__(self):
        self._listeners: Dict[DiagnosticKind, List[DiagnosticListener]] = {}
        self._any_listeners: List[DiagnosticListener] = []
        self.diagnostics: List[Diagnostic] = []

    def on(self, kind: DiagnosticKind, listener: DiagnosticListener) -> None:
        """Subscribe to a specific diagnostic kind."""
        self._listeners.setdefault(kind, []).append(listener)

    def on_any(self, listener: DiagnosticListener) -> None:
        """Subscribe to every diagnostic kind."""
        self._any_listeners.append(listener)

    def off(self, kind: DiagnosticKind, listener: DiagnosticListener) -> None:
        """Unsubscribe from a specific diagnostic kind.

        Removing a listener that was never registered is a no-op.
        """
        listeners = self._listeners.get(kind, [])
        if listener in listeners:
            listeners.remove(listener)

    def off_any(self, listener: DiagnosticListener) -> None:
        """Unsubscribe a wildcard listener."""
        if listener in self._any_listeners:
            self._any_listeners.remove(listener)

    def emit(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic, log it and dispatch it to listeners.

        Kind-specific listeners run first, then wildcard listeners.
        """
        self.diagnostics.append(diagnostic)
        logger.log(_LOG_LEVELS.get(diagnostic.kind, logging.WARNING), diagnostic.message)

        for listener in [*self._listeners.get(diagnostic.kind, []), *self._any_listeners]:
            try:
                listener(diagnostic)
            except Exception:
                logger.exception("Diagnostic listener %r failed", listener)

    def report(
        self,
        kind: DiagnosticKind,
        message: str,
        subject: str = "",
        value: Optional[Any] = None,
    ) -> None:
        """Build and emit a Diagnostic in one call."""
        self.emit(Diagnostic(kind=kind, message=message, subject=subject, value=value))

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        """Recorded diagnostics of one kind, in emission order."""
        return [d for d in self.diagnostics if d.kind == kind]

    def clear(self) -> None:
        """Drop all listeners and recorded diagnostics."""
        self._listeners.clear()
        self._any_listeners.clear()
        self.diagnostics.clear()

    def listener_count(self, kind: Optional[DiagnosticKind] = None) -> int:
        """Count registered listeners.

        Args:
            kind: If provided, count listeners for this kind only.
                  If None, count all listeners including wildcards.
        """
        if kind is not None:
            return len(self._listeners.get(kind, []))
        return len(self._any_listeners) + sum(len(v) for v in self._listeners.values())


def report(
    emitter: Optional[DiagnosticEmitter],
    kind: DiagnosticKind,
    message: str,
    subject: str = "",
    value: Optional[Any] = None,
) -> None:
    """Emit through ``emitter`` when one is attached, otherwise just log."""
    if emitter is not None:
        emitter.report(kind, message, subject=subject, value=value)
    else:
        logger.log(_LOG_LEVELS.get(kind, logging.WARNING), message)


__all__ = [
    "Diagnostic",
    "DiagnosticListener",
    "DiagnosticEmitter",
    "report",
]
