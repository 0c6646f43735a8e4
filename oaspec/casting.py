"""Value casting for schema defaults, examples and enums.

Every SchemaKind maps to one pure casting function in ``CASTERS``. A caster
converts an arbitrary raw value into the kind's native Python type, or returns
None when the value cannot be converted. Casting never raises: failures are
reported as CAST_FAILED diagnostics (and logged) and the value becomes absent.

Native types per kind:

    string, email, password, byte, file -> str
    boolean                              -> bool
    number                               -> decimal.Decimal
    integer                              -> Int32 or Int64 (int subclasses)
    date                                 -> datetime.date
    date-time                            -> timezone-aware datetime.datetime
    uuid                                 -> uuid.UUID
    binary                               -> bytes
    array, object, map, composed,
    arbitrary                            -> unchanged
    json-schema                          -> depends on the resolved best type
"""

import base64
import binascii
import datetime
import re
import uuid
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Iterable, Optional

from dateutil import parser as date_parser

from oaspec.diagnostics import DiagnosticEmitter, report
from oaspec.types import BinaryStringConversion, DiagnosticKind, SchemaKind

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_NUMERIC_TYPES = frozenset({"integer", "number"})


class Int32(int):
    """An integer known to fit the signed 32-bit range."""

    def __repr__(self) -> str:
        return f"Int32({int(self)})"


class Int64(int):
    """An integer that needs the signed 64-bit range."""

    def __repr__(self) -> str:
        return f"Int64({int(self)})"


@dataclass(frozen=True)
class CastOptions:
    """Explicit switches for type resolution and casting.

    Attributes:
        bind_type_and_types: When True and a schema has no single ``type`` but
            exactly one entry in ``types``, that entry is reported as its type.
        binary_string_conversion: BASE64 decodes string input for binary
            schemas; any other mode encodes the string as UTF-8.
    """
    bind_type_and_types: bool = False
    binary_string_conversion: BinaryStringConversion = BinaryStringConversion.DEFAULT


DEFAULT_OPTIONS = CastOptions()


@dataclass(frozen=True)
class CastContext:
    """Everything a caster may consult besides the raw value."""
    kind: SchemaKind
    options: CastOptions = DEFAULT_OPTIONS
    emitter: Optional[DiagnosticEmitter] = None
    types: tuple = field(default_factory=tuple)

    def fail(self, value: Any, reason: str) -> None:
        report(
            self.emitter,
            DiagnosticKind.CAST_FAILED,
            f"Cannot cast {value!r} to {self.kind.value}: {reason}",
            subject=self.kind.value,
            value=value,
        )
        return None


def resolve_best_type(types: Optional[Iterable[str]]) -> Optional[str]:
    """Pick one representative type from a multi-type declaration.

    A single type is returned as-is, except that "integer" collapses to
    "number". Several types resolve by priority: object, string, array,
    number (for integer or number), boolean, else the first declared type.

    >>> resolve_best_type(["null", "string", "object"])
    'object'
    >>> resolve_best_type(["integer"])
    'number'
    >>> resolve_best_type([]) is None
    True
    """
    ordered = list(dict.fromkeys(types or ()))
    if not ordered:
        return None
    if len(ordered) == 1:
        return "number" if ordered[0] in _NUMERIC_TYPES else ordered[0]
    for candidate in ("object", "string", "array"):
        if candidate in ordered:
            return candidate
    if _NUMERIC_TYPES.intersection(ordered):
        return "number"
    if "boolean" in ordered:
        return "boolean"
    return ordered[0]


def parse_offset_datetime(value: str) -> datetime.datetime:
    """Parse an ISO-8601 timestamp that carries an explicit UTC offset.

    Raises:
        ValueError: If the string is not ISO-8601 or has no offset
    """
    parsed = date_parser.isoparse(value)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp {value!r} has no UTC offset")
    return parsed


def _to_string(value: Any, ctx: CastContext) -> Optional[str]:
    try:
        if isinstance(value, (bytes, bytearray)):
            return bytes(value).decode("utf-8")
        return str(value)
    except UnicodeDecodeError as exc:
        return ctx.fail(value, f"not valid UTF-8 ({exc.reason})")
    except Exception as exc:
        return ctx.fail(value, str(exc))


def _to_boolean(value: Any, ctx: CastContext) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    try:
        return str(value).lower() == "true"
    except Exception as exc:
        return ctx.fail(value, str(exc))


def _to_number(value: Any, ctx: CastContext) -> Optional[Decimal]:
    if isinstance(value, bool):
        return ctx.fail(value, "booleans are not numbers")
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        return ctx.fail(value, f"not a decimal number ({exc.__class__.__name__})")
    if not number.is_finite():
        return ctx.fail(value, "not a finite number")
    return number


def _to_integer(value: Any, ctx: CastContext) -> Optional[int]:
    if isinstance(value, bool):
        return ctx.fail(value, "booleans are not integers")
    text = str(value).strip()
    if not _INTEGER_RE.match(text):
        return ctx.fail(value, "not an integer")
    number = int(text)
    if INT32_MIN <= number <= INT32_MAX:
        return Int32(number)
    if INT64_MIN <= number <= INT64_MAX:
        return Int64(number)
    return ctx.fail(value, "outside the signed 64-bit range")


def _to_date(value: Any, ctx: CastContext) -> Optional[datetime.date]:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            return date_parser.isoparse(value).date()
        except (ValueError, OverflowError) as exc:
            return ctx.fail(value, str(exc))
    return ctx.fail(value, f"unsupported type {type(value).__name__}")


def _to_date_time(value: Any, ctx: CastContext) -> Optional[datetime.datetime]:
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=datetime.timezone.utc)
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day, tzinfo=datetime.timezone.utc)
    if isinstance(value, str):
        try:
            return parse_offset_datetime(value)
        except (ValueError, OverflowError) as exc:
            return ctx.fail(value, str(exc))
    return ctx.fail(value, f"unsupported type {type(value).__name__}")


def _to_uuid(value: Any, ctx: CastContext) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        return ctx.fail(value, str(exc))


def _to_binary(value: Any, ctx: CastContext) -> Optional[bytes]:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    text = str(value)
    try:
        if ctx.options.binary_string_conversion is BinaryStringConversion.BASE64:
            return base64.b64decode(text, validate=True)
        return text.encode("utf-8")
    except (binascii.Error, UnicodeEncodeError) as exc:
        return ctx.fail(value, str(exc))


def _identity(value: Any, ctx: CastContext) -> Any:
    return value


def _to_json_schema_value(value: Any, ctx: CastContext) -> Any:
    if not isinstance(value, str):
        return value
    best = resolve_best_type(ctx.types)
    if best == "number":
        if _INTEGER_RE.match(value.strip()):
            integer = _to_integer(value, ctx)
            return value if integer is None else integer
        number = _to_number(value, ctx)
        return value if number is None else number
    if best == "boolean":
        return _to_boolean(value, ctx)
    return value


Caster = Callable[[Any, CastContext], Any]

CASTERS: Dict[SchemaKind, Caster] = {
    SchemaKind.STRING: _to_string,
    SchemaKind.EMAIL: _to_string,
    SchemaKind.PASSWORD: _to_string,
    SchemaKind.BYTE: _to_string,
    SchemaKind.FILE: _to_string,
    SchemaKind.BOOLEAN: _to_boolean,
    SchemaKind.NUMBER: _to_number,
    SchemaKind.INTEGER: _to_integer,
    SchemaKind.DATE: _to_date,
    SchemaKind.DATE_TIME: _to_date_time,
    SchemaKind.UUID: _to_uuid,
    SchemaKind.BINARY: _to_binary,
    SchemaKind.ARRAY: _identity,
    SchemaKind.OBJECT: _identity,
    SchemaKind.MAP: _identity,
    SchemaKind.COMPOSED: _identity,
    SchemaKind.ARBITRARY: _identity,
    SchemaKind.JSON_SCHEMA: _to_json_schema_value,
}

_unmapped = set(SchemaKind) - set(CASTERS)
if _unmapped:
    raise RuntimeError(f"No caster registered for schema kinds: {sorted(k.value for k in _unmapped)}")


def cast_value(
    kind: SchemaKind,
    value: Any,
    options: Optional[CastOptions] = None,
    emitter: Optional[DiagnosticEmitter] = None,
    types: Optional[Iterable[str]] = None,
) -> Any:
    """Convert ``value`` to the native type of ``kind``.

    Args:
        kind: Schema kind whose caster should run
        value: Raw value (None always casts to None)
        options: Explicit casting switches (defaults apply when omitted)
        emitter: Optional diagnostics channel for failures
        types: Declared type set, consulted by the json-schema kind only

    Returns:
        The converted value, or None if conversion failed

    Examples:
        >>> cast_value(SchemaKind.INTEGER, "2147483647")
        Int32(2147483647)
        >>> cast_value(SchemaKind.INTEGER, "9999999999")
        Int64(9999999999)
        >>> cast_value(SchemaKind.NUMBER, "abc") is None
        True
    """
    if value is None:
        return None
    ctx = CastContext(
        kind=SchemaKind(kind),
        options=options or DEFAULT_OPTIONS,
        emitter=emitter,
        types=tuple(types or ()),
    )
    return CASTERS[ctx.kind](value, ctx)


__all__ = [
    "INT32_MIN",
    "INT32_MAX",
    "INT64_MIN",
    "INT64_MAX",
    "Int32",
    "Int64",
    "CastOptions",
    "DEFAULT_OPTIONS",
    "CastContext",
    "Caster",
    "CASTERS",
    "cast_value",
    "resolve_best_type",
    "parse_offset_datetime",
]
