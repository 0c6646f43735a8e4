"""Format rules for schema examples.

Examples declared on schemas with one of the formats below are checked with a
dedicated jsonschema ``FormatChecker``. Any other format is not checked.

    email      local@domain.tld, no whitespace
    uri        RFC 3986 characters only, splittable by urllib
    uuid       canonical 8-4-4-4-12 hex form
    date       YYYY-MM-DD
    date-time  ISO-8601 with an explicit UTC offset
    ipv4       four dot-separated groups of 1-3 digits
    ipv6       eight colon-separated groups of 1-4 hex digits
    hostname   letters, digits, dots and hyphens
"""

import re
import uuid
from typing import Any, Optional
from urllib.parse import urlsplit

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import best_match

from oaspec.casting import parse_offset_datetime
from oaspec.schema import plain_value

FORMAT_CHECKER = FormatChecker(formats=())

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_URI_RE = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_IPV4_RE = re.compile(r"^([0-9]{1,3}\.){3}[0-9]{1,3}$")
_IPV6_RE = re.compile(r"^([0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}$")
_HOSTNAME_RE = re.compile(r"^[a-zA-Z0-9.-]+$")


@FORMAT_CHECKER.checks("email")
def is_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


@FORMAT_CHECKER.checks("uri", raises=ValueError)
def is_uri(value: str) -> bool:
    if not _URI_RE.match(value):
        return False
    urlsplit(value)
    return True


@FORMAT_CHECKER.checks("uuid", raises=ValueError)
def is_uuid(value: str) -> bool:
    uuid.UUID(value)
    return True


@FORMAT_CHECKER.checks("date")
def is_date(value: str) -> bool:
    return bool(_DATE_RE.match(value))


@FORMAT_CHECKER.checks("date-time", raises=(ValueError, OverflowError))
def is_date_time(value: str) -> bool:
    parse_offset_datetime(value)
    return True


@FORMAT_CHECKER.checks("ipv4")
def is_ipv4(value: str) -> bool:
    return bool(_IPV4_RE.match(value))


@FORMAT_CHECKER.checks("ipv6")
def is_ipv6(value: str) -> bool:
    return bool(_IPV6_RE.match(value))


@FORMAT_CHECKER.checks("hostname")
def is_hostname(value: str) -> bool:
    return bool(_HOSTNAME_RE.match(value))


SUPPORTED_FORMATS = frozenset(FORMAT_CHECKER.checkers)


def example_format_error(fmt: Optional[str], example: Any) -> Optional[str]:
    """Check an example against a format.

    The example is compared in its textual form, so typed values (dates,
    UUIDs, numbers) are checked the way they would be written in a document.

    Returns:
        A description of the mismatch, or None if the example conforms or the
        format is not one of SUPPORTED_FORMATS

    Examples:
        >>> example_format_error("email", "not-an-email")
        "'not-an-email' is not a 'email'"
        >>> example_format_error("carrot", "anything") is None
        True
    """
    if fmt is None or example is None or fmt not in SUPPORTED_FORMATS:
        return None
    text = str(plain_value(example))
    validator = Draft7Validator({"format": fmt}, format_checker=FORMAT_CHECKER)
    error = best_match(validator.iter_errors(text))
    return error.message if error is not None else None


__all__ = [
    "FORMAT_CHECKER",
    "SUPPORTED_FORMATS",
    "example_format_error",
    "is_email",
    "is_uri",
    "is_uuid",
    "is_date",
    "is_date_time",
    "is_ipv4",
    "is_ipv6",
    "is_hostname",
]
