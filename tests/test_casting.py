"""Unit tests for value casting.

Tests cover:
- Integer promotion between the 32-bit and 64-bit ranges
- Failure containment (casting never raises, failures become None)
- Per-kind conversions (boolean, number, date, date-time, uuid, binary)
- The json-schema kind's best-type driven coercion
- Explicit CastOptions instead of ambient configuration
"""

import datetime
import logging
import uuid
from decimal import Decimal

import pytest

from oaspec.casting import (
    CASTERS,
    CastOptions,
    Int32,
    Int64,
    cast_value,
    parse_offset_datetime,
    resolve_best_type,
)
from oaspec.diagnostics import DiagnosticEmitter
from oaspec.types import BinaryStringConversion, DiagnosticKind, SchemaKind


@pytest.fixture
def emitter():
    return DiagnosticEmitter()


class TestIntegerPromotion:
    """Test the 32-bit / 64-bit integer split."""

    def test_int32_max_stays_32_bit(self):
        """Should store 2147483647 as a 32-bit integer."""
        value = cast_value(SchemaKind.INTEGER, "2147483647")
        assert isinstance(value, Int32)
        assert value == 2147483647

    def test_above_int32_promotes_to_64_bit(self):
        """Should promote 9999999999 to a 64-bit integer."""
        value = cast_value(SchemaKind.INTEGER, "9999999999")
        assert isinstance(value, Int64)
        assert value == 9999999999

    def test_negative_boundaries(self):
        """Should split at the signed 32-bit minimum."""
        assert isinstance(cast_value(SchemaKind.INTEGER, "-2147483648"), Int32)
        assert isinstance(cast_value(SchemaKind.INTEGER, "-2147483649"), Int64)

    def test_native_int_input(self):
        """Should accept Python ints as well as strings."""
        assert cast_value(SchemaKind.INTEGER, 42) == Int32(42)

    def test_outside_64_bit_range_is_absent(self, emitter):
        """Should not raise for values beyond the 64-bit range."""
        assert cast_value(SchemaKind.INTEGER, "99999999999999999999", emitter=emitter) is None
        assert len(emitter.of_kind(DiagnosticKind.CAST_FAILED)) == 1

    def test_fractional_string_is_absent(self):
        """Should reject fractional input for integer schemas."""
        assert cast_value(SchemaKind.INTEGER, "1.5") is None

    def test_boolean_is_not_an_integer(self):
        """Should reject bools even though bool subclasses int."""
        assert cast_value(SchemaKind.INTEGER, True) is None


class TestFailureContainment:
    """Test that cast failures are reported, not raised."""

    def test_non_numeric_number_is_absent(self, emitter):
        """Should yield None for a non-numeric string on a number schema."""
        assert cast_value(SchemaKind.NUMBER, "abc", emitter=emitter) is None

        failures = emitter.of_kind(DiagnosticKind.CAST_FAILED)
        assert len(failures) == 1
        assert failures[0].subject == "number"
        assert failures[0].value == "abc"

    def test_failure_without_emitter_is_logged(self, caplog):
        """Should log at ERROR when no emitter is attached."""
        caplog.set_level(logging.ERROR, logger="oaspec.diagnostics")
        assert cast_value(SchemaKind.UUID, "not-a-uuid") is None
        assert any("not-a-uuid" in record.getMessage() for record in caplog.records)

    def test_none_stays_none(self, emitter):
        """Should cast None to None without reporting anything."""
        for kind in SchemaKind:
            assert cast_value(kind, None, emitter=emitter) is None
        assert emitter.diagnostics == []

    def test_non_finite_number_is_absent(self):
        """Should reject NaN and infinities."""
        assert cast_value(SchemaKind.NUMBER, "NaN") is None
        assert cast_value(SchemaKind.NUMBER, "Infinity") is None


class TestScalarKinds:
    """Test per-kind conversions."""

    def test_number_is_decimal(self):
        """Should parse into an arbitrary-precision Decimal."""
        assert cast_value(SchemaKind.NUMBER, "3.14") == Decimal("3.14")
        assert cast_value(SchemaKind.NUMBER, 2) == Decimal(2)

    def test_boolean_is_lenient(self):
        """Should treat 'true' (any case) as True and anything else as False."""
        assert cast_value(SchemaKind.BOOLEAN, "TRUE") is True
        assert cast_value(SchemaKind.BOOLEAN, "yes") is False
        assert cast_value(SchemaKind.BOOLEAN, False) is False

    def test_string_kinds_convert_with_str(self):
        """Should convert any value to its string form."""
        assert cast_value(SchemaKind.STRING, 12) == "12"
        assert cast_value(SchemaKind.EMAIL, "a@b.co") == "a@b.co"

    def test_string_kinds_decode_bytes(self, emitter):
        """Should decode bytes as UTF-8 instead of storing their repr."""
        assert cast_value(SchemaKind.STRING, b"abc") == "abc"
        assert cast_value(SchemaKind.PASSWORD, "café".encode("utf-8")) == "café"
        assert cast_value(SchemaKind.STRING, b"\xff\xfe", emitter=emitter) is None
        assert len(emitter.of_kind(DiagnosticKind.CAST_FAILED)) == 1

    def test_date_from_string_and_datetime(self):
        """Should produce datetime.date values."""
        assert cast_value(SchemaKind.DATE, "2024-02-29") == datetime.date(2024, 2, 29)
        moment = datetime.datetime(2024, 3, 1, 12, 30)
        assert cast_value(SchemaKind.DATE, moment) == datetime.date(2024, 3, 1)

    def test_date_time_with_offset(self):
        """Should parse ISO-8601 strings that carry an offset."""
        value = cast_value(SchemaKind.DATE_TIME, "2024-01-01T10:00:00+02:00")
        assert value.utcoffset() == datetime.timedelta(hours=2)

    def test_date_time_without_offset_is_absent(self):
        """Should reject timestamps without a UTC offset."""
        assert cast_value(SchemaKind.DATE_TIME, "2024-01-01T10:00:00") is None

    def test_date_time_from_native_values(self):
        """Should pin naive datetimes and dates to UTC."""
        naive = datetime.datetime(2024, 1, 1, 8, 0)
        assert cast_value(SchemaKind.DATE_TIME, naive).tzinfo == datetime.timezone.utc

        midnight = cast_value(SchemaKind.DATE_TIME, datetime.date(2024, 1, 1))
        assert midnight == datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone.utc)

        aware = datetime.datetime(2024, 1, 1, tzinfo=datetime.timezone(datetime.timedelta(hours=-5)))
        assert cast_value(SchemaKind.DATE_TIME, aware) is aware

    def test_date_time_rejects_other_types(self):
        """Should yield None for unsupported input types."""
        assert cast_value(SchemaKind.DATE_TIME, 12345) is None

    def test_uuid(self):
        """Should parse canonical UUID strings."""
        raw = "123e4567-e89b-12d3-a456-426614174000"
        assert cast_value(SchemaKind.UUID, raw) == uuid.UUID(raw)
        assert cast_value(SchemaKind.UUID, "123") is None

    def test_arbitrary_is_identity(self):
        """Should pass values through unchanged."""
        payload = {"nested": [1, 2]}
        assert cast_value(SchemaKind.ARBITRARY, payload) is payload
        assert cast_value(SchemaKind.OBJECT, payload) is payload


class TestBinaryConversion:
    """Test binary string handling under explicit options."""

    def test_bytes_pass_through(self):
        """Should return raw bytes unchanged."""
        assert cast_value(SchemaKind.BINARY, b"\x00\x01") == b"\x00\x01"

    def test_string_is_utf8_by_default(self):
        """Should encode strings as UTF-8 unless base64 is requested."""
        assert cast_value(SchemaKind.BINARY, "aGVsbG8=") == b"aGVsbG8="

    def test_base64_when_requested(self):
        """Should decode base64 when the options ask for it."""
        options = CastOptions(binary_string_conversion=BinaryStringConversion.BASE64)
        assert cast_value(SchemaKind.BINARY, "aGVsbG8=", options=options) == b"hello"

    def test_invalid_base64_is_absent(self, emitter):
        """Should report malformed base64 instead of raising."""
        options = CastOptions(binary_string_conversion=BinaryStringConversion.BASE64)
        assert cast_value(SchemaKind.BINARY, "!!!", options=options, emitter=emitter) is None
        assert len(emitter.diagnostics) == 1


class TestJsonSchemaKind:
    """Test coercion driven by the resolved best type."""

    def test_numeric_best_type(self):
        """Should coerce numeric strings when the best type is numeric."""
        assert cast_value(SchemaKind.JSON_SCHEMA, "42", types=["integer", "null"]) == Int32(42)
        assert cast_value(SchemaKind.JSON_SCHEMA, "4.5", types=["number"]) == Decimal("4.5")

    def test_unparseable_number_keeps_raw_value(self):
        """Should keep the raw string when numeric coercion fails."""
        assert cast_value(SchemaKind.JSON_SCHEMA, "abc", types=["number"]) == "abc"

    def test_boolean_best_type(self):
        """Should parse booleans when the best type is boolean."""
        assert cast_value(SchemaKind.JSON_SCHEMA, "true", types=["boolean", "null"]) is True

    def test_other_best_types_pass_through(self):
        """Should not coerce when an object or string type wins."""
        assert cast_value(SchemaKind.JSON_SCHEMA, "42", types=["string", "integer"]) == "42"
        assert cast_value(SchemaKind.JSON_SCHEMA, 7, types=["integer"]) == 7


class TestBestType:
    """Test best-type resolution priority."""

    @pytest.mark.parametrize(
        "types,expected",
        [
            (["null", "string", "object"], "object"),
            (["array", "string"], "string"),
            (["integer", "array"], "array"),
            (["integer", "boolean"], "number"),
            (["boolean", "null"], "boolean"),
            (["null", "foo"], "null"),
            (["integer"], "number"),
            (["string"], "string"),
            ([], None),
        ],
    )
    def test_priority(self, types, expected):
        """Should pick object > string > array > number > boolean > first."""
        assert resolve_best_type(types) == expected


class TestDispatchTable:
    """Test the kind to caster table."""

    def test_every_kind_has_a_caster(self):
        """Should map every SchemaKind to a caster."""
        assert set(CASTERS) == set(SchemaKind)

    def test_parse_offset_datetime_requires_offset(self):
        """Should raise ValueError for naive timestamps."""
        with pytest.raises(ValueError):
            parse_offset_datetime("2024-01-01T00:00:00")
        assert parse_offset_datetime("2024-01-01T00:00:00Z").tzinfo is not None
