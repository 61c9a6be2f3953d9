"""Tests for the shared domain validators."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from weighbridge.domain.shared.exceptions import ErrorType, InvalidValueError
from weighbridge.domain.shared.validation import DataSanitizer, DomainValidators


class TestDataSanitizer:
    def test_strips_whitespace_and_control_characters(self):
        assert DataSanitizer.sanitize_string("code", "  PRV\x00-01\x1f ") == "PRV-01"

    @pytest.mark.parametrize("value", ["", "   ", "\x00\x07"])
    def test_blank_values_rejected(self, value):
        with pytest.raises(InvalidValueError) as exc_info:
            DataSanitizer.sanitize_string("code", value)

        assert exc_info.value.error_code == "EMPTY_VALUE"
        assert exc_info.value.field_name == "code"

    def test_too_long_value_rejected(self):
        with pytest.raises(InvalidValueError) as exc_info:
            DataSanitizer.sanitize_string("code", "X" * 51, max_length=50)

        assert exc_info.value.error_code == "TOO_LONG"

    def test_non_string_rejected(self):
        with pytest.raises(InvalidValueError) as exc_info:
            DataSanitizer.sanitize_string("code", 42)  # type: ignore[arg-type]

        assert exc_info.value.error_code == "INVALID_TYPE"


class TestDomainValidators:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (5, Decimal("5")),
            ("12.50", Decimal("12.50")),
            (0.1, Decimal("0.1")),
            (Decimal("3.333"), Decimal("3.333")),
        ],
    )
    def test_to_decimal_accepts_numbers(self, value, expected):
        assert DomainValidators.to_decimal("weight", value) == expected

    def test_float_converted_through_string(self):
        """Floats keep their printed value instead of the binary expansion."""
        assert str(DomainValidators.to_decimal("weight", 0.1)) == "0.1"

    @pytest.mark.parametrize(
        "value,code",
        [
            (True, "INVALID_TYPE"),
            (None, "INVALID_TYPE"),
            ("abc", "INVALID_NUMBER"),
            ("NaN", "NOT_FINITE"),
            (float("inf"), "NOT_FINITE"),
        ],
    )
    def test_to_decimal_rejects_non_numbers(self, value, code):
        with pytest.raises(InvalidValueError) as exc_info:
            DomainValidators.to_decimal("weight", value)

        assert exc_info.value.error_code == code
        assert exc_info.value.error_type == ErrorType.VALIDATION

    @pytest.mark.parametrize("value", [0, -1, "-0.001", Decimal("0")])
    def test_require_positive_rejects_zero_and_negative(self, value):
        with pytest.raises(InvalidValueError) as exc_info:
            DomainValidators.require_positive("weight", value)

        assert exc_info.value.error_code == "NOT_POSITIVE"

    def test_require_positive_returns_decimal(self):
        assert DomainValidators.require_positive("weight", "0.001") == Decimal("0.001")

    def test_require_identifier(self):
        identifier = uuid4()
        assert DomainValidators.require_identifier("id", identifier) == identifier

    def test_nil_identifier_rejected(self):
        with pytest.raises(InvalidValueError) as exc_info:
            DomainValidators.require_identifier("id", UUID(int=0))

        assert exc_info.value.error_code == "EMPTY_IDENTIFIER"

    def test_string_identifier_rejected(self):
        with pytest.raises(InvalidValueError):
            DomainValidators.require_identifier("id", str(uuid4()))  # type: ignore[arg-type]

    def test_require_not_before(self):
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)

        DomainValidators.require_not_before("start", start, "end", start)
        with pytest.raises(InvalidValueError) as exc_info:
            DomainValidators.require_not_before(
                "start", start, "end", start - timedelta(seconds=1)
            )

        assert exc_info.value.error_code == "INVALID_DATE_RANGE"

    @pytest.mark.parametrize(
        "value", ["1.234567", "1.5000000", 42, Decimal("0.000001")]
    )
    def test_require_scale_accepts_six_places(self, value):
        assert DomainValidators.require_scale("weight", value) == Decimal(str(value))

    @pytest.mark.parametrize("value", ["0.0000001", "1.2345678", 0.1234567])
    def test_require_scale_rejects_finer_values(self, value):
        with pytest.raises(InvalidValueError) as exc_info:
            DomainValidators.require_scale("weight", value)

        assert exc_info.value.error_code == "TOO_PRECISE"

    def test_require_positive_applies_scale(self):
        """A weight below the stored resolution would reload as zero."""
        with pytest.raises(InvalidValueError) as exc_info:
            DomainValidators.require_positive("weight", "0.0000001")

        assert exc_info.value.error_code == "TOO_PRECISE"

    def test_require_aware_normalizes_to_utc(self):
        local = datetime(2026, 3, 2, 10, 0, tzinfo=timezone(timedelta(hours=2)))

        result = DomainValidators.require_aware("at", local)

        assert result == local
        assert result.tzinfo == timezone.utc
        assert result.hour == 8

    def test_naive_timestamp_rejected(self):
        with pytest.raises(InvalidValueError) as exc_info:
            DomainValidators.require_aware("at", datetime(2026, 3, 2, 8, 0))

        assert exc_info.value.error_code == "NAIVE_DATETIME"
        assert exc_info.value.field_name == "at"
