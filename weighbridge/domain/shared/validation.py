"""
Validators shared by the weighing and settlement aggregates.

Every validator either returns the normalized value or raises
``InvalidValueError``. Aggregates and value objects call these before any
state is touched, so a rejected call never leaves a partially built object
behind.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from uuid import UUID

from .exceptions import InvalidValueError

NumberLike = Decimal | int | float | str

# Fixed-point scale of every weight and price; storage uses the same scale.
DECIMAL_PLACES = 6
QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x84\x86-\x9f]")
_NIL_UUID = UUID(int=0)


class DataSanitizer:
    """Utilities for cleaning and sanitizing input data."""

    @staticmethod
    def sanitize_string(field_name: str, value: str, max_length: int = 100) -> str:
        """
        Strip whitespace and control characters from a required string.

        Raises:
            InvalidValueError: If the value is not a string, is blank after
                stripping, or exceeds ``max_length``
        """
        if not isinstance(value, str):
            raise InvalidValueError(
                field_name, value, "Value must be a string", "INVALID_TYPE"
            )

        value = _CONTROL_CHARS.sub("", value).strip()

        if not value:
            raise InvalidValueError(
                field_name, value, "Value cannot be empty or whitespace", "EMPTY_VALUE"
            )

        if len(value) > max_length:
            raise InvalidValueError(
                field_name,
                value,
                f"Value exceeds maximum length of {max_length}",
                "TOO_LONG",
            )

        return value


class DomainValidators:
    """Collection of domain constraint checks."""

    @staticmethod
    def to_decimal(field_name: str, value: NumberLike) -> Decimal:
        """Convert a numeric input to a finite Decimal."""
        if isinstance(value, bool) or not isinstance(value, Decimal | int | float | str):
            raise InvalidValueError(
                field_name, value, "Value must be a number", "INVALID_TYPE"
            )

        try:
            result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
        except InvalidOperation as e:
            raise InvalidValueError(
                field_name, value, "Value must be a number", "INVALID_NUMBER"
            ) from e

        if not result.is_finite():
            raise InvalidValueError(
                field_name, value, "Value must be finite", "NOT_FINITE"
            )
        return result

    @staticmethod
    def require_positive(field_name: str, value: NumberLike) -> Decimal:
        """Validate that a number is strictly greater than zero and within scale."""
        number = DomainValidators.to_decimal(field_name, value)
        if number <= 0:
            raise InvalidValueError(
                field_name, value, "Value must be greater than 0", "NOT_POSITIVE"
            )
        return DomainValidators.require_scale(field_name, number)

    @staticmethod
    def require_identifier(field_name: str, value: UUID) -> UUID:
        """Validate that an identifier is a non-nil UUID."""
        if not isinstance(value, UUID):
            raise InvalidValueError(
                field_name, value, "Identifier must be a UUID", "INVALID_TYPE"
            )
        if value == _NIL_UUID:
            raise InvalidValueError(
                field_name, value, "Identifier cannot be empty", "EMPTY_IDENTIFIER"
            )
        return value

    @staticmethod
    def require_not_before(
        start_field: str, start: datetime, end_field: str, end: datetime
    ) -> None:
        """Validate that ``end`` does not precede ``start``."""
        if end < start:
            raise InvalidValueError(
                end_field,
                end,
                f"{end_field} cannot be before {start_field}",
                "INVALID_DATE_RANGE",
            )

    @staticmethod
    def require_scale(field_name: str, value: NumberLike) -> Decimal:
        """Reject numbers with more fractional digits than ``DECIMAL_PLACES``."""
        number = DomainValidators.to_decimal(field_name, value)
        try:
            quantized = number.quantize(QUANTUM)
        except InvalidOperation as e:
            raise InvalidValueError(
                field_name, value, "Value is out of range", "OUT_OF_RANGE"
            ) from e
        if number != quantized:
            raise InvalidValueError(
                field_name,
                value,
                f"Value cannot have more than {DECIMAL_PLACES} decimal places",
                "TOO_PRECISE",
            )
        return number

    @staticmethod
    def require_aware(field_name: str, value: datetime) -> datetime:
        """Validate that a timestamp carries a zone and return it in UTC."""
        if not isinstance(value, datetime):
            raise InvalidValueError(
                field_name, value, "Value must be a datetime", "INVALID_TYPE"
            )
        if value.tzinfo is None or value.utcoffset() is None:
            raise InvalidValueError(
                field_name,
                value,
                "Timestamp must include a timezone offset",
                "NAIVE_DATETIME",
            )
        return value.astimezone(timezone.utc)
