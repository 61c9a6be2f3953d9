"""Weight reading value object."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import Field

from ...shared.base import ValueObject, utc_now
from ...shared.exceptions import InvalidValueError
from ...shared.result import Failure, Result, Success
from ...shared.validation import DomainValidators, NumberLike
from .enums import WeightType


class WeightReading(ValueObject):
    """
    A single gross or tare measurement taken on the weighbridge.

    Readings are owned by a weighing process and are never mutated or removed
    once recorded.
    """

    id: UUID
    weight_type: WeightType
    value_kg: Decimal = Field(gt=0)
    timestamp: datetime

    @classmethod
    def try_create(
        cls,
        weight_type: WeightType,
        value_kg: NumberLike,
        timestamp: datetime | None = None,
        reading_id: UUID | None = None,
    ) -> Result["WeightReading", InvalidValueError]:
        """Validate the inputs and build a reading, or return the rejection."""
        try:
            if not isinstance(weight_type, WeightType):
                raise InvalidValueError(
                    "weight_type", weight_type, "Unknown weight type", "INVALID_TYPE"
                )
            identifier = DomainValidators.require_identifier(
                "reading_id", reading_id or uuid4()
            )
            value = DomainValidators.require_positive("value_kg", value_kg)
            measured_at = (
                DomainValidators.require_aware("timestamp", timestamp)
                if timestamp is not None
                else utc_now()
            )
        except InvalidValueError as e:
            return Failure(e)

        return Success(
            cls(
                id=identifier,
                weight_type=weight_type,
                value_kg=value,
                timestamp=measured_at,
            )
        )

    @classmethod
    def create(
        cls,
        weight_type: WeightType,
        value_kg: NumberLike,
        timestamp: datetime | None = None,
        reading_id: UUID | None = None,
    ) -> "WeightReading":
        """
        Build a reading.

        Raises:
            InvalidValueError: If the weight is not positive, the id is nil or
                the timestamp has no timezone
        """
        return cls.try_create(weight_type, value_kg, timestamp, reading_id).unwrap()

    @property
    def is_gross(self) -> bool:
        return self.weight_type == WeightType.GROSS

    @property
    def is_tare(self) -> bool:
        return self.weight_type == WeightType.TARE
