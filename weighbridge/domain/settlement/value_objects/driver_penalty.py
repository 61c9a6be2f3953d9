"""Driver penalty value object."""

from decimal import Decimal
from uuid import UUID, uuid4, uuid5

from pydantic import Field, computed_field

from ...shared.base import ValueObject
from ...shared.exceptions import InvalidValueError
from ...shared.result import Failure, Result, Success
from ...shared.validation import DomainValidators, NumberLike


class DriverPenalty(ValueObject):
    """
    Penalty charged to the driver when the weight shortfall exceeds tolerance.

    The amount is the shortfall beyond tolerance multiplied by the highest
    unit price among the settlement's loads.
    """

    id: UUID
    missing_weight: Decimal = Field(gt=0)
    applied_max_price: Decimal = Field(gt=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_penalty_amount(self) -> Decimal:
        return self.missing_weight * self.applied_max_price

    @staticmethod
    def derive_id(
        settlement_id: UUID, missing_weight: Decimal, applied_max_price: Decimal
    ) -> UUID:
        """Stable penalty id: equal amounts on one settlement give the same id."""
        key = f"{missing_weight.normalize()}|{applied_max_price.normalize()}"
        return uuid5(settlement_id, key)

    @classmethod
    def try_create(
        cls,
        missing_weight: NumberLike,
        applied_max_price: NumberLike,
        penalty_id: UUID | None = None,
    ) -> Result["DriverPenalty", InvalidValueError]:
        """Validate the inputs and build a penalty, or return the rejection."""
        try:
            identifier = DomainValidators.require_identifier(
                "penalty_id", penalty_id or uuid4()
            )
            missing = DomainValidators.require_positive("missing_weight", missing_weight)
            price = DomainValidators.require_positive(
                "applied_max_price", applied_max_price
            )
        except InvalidValueError as e:
            return Failure(e)

        return Success(cls(id=identifier, missing_weight=missing, applied_max_price=price))

    @classmethod
    def create(
        cls,
        missing_weight: NumberLike,
        applied_max_price: NumberLike,
        penalty_id: UUID | None = None,
    ) -> "DriverPenalty":
        return cls.try_create(missing_weight, applied_max_price, penalty_id).unwrap()
