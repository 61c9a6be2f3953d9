"""Provider load value object."""

from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import Field

from ...shared.base import ValueObject
from ...shared.exceptions import InvalidValueError
from ...shared.result import Failure, Result, Success
from ...shared.validation import DataSanitizer, DomainValidators, NumberLike


class ProviderLoad(ValueObject):
    """
    A load declared by one provider for a collection trip.

    Carries the documentary (claimed) weight of the load and the unit price of
    the product, both used when reconciling against the physical net weight.
    """

    id: UUID
    provider_code: str = Field(min_length=1, max_length=50)
    product_code: str = Field(min_length=1, max_length=50)
    documentary_weight: Decimal = Field(gt=0)
    unit_price: Decimal = Field(gt=0)

    @classmethod
    def try_create(
        cls,
        provider_code: str,
        product_code: str,
        documentary_weight: NumberLike,
        unit_price: NumberLike,
        load_id: UUID | None = None,
    ) -> Result["ProviderLoad", InvalidValueError]:
        """Validate the inputs and build a load, or return the rejection."""
        try:
            identifier = DomainValidators.require_identifier("load_id", load_id or uuid4())
            provider = DataSanitizer.sanitize_string(
                "provider_code", provider_code, max_length=50
            )
            product = DataSanitizer.sanitize_string(
                "product_code", product_code, max_length=50
            )
            weight = DomainValidators.require_positive(
                "documentary_weight", documentary_weight
            )
            price = DomainValidators.require_positive("unit_price", unit_price)
        except InvalidValueError as e:
            return Failure(e)

        return Success(
            cls(
                id=identifier,
                provider_code=provider,
                product_code=product,
                documentary_weight=weight,
                unit_price=price,
            )
        )

    @classmethod
    def create(
        cls,
        provider_code: str,
        product_code: str,
        documentary_weight: NumberLike,
        unit_price: NumberLike,
        load_id: UUID | None = None,
    ) -> "ProviderLoad":
        """
        Build a provider load.

        Raises:
            InvalidValueError: If a code is blank or the weight or price is not
                greater than 0
        """
        return cls.try_create(
            provider_code, product_code, documentary_weight, unit_price, load_id
        ).unwrap()

    @property
    def documentary_value(self) -> Decimal:
        """Declared monetary value of the load."""
        return self.documentary_weight * self.unit_price
