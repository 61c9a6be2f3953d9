"""
Weight reconciliation between the physical net weight and provider documents.

The reconciliation is a pure function of the physical weight and the current
load set, so it can be re-run at any time and always reflects the loads it is
given.
"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from ...shared.base import ValueObject
from ...shared.exceptions import InvalidValueError
from ...shared.validation import QUANTUM
from ..value_objects.driver_penalty import DriverPenalty
from ..value_objects.provider_load import ProviderLoad

# Shortfall allowed before a penalty applies, as a fraction of the total
# documentary weight.
TOLERANCE_PERCENTAGE = Decimal("0.10")


class ReconciliationResult(ValueObject):
    """Breakdown of one reconciliation pass."""

    physical_net_weight: Decimal
    total_documentary_weight: Decimal
    difference: Decimal
    missing_weight: Decimal = Decimal("0")
    tolerance_amount: Decimal
    excess_missing_weight: Decimal = Decimal("0")
    max_unit_price: Decimal
    penalty: DriverPenalty | None = None

    @property
    def has_shortfall(self) -> bool:
        return self.difference < 0

    @property
    def within_tolerance(self) -> bool:
        return self.penalty is None


def reconcile(
    settlement_id: UUID,
    physical_net_weight: Decimal,
    loads: Sequence[ProviderLoad],
) -> ReconciliationResult:
    """
    Compare the physical net weight with the declared loads.

    1. Sum the documentary weight of every load.
    2. difference = physical - documentary.
    3. A surplus (difference >= 0) never produces a penalty.
    4. A shortfall within 10% of the documentary total produces no penalty;
       beyond it, the excess shortfall is charged at the highest unit price.
       The excess is rounded half up to the weight scale first.

    Raises:
        InvalidValueError: If no loads are given
    """
    if not loads:
        raise InvalidValueError(
            "loads", None, "At least one provider load is required", "EMPTY_LOADS"
        )

    total_documentary_weight = sum(
        (load.documentary_weight for load in loads), Decimal("0")
    )
    difference = physical_net_weight - total_documentary_weight
    tolerance_amount = total_documentary_weight * TOLERANCE_PERCENTAGE
    max_unit_price = max(load.unit_price for load in loads)

    result = {
        "physical_net_weight": physical_net_weight,
        "total_documentary_weight": total_documentary_weight,
        "difference": difference,
        "tolerance_amount": tolerance_amount,
        "max_unit_price": max_unit_price,
    }

    if difference >= 0:
        return ReconciliationResult(**result)

    missing_weight = abs(difference)
    if missing_weight <= tolerance_amount:
        return ReconciliationResult(missing_weight=missing_weight, **result)

    # Charged weight is kept at the fixed-point scale weights are stored at.
    excess_missing_weight = (missing_weight - tolerance_amount).quantize(
        QUANTUM, rounding=ROUND_HALF_UP
    )
    if excess_missing_weight <= 0:
        return ReconciliationResult(missing_weight=missing_weight, **result)

    penalty = DriverPenalty.create(
        excess_missing_weight,
        max_unit_price,
        penalty_id=DriverPenalty.derive_id(
            settlement_id, excess_missing_weight, max_unit_price
        ),
    )
    return ReconciliationResult(
        missing_weight=missing_weight,
        excess_missing_weight=excess_missing_weight,
        penalty=penalty,
        **result,
    )
