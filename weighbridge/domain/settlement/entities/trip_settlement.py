"""TripSettlement aggregate root reconciling documentary and physical weight."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import Field, PrivateAttr

from ...shared.base import AggregateRoot, utc_now
from ...shared.exceptions import EmptyAggregateError, InvariantViolationError
from ...shared.validation import DomainValidators, NumberLike
from ..events import ProviderLoadAdded, SettlementCalculated, TripSettlementCreated
from ..services.reconciliation import ReconciliationResult, reconcile
from ..value_objects.driver_penalty import DriverPenalty
from ..value_objects.provider_load import ProviderLoad


class TripSettlement(AggregateRoot):
    """
    Trip settlement aggregate root.

    Collects the loads declared by each provider for a collection trip and
    reconciles their total documentary weight against the physical net weight
    measured by the referenced weighing process. A shortfall beyond the 10%
    tolerance results in a driver penalty.

    The stored penalty always belongs to the current load set: adding a load
    discards the previous result until the settlement is calculated again.
    """

    weighing_process_id: UUID
    physical_net_weight: Decimal = Field(gt=0)
    penalty: DriverPenalty | None = None
    calculated_at: datetime | None = None

    _provider_loads: list[ProviderLoad] = PrivateAttr(default_factory=list)

    @classmethod
    def create(
        cls,
        weighing_process_id: UUID,
        physical_net_weight: NumberLike,
        settlement_id: UUID | None = None,
    ) -> "TripSettlement":
        """
        Open a settlement for a weighed trip.

        Args:
            weighing_process_id: Weighing process that produced the net weight
            physical_net_weight: Measured net weight in kilograms

        Raises:
            InvalidValueError: If an identifier is nil or the weight is not
                greater than 0
        """
        process_id = DomainValidators.require_identifier(
            "weighing_process_id", weighing_process_id
        )
        identifier = DomainValidators.require_identifier(
            "settlement_id", settlement_id or uuid4()
        )
        weight = DomainValidators.require_positive(
            "physical_net_weight", physical_net_weight
        )

        settlement = cls(
            id=identifier, weighing_process_id=process_id, physical_net_weight=weight
        )
        settlement.add_domain_event(
            TripSettlementCreated(
                aggregate_id=settlement.id,
                weighing_process_id=process_id,
                physical_net_weight=weight,
            )
        )
        return settlement

    @classmethod
    def restore(
        cls, provider_loads: Iterable[ProviderLoad] = (), **fields
    ) -> "TripSettlement":
        """Rebuild a persisted settlement together with its loads."""
        settlement = cls(**fields)
        settlement._provider_loads = list(provider_loads)

        if not settlement.is_valid():
            raise InvariantViolationError(
                "CONSISTENT_SETTLEMENT_STATE",
                f"Stored state of trip settlement {settlement.id} is inconsistent",
            )
        return settlement

    def is_valid(self) -> bool:
        """A penalty can only exist after a calculation over at least one load."""
        if self.penalty is None:
            return True
        return self.calculated_at is not None and bool(self._provider_loads)

    @property
    def provider_loads(self) -> tuple[ProviderLoad, ...]:
        return tuple(self._provider_loads)

    @property
    def total_documentary_weight(self) -> Decimal:
        return sum(
            (load.documentary_weight for load in self._provider_loads), Decimal("0")
        )

    @property
    def max_unit_price(self) -> Decimal | None:
        if not self._provider_loads:
            return None
        return max(load.unit_price for load in self._provider_loads)

    @property
    def requires_recalculation(self) -> bool:
        """True until a calculation has run against the current load set."""
        return self.calculated_at is None

    @property
    def has_penalty(self) -> bool:
        return self.penalty is not None

    def add_provider_load(
        self,
        provider_code: str,
        product_code: str,
        doc_weight: NumberLike,
        unit_price: NumberLike,
    ) -> ProviderLoad:
        """
        Attach a provider's declared load to the settlement.

        Any previous calculation is discarded, since it no longer reflects
        the load set.

        Raises:
            InvalidValueError: If a code is blank or the weight or price is not
                greater than 0
        """
        load = ProviderLoad.create(provider_code, product_code, doc_weight, unit_price)

        self._provider_loads.append(load)
        self.penalty = None
        self.calculated_at = None
        self.mark_updated()

        self.add_domain_event(
            ProviderLoadAdded(
                aggregate_id=self.id,
                load_id=load.id,
                provider_code=load.provider_code,
                product_code=load.product_code,
                documentary_weight=load.documentary_weight,
                unit_price=load.unit_price,
            )
        )
        return load

    def calculate_settlement(self, at: datetime | None = None) -> ReconciliationResult:
        """
        Reconcile the physical net weight against the declared loads.

        Replaces the stored penalty with the outcome of this pass, or clears it
        when the shortfall is within tolerance or there is no shortfall.

        Returns:
            The reconciliation breakdown

        Raises:
            EmptyAggregateError: If no provider loads have been added
            InvalidValueError: If ``at`` has no timezone
        """
        if not self._provider_loads:
            raise EmptyAggregateError("TripSettlement", self.id, "provider loads")

        calculated_at = (
            DomainValidators.require_aware("calculated_at", at)
            if at is not None
            else utc_now()
        )
        result = reconcile(self.id, self.physical_net_weight, self._provider_loads)

        self.penalty = result.penalty
        self.calculated_at = calculated_at
        self.mark_updated()

        self.add_domain_event(
            SettlementCalculated(
                aggregate_id=self.id,
                total_documentary_weight=result.total_documentary_weight,
                difference=result.difference,
                penalty_id=result.penalty.id if result.penalty else None,
                penalty_amount=(
                    result.penalty.total_penalty_amount if result.penalty else None
                ),
            )
        )
        return result

    def reconciliation(self) -> ReconciliationResult | None:
        """Fresh reconciliation breakdown for the current loads, without mutating."""
        if not self._provider_loads:
            return None
        return reconcile(self.id, self.physical_net_weight, self._provider_loads)
