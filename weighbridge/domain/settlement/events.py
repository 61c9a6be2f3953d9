"""Domain events raised by the trip settlement aggregate."""

from decimal import Decimal
from uuid import UUID

from ..shared.base import DomainEvent


class TripSettlementCreated(DomainEvent):
    """Event raised when a settlement is opened against a weighing process."""

    weighing_process_id: UUID
    physical_net_weight: Decimal


class ProviderLoadAdded(DomainEvent):
    """Event raised when a provider load is attached to a settlement."""

    load_id: UUID
    provider_code: str
    product_code: str
    documentary_weight: Decimal
    unit_price: Decimal


class SettlementCalculated(DomainEvent):
    """Event raised after a reconciliation pass."""

    total_documentary_weight: Decimal
    difference: Decimal
    penalty_id: UUID | None = None
    penalty_amount: Decimal | None = None
