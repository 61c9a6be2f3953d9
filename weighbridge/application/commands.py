"""
Command definitions for the weighing and settlement workflows.

Commands represent write operations against one aggregate. They are
processed by the command handlers, which load the aggregate, apply exactly
one domain operation and persist the result.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from ..domain.shared.base import utc_now


class Command(BaseModel):
    """Base class for all commands."""

    model_config = ConfigDict(frozen=True)

    command_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=utc_now)
    correlation_id: str | None = None


# Weighing commands
class StartWeighingProcessCommand(Command):
    """Open a weighing process for a collection trip."""

    collection_trip_id: UUID


class RecordGrossWeightCommand(Command):
    """Capture the gross weight of the loaded vehicle."""

    weighing_process_id: UUID
    weight_kg: Decimal
    measured_at: datetime | None = None


class RecordTareWeightCommand(Command):
    """Capture the tare weight of the empty vehicle."""

    weighing_process_id: UUID
    weight_kg: Decimal
    measured_at: datetime | None = None


class StartHopperDischargeCommand(Command):
    """Start discharging a hopper."""

    weighing_process_id: UUID
    hopper_id: str
    started_at: datetime | None = None


class CompleteHopperDischargeCommand(Command):
    """Finish an open hopper discharge."""

    weighing_process_id: UUID
    discharge_id: UUID
    completed_at: datetime | None = None


# Settlement commands
class CreateTripSettlementCommand(Command):
    """Open a settlement with an explicitly supplied physical net weight."""

    weighing_process_id: UUID
    physical_net_weight: Decimal


class CreateTripSettlementFromWeighingCommand(Command):
    """Open a settlement using the net weight of a completed weighing process."""

    weighing_process_id: UUID


class AddProviderLoadCommand(Command):
    """Attach a provider's declared load to a settlement."""

    trip_settlement_id: UUID
    provider_code: str
    product_code: str
    documentary_weight: Decimal
    unit_price: Decimal


class CalculateTripSettlementCommand(Command):
    """Run the reconciliation for a settlement."""

    trip_settlement_id: UUID
