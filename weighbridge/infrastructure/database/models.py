"""
SQLModel table definitions for the weighing and settlement aggregates.

Each aggregate is stored as one parent row plus child rows that point back
to it through a foreign key. The foreign key exists only here; the domain
children do not carry their parent's id. Decimals are stored as fixed-point
numerics at the domain scale and timestamps as timezone-aware UTC.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from weighbridge.domain.shared.validation import DECIMAL_PLACES
from weighbridge.domain.weighing.value_objects.enums import WeighingStatus, WeightType

MAX_DIGITS = 20
# Weight times price
AMOUNT_MAX_DIGITS = 30
AMOUNT_DECIMAL_PLACES = 2 * DECIMAL_PLACES
AWARE_DATETIME = DateTime(timezone=True)


class TimestampedModel(SQLModel):
    """Base model with timestamp fields."""

    created_at: datetime = Field(sa_type=AWARE_DATETIME)
    updated_at: datetime | None = Field(default=None, sa_type=AWARE_DATETIME)


class VersionedModel(TimestampedModel):
    """Base model for aggregate roots with an optimistic-concurrency token."""

    id: UUID = Field(primary_key=True)
    version: int = Field(default=1, ge=1)


# Weighing tables
class WeighingProcessRecord(VersionedModel, table=True):
    """Weighing process table definition."""

    __tablename__ = "weighing_processes"

    collection_trip_id: UUID = Field(index=True)
    status: WeighingStatus = Field(default=WeighingStatus.PENDING)
    net_weight: Decimal | None = Field(
        default=None, max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES
    )


class WeightReadingRecord(SQLModel, table=True):
    """Weight reading table definition."""

    __tablename__ = "weight_readings"

    id: UUID = Field(primary_key=True)
    weighing_process_id: UUID = Field(foreign_key="weighing_processes.id", index=True)
    position: int = Field(ge=0)
    weight_type: WeightType
    value_kg: Decimal = Field(max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES)
    timestamp: datetime = Field(sa_type=AWARE_DATETIME)


class HopperDischargeRecord(TimestampedModel, table=True):
    """Hopper discharge table definition."""

    __tablename__ = "hopper_discharges"

    id: UUID = Field(primary_key=True)
    weighing_process_id: UUID = Field(foreign_key="weighing_processes.id", index=True)
    position: int = Field(ge=0)
    hopper_id: str = Field(max_length=50)
    start_time: datetime = Field(sa_type=AWARE_DATETIME)
    end_time: datetime | None = Field(default=None, sa_type=AWARE_DATETIME)


# Settlement tables
class TripSettlementRecord(VersionedModel, table=True):
    """Trip settlement table definition with the penalty stored inline."""

    __tablename__ = "trip_settlements"

    # Reference to another aggregate, so no foreign key constraint
    weighing_process_id: UUID = Field(index=True)
    physical_net_weight: Decimal = Field(
        max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES
    )
    calculated_at: datetime | None = Field(default=None, sa_type=AWARE_DATETIME)

    penalty_id: UUID | None = None
    penalty_missing_weight: Decimal | None = Field(
        default=None, max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES
    )
    penalty_applied_max_price: Decimal | None = Field(
        default=None, max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES
    )
    penalty_total_amount: Decimal | None = Field(
        default=None, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES
    )


class ProviderLoadRecord(SQLModel, table=True):
    """Provider load table definition."""

    __tablename__ = "provider_loads"

    id: UUID = Field(primary_key=True)
    trip_settlement_id: UUID = Field(foreign_key="trip_settlements.id", index=True)
    position: int = Field(ge=0)
    provider_code: str = Field(max_length=50)
    product_code: str = Field(max_length=50)
    documentary_weight: Decimal = Field(
        max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES
    )
    unit_price: Decimal = Field(max_digits=MAX_DIGITS, decimal_places=DECIMAL_PLACES)
