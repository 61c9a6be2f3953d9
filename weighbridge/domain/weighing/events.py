"""Domain events raised by the weighing process aggregate."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from ..shared.base import DomainEvent


class WeighingProcessStarted(DomainEvent):
    """Event raised when a weighing process is opened for a collection trip."""

    collection_trip_id: UUID


class GrossWeightRecorded(DomainEvent):
    """Event raised when the gross weight is captured."""

    reading_id: UUID
    gross_weight_kg: Decimal


class TareWeightRecorded(DomainEvent):
    """Event raised when the tare weight is captured and net weight derived."""

    reading_id: UUID
    tare_weight_kg: Decimal
    net_weight_kg: Decimal


class HopperDischargeStarted(DomainEvent):
    """Event raised when material starts discharging from a hopper."""

    discharge_id: UUID
    hopper_id: str
    start_time: datetime


class HopperDischargeCompleted(DomainEvent):
    """Event raised when a hopper discharge finishes."""

    discharge_id: UUID
    hopper_id: str
    end_time: datetime
    duration_seconds: float
