"""
Weighing-related Data Transfer Objects.

Request bodies for the weighing endpoints and the response shape of a
weighing process. Values are passed to the aggregate as-is; the domain
decides what is acceptable.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from weighbridge.domain.weighing.entities.hopper_discharge import HopperDischarge
from weighbridge.domain.weighing.entities.weighing_process import WeighingProcess
from weighbridge.domain.weighing.value_objects.enums import WeighingStatus, WeightType
from weighbridge.domain.weighing.value_objects.weight_reading import WeightReading


class StartWeighingProcessRequest(BaseModel):
    """DTO for opening a weighing process."""

    collection_trip_id: UUID = Field(..., description="Collection trip being weighed")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"collection_trip_id": "5f0c6a1e-8a43-4d7e-9b59-2f6f1c7f9a10"}
        }
    )


class RecordWeightRequest(BaseModel):
    """DTO for a gross or tare reading."""

    weight_kg: Decimal = Field(..., description="Measured weight in kilograms")
    measured_at: datetime | None = Field(
        None, description="Time of the measurement, defaults to now"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"weight_kg": "18250.5", "measured_at": "2026-03-02T08:15:00Z"}
        }
    )


class StartHopperDischargeRequest(BaseModel):
    """DTO for starting a hopper discharge."""

    hopper_id: str = Field(..., description="Hopper being discharged")
    started_at: datetime | None = None


class CompleteHopperDischargeRequest(BaseModel):
    """DTO for completing a hopper discharge."""

    completed_at: datetime | None = None


class WeightReadingResponse(BaseModel):
    id: UUID
    weight_type: WeightType
    value_kg: Decimal
    timestamp: datetime

    @classmethod
    def from_domain(cls, reading: WeightReading) -> "WeightReadingResponse":
        return cls(
            id=reading.id,
            weight_type=reading.weight_type,
            value_kg=reading.value_kg,
            timestamp=reading.timestamp,
        )


class HopperDischargeResponse(BaseModel):
    id: UUID
    hopper_id: str
    start_time: datetime
    end_time: datetime | None
    duration_seconds: float | None

    @classmethod
    def from_domain(cls, discharge: HopperDischarge) -> "HopperDischargeResponse":
        return cls(
            id=discharge.id,
            hopper_id=discharge.hopper_id,
            start_time=discharge.start_time,
            end_time=discharge.end_time,
            duration_seconds=discharge.duration_seconds,
        )


class WeighingProcessResponse(BaseModel):
    """DTO for weighing process responses."""

    id: UUID
    collection_trip_id: UUID
    status: WeighingStatus
    net_weight: Decimal | None
    weight_readings: list[WeightReadingResponse]
    discharges: list[HopperDischargeResponse]
    version: int
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, process: WeighingProcess) -> "WeighingProcessResponse":
        return cls(
            id=process.id,
            collection_trip_id=process.collection_trip_id,
            status=process.status,
            net_weight=process.net_weight,
            weight_readings=[
                WeightReadingResponse.from_domain(r) for r in process.weight_readings
            ],
            discharges=[
                HopperDischargeResponse.from_domain(d) for d in process.discharges
            ],
            version=process.version,
            created_at=process.created_at,
            updated_at=process.updated_at,
        )
