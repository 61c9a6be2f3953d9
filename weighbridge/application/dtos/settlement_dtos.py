"""
Settlement-related Data Transfer Objects.

This module contains DTOs for opening settlements, declaring provider loads
and reporting the reconciliation outcome.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from weighbridge.domain.settlement.entities.trip_settlement import TripSettlement
from weighbridge.domain.settlement.services.reconciliation import ReconciliationResult
from weighbridge.domain.settlement.value_objects.driver_penalty import DriverPenalty
from weighbridge.domain.settlement.value_objects.provider_load import ProviderLoad


class CreateTripSettlementRequest(BaseModel):
    """DTO for opening a settlement with an explicit physical net weight."""

    weighing_process_id: UUID
    physical_net_weight: Decimal = Field(..., description="Net weight in kilograms")


class AddProviderLoadRequest(BaseModel):
    """DTO for declaring one provider's load."""

    provider_code: str = Field(..., description="Provider identifier")
    product_code: str = Field(..., description="Product identifier")
    documentary_weight: Decimal = Field(..., description="Declared weight in kilograms")
    unit_price: Decimal = Field(..., description="Price per kilogram")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "provider_code": "PRV-014",
                "product_code": "CU-SCRAP",
                "documentary_weight": "60",
                "unit_price": "5",
            }
        }
    )


class ProviderLoadResponse(BaseModel):
    id: UUID
    provider_code: str
    product_code: str
    documentary_weight: Decimal
    unit_price: Decimal

    @classmethod
    def from_domain(cls, load: ProviderLoad) -> "ProviderLoadResponse":
        return cls(
            id=load.id,
            provider_code=load.provider_code,
            product_code=load.product_code,
            documentary_weight=load.documentary_weight,
            unit_price=load.unit_price,
        )


class DriverPenaltyResponse(BaseModel):
    id: UUID
    missing_weight: Decimal
    applied_max_price: Decimal
    total_penalty_amount: Decimal

    @classmethod
    def from_domain(cls, penalty: DriverPenalty | None) -> "DriverPenaltyResponse | None":
        if penalty is None:
            return None
        return cls(
            id=penalty.id,
            missing_weight=penalty.missing_weight,
            applied_max_price=penalty.applied_max_price,
            total_penalty_amount=penalty.total_penalty_amount,
        )


class TripSettlementResponse(BaseModel):
    """DTO for trip settlement responses."""

    id: UUID
    weighing_process_id: UUID
    physical_net_weight: Decimal
    total_documentary_weight: Decimal
    max_unit_price: Decimal | None
    provider_loads: list[ProviderLoadResponse]
    penalty: DriverPenaltyResponse | None
    calculated_at: datetime | None
    requires_recalculation: bool
    version: int

    @classmethod
    def from_domain(cls, settlement: TripSettlement) -> "TripSettlementResponse":
        return cls(
            id=settlement.id,
            weighing_process_id=settlement.weighing_process_id,
            physical_net_weight=settlement.physical_net_weight,
            total_documentary_weight=settlement.total_documentary_weight,
            max_unit_price=settlement.max_unit_price,
            provider_loads=[
                ProviderLoadResponse.from_domain(load)
                for load in settlement.provider_loads
            ],
            penalty=DriverPenaltyResponse.from_domain(settlement.penalty),
            calculated_at=settlement.calculated_at,
            requires_recalculation=settlement.requires_recalculation,
            version=settlement.version,
        )


class ReconciliationResponse(BaseModel):
    """Breakdown of one reconciliation pass."""

    physical_net_weight: Decimal
    total_documentary_weight: Decimal
    difference: Decimal
    missing_weight: Decimal
    tolerance_amount: Decimal
    excess_missing_weight: Decimal
    max_unit_price: Decimal
    has_shortfall: bool
    within_tolerance: bool
    penalty: DriverPenaltyResponse | None

    @classmethod
    def from_domain(cls, result: ReconciliationResult) -> "ReconciliationResponse":
        return cls(
            physical_net_weight=result.physical_net_weight,
            total_documentary_weight=result.total_documentary_weight,
            difference=result.difference,
            missing_weight=result.missing_weight,
            tolerance_amount=result.tolerance_amount,
            excess_missing_weight=result.excess_missing_weight,
            max_unit_price=result.max_unit_price,
            has_shortfall=result.has_shortfall,
            within_tolerance=result.within_tolerance,
            penalty=DriverPenaltyResponse.from_domain(result.penalty),
        )


class SettlementCalculationResponse(BaseModel):
    settlement: TripSettlementResponse
    reconciliation: ReconciliationResponse
