"""
Settlement API Routes.

Endpoints for opening trip settlements, declaring provider loads and running
the reconciliation.
"""

from uuid import UUID

from fastapi import APIRouter, status

from weighbridge.api.deps import (
    CorrelationIdDep,
    SettlementHandlerDep,
    SettlementRepositoryDep,
)
from weighbridge.application.commands import (
    AddProviderLoadCommand,
    CalculateTripSettlementCommand,
    CreateTripSettlementCommand,
    CreateTripSettlementFromWeighingCommand,
)
from weighbridge.application.dtos.settlement_dtos import (
    AddProviderLoadRequest,
    CreateTripSettlementRequest,
    ReconciliationResponse,
    SettlementCalculationResponse,
    TripSettlementResponse,
)

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.post(
    "",
    summary="Open trip settlement",
    response_model=TripSettlementResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_trip_settlement(
    request: CreateTripSettlementRequest,
    handler: SettlementHandlerDep,
    correlation_id: CorrelationIdDep,
) -> TripSettlementResponse:
    settlement = handler.handle(
        CreateTripSettlementCommand(
            weighing_process_id=request.weighing_process_id,
            physical_net_weight=request.physical_net_weight,
            correlation_id=correlation_id,
        )
    )
    return TripSettlementResponse.from_domain(settlement)


@router.post(
    "/from-weighing/{process_id}",
    summary="Open trip settlement from a weighing process",
    description="Use the net weight of a weighing process as the physical net weight.",
    response_model=TripSettlementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Weighing process not found"},
        409: {"description": "Tare weight not captured yet"},
    },
)
def create_trip_settlement_from_weighing(
    process_id: UUID,
    handler: SettlementHandlerDep,
    correlation_id: CorrelationIdDep,
) -> TripSettlementResponse:
    settlement = handler.handle(
        CreateTripSettlementFromWeighingCommand(
            weighing_process_id=process_id, correlation_id=correlation_id
        )
    )
    return TripSettlementResponse.from_domain(settlement)


@router.get(
    "",
    summary="List settlements of a weighing process",
    response_model=list[TripSettlementResponse],
)
def list_trip_settlements(
    weighing_process_id: UUID, repository: SettlementRepositoryDep
) -> list[TripSettlementResponse]:
    return [
        TripSettlementResponse.from_domain(settlement)
        for settlement in repository.get_by_weighing_process(weighing_process_id)
    ]


@router.get(
    "/{settlement_id}",
    summary="Get trip settlement",
    response_model=TripSettlementResponse,
    responses={404: {"description": "Trip settlement not found"}},
)
def get_trip_settlement(
    settlement_id: UUID, repository: SettlementRepositoryDep
) -> TripSettlementResponse:
    return TripSettlementResponse.from_domain(
        repository.get_by_id_required(settlement_id)
    )


@router.post(
    "/{settlement_id}/provider-loads",
    summary="Add provider load",
    response_model=TripSettlementResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_provider_load(
    settlement_id: UUID,
    request: AddProviderLoadRequest,
    handler: SettlementHandlerDep,
    correlation_id: CorrelationIdDep,
) -> TripSettlementResponse:
    settlement = handler.handle(
        AddProviderLoadCommand(
            trip_settlement_id=settlement_id,
            provider_code=request.provider_code,
            product_code=request.product_code,
            documentary_weight=request.documentary_weight,
            unit_price=request.unit_price,
            correlation_id=correlation_id,
        )
    )
    return TripSettlementResponse.from_domain(settlement)


@router.post(
    "/{settlement_id}/calculate",
    summary="Calculate settlement",
    description="Reconcile the physical net weight against the declared loads.",
    response_model=SettlementCalculationResponse,
    responses={409: {"description": "No provider loads declared"}},
)
def calculate_trip_settlement(
    settlement_id: UUID,
    handler: SettlementHandlerDep,
    correlation_id: CorrelationIdDep,
) -> SettlementCalculationResponse:
    settlement, result = handler.handle(
        CalculateTripSettlementCommand(
            trip_settlement_id=settlement_id, correlation_id=correlation_id
        )
    )
    return SettlementCalculationResponse(
        settlement=TripSettlementResponse.from_domain(settlement),
        reconciliation=ReconciliationResponse.from_domain(result),
    )
