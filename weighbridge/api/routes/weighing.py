"""
Weighing API Routes.

Endpoints that drive a weighing process through gross and tare capture and
track hopper discharges.
"""

from uuid import UUID

from fastapi import APIRouter, status

from weighbridge.api.deps import (
    CorrelationIdDep,
    WeighingHandlerDep,
    WeighingRepositoryDep,
)
from weighbridge.application.commands import (
    CompleteHopperDischargeCommand,
    RecordGrossWeightCommand,
    RecordTareWeightCommand,
    StartHopperDischargeCommand,
    StartWeighingProcessCommand,
)
from weighbridge.application.dtos.weighing_dtos import (
    CompleteHopperDischargeRequest,
    RecordWeightRequest,
    StartHopperDischargeRequest,
    StartWeighingProcessRequest,
    WeighingProcessResponse,
)

router = APIRouter(prefix="/weighing-processes", tags=["weighing"])


@router.post(
    "",
    summary="Open weighing process",
    response_model=WeighingProcessResponse,
    status_code=status.HTTP_201_CREATED,
)
def start_weighing_process(
    request: StartWeighingProcessRequest,
    handler: WeighingHandlerDep,
    correlation_id: CorrelationIdDep,
) -> WeighingProcessResponse:
    process = handler.handle(
        StartWeighingProcessCommand(
            collection_trip_id=request.collection_trip_id,
            correlation_id=correlation_id,
        )
    )
    return WeighingProcessResponse.from_domain(process)


@router.get(
    "",
    summary="List weighing processes of a collection trip",
    response_model=list[WeighingProcessResponse],
)
def list_weighing_processes(
    collection_trip_id: UUID, repository: WeighingRepositoryDep
) -> list[WeighingProcessResponse]:
    return [
        WeighingProcessResponse.from_domain(process)
        for process in repository.get_by_collection_trip(collection_trip_id)
    ]


@router.get(
    "/{process_id}",
    summary="Get weighing process",
    response_model=WeighingProcessResponse,
    responses={404: {"description": "Weighing process not found"}},
)
def get_weighing_process(
    process_id: UUID, repository: WeighingRepositoryDep
) -> WeighingProcessResponse:
    return WeighingProcessResponse.from_domain(
        repository.get_by_id_required(process_id)
    )


@router.post(
    "/{process_id}/gross-weight",
    summary="Record gross weight",
    response_model=WeighingProcessResponse,
    responses={
        409: {"description": "Process is not waiting for a gross weight"},
        422: {"description": "Weight is not positive"},
    },
)
def record_gross_weight(
    process_id: UUID,
    request: RecordWeightRequest,
    handler: WeighingHandlerDep,
    correlation_id: CorrelationIdDep,
) -> WeighingProcessResponse:
    process = handler.handle(
        RecordGrossWeightCommand(
            weighing_process_id=process_id,
            weight_kg=request.weight_kg,
            measured_at=request.measured_at,
            correlation_id=correlation_id,
        )
    )
    return WeighingProcessResponse.from_domain(process)


@router.post(
    "/{process_id}/tare-weight",
    summary="Record tare weight",
    description="Record the empty vehicle's weight and derive the net weight.",
    response_model=WeighingProcessResponse,
    responses={
        409: {"description": "Gross weight missing or tare not below gross"},
        422: {"description": "Weight is not positive"},
    },
)
def record_tare_weight(
    process_id: UUID,
    request: RecordWeightRequest,
    handler: WeighingHandlerDep,
    correlation_id: CorrelationIdDep,
) -> WeighingProcessResponse:
    process = handler.handle(
        RecordTareWeightCommand(
            weighing_process_id=process_id,
            weight_kg=request.weight_kg,
            measured_at=request.measured_at,
            correlation_id=correlation_id,
        )
    )
    return WeighingProcessResponse.from_domain(process)


@router.post(
    "/{process_id}/discharges",
    summary="Start hopper discharge",
    response_model=WeighingProcessResponse,
    status_code=status.HTTP_201_CREATED,
)
def start_hopper_discharge(
    process_id: UUID,
    request: StartHopperDischargeRequest,
    handler: WeighingHandlerDep,
    correlation_id: CorrelationIdDep,
) -> WeighingProcessResponse:
    process = handler.handle(
        StartHopperDischargeCommand(
            weighing_process_id=process_id,
            hopper_id=request.hopper_id,
            started_at=request.started_at,
            correlation_id=correlation_id,
        )
    )
    return WeighingProcessResponse.from_domain(process)


@router.post(
    "/{process_id}/discharges/{discharge_id}/complete",
    summary="Complete hopper discharge",
    response_model=WeighingProcessResponse,
)
def complete_hopper_discharge(
    process_id: UUID,
    discharge_id: UUID,
    handler: WeighingHandlerDep,
    correlation_id: CorrelationIdDep,
    request: CompleteHopperDischargeRequest | None = None,
) -> WeighingProcessResponse:
    process = handler.handle(
        CompleteHopperDischargeCommand(
            weighing_process_id=process_id,
            discharge_id=discharge_id,
            completed_at=request.completed_at if request else None,
            correlation_id=correlation_id,
        )
    )
    return WeighingProcessResponse.from_domain(process)
