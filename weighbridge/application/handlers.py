"""
Command handlers for the weighing and settlement workflows.

Each handler method loads one aggregate, applies one domain operation,
persists the aggregate and publishes its pending events. Domain errors
reach the caller unchanged; lookup and concurrency failures are logged on
the way out.
"""

import logging
from collections.abc import Callable
from typing import Any
from uuid import UUID

from ..domain.settlement.entities.trip_settlement import TripSettlement
from ..domain.settlement.repositories import TripSettlementRepository
from ..domain.settlement.services.reconciliation import ReconciliationResult
from ..domain.shared.exceptions import (
    ConcurrencyError,
    InvalidStateError,
    NotFoundError,
)
from ..domain.weighing.entities.weighing_process import WeighingProcess
from ..domain.weighing.repositories import WeighingProcessRepository
from ..domain.weighing.value_objects.enums import WeighingStatus
from .commands import (
    AddProviderLoadCommand,
    CalculateTripSettlementCommand,
    Command,
    CompleteHopperDischargeCommand,
    CreateTripSettlementCommand,
    CreateTripSettlementFromWeighingCommand,
    RecordGrossWeightCommand,
    RecordTareWeightCommand,
    StartHopperDischargeCommand,
    StartWeighingProcessCommand,
)
from .events import DomainEventPublisher

logger = logging.getLogger(__name__)


class CommandHandler:
    """Base class routing commands to handler methods by command type."""

    def __init__(self, publisher: DomainEventPublisher | None = None) -> None:
        self.publisher = publisher or DomainEventPublisher()
        self._routes: dict[type[Command], Callable[[Any], Any]] = {}

    def can_handle(self, command: Command) -> bool:
        """Check if this handler can handle the command."""
        return type(command) in self._routes

    def handle(self, command: Command) -> Any:
        """Dispatch a command to its handler method."""
        route = self._routes.get(type(command))
        if route is None:
            raise TypeError(f"Unhandled command type: {type(command).__name__}")

        logger.info(
            "Handling %s (command_id=%s, correlation_id=%s)",
            type(command).__name__,
            command.command_id,
            command.correlation_id,
        )
        try:
            return route(command)
        except (NotFoundError, ConcurrencyError) as e:
            logger.warning("%s rejected: %s", type(command).__name__, e.message)
            raise


class WeighingCommandHandler(CommandHandler):
    """Handles commands that drive a weighing process."""

    def __init__(
        self,
        repository: WeighingProcessRepository,
        publisher: DomainEventPublisher | None = None,
    ) -> None:
        super().__init__(publisher)
        self.repository = repository
        self._routes = {
            StartWeighingProcessCommand: self.start_weighing_process,
            RecordGrossWeightCommand: self.record_gross_weight,
            RecordTareWeightCommand: self.record_tare_weight,
            StartHopperDischargeCommand: self.start_hopper_discharge,
            CompleteHopperDischargeCommand: self.complete_hopper_discharge,
        }

    def _apply(
        self, process_id: UUID, operation: Callable[[WeighingProcess], object]
    ) -> WeighingProcess:
        process = self.repository.get_by_id_required(process_id)
        operation(process)
        saved = self.repository.save(process)
        self.publisher.publish_pending(process)
        return saved

    def start_weighing_process(
        self, command: StartWeighingProcessCommand
    ) -> WeighingProcess:
        process = WeighingProcess.create(command.collection_trip_id)
        saved = self.repository.add(process)
        self.publisher.publish_pending(process)
        logger.info(
            "Weighing process %s opened for trip %s",
            process.id,
            command.collection_trip_id,
        )
        return saved

    def record_gross_weight(self, command: RecordGrossWeightCommand) -> WeighingProcess:
        return self._apply(
            command.weighing_process_id,
            lambda p: p.record_gross_weight(command.weight_kg, at=command.measured_at),
        )

    def record_tare_weight(self, command: RecordTareWeightCommand) -> WeighingProcess:
        process = self._apply(
            command.weighing_process_id,
            lambda p: p.record_tare_weight(command.weight_kg, at=command.measured_at),
        )
        logger.info(
            "Weighing process %s net weight %s kg", process.id, process.net_weight
        )
        return process

    def start_hopper_discharge(
        self, command: StartHopperDischargeCommand
    ) -> WeighingProcess:
        return self._apply(
            command.weighing_process_id,
            lambda p: p.start_hopper_discharge(command.hopper_id, at=command.started_at),
        )

    def complete_hopper_discharge(
        self, command: CompleteHopperDischargeCommand
    ) -> WeighingProcess:
        return self._apply(
            command.weighing_process_id,
            lambda p: p.complete_hopper_discharge(
                command.discharge_id, at=command.completed_at
            ),
        )


class SettlementCommandHandler(CommandHandler):
    """
    Handles commands against trip settlements.

    Also bridges the two aggregates: a settlement can be opened from a
    weighing process, in which case the process's net weight is read here and
    passed to the settlement as its physical net weight.
    """

    def __init__(
        self,
        repository: TripSettlementRepository,
        weighing_repository: WeighingProcessRepository | None = None,
        publisher: DomainEventPublisher | None = None,
    ) -> None:
        super().__init__(publisher)
        self.repository = repository
        self.weighing_repository = weighing_repository
        self._routes = {
            CreateTripSettlementCommand: self.create_trip_settlement,
            CreateTripSettlementFromWeighingCommand: self.create_from_weighing,
            AddProviderLoadCommand: self.add_provider_load,
            CalculateTripSettlementCommand: self.calculate_trip_settlement,
        }

    def _open(self, settlement: TripSettlement) -> TripSettlement:
        saved = self.repository.add(settlement)
        self.publisher.publish_pending(settlement)
        logger.info(
            "Trip settlement %s opened for weighing process %s (%s kg)",
            settlement.id,
            settlement.weighing_process_id,
            settlement.physical_net_weight,
        )
        return saved

    def create_trip_settlement(
        self, command: CreateTripSettlementCommand
    ) -> TripSettlement:
        return self._open(
            TripSettlement.create(
                command.weighing_process_id, command.physical_net_weight
            )
        )

    def create_from_weighing(
        self, command: CreateTripSettlementFromWeighingCommand
    ) -> TripSettlement:
        """
        Open a settlement from a weighing process that has a net weight.

        Raises:
            WeighingProcessNotFoundError: If the process does not exist
            InvalidStateError: If the tare weight has not been captured yet
        """
        if self.weighing_repository is None:
            raise RuntimeError("A weighing repository is required for this command")

        process = self.weighing_repository.get_by_id_required(
            command.weighing_process_id
        )
        if process.net_weight is None:
            raise InvalidStateError(
                "open trip settlement",
                process.status.value,
                WeighingStatus.TARE_WEIGHT_CAPTURED.value,
            )

        return self._open(TripSettlement.create(process.id, process.net_weight))

    def add_provider_load(self, command: AddProviderLoadCommand) -> TripSettlement:
        settlement = self.repository.get_by_id_required(command.trip_settlement_id)
        settlement.add_provider_load(
            command.provider_code,
            command.product_code,
            command.documentary_weight,
            command.unit_price,
        )
        saved = self.repository.save(settlement)
        self.publisher.publish_pending(settlement)
        return saved

    def calculate_trip_settlement(
        self, command: CalculateTripSettlementCommand
    ) -> tuple[TripSettlement, ReconciliationResult]:
        settlement = self.repository.get_by_id_required(command.trip_settlement_id)
        result = settlement.calculate_settlement()
        saved = self.repository.save(settlement)
        self.publisher.publish_pending(settlement)

        if result.penalty is not None:
            logger.info(
                "Trip settlement %s penalty %s (missing %s kg at %s)",
                settlement.id,
                result.penalty.total_penalty_amount,
                result.penalty.missing_weight,
                result.penalty.applied_max_price,
            )
        else:
            logger.info("Trip settlement %s within tolerance", settlement.id)
        return saved, result
