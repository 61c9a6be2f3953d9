"""WeighingProcess aggregate root for a collection trip's weighbridge cycle."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import Field, PrivateAttr

from ...shared.base import AggregateRoot, utc_now
from ...shared.exceptions import (
    InvalidStateError,
    InvalidValueError,
    InvariantViolationError,
)
from ...shared.validation import DomainValidators, NumberLike
from ..events import (
    GrossWeightRecorded,
    HopperDischargeCompleted,
    HopperDischargeStarted,
    TareWeightRecorded,
    WeighingProcessStarted,
)
from ..value_objects.enums import WeighingStatus, WeightType
from ..value_objects.weight_reading import WeightReading
from .hopper_discharge import HopperDischarge


class WeighingProcess(AggregateRoot):
    """
    Weighing process aggregate root.

    Captures the gross reading of the loaded vehicle, then the tare reading of
    the empty vehicle, and derives the net (payload) weight from the two.
    Hopper discharges may be tracked while the gross weight is captured; they
    are independent of the weight capture and never change the status.

    Readings and discharges are append-only and exposed as tuples.
    """

    collection_trip_id: UUID
    status: WeighingStatus = Field(default=WeighingStatus.PENDING)
    net_weight: Decimal | None = Field(default=None, gt=0)

    _weight_readings: list[WeightReading] = PrivateAttr(default_factory=list)
    _discharges: list[HopperDischarge] = PrivateAttr(default_factory=list)

    @classmethod
    def create(
        cls, collection_trip_id: UUID, process_id: UUID | None = None
    ) -> "WeighingProcess":
        """
        Open a new weighing process in PENDING status.

        Raises:
            InvalidValueError: If either identifier is nil
        """
        trip_id = DomainValidators.require_identifier(
            "collection_trip_id", collection_trip_id
        )
        identifier = DomainValidators.require_identifier(
            "process_id", process_id or uuid4()
        )

        process = cls(id=identifier, collection_trip_id=trip_id)
        process.add_domain_event(
            WeighingProcessStarted(aggregate_id=process.id, collection_trip_id=trip_id)
        )
        return process

    @classmethod
    def restore(
        cls,
        weight_readings: Iterable[WeightReading] = (),
        discharges: Iterable[HopperDischarge] = (),
        **fields,
    ) -> "WeighingProcess":
        """Rebuild a persisted process together with its owned children."""
        process = cls(**fields)
        process._weight_readings = list(weight_readings)
        process._discharges = list(discharges)

        if not process.is_valid():
            raise InvariantViolationError(
                "CONSISTENT_WEIGHING_STATE",
                f"Stored state of weighing process {process.id} is inconsistent",
            )
        return process

    def is_valid(self) -> bool:
        """Validate the structural invariants of the process."""
        gross = [r for r in self._weight_readings if r.weight_type == WeightType.GROSS]
        tare = [r for r in self._weight_readings if r.weight_type == WeightType.TARE]
        if len(gross) > 1 or len(tare) > 1:
            return False

        if self.status.has_net_weight != (self.net_weight is not None):
            return False

        if self.net_weight is not None:
            if not gross or not tare:
                return False
            return self.net_weight == gross[0].value_kg - tare[0].value_kg

        return True

    @property
    def weight_readings(self) -> tuple[WeightReading, ...]:
        return tuple(self._weight_readings)

    @property
    def discharges(self) -> tuple[HopperDischarge, ...]:
        return tuple(self._discharges)

    @property
    def gross_reading(self) -> WeightReading | None:
        return self._find_reading(WeightType.GROSS)

    @property
    def tare_reading(self) -> WeightReading | None:
        return self._find_reading(WeightType.TARE)

    @property
    def open_discharges(self) -> tuple[HopperDischarge, ...]:
        """Discharges that have started but not yet completed."""
        return tuple(d for d in self._discharges if not d.is_completed)

    @property
    def has_net_weight(self) -> bool:
        return self.net_weight is not None

    def _find_reading(self, weight_type: WeightType) -> WeightReading | None:
        return next(
            (r for r in self._weight_readings if r.weight_type == weight_type), None
        )

    def _require_status(self, operation: str, expected: WeighingStatus) -> None:
        if self.status != expected:
            raise InvalidStateError(operation, self.status.value, expected.value)

    def record_gross_weight(
        self, kg: NumberLike, at: datetime | None = None
    ) -> WeightReading:
        """
        Record the gross weight of the loaded vehicle.

        Args:
            kg: Gross weight in kilograms
            at: Time of the measurement (defaults to now)

        Returns:
            The recorded reading

        Raises:
            InvalidStateError: If status is not PENDING
            InvalidValueError: If kg is not greater than 0 or at has no timezone
        """
        self._require_status("record gross weight", WeighingStatus.PENDING)

        reading = WeightReading.create(WeightType.GROSS, kg, timestamp=at)

        self._weight_readings.append(reading)
        self.status = WeighingStatus.GROSS_WEIGHT_CAPTURED
        self.mark_updated()

        self.add_domain_event(
            GrossWeightRecorded(
                aggregate_id=self.id,
                reading_id=reading.id,
                gross_weight_kg=reading.value_kg,
            )
        )
        return reading

    def record_tare_weight(
        self, kg: NumberLike, at: datetime | None = None
    ) -> WeightReading:
        """
        Record the tare weight of the empty vehicle and derive the net weight.

        Args:
            kg: Tare weight in kilograms
            at: Time of the measurement (defaults to now)

        Returns:
            The recorded reading

        Raises:
            InvalidStateError: If status is not GROSS_WEIGHT_CAPTURED
            InvalidValueError: If kg is not greater than 0 or at has no timezone
            InvariantViolationError: If no gross reading exists or tare is not
                strictly less than gross
        """
        self._require_status("record tare weight", WeighingStatus.GROSS_WEIGHT_CAPTURED)

        tare_kg = DomainValidators.require_positive("value_kg", kg)

        # The status alone does not guarantee the reading is present.
        gross = self.gross_reading
        if gross is None:
            raise InvariantViolationError(
                "GROSS_BEFORE_TARE",
                "Gross weight must be recorded before tare weight",
            )

        if tare_kg >= gross.value_kg:
            raise InvariantViolationError(
                "TARE_BELOW_GROSS",
                "Tare weight must be less than gross weight",
                {"gross_kg": str(gross.value_kg), "tare_kg": str(tare_kg)},
            )

        reading = WeightReading.create(WeightType.TARE, tare_kg, timestamp=at)

        self._weight_readings.append(reading)
        self.net_weight = gross.value_kg - tare_kg
        self.status = WeighingStatus.TARE_WEIGHT_CAPTURED
        self.mark_updated()

        self.add_domain_event(
            TareWeightRecorded(
                aggregate_id=self.id,
                reading_id=reading.id,
                tare_weight_kg=tare_kg,
                net_weight_kg=self.net_weight,
            )
        )
        return reading

    def start_hopper_discharge(
        self, hopper_id: str, at: datetime | None = None
    ) -> HopperDischarge:
        """
        Start discharging material from a hopper.

        Raises:
            InvalidStateError: If status is not GROSS_WEIGHT_CAPTURED
            InvalidValueError: If hopper_id is blank or at has no timezone
        """
        self._require_status(
            "start hopper discharge", WeighingStatus.GROSS_WEIGHT_CAPTURED
        )

        discharge = HopperDischarge.create(hopper_id, start_time=at)

        self._discharges.append(discharge)
        self.mark_updated()

        self.add_domain_event(
            HopperDischargeStarted(
                aggregate_id=self.id,
                discharge_id=discharge.id,
                hopper_id=discharge.hopper_id,
                start_time=discharge.start_time,
            )
        )
        return discharge

    def complete_hopper_discharge(
        self, discharge_id: UUID, at: datetime | None = None
    ) -> HopperDischarge:
        """
        Complete an open hopper discharge. The process status is unchanged.

        Raises:
            InvalidValueError: If no discharge with this id belongs to the
                process, or the end time has no timezone or precedes the start time
            InvalidStateError: If the discharge was already completed
        """
        discharge = next((d for d in self._discharges if d.id == discharge_id), None)
        if discharge is None:
            raise InvalidValueError(
                "discharge_id",
                discharge_id,
                f"No discharge with this id in weighing process {self.id}",
                "UNKNOWN_DISCHARGE",
            )

        discharge.complete(at or utc_now())
        self.mark_updated()

        self.add_domain_event(
            HopperDischargeCompleted(
                aggregate_id=self.id,
                discharge_id=discharge.id,
                hopper_id=discharge.hopper_id,
                end_time=discharge.end_time,
                duration_seconds=discharge.duration_seconds,
            )
        )
        return discharge
