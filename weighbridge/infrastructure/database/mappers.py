"""
Mappers between the domain aggregates and their SQLModel rows.

Timestamps are written as timezone-aware UTC. Backends that drop the offset
on the way out, such as SQLite, get the UTC zone attached again on load.
"""

from datetime import datetime, timezone

from weighbridge.domain.settlement.entities.trip_settlement import TripSettlement
from weighbridge.domain.settlement.value_objects.driver_penalty import DriverPenalty
from weighbridge.domain.settlement.value_objects.provider_load import ProviderLoad
from weighbridge.domain.weighing.entities.hopper_discharge import HopperDischarge
from weighbridge.domain.weighing.entities.weighing_process import WeighingProcess
from weighbridge.domain.weighing.value_objects.enums import WeighingStatus, WeightType
from weighbridge.domain.weighing.value_objects.weight_reading import WeightReading

from .models import (
    HopperDischargeRecord,
    ProviderLoadRecord,
    TripSettlementRecord,
    WeighingProcessRecord,
    WeightReadingRecord,
)


def to_storage_time(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    return value.astimezone(timezone.utc)


def from_storage_time(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class WeighingProcessMapper:
    """Converts weighing processes to and from their table rows."""

    @staticmethod
    def update_record(
        record: WeighingProcessRecord, process: WeighingProcess
    ) -> WeighingProcessRecord:
        record.collection_trip_id = process.collection_trip_id
        record.status = process.status
        record.net_weight = process.net_weight
        record.version = process.version
        record.created_at = to_storage_time(process.created_at)
        record.updated_at = to_storage_time(process.updated_at)
        return record

    @staticmethod
    def domain_to_sql(process: WeighingProcess) -> WeighingProcessRecord:
        return WeighingProcessMapper.update_record(
            WeighingProcessRecord(
                id=process.id,
                collection_trip_id=process.collection_trip_id,
                created_at=to_storage_time(process.created_at),
            ),
            process,
        )

    @staticmethod
    def reading_to_sql(
        process_id, position: int, reading: WeightReading
    ) -> WeightReadingRecord:
        return WeightReadingRecord(
            id=reading.id,
            weighing_process_id=process_id,
            position=position,
            weight_type=reading.weight_type,
            value_kg=reading.value_kg,
            timestamp=to_storage_time(reading.timestamp),
        )

    @staticmethod
    def update_discharge_record(
        record: HopperDischargeRecord, discharge: HopperDischarge
    ) -> HopperDischargeRecord:
        record.hopper_id = discharge.hopper_id
        record.start_time = to_storage_time(discharge.start_time)
        record.end_time = to_storage_time(discharge.end_time)
        record.created_at = to_storage_time(discharge.created_at)
        record.updated_at = to_storage_time(discharge.updated_at)
        return record

    @staticmethod
    def discharge_to_sql(
        process_id, position: int, discharge: HopperDischarge
    ) -> HopperDischargeRecord:
        return WeighingProcessMapper.update_discharge_record(
            HopperDischargeRecord(
                id=discharge.id,
                weighing_process_id=process_id,
                position=position,
                hopper_id=discharge.hopper_id,
                start_time=to_storage_time(discharge.start_time),
                created_at=to_storage_time(discharge.created_at),
            ),
            discharge,
        )

    @staticmethod
    def sql_to_domain(
        record: WeighingProcessRecord,
        readings: list[WeightReadingRecord],
        discharges: list[HopperDischargeRecord],
    ) -> WeighingProcess:
        """
        Rebuild the aggregate from its row and child rows.

        Raises:
            InvariantViolationError: If the stored rows are inconsistent
        """
        return WeighingProcess.restore(
            weight_readings=[
                WeightReading(
                    id=r.id,
                    weight_type=WeightType(r.weight_type),
                    value_kg=r.value_kg,
                    timestamp=from_storage_time(r.timestamp),
                )
                for r in sorted(readings, key=lambda r: r.position)
            ],
            discharges=[
                HopperDischarge(
                    id=d.id,
                    hopper_id=d.hopper_id,
                    start_time=from_storage_time(d.start_time),
                    end_time=from_storage_time(d.end_time),
                    created_at=from_storage_time(d.created_at),
                    updated_at=from_storage_time(d.updated_at),
                )
                for d in sorted(discharges, key=lambda d: d.position)
            ],
            id=record.id,
            collection_trip_id=record.collection_trip_id,
            status=WeighingStatus(record.status),
            net_weight=record.net_weight,
            version=record.version,
            created_at=from_storage_time(record.created_at),
            updated_at=from_storage_time(record.updated_at),
        )


class TripSettlementMapper:
    """Converts trip settlements to and from their table rows."""

    @staticmethod
    def update_record(
        record: TripSettlementRecord, settlement: TripSettlement
    ) -> TripSettlementRecord:
        penalty = settlement.penalty

        record.weighing_process_id = settlement.weighing_process_id
        record.physical_net_weight = settlement.physical_net_weight
        record.calculated_at = to_storage_time(settlement.calculated_at)
        record.penalty_id = penalty.id if penalty else None
        record.penalty_missing_weight = penalty.missing_weight if penalty else None
        record.penalty_applied_max_price = (
            penalty.applied_max_price if penalty else None
        )
        record.penalty_total_amount = penalty.total_penalty_amount if penalty else None
        record.version = settlement.version
        record.created_at = to_storage_time(settlement.created_at)
        record.updated_at = to_storage_time(settlement.updated_at)
        return record

    @staticmethod
    def domain_to_sql(settlement: TripSettlement) -> TripSettlementRecord:
        return TripSettlementMapper.update_record(
            TripSettlementRecord(
                id=settlement.id,
                weighing_process_id=settlement.weighing_process_id,
                physical_net_weight=settlement.physical_net_weight,
                created_at=to_storage_time(settlement.created_at),
            ),
            settlement,
        )

    @staticmethod
    def load_to_sql(settlement_id, position: int, load: ProviderLoad) -> ProviderLoadRecord:
        return ProviderLoadRecord(
            id=load.id,
            trip_settlement_id=settlement_id,
            position=position,
            provider_code=load.provider_code,
            product_code=load.product_code,
            documentary_weight=load.documentary_weight,
            unit_price=load.unit_price,
        )

    @staticmethod
    def sql_to_domain(
        record: TripSettlementRecord, loads: list[ProviderLoadRecord]
    ) -> TripSettlement:
        penalty = None
        if record.penalty_id is not None:
            penalty = DriverPenalty(
                id=record.penalty_id,
                missing_weight=record.penalty_missing_weight,
                applied_max_price=record.penalty_applied_max_price,
            )

        return TripSettlement.restore(
            provider_loads=[
                ProviderLoad(
                    id=row.id,
                    provider_code=row.provider_code,
                    product_code=row.product_code,
                    documentary_weight=row.documentary_weight,
                    unit_price=row.unit_price,
                )
                for row in sorted(loads, key=lambda row: row.position)
            ],
            id=record.id,
            weighing_process_id=record.weighing_process_id,
            physical_net_weight=record.physical_net_weight,
            penalty=penalty,
            calculated_at=from_storage_time(record.calculated_at),
            version=record.version,
            created_at=from_storage_time(record.created_at),
            updated_at=from_storage_time(record.updated_at),
        )
