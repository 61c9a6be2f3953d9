"""
SQL weighing process repository.

Persists a weighing process row together with its weight readings and
hopper discharges in one transaction.
"""

import logging
from uuid import UUID

from sqlmodel import select

from weighbridge.domain.weighing.entities.weighing_process import WeighingProcess
from weighbridge.domain.weighing.repositories import WeighingProcessRepository

from ..mappers import WeighingProcessMapper
from ..models import HopperDischargeRecord, WeighingProcessRecord, WeightReadingRecord
from .base import SqlRepositoryBase

logger = logging.getLogger(__name__)


class SqlWeighingProcessRepository(SqlRepositoryBase, WeighingProcessRepository):
    """Weighing process repository backed by SQLModel tables."""

    entity_type = "WeighingProcess"
    record_class = WeighingProcessRecord

    def _load(self, record: WeighingProcessRecord) -> WeighingProcess:
        readings = self.session.exec(
            select(WeightReadingRecord).where(
                WeightReadingRecord.weighing_process_id == record.id
            )
        ).all()
        discharges = self.session.exec(
            select(HopperDischargeRecord).where(
                HopperDischargeRecord.weighing_process_id == record.id
            )
        ).all()
        return WeighingProcessMapper.sql_to_domain(
            record, list(readings), list(discharges)
        )

    def get_by_id(self, aggregate_id: UUID) -> WeighingProcess | None:
        with self._reading("lookup"):
            record = self.session.get(
                WeighingProcessRecord, aggregate_id, populate_existing=True
            )
            return self._load(record) if record is not None else None

    def get_by_collection_trip(self, collection_trip_id: UUID) -> list[WeighingProcess]:
        with self._reading("lookup by collection trip"):
            records = self.session.exec(
                select(WeighingProcessRecord)
                .where(WeighingProcessRecord.collection_trip_id == collection_trip_id)
                .order_by(WeighingProcessRecord.created_at)
            ).all()
            return [self._load(record) for record in records]

    def add(self, aggregate: WeighingProcess) -> WeighingProcess:
        """
        Insert a new weighing process with its children.

        Raises:
            RepositoryError: If the id already exists or the insert fails
        """
        with self._transaction("add", aggregate.id):
            record = WeighingProcessMapper.domain_to_sql(aggregate)
            record.version = 1
            self.session.add(record)
            self.session.flush()
            self._sync_children(aggregate)

        aggregate.version = 1
        logger.debug("Added WeighingProcess %s", aggregate.id)
        return aggregate

    def save(self, aggregate: WeighingProcess) -> WeighingProcess:
        """
        Persist the current state of an existing weighing process.

        Raises:
            ConcurrencyError: If the stored version differs from the aggregate's
            RepositoryError: If the process was never added or the write fails
        """
        with self._transaction("save", aggregate.id):
            new_version = self._claim_version(aggregate.id, aggregate.version)
            record = self.session.get(
                WeighingProcessRecord, aggregate.id, populate_existing=True
            )
            WeighingProcessMapper.update_record(record, aggregate)
            record.version = new_version
            self.session.add(record)
            self._sync_children(aggregate)

        aggregate.version = new_version
        logger.debug(
            "Saved WeighingProcess %s at version %s", aggregate.id, aggregate.version
        )
        return aggregate

    def _sync_children(self, aggregate: WeighingProcess) -> None:
        # Readings are append-only; discharges may gain an end time.
        stored_readings = set(
            self.session.exec(
                select(WeightReadingRecord.id).where(
                    WeightReadingRecord.weighing_process_id == aggregate.id
                )
            ).all()
        )
        for position, reading in enumerate(aggregate.weight_readings):
            if reading.id not in stored_readings:
                self.session.add(
                    WeighingProcessMapper.reading_to_sql(aggregate.id, position, reading)
                )

        stored_discharges = {
            row.id: row
            for row in self.session.exec(
                select(HopperDischargeRecord).where(
                    HopperDischargeRecord.weighing_process_id == aggregate.id
                )
            ).all()
        }
        for position, discharge in enumerate(aggregate.discharges):
            row = stored_discharges.get(discharge.id)
            if row is None:
                self.session.add(
                    WeighingProcessMapper.discharge_to_sql(
                        aggregate.id, position, discharge
                    )
                )
            else:
                self.session.add(
                    WeighingProcessMapper.update_discharge_record(row, discharge)
                )
