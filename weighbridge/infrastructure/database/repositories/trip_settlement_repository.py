"""
SQL trip settlement repository.

The settlement row carries the penalty columns inline; provider loads live
in their own table and keep their insertion order through a position column.
"""

import logging
from uuid import UUID

from sqlmodel import select

from weighbridge.domain.settlement.entities.trip_settlement import TripSettlement
from weighbridge.domain.settlement.repositories import TripSettlementRepository

from ..mappers import TripSettlementMapper
from ..models import ProviderLoadRecord, TripSettlementRecord
from .base import SqlRepositoryBase

logger = logging.getLogger(__name__)


class SqlTripSettlementRepository(SqlRepositoryBase, TripSettlementRepository):
    """Trip settlement repository backed by SQLModel tables."""

    entity_type = "TripSettlement"
    record_class = TripSettlementRecord

    def _load(self, record: TripSettlementRecord) -> TripSettlement:
        loads = self.session.exec(
            select(ProviderLoadRecord).where(
                ProviderLoadRecord.trip_settlement_id == record.id
            )
        ).all()
        return TripSettlementMapper.sql_to_domain(record, list(loads))

    def get_by_id(self, aggregate_id: UUID) -> TripSettlement | None:
        with self._reading("lookup"):
            record = self.session.get(
                TripSettlementRecord, aggregate_id, populate_existing=True
            )
            return self._load(record) if record is not None else None

    def get_by_weighing_process(self, weighing_process_id: UUID) -> list[TripSettlement]:
        with self._reading("lookup by weighing process"):
            records = self.session.exec(
                select(TripSettlementRecord)
                .where(TripSettlementRecord.weighing_process_id == weighing_process_id)
                .order_by(TripSettlementRecord.created_at)
            ).all()
            return [self._load(record) for record in records]

    def add(self, aggregate: TripSettlement) -> TripSettlement:
        with self._transaction("add", aggregate.id):
            record = TripSettlementMapper.domain_to_sql(aggregate)
            record.version = 1
            self.session.add(record)
            self.session.flush()
            self._sync_loads(aggregate)

        aggregate.version = 1
        logger.debug("Added TripSettlement %s", aggregate.id)
        return aggregate

    def save(self, aggregate: TripSettlement) -> TripSettlement:
        """
        Persist the settlement, its loads and its penalty atomically.

        Raises:
            ConcurrencyError: If the stored version differs from the aggregate's
            RepositoryError: If the settlement was never added or the write fails
        """
        with self._transaction("save", aggregate.id):
            new_version = self._claim_version(aggregate.id, aggregate.version)
            record = self.session.get(
                TripSettlementRecord, aggregate.id, populate_existing=True
            )
            TripSettlementMapper.update_record(record, aggregate)
            record.version = new_version
            self.session.add(record)
            self._sync_loads(aggregate)

        aggregate.version = new_version
        logger.debug(
            "Saved TripSettlement %s at version %s", aggregate.id, aggregate.version
        )
        return aggregate

    def _sync_loads(self, aggregate: TripSettlement) -> None:
        stored = set(
            self.session.exec(
                select(ProviderLoadRecord.id).where(
                    ProviderLoadRecord.trip_settlement_id == aggregate.id
                )
            ).all()
        )
        for position, load in enumerate(aggregate.provider_loads):
            if load.id not in stored:
                self.session.add(
                    TripSettlementMapper.load_to_sql(aggregate.id, position, load)
                )
