"""
In-memory repository implementations.

Aggregates are stored as deep copies so that callers can only change stored
state through ``add`` and ``save``, the same way a database-backed
repository behaves.
"""

import copy
import logging
import threading
from typing import Generic
from uuid import UUID

from ...domain.settlement.entities.trip_settlement import TripSettlement
from ...domain.settlement.repositories import TripSettlementRepository
from ...domain.shared.base import AggregateT
from ...domain.shared.exceptions import ConcurrencyError, RepositoryError
from ...domain.weighing.entities.weighing_process import WeighingProcess
from ...domain.weighing.repositories import WeighingProcessRepository

logger = logging.getLogger(__name__)


class InMemoryStore(Generic[AggregateT]):
    """Versioned dictionary of aggregates guarded by a lock."""

    def __init__(self, entity_type: str) -> None:
        self.entity_type = entity_type
        self._items: dict[UUID, AggregateT] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _snapshot(aggregate: AggregateT) -> AggregateT:
        clone = copy.deepcopy(aggregate)
        clone.clear_domain_events()
        return clone

    def get(self, aggregate_id: UUID) -> AggregateT | None:
        with self._lock:
            stored = self._items.get(aggregate_id)
            return self._snapshot(stored) if stored is not None else None

    def values(self) -> list[AggregateT]:
        with self._lock:
            return [self._snapshot(item) for item in self._items.values()]

    def add(self, aggregate: AggregateT) -> AggregateT:
        with self._lock:
            if aggregate.id in self._items:
                raise RepositoryError(
                    f"{self.entity_type} {aggregate.id} already exists",
                    {"entity_id": str(aggregate.id)},
                )
            aggregate.version = 1
            self._items[aggregate.id] = self._snapshot(aggregate)
            logger.debug("Added %s %s", self.entity_type, aggregate.id)
            return aggregate

    def save(self, aggregate: AggregateT) -> AggregateT:
        with self._lock:
            stored = self._items.get(aggregate.id)
            if stored is None:
                raise RepositoryError(
                    f"{self.entity_type} {aggregate.id} has not been added",
                    {"entity_id": str(aggregate.id)},
                )
            if stored.version != aggregate.version:
                raise ConcurrencyError(
                    self.entity_type, aggregate.id, aggregate.version, stored.version
                )
            aggregate.version += 1
            self._items[aggregate.id] = self._snapshot(aggregate)
            logger.debug(
                "Saved %s %s at version %s",
                self.entity_type,
                aggregate.id,
                aggregate.version,
            )
            return aggregate

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class InMemoryWeighingProcessRepository(WeighingProcessRepository):
    """Weighing process repository kept in process memory."""

    def __init__(self) -> None:
        self._store: InMemoryStore[WeighingProcess] = InMemoryStore("WeighingProcess")

    def get_by_id(self, aggregate_id: UUID) -> WeighingProcess | None:
        return self._store.get(aggregate_id)

    def get_by_collection_trip(self, collection_trip_id: UUID) -> list[WeighingProcess]:
        return [
            p for p in self._store.values() if p.collection_trip_id == collection_trip_id
        ]

    def add(self, aggregate: WeighingProcess) -> WeighingProcess:
        return self._store.add(aggregate)

    def save(self, aggregate: WeighingProcess) -> WeighingProcess:
        return self._store.save(aggregate)


class InMemoryTripSettlementRepository(TripSettlementRepository):
    """Trip settlement repository kept in process memory."""

    def __init__(self) -> None:
        self._store: InMemoryStore[TripSettlement] = InMemoryStore("TripSettlement")

    def get_by_id(self, aggregate_id: UUID) -> TripSettlement | None:
        return self._store.get(aggregate_id)

    def get_by_weighing_process(self, weighing_process_id: UUID) -> list[TripSettlement]:
        return [
            s
            for s in self._store.values()
            if s.weighing_process_id == weighing_process_id
        ]

    def add(self, aggregate: TripSettlement) -> TripSettlement:
        return self._store.add(aggregate)

    def save(self, aggregate: TripSettlement) -> TripSettlement:
        return self._store.save(aggregate)
