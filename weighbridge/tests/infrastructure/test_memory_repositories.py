"""Tests for the in-memory repositories."""

from uuid import uuid4

import pytest

from weighbridge.domain.settlement.entities.trip_settlement import TripSettlement
from weighbridge.domain.shared.exceptions import (
    ConcurrencyError,
    RepositoryError,
    TripSettlementNotFoundError,
    WeighingProcessNotFoundError,
)
from weighbridge.domain.weighing.entities.weighing_process import WeighingProcess
from weighbridge.infrastructure.memory import (
    InMemoryTripSettlementRepository,
    InMemoryWeighingProcessRepository,
)


class TestInMemoryWeighingProcessRepository:
    def test_add_and_get(self, new_process):
        repository = InMemoryWeighingProcessRepository()

        repository.add(new_process)
        loaded = repository.get_by_id(new_process.id)

        assert loaded == new_process
        assert loaded is not new_process
        assert loaded.version == 1

    def test_stored_copy_is_isolated(self, new_process):
        repository = InMemoryWeighingProcessRepository()
        repository.add(new_process)

        new_process.record_gross_weight(100)

        assert repository.get_by_id(new_process.id).weight_readings == ()

    def test_get_unknown(self):
        repository = InMemoryWeighingProcessRepository()

        assert repository.get_by_id(uuid4()) is None
        with pytest.raises(WeighingProcessNotFoundError):
            repository.get_by_id_required(uuid4())

    def test_add_twice_rejected(self, new_process):
        repository = InMemoryWeighingProcessRepository()
        repository.add(new_process)

        with pytest.raises(RepositoryError):
            repository.add(new_process)

    def test_save_unknown_rejected(self, new_process):
        with pytest.raises(RepositoryError):
            InMemoryWeighingProcessRepository().save(new_process)

    def test_save_bumps_version(self, new_process):
        repository = InMemoryWeighingProcessRepository()
        repository.add(new_process)
        loaded = repository.get_by_id(new_process.id)
        loaded.record_gross_weight(100)

        repository.save(loaded)

        assert loaded.version == 2
        assert repository.get_by_id(new_process.id).gross_reading is not None

    def test_concurrent_writers(self, new_process):
        repository = InMemoryWeighingProcessRepository()
        repository.add(new_process)
        first = repository.get_by_id(new_process.id)
        second = repository.get_by_id(new_process.id)
        first.record_gross_weight(100)
        second.record_gross_weight(200)

        repository.save(first)
        with pytest.raises(ConcurrencyError) as exc_info:
            repository.save(second)

        assert exc_info.value.expected_version == 1
        assert exc_info.value.actual_version == 2
        assert repository.get_by_id(new_process.id).gross_reading.value_kg == 100

    def test_get_by_collection_trip(self, trip_id):
        repository = InMemoryWeighingProcessRepository()
        first = repository.add(WeighingProcess.create(trip_id))
        repository.add(WeighingProcess.create(uuid4()))

        found = repository.get_by_collection_trip(trip_id)

        assert [p.id for p in found] == [first.id]


class TestInMemoryTripSettlementRepository:
    def test_round_trip_with_penalty(self, settlement):
        repository = InMemoryTripSettlementRepository()
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)
        settlement.calculate_settlement()

        repository.add(settlement)
        loaded = repository.get_by_id_required(settlement.id)

        assert loaded.penalty == settlement.penalty
        assert loaded.provider_loads == settlement.provider_loads
        assert loaded.get_domain_events() == []

    def test_get_unknown(self):
        with pytest.raises(TripSettlementNotFoundError):
            InMemoryTripSettlementRepository().get_by_id_required(uuid4())

    def test_get_by_weighing_process(self):
        repository = InMemoryTripSettlementRepository()
        process_id = uuid4()
        settlement = repository.add(TripSettlement.create(process_id, 80))
        repository.add(TripSettlement.create(uuid4(), 80))

        assert [s.id for s in repository.get_by_weighing_process(process_id)] == [
            settlement.id
        ]
