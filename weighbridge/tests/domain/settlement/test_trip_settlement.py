"""Tests for the TripSettlement aggregate."""

from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from weighbridge.domain.settlement.entities.trip_settlement import TripSettlement
from weighbridge.domain.settlement.events import (
    ProviderLoadAdded,
    SettlementCalculated,
    TripSettlementCreated,
)
from weighbridge.domain.settlement.value_objects.driver_penalty import DriverPenalty
from weighbridge.domain.shared.exceptions import (
    EmptyAggregateError,
    InvalidValueError,
    InvariantViolationError,
)


class TestTripSettlementCreation:
    def test_create(self):
        process_id = uuid4()

        settlement = TripSettlement.create(process_id, "80.5")

        assert settlement.weighing_process_id == process_id
        assert settlement.physical_net_weight == Decimal("80.5")
        assert settlement.provider_loads == ()
        assert settlement.penalty is None
        assert settlement.calculated_at is None
        assert settlement.requires_recalculation
        assert settlement.max_unit_price is None
        assert settlement.total_documentary_weight == Decimal("0")

    def test_created_event(self):
        settlement = TripSettlement.create(uuid4(), 80)

        (event,) = settlement.get_domain_events()
        assert isinstance(event, TripSettlementCreated)
        assert event.physical_net_weight == Decimal("80")

    @pytest.mark.parametrize("weight", [0, -10])
    def test_non_positive_weight_rejected(self, weight):
        with pytest.raises(InvalidValueError) as exc_info:
            TripSettlement.create(uuid4(), weight)

        assert exc_info.value.field_name == "physical_net_weight"

    def test_nil_process_rejected(self):
        with pytest.raises(InvalidValueError):
            TripSettlement.create(UUID(int=0), 80)


class TestProviderLoads:
    def test_add_provider_load(self, settlement):
        load = settlement.add_provider_load("PRV-1", "COPPER", 60, 5)

        assert settlement.provider_loads == (load,)
        assert settlement.total_documentary_weight == Decimal("60")
        assert settlement.max_unit_price == Decimal("5")
        (event,) = settlement.get_domain_events()
        assert isinstance(event, ProviderLoadAdded)
        assert event.load_id == load.id

    def test_loads_keep_insertion_order(self, settlement):
        first = settlement.add_provider_load("PRV-1", "COPPER", 60, 5)
        second = settlement.add_provider_load("PRV-2", "BRASS", 40, 8)

        assert settlement.provider_loads == (first, second)
        assert settlement.total_documentary_weight == Decimal("100")
        assert settlement.max_unit_price == Decimal("8")

    def test_invalid_load_leaves_settlement_unchanged(self, settlement):
        settlement.add_provider_load("PRV-1", "COPPER", 60, 5)
        settlement.calculate_settlement()
        calculated_at = settlement.calculated_at

        with pytest.raises(InvalidValueError):
            settlement.add_provider_load("PRV-2", "COPPER", 0, 5)

        assert len(settlement.provider_loads) == 1
        assert settlement.calculated_at == calculated_at

    def test_adding_load_invalidates_calculation(self, settlement):
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)
        settlement.calculate_settlement()
        assert settlement.has_penalty
        assert not settlement.requires_recalculation

        settlement.add_provider_load("PRV-2", "COPPER", 10, 5)

        assert settlement.penalty is None
        assert settlement.calculated_at is None
        assert settlement.requires_recalculation


class TestCalculateSettlement:
    def test_within_tolerance(self):
        settlement = TripSettlement.create(uuid4(), 95)
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)

        result = settlement.calculate_settlement()

        assert result.penalty is None
        assert settlement.penalty is None
        assert settlement.calculated_at is not None

    def test_penalty_beyond_tolerance(self, settlement):
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)

        result = settlement.calculate_settlement()

        assert settlement.penalty == result.penalty
        assert settlement.penalty.total_penalty_amount == Decimal("50")

    def test_max_price_across_loads(self, settlement):
        settlement.add_provider_load("PRV-1", "COPPER", 60, 5)
        settlement.add_provider_load("PRV-2", "BRASS", 40, 8)

        settlement.calculate_settlement()

        assert settlement.penalty.missing_weight == Decimal("10")
        assert settlement.penalty.applied_max_price == Decimal("8")
        assert settlement.penalty.total_penalty_amount == Decimal("80")

    def test_surplus_never_penalized(self):
        settlement = TripSettlement.create(uuid4(), 150)
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)

        result = settlement.calculate_settlement()

        assert result.difference == Decimal("50")
        assert settlement.penalty is None

    def test_empty_settlement_rejected(self, settlement):
        with pytest.raises(EmptyAggregateError) as exc_info:
            settlement.calculate_settlement()

        assert exc_info.value.collection == "provider loads"
        assert settlement.calculated_at is None
        assert settlement.get_domain_events() == []

    def test_naive_calculation_time_rejected(self, settlement):
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)
        settlement.clear_domain_events()

        with pytest.raises(InvalidValueError) as exc_info:
            settlement.calculate_settlement(at=datetime(2026, 3, 2, 8, 0))

        assert exc_info.value.error_code == "NAIVE_DATETIME"
        assert settlement.requires_recalculation
        assert settlement.penalty is None
        assert settlement.get_domain_events() == []

    def test_recalculation_is_idempotent(self, settlement, base_time):
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)

        first = settlement.calculate_settlement(at=base_time)
        second = settlement.calculate_settlement(at=base_time + timedelta(hours=1))

        assert first == second
        assert settlement.penalty.id == first.penalty.id
        assert settlement.calculated_at == base_time + timedelta(hours=1)

    def test_recalculation_clears_previous_penalty(self):
        settlement = TripSettlement.create(uuid4(), 80)
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)
        settlement.calculate_settlement()
        assert settlement.has_penalty

        # Rebuild with a heavier physical weight and the same loads
        heavier = TripSettlement.restore(
            provider_loads=settlement.provider_loads,
            **{**settlement.model_dump(), "physical_net_weight": Decimal("95")},
        )
        heavier.calculate_settlement()

        assert heavier.penalty is None

    def test_calculated_event(self, settlement):
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)
        settlement.clear_domain_events()

        result = settlement.calculate_settlement()

        (event,) = settlement.get_domain_events()
        assert isinstance(event, SettlementCalculated)
        assert event.penalty_id == result.penalty.id
        assert event.penalty_amount == Decimal("50")
        assert event.difference == Decimal("-20")

    def test_reconciliation_preview_does_not_mutate(self, settlement):
        assert settlement.reconciliation() is None
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)
        settlement.clear_domain_events()

        preview = settlement.reconciliation()

        assert preview.penalty.total_penalty_amount == Decimal("50")
        assert settlement.penalty is None
        assert settlement.get_domain_events() == []


class TestRestore:
    def test_penalty_without_calculation_rejected(self, settlement):
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)
        fields = settlement.model_dump()
        fields["penalty"] = DriverPenalty.create(10, 5)

        with pytest.raises(InvariantViolationError):
            TripSettlement.restore(provider_loads=settlement.provider_loads, **fields)

    def test_restore_round_trip(self, settlement):
        settlement.add_provider_load("PRV-1", "COPPER", 100, 5)
        settlement.calculate_settlement()

        restored = TripSettlement.restore(
            provider_loads=settlement.provider_loads,
            **settlement.model_dump(exclude={"penalty"}),
            penalty=settlement.penalty,
        )

        assert restored.penalty == settlement.penalty
        assert restored.provider_loads == settlement.provider_loads
        assert not restored.requires_recalculation
