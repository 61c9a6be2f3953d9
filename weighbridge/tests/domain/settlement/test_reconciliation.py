"""Tests for the reconciliation of physical and documentary weight."""

from decimal import Decimal
from uuid import uuid4

import pytest

from weighbridge.domain.settlement.services.reconciliation import (
    TOLERANCE_PERCENTAGE,
    reconcile,
)
from weighbridge.domain.settlement.value_objects.provider_load import ProviderLoad
from weighbridge.domain.shared.exceptions import InvalidValueError


def loads(*pairs):
    return [
        ProviderLoad.create(f"PRV-{i}", "COPPER", weight, price)
        for i, (weight, price) in enumerate(pairs)
    ]


class TestReconcile:
    def test_tolerance_is_ten_percent(self):
        assert TOLERANCE_PERCENTAGE == Decimal("0.10")

    def test_shortfall_within_tolerance(self):
        result = reconcile(uuid4(), Decimal("95"), loads((100, 5)))

        assert result.difference == Decimal("-5")
        assert result.missing_weight == Decimal("5")
        assert result.tolerance_amount == Decimal("10")
        assert result.excess_missing_weight == Decimal("0")
        assert result.penalty is None
        assert result.has_shortfall
        assert result.within_tolerance

    def test_shortfall_exactly_at_tolerance(self):
        result = reconcile(uuid4(), Decimal("90"), loads((100, 5)))

        assert result.missing_weight == Decimal("10")
        assert result.penalty is None

    def test_shortfall_beyond_tolerance(self):
        result = reconcile(uuid4(), Decimal("80"), loads((100, 5)))

        assert result.missing_weight == Decimal("20")
        assert result.excess_missing_weight == Decimal("10")
        assert result.penalty is not None
        assert result.penalty.missing_weight == Decimal("10")
        assert result.penalty.applied_max_price == Decimal("5")
        assert result.penalty.total_penalty_amount == Decimal("50")

    def test_highest_unit_price_applied(self):
        result = reconcile(uuid4(), Decimal("80"), loads((60, 5), (40, 8)))

        assert result.total_documentary_weight == Decimal("100")
        assert result.max_unit_price == Decimal("8")
        assert result.penalty.total_penalty_amount == Decimal("80")

    @pytest.mark.parametrize("physical", ["100", "100.001", "250"])
    def test_no_penalty_without_shortfall(self, physical):
        result = reconcile(uuid4(), Decimal(physical), loads((100, 5)))

        assert result.difference >= 0
        assert result.missing_weight == Decimal("0")
        assert result.penalty is None
        assert not result.has_shortfall

    def test_penalty_id_is_deterministic(self):
        settlement_id = uuid4()
        load_set = loads((100, 5))

        first = reconcile(settlement_id, Decimal("80"), load_set)
        second = reconcile(settlement_id, Decimal("80"), load_set)

        assert first.penalty.id == second.penalty.id
        assert first == second

    def test_empty_loads_rejected(self):
        with pytest.raises(InvalidValueError) as exc_info:
            reconcile(uuid4(), Decimal("80"), [])

        assert exc_info.value.error_code == "EMPTY_LOADS"

    def test_excess_rounded_to_weight_scale(self):
        """10% of a six-place total has seven places; the charge keeps six."""
        result = reconcile(uuid4(), Decimal("1"), loads(("1.234567", 3)))

        assert result.tolerance_amount == Decimal("0.1234567")
        assert result.excess_missing_weight == Decimal("0.111110")
        assert result.penalty.missing_weight == Decimal("0.111110")
        assert result.penalty.total_penalty_amount == Decimal("0.333330")

    def test_excess_below_scale_is_not_charged(self):
        result = reconcile(uuid4(), Decimal("0.900008"), loads(("1.000009", 3)))

        assert result.missing_weight == Decimal("0.100001")
        assert result.missing_weight > result.tolerance_amount
        assert result.penalty is None
        assert result.within_tolerance
