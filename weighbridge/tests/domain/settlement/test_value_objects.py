"""Tests for provider loads and driver penalties."""

from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from weighbridge.domain.shared.exceptions import InvalidValueError
from weighbridge.domain.settlement.value_objects.driver_penalty import DriverPenalty
from weighbridge.domain.settlement.value_objects.provider_load import ProviderLoad


class TestProviderLoad:
    def test_create(self):
        load = ProviderLoad.create(" PRV-1 ", "COPPER", "60", 5)

        assert load.provider_code == "PRV-1"
        assert load.product_code == "COPPER"
        assert load.documentary_weight == Decimal("60")
        assert load.unit_price == Decimal("5")
        assert load.documentary_value == Decimal("300")

    @pytest.mark.parametrize(
        "args,field",
        [
            (("", "COPPER", 60, 5), "provider_code"),
            (("PRV-1", "   ", 60, 5), "product_code"),
            (("PRV-1", "COPPER", 0, 5), "documentary_weight"),
            (("PRV-1", "COPPER", 60, -1), "unit_price"),
            (("PRV-1", "COPPER", "NaN", 5), "documentary_weight"),
        ],
    )
    def test_invalid_inputs(self, args, field):
        result = ProviderLoad.try_create(*args)

        assert result.is_failure()
        assert result.error.field_name == field

    def test_create_raises(self):
        with pytest.raises(InvalidValueError):
            ProviderLoad.create("PRV-1", "COPPER", -60, 5)

    def test_too_long_code_rejected(self):
        with pytest.raises(InvalidValueError):
            ProviderLoad.create("P" * 51, "COPPER", 60, 5)


class TestDriverPenalty:
    def test_total_amount(self):
        penalty = DriverPenalty.create("10", "8")

        assert penalty.total_penalty_amount == Decimal("80")

    def test_total_amount_serialized(self):
        penalty = DriverPenalty.create("2.5", "4")

        assert penalty.model_dump()["total_penalty_amount"] == Decimal("10.0")

    @pytest.mark.parametrize("missing,price", [(0, 5), (5, 0), (-1, 5)])
    def test_non_positive_rejected(self, missing, price):
        assert DriverPenalty.try_create(missing, price).is_failure()

    def test_derived_id_is_stable(self):
        settlement_id = uuid4()

        first = DriverPenalty.derive_id(settlement_id, Decimal("10"), Decimal("8"))
        second = DriverPenalty.derive_id(
            settlement_id, Decimal("10.000"), Decimal("8.00")
        )

        assert first == second
        assert isinstance(first, UUID)

    def test_derived_id_depends_on_inputs(self):
        settlement_id = uuid4()

        assert DriverPenalty.derive_id(
            settlement_id, Decimal("10"), Decimal("8")
        ) != DriverPenalty.derive_id(settlement_id, Decimal("11"), Decimal("8"))
        assert DriverPenalty.derive_id(
            settlement_id, Decimal("10"), Decimal("8")
        ) != DriverPenalty.derive_id(uuid4(), Decimal("10"), Decimal("8"))
