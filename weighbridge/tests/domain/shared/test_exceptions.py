"""Tests for the error taxonomy and the Result type."""

from uuid import uuid4

import pytest

from weighbridge.domain.shared.exceptions import (
    ConcurrencyError,
    DomainError,
    EmptyAggregateError,
    ErrorType,
    InvalidStateError,
    InvalidValueError,
    InvariantViolationError,
    NotFoundError,
    TripSettlementNotFoundError,
    WeighingProcessNotFoundError,
)
from weighbridge.domain.shared.result import Failure, Success


class TestErrorTaxonomy:
    def test_invalid_state_message(self):
        error = InvalidStateError("record tare weight", "pending", "gross_weight_captured")

        assert error.error_type == ErrorType.INVALID_STATE
        assert error.message == (
            "Cannot record tare weight when status is pending. "
            "Expected status: gross_weight_captured"
        )

    def test_invariant_records_rule(self):
        error = InvariantViolationError("TARE_BELOW_GROSS", "tare too heavy")

        assert error.rule_name == "TARE_BELOW_GROSS"
        assert error.details["rule"] == "TARE_BELOW_GROSS"

    def test_not_found_subclasses(self):
        process_id, settlement_id = uuid4(), uuid4()

        process_error = WeighingProcessNotFoundError(process_id)
        settlement_error = TripSettlementNotFoundError(settlement_id)

        assert isinstance(process_error, NotFoundError)
        assert process_error.entity_type == "WeighingProcess"
        assert settlement_error.details["entity_id"] == str(settlement_id)
        assert settlement_error.error_type == ErrorType.NOT_FOUND

    def test_to_dict(self):
        aggregate_id = uuid4()
        error = EmptyAggregateError("TripSettlement", aggregate_id, "provider loads")

        assert error.to_dict() == {
            "type": "empty_aggregate",
            "message": f"TripSettlement {aggregate_id} has no provider loads",
            "details": {
                "aggregate_type": "TripSettlement",
                "aggregate_id": str(aggregate_id),
                "collection": "provider loads",
            },
        }

    def test_concurrency_details(self):
        error = ConcurrencyError("WeighingProcess", uuid4(), 2, 3)

        assert error.details["expected_version"] == 2
        assert error.details["actual_version"] == 3
        assert isinstance(error, DomainError)


class TestResult:
    def test_success_unwraps_value(self):
        result = Success(42)

        assert result.is_success()
        assert not result.is_failure()
        assert result.unwrap() == 42

    def test_failure_raises_carried_error(self):
        error = InvalidValueError("weight", -1, "Value must be greater than 0")
        result = Failure(error)

        assert result.is_failure()
        with pytest.raises(InvalidValueError) as exc_info:
            result.unwrap()
        assert exc_info.value is error
