"""
Domain Exceptions

Typed errors raised by the weighing and settlement aggregates and by the
repositories that load them. Every error carries a discriminating
``ErrorType`` so the orchestration layer can map it to a response without
inspecting messages. The domain never catches these; they propagate to the
caller unchanged.
"""

from enum import Enum
from uuid import UUID

DetailValue = str | int | bool | None


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    INVALID_STATE = "invalid_state"
    INVARIANT = "invariant_violation"
    EMPTY_AGGREGATE = "empty_aggregate"
    NOT_FOUND = "not_found"
    REPOSITORY = "repository"
    CONCURRENCY = "concurrency"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, DetailValue] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, DetailValue]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidValueError(DomainError):
    """Raised when an argument fails a domain constraint."""

    def __init__(
        self,
        field_name: str,
        value: object,
        message: str,
        error_code: str | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "INVALID_VALUE"

        details: dict[str, DetailValue] = {
            "field": field_name,
            "value": str(value) if value is not None else None,
            "error_code": self.error_code,
        }
        super().__init__(
            f"Invalid value for '{field_name}': {message}",
            ErrorType.VALIDATION,
            details,
        )


class InvalidStateError(DomainError):
    """Raised when an operation is attempted in the wrong aggregate state."""

    def __init__(
        self, operation: str, current_state: str, expected_state: str
    ) -> None:
        self.operation = operation
        self.current_state = current_state
        self.expected_state = expected_state
        super().__init__(
            f"Cannot {operation} when status is {current_state}. "
            f"Expected status: {expected_state}",
            ErrorType.INVALID_STATE,
            {
                "operation": operation,
                "current_state": current_state,
                "expected_state": expected_state,
            },
        )


class InvariantViolationError(DomainError):
    """Raised when individually valid values would break a structural invariant."""

    def __init__(
        self,
        rule_name: str,
        message: str,
        details: dict[str, DetailValue] | None = None,
    ) -> None:
        self.rule_name = rule_name
        rule_details = details or {}
        rule_details["rule"] = rule_name
        super().__init__(
            f"Invariant '{rule_name}' violated: {message}",
            ErrorType.INVARIANT,
            rule_details,
        )


class EmptyAggregateError(DomainError):
    """Raised when an operation needs child elements the aggregate does not have."""

    def __init__(self, aggregate_type: str, aggregate_id: UUID, collection: str) -> None:
        self.aggregate_type = aggregate_type
        self.aggregate_id = aggregate_id
        self.collection = collection
        super().__init__(
            f"{aggregate_type} {aggregate_id} has no {collection}",
            ErrorType.EMPTY_AGGREGATE,
            {
                "aggregate_type": aggregate_type,
                "aggregate_id": str(aggregate_id),
                "collection": collection,
            },
        )


# Repository exceptions
class NotFoundError(DomainError):
    """Raised when a referenced aggregate does not exist in storage."""

    def __init__(self, entity_type: str, entity_id: UUID) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"{entity_type} with ID '{entity_id}' was not found.",
            ErrorType.NOT_FOUND,
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class WeighingProcessNotFoundError(NotFoundError):
    """Raised when a weighing process is not found."""

    def __init__(self, process_id: UUID) -> None:
        super().__init__("WeighingProcess", process_id)
        self.process_id = process_id


class TripSettlementNotFoundError(NotFoundError):
    """Raised when a trip settlement is not found."""

    def __init__(self, settlement_id: UUID) -> None:
        super().__init__("TripSettlement", settlement_id)
        self.settlement_id = settlement_id


class RepositoryError(DomainError):
    """Raised when the persistence layer fails."""

    def __init__(
        self, message: str, details: dict[str, DetailValue] | None = None
    ) -> None:
        super().__init__(message, ErrorType.REPOSITORY, details)


class ConcurrencyError(DomainError):
    """Raised when concurrent modification conflicts occur."""

    def __init__(
        self,
        entity_type: str,
        entity_id: UUID,
        expected_version: int,
        actual_version: int,
    ) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Concurrent modification of {entity_type}: {entity_id}",
            ErrorType.CONCURRENCY,
            {
                "entity_type": entity_type,
                "entity_id": str(entity_id),
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )
