"""Shared kernel: base classes, error taxonomy and validation helpers."""

from .base import AggregateRoot, DomainEvent, Entity, Repository, ValueObject, utc_now
from .exceptions import (
    ConcurrencyError,
    DomainError,
    EmptyAggregateError,
    ErrorType,
    InvalidStateError,
    InvalidValueError,
    InvariantViolationError,
    NotFoundError,
    RepositoryError,
    TripSettlementNotFoundError,
    WeighingProcessNotFoundError,
)
from .result import Failure, Result, Success
from .validation import DataSanitizer, DomainValidators

__all__ = [
    "AggregateRoot",
    "ConcurrencyError",
    "DataSanitizer",
    "DomainError",
    "DomainEvent",
    "DomainValidators",
    "EmptyAggregateError",
    "Entity",
    "ErrorType",
    "Failure",
    "InvalidStateError",
    "InvalidValueError",
    "InvariantViolationError",
    "NotFoundError",
    "Repository",
    "RepositoryError",
    "Result",
    "Success",
    "TripSettlementNotFoundError",
    "ValueObject",
    "WeighingProcessNotFoundError",
    "utc_now",
]
