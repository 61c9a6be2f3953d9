"""Mapping of domain errors to HTTP responses."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from weighbridge.core.observability import get_logger
from weighbridge.domain.shared.exceptions import (
    ConcurrencyError,
    DomainError,
    EmptyAggregateError,
    InvalidStateError,
    InvalidValueError,
    InvariantViolationError,
    NotFoundError,
    RepositoryError,
)

logger = get_logger(__name__)

_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidValueError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (InvariantViolationError, status.HTTP_409_CONFLICT),
    (EmptyAggregateError, status.HTTP_409_CONFLICT),
    (ConcurrencyError, status.HTTP_409_CONFLICT),
]


def status_code_for(error: DomainError) -> int:
    for error_class, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_code_for(exc)

    log = logger.error if isinstance(exc, RepositoryError) else logger.info
    log(
        "Domain error",
        method=request.method,
        path=request.url.path,
        error_type=exc.error_type.value,
        status_code=status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
