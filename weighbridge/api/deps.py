"""
API dependencies.

Builds the database session, repositories and command handlers for each
request. Tests replace ``get_db`` through ``app.dependency_overrides``.
"""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlmodel import Session

from weighbridge.application.events import DomainEventPublisher
from weighbridge.application.handlers import (
    SettlementCommandHandler,
    WeighingCommandHandler,
)
from weighbridge.domain.settlement.repositories import TripSettlementRepository
from weighbridge.domain.weighing.repositories import WeighingProcessRepository
from weighbridge.infrastructure.database.db import get_session
from weighbridge.infrastructure.database.repositories import (
    SqlTripSettlementRepository,
    SqlWeighingProcessRepository,
)

event_publisher = DomainEventPublisher()


def get_db() -> Generator[Session, None, None]:
    with get_session() as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]


def get_event_publisher() -> DomainEventPublisher:
    return event_publisher


PublisherDep = Annotated[DomainEventPublisher, Depends(get_event_publisher)]


def get_correlation_id(request: Request) -> str | None:
    return getattr(request.state, "correlation_id", None)


CorrelationIdDep = Annotated[str | None, Depends(get_correlation_id)]


def get_weighing_repository(session: SessionDep) -> WeighingProcessRepository:
    return SqlWeighingProcessRepository(session)


def get_settlement_repository(session: SessionDep) -> TripSettlementRepository:
    return SqlTripSettlementRepository(session)


WeighingRepositoryDep = Annotated[
    WeighingProcessRepository, Depends(get_weighing_repository)
]
SettlementRepositoryDep = Annotated[
    TripSettlementRepository, Depends(get_settlement_repository)
]


def get_weighing_handler(
    repository: WeighingRepositoryDep, publisher: PublisherDep
) -> WeighingCommandHandler:
    return WeighingCommandHandler(repository, publisher)


def get_settlement_handler(
    repository: SettlementRepositoryDep,
    weighing_repository: WeighingRepositoryDep,
    publisher: PublisherDep,
) -> SettlementCommandHandler:
    return SettlementCommandHandler(repository, weighing_repository, publisher)


WeighingHandlerDep = Annotated[WeighingCommandHandler, Depends(get_weighing_handler)]
SettlementHandlerDep = Annotated[
    SettlementCommandHandler, Depends(get_settlement_handler)
]
