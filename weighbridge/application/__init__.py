"""Application layer: commands, command handlers and event publishing."""

from .events import DomainEventPublisher
from .handlers import SettlementCommandHandler, WeighingCommandHandler

__all__ = [
    "DomainEventPublisher",
    "SettlementCommandHandler",
    "WeighingCommandHandler",
]
