"""Settlement bounded context: provider loads, reconciliation and driver penalties."""

from .entities import TripSettlement
from .services import TOLERANCE_PERCENTAGE, ReconciliationResult, reconcile
from .value_objects import DriverPenalty, ProviderLoad

__all__ = [
    "DriverPenalty",
    "ProviderLoad",
    "ReconciliationResult",
    "TOLERANCE_PERCENTAGE",
    "TripSettlement",
    "reconcile",
]
