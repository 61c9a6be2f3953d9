from .reconciliation import TOLERANCE_PERCENTAGE, ReconciliationResult, reconcile

__all__ = ["ReconciliationResult", "TOLERANCE_PERCENTAGE", "reconcile"]
