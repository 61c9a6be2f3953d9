from .trip_settlement_repository import TripSettlementRepository

__all__ = ["TripSettlementRepository"]
