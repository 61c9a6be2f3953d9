from .trip_settlement_repository import SqlTripSettlementRepository
from .weighing_process_repository import SqlWeighingProcessRepository

__all__ = ["SqlTripSettlementRepository", "SqlWeighingProcessRepository"]
